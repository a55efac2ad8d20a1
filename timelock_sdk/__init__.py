"""
Timelock SDK - encode, decode and identify OpenZeppelin TimelockController
operations, including those wrapped in Safe MultiSend batches.
"""
from .client import Signer, TimelockClient
from .codec import (
    decode_timelock_calldata,
    encode_cancel,
    encode_execute,
    encode_execute_batch,
    encode_schedule,
    encode_schedule_batch,
)
from .config import NetworkConfig
from .exceptions import (
    AbiDecodeError,
    BatchLengthMismatchError,
    DecodeError,
    InvalidAddressError,
    InvalidHexError,
    InvalidInputError,
    InvalidIntegerError,
    RateLimitedError,
    SafeServiceError,
    ServiceError,
    SignatureLookupError,
    StatusQueryError,
    TimelockSDKError,
    TransactionError,
    TruncatedDataError,
)
from .extractor import extract_timelock_calldata, filter_timelock_transactions
from .hashing import hash_operation, hash_operation_batch
from .models import (
    BatchEntry,
    DecodedCall,
    DecodedCancel,
    DecodedExecute,
    DecodedExecuteBatch,
    DecodedInnerCalldata,
    DecodedSchedule,
    DecodedScheduleBatch,
    EncodedCall,
    MultiSendEntry,
    MultiSendParseResult,
    OperationStatus,
    SafeTransaction,
    ScheduledOperation,
    TimelockSafeTransaction,
    TxReceipt,
)
from .multisend import (
    DEFAULT_MULTISEND_ADDRESSES,
    decode_multisend,
    encode_multisend,
    is_multisend_address,
    parse_multisend_transactions,
)
from .scheduled import scheduled_operations
from .selectors import describe_calldata
from .services import FourByteDirectoryClient, SafeTransactionServiceClient
from .version import __version__

__all__ = [
    "TimelockClient",
    "Signer",
    "NetworkConfig",
    "FourByteDirectoryClient",
    "SafeTransactionServiceClient",
    # codec
    "hash_operation",
    "hash_operation_batch",
    "encode_schedule",
    "encode_schedule_batch",
    "encode_execute",
    "encode_execute_batch",
    "encode_cancel",
    "decode_timelock_calldata",
    "decode_multisend",
    "encode_multisend",
    "parse_multisend_transactions",
    "is_multisend_address",
    "DEFAULT_MULTISEND_ADDRESSES",
    "extract_timelock_calldata",
    "filter_timelock_transactions",
    "describe_calldata",
    "scheduled_operations",
    # models
    "EncodedCall",
    "BatchEntry",
    "DecodedCall",
    "DecodedSchedule",
    "DecodedScheduleBatch",
    "DecodedExecute",
    "DecodedExecuteBatch",
    "DecodedCancel",
    "DecodedInnerCalldata",
    "MultiSendEntry",
    "MultiSendParseResult",
    "OperationStatus",
    "SafeTransaction",
    "ScheduledOperation",
    "TimelockSafeTransaction",
    "TxReceipt",
    # errors
    "TimelockSDKError",
    "InvalidInputError",
    "InvalidAddressError",
    "InvalidHexError",
    "InvalidIntegerError",
    "BatchLengthMismatchError",
    "DecodeError",
    "AbiDecodeError",
    "TruncatedDataError",
    "StatusQueryError",
    "TransactionError",
    "ServiceError",
    "SignatureLookupError",
    "SafeServiceError",
    "RateLimitedError",
    "__version__",
]
