"""
Exceptions for the Timelock SDK.
"""
from typing import Optional


class TimelockSDKError(Exception):
    """Base exception for all Timelock SDK errors."""
    pass


class InvalidInputError(TimelockSDKError, ValueError):
    """Raised when a caller-supplied value cannot be used to build calldata."""
    pass


class InvalidAddressError(InvalidInputError):
    """Raised when a value is not a valid 20-byte address."""
    pass


class InvalidHexError(InvalidInputError):
    """Raised when a byte string is not valid hex or has the wrong size."""
    pass


class InvalidIntegerError(InvalidInputError):
    """Raised when a value is not an unsigned 256-bit integer."""
    pass


class BatchLengthMismatchError(InvalidInputError):
    """Raised when targets, values and payloads differ in length."""
    pass


class DecodeError(TimelockSDKError):
    """Base exception for calldata that cannot be decoded."""
    pass


class AbiDecodeError(DecodeError):
    """Raised when an ABI tuple cannot be decoded from the given bytes."""
    pass


class TruncatedDataError(DecodeError):
    """Raised when a read would go past the end of a buffer."""

    def __init__(self, offset: int, size: int, length: int):
        self.offset = offset
        self.size = size
        self.length = length
        super().__init__(
            f"Cannot read {size} bytes at offset {offset}: buffer is {length} bytes long"
        )


class StatusQueryError(TimelockSDKError):
    """Raised when an operation status cannot be read from the chain."""
    pass


class TransactionError(TimelockSDKError):
    """Raised when a transaction cannot be signed or sent."""
    pass


class ServiceError(TimelockSDKError):
    """Base exception for third-party HTTP services."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class SignatureLookupError(ServiceError):
    """Raised when the signature directory lookup fails."""
    pass


class SafeServiceError(ServiceError):
    """Raised when the Safe Transaction Service returns an error."""
    pass


class RateLimitedError(SafeServiceError):
    """Raised when the Safe Transaction Service answers with HTTP 429."""
    pass
