"""
Encoding and decoding of TimelockController calldata.
"""
import logging
from typing import Optional, Sequence, Tuple

from .abi import (
    CANCEL_SELECTOR,
    CANCEL_SIGNATURE,
    EXECUTE_BATCH_SELECTOR,
    EXECUTE_BATCH_SIGNATURE,
    EXECUTE_SELECTOR,
    EXECUTE_SIGNATURE,
    SCHEDULE_BATCH_SELECTOR,
    SCHEDULE_BATCH_SIGNATURE,
    SCHEDULE_SELECTOR,
    SCHEDULE_SIGNATURE,
    BATCH_OPERATION_TYPES,
    OPERATION_TYPES,
    decode_arguments,
    encode_function_call,
)
from .exceptions import DecodeError, InvalidInputError
from .hashing import (
    batch_operation_arguments,
    hash_operation,
    hash_operation_batch,
    operation_arguments,
)
from .models import (
    BatchEntry,
    DecodedCall,
    DecodedCancel,
    DecodedExecute,
    DecodedExecuteBatch,
    DecodedSchedule,
    DecodedScheduleBatch,
    EncodedCall,
)
from .utils import HexLike, IntLike, to_bytes, to_bytes32, to_hex, to_uint256

logger = logging.getLogger(__name__)

SCHEDULE_TYPES = OPERATION_TYPES + ("uint256",)
SCHEDULE_BATCH_TYPES = BATCH_OPERATION_TYPES + ("uint256",)
CANCEL_TYPES = ("bytes32",)


def encode_schedule(target: HexLike, value: IntLike, data: HexLike, predecessor: HexLike,
                    salt: HexLike, delay: IntLike) -> EncodedCall:
    """
    Encode a schedule() call

    Returns:
        EncodedCall with the calldata and the operation identifier

    Raises:
        InvalidInputError: If any field is malformed
    """
    args = operation_arguments(target, value, data, predecessor, salt)
    calldata = encode_function_call(SCHEDULE_SIGNATURE, SCHEDULE_TYPES, args + [to_uint256(delay)])
    return EncodedCall(
        calldata=to_hex(calldata),
        operation_id=hash_operation(target, value, data, predecessor, salt),
    )


def encode_schedule_batch(targets: Sequence[HexLike], values: Sequence[IntLike],
                          payloads: Sequence[HexLike], predecessor: HexLike,
                          salt: HexLike, delay: IntLike) -> EncodedCall:
    """Encode a scheduleBatch() call"""
    args = batch_operation_arguments(targets, values, payloads, predecessor, salt)
    calldata = encode_function_call(SCHEDULE_BATCH_SIGNATURE, SCHEDULE_BATCH_TYPES, args + [to_uint256(delay)])
    return EncodedCall(
        calldata=to_hex(calldata),
        operation_id=hash_operation_batch(targets, values, payloads, predecessor, salt),
    )


def encode_execute(target: HexLike, value: IntLike, data: HexLike, predecessor: HexLike,
                   salt: HexLike) -> EncodedCall:
    """Encode an execute() call"""
    args = operation_arguments(target, value, data, predecessor, salt)
    calldata = encode_function_call(EXECUTE_SIGNATURE, OPERATION_TYPES, args)
    return EncodedCall(
        calldata=to_hex(calldata),
        operation_id=hash_operation(target, value, data, predecessor, salt),
    )


def encode_execute_batch(targets: Sequence[HexLike], values: Sequence[IntLike],
                         payloads: Sequence[HexLike], predecessor: HexLike,
                         salt: HexLike) -> EncodedCall:
    """Encode an executeBatch() call"""
    args = batch_operation_arguments(targets, values, payloads, predecessor, salt)
    calldata = encode_function_call(EXECUTE_BATCH_SIGNATURE, BATCH_OPERATION_TYPES, args)
    return EncodedCall(
        calldata=to_hex(calldata),
        operation_id=hash_operation_batch(targets, values, payloads, predecessor, salt),
    )


def encode_cancel(operation_id: HexLike) -> str:
    """
    Encode a cancel() call

    The identifier is given, not derived, so only calldata is returned.
    """
    return to_hex(encode_function_call(CANCEL_SIGNATURE, CANCEL_TYPES, [to_bytes32(operation_id)]))


def _batch_entries(targets: Tuple[str, ...], values: Tuple[int, ...],
                   payloads: Tuple[bytes, ...]) -> list:
    if not len(targets) == len(values) == len(payloads):
        raise DecodeError(
            f"Batch arrays differ in length ({len(targets)}, {len(values)}, {len(payloads)})"
        )
    return [
        BatchEntry(target=t, value=v, data=to_hex(p))
        for t, v, p in zip(targets, values, payloads)
    ]


def _decode(selector: bytes, body: bytes) -> Optional[DecodedCall]:
    if selector == SCHEDULE_SELECTOR:
        target, value, data, predecessor, salt, delay = decode_arguments(SCHEDULE_TYPES, body)
        return DecodedSchedule(
            target=target,
            value=value,
            data=to_hex(data),
            predecessor=to_hex(predecessor),
            salt=to_hex(salt),
            delay=delay,
            operation_id=hash_operation(target, value, data, predecessor, salt),
        )

    if selector == SCHEDULE_BATCH_SELECTOR:
        targets, values, payloads, predecessor, salt, delay = decode_arguments(SCHEDULE_BATCH_TYPES, body)
        return DecodedScheduleBatch(
            operations=_batch_entries(targets, values, payloads),
            predecessor=to_hex(predecessor),
            salt=to_hex(salt),
            delay=delay,
            operation_id=hash_operation_batch(targets, values, payloads, predecessor, salt),
        )

    if selector == EXECUTE_SELECTOR:
        target, value, data, predecessor, salt = decode_arguments(OPERATION_TYPES, body)
        return DecodedExecute(
            target=target,
            value=value,
            data=to_hex(data),
            predecessor=to_hex(predecessor),
            salt=to_hex(salt),
            operation_id=hash_operation(target, value, data, predecessor, salt),
        )

    if selector == EXECUTE_BATCH_SELECTOR:
        targets, values, payloads, predecessor, salt = decode_arguments(BATCH_OPERATION_TYPES, body)
        return DecodedExecuteBatch(
            operations=_batch_entries(targets, values, payloads),
            predecessor=to_hex(predecessor),
            salt=to_hex(salt),
            operation_id=hash_operation_batch(targets, values, payloads, predecessor, salt),
        )

    if selector == CANCEL_SELECTOR:
        (operation_id,) = decode_arguments(CANCEL_TYPES, body)
        return DecodedCancel(operation_id=to_hex(operation_id))

    return None


def decode_timelock_calldata(calldata: HexLike) -> Optional[DecodedCall]:
    """
    Decode calldata addressed to the timelock

    Never raises: unknown selectors, truncated or garbage input all yield None.

    Args:
        calldata: Hex string or raw bytes

    Returns:
        One of the Decoded* models, or None if the calldata is not a
        recognised timelock call
    """
    try:
        raw = to_bytes(calldata)
    except InvalidInputError as e:
        logger.debug(f"Calldata is not valid hex: {e}")
        return None

    if len(raw) < 4:
        return None

    try:
        return _decode(raw[:4], raw[4:])
    except (DecodeError, InvalidInputError) as e:
        logger.debug(f"Failed to decode timelock calldata 0x{raw[:4].hex()}: {e}")
        return None
    except Exception as e:
        logger.debug(f"Unexpected error decoding timelock calldata: {e}")
        return None
