"""
Safe MultiSend payloads.

multiSend(bytes) takes a single argument: a densely packed stream of
sub-transactions, each laid out as

    operation (1 byte) | to (20 bytes) | value (32 bytes) | length (32 bytes) | data (length bytes)

with no separator between entries.
"""
import logging
from enum import IntEnum
from typing import Iterable, List, Optional

from .abi import MULTISEND_SELECTOR, MULTISEND_SIGNATURE, decode_arguments, encode_function_call
from .binary import ByteReader, pack_address, pack_uint8, pack_uint256
from .exceptions import DecodeError, InvalidInputError, TruncatedDataError
from .models import MultiSendEntry, MultiSendParseResult
from .utils import HexLike, to_bytes, to_hex

logger = logging.getLogger(__name__)

# Canonical Safe deployments, identical on every chain
DEFAULT_MULTISEND_ADDRESSES = frozenset(a.lower() for a in (
    "0x40A2aCCbd92BCA938b02010E17A5b8929b49130D",  # MultiSend 1.3.0
    "0xA238CBeb142c10Ef7Ad8442C6D1f9E89e07e7761",  # MultiSendCallOnly 1.3.0
    "0x38869bf66a61cF6bDB996A6aE40D5853Fd43B526",  # MultiSend 1.4.1
    "0x9641d764fc13c8B624c04430C7356C1C7C8102e2",  # MultiSendCallOnly 1.4.1
))


class SafeOperation(IntEnum):
    CALL = 0
    DELEGATE_CALL = 1


def is_multisend_address(address: Optional[HexLike], addresses: Optional[Iterable[str]] = None) -> bool:
    """Case-insensitive check against the MultiSend allow-list"""
    if not address:
        return False
    if isinstance(address, (bytes, bytearray)):
        address = to_hex(address)
    allowed = DEFAULT_MULTISEND_ADDRESSES if addresses is None else {a.lower() for a in addresses}
    return address.lower() in allowed


def parse_multisend_transactions(packed: bytes) -> MultiSendParseResult:
    """
    Walk a packed transaction stream

    Parsing stops at the first entry that would read past the end of the
    buffer; entries parsed before it are kept and ``truncated`` is set.
    """
    reader = ByteReader(packed)
    entries: List[MultiSendEntry] = []
    while not reader.at_end():
        start = reader.offset
        try:
            operation = reader.read_uint8()
            to = reader.read_address()
            value = reader.read_uint256()
            length = reader.read_uint256()
            data = reader.read(length)
        except TruncatedDataError as e:
            logger.debug(f"MultiSend entry at offset {start} is truncated: {e}")
            return MultiSendParseResult(entries=entries, truncated=True)
        entries.append(MultiSendEntry(operation=operation, to=to, value=value, data=to_hex(data)))
    return MultiSendParseResult(entries=entries)


def decode_multisend(calldata: HexLike) -> List[MultiSendEntry]:
    """
    Decode the sub-transactions of a multiSend(bytes) call

    Used speculatively on unknown calldata, so any input that is not a
    well-formed multiSend call gives an empty list rather than an error.
    """
    try:
        raw = to_bytes(calldata)
    except InvalidInputError:
        return []

    if raw[:4] != MULTISEND_SELECTOR:
        return []

    try:
        (packed,) = decode_arguments(("bytes",), raw[4:])
    except DecodeError as e:
        logger.debug(f"Invalid multiSend argument: {e}")
        return []

    return parse_multisend_transactions(packed).entries


def pack_multisend_transactions(entries: Iterable[MultiSendEntry]) -> bytes:
    """Pack entries into the stream layout multiSend expects"""
    packed = bytearray()
    for entry in entries:
        data = to_bytes(entry.data)
        packed += pack_uint8(entry.operation)
        packed += pack_address(entry.to)
        packed += pack_uint256(entry.value)
        packed += pack_uint256(len(data))
        packed += data
    return bytes(packed)


def encode_multisend(entries: Iterable[MultiSendEntry]) -> str:
    """Build multiSend(bytes) calldata for the given entries"""
    packed = pack_multisend_transactions(entries)
    return to_hex(encode_function_call(MULTISEND_SIGNATURE, ("bytes",), [packed]))
