"""
Utility functions for the Timelock SDK.
"""
import re
import secrets
from typing import Union

from eth_utils import is_address, is_checksum_address, to_checksum_address

from .exceptions import InvalidAddressError, InvalidHexError, InvalidIntegerError

HexLike = Union[str, bytes, bytearray]
IntLike = Union[int, str]

UINT256_MAX = 2**256 - 1
ZERO_HASH = "0x" + "00" * 32
ZERO_ADDRESS = "0x" + "00" * 20

_HEX_BODY = re.compile(r"[0-9a-fA-F]*")
_DECIMAL = re.compile(r"[0-9]+")
_HEX_INT = re.compile(r"0[xX][0-9a-fA-F]+")


def to_bytes(value: HexLike) -> bytes:
    """
    Convert a hex string or raw bytes to bytes

    Args:
        value: Hex string (with or without 0x prefix) or bytes

    Returns:
        Raw bytes

    Raises:
        InvalidHexError: If the string is not valid hex
    """
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if not isinstance(value, str):
        raise InvalidHexError(f"Expected hex string or bytes, got {type(value).__name__}")

    hex_str = value[2:] if value[:2].lower() == "0x" else value
    if not _HEX_BODY.fullmatch(hex_str):
        raise InvalidHexError(f"Invalid hex string: {value!r}")
    if len(hex_str) % 2:
        raise InvalidHexError(f"Hex string has odd length: {value!r}")
    return bytes.fromhex(hex_str)


def to_bytes32(value: HexLike) -> bytes:
    """Convert to exactly 32 bytes, raising InvalidHexError otherwise"""
    result = to_bytes(value)
    if len(result) != 32:
        raise InvalidHexError(f"Expected 32 bytes, got {len(result)}")
    return result


def to_hex(data: HexLike) -> str:
    """Return data as a lowercase 0x-prefixed hex string"""
    return "0x" + to_bytes(data).hex()


def to_address(value: HexLike) -> str:
    """
    Validate an address and return it in checksum form

    Lowercase and uppercase hex are accepted as is; mixed case must be a
    valid EIP-55 checksum.

    Raises:
        InvalidAddressError: If the value is not a 20-byte address
    """
    if isinstance(value, (bytes, bytearray)):
        if len(value) != 20:
            raise InvalidAddressError(f"Address must be 20 bytes, got {len(value)}")
        return to_checksum_address(bytes(value))
    if not isinstance(value, str) or not is_address(value):
        raise InvalidAddressError(f"Invalid address: {value!r}")
    body = value[2:] if value[:2].lower() == "0x" else value
    if body != body.lower() and body != body.upper() and not is_checksum_address(value):
        raise InvalidAddressError(f"Bad EIP-55 checksum: {value!r}")
    return to_checksum_address(value)


def to_uint256(value: IntLike) -> int:
    """
    Convert a value to an unsigned 256-bit integer

    Accepts ints, decimal strings and 0x-prefixed hex strings. Floats and
    bools are rejected so large amounts never lose precision.

    Raises:
        InvalidIntegerError: If the value is negative, too large or not an integer
    """
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise InvalidIntegerError(f"Expected integer, got {type(value).__name__}")

    if isinstance(value, str):
        if _HEX_INT.fullmatch(value):
            result = int(value[2:], 16)
        elif _DECIMAL.fullmatch(value):
            result = int(value, 10)
        else:
            raise InvalidIntegerError(f"Invalid integer string: {value!r}")
    else:
        result = value

    if result < 0:
        raise InvalidIntegerError(f"Value must be non-negative, got {result}")
    if result > UINT256_MAX:
        raise InvalidIntegerError(f"Value does not fit in uint256: {result}")
    return result


def generate_random_salt() -> str:
    """Generate a random 32-byte salt as a hex string"""
    return "0x" + secrets.token_bytes(32).hex()


def format_delay(seconds: IntLike) -> str:
    """
    Format a delay in seconds as a short human readable string

    Examples: 86400 -> "1d", 90060 -> "1d 1h 1m", 30 -> "30s"
    """
    secs = to_uint256(seconds)
    days, rest = divmod(secs, 86400)
    hours, rest = divmod(rest, 3600)
    mins = rest // 60

    parts = []
    if days:
        parts.append(f"{days}d")
    if hours:
        parts.append(f"{hours}h")
    if mins:
        parts.append(f"{mins}m")
    if not parts:
        parts.append(f"{secs}s")
    return " ".join(parts)
