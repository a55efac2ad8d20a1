"""
Fixed-width big-endian readers and writers over raw byte buffers.
"""
from eth_utils import to_checksum_address

from .exceptions import InvalidIntegerError, TruncatedDataError
from .utils import HexLike, UINT256_MAX, to_address, to_bytes

ADDRESS_SIZE = 20
WORD_SIZE = 32


class ByteReader:
    """
    Cursor over an immutable byte buffer.

    Every read is bounds-checked before the cursor moves, so a failed read
    leaves ``offset`` where it was and raises TruncatedDataError.
    """

    def __init__(self, data: bytes, offset: int = 0):
        self._data = bytes(data)
        self.offset = offset

    def __len__(self) -> int:
        return len(self._data)

    @property
    def remaining(self) -> int:
        return len(self._data) - self.offset

    def at_end(self) -> bool:
        return self.offset >= len(self._data)

    def read(self, size: int) -> bytes:
        if size < 0 or size > self.remaining:
            raise TruncatedDataError(self.offset, size, len(self._data))
        chunk = self._data[self.offset:self.offset + size]
        self.offset += size
        return chunk

    def read_uint8(self) -> int:
        return self.read(1)[0]

    def read_address(self) -> str:
        return to_checksum_address(self.read(ADDRESS_SIZE))

    def read_uint256(self) -> int:
        return int.from_bytes(self.read(WORD_SIZE), "big")


def pack_uint8(value: int) -> bytes:
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 0xFF:
        raise InvalidIntegerError(f"Value does not fit in one byte: {value!r}")
    return value.to_bytes(1, "big")


def pack_uint256(value: int) -> bytes:
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= UINT256_MAX:
        raise InvalidIntegerError(f"Value does not fit in uint256: {value!r}")
    return value.to_bytes(WORD_SIZE, "big")


def pack_address(value: HexLike) -> bytes:
    # to_address validates length and checksum before the conversion
    return to_bytes(to_address(value))
