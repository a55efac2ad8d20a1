"""
Operation identifiers, computed the same way TimelockController does on-chain:
keccak256(abi.encode(...)) over the fields that define an operation.
"""
from typing import Sequence

from web3 import Web3

from .abi import BATCH_OPERATION_TYPES, OPERATION_TYPES, encode_arguments
from .exceptions import BatchLengthMismatchError
from .utils import HexLike, IntLike, to_address, to_bytes, to_bytes32, to_uint256


def _keccak_hex(data: bytes) -> str:
    return "0x" + bytes(Web3.keccak(data)).hex()


def operation_arguments(target: HexLike, value: IntLike, data: HexLike,
                        predecessor: HexLike, salt: HexLike) -> list:
    """Normalise single-operation fields into values eth_abi accepts"""
    return [
        to_bytes(to_address(target)),
        to_uint256(value),
        to_bytes(data),
        to_bytes32(predecessor),
        to_bytes32(salt),
    ]


def batch_operation_arguments(targets: Sequence[HexLike], values: Sequence[IntLike],
                              payloads: Sequence[HexLike], predecessor: HexLike,
                              salt: HexLike) -> list:
    """
    Normalise batch fields into values eth_abi accepts

    Raises:
        BatchLengthMismatchError: If the three arrays differ in length
    """
    if not len(targets) == len(values) == len(payloads):
        raise BatchLengthMismatchError(
            f"targets, values and payloads must have equal length "
            f"(got {len(targets)}, {len(values)}, {len(payloads)})"
        )
    return [
        [to_bytes(to_address(t)) for t in targets],
        [to_uint256(v) for v in values],
        [to_bytes(p) for p in payloads],
        to_bytes32(predecessor),
        to_bytes32(salt),
    ]


def hash_operation(target: HexLike, value: IntLike, data: HexLike,
                   predecessor: HexLike, salt: HexLike) -> str:
    """
    Compute the identifier of a single timelock operation

    Args:
        target: Address called by the operation
        value: Wei sent with the call
        data: Call payload
        predecessor: Identifier of the operation this one depends on (zero for none)
        salt: 32-byte nonce

    Returns:
        32-byte identifier as a 0x-prefixed hex string
    """
    encoded = encode_arguments(OPERATION_TYPES, operation_arguments(target, value, data, predecessor, salt))
    return _keccak_hex(encoded)


def hash_operation_batch(targets: Sequence[HexLike], values: Sequence[IntLike],
                         payloads: Sequence[HexLike], predecessor: HexLike,
                         salt: HexLike) -> str:
    """Compute the identifier of a batch operation"""
    encoded = encode_arguments(
        BATCH_OPERATION_TYPES,
        batch_operation_arguments(targets, values, payloads, predecessor, salt),
    )
    return _keccak_hex(encoded)
