"""
ABI descriptions and the tuple codec for the timelock and MultiSend contracts.
"""
from typing import Any, Dict, List, Sequence, Tuple

from eth_abi import decode as decode_abi
from eth_abi import encode as encode_abi
from eth_abi.exceptions import DecodingError, EncodingError
from eth_utils import function_signature_to_4byte_selector

from .exceptions import AbiDecodeError, InvalidInputError


def _input(name: str, abi_type: str) -> Dict[str, str]:
    return {"internalType": abi_type, "name": name, "type": abi_type}


def _view(name: str, inputs: List[Dict[str, str]], output_type: str) -> Dict[str, Any]:
    return {
        "inputs": inputs,
        "name": name,
        "outputs": [{"internalType": output_type, "name": "", "type": output_type}],
        "stateMutability": "view",
        "type": "function",
    }


# OpenZeppelin TimelockController
TIMELOCK_ABI: List[Dict[str, Any]] = [
    {
        "inputs": [
            _input("target", "address"),
            _input("value", "uint256"),
            _input("data", "bytes"),
            _input("predecessor", "bytes32"),
            _input("salt", "bytes32"),
            _input("delay", "uint256"),
        ],
        "name": "schedule",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function",
    },
    {
        "inputs": [
            _input("targets", "address[]"),
            _input("values", "uint256[]"),
            _input("payloads", "bytes[]"),
            _input("predecessor", "bytes32"),
            _input("salt", "bytes32"),
            _input("delay", "uint256"),
        ],
        "name": "scheduleBatch",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function",
    },
    {
        "inputs": [
            _input("target", "address"),
            _input("value", "uint256"),
            _input("payload", "bytes"),
            _input("predecessor", "bytes32"),
            _input("salt", "bytes32"),
        ],
        "name": "execute",
        "outputs": [],
        "stateMutability": "payable",
        "type": "function",
    },
    {
        "inputs": [
            _input("targets", "address[]"),
            _input("values", "uint256[]"),
            _input("payloads", "bytes[]"),
            _input("predecessor", "bytes32"),
            _input("salt", "bytes32"),
        ],
        "name": "executeBatch",
        "outputs": [],
        "stateMutability": "payable",
        "type": "function",
    },
    {
        "inputs": [_input("id", "bytes32")],
        "name": "cancel",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function",
    },
    _view("getMinDelay", [], "uint256"),
    _view("isOperation", [_input("id", "bytes32")], "bool"),
    _view("isOperationPending", [_input("id", "bytes32")], "bool"),
    _view("isOperationReady", [_input("id", "bytes32")], "bool"),
    _view("isOperationDone", [_input("id", "bytes32")], "bool"),
    _view("getTimestamp", [_input("id", "bytes32")], "uint256"),
]

# Safe MultiSend / MultiSendCallOnly
MULTISEND_ABI: List[Dict[str, Any]] = [
    {
        "inputs": [_input("transactions", "bytes")],
        "name": "multiSend",
        "outputs": [],
        "stateMutability": "payable",
        "type": "function",
    },
]

OPERATION_TYPES: Tuple[str, ...] = ("address", "uint256", "bytes", "bytes32", "bytes32")
BATCH_OPERATION_TYPES: Tuple[str, ...] = ("address[]", "uint256[]", "bytes[]", "bytes32", "bytes32")


def get_abi_function(abi: Sequence[Dict[str, Any]], name: str) -> Dict[str, Any]:
    for entry in abi:
        if entry.get("type") == "function" and entry.get("name") == name:
            return entry
    raise KeyError(f"Function {name!r} not found in ABI")


def input_types(abi_function: Dict[str, Any]) -> Tuple[str, ...]:
    return tuple(item["type"] for item in abi_function["inputs"])


def function_signature(abi_function: Dict[str, Any]) -> str:
    """Canonical signature, e.g. ``cancel(bytes32)``"""
    return f"{abi_function['name']}({','.join(input_types(abi_function))})"


def function_selector(signature: str) -> bytes:
    """First 4 bytes of keccak256 of the canonical signature"""
    return bytes(function_signature_to_4byte_selector(signature))


SCHEDULE_SIGNATURE = function_signature(get_abi_function(TIMELOCK_ABI, "schedule"))
SCHEDULE_BATCH_SIGNATURE = function_signature(get_abi_function(TIMELOCK_ABI, "scheduleBatch"))
EXECUTE_SIGNATURE = function_signature(get_abi_function(TIMELOCK_ABI, "execute"))
EXECUTE_BATCH_SIGNATURE = function_signature(get_abi_function(TIMELOCK_ABI, "executeBatch"))
CANCEL_SIGNATURE = function_signature(get_abi_function(TIMELOCK_ABI, "cancel"))
MULTISEND_SIGNATURE = function_signature(get_abi_function(MULTISEND_ABI, "multiSend"))

SCHEDULE_SELECTOR = function_selector(SCHEDULE_SIGNATURE)
SCHEDULE_BATCH_SELECTOR = function_selector(SCHEDULE_BATCH_SIGNATURE)
EXECUTE_SELECTOR = function_selector(EXECUTE_SIGNATURE)
EXECUTE_BATCH_SELECTOR = function_selector(EXECUTE_BATCH_SIGNATURE)
CANCEL_SELECTOR = function_selector(CANCEL_SIGNATURE)
MULTISEND_SELECTOR = function_selector(MULTISEND_SIGNATURE)


def encode_arguments(types: Sequence[str], values: Sequence[Any]) -> bytes:
    """
    Head/tail encode an anonymous tuple (no selector)

    Raises:
        InvalidInputError: If a value does not match its ABI type
    """
    try:
        return encode_abi(list(types), list(values))
    except EncodingError as e:
        raise InvalidInputError(f"Cannot ABI-encode {','.join(types)}: {e}")


def encode_function_call(signature: str, types: Sequence[str], values: Sequence[Any]) -> bytes:
    """Selector followed by the encoded argument tuple"""
    return function_selector(signature) + encode_arguments(types, values)


def decode_arguments(types: Sequence[str], data: bytes) -> Tuple[Any, ...]:
    """
    Decode an argument tuple

    Non-zero padding after a `bytes` value is accepted.

    Raises:
        AbiDecodeError: If the buffer is too short, an offset points outside
            the buffer or a dynamic length runs past its end
    """
    try:
        return tuple(decode_abi(list(types), data, strict=False))
    except (DecodingError, OverflowError, ValueError) as e:
        raise AbiDecodeError(f"Cannot ABI-decode {','.join(types)}: {e}")
