"""
Best-effort description of the calldata carried by a timelock operation.

A local table of well known selectors covers the common admin calls (tokens,
access control, Safe owner management, proxy upgrades). Anything else is
reported by selector only, optionally enriched by a signature lookup service.
"""
import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

from .abi import decode_arguments, function_selector
from .exceptions import DecodeError, InvalidInputError, ServiceError
from .models import DecodedInnerCalldata, DecodedParam
from .services._rate_limited_log import rate_limited_log
from .utils import HexLike, to_bytes, to_hex

logger = logging.getLogger(__name__)

SignatureLookup = Callable[[str], Optional[str]]


@dataclass(frozen=True)
class SelectorInfo:
    """
    Known function signature

    Attributes:
        signature: Canonical signature, e.g. ``transfer(address,uint256)``
        param_names: Argument names, in order
        description: One-line explanation for reviewers
        category: erc20, erc721, access-control, safe, proxy, timelock, governance or other
        risk_level: low, medium, high or critical
    """
    signature: str
    param_names: Tuple[str, ...]
    description: str
    category: str
    risk_level: str

    @property
    def name(self) -> str:
        return self.signature.split("(", 1)[0]

    @property
    def param_types(self) -> Tuple[str, ...]:
        # split top-level arguments only; none of the known signatures use tuples
        inner = self.signature[len(self.name) + 1:-1]
        return tuple(inner.split(",")) if inner else ()

    @property
    def selector(self) -> str:
        return to_hex(function_selector(self.signature))


_KNOWN = [
    # ERC20
    SelectorInfo("transfer(address,uint256)", ("to", "amount"), "Transfer tokens to an address", "erc20", "low"),
    SelectorInfo("transferFrom(address,address,uint256)", ("from", "to", "amount"),
                 "Transfer tokens on behalf of an address", "erc20", "medium"),
    SelectorInfo("approve(address,uint256)", ("spender", "amount"), "Approve a spender", "erc20", "medium"),
    SelectorInfo("mint(address,uint256)", ("to", "amount"), "Mint new tokens", "erc20", "high"),
    SelectorInfo("burn(uint256)", ("amount",), "Burn tokens", "erc20", "medium"),
    SelectorInfo("burnFrom(address,uint256)", ("account", "amount"), "Burn tokens from an address", "erc20", "high"),
    SelectorInfo("pause()", (), "Pause contract operations", "other", "high"),
    SelectorInfo("unpause()", (), "Resume contract operations", "other", "medium"),
    # ERC721
    SelectorInfo("safeTransferFrom(address,address,uint256)", ("from", "to", "tokenId"),
                 "Safely transfer an NFT", "erc721", "medium"),
    SelectorInfo("setApprovalForAll(address,bool)", ("operator", "approved"),
                 "Approve an operator for all tokens", "erc721", "high"),
    # Access control
    SelectorInfo("grantRole(bytes32,address)", ("role", "account"), "Grant a role to an account",
                 "access-control", "critical"),
    SelectorInfo("revokeRole(bytes32,address)", ("role", "account"), "Revoke a role from an account",
                 "access-control", "high"),
    SelectorInfo("renounceRole(bytes32,address)", ("role", "account"), "Renounce a role",
                 "access-control", "high"),
    SelectorInfo("setOwner(address)", ("newOwner",), "Set a new owner", "access-control", "critical"),
    SelectorInfo("transferOwnership(address)", ("newOwner",), "Transfer contract ownership",
                 "access-control", "critical"),
    SelectorInfo("renounceOwnership()", (), "Renounce ownership permanently", "access-control", "critical"),
    # Safe
    SelectorInfo("addOwnerWithThreshold(address,uint256)", ("owner", "threshold"),
                 "Add a Safe owner and set the threshold", "safe", "critical"),
    SelectorInfo("removeOwner(address,address,uint256)", ("prevOwner", "owner", "threshold"),
                 "Remove a Safe owner and set the threshold", "safe", "critical"),
    SelectorInfo("swapOwner(address,address,address)", ("prevOwner", "oldOwner", "newOwner"),
                 "Replace a Safe owner", "safe", "critical"),
    SelectorInfo("changeThreshold(uint256)", ("threshold",), "Change the Safe signature threshold",
                 "safe", "critical"),
    SelectorInfo("enableModule(address)", ("module",), "Enable a Safe module", "safe", "critical"),
    SelectorInfo("disableModule(address,address)", ("prevModule", "module"), "Disable a Safe module",
                 "safe", "high"),
    SelectorInfo("setGuard(address)", ("guard",), "Set the Safe transaction guard", "safe", "critical"),
    # Proxy
    SelectorInfo("upgradeTo(address)", ("newImplementation",), "Upgrade the proxy implementation",
                 "proxy", "critical"),
    SelectorInfo("upgradeToAndCall(address,bytes)", ("newImplementation", "data"),
                 "Upgrade the proxy implementation and call it", "proxy", "critical"),
    SelectorInfo("changeAdmin(address)", ("newAdmin",), "Change the proxy admin", "proxy", "critical"),
    # Timelock
    SelectorInfo("updateDelay(uint256)", ("newDelay",), "Update the timelock delay period", "timelock", "high"),
    # Governance
    SelectorInfo("propose(address[],uint256[],bytes[],string)", ("targets", "values", "calldatas", "description"),
                 "Create a new governance proposal", "governance", "medium"),
    SelectorInfo("execute(uint256)", ("proposalId",), "Execute a passed proposal", "governance", "high"),
    SelectorInfo("queue(address[],uint256[],bytes[],bytes32)", ("targets", "values", "calldatas", "descriptionHash"),
                 "Queue a proposal for execution", "governance", "medium"),
]

KNOWN_SELECTORS: Dict[str, SelectorInfo] = {info.selector: info for info in _KNOWN}

KNOWN_ROLES: Dict[str, str] = {
    "0x" + "00" * 32: "DEFAULT_ADMIN_ROLE",
    "0x9f2df0fed2c77648de5860a4cc508cd0818c85b8b8a1ab4ceeef8d981c8956a6": "MINTER_ROLE",
    "0x3c11d16cbaffd01df69ce1c404f6340ee057498f5f00246190ea54220576a848": "BURNER_ROLE",
    "0x65d7a28e3265b37a6474929f336521b332c1681b933f6cb9f3376673440d862a": "PAUSER_ROLE",
    "0xb09aa5aeb3702cfd50b6b62bc4532604938f21248a27a1d5ca736082b6819cc1": "PROPOSER_ROLE",
    "0xd8aa0f3194971a2a116679f7c2090f6939c8d4e01a2a8d7e41d55e5351469e63": "EXECUTOR_ROLE",
    "0x5f58e3a2316349923ce3780f8d587db2d72378aed66a8261c916544fa6846ca5": "TIMELOCK_ADMIN_ROLE",
    "0xfd643c72710c63c0180259aba6b2d05451e3591a24e58b62239378085726f783": "CANCELLER_ROLE",
}


def get_selector(calldata: HexLike) -> Optional[str]:
    """Return the lowercase 4-byte selector, or None for short/invalid input"""
    try:
        raw = to_bytes(calldata)
    except InvalidInputError:
        return None
    if len(raw) < 4:
        return None
    return to_hex(raw[:4])


def truncate_address(address: str) -> str:
    if not address or len(address) < 10:
        return address
    return f"{address[:6]}...{address[-4:]}"


def truncate_hex(value: str, max_length: int = 20) -> str:
    if not value or len(value) <= max_length:
        return value
    return f"{value[:max_length]}..."


def format_number(value: Any) -> str:
    return re.sub(r"\B(?=(\d{3})+(?!\d))", ",", str(value))


def format_role(role_hash: str) -> str:
    """Known role name, or the truncated hash"""
    return KNOWN_ROLES.get(role_hash.lower(), truncate_hex(role_hash, 18))


def _json_value(value: Any) -> Any:
    if isinstance(value, (bytes, bytearray)):
        return to_hex(value)
    if isinstance(value, (list, tuple)):
        return [_json_value(v) for v in value]
    return value


def format_param_value(abi_type: str, value: Any) -> str:
    if value is None:
        return "-"
    if isinstance(value, list):
        return f"[{len(value)} items]"
    if abi_type == "address":
        return truncate_address(value)
    if abi_type in ("uint256", "int256"):
        return format_number(value)
    if abi_type == "bytes32":
        return format_role(value)
    if abi_type == "bytes":
        return truncate_hex(value, 30)
    if abi_type == "bool":
        return "true" if value else "false"
    return str(value)


_SUMMARIES: Dict[str, Callable[[List[Any]], str]] = {
    "transfer": lambda p: f"Transfer {format_number(p[1])} tokens to {truncate_address(p[0])}",
    "transferFrom": lambda p: (f"Transfer {format_number(p[2])} tokens from {truncate_address(p[0])} "
                               f"to {truncate_address(p[1])}"),
    "approve": lambda p: f"Approve {truncate_address(p[0])} to spend {format_number(p[1])} tokens",
    "mint": lambda p: f"Mint {format_number(p[1])} tokens to {truncate_address(p[0])}",
    "burn": lambda p: f"Burn {format_number(p[0])} tokens",
    "burnFrom": lambda p: f"Burn {format_number(p[1])} tokens from {truncate_address(p[0])}",
    "pause": lambda p: "Pause contract operations",
    "unpause": lambda p: "Resume contract operations",
    "grantRole": lambda p: f"Grant {format_role(p[0])} to {truncate_address(p[1])}",
    "revokeRole": lambda p: f"Revoke {format_role(p[0])} from {truncate_address(p[1])}",
    "renounceRole": lambda p: f"Renounce {format_role(p[0])}",
    "transferOwnership": lambda p: f"Transfer ownership to {truncate_address(p[0])}",
    "renounceOwnership": lambda p: "Renounce ownership permanently",
    "addOwnerWithThreshold": lambda p: (f"Add {truncate_address(p[0])} as Safe owner, "
                                        f"require {p[1]} signatures"),
    "removeOwner": lambda p: f"Remove {truncate_address(p[1])} from Safe owners, require {p[2]} signatures",
    "swapOwner": lambda p: f"Replace Safe owner {truncate_address(p[1])} with {truncate_address(p[2])}",
    "changeThreshold": lambda p: f"Change Safe threshold to {p[0]} required signatures",
    "enableModule": lambda p: f"Enable Safe module at {truncate_address(p[0])}",
    "disableModule": lambda p: f"Disable Safe module at {truncate_address(p[1])}",
    "setGuard": lambda p: f"Set transaction guard to {truncate_address(p[0])}",
    "upgradeTo": lambda p: f"UPGRADE contract to implementation at {truncate_address(p[0])}",
    "upgradeToAndCall": lambda p: f"UPGRADE contract to {truncate_address(p[0])} and initialize",
    "changeAdmin": lambda p: f"Change proxy admin to {truncate_address(p[0])}",
    "updateDelay": lambda p: f"Update timelock delay to {format_number(p[0])} seconds",
}


def generate_summary(name: str, values: List[Any]) -> str:
    template = _SUMMARIES.get(name)
    if template:
        try:
            return template(values)
        except (IndexError, TypeError):
            pass
    return f"Call {name}()"


def decode_with_known_selectors(calldata: HexLike) -> DecodedInnerCalldata:
    """Describe calldata using the local selector table only"""
    selector = get_selector(calldata)
    if selector is None:
        return DecodedInnerCalldata(status="unknown", selector=None)

    info = KNOWN_SELECTORS.get(selector)
    if info is None:
        return DecodedInnerCalldata(status="unknown", selector=selector)

    described = dict(
        source="local",
        selector=selector,
        function_name=info.name,
        signature=info.signature,
        description=info.description,
        category=info.category,
        risk_level=info.risk_level,
    )

    try:
        args = decode_arguments(info.param_types, to_bytes(calldata)[4:])
    except DecodeError as e:
        logger.debug(f"Known selector {selector} but arguments did not decode: {e}")
        return DecodedInnerCalldata(status="signature-only", **described)

    values = [_json_value(a) for a in args]
    params = [
        DecodedParam(name=name, type=abi_type, value=value, display=format_param_value(abi_type, value))
        for name, abi_type, value in zip(info.param_names, info.param_types, values)
    ]
    return DecodedInnerCalldata(
        status="decoded",
        params=params,
        summary=generate_summary(info.name, values),
        **described,
    )


def describe_calldata(calldata: HexLike, signature_lookup: Optional[SignatureLookup] = None) -> DecodedInnerCalldata:
    """
    Describe arbitrary calldata

    The local table is tried first. For unknown selectors the optional
    ``signature_lookup`` (e.g. FourByteDirectoryClient.lookup) is asked for a
    text signature; lookup failures leave the result as unknown.
    """
    local = decode_with_known_selectors(calldata)
    if local.status != "unknown" or local.selector is None or signature_lookup is None:
        return local

    try:
        signature = signature_lookup(local.selector)
    except ServiceError as e:
        rate_limited_log(f"Signature lookup unavailable: {e}", logger_instance=logger)
        return local

    if not signature:
        return local

    return DecodedInnerCalldata(
        status="signature-only",
        source="4byte",
        selector=local.selector,
        function_name=signature.split("(", 1)[0],
        signature=signature,
    )
