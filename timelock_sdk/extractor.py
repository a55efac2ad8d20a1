"""
Locate timelock calldata inside Safe transactions.
"""
from typing import Iterable, List, Optional

from .models import SafeTransaction, TimelockSafeTransaction
from .multisend import decode_multisend, is_multisend_address
from .utils import HexLike, to_hex


def _normalize(address: HexLike) -> str:
    if isinstance(address, (bytes, bytearray)):
        return to_hex(address)
    return address.lower()


def extract_timelock_calldata(to: HexLike, data: HexLike, timelock_address: HexLike,
                              multisend_addresses: Optional[Iterable[str]] = None) -> Optional[HexLike]:
    """
    Return the part of a Safe transaction that is addressed to the timelock

    Args:
        to: Direct target of the Safe transaction
        data: Calldata of the Safe transaction
        timelock_address: Timelock to look for
        multisend_addresses: MultiSend allow-list (defaults to the canonical deployments)

    Returns:
        ``data`` unchanged for a direct call, the data of the first MultiSend
        entry targeting the timelock, or None
    """
    timelock = _normalize(timelock_address)

    if _normalize(to) == timelock:
        return data

    if is_multisend_address(to, multisend_addresses):
        for entry in decode_multisend(data):
            if entry.to.lower() == timelock:
                return entry.data

    return None


def filter_timelock_transactions(transactions: Iterable[SafeTransaction],
                                 timelock_address: Optional[str],
                                 multisend_addresses: Optional[Iterable[str]] = None) -> List[TimelockSafeTransaction]:
    """Keep the Safe transactions that carry a call to the timelock"""
    if not timelock_address:
        return []

    if multisend_addresses is not None:
        multisend_addresses = list(multisend_addresses)

    result = []
    for tx in transactions:
        calldata = extract_timelock_calldata(tx.to, tx.data or "0x", timelock_address, multisend_addresses)
        if calldata:
            result.append(TimelockSafeTransaction(transaction=tx, timelock_calldata=to_hex(calldata)))
    return result
