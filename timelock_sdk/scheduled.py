"""
Scheduled operations of a Safe that governs a timelock.
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Iterable, List, Optional

from .client import TimelockClient
from .codec import decode_timelock_calldata
from .exceptions import StatusQueryError
from .extractor import filter_timelock_transactions
from .models import DecodedSchedule, DecodedScheduleBatch, SafeTransaction, ScheduledOperation
from .services.safe_tx_service import SafeTransactionServiceClient, parse_service_date

LOOKBACK_MARGIN = timedelta(days=30)

logger = logging.getLogger(__name__)


def _schedule_calls(transactions: Iterable[SafeTransaction], timelock_address: str,
                    multisend_addresses: Optional[Iterable[str]]):
    for item in filter_timelock_transactions(transactions, timelock_address, multisend_addresses):
        decoded = decode_timelock_calldata(item.timelock_calldata)
        if isinstance(decoded, (DecodedSchedule, DecodedScheduleBatch)):
            yield item, decoded


def _build(item, decoded, safe_status, timelock_status=None) -> ScheduledOperation:
    tx = item.transaction
    return ScheduledOperation(
        safe_tx_hash=tx.safe_tx_hash,
        nonce=tx.nonce,
        timelock_calldata=item.timelock_calldata,
        decoded=decoded,
        operation_id=decoded.operation_id,
        submission_date=tx.submission_date,
        safe_status=safe_status,
        confirmations=len(tx.confirmations),
        confirmations_required=tx.confirmations_required,
        timelock_status=timelock_status,
    )


def _sort_key(op: ScheduledOperation):
    is_ready = op.timelock_status is not None and op.timelock_status.is_ready
    return (not is_ready, op.safe_status == "pending", -parse_service_date(op.submission_date).timestamp())


def scheduled_operations(
    safe_service: SafeTransactionServiceClient,
    timelock_client: TimelockClient,
    safe_address: str,
    multisend_addresses: Optional[Iterable[str]] = None,
    now: Optional[datetime] = None,
    limit: int = 50
) -> List[ScheduledOperation]:
    """
    Collect the schedule/scheduleBatch calls a Safe has proposed or sent

    Pending Safe transactions are listed as is. Executed ones are looked up
    from ``now - (minDelay + 30 days)`` onwards and enriched with their
    on-chain status; operations that were cancelled or already executed on
    the timelock are dropped.

    Results are ordered ready first, then waiting in the timelock, then
    awaiting signatures, newest submission first within each group.

    Args:
        safe_service: Client for the Safe Transaction Service
        timelock_client: Client bound to the timelock the Safe governs
        safe_address: Safe to inspect
        multisend_addresses: MultiSend allow-list (defaults to the canonical deployments)
        now: Reference time for the lookback window (defaults to the current UTC time)
        limit: Page size for each Safe Transaction Service query

    Raises:
        SafeServiceError: If the Safe Transaction Service cannot be queried
    """
    if multisend_addresses is not None:
        multisend_addresses = list(multisend_addresses)
    timelock_address = timelock_client.timelock_address

    try:
        min_delay = timelock_client.get_min_delay()
    except StatusQueryError as e:
        logger.warning(f"Could not read minimum delay, looking back {LOOKBACK_MARGIN.days} days: {e}")
        min_delay = 0
    since = (now or datetime.now(timezone.utc)) - timedelta(seconds=min_delay) - LOOKBACK_MARGIN

    pending = safe_service.get_pending_transactions(safe_address, limit=limit)
    executed = safe_service.get_executed_transactions(safe_address, since=since, limit=limit)

    operations = [
        _build(item, decoded, "pending")
        for item, decoded in _schedule_calls(pending, timelock_address, multisend_addresses)
    ]

    for item, decoded in _schedule_calls(executed, timelock_address, multisend_addresses):
        try:
            status = timelock_client.get_operation_status(decoded.operation_id)
        except StatusQueryError as e:
            logger.warning(f"Status of {decoded.operation_id} unavailable: {e}")
            status = None

        # cancelled operations no longer exist on-chain
        if status is not None and (not status.is_operation or status.is_done):
            continue
        operations.append(_build(item, decoded, "executed", status))

    operations.sort(key=_sort_key)
    logger.debug(f"Found {len(operations)} scheduled operations for Safe {safe_address}")
    return operations
