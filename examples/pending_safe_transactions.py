#!/usr/bin/env python3
"""
List pending Safe transactions that schedule, execute or cancel timelock
operations, together with their on-chain status.
"""
import logging
import os

from timelock_sdk import (
    DecodedCancel,
    NetworkConfig,
    SafeTransactionServiceClient,
    TimelockClient,
    decode_timelock_calldata,
    filter_timelock_transactions,
    scheduled_operations,
)


def main():
    logging.basicConfig(level=logging.INFO)

    NETWORK = os.environ.get("NETWORK", "ethereum")
    SAFE_ADDRESS = os.environ.get("SAFE_ADDRESS")
    TIMELOCK_ADDRESS = os.environ.get("TIMELOCK_ADDRESS")

    if not SAFE_ADDRESS or not TIMELOCK_ADDRESS:
        print("ERROR: SAFE_ADDRESS and TIMELOCK_ADDRESS environment variables are required")
        return

    chain_id = NetworkConfig.get_chain_id(NETWORK)
    service = SafeTransactionServiceClient(chain_id=chain_id)
    timelock = TimelockClient(NetworkConfig.get_rpc_url(NETWORK), TIMELOCK_ADDRESS)

    pending = service.get_pending_transactions(SAFE_ADDRESS)
    matches = filter_timelock_transactions(pending, TIMELOCK_ADDRESS, NetworkConfig.get_multisend_addresses())
    print(f"{len(matches)} of {len(pending)} pending transactions call the timelock")

    for item in matches:
        decoded = decode_timelock_calldata(item.timelock_calldata)
        if decoded is None:
            print(f"  nonce {item.transaction.nonce}: unrecognised timelock call")
            continue

        status = timelock.get_operation_status(decoded.operation_id)
        print(f"  nonce {item.transaction.nonce}: {decoded.function_name} {decoded.operation_id}")
        if not isinstance(decoded, DecodedCancel):
            print(f"    pending={status.is_pending} ready={status.is_ready} done={status.is_done}")
        url = NetworkConfig.get_address_url(chain_id, TIMELOCK_ADDRESS)
        if url:
            print(f"    {url}")

    print("\nScheduled operations:")
    for op in scheduled_operations(service, timelock, SAFE_ADDRESS, NetworkConfig.get_multisend_addresses()):
        if op.safe_status == "pending":
            state = "awaiting signatures"
        elif op.timelock_status is None:
            state = "status unknown"
        else:
            state = "ready" if op.timelock_status.is_ready else "waiting in timelock"
        print(f"  nonce {op.nonce}: {op.operation_id} ({state})")


if __name__ == "__main__":
    main()
