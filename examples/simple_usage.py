#!/usr/bin/env python3
"""
Simple example of using the Timelock SDK.
"""
import json

from timelock_sdk import (
    decode_timelock_calldata,
    describe_calldata,
    encode_execute,
    encode_schedule,
)
from timelock_sdk.utils import ZERO_HASH, generate_random_salt


def main():
    """
    Demonstrate the offline codec.

    This example shows how to:
    1. Schedule a token transfer through the timelock
    2. Build the matching execute() call
    3. Decode the calldata again and describe the inner call
    """
    token = "0x1234567890123456789012345678901234567890"
    transfer = (
        "0xa9059cbb"
        "000000000000000000000000abcdefabcdefabcdefabcdefabcdefabcdefabcd"
        "00000000000000000000000000000000000000000000000000000000000f4240"
    )
    salt = generate_random_salt()

    scheduled = encode_schedule(token, 0, transfer, ZERO_HASH, salt, delay=2 * 86400)
    executed = encode_execute(token, 0, transfer, ZERO_HASH, salt)

    print(f"Operation ID: {scheduled.operation_id}")
    print(f"schedule() calldata: {scheduled.calldata}")
    print(f"execute() calldata:  {executed.calldata}")
    assert scheduled.operation_id == executed.operation_id

    decoded = decode_timelock_calldata(scheduled.calldata)
    print(json.dumps(decoded.model_dump(by_alias=True), indent=2))

    inner = describe_calldata(decoded.data)
    print(f"Inner call: {inner.summary} (risk: {inner.risk_level})")


if __name__ == "__main__":
    main()
