"""
Tests for locating timelock calldata inside Safe transactions.
"""
from timelock_sdk.codec import encode_schedule
from timelock_sdk.extractor import extract_timelock_calldata, filter_timelock_transactions
from timelock_sdk.models import MultiSendEntry, SafeTransaction
from timelock_sdk.multisend import encode_multisend
from conftest import (
    MULTISEND_1_3_0,
    MULTISEND_1_4_1,
    TEST_DATA,
    TEST_DELAY,
    TEST_PREDECESSOR,
    TEST_SALT,
    TEST_TARGET,
    TEST_TARGET_2,
    TEST_TIMELOCK,
    TEST_VALUE,
)

SCHEDULE_CALLDATA = encode_schedule(
    TEST_TARGET, TEST_VALUE, TEST_DATA, TEST_PREDECESSOR, TEST_SALT, TEST_DELAY
).calldata


def _multisend(*entries):
    return encode_multisend([
        MultiSendEntry(operation=0, to=to, value=0, data=data) for to, data in entries
    ])


def _safe_tx(to, data, nonce=1):
    return SafeTransaction(
        safe_tx_hash="0x" + "aa" * 32,
        to=to,
        data=data,
        nonce=nonce,
        submission_date="2024-01-01T00:00:00Z",
    )


def test_direct_timelock_call():
    assert extract_timelock_calldata(TEST_TIMELOCK, SCHEDULE_CALLDATA, TEST_TIMELOCK) == SCHEDULE_CALLDATA


def test_direct_call_returns_data_unchanged():
    raw = bytes.fromhex(SCHEDULE_CALLDATA[2:])
    assert extract_timelock_calldata(TEST_TIMELOCK, raw, TEST_TIMELOCK) is raw


def test_timelock_address_case_insensitive():
    upper = "0x" + TEST_TIMELOCK[2:].upper()
    assert extract_timelock_calldata(upper, SCHEDULE_CALLDATA, TEST_TIMELOCK) == SCHEDULE_CALLDATA
    assert extract_timelock_calldata(TEST_TIMELOCK, SCHEDULE_CALLDATA, upper) == SCHEDULE_CALLDATA


def test_direct_call_to_other_contract():
    assert extract_timelock_calldata(TEST_TARGET, SCHEDULE_CALLDATA, TEST_TIMELOCK) is None


def test_timelock_call_inside_multisend():
    calldata = _multisend((TEST_TARGET, TEST_DATA), (TEST_TIMELOCK, SCHEDULE_CALLDATA))
    assert extract_timelock_calldata(MULTISEND_1_3_0, calldata, TEST_TIMELOCK) == SCHEDULE_CALLDATA


def test_first_matching_multisend_entry_wins():
    calldata = _multisend((TEST_TIMELOCK, SCHEDULE_CALLDATA), (TEST_TIMELOCK, "0xdeadbeef"))
    assert extract_timelock_calldata(MULTISEND_1_4_1, calldata, TEST_TIMELOCK) == SCHEDULE_CALLDATA


def test_multisend_without_timelock_call():
    calldata = _multisend((TEST_TARGET, TEST_DATA), (TEST_TARGET_2, "0x"))
    assert extract_timelock_calldata(MULTISEND_1_3_0, calldata, TEST_TIMELOCK) is None


def test_multisend_payload_sent_to_unknown_address():
    calldata = _multisend((TEST_TIMELOCK, SCHEDULE_CALLDATA))
    assert extract_timelock_calldata(TEST_TARGET, calldata, TEST_TIMELOCK) is None


def test_custom_multisend_allow_list():
    calldata = _multisend((TEST_TIMELOCK, SCHEDULE_CALLDATA))
    assert extract_timelock_calldata(TEST_TARGET_2, calldata, TEST_TIMELOCK, [TEST_TARGET_2]) == SCHEDULE_CALLDATA


def test_malformed_multisend_data():
    assert extract_timelock_calldata(MULTISEND_1_3_0, "0x8d80ff0a1234", TEST_TIMELOCK) is None


def test_filter_timelock_transactions():
    transactions = [
        _safe_tx(TEST_TIMELOCK, SCHEDULE_CALLDATA, nonce=1),
        _safe_tx(TEST_TARGET, TEST_DATA, nonce=2),
        _safe_tx(MULTISEND_1_3_0, _multisend((TEST_TIMELOCK, SCHEDULE_CALLDATA)), nonce=3),
        _safe_tx(TEST_TARGET_2, None, nonce=4),
    ]

    result = filter_timelock_transactions(transactions, TEST_TIMELOCK)

    assert [item.transaction.nonce for item in result] == [1, 3]
    assert all(item.timelock_calldata == SCHEDULE_CALLDATA for item in result)
    assert "timelockCalldata" in result[0].model_dump(by_alias=True)


def test_filter_without_timelock_address():
    assert filter_timelock_transactions([_safe_tx(TEST_TIMELOCK, SCHEDULE_CALLDATA)], None) == []
