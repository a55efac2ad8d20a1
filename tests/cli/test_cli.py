"""
Tests for the timelock command line interface.
"""
import json
from unittest.mock import patch

from typer.testing import CliRunner

from timelock_cli.main import app
from timelock_sdk.codec import decode_timelock_calldata, encode_schedule
from timelock_sdk.hashing import hash_operation, hash_operation_batch
from timelock_sdk.models import MultiSendEntry, OperationStatus, SafeTransaction, ScheduledOperation
from timelock_sdk.multisend import encode_multisend
from conftest import (
    MULTISEND_1_3_0,
    TEST_DATA,
    TEST_DELAY,
    TEST_PREDECESSOR,
    TEST_SAFE,
    TEST_SALT,
    TEST_TARGET,
    TEST_TARGET_2,
    TEST_TIMELOCK,
    TEST_VALUE,
)

runner = CliRunner()

SCHEDULE_CALLDATA = encode_schedule(
    TEST_TARGET, TEST_VALUE, TEST_DATA, TEST_PREDECESSOR, TEST_SALT, TEST_DELAY
).calldata


def test_version():
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert result.output.startswith("timelock ")


def test_hash():
    result = runner.invoke(app, ["hash", TEST_TARGET, str(TEST_VALUE), TEST_DATA, "--salt", TEST_SALT])
    assert result.exit_code == 0
    assert result.output.strip() == hash_operation(TEST_TARGET, TEST_VALUE, TEST_DATA, TEST_PREDECESSOR, TEST_SALT)


def test_hash_invalid_address():
    result = runner.invoke(app, ["hash", "0x1234"])
    assert result.exit_code == 1
    assert "Invalid address" in result.output


def test_hash_batch():
    result = runner.invoke(app, [
        "hash-batch",
        "--target", TEST_TARGET, "--value", "1", "--data", TEST_DATA,
        "--target", TEST_TARGET_2, "--value", "0", "--data", "0x",
        "--salt", TEST_SALT,
    ])
    assert result.exit_code == 0
    expected = hash_operation_batch(
        [TEST_TARGET, TEST_TARGET_2], [1, 0], [TEST_DATA, "0x"], TEST_PREDECESSOR, TEST_SALT
    )
    assert result.output.strip() == expected


def test_hash_batch_length_mismatch():
    result = runner.invoke(app, ["hash-batch", "--target", TEST_TARGET, "--target", TEST_TARGET_2, "--value", "1"])
    assert result.exit_code == 1
    assert "same number of times" in result.output


def test_schedule():
    result = runner.invoke(app, [
        "schedule", "--target", TEST_TARGET, "--value", str(TEST_VALUE), "--data", TEST_DATA,
        "--delay", str(TEST_DELAY), "--salt", TEST_SALT,
    ])
    assert result.exit_code == 0
    output = json.loads(result.output)
    assert output["calldata"] == SCHEDULE_CALLDATA
    assert output["operationId"] == hash_operation(TEST_TARGET, TEST_VALUE, TEST_DATA, TEST_PREDECESSOR, TEST_SALT)
    assert output["salt"] == TEST_SALT


def test_schedule_batch_flag():
    result = runner.invoke(app, ["schedule", "--target", TEST_TARGET, "--delay", "60", "--batch"])
    assert result.exit_code == 0
    assert json.loads(result.output)["calldata"].startswith("0x8f2a0bb0")


def test_schedule_random_salt():
    args = ["schedule", "--target", TEST_TARGET, "--delay", "60", "--random-salt"]
    first = json.loads(runner.invoke(app, args).output)
    second = json.loads(runner.invoke(app, args).output)
    assert first["salt"] != second["salt"]
    assert first["operationId"] != second["operationId"]


def test_execute():
    result = runner.invoke(app, ["execute", "--target", TEST_TARGET, "--data", TEST_DATA])
    assert result.exit_code == 0
    assert json.loads(result.output)["calldata"].startswith("0x134008d3")


def test_cancel():
    result = runner.invoke(app, ["cancel", "0x" + "ab" * 32])
    assert result.exit_code == 0
    assert result.output.strip().startswith("0xc4d252f5")


def test_cancel_invalid_identifier():
    result = runner.invoke(app, ["cancel", "0x1234"])
    assert result.exit_code == 1


def test_decode_schedule():
    result = runner.invoke(app, ["decode", SCHEDULE_CALLDATA, "--describe"])
    assert result.exit_code == 0
    output = json.loads(result.output)
    assert output["functionName"] == "schedule"
    assert output["value"] == TEST_VALUE
    assert output["delayFormatted"] == "1d"
    assert output["innerCalldata"]["functionName"] == "transfer"
    assert output["innerCalldata"]["status"] == "decoded"


def test_decode_unknown():
    result = runner.invoke(app, ["decode", TEST_DATA])
    assert result.exit_code == 1
    assert "Not a recognised timelock call" in result.output


def test_extract_from_multisend():
    calldata = encode_multisend([
        MultiSendEntry(operation=0, to=TEST_TARGET, value=0, data="0x"),
        MultiSendEntry(operation=0, to=TEST_TIMELOCK, value=0, data=SCHEDULE_CALLDATA),
    ])
    result = runner.invoke(app, ["extract", "--to", MULTISEND_1_3_0, "--data", calldata, "--timelock", TEST_TIMELOCK])
    assert result.exit_code == 0
    assert result.output.strip() == SCHEDULE_CALLDATA


def test_extract_not_found():
    result = runner.invoke(app, ["extract", "--to", TEST_TARGET, "--data", TEST_DATA, "--timelock", TEST_TIMELOCK])
    assert result.exit_code == 1


@patch("timelock_cli.main.TimelockClient")
def test_status(MockClient):
    MockClient.return_value.get_operation_status.return_value = OperationStatus(
        is_operation=True, is_pending=True, is_ready=True, is_done=False, timestamp=1700000000
    )
    result = runner.invoke(app, [
        "status", "0x" + "ab" * 32, "--timelock", TEST_TIMELOCK, "--rpc-url", "https://rpc.example.com",
    ])
    assert result.exit_code == 0
    assert json.loads(result.output)["isReady"] is True
    MockClient.assert_called_once_with("https://rpc.example.com", TEST_TIMELOCK)


@patch("timelock_cli.main.SafeTransactionServiceClient")
def test_pending(MockService):
    MockService.return_value.get_pending_transactions.return_value = [
        SafeTransaction(safe_tx_hash="0x01", to=TEST_TIMELOCK, data=SCHEDULE_CALLDATA, nonce=3,
                        submission_date="2024-01-01T00:00:00Z"),
        SafeTransaction(safe_tx_hash="0x02", to=TEST_TARGET, data=TEST_DATA, nonce=4,
                        submission_date="2024-01-01T00:00:00Z"),
    ]
    result = runner.invoke(app, ["pending", TEST_SAFE, "--timelock", TEST_TIMELOCK])

    assert result.exit_code == 0
    output = json.loads(result.output)
    assert len(output) == 1
    assert output[0]["transaction"]["nonce"] == 3
    assert output[0]["decoded"]["functionName"] == "schedule"
    MockService.assert_called_once_with(chain_id=1)


@patch("timelock_cli.main.SafeTransactionServiceClient")
def test_pending_unknown_network(MockService):
    result = runner.invoke(app, ["pending", TEST_SAFE, "--timelock", TEST_TIMELOCK, "--network", "nowhere"])
    assert result.exit_code == 1
    assert "Unknown network" in result.output
    MockService.assert_not_called()


def test_extract_bad_multisend_env(monkeypatch):
    monkeypatch.setenv("TIMELOCK_MULTISEND_ADDRESSES", "0x1234")
    result = runner.invoke(app, ["extract", "--to", TEST_TIMELOCK, "--data", TEST_DATA, "--timelock", TEST_TIMELOCK])
    assert result.exit_code == 1
    assert "Invalid address" in result.output


@patch("timelock_cli.main.SafeTransactionServiceClient")
def test_pending_bad_multisend_env(MockService, monkeypatch):
    monkeypatch.setenv("TIMELOCK_MULTISEND_ADDRESSES", "not-an-address")
    MockService.return_value.get_pending_transactions.return_value = []
    result = runner.invoke(app, ["pending", TEST_SAFE, "--timelock", TEST_TIMELOCK])
    assert result.exit_code == 1
    assert "Invalid address" in result.output


@patch("timelock_cli.main.TimelockClient")
@patch("timelock_cli.main.SafeTransactionServiceClient")
@patch("timelock_cli.main.scheduled_operations")
def test_scheduled(mock_scheduled, MockService, MockClient):
    decoded = decode_timelock_calldata(SCHEDULE_CALLDATA)
    mock_scheduled.return_value = [ScheduledOperation(
        safe_tx_hash="0x01", nonce=3, timelock_calldata=SCHEDULE_CALLDATA, decoded=decoded,
        operation_id=decoded.operation_id, submission_date="2024-01-01T00:00:00Z", safe_status="executed",
        timelock_status=OperationStatus(is_operation=True, is_pending=True, is_ready=True, is_done=False,
                                        timestamp=1700000000),
    )]
    result = runner.invoke(app, [
        "scheduled", TEST_SAFE, "--timelock", TEST_TIMELOCK, "--rpc-url", "https://rpc.example.com",
    ])

    assert result.exit_code == 0
    output = json.loads(result.output)
    assert output[0]["safeStatus"] == "executed"
    assert output[0]["decoded"]["delay"] == TEST_DELAY
    assert output[0]["timelockStatus"]["isReady"] is True
    MockService.assert_called_once_with(chain_id=1)
    MockClient.assert_called_once_with("https://rpc.example.com", TEST_TIMELOCK)
    args, kwargs = mock_scheduled.call_args
    assert args[:3] == (MockService.return_value, MockClient.return_value, TEST_SAFE)
    assert kwargs == {"limit": 50}


def test_scheduled_unknown_network():
    result = runner.invoke(app, ["scheduled", TEST_SAFE, "--timelock", TEST_TIMELOCK, "--network", "nowhere"])
    assert result.exit_code == 1
    assert "Unknown network" in result.output
