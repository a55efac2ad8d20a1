"""
timelock - hash, encode, decode and inspect TimelockController operations.
"""
import json
import logging
from typing import Any, List, Optional

import typer
from pydantic import BaseModel

from timelock_sdk import (
    FourByteDirectoryClient,
    NetworkConfig,
    SafeTransactionServiceClient,
    TimelockClient,
    decode_timelock_calldata,
    describe_calldata,
    encode_cancel,
    encode_execute,
    encode_execute_batch,
    encode_schedule,
    encode_schedule_batch,
    extract_timelock_calldata,
    filter_timelock_transactions,
    hash_operation,
    hash_operation_batch,
    scheduled_operations,
)
from timelock_sdk.exceptions import TimelockSDKError
from timelock_sdk.models import DecodedExecute, DecodedSchedule
from timelock_sdk.utils import ZERO_HASH, format_delay, generate_random_salt
from timelock_sdk.version import __version__

app = typer.Typer(help="Encode, decode and inspect OpenZeppelin TimelockController operations.")

logger = logging.getLogger(__name__)


def _dump(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(by_alias=True)
    if isinstance(value, list):
        return [_dump(v) for v in value]
    return value


def _emit(value: Any) -> None:
    typer.echo(json.dumps(_dump(value), indent=2))


def _fail(message: str) -> None:
    typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(code=1)


def _salt(salt: Optional[str], random_salt: bool) -> str:
    if random_salt:
        return generate_random_salt()
    return salt or ZERO_HASH


def _check_batch(targets: List[str], values: List[str], payloads: List[str]) -> None:
    if not len(targets) == len(values) == len(payloads):
        _fail(f"--target, --value and --data must be given the same number of times "
              f"(got {len(targets)}, {len(values)}, {len(payloads)})")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"timelock {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    version: Optional[bool] = typer.Option(
        None, "--version", callback=_version_callback, is_eager=True, help="Show the version and exit"
    ),
):
    """Encode, decode and inspect OpenZeppelin TimelockController operations."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )


@app.command("hash")
def hash_command(
    target: str = typer.Argument(..., help="Address called by the operation"),
    value: str = typer.Argument("0", help="Wei sent with the call"),
    data: str = typer.Argument("0x", help="Call payload as hex"),
    predecessor: str = typer.Option(ZERO_HASH, help="Operation this one depends on"),
    salt: str = typer.Option(ZERO_HASH, help="32-byte salt"),
):
    """Compute the identifier of a single operation."""
    try:
        typer.echo(hash_operation(target, value, data, predecessor, salt))
    except TimelockSDKError as e:
        _fail(str(e))


@app.command("hash-batch")
def hash_batch_command(
    targets: List[str] = typer.Option([], "--target", help="Target address (repeat per entry)"),
    values: List[str] = typer.Option([], "--value", help="Wei per entry"),
    payloads: List[str] = typer.Option([], "--data", help="Payload per entry"),
    predecessor: str = typer.Option(ZERO_HASH, help="Operation this one depends on"),
    salt: str = typer.Option(ZERO_HASH, help="32-byte salt"),
):
    """Compute the identifier of a batch operation."""
    _check_batch(targets, values, payloads)
    try:
        typer.echo(hash_operation_batch(targets, values, payloads, predecessor, salt))
    except TimelockSDKError as e:
        _fail(str(e))


@app.command()
def schedule(
    targets: List[str] = typer.Option(..., "--target", help="Target address (repeat for a batch)"),
    values: List[str] = typer.Option(["0"], "--value", help="Wei per entry"),
    payloads: List[str] = typer.Option(["0x"], "--data", help="Payload per entry"),
    delay: str = typer.Option(..., help="Delay in seconds"),
    predecessor: str = typer.Option(ZERO_HASH, help="Operation this one depends on"),
    salt: Optional[str] = typer.Option(None, help="32-byte salt (defaults to zero)"),
    random_salt: bool = typer.Option(False, "--random-salt", help="Generate a random salt"),
    batch: bool = typer.Option(False, "--batch", help="Encode scheduleBatch even for one entry"),
):
    """Encode a schedule() or scheduleBatch() call."""
    _check_batch(targets, values, payloads)
    salt = _salt(salt, random_salt)
    try:
        if batch or len(targets) > 1:
            encoded = encode_schedule_batch(targets, values, payloads, predecessor, salt, delay)
        else:
            encoded = encode_schedule(targets[0], values[0], payloads[0], predecessor, salt, delay)
    except TimelockSDKError as e:
        _fail(str(e))
    result = encoded.model_dump(by_alias=True)
    result["salt"] = salt
    _emit(result)


@app.command()
def execute(
    targets: List[str] = typer.Option(..., "--target", help="Target address (repeat for a batch)"),
    values: List[str] = typer.Option(["0"], "--value", help="Wei per entry"),
    payloads: List[str] = typer.Option(["0x"], "--data", help="Payload per entry"),
    predecessor: str = typer.Option(ZERO_HASH, help="Operation this one depends on"),
    salt: str = typer.Option(ZERO_HASH, help="Salt used when the operation was scheduled"),
    batch: bool = typer.Option(False, "--batch", help="Encode executeBatch even for one entry"),
):
    """Encode an execute() or executeBatch() call."""
    _check_batch(targets, values, payloads)
    try:
        if batch or len(targets) > 1:
            encoded = encode_execute_batch(targets, values, payloads, predecessor, salt)
        else:
            encoded = encode_execute(targets[0], values[0], payloads[0], predecessor, salt)
    except TimelockSDKError as e:
        _fail(str(e))
    _emit(encoded)


@app.command()
def cancel(operation_id: str = typer.Argument(..., help="Identifier of the pending operation")):
    """Encode a cancel() call."""
    try:
        typer.echo(encode_cancel(operation_id))
    except TimelockSDKError as e:
        _fail(str(e))


@app.command()
def decode(
    calldata: str = typer.Argument(..., help="Timelock calldata as hex"),
    describe: bool = typer.Option(False, "--describe", help="Describe the inner call payload"),
    lookup: bool = typer.Option(False, "--lookup", help="Ask 4byte.directory for unknown selectors"),
):
    """Decode timelock calldata."""
    decoded = decode_timelock_calldata(calldata)
    if decoded is None:
        _fail("Not a recognised timelock call")

    result = decoded.model_dump(by_alias=True)
    if isinstance(decoded, DecodedSchedule):
        result["delayFormatted"] = format_delay(decoded.delay)
    if describe and isinstance(decoded, (DecodedSchedule, DecodedExecute)):
        signature_lookup = FourByteDirectoryClient() if lookup else None
        result["innerCalldata"] = describe_calldata(decoded.data, signature_lookup).model_dump(by_alias=True)
    _emit(result)


@app.command()
def extract(
    to: str = typer.Option(..., help="Target of the Safe transaction"),
    data: str = typer.Option(..., help="Calldata of the Safe transaction"),
    timelock: str = typer.Option(..., help="Timelock address"),
):
    """Find the timelock calldata inside a (possibly MultiSend) Safe transaction."""
    try:
        calldata = extract_timelock_calldata(to, data, timelock, NetworkConfig.get_multisend_addresses())
    except TimelockSDKError as e:
        _fail(str(e))
    if calldata is None:
        _fail("Transaction does not call the timelock")
    typer.echo(calldata)


@app.command()
def status(
    operation_id: str = typer.Argument(..., help="Operation identifier"),
    timelock: str = typer.Option(..., help="Timelock address"),
    network: str = typer.Option("ethereum", help="Network name from networks.json"),
    rpc_url: Optional[str] = typer.Option(None, help="RPC URL (overrides network and env)"),
):
    """Read the on-chain state of an operation."""
    try:
        client = TimelockClient(NetworkConfig.get_rpc_url(network, rpc_url), timelock)
        _emit(client.get_operation_status(operation_id))
    except (TimelockSDKError, ValueError) as e:
        _fail(str(e))


@app.command()
def pending(
    safe: str = typer.Argument(..., help="Safe address"),
    timelock: str = typer.Option(..., help="Timelock address"),
    network: str = typer.Option("ethereum", help="Network name from networks.json"),
    limit: int = typer.Option(50, help="Maximum transactions to fetch"),
):
    """List pending Safe transactions that call the timelock."""
    try:
        chain_id = NetworkConfig.get_chain_id(network)
        client = SafeTransactionServiceClient(chain_id=chain_id)
        transactions = client.get_pending_transactions(safe, limit=limit)
        multisend_addresses = NetworkConfig.get_multisend_addresses()
    except (TimelockSDKError, ValueError) as e:
        _fail(str(e))

    results = []
    for item in filter_timelock_transactions(transactions, timelock, multisend_addresses):
        entry = item.model_dump(by_alias=True)
        entry["decoded"] = _dump(decode_timelock_calldata(item.timelock_calldata))
        results.append(entry)
    _emit(results)


@app.command()
def scheduled(
    safe: str = typer.Argument(..., help="Safe address"),
    timelock: str = typer.Option(..., help="Timelock address"),
    network: str = typer.Option("ethereum", help="Network name from networks.json"),
    rpc_url: Optional[str] = typer.Option(None, help="RPC URL (overrides network and env)"),
    limit: int = typer.Option(50, help="Maximum transactions to fetch per query"),
):
    """List schedule operations proposed or sent by a Safe, with their timelock status."""
    try:
        safe_service = SafeTransactionServiceClient(chain_id=NetworkConfig.get_chain_id(network))
        timelock_client = TimelockClient(NetworkConfig.get_rpc_url(network, rpc_url), timelock)
        operations = scheduled_operations(
            safe_service, timelock_client, safe, NetworkConfig.get_multisend_addresses(), limit=limit
        )
    except (TimelockSDKError, ValueError) as e:
        _fail(str(e))
    _emit(operations)


if __name__ == "__main__":
    app()
