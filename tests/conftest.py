"""
Pytest fixtures for the Timelock SDK tests.
"""
import pytest
from unittest.mock import MagicMock
from eth_account import Account
from web3 import Web3
from web3.providers import BaseProvider
from web3.providers.rpc import HTTPProvider

from timelock_sdk.config import NetworkConfig
from timelock_sdk.services._rate_limited_log import reset_rate_limited_log

# Constants for testing
TEST_RPC_URL = "https://rpc.example.com"
TEST_PRIV_KEY = "0x0123456789abcdef0123456789abcdef0123456789abcdef0123456789abcdef"
TEST_TIMELOCK = "0x5555555555555555555555555555555555555555"
TEST_SAFE = "0x6666666666666666666666666666666666666666"

TEST_TARGET = "0x1234567890123456789012345678901234567890"
TEST_TARGET_2 = "0xabcdefabcdefabcdefabcdefabcdefabcdefabcd"
TEST_VALUE = 10**18  # 1 ETH
# transfer(0x1234567890123456789012345678901234567890, 10)
TEST_DATA = (
    "0xa9059cbb"
    "0000000000000000000000001234567890123456789012345678901234567890"
    "000000000000000000000000000000000000000000000000000000000000000a"
)
TEST_PREDECESSOR = "0x" + "00" * 32
TEST_SALT = "0x1234567890abcdef1234567890abcdef1234567890abcdef1234567890abcdef"
TEST_DELAY = 86400  # 1 day

MULTISEND_1_3_0 = "0x40a2accbd92bca938b02010e17a5b8929b49130d"
MULTISEND_CALL_ONLY_1_3_0 = "0xa238cbeb142c10ef7ad8442c6d1f9e89e07e7761"
MULTISEND_1_4_1 = "0x38869bf66a61cf6bdb996a6ae40d5853fd43b526"


@pytest.fixture(autouse=True)
def _patch_http_provider(monkeypatch):
    """
    Stub every Web3 HTTP call so no DNS / network traffic is triggered.
    Works for all tests because it is autouse.
    """
    def _dummy(self, method, params=None, _=None):      # signature match
        if method in {"eth_chainId"}:
            return {"jsonrpc": "2.0", "id": 1, "result": "0x1"}         # main-net
        if method in {"eth_gasPrice"}:
            return {"jsonrpc": "2.0", "id": 1, "result": "0x3b9aca00"}  # 1 gwei
        return {"jsonrpc": "2.0", "id": 1, "result": "0x0"}

    monkeypatch.setattr(HTTPProvider, "make_request", _dummy, raising=True)


@pytest.fixture(autouse=True)
def _reset_shared_state(monkeypatch):
    """Clear module level caches and env overrides between tests"""
    monkeypatch.delenv("TIMELOCK_MULTISEND_ADDRESSES", raising=False)
    reset_rate_limited_log()
    NetworkConfig._networks_cache = None
    yield
    reset_rate_limited_log()
    NetworkConfig._networks_cache = None


@pytest.fixture
def mock_web3_provider():
    """
    Mock of a Web3 provider whose eth namespace answers the calls the
    TimelockClient makes.
    """
    provider = MagicMock(spec=BaseProvider)

    eth = MagicMock()
    eth.chain_id = 11155111  # Sepolia testnet ID
    eth.gas_price = 1000000000  # 1 gwei
    eth.get_transaction_count = MagicMock(return_value=12)
    eth.estimate_gas = MagicMock(return_value=100000)
    eth.send_raw_transaction = MagicMock(return_value=bytes.fromhex("ab" * 32))

    def wait_for_receipt(tx_hash, **kwargs):
        return {
            'transactionHash': tx_hash,
            'blockNumber': 12345,
            'blockHash': bytes.fromhex('abcdef1234567890' * 4),
            'status': 1,
            'gasUsed': 85000,
            'from': '0x1234567890123456789012345678901234567890',
            'to': TEST_TIMELOCK,
            'logs': []
        }

    eth.wait_for_transaction_receipt = MagicMock(side_effect=wait_for_receipt)
    provider.eth = eth
    return provider


@pytest.fixture
def mock_w3(mock_web3_provider):
    """Create a mock Web3 instance with realistic provider"""
    mock = MagicMock(spec=Web3)
    mock.eth = mock_web3_provider.eth
    return mock


@pytest.fixture
def mock_account():
    """Create a deterministic test account"""
    return Account.from_key(TEST_PRIV_KEY)


def make_contract_mock(is_operation=True, is_pending=True, is_ready=False, is_done=False,
                       timestamp=1700000000, min_delay=86400):
    """Contract mock answering the timelock view functions"""
    def view(result):
        return MagicMock(return_value=MagicMock(call=MagicMock(return_value=result)))

    contract = MagicMock()
    contract.functions.isOperation = view(is_operation)
    contract.functions.isOperationPending = view(is_pending)
    contract.functions.isOperationReady = view(is_ready)
    contract.functions.isOperationDone = view(is_done)
    contract.functions.getTimestamp = view(timestamp)
    contract.functions.getMinDelay = view(min_delay)
    return contract
