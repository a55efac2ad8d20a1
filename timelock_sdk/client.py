"""
TimelockClient - on-chain reads and transaction submission for a timelock.
"""
import logging
import urllib.parse
from typing import Any, Dict, Optional, Protocol

from eth_account import Account
from eth_account.signers.base import BaseAccount
from web3 import Web3
from web3.exceptions import Web3Exception
from web3.types import TxReceipt as Web3TxReceipt

from .abi import TIMELOCK_ABI
from .exceptions import StatusQueryError, TransactionError
from .models import OperationStatus, TxReceipt
from .utils import HexLike, IntLike, to_address, to_bytes, to_bytes32, to_hex, to_uint256

DEFAULT_GAS_LIMIT = 500000


class Signer(Protocol):
    """Protocol for custom signers"""
    address: str

    def sign_transaction(self, transaction_dict: Dict[str, Any]) -> Any:
        """Sign transaction and return signed tx object"""
        ...


class TimelockClient:
    """
    Client for a deployed TimelockController.

    This client handles:
    1. Reading the status of an operation by its identifier
    2. Reading the minimum delay
    3. Signing and sending calldata produced by the codec

    Reads only need an RPC endpoint; submission also needs a private key or
    a custom signer.
    """

    def __init__(
        self,
        rpc_url: str,
        timelock_address: str,
        priv_key: Optional[str] = None,
        signer: Optional[Signer] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize the TimelockClient

        Args:
            rpc_url: Ethereum RPC endpoint URL
            timelock_address: Address of the TimelockController
            priv_key: Private key used to sign submitted transactions (optional)
            signer: Custom signer object (optional, used if priv_key is not given)
            logger: Optional logger instance to use for debug/info logging

        Raises:
            ValueError: If the RPC URL doesn't use https (unless it is localhost/127.0.0.1)
            InvalidAddressError: If the timelock address is malformed
        """
        parsed = urllib.parse.urlparse(rpc_url)
        host = parsed.netloc.split(':')[0]
        is_local = host in ('localhost', '127.0.0.1')
        if parsed.scheme != 'https' and not is_local:
            raise ValueError(f"rpc_url must use https:// for security (got: {parsed.scheme}://)")

        self.rpc_url = rpc_url
        self.timelock_address = to_address(timelock_address)
        self.logger = logger or logging.getLogger(__name__)

        self.w3 = Web3(Web3.HTTPProvider(rpc_url))
        self.contract = self.w3.eth.contract(address=self.timelock_address, abi=TIMELOCK_ABI)

        self.account: Optional[BaseAccount] = None
        self.signer = signer
        if priv_key:
            self.account = Account.from_key(priv_key)

    @property
    def address(self) -> str:
        """
        Address used to send transactions

        Raises:
            ValueError: If no account or signer is available
        """
        if self.account:
            return self.account.address
        elif self.signer:
            return self.signer.address
        else:
            raise ValueError("No account or signer available")

    def get_operation_status(self, operation_id: HexLike) -> OperationStatus:
        """
        Read the state of an operation

        Args:
            operation_id: 32-byte identifier from hash_operation / the encoders

        Returns:
            OperationStatus with the exists/pending/ready/done flags and the
            ready timestamp (0 if unset, 1 once done)

        Raises:
            InvalidHexError: If the identifier is not 32 bytes
            StatusQueryError: If any of the RPC reads fail
        """
        op_id = to_bytes32(operation_id)
        fns = self.contract.functions
        try:
            status = OperationStatus(
                is_operation=fns.isOperation(op_id).call(),
                is_pending=fns.isOperationPending(op_id).call(),
                is_ready=fns.isOperationReady(op_id).call(),
                is_done=fns.isOperationDone(op_id).call(),
                timestamp=fns.getTimestamp(op_id).call(),
            )
        except Exception as e:
            self.logger.error(f"Failed to read status of operation {to_hex(op_id)}: {e}")
            raise StatusQueryError(f"Failed to read operation status: {str(e)}")

        self.logger.debug(f"Operation {to_hex(op_id)} status: {status}")
        return status

    def get_min_delay(self) -> int:
        """
        Raises:
            StatusQueryError: If the RPC read fails
        """
        try:
            return self.contract.functions.getMinDelay().call()
        except Exception as e:
            self.logger.error(f"Failed to read minimum delay: {e}")
            raise StatusQueryError(f"Failed to read minimum delay: {str(e)}")

    def submit_transaction(
        self,
        data: HexLike,
        to: Optional[str] = None,
        value: IntLike = 0,
        gas: Optional[int] = None,
        gas_price_override: Optional[int] = None,
        wait_for_receipt: bool = True,
        poll_interval: Optional[float] = None
    ) -> TxReceipt:
        """
        Sign and send a transaction carrying the given calldata

        Args:
            data: Calldata, typically EncodedCall.calldata or encode_cancel()
            to: Destination (defaults to the timelock)
            value: Wei to send (execute() is payable)
            gas: Gas limit to use (if None, will be estimated or use default)
            gas_price_override: Gas price to use (if None, will use current network price)
            wait_for_receipt: Whether to wait for the transaction receipt (default=True)
            poll_interval: How often to poll for receipt (in seconds, default=0.1)

        Returns:
            Transaction receipt object

        Raises:
            ValueError: If neither a private key nor a signer is available
            InvalidInputError: If data, to or value are malformed
            TransactionError: If signing or sending fails
            Web3Exception: If there's an error with Web3 operations
        """
        from_address = self.address
        tx: Dict[str, Any] = {
            'from': from_address,
            'to': to_address(to) if to else self.timelock_address,
            'value': to_uint256(value),
            'data': to_hex(to_bytes(data)),
        }

        try:
            tx['nonce'] = self.w3.eth.get_transaction_count(from_address)
            tx['chainId'] = self.w3.eth.chain_id

            if gas is None:
                try:
                    gas = int(self.w3.eth.estimate_gas(tx) * 1.1)
                    self.logger.debug(f"Estimated gas: {gas}")
                except Exception as e:
                    gas = DEFAULT_GAS_LIMIT
                    self.logger.warning(f"Gas estimation failed, using default: {gas}. Error: {e}")
            tx['gas'] = gas
            tx['gasPrice'] = gas_price_override if gas_price_override is not None else self.w3.eth.gas_price

            try:
                if self.account:
                    signed_tx = self.account.sign_transaction(tx)
                else:
                    signed_tx = self.signer.sign_transaction(tx)
            except Exception as e:
                self.logger.error(f"Transaction signing failed: {e}")
                raise TransactionError(f"Failed to sign transaction: {str(e)}")

            try:
                tx_hash = self.w3.eth.send_raw_transaction(signed_tx.raw_transaction)
                self.logger.info(f"Transaction sent: {to_hex(tx_hash)}")
            except Web3Exception:
                raise
            except Exception as e:
                self.logger.error(f"Failed to send transaction: {e}")
                raise TransactionError(f"Failed to send transaction: {str(e)}")

            if wait_for_receipt:
                receipt = self.w3.eth.wait_for_transaction_receipt(
                    tx_hash,
                    timeout=120,
                    poll_latency=poll_interval or 0.1
                )
                return self._convert_receipt(receipt)

            return TxReceipt(
                transactionHash=to_hex(tx_hash),
                blockNumber=0,
                blockHash="0x" + "00" * 32,
                status=0,  # unknown until mined
                gasUsed=0,
                logs=[]
            )

        except TransactionError:
            raise
        except Web3Exception as e:
            self.logger.error(f"Web3 error: {e}")
            raise
        except Exception as e:
            self.logger.error(f"Unexpected error during submit_transaction: {e}")
            raise TransactionError(f"Transaction failed: {str(e)}")

    def _convert_receipt(self, web3_receipt: Web3TxReceipt) -> TxReceipt:
        """Convert a Web3 receipt to our TxReceipt model"""
        receipt_dict = dict(web3_receipt)
        for key, value in list(receipt_dict.items()):
            if isinstance(value, bytes):
                receipt_dict[key] = to_hex(value)
        return TxReceipt.model_validate(receipt_dict)
