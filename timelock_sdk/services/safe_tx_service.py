"""
Client for the Safe Transaction Service REST API.
"""
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

import requests

from ..config import NetworkConfig
from ..exceptions import RateLimitedError, SafeServiceError
from ..models import SafeInfo, SafeTransaction
from ..utils import to_address
from ._rate_limited_log import rate_limited_log
from .http import DEFAULT_TIMEOUT, build_session


class SafeTransactionServiceClient:
    """
    Read pending and executed multisig transactions of a Safe.

    To use this client you need either a chain ID supported by the hosted
    service (see networks.json) or the base URL of a self-hosted instance.
    """

    def __init__(
        self,
        chain_id: Optional[int] = None,
        base_url: Optional[str] = None,
        timeout: int = DEFAULT_TIMEOUT,
        retry_count: int = 2,
        session: Optional[requests.Session] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Args:
            chain_id: Chain to query on the hosted service
            base_url: Service URL, overrides chain_id
            timeout: Timeout for HTTP requests in seconds
            retry_count: Retries for 5xx responses and connection errors
            session: Optional preconfigured requests session
            logger: Optional logger instance

        Raises:
            ValueError: If neither a base URL nor a supported chain ID is given
        """
        if base_url is None:
            if chain_id is None:
                raise ValueError("Either chain_id or base_url must be provided")
            base_url = NetworkConfig.get_safe_service_url(chain_id)
            if base_url is None:
                raise ValueError(f"Unsupported chain: {chain_id}")

        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or build_session(retry_count=retry_count)
        self.logger = logger or logging.getLogger(__name__)

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            self.logger.error(f"Safe Transaction Service request failed: {e}")
            raise SafeServiceError(f"Safe Transaction Service request failed: {e}")

        if response.status_code == 429:
            rate_limited_log("Rate limited by Safe Transaction Service", logger_instance=self.logger)
            raise RateLimitedError("429: Rate limited by Safe Transaction Service", status_code=429)
        if not response.ok:
            raise SafeServiceError(
                f"Safe Transaction Service returned {response.status_code} for {path}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise SafeServiceError(f"Invalid JSON from Safe Transaction Service: {e}")

    def get_safe_info(self, safe_address: str) -> SafeInfo:
        safe_address = to_address(safe_address)
        return SafeInfo.model_validate(self._get(f"/api/v1/safes/{safe_address}/"))

    def get_pending_transactions(self, safe_address: str, limit: int = 50) -> List[SafeTransaction]:
        """
        Unexecuted transactions that can still be executed

        Transactions with a nonce below the Safe's current nonce are stale
        and are dropped.
        """
        safe_address = to_address(safe_address)
        info = self.get_safe_info(safe_address)
        data = self._get(
            f"/api/v1/safes/{safe_address}/multisig-transactions/",
            params={"executed": "false", "limit": limit},
        )
        transactions = [SafeTransaction.model_validate(tx) for tx in data.get("results", [])]
        return [tx for tx in transactions if tx.nonce >= info.nonce]

    def get_executed_transactions(self, safe_address: str, since: Optional[datetime] = None,
                                  limit: int = 100) -> List[SafeTransaction]:
        """
        Executed transactions, newest first

        Args:
            safe_address: Safe to query
            since: Optional timezone-aware datetime; older submissions are dropped
            limit: Page size requested from the service
        """
        safe_address = to_address(safe_address)
        data = self._get(
            f"/api/v1/safes/{safe_address}/multisig-transactions/",
            params={"executed": "true", "limit": limit, "ordering": "-executionDate"},
        )
        transactions = [SafeTransaction.model_validate(tx) for tx in data.get("results", [])]
        if since is None:
            return transactions
        return [tx for tx in transactions if parse_service_date(tx.submission_date) >= since]


def parse_service_date(value: str) -> datetime:
    # the service emits ISO 8601 with a trailing Z
    return datetime.fromisoformat(value.replace("Z", "+00:00"))
