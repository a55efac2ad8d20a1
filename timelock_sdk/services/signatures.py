"""
Function signature lookup against the 4byte.directory API.
"""
import logging
import threading
from typing import Optional

import requests
from cachetools import TTLCache

from ..exceptions import SignatureLookupError
from .http import DEFAULT_TIMEOUT, build_session

logger = logging.getLogger(__name__)

FOUR_BYTE_API_URL = "https://www.4byte.directory/api/v1/signatures/"


class FourByteDirectoryClient:
    """
    Resolve 4-byte selectors to text signatures.

    Results (including "not found") are cached for 24 hours by default.
    """

    def __init__(
        self,
        base_url: str = FOUR_BYTE_API_URL,
        timeout: int = DEFAULT_TIMEOUT,
        cache_ttl: int = 24 * 60 * 60,
        retry_count: int = 1,
        session: Optional[requests.Session] = None,
        logger: Optional[logging.Logger] = None
    ):
        self.base_url = base_url
        self.timeout = timeout
        self.session = session or build_session(retry_count=retry_count)
        self.logger = logger or logging.getLogger(__name__)
        self._cache: TTLCache = TTLCache(maxsize=1024, ttl=cache_ttl)
        self._cache_lock = threading.RLock()

    def lookup(self, selector: str) -> Optional[str]:
        """
        Look up the most popular text signature for a selector

        Args:
            selector: 0x-prefixed 4-byte selector, e.g. "0xa9059cbb"

        Returns:
            Text signature such as "transfer(address,uint256)", or None if
            the directory has no match

        Raises:
            ValueError: If the selector is not 4 bytes of hex
            SignatureLookupError: If the request fails
        """
        selector = selector.lower()
        if len(selector) != 10 or not selector.startswith("0x"):
            raise ValueError(f"Selector must be 0x followed by 8 hex characters, got {selector!r}")

        with self._cache_lock:
            if selector in self._cache:
                return self._cache[selector]

        try:
            response = self.session.get(
                self.base_url,
                params={"hex_signature": selector},
                timeout=self.timeout,
            )
            response.raise_for_status()
            results = response.json().get("results") or []
        # requests' JSONDecodeError is also a RequestException
        except ValueError as e:
            raise SignatureLookupError(f"Invalid JSON from 4byte.directory: {e}")
        except requests.RequestException as e:
            self.logger.error(f"4byte.directory lookup for {selector} failed: {e}")
            status = getattr(getattr(e, "response", None), "status_code", None)
            raise SignatureLookupError(f"4byte.directory lookup failed: {e}", status_code=status)

        signature = results[0].get("text_signature") if results else None
        self.logger.debug(f"4byte.directory {selector} -> {signature}")

        with self._cache_lock:
            self._cache[selector] = signature
        return signature

    def __call__(self, selector: str) -> Optional[str]:
        return self.lookup(selector)
