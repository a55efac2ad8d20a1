"""
Shared HTTP session setup for third-party services.
"""
import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

DEFAULT_TIMEOUT = 10


def build_session(retry_count: int = 2, backoff_factor: float = 0.5) -> requests.Session:
    """
    Create a requests session that retries transient server errors

    429 is not retried; clients surface it as RateLimitedError.
    """
    session = requests.Session()
    retries = Retry(
        total=retry_count,
        backoff_factor=backoff_factor,
        status_forcelist=[500, 502, 503, 504],
        allowed_methods=["GET"],
        raise_on_status=False,
        connect=retry_count,
        read=retry_count,
    )
    session.mount("http://", HTTPAdapter(max_retries=retries))
    session.mount("https://", HTTPAdapter(max_retries=retries))
    session.headers.update({"Accept": "application/json"})
    return session
