"""
Clients for the third-party HTTP services the SDK can use for enrichment.

None of them is required: decoding and hashing work fully offline.
"""
from .safe_tx_service import SafeTransactionServiceClient
from .signatures import FourByteDirectoryClient

__all__ = ["SafeTransactionServiceClient", "FourByteDirectoryClient"]
