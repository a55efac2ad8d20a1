"""
Network configuration for the Timelock SDK.
"""
import importlib.resources
import json
import logging
import os
from typing import Any, Dict, FrozenSet, Optional

from .multisend import DEFAULT_MULTISEND_ADDRESSES
from .utils import to_address

logger = logging.getLogger(__name__)

SAFE_TX_SERVICE_BASE_URL = "https://api.safe.global/tx-service"
MULTISEND_ENV_VAR = "TIMELOCK_MULTISEND_ADDRESSES"


class NetworkConfig:
    """
    Access to the packaged networks.json file.

    The file is read once and cached on the class.
    """

    _networks_cache: Optional[Dict[str, Dict[str, Any]]] = None

    @classmethod
    def load_networks(cls) -> Dict[str, Dict[str, Any]]:
        if cls._networks_cache is None:
            resource = importlib.resources.files("timelock_sdk").joinpath("networks.json")
            with resource.open("r", encoding="utf-8") as f:
                cls._networks_cache = json.load(f)
        return cls._networks_cache

    @classmethod
    def get_network(cls, network: str) -> Dict[str, Any]:
        """
        Get the configuration of a named network

        Raises:
            ValueError: If the network is unknown
        """
        networks = cls.load_networks()
        if network not in networks:
            available = ", ".join(sorted(networks))
            raise ValueError(f"Unknown network: {network}. Available networks: {available}")
        return networks[network]

    @classmethod
    def get_rpc_url(cls, network: str, override: Optional[str] = None) -> str:
        """
        RPC URL for a network

        Precedence: explicit override, then the ``<NETWORK>_RPC_URL``
        environment variable, then networks.json.
        """
        if override:
            return override

        env_var = f"{network.upper().replace('-', '_')}_RPC_URL"
        env_value = os.environ.get(env_var)
        if env_value:
            logger.debug(f"Using RPC URL from {env_var}")
            return env_value

        return cls.get_network(network)["rpc"]

    @classmethod
    def get_chain_id(cls, network: str) -> int:
        return int(cls.get_network(network)["chainId"])

    @classmethod
    def get_network_by_chain_id(cls, chain_id: int) -> Optional[Dict[str, Any]]:
        for config in cls.load_networks().values():
            if int(config["chainId"]) == chain_id:
                return config
        return None

    @classmethod
    def get_safe_service_url(cls, chain_id: int) -> Optional[str]:
        """Safe Transaction Service base URL, or None if the chain is unsupported"""
        config = cls.get_network_by_chain_id(chain_id)
        if not config or not config.get("safeTxService"):
            return None
        return f"{SAFE_TX_SERVICE_BASE_URL}/{config['safeTxService']}"

    @classmethod
    def get_explorer_url(cls, chain_id: int) -> Optional[str]:
        config = cls.get_network_by_chain_id(chain_id)
        return config.get("explorer") if config else None

    @classmethod
    def get_tx_url(cls, chain_id: int, tx_hash: str) -> Optional[str]:
        explorer = cls.get_explorer_url(chain_id)
        return f"{explorer}/tx/{tx_hash}" if explorer else None

    @classmethod
    def get_address_url(cls, chain_id: int, address: str) -> Optional[str]:
        explorer = cls.get_explorer_url(chain_id)
        return f"{explorer}/address/{address}" if explorer else None

    @staticmethod
    def get_multisend_addresses() -> FrozenSet[str]:
        """
        MultiSend allow-list: the canonical deployments plus any addresses
        listed (comma separated) in TIMELOCK_MULTISEND_ADDRESSES

        Raises:
            InvalidAddressError: If an extra address is malformed
        """
        extra = os.environ.get(MULTISEND_ENV_VAR, "")
        addresses = {a.strip() for a in extra.split(",") if a.strip()}
        return DEFAULT_MULTISEND_ADDRESSES | {to_address(a).lower() for a in addresses}
