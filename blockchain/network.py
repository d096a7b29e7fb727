"""
Network Configuration
Resolves the target network and deployer account from .env / environment
"""

import os
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional
from web3 import Web3
from loguru import logger
from dotenv import find_dotenv, load_dotenv

from .exceptions import NetworkConfigError

load_dotenv(find_dotenv(usecwd=True))

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent / "networks.json"
DEFAULT_RECEIPT_TIMEOUT = 120


@dataclass
class NetworkConfig:
    """Connection settings for a single deployment target"""

    name: str
    rpc_url: str
    chain_id: Optional[int] = None
    private_key: Optional[str] = None
    artifacts_dir: str = "artifacts"
    receipt_timeout: float = DEFAULT_RECEIPT_TIMEOUT


def _read_networks(config_path) -> Dict:
    try:
        with open(config_path, 'r') as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise NetworkConfigError(f"Cannot read network config {config_path}: {e}") from e


def load_network_config(name: str = None, config_path=DEFAULT_CONFIG_PATH) -> NetworkConfig:
    """
    Build the configuration for a named network

    Args:
        name: Network name (falls back to DEPLOY_NETWORK, then the file default)
        config_path: Path of the networks JSON file

    Returns:
        NetworkConfig
    """
    config = _read_networks(config_path)
    networks = config.get('networks', {})

    name = name or os.getenv('DEPLOY_NETWORK') or config.get('default_network', 'localhost')

    if name not in networks:
        raise NetworkConfigError(
            f"Unknown network '{name}' (available: {', '.join(sorted(networks)) or 'none'})"
        )

    entry = networks[name]
    rpc_url = os.getenv(entry.get('rpc_url_env', '')) or entry.get('default_rpc_url')

    if not rpc_url:
        raise NetworkConfigError(
            f"No RPC URL for network '{name}': set {entry.get('rpc_url_env')}"
        )

    timeout = os.getenv('RECEIPT_TIMEOUT')

    try:
        receipt_timeout = float(timeout) if timeout else DEFAULT_RECEIPT_TIMEOUT
    except ValueError as e:
        raise NetworkConfigError(f"RECEIPT_TIMEOUT must be a number, got {timeout!r}") from e

    return NetworkConfig(
        name=name,
        rpc_url=rpc_url,
        chain_id=entry.get('chain_id'),
        private_key=os.getenv('DEPLOYER_PRIVATE_KEY') or None,
        artifacts_dir=os.getenv('ARTIFACTS_DIR', 'artifacts'),
        receipt_timeout=receipt_timeout
    )


def connect(network: NetworkConfig) -> Web3:
    """
    Open an HTTP connection to the network

    Raises:
        NetworkConfigError: if the node does not answer
    """
    w3 = Web3(Web3.HTTPProvider(network.rpc_url))

    if not w3.is_connected():
        raise NetworkConfigError(f"Failed to connect to {network.name} at {network.rpc_url}")

    logger.debug(f"Connected to {network.name} ({network.rpc_url})")
    return w3
