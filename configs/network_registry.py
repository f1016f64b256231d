# configs/network_registry.py
"""
Network registry for the ENS resolver.
Loads network configurations from networks.yaml and resolves a network
name (e.g. 'mainnet', 'sepolia') to its RPC endpoint and ENS registry.
"""
from __future__ import annotations

import os
from typing import Dict, List, Any, Optional
import yaml

from core.errors import UnsupportedNetwork


def load_networks_config() -> List[Dict[str, Any]]:
    """Load networks configuration from networks.yaml"""
    config_path = os.path.join(os.path.dirname(__file__), 'networks.yaml')
    with open(config_path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f)
    return data.get('networks', [])


def build_network_mapping() -> Dict[str, Dict[str, Any]]:
    """
    Build a mapping from network names to their configuration.
    Returns dict with lowercase keys for case-insensitive lookup.
    """
    mapping = {}
    for network in load_networks_config():
        mapping[network['name'].lower()] = network
    return mapping


# Global network mapping cache
_NETWORK_MAPPING: Optional[Dict[str, Dict[str, Any]]] = None


def get_network_mapping() -> Dict[str, Dict[str, Any]]:
    """Get network mapping, loading it once and caching."""
    global _NETWORK_MAPPING
    if _NETWORK_MAPPING is None:
        _NETWORK_MAPPING = build_network_mapping()
    return _NETWORK_MAPPING


def normalize_network(network: str) -> str:
    if not isinstance(network, str):
        raise UnsupportedNetwork(f"Network {network!r} not supported")
    return network.lower().strip()


def _rpc_url_for_network(name: str, network: Dict[str, Any]) -> Optional[str]:
    """
    Get RPC URL for network. First tries environment variable, then falls back to networks.yaml config.
    Environment variable format: RPC_URL__{NAME}
    """
    url = os.getenv(f"RPC_URL__{name.upper()}")
    if url:
        return url

    rpc_urls = network.get('rpc') or []
    if rpc_urls:
        return rpc_urls[0]  # Use first RPC URL
    return None


def get_network_config(network: str) -> Dict[str, Any]:
    """
    Get full network configuration by name, with env overrides applied.

    Args:
        network: Network name (case-insensitive), e.g. 'mainnet'

    Returns:
        Dict with keys: name, displayName, chainId, rpcUrl, ensRegistry, poa

    Raises:
        UnsupportedNetwork: If the network is unknown or has no RPC endpoint

    Examples:
        get_network_config('sepolia')['chainId'] -> 11155111
    """
    name = normalize_network(network)
    mapping = get_network_mapping()
    if name not in mapping:
        raise UnsupportedNetwork(
            f"Network {network} not supported. "
            f"Available options: {', '.join(list_supported_networks())}"
        )

    entry = mapping[name]
    rpc_url = _rpc_url_for_network(name, entry)
    if not rpc_url:
        raise UnsupportedNetwork(f"RPC_URL_NOT_SET: set RPC_URL__{name.upper()} in .env or configure in networks.yaml")

    return {
        'name': name,
        'displayName': entry.get('displayName', name),
        'chainId': int(entry['chainId']),
        'rpcUrl': rpc_url,
        'ensRegistry': os.getenv(f"ENS_REGISTRY__{name.upper()}") or entry['ensRegistry'],
        'poa': bool(entry.get('poa', False)),
    }


def list_supported_networks() -> List[str]:
    """Return list of supported network names."""
    return sorted(get_network_mapping().keys())
