# core/resolver.py
"""
ENS resolution service: forward (name -> address / record), domain info and
reverse (address -> name).

Only FormatError and UnsupportedNetwork escape. Any failed registry round
trip is logged and reported as None ("not found").
"""
from __future__ import annotations

import os
from dataclasses import asdict, dataclass
from typing import Any, Callable, Dict, List, Optional

from web3 import Web3

from adapters.ens_registry import RegistryClient, Web3RegistryClient, is_zero_address
from configs.coin_registry import NATIVE_COIN_TYPE, get_coin_type
from configs.network_registry import get_network_config, list_supported_networks, normalize_network
from core.decoder import decode_address, is_zero_sentinel
from core.logger import get_logger
from core.parser import Native, ParsedQuery, TextRecord, classify_target, parse_domain, reverse_key

logger = get_logger()

ClientFactory = Callable[[Dict[str, Any]], RegistryClient]


@dataclass
class DomainInfo:
    name: str
    address: str
    resolver: str
    network: str
    owner: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        if d["owner"] is None:
            d.pop("owner")
        return d


def default_network() -> str:
    return os.getenv("DEFAULT_NETWORK", "mainnet")


class ENSResolver:
    def __init__(self, client_factory: Optional[ClientFactory] = None):
        # 每次请求新建client，不共享可变状态
        self.client_factory = client_factory or Web3RegistryClient.from_network

    def _client(self, network: str):
        config = get_network_config(network)  # UnsupportedNetwork 直接上抛
        return config, self.client_factory(config)

    def supported_networks(self) -> List[str]:
        return list_supported_networks()

    def is_network_supported(self, network: str) -> bool:
        try:
            return normalize_network(network) in self.supported_networks()
        except ValueError:
            return False

    # ---------- forward ----------
    def resolve(self, domain: str, network: Optional[str] = None) -> Optional[str]:
        """
        Resolve an ENS name to an address, a multi-chain address or a text record.

        Examples:
            resolve('vitalik.eth') -> '0xd8dA6BF26964aF9D7eEd9e03E53415D37aA96045'
            resolve('vitalik.eth:btc') / resolve('vitalik.btc') -> 'bc1q...'
            resolve('vitalik.eth:twitter') -> 'VitalikButerin'
        """
        network = network or default_network()
        query = parse_domain(domain)
        _, client = self._client(network)
        try:
            if not client.is_connected():
                logger.warning(f"⚠️ Provider connection failed: network={network}")
                return None
            return self._resolve_query(client, query)
        except Exception as e:
            logger.warning(f"⚠️ Error resolving {domain} on {network}: {e}")
            return None

    def _resolve_query(self, client: RegistryClient, query: ParsedQuery) -> Optional[str]:
        target = classify_target(query.target)
        logger.debug(f"🔍 {query.base_domain} target={query.target} -> {target}")

        resolver = client.resolver_for(query.base_domain)
        if resolver is None:
            logger.debug(f"🔍 No resolver for {query.base_domain}")
            return None

        if isinstance(target, TextRecord):
            value = client.text_record(resolver, query.base_domain, target.key)
            return value or None

        if isinstance(target, Native):
            return self._native(client, resolver, query.base_domain)

        coin_type = get_coin_type(target.code)
        if coin_type == NATIVE_COIN_TYPE:
            return self._native(client, resolver, query.base_domain)

        raw = client.multichain_address(resolver, query.base_domain, coin_type)
        if is_zero_sentinel(raw, target.code):
            logger.debug(f"🔍 No {target.code} (coinType={coin_type}) record for {query.base_domain}")
            return None
        return decode_address(raw, target.code).address

    def _native(self, client: RegistryClient, resolver: str, domain: str) -> Optional[str]:
        address = client.native_address(resolver, domain)
        if is_zero_address(address):
            return None
        return Web3.to_checksum_address(address)

    # ---------- domain info ----------
    def domain_info(self, domain: str, network: Optional[str] = None) -> Optional[DomainInfo]:
        network = network or default_network()
        query = parse_domain(domain)
        config, client = self._client(network)
        try:
            resolver = client.resolver_for(query.base_domain)
            if resolver is None:
                return None
            owner = client.owner_of(query.base_domain)
        except Exception as e:
            logger.warning(f"⚠️ Error getting domain info for {domain} on {network}: {e}")
            return None

        address = self.resolve(domain, network)
        return DomainInfo(
            name=domain,
            address=address or "",
            resolver=resolver,
            network=config["displayName"],
            owner=None if is_zero_address(owner) else owner,
        )

    # ---------- reverse ----------
    def reverse_resolve(self, address: str, network: Optional[str] = None) -> Optional[str]:
        network = network or default_network()
        key = reverse_key(address)
        _, client = self._client(network)
        try:
            name = client.name_for(key)
        except Exception as e:
            logger.warning(f"⚠️ Error reverse resolving {address} on {network}: {e}")
            return None
        if name:
            logger.info(f"📛 Reverse resolved {address} -> {name}")
        return name or None
