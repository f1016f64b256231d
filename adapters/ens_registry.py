# adapters/ens_registry.py
"""
ENS registry / resolver contract calls over web3.py.

The resolver core only depends on the RegistryClient protocol; tests swap in
an in-memory implementation.
"""
from __future__ import annotations

import os
from typing import Any, Dict, List, Optional, Protocol

from ens import ENS
from hexbytes import HexBytes
from web3 import Web3
from web3.middleware.proof_of_authority import ExtraDataToPOAMiddleware

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"


def _view(name: str, inputs: List[str], output: str) -> Dict[str, Any]:
    return {
        "name": name,
        "type": "function",
        "stateMutability": "view",
        "inputs": [{"name": f"arg{i}", "type": t} for i, t in enumerate(inputs)],
        "outputs": [{"name": "", "type": output}],
    }


REGISTRY_ABI = [
    _view("resolver", ["bytes32"], "address"),
    _view("owner", ["bytes32"], "address"),
]

RESOLVER_ABI = [
    _view("addr", ["bytes32"], "address"),
    _view("addr", ["bytes32", "uint256"], "bytes"),
    _view("text", ["bytes32", "string"], "string"),
    _view("name", ["bytes32"], "string"),
]


class RegistryClient(Protocol):
    """Registry round trips used by the resolver core. Zero values are returned as-is."""

    def is_connected(self) -> bool: ...

    def resolver_for(self, domain: str) -> Optional[str]: ...

    def native_address(self, resolver: str, domain: str) -> str: ...

    def multichain_address(self, resolver: str, domain: str, coin_type: int) -> bytes: ...

    def text_record(self, resolver: str, domain: str, key: str) -> str: ...

    def owner_of(self, domain: str) -> str: ...

    def name_for(self, reverse_domain: str) -> str: ...


def is_zero_address(addr: Optional[str]) -> bool:
    return not addr or int(addr, 16) == 0


def _make_w3(rpc_url: str, poa: bool = False) -> Web3:
    timeout = int(os.getenv("RPC_TIMEOUT_SEC", 20))
    w3 = Web3(Web3.HTTPProvider(rpc_url, request_kwargs={"timeout": timeout}))
    if poa:
        try:
            w3.middleware_onion.inject(ExtraDataToPOAMiddleware, layer=0)
        except ValueError:
            pass
    return w3


class Web3RegistryClient:
    def __init__(self, w3: Web3, registry_address: str):
        self.w3 = w3
        self.registry = w3.eth.contract(
            address=Web3.to_checksum_address(registry_address), abi=REGISTRY_ABI
        )

    @classmethod
    def from_network(cls, config: Dict[str, Any]) -> "Web3RegistryClient":
        """Build from a configs.network_registry.get_network_config() dict."""
        return cls(_make_w3(config["rpcUrl"], config.get("poa", False)), config["ensRegistry"])

    @staticmethod
    def namehash(domain: str) -> HexBytes:
        return ENS.namehash(domain)

    def _resolver(self, resolver: str):
        return self.w3.eth.contract(address=Web3.to_checksum_address(resolver), abi=RESOLVER_ABI)

    def is_connected(self) -> bool:
        return self.w3.is_connected()

    def resolver_for(self, domain: str) -> Optional[str]:
        addr = self.registry.functions.resolver(self.namehash(domain)).call()
        return None if is_zero_address(addr) else addr

    def native_address(self, resolver: str, domain: str) -> str:
        fn = self._resolver(resolver).get_function_by_signature("addr(bytes32)")
        return fn(self.namehash(domain)).call()

    def multichain_address(self, resolver: str, domain: str, coin_type: int) -> bytes:
        fn = self._resolver(resolver).get_function_by_signature("addr(bytes32,uint256)")
        return bytes(HexBytes(fn(self.namehash(domain), int(coin_type)).call()))

    def text_record(self, resolver: str, domain: str, key: str) -> str:
        return self._resolver(resolver).functions.text(self.namehash(domain), key).call()

    def owner_of(self, domain: str) -> str:
        return self.registry.functions.owner(self.namehash(domain)).call()

    def name_for(self, reverse_domain: str) -> str:
        resolver = self.resolver_for(reverse_domain)
        if resolver is None:
            return ""
        return self._resolver(resolver).functions.name(self.namehash(reverse_domain)).call()
