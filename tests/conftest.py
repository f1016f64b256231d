from typing import Dict, Optional, Tuple

import pytest

from adapters.ens_registry import ZERO_ADDRESS
from core.resolver import ENSResolver

VITALIK = "0xd8dA6BF26964aF9D7eEd9e03E53415D37aA96045"
RESOLVER = "0x231b0Ee14048e9dCcD1d247744d114a4EB5E8E63"
OWNER = "0x220866B1A2219f40e72f5c628B65D54268cA3A9D"


class FakeRegistryClient:
    """In-memory RegistryClient. Unknown lookups return the registry's zero values."""

    def __init__(self, connected: bool = True, fail: Optional[Exception] = None):
        self.connected = connected
        self.fail = fail
        self.resolvers: Dict[str, str] = {}
        self.addresses: Dict[str, str] = {}
        self.multichain: Dict[Tuple[str, int], bytes] = {}
        self.texts: Dict[Tuple[str, str], str] = {}
        self.owners: Dict[str, str] = {}
        self.names: Dict[str, str] = {}
        self.calls = []

    def _record(self, *call):
        self.calls.append(call)
        if self.fail is not None:
            raise self.fail

    def is_connected(self):
        return self.connected

    def resolver_for(self, domain):
        self._record("resolver_for", domain)
        return self.resolvers.get(domain)

    def native_address(self, resolver, domain):
        self._record("native_address", domain)
        return self.addresses.get(domain, ZERO_ADDRESS)

    def multichain_address(self, resolver, domain, coin_type):
        self._record("multichain_address", domain, coin_type)
        return self.multichain.get((domain, coin_type), b"")

    def text_record(self, resolver, domain, key):
        self._record("text_record", domain, key)
        return self.texts.get((domain, key), "")

    def owner_of(self, domain):
        self._record("owner_of", domain)
        return self.owners.get(domain, ZERO_ADDRESS)

    def name_for(self, reverse_domain):
        self._record("name_for", reverse_domain)
        return self.names.get(reverse_domain, "")


@pytest.fixture
def fake_client():
    client = FakeRegistryClient()
    client.resolvers["vitalik.eth"] = RESOLVER
    client.addresses["vitalik.eth"] = VITALIK.lower()
    client.owners["vitalik.eth"] = OWNER
    return client


@pytest.fixture
def resolver(fake_client):
    return ENSResolver(client_factory=lambda config: fake_client)
