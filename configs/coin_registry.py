# configs/coin_registry.py
"""
Static lookup tables for multi-chain ENS records.

- COIN_TYPES: chain code -> ENS coin type (addr(bytes32,uint256) namespace)
- TEXT_RECORD_KEYS: short alias -> full ENS text record key
- EVM_CHAINS: chains whose addresses are 20-byte checksummed hex

All tables are read-only views built once at import time.
"""
from __future__ import annotations

from types import MappingProxyType
from typing import FrozenSet, Mapping

NATIVE_SUFFIX = "eth"
NATIVE_COIN_TYPE = 60

COIN_TYPES: Mapping[str, int] = MappingProxyType({
    NATIVE_SUFFIX: NATIVE_COIN_TYPE,   # Ethereum
    "btc": 0,               # Bitcoin
    "sol": 501,             # Solana
    "doge": 3,              # Dogecoin
    "xrp": 144,             # XRP
    "ltc": 2,               # Litecoin
    "ada": 1815,            # Cardano
    "base": 8453,
    "arbitrum": 42161,
    "polygon": 137,
    "avalanche": 43114,
    "bsc": 56,
    "optimism": 10,
    "zora": 7777777,
    "linea": 59144,
    "scroll": 534352,
    "mantle": 5000,
    "celo": 42220,
    "gnosis": 100,
    "fantom": 250,
})

# Codes that may replace the native suffix in legacy syntax (name.btc)
MULTICHAIN_CODES: FrozenSet[str] = frozenset(c for c in COIN_TYPES if c != NATIVE_SUFFIX)

# Ethereum and its EVM-compatible execution layers: same 20-byte address format
EVM_CHAINS: FrozenSet[str] = frozenset({
    NATIVE_SUFFIX, "base", "arbitrum", "polygon", "avalanche", "bsc", "optimism",
})

TEXT_RECORD_KEYS: Mapping[str, str] = MappingProxyType({
    "twitter": "com.twitter",
    "x": "com.twitter",
    "github": "com.github",
    "discord": "com.discord",
    "reddit": "com.reddit",
    "linkedin": "com.linkedin",
    "telegram": "org.telegram",
})

# Global ENS keys are used verbatim; social aliases expand via TEXT_RECORD_KEYS
TEXT_RECORD_ALIASES: FrozenSet[str] = frozenset(TEXT_RECORD_KEYS) | frozenset({
    "avatar", "url", "email", "description", "notice", "keywords", "location", "header",
})


def get_coin_type(code: str) -> int:
    """
    Resolve a chain code to its ENS coin type.

    Unknown codes map to the native coin type (60) so callers always get a
    usable integer for the resolver call.

    Examples:
        get_coin_type('btc') -> 0
        get_coin_type('BASE') -> 8453
        get_coin_type('nope') -> 60
    """
    if not isinstance(code, str):
        return NATIVE_COIN_TYPE
    return COIN_TYPES.get(code.lower().strip(), NATIVE_COIN_TYPE)


def text_record_key(alias: str) -> str:
    """Full text record key for an alias; unmapped aliases pass through unchanged."""
    return TEXT_RECORD_KEYS.get(alias, alias)


def list_supported_chains() -> list[str]:
    """Return sorted chain codes with a registered coin type."""
    return sorted(COIN_TYPES)
