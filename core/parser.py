# core/parser.py
"""
Domain format parsing and record classification.

Two input syntaxes normalize to one ParsedQuery:
    vitalik.eth:btc   (chain separator)  -> ("vitalik.eth", "btc")
    vitalik.btc       (legacy suffix)    -> ("vitalik.eth", "btc")
    vitalik.eth                          -> ("vitalik.eth", "eth")
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from configs.coin_registry import (
    MULTICHAIN_CODES,
    NATIVE_SUFFIX,
    TEXT_RECORD_ALIASES,
    text_record_key,
)
from core.errors import FormatError

CHAIN_SEPARATOR = ":"
NATIVE_MARKER = NATIVE_SUFFIX
REVERSE_SUFFIX = "addr.reverse"


@dataclass(frozen=True)
class ParsedQuery:
    base_domain: str
    target: str


@dataclass(frozen=True)
class TextRecord:
    key: str


@dataclass(frozen=True)
class MultiChain:
    code: str


@dataclass(frozen=True)
class Native:
    pass


RecordTarget = Union[TextRecord, MultiChain, Native]


def _with_native_suffix(domain: str, label: str) -> str:
    return f"{domain[:-(len(label) + 1)]}.{NATIVE_SUFFIX}"


def parse_domain(domain: str) -> ParsedQuery:
    """
    Split a raw domain into (base_domain, target).

    Raises:
        FormatError: empty input, or `name:chain` where name is not a .eth domain
    """
    if not isinstance(domain, str) or not domain.strip():
        raise FormatError("Invalid domain name")
    domain = domain.strip()

    if CHAIN_SEPARATOR in domain:
        base, _, target = domain.rpartition(CHAIN_SEPARATOR)
        target = target.strip().lower()
        if not base.lower().endswith(f".{NATIVE_SUFFIX}"):
            raise FormatError(f"Invalid domain {domain!r}: '{base}' must end with .{NATIVE_SUFFIX}")
        if not target:
            raise FormatError(f"Invalid domain {domain!r}: missing target after '{CHAIN_SEPARATOR}'")
        return ParsedQuery(base_domain=base, target=target)

    if "." not in domain:
        return ParsedQuery(base_domain=domain, target=NATIVE_MARKER)

    tld = domain.rsplit(".", 1)[1].lower()
    if tld in TEXT_RECORD_ALIASES or tld in MULTICHAIN_CODES:
        return ParsedQuery(base_domain=_with_native_suffix(domain, tld), target=tld)

    # .eth and unrecognized suffixes are both plain name lookups
    return ParsedQuery(base_domain=domain, target=NATIVE_MARKER)


def classify_target(target: str) -> RecordTarget:
    """Route a target to the text-record, native or multi-chain path. Pure and total."""
    if target in TEXT_RECORD_ALIASES:
        return TextRecord(key=text_record_key(target))
    if target == NATIVE_MARKER:
        return Native()
    return MultiChain(code=target)


def reverse_key(address: str) -> str:
    """0xABC... -> abc....addr.reverse"""
    addr = address.strip()
    if addr[:2].lower() == "0x":
        addr = addr[2:]
    return f"{addr.lower()}.{REVERSE_SUFFIX}"
