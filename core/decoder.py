# core/decoder.py
"""
Render raw ENS multi-chain address bytes (ENSIP-9) as chain-native strings.

decode_address never raises: any layout it cannot render becomes a tagged
hex fallback ``<code>_<hex>``, carried as DecodeResult(fallback=True).
"""
from __future__ import annotations

import hashlib
from dataclasses import dataclass
from typing import Callable, Dict, Optional

import bech32
from base58 import b58encode
from bip_utils import SegwitBech32Encoder
from solders.pubkey import Pubkey
from web3 import Web3

from configs.coin_registry import EVM_CHAINS
from core.logger import get_logger

logger = get_logger()

RIPEMD160_SIZE = 20
EVM_ADDRESS_SIZE = 20
ED25519_PUBKEY_SIZE = 32
CHECKSUM_SIZE = 4

# ENSIP-9 stores Bitcoin-family addresses as output scripts
OP_0 = 0x00
OP_DUP = 0x76
OP_HASH160 = 0xA9
OP_EQUALVERIFY = 0x88
OP_CHECKSIG = 0xAC


class DecodeError(ValueError):
    pass


@dataclass(frozen=True)
class NetParams:
    """
    Fixed address constants of a Bitcoin-family network. Decoding reads
    pubkey_hash_addr_id and bech32_hrp; the script-hash and extended-key IDs
    are carried as reference constants only.
    """
    name: str
    pubkey_hash_addr_id: int
    script_hash_addr_id: int
    bech32_hrp: Optional[str]
    hd_private_key_id: bytes
    hd_public_key_id: bytes


BitcoinMainnet = NetParams(
    name="btc",
    pubkey_hash_addr_id=0x00,  # starts with 1
    script_hash_addr_id=0x05,  # starts with 3
    bech32_hrp="bc",
    hd_private_key_id=(0x0488ADE4).to_bytes(4, byteorder="big"),  # xprv
    hd_public_key_id=(0x0488B21E).to_bytes(4, byteorder="big"),  # xpub
)

DogecoinMainnet = NetParams(
    name="doge",
    pubkey_hash_addr_id=0x1E,  # starts with D
    script_hash_addr_id=0x16,  # starts with 9 or A
    bech32_hrp=None,
    hd_private_key_id=(0x02FAC398).to_bytes(4, byteorder="big"),  # dgpv
    hd_public_key_id=(0x02FACAFD).to_bytes(4, byteorder="big"),  # dgub
)


@dataclass(frozen=True)
class DecodeResult:
    address: str
    fallback: bool = False

    def __str__(self) -> str:
        return self.address


def hex_fallback(raw: bytes, code: str) -> str:
    return f"{code}_{bytes(raw).hex()}"


def checksum(b: bytes) -> bytes:
    """First four bytes of double-SHA256."""
    return hashlib.sha256(hashlib.sha256(b).digest()).digest()[:CHECKSUM_SIZE]


def encode_address_base58(k: bytes, net_id: int) -> str:
    """Base-58 encode the hash with the network ID prepended and checksum appended."""
    b = bytes([net_id]) + bytes(k)
    return b58encode(b + checksum(b)).decode()


def encode_segwit_address(hrp: str, witness_version: int, witness_program: bytes) -> str:
    """
    bech32 (BIP173) encoding for v0 programs, bech32m (BIP350) for v1+.
    bech32.encode returns None for programs that do not round-trip.
    """
    if witness_version != 0:
        return SegwitBech32Encoder.Encode(hrp, witness_version, bytes(witness_program))
    bech = bech32.encode(hrp, witness_version, list(witness_program))
    if not bech:
        raise DecodeError(f"bech32.encode error: v{witness_version}, {len(witness_program)} bytes")
    return bech


def is_zero_sentinel(raw: Optional[bytes], code: str) -> bool:
    """Empty value, or the zero address on EVM chains: 'no record set'."""
    if not raw:
        return True
    return code in EVM_CHAINS and not any(raw)


# ---------- per-chain decoders ----------

def _decode_evm(raw: bytes) -> str:
    if len(raw) == 32 and not any(raw[:12]):
        raw = raw[12:]  # ABI-padded
    if len(raw) != EVM_ADDRESS_SIZE:
        raise DecodeError(f"EVM address must be {EVM_ADDRESS_SIZE} bytes, got {len(raw)}")
    return Web3.to_checksum_address("0x" + raw.hex())


def _decode_legacy(raw: bytes, net: NetParams) -> str:
    if len(raw) != RIPEMD160_SIZE:
        raise DecodeError(f"pubkey hash must be {RIPEMD160_SIZE} bytes, got {len(raw)}")
    return encode_address_base58(raw, net.pubkey_hash_addr_id)


def _decode_p2wpkh(raw: bytes, net: NetParams) -> str:
    version, push_len, program = raw[0], raw[1], raw[2:]
    if net.bech32_hrp is None:
        raise DecodeError(f"{net.name} has no segwit encoding")
    if version != OP_0 or push_len != RIPEMD160_SIZE or len(program) != RIPEMD160_SIZE:
        raise DecodeError(f"not a v0 witness pubkey hash: version={version} push={push_len}")
    return encode_segwit_address(net.bech32_hrp, 0, program)


def _decode_serialized(raw: bytes, net: NetParams) -> str:
    # 76 a9 14 <hash160> 88 ac
    if (raw[0] == OP_DUP and raw[1] == OP_HASH160 and raw[2] == RIPEMD160_SIZE
            and raw[23] == OP_EQUALVERIFY and raw[24] == OP_CHECKSIG):
        return encode_address_base58(raw[3:23], net.pubkey_hash_addr_id)
    return b58encode(raw).decode()


def _decode_taproot(raw: bytes, net: NetParams) -> str:
    if net.bech32_hrp is None:
        raise DecodeError(f"{net.name} has no taproot encoding")
    return encode_segwit_address(net.bech32_hrp, 1, raw)


_BITCOIN_LAYOUTS: Dict[int, Callable[[bytes, NetParams], str]] = {
    20: _decode_legacy,
    22: _decode_p2wpkh,
    25: _decode_serialized,
    32: _decode_taproot,
}

_DOGECOIN_LAYOUTS: Dict[int, Callable[[bytes, NetParams], str]] = {
    20: _decode_legacy,
    25: _decode_serialized,
}


def _bitcoin_family(layouts: Dict[int, Callable[[bytes, NetParams], str]], net: NetParams):
    def decode(raw: bytes) -> str:
        layout = layouts.get(len(raw))
        if layout is not None:
            try:
                return layout(raw, net)
            except (ValueError, IndexError) as e:
                logger.debug(f"🔍 {net.name} {len(raw)}-byte decode failed: {e}, retrying as pubkey hash")
        return _decode_legacy(raw, net)
    return decode


def _decode_solana(raw: bytes) -> str:
    if len(raw) != ED25519_PUBKEY_SIZE:
        raise DecodeError(f"solana pubkey must be {ED25519_PUBKEY_SIZE} bytes, got {len(raw)}")
    return str(Pubkey.from_bytes(raw))


DECODERS: Dict[str, Callable[[bytes], str]] = {
    "btc": _bitcoin_family(_BITCOIN_LAYOUTS, BitcoinMainnet),
    "doge": _bitcoin_family(_DOGECOIN_LAYOUTS, DogecoinMainnet),
    "sol": _decode_solana,
    **{code: _decode_evm for code in EVM_CHAINS},
}


def decode_address(raw: bytes, code: str) -> DecodeResult:
    """
    Decode resolver bytes for chain `code`.

    Chains without a decoder (xrp, ltc, ada, ...) and any bytes that do not
    fit the chain's layouts come back as DecodeResult(fallback=True) with
    the tagged hex string.
    """
    raw = bytes(raw or b"")
    decoder = DECODERS.get(code)
    if decoder is None:
        return DecodeResult(hex_fallback(raw, code), fallback=True)
    try:
        return DecodeResult(decoder(raw))
    except Exception as e:
        logger.debug(f"🔍 {code} address decode fell back to hex: {e}")
        return DecodeResult(hex_fallback(raw, code), fallback=True)