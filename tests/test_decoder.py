import os

import pytest
from base58 import b58decode, b58decode_check
from bip_utils import SegwitBech32Decoder

from core.decoder import (
    BitcoinMainnet,
    DogecoinMainnet,
    checksum,
    decode_address,
    encode_address_base58,
    is_zero_sentinel,
)

B58_FORBIDDEN = set("0OIl")

GENESIS_HASH = bytes.fromhex("62e907b15cbf27d5425399ebf6f0fb50ebb88f18")
GENESIS_ADDR = "1A1zP1eP5QGefi2DMPTfTL5SLmv7DivfNa"
P2WPKH_PROGRAM = bytes.fromhex("751e76e8199196d454941c45d1b3a323f1433bd6")
TAPROOT_KEY = bytes.fromhex("79be667ef9dcbbac55a06295ce870b07029bfcdb2dce28d959f2815b16f81798")


class TestBitcoin:
    def test_pubkey_hash(self):
        r = decode_address(GENESIS_HASH, "btc")
        assert r.address == GENESIS_ADDR
        assert not r.fallback

    def test_all_zero_pubkey_hash(self):
        r = decode_address(bytes(20), "btc")
        assert r.address == "1111111111111111111114oLvT2"

    def test_segwit_v0(self):
        raw = bytes([0x00, 0x14]) + P2WPKH_PROGRAM
        assert decode_address(raw, "btc").address == "bc1qw508d6qejxtdg4y5r3zarvary0c5xw7kv8f3t4"

    @pytest.mark.parametrize("prefix", [bytes([0x01, 0x14]), bytes([0x00, 0x13])])
    def test_bad_segwit_header_falls_back(self, prefix):
        raw = prefix + P2WPKH_PROGRAM
        r = decode_address(raw, "btc")
        assert r.fallback
        assert r.address == "btc_" + raw.hex()

    def test_p2pkh_script(self):
        raw = bytes.fromhex("76a914") + GENESIS_HASH + bytes.fromhex("88ac")
        assert decode_address(raw, "btc").address == GENESIS_ADDR

    def test_serialized_payload(self):
        raw = b58decode(GENESIS_ADDR)
        assert len(raw) == 25
        assert decode_address(raw, "btc").address == GENESIS_ADDR

    def test_taproot(self):
        r = decode_address(TAPROOT_KEY, "btc")
        assert r.address == "bc1p0xlxvlhemja6c4dqv22uapctqupfhlxm9h8z3k2e72q4k9hcz7vqzk5jj0"
        assert not r.fallback

    def test_taproot_uses_bech32m_checksum(self):
        key = os.urandom(32)
        addr = decode_address(key, "btc").address
        assert addr.startswith("bc1p")
        assert SegwitBech32Decoder.Decode("bc", addr) == (1, key)

    @pytest.mark.parametrize("size", [1, 19, 21, 23, 33, 64])
    def test_other_lengths_fall_back(self, size):
        raw = os.urandom(size)
        r = decode_address(raw, "btc")
        assert r.fallback
        assert r.address == f"btc_{raw.hex()}"


class TestDogecoin:
    def test_pubkey_hash(self):
        addr = decode_address(GENESIS_HASH, "doge").address
        assert addr.startswith("D")
        assert b58decode_check(addr) == bytes([0x1E]) + GENESIS_HASH

    def test_p2pkh_script(self):
        raw = bytes.fromhex("76a914") + GENESIS_HASH + bytes.fromhex("88ac")
        assert decode_address(raw, "doge").address == decode_address(GENESIS_HASH, "doge").address

    def test_no_segwit(self):
        raw = bytes([0x00, 0x14]) + P2WPKH_PROGRAM
        assert decode_address(raw, "doge").fallback

    def test_net_params(self):
        assert DogecoinMainnet.pubkey_hash_addr_id == 0x1E
        assert DogecoinMainnet.script_hash_addr_id == 0x16
        assert DogecoinMainnet.hd_public_key_id == bytes.fromhex("02facafd")
        assert BitcoinMainnet.hd_public_key_id == bytes.fromhex("0488b21e")


class TestSolana:
    def test_zero_key(self):
        assert decode_address(bytes(32), "sol").address == "1" * 32

    @pytest.mark.parametrize("_", range(10))
    def test_random_keys_are_base58(self, _):
        r = decode_address(os.urandom(32), "sol")
        assert not r.fallback
        assert 32 <= len(r.address) <= 44
        assert not set(r.address) & B58_FORBIDDEN

    def test_wrong_length_falls_back(self):
        raw = os.urandom(20)
        assert decode_address(raw, "sol").address == "sol_" + raw.hex()


class TestEVM:
    @pytest.mark.parametrize("code", ["eth", "base", "arbitrum", "polygon", "avalanche", "bsc", "optimism"])
    def test_checksummed(self, code):
        raw = bytes.fromhex("d8da6bf26964af9d7eed9e03e53415d37aa96045")
        assert decode_address(raw, code).address == "0xd8dA6BF26964aF9D7eEd9e03E53415D37aA96045"

    def test_abi_padded(self):
        raw = bytes(12) + bytes.fromhex("d8da6bf26964af9d7eed9e03e53415d37aa96045")
        assert decode_address(raw, "base").address == "0xd8dA6BF26964aF9D7eEd9e03E53415D37aA96045"

    def test_short_falls_back(self):
        raw = bytes.fromhex("d8da6bf2")
        r = decode_address(raw, "polygon")
        assert r.fallback
        assert r.address == "polygon_d8da6bf2"


@pytest.mark.parametrize("code", ["xrp", "ltc", "ada", "zora", "linea", "scroll", "mantle", "celo", "gnosis", "fantom"])
def test_undecoded_chains_are_hex_tagged(code):
    raw = bytes.fromhex("0102abcdef")
    r = decode_address(raw, code)
    assert r.fallback
    assert str(r) == f"{code}_0102abcdef"


def test_encode_address_base58():
    assert encode_address_base58(GENESIS_HASH, 0x00) == GENESIS_ADDR
    assert checksum(b"") == bytes.fromhex("5df6e0e2")


def test_zero_sentinel():
    assert is_zero_sentinel(b"", "btc")
    assert is_zero_sentinel(None, "sol")
    assert is_zero_sentinel(bytes(20), "base")
    assert not is_zero_sentinel(bytes(20), "btc")
    assert not is_zero_sentinel(b"\x01", "xrp")
