"""Unit tests for mint account decoding."""

import struct

from solders.pubkey import Pubkey

from token_launcher.decoder import decode_mint_account
from tests.fixtures.common import build_mint_account


class TestDecodeMintAccount:
    """Test suite for decode_mint_account."""

    def test_short_buffer_is_undecodable(self):
        """Buffers shorter than a mint account are not parsed."""
        assert decode_mint_account(b"\x00" * 81) is None
        assert decode_mint_account(b"") is None

    def test_zeroed_initialized_account(self):
        """82 zero bytes with the initialized byte set decode to an empty mint."""
        data = bytearray(82)
        data[45] = 1

        snapshot = decode_mint_account(bytes(data))

        assert snapshot is not None
        assert snapshot.supply == 0
        assert snapshot.decimals == 0
        assert snapshot.is_initialized is True
        assert snapshot.mint_authority is None
        assert snapshot.freeze_authority is None

    def test_supply_at_offset_36(self):
        """Supply is read little-endian from offset 36."""
        data = bytearray(82)
        struct.pack_into("<Q", data, 36, 123_456_789_000)
        data[44] = 6

        snapshot = decode_mint_account(bytes(data))

        assert snapshot.supply == 123_456_789_000
        assert snapshot.decimals == 6
        assert snapshot.is_initialized is False

    def test_longer_buffer_is_accepted(self):
        """Trailing bytes after the mint layout are ignored."""
        data = build_mint_account(supply=42, decimals=2) + b"\x01" * 100

        snapshot = decode_mint_account(data)

        assert snapshot.supply == 42
        assert snapshot.decimals == 2

    def test_authorities(self):
        """Present authorities decode to base58 addresses."""
        mint_authority = Pubkey.new_unique()
        freeze_authority = Pubkey.new_unique()
        data = build_mint_account(mint_authority=mint_authority, freeze_authority=freeze_authority)

        snapshot = decode_mint_account(data)

        assert snapshot.mint_authority == str(mint_authority)
        assert snapshot.freeze_authority == str(freeze_authority)

    def test_ui_supply(self):
        """UI supply applies the decimals."""
        assert decode_mint_account(build_mint_account(supply=1_500_000_000, decimals=9)).ui_supply == "1.5"
        assert decode_mint_account(build_mint_account(supply=2_000_000_000, decimals=9)).ui_supply == "2"
        assert decode_mint_account(build_mint_account(supply=77, decimals=0)).ui_supply == "77"
