"""Common test fixtures for Token Launcher tests.

This module provides fixtures that can be reused across different test modules.
"""

import struct
from pathlib import Path
from typing import Iterable, Optional, Tuple

import pytest
from unittest.mock import AsyncMock
from solders.keypair import Keypair
from solders.pubkey import Pubkey

from token_launcher.clients.pinata_client import PinataClient
from token_launcher.clients.solana_client import TokenChainClient
from token_launcher.config import LauncherConfig, Network, PathsConfig, PinataConfig
from token_launcher.models.token import Creator, TokenMetadata, TokenRecord
from token_launcher.services.authority_service import SplTokenCli
from token_launcher.services.token_service import TokenService
from token_launcher.store.records import TokenRecordStore
from token_launcher.store.wallets import WalletStore

PINNED_URI = "https://gateway.pinata.cloud/ipfs/QmTestHash"


def build_mint_account(
    supply: int = 0,
    decimals: int = 0,
    initialized: bool = True,
    mint_authority: Optional[Pubkey] = None,
    freeze_authority: Optional[Pubkey] = None
) -> bytes:
    """Raw 82-byte SPL mint account."""
    data = bytearray(82)
    if mint_authority is not None:
        struct.pack_into("<I", data, 0, 1)
        data[4:36] = bytes(mint_authority)
    struct.pack_into("<Q", data, 36, supply)
    data[44] = decimals
    data[45] = 1 if initialized else 0
    if freeze_authority is not None:
        struct.pack_into("<I", data, 46, 1)
        data[50:82] = bytes(freeze_authority)
    return bytes(data)


def build_metadata_account(
    update_authority: str,
    mint: str,
    name: str = "Test Token",
    symbol: str = "TEST",
    uri: str = "https://example.com/metadata.json",
    seller_fee_basis_points: int = 0,
    creators: Iterable[Tuple[str, bool, int]] = (),
    primary_sale_happened: bool = False,
    is_mutable: bool = True,
    token_standard: Optional[int] = 2,
    include_tail: bool = True
) -> bytes:
    """Raw Metaplex Metadata account with NUL padded strings."""

    def padded(value: str, size: int) -> bytes:
        raw = value.encode("utf-8").ljust(size, b"\x00")
        return struct.pack("<I", len(raw)) + raw

    data = b"\x04" + bytes(Pubkey.from_string(update_authority)) + bytes(Pubkey.from_string(mint))
    data += padded(name, 32) + padded(symbol, 10) + padded(uri, 200)
    data += struct.pack("<H", seller_fee_basis_points)

    creators = list(creators)
    if creators:
        data += b"\x01" + struct.pack("<I", len(creators))
        for address, verified, share in creators:
            data += bytes(Pubkey.from_string(address)) + struct.pack("<?B", verified, share)
    else:
        data += b"\x00"

    data += struct.pack("<??", primary_sale_happened, is_mutable)
    if include_tail:
        data += b"\x01\xff"  # edition nonce
        if token_standard is None:
            data += b"\x00"
        else:
            data += b"\x01" + bytes([token_standard])
    return data


@pytest.fixture
def config(tmp_path: Path) -> LauncherConfig:
    """Launcher configuration rooted in a temporary directory."""
    return LauncherConfig(
        pinata=PinataConfig(jwt="test-jwt"),
        paths=PathsConfig(
            wallets=tmp_path / "wallets",
            tokens=tmp_path / "tokens",
            config=tmp_path / "config",
        ),
    )


@pytest.fixture
def record_store(tmp_path: Path) -> TokenRecordStore:
    return TokenRecordStore(tmp_path / "tokens")


@pytest.fixture
def wallet_store(tmp_path: Path) -> WalletStore:
    return WalletStore(tmp_path / "wallets")


@pytest.fixture
def payer() -> Keypair:
    return Keypair()


@pytest.fixture
def mint_address() -> str:
    return str(Pubkey.new_unique())


@pytest.fixture
def sample_record(mint_address: str, payer: Keypair) -> TokenRecord:
    """A token record as written at creation time."""
    return TokenRecord(
        name="Test Token",
        symbol="TEST",
        description="A token for tests",
        mint_address=mint_address,
        metadata_uri="https://example.com/metadata.json",
        image_uri="https://example.com/image.png",
        decimals=9,
        initial_supply=1_000_000,
        creator=str(payer.pubkey()),
        create_transaction="5" * 88,
        network=Network.DEVNET,
        wallet_file="wallet.json",
    )


@pytest.fixture
def sample_metadata(mint_address: str, payer: Keypair) -> TokenMetadata:
    """On-chain metadata owned by the payer."""
    return TokenMetadata(
        update_authority=str(payer.pubkey()),
        mint=mint_address,
        name="Test Token",
        symbol="TEST",
        uri="https://example.com/metadata.json",
        creators=[Creator(address=str(payer.pubkey()), verified=True, share=100)],
        is_mutable=True,
        token_standard=2,
    )


@pytest.fixture
def mock_chain_client():
    """Create a mock chain client on devnet."""
    client = AsyncMock(spec=TokenChainClient)
    client.network = Network.DEVNET
    client.get_minimum_balance_for_rent_exemption.return_value = 1461600
    client.send_and_confirm.return_value = "4" * 88
    client.get_metadata.return_value = None
    return client


@pytest.fixture
def mock_pinata_client():
    """Create a mock Pinata client."""
    client = AsyncMock(spec=PinataClient)
    client.upload_json.return_value = PINNED_URI
    return client


@pytest.fixture
def mock_spl_token():
    """Create a mock spl-token dispatcher."""
    return AsyncMock(spec=SplTokenCli)


@pytest.fixture
def token_service(mock_chain_client, mock_pinata_client, record_store, mock_spl_token) -> TokenService:
    """Create a TokenService wired to mocks and a temporary record store."""
    return TokenService(
        chain=mock_chain_client,
        pinata=mock_pinata_client,
        store=record_store,
        spl_token=mock_spl_token,
    )
