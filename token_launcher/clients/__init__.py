"""Clients for the remote services the launcher talks to."""

from token_launcher.clients.offchain import fetch_offchain_metadata
from token_launcher.clients.pinata_client import PinataClient
from token_launcher.clients.solana_client import TokenChainClient, to_pubkey

__all__ = ['PinataClient', 'TokenChainClient', 'fetch_offchain_metadata', 'to_pubkey']
