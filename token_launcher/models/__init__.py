"""Data models for the Token Launcher."""

from token_launcher.models.token import (
    Creator,
    MintAccountSnapshot,
    OffChainMetadata,
    OffChainStatus,
    ResolvedMetadata,
    TokenInspection,
    TokenMetadata,
    TokenRecord,
    TokenUpdateRequest,
    merge_update,
    utc_now,
)

__all__ = [
    'Creator',
    'MintAccountSnapshot',
    'OffChainMetadata',
    'OffChainStatus',
    'ResolvedMetadata',
    'TokenInspection',
    'TokenMetadata',
    'TokenRecord',
    'TokenUpdateRequest',
    'merge_update',
    'utc_now',
]
