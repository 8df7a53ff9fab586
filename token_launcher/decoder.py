"""Mint account decoding.

Reads supply, decimals and the initialized flag out of a raw SPL mint
account at fixed offsets:

    0   COption<Pubkey> mint authority (4-byte tag + 32 bytes)
    36  u64 supply, little-endian
    44  u8 decimals
    45  bool is_initialized
    46  COption<Pubkey> freeze authority (4-byte tag + 32 bytes)

The layout carries no version or checksum. If the token program ever
changes it, these reads return wrong numbers instead of failing.
"""

import struct
from typing import Optional

import base58

from token_launcher.constants import (
    MINT_ACCOUNT_LEN,
    MINT_AUTHORITY_OFFSET,
    MINT_DECIMALS_OFFSET,
    MINT_FREEZE_AUTHORITY_OFFSET,
    MINT_INITIALIZED_OFFSET,
    MINT_SUPPLY_OFFSET,
)
from token_launcher.logging_config import get_logger
from token_launcher.models.token import MintAccountSnapshot

logger = get_logger(__name__)


def _read_coption_pubkey(data: bytes, offset: int) -> Optional[str]:
    tag = struct.unpack_from("<I", data, offset)[0]
    if tag != 1:
        return None
    return base58.b58encode(data[offset + 4:offset + 36]).decode("ascii")


def decode_mint_account(data: bytes) -> Optional[MintAccountSnapshot]:
    """Decode a raw mint account.

    Args:
        data: Raw account bytes

    Returns:
        MintAccountSnapshot, or None when the buffer is shorter than a mint
        account and cannot be parsed
    """
    if data is None or len(data) < MINT_ACCOUNT_LEN:
        logger.warning(f"Could not parse mint account data: {0 if data is None else len(data)} bytes")
        return None

    data = bytes(data)
    supply = struct.unpack_from("<Q", data, MINT_SUPPLY_OFFSET)[0]

    return MintAccountSnapshot(
        supply=supply,
        decimals=data[MINT_DECIMALS_OFFSET],
        is_initialized=data[MINT_INITIALIZED_OFFSET] == 1,
        mint_authority=_read_coption_pubkey(data, MINT_AUTHORITY_OFFSET),
        freeze_authority=_read_coption_pubkey(data, MINT_FREEZE_AUTHORITY_OFFSET),
    )
