"""Metaplex Token Metadata helpers.

Derives the metadata account address of a mint, decodes the on-chain
Metadata account, and builds the CreateMetadataAccountV3 and
UpdateMetadataAccountV2 instructions. Values are borsh encoded by hand
with `struct`.
"""

import struct
from typing import Callable, List, Optional, Sequence, TypeVar

from solders.instruction import AccountMeta, Instruction
from solders.pubkey import Pubkey
from solders.system_program import ID as SYSTEM_PROGRAM
from solders.sysvar import RENT

from token_launcher.constants import (
    CREATE_METADATA_ACCOUNT_V3,
    MAX_NAME_LENGTH,
    MAX_SYMBOL_LENGTH,
    MAX_URI_LENGTH,
    METADATA_PROGRAM_ID,
    UPDATE_METADATA_ACCOUNT_V2,
)
from token_launcher.models.token import Creator, TokenMetadata
from token_launcher.utils.errors import ValidationError

T = TypeVar('T')

METADATA_PROGRAM = Pubkey.from_string(METADATA_PROGRAM_ID)


def find_metadata_pda(mint: Pubkey) -> Pubkey:
    """
    Derive the Metaplex metadata PDA for a token mint.

    Seeds: ['metadata', metadata_program, mint]
    """
    metadata_pda, _ = Pubkey.find_program_address(
        [b"metadata", bytes(METADATA_PROGRAM), bytes(mint)],
        METADATA_PROGRAM,
    )
    return metadata_pda


class _BorshReader:
    """Sequential reader over a borsh encoded buffer."""

    def __init__(self, data: bytes):
        self.data = bytes(data)
        self.offset = 0

    @property
    def exhausted(self) -> bool:
        return self.offset >= len(self.data)

    def _take(self, size: int) -> bytes:
        end = self.offset + size
        if end > len(self.data):
            raise ValueError(f"Metadata account truncated at offset {self.offset}")
        chunk = self.data[self.offset:end]
        self.offset = end
        return chunk

    def u8(self) -> int:
        return self._take(1)[0]

    def u16(self) -> int:
        return struct.unpack("<H", self._take(2))[0]

    def u32(self) -> int:
        return struct.unpack("<I", self._take(4))[0]

    def bool(self) -> bool:
        return self.u8() != 0

    def pubkey(self) -> str:
        return str(Pubkey.from_bytes(self._take(32)))

    def string(self) -> str:
        length = self.u32()
        # Metaplex pads strings to their max length with NUL bytes
        return self._take(length).decode("utf-8", errors="replace").rstrip("\x00")

    def option(self, read: Callable[[], T]) -> Optional[T]:
        if self.exhausted:
            return None
        return read() if self.u8() == 1 else None


def decode_metadata_account(data: bytes) -> TokenMetadata:
    """Decode a Metaplex Metadata account.

    Args:
        data: Raw account bytes

    Returns:
        TokenMetadata with the fields up to and including the token standard

    Raises:
        ValueError: If the buffer is too short for the mandatory fields
    """
    reader = _BorshReader(data)
    reader.u8()  # account key
    update_authority = reader.pubkey()
    mint = reader.pubkey()
    name = reader.string()
    symbol = reader.string()
    uri = reader.string()
    seller_fee_basis_points = reader.u16()

    creators: List[Creator] = []
    if reader.u8() == 1:
        for _ in range(reader.u32()):
            creators.append(Creator(address=reader.pubkey(), verified=reader.bool(), share=reader.u8()))

    primary_sale_happened = reader.bool()
    is_mutable = reader.bool()
    reader.option(reader.u8)  # edition nonce
    token_standard = reader.option(reader.u8)

    return TokenMetadata(
        update_authority=update_authority,
        mint=mint,
        name=name,
        symbol=symbol,
        uri=uri,
        seller_fee_basis_points=seller_fee_basis_points,
        creators=creators,
        primary_sale_happened=primary_sale_happened,
        is_mutable=is_mutable,
        token_standard=token_standard,
    )


def _encode_string(value: str, limit: int, field: str) -> bytes:
    encoded = value.encode("utf-8")
    if len(encoded) > limit:
        raise ValidationError(f"{field} must be at most {limit} bytes", field=field)
    return struct.pack("<I", len(encoded)) + encoded


def _encode_creators(creators: Optional[Sequence[Creator]]) -> bytes:
    if not creators:
        return b"\x00"
    out = b"\x01" + struct.pack("<I", len(creators))
    for creator in creators:
        out += bytes(Pubkey.from_string(creator.address))
        out += struct.pack("<?B", creator.verified, creator.share)
    return out


def _encode_data_v2(
    name: str,
    symbol: str,
    uri: str,
    seller_fee_basis_points: int,
    creators: Optional[Sequence[Creator]]
) -> bytes:
    return (
        _encode_string(name, MAX_NAME_LENGTH, "name")
        + _encode_string(symbol, MAX_SYMBOL_LENGTH, "symbol")
        + _encode_string(uri, MAX_URI_LENGTH, "uri")
        + struct.pack("<H", seller_fee_basis_points)
        + _encode_creators(creators)
        + b"\x00"  # collection: None
        + b"\x00"  # uses: None
    )


def create_metadata_account_v3_instruction(
    mint: Pubkey,
    mint_authority: Pubkey,
    payer: Pubkey,
    update_authority: Pubkey,
    name: str,
    symbol: str,
    uri: str,
    seller_fee_basis_points: int = 0,
    creators: Optional[Sequence[Creator]] = None,
    is_mutable: bool = True
) -> Instruction:
    """Build a CreateMetadataAccountV3 instruction for a fungible mint.

    Args:
        mint: Mint the metadata describes
        mint_authority: Current mint authority (signer)
        payer: Fee and rent payer (signer)
        update_authority: Authority allowed to update the metadata (signer)
        name: Token name (max 32 bytes)
        symbol: Token symbol (max 10 bytes)
        uri: Off-chain metadata URI (max 200 bytes)
        seller_fee_basis_points: Royalty in basis points
        creators: Optional creator list
        is_mutable: Whether the metadata may be updated later

    Returns:
        The instruction
    """
    data = (
        struct.pack("<B", CREATE_METADATA_ACCOUNT_V3)
        + _encode_data_v2(name, symbol, uri, seller_fee_basis_points, creators)
        + struct.pack("<?", is_mutable)
        + b"\x00"  # collection details: None
    )
    accounts = [
        AccountMeta(pubkey=find_metadata_pda(mint), is_signer=False, is_writable=True),
        AccountMeta(pubkey=mint, is_signer=False, is_writable=False),
        AccountMeta(pubkey=mint_authority, is_signer=True, is_writable=False),
        AccountMeta(pubkey=payer, is_signer=True, is_writable=True),
        AccountMeta(pubkey=update_authority, is_signer=True, is_writable=False),
        AccountMeta(pubkey=SYSTEM_PROGRAM, is_signer=False, is_writable=False),
        AccountMeta(pubkey=RENT, is_signer=False, is_writable=False),
    ]
    return Instruction(METADATA_PROGRAM, data, accounts)


def update_metadata_account_v2_instruction(
    mint: Pubkey,
    update_authority: Pubkey,
    name: str,
    symbol: str,
    uri: str,
    seller_fee_basis_points: int = 0,
    creators: Optional[Sequence[Creator]] = None,
    new_update_authority: Optional[Pubkey] = None,
    primary_sale_happened: Optional[bool] = None,
    is_mutable: Optional[bool] = None
) -> Instruction:
    """Build an UpdateMetadataAccountV2 instruction replacing the metadata data.

    Optional arguments left as None keep their on-chain value.
    """
    data = struct.pack("<B", UPDATE_METADATA_ACCOUNT_V2)
    data += b"\x01" + _encode_data_v2(name, symbol, uri, seller_fee_basis_points, creators)
    if new_update_authority is not None:
        data += b"\x01" + bytes(new_update_authority)
    else:
        data += b"\x00"
    for flag in (primary_sale_happened, is_mutable):
        data += b"\x00" if flag is None else struct.pack("<B?", 1, flag)

    accounts = [
        AccountMeta(pubkey=find_metadata_pda(mint), is_signer=False, is_writable=True),
        AccountMeta(pubkey=update_authority, is_signer=True, is_writable=False),
    ]
    return Instruction(METADATA_PROGRAM, data, accounts)
