"""
Token data models for the Token Launcher.

This module defines Pydantic models for the locally persisted token record,
metadata update requests, and the pieces of a token inspection report.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from token_launcher.config import Network
from token_launcher.constants import DEFAULT_IMAGE_URL, TOKEN_STANDARD_NAMES
from token_launcher.utils.validation import validate_public_key

# Flags that can only ever go from False to True
REVOCATION_FLAGS = {
    "mintAuthorityRevoked": "mint_authority_revoked",
    "freezeAuthorityRevoked": "freeze_authority_revoked",
}


def utc_now() -> datetime:
    """Current time as an aware UTC datetime without microseconds."""
    return datetime.now(timezone.utc).replace(microsecond=0)


class TokenRecord(BaseModel):
    """
    Model for the JSON document stored for every created token.

    JSON keys are camelCase; unknown keys found on disk are kept.
    """
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    name: str
    symbol: str
    description: str = ""
    mint_address: str = Field(alias="mintAddress")
    metadata_uri: Optional[str] = Field(None, alias="metadataUri")
    image_uri: Optional[str] = Field(None, alias="imageUri")
    external_url: Optional[str] = Field(None, alias="externalUrl")
    decimals: int = Field(0, ge=0, le=18)
    initial_supply: int = Field(0, ge=0, alias="initialSupply")
    total_minted: int = Field(0, ge=0, alias="totalMinted")
    last_mint_amount: Optional[int] = Field(None, ge=0, alias="lastMintAmount")
    creator: Optional[str] = None
    create_transaction: Optional[str] = Field(None, alias="createTransaction")
    last_update_transaction: Optional[str] = Field(None, alias="lastUpdateTransaction")
    mint_revoke_transaction: Optional[str] = Field(None, alias="mintRevokeTransaction")
    freeze_revoke_transaction: Optional[str] = Field(None, alias="freezeRevokeTransaction")
    network: Network = Network.DEVNET
    mint_authority_revoked: bool = Field(False, alias="mintAuthorityRevoked")
    freeze_authority_revoked: bool = Field(False, alias="freezeAuthorityRevoked")
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    last_update_date: Optional[datetime] = Field(None, alias="lastUpdateDate")
    last_mint_date: Optional[datetime] = Field(None, alias="lastMintDate")
    last_revoke_date: Optional[datetime] = Field(None, alias="lastRevokeDate")
    wallet_file: Optional[str] = Field(None, alias="walletFile")
    tool_version: Optional[str] = Field(None, alias="toolVersion")

    @field_validator("mint_address")
    @classmethod
    def check_mint_address(cls, value: str) -> str:
        if not validate_public_key(value):
            raise ValueError(f"Invalid mint address: {value}")
        return value

    @field_validator("network", mode="before")
    @classmethod
    def coerce_network(cls, value: Any) -> Network:
        return Network.from_value(value)

    @classmethod
    def alias_for(cls, key: str) -> str:
        """Map a field name or alias to the JSON key used on disk."""
        field_info = cls.model_fields.get(key)
        if field_info is not None and field_info.alias:
            return field_info.alias
        return key

    def to_json_dict(self) -> Dict[str, Any]:
        """Serialize to the on-disk JSON shape."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def patched(self, changes: Dict[str, Any]) -> "TokenRecord":
        """
        Overlay changes on this record and return the new record.

        Keys may be field names or JSON aliases. None values are ignored so
        a patch never erases history, the mint address never changes, and
        revocation flags stay True once set.
        """
        data = self.model_dump(by_alias=True)
        for key, value in changes.items():
            if value is None:
                continue
            data[self.alias_for(key)] = value

        data["mintAddress"] = self.mint_address
        for alias, field_name in REVOCATION_FLAGS.items():
            data[alias] = getattr(self, field_name) or bool(data.get(alias))

        return TokenRecord.model_validate(data)

    @property
    def display_name(self) -> str:
        """Get a display name for the token."""
        return f"{self.name} ({self.symbol})"


class TokenUpdateRequest(BaseModel):
    """
    Metadata fields a user asked to change. Every field is optional;
    unset fields keep their current value.
    """
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = None
    symbol: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None
    external_url: Optional[str] = Field(None, alias="externalUrl")

    def changed_fields(self) -> List[str]:
        """Names of the fields that carry a new value."""
        return [name for name, value in self if value]

    @property
    def is_empty(self) -> bool:
        return not self.changed_fields()

    def record_changes(self) -> Dict[str, Any]:
        """Changes to apply to the local token record."""
        changes: Dict[str, Any] = {}
        if self.name:
            changes["name"] = self.name
        if self.symbol:
            changes["symbol"] = self.symbol
        if self.description:
            changes["description"] = self.description
        if self.image:
            changes["imageUri"] = self.image
        if self.external_url:
            changes["externalUrl"] = self.external_url
        return changes


class Creator(BaseModel):
    """A Metaplex creator entry."""
    address: str
    verified: bool = False
    share: int = Field(0, ge=0, le=100)


class TokenMetadata(BaseModel):
    """
    Model for the on-chain Metaplex metadata of a mint.
    """
    update_authority: str
    mint: str
    name: str
    symbol: str
    uri: str = ""
    seller_fee_basis_points: int = 0
    creators: List[Creator] = Field(default_factory=list)
    primary_sale_happened: bool = False
    is_mutable: bool = True
    token_standard: Optional[int] = None

    @property
    def token_standard_name(self) -> str:
        if self.token_standard is None:
            return "Unknown"
        return TOKEN_STANDARD_NAMES.get(self.token_standard, "Unknown")

    @property
    def seller_fee_percent(self) -> float:
        return self.seller_fee_basis_points / 100


class ResolvedMetadata(BaseModel):
    """Final metadata values after an update request is merged."""
    name: str
    symbol: str
    description: str
    image: str
    external_url: Optional[str] = None


def merge_update(
    request: TokenUpdateRequest,
    current: TokenMetadata,
    record: Optional[TokenRecord] = None
) -> ResolvedMetadata:
    """
    Merge an update request with the current on-chain and local values.

    Precedence per field: requested value, then the current value (on-chain
    for name and symbol, the local record for the rest), then a default.
    """
    description = record.description if record else None
    image = record.image_uri if record else None
    external_url = record.external_url if record else None

    return ResolvedMetadata(
        name=request.name or current.name,
        symbol=request.symbol or current.symbol,
        description=request.description or description or "Updated token metadata",
        image=request.image or image or DEFAULT_IMAGE_URL,
        external_url=request.external_url or external_url or None,
    )


class MintAccountSnapshot(BaseModel):
    """
    Values read from a raw mint account at inspection time.

    Decoded at fixed offsets, so this is only as accurate as the layout
    assumption behind it.
    """
    model_config = ConfigDict(populate_by_name=True)

    supply: int = Field(ge=0)
    decimals: int = Field(ge=0, le=255)
    is_initialized: bool = Field(alias="isInitialized")
    mint_authority: Optional[str] = Field(None, alias="mintAuthority")
    freeze_authority: Optional[str] = Field(None, alias="freezeAuthority")

    @property
    def ui_supply(self) -> str:
        """Supply with the decimal point applied."""
        if self.decimals == 0:
            return str(self.supply)
        whole, fraction = divmod(self.supply, 10 ** self.decimals)
        return f"{whole}.{fraction:0{self.decimals}d}".rstrip("0").rstrip(".")


class OffChainMetadata(BaseModel):
    """
    Model for the JSON document a metadata URI points to.
    """
    model_config = ConfigDict(extra="allow")

    name: Optional[str] = None
    symbol: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None
    external_url: Optional[str] = None
    attributes: List[Dict[str, Any]] = Field(default_factory=list)


class OffChainStatus(str, Enum):
    """Outcome of the off-chain metadata fetch."""
    ABSENT = "absent"
    AVAILABLE = "available"
    UNAVAILABLE = "unavailable"


class TokenInspection(BaseModel):
    """
    Composite view of a token: mint facts, optional on-chain metadata and
    optional off-chain JSON, each present or absent on its own.
    """
    mint_address: str
    network: Network
    exists: bool = True
    mint: Optional[MintAccountSnapshot] = None
    metadata: Optional[TokenMetadata] = None
    offchain_status: OffChainStatus = OffChainStatus.ABSENT
    offchain: Optional[OffChainMetadata] = None

    @property
    def metadata_present(self) -> bool:
        return self.metadata is not None

    @property
    def mint_decoded(self) -> bool:
        return self.mint is not None
