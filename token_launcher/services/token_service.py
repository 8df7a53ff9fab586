"""
Token lifecycle service.

Creates tokens and updates their metadata through the Solana SDK, runs
mint and revoke through spl-token, and keeps the local token records in
step with every successful operation.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from solders.keypair import Keypair
from solders.pubkey import Pubkey
from solders.system_program import CreateAccountParams, create_account
from spl.token.constants import TOKEN_PROGRAM_ID
from spl.token.instructions import InitializeMintParams, initialize_mint

from token_launcher.clients.pinata_client import PinataClient
from token_launcher.clients.solana_client import TokenChainClient
from token_launcher.config import TokenDefaults
from token_launcher.constants import DEFAULT_IMAGE_URL, MINT_ACCOUNT_LEN
from token_launcher.logging_config import get_logger, log_with_context
from token_launcher.metaplex import create_metadata_account_v3_instruction, update_metadata_account_v2_instruction
from token_launcher.models.token import (
    Creator,
    ResolvedMetadata,
    TokenRecord,
    TokenUpdateRequest,
    merge_update,
    utc_now,
)
from token_launcher.services.authority_service import AuthorityKind, OperationResult, SplTokenCli
from token_launcher.store.records import TokenRecordStore
from token_launcher.utils.errors import ImmutableMetadataError, NotFoundError, UnauthorizedError, ValidationError
from token_launcher.utils.validation import (
    validate_amount,
    validate_name,
    validate_public_key,
    validate_symbol,
    validate_token_config,
)

logger = get_logger(__name__)

BASE_ATTRIBUTES = [
    {"trait_type": "Type", "value": "Utility Token"},
    {"trait_type": "Network", "value": "Solana"},
    {"trait_type": "Standard", "value": "SPL Token"},
]


def build_metadata_document(
    name: str,
    symbol: str,
    description: str,
    image: str,
    creator: str,
    external_url: Optional[str] = None,
    extra_attributes: Iterable[Dict[str, str]] = ()
) -> Dict[str, Any]:
    """Off-chain metadata JSON for a fungible token."""
    document: Dict[str, Any] = {
        "name": name,
        "symbol": symbol,
        "description": description,
        "image": image,
    }
    if external_url:
        document["external_url"] = external_url
    document["attributes"] = [dict(a) for a in BASE_ATTRIBUTES] + list(extra_attributes)
    document["properties"] = {
        "category": "fungible",
        "creators": [{"address": creator, "share": 100}],
    }
    return document


@dataclass
class MetadataUpdateResult:
    """Outcome of a metadata update."""

    signature: str
    metadata_uri: str
    resolved: ResolvedMetadata
    record: Optional[TokenRecord] = None


@dataclass
class MintResult:
    """Outcome of a mint, including the account and balance steps."""

    account: OperationResult
    mint: OperationResult
    balance: Optional[OperationResult] = None
    record: Optional[TokenRecord] = None

    @property
    def balance_text(self) -> Optional[str]:
        if self.balance is None or not self.balance.success:
            return None
        return self.balance.output


@dataclass
class RevokeResult:
    """Per-authority results of a revoke request."""

    results: Dict[AuthorityKind, OperationResult] = field(default_factory=dict)
    record: Optional[TokenRecord] = None

    @property
    def all_succeeded(self) -> bool:
        return bool(self.results) and all(r.success for r in self.results.values())


class TokenService:
    """Coordinates the chain, Pinata, spl-token and the record store."""

    def __init__(
        self,
        chain: TokenChainClient,
        pinata: PinataClient,
        store: TokenRecordStore,
        spl_token: Optional[SplTokenCli] = None,
        defaults: Optional[TokenDefaults] = None
    ):
        self.chain = chain
        self.pinata = pinata
        self.store = store
        self.spl_token = spl_token or SplTokenCli()
        self.defaults = defaults or TokenDefaults()

    @property
    def network(self):
        return self.chain.network

    async def create_token(
        self,
        token_config: Dict[str, Any],
        payer: Keypair,
        wallet_file: Optional[str] = None
    ) -> TokenRecord:
        """Create a mint with Metaplex metadata and record it locally.

        The mint authority is the payer and there is no freeze authority.
        The initial supply is recorded only; minting is a separate step.

        Args:
            token_config: name, symbol, description, decimals, initial_supply,
                and optional image and external_url
            payer: Wallet paying for and owning the token
            wallet_file: Name of the wallet file, stored in the record

        Returns:
            The saved TokenRecord

        Raises:
            ValidationError: If the configuration is invalid
            ConfigurationError: If Pinata is not configured
            NetworkError: If the upload or the transaction fails
        """
        config = validate_token_config(token_config)
        image = config.get("image") or DEFAULT_IMAGE_URL
        external_url = config.get("external_url") or None
        creator = payer.pubkey()

        document = build_metadata_document(
            name=config["name"],
            symbol=config["symbol"],
            description=config["description"],
            image=image,
            creator=str(creator),
            external_url=external_url,
            extra_attributes=[{"trait_type": "Decimals", "value": str(config["decimals"])}],
        )
        metadata_uri = await self.pinata.upload_json(document, f"{config['symbol']}-metadata")

        mint_keypair = Keypair()
        mint = mint_keypair.pubkey()
        lamports = await self.chain.get_minimum_balance_for_rent_exemption(MINT_ACCOUNT_LEN)

        instructions = [
            create_account(CreateAccountParams(
                from_pubkey=creator,
                to_pubkey=mint,
                lamports=lamports,
                space=MINT_ACCOUNT_LEN,
                owner=TOKEN_PROGRAM_ID,
            )),
            initialize_mint(InitializeMintParams(
                program_id=TOKEN_PROGRAM_ID,
                mint=mint,
                decimals=config["decimals"],
                mint_authority=creator,
                freeze_authority=None,
            )),
            create_metadata_account_v3_instruction(
                mint=mint,
                mint_authority=creator,
                payer=creator,
                update_authority=creator,
                name=config["name"],
                symbol=config["symbol"],
                uri=metadata_uri,
                seller_fee_basis_points=self.defaults.seller_fee_basis_points,
                creators=[Creator(address=str(creator), verified=True, share=100)],
                is_mutable=self.defaults.is_mutable,
            ),
        ]
        signature = await self.chain.send_and_confirm(instructions, payer, [mint_keypair])
        log_with_context(logger, "info", "Token created", mint=str(mint), signature=signature)

        record = TokenRecord(
            name=config["name"],
            symbol=config["symbol"],
            description=config["description"],
            mint_address=str(mint),
            metadata_uri=metadata_uri,
            image_uri=image,
            external_url=external_url,
            decimals=config["decimals"],
            initial_supply=config["initial_supply"],
            creator=str(creator),
            create_transaction=signature,
            network=self.network,
            wallet_file=wallet_file,
        )
        return self.store.load(self.store.save(record))

    async def update_metadata(
        self,
        mint_address: str,
        request: TokenUpdateRequest,
        payer: Keypair
    ) -> MetadataUpdateResult:
        """Replace a token's metadata with the merged update.

        Raises:
            ValidationError: If the address is malformed or nothing is requested
            NotFoundError: If the mint has no metadata account
            UnauthorizedError: If the wallet is not the update authority
            ImmutableMetadataError: If the metadata is not mutable
        """
        if not validate_public_key(mint_address):
            raise ValidationError(f"Invalid mint address: {mint_address}", field="mint_address")
        if request.is_empty:
            raise ValidationError("No metadata fields selected for update", field="fields")
        if request.name:
            validate_name(request.name)
        if request.symbol:
            validate_symbol(request.symbol)

        current = await self.chain.get_metadata(mint_address)
        if current is None:
            raise NotFoundError(
                f"No metadata found for token {mint_address}",
                resource_type="metadata",
                resource_id=mint_address
            )

        wallet = str(payer.pubkey())
        if current.update_authority != wallet:
            raise UnauthorizedError(
                "You are not the update authority for this token",
                required_authority=current.update_authority,
                wallet=wallet
            )
        if not current.is_mutable:
            raise ImmutableMetadataError(mint_address)

        record = self.store.load_by_mint_address(mint_address)
        resolved = merge_update(request, current, record)

        document = build_metadata_document(
            name=resolved.name,
            symbol=resolved.symbol,
            description=resolved.description,
            image=resolved.image,
            creator=wallet,
            external_url=resolved.external_url,
            extra_attributes=[{"trait_type": "Last Updated", "value": utc_now().date().isoformat()}],
        )
        metadata_uri = await self.pinata.upload_json(document, f"{resolved.symbol}-updated-metadata")

        instruction = update_metadata_account_v2_instruction(
            mint=Pubkey.from_string(mint_address),
            update_authority=payer.pubkey(),
            name=resolved.name,
            symbol=resolved.symbol,
            uri=metadata_uri,
            seller_fee_basis_points=current.seller_fee_basis_points,
            creators=current.creators,
        )
        signature = await self.chain.send_and_confirm([instruction], payer)
        log_with_context(logger, "info", "Metadata updated", mint=mint_address, signature=signature)

        changes = request.record_changes()
        changes.update({
            "metadataUri": metadata_uri,
            "lastUpdateTransaction": signature,
            "lastUpdateDate": utc_now(),
        })
        updated = self.store.patch(mint_address, changes)
        return MetadataUpdateResult(
            signature=signature,
            metadata_uri=metadata_uri,
            resolved=resolved,
            record=updated,
        )

    def record_mint(self, mint_address: str, amount: int) -> Optional[TokenRecord]:
        """Add a completed mint to the token record; None if the token has no record."""
        record = self.store.load_by_mint_address(mint_address)
        if record is None:
            return None
        return self.store.patch(mint_address, {
            "totalMinted": record.total_minted + amount,
            "lastMintAmount": amount,
            "lastMintDate": utc_now(),
        })

    def record_revocations(self, mint_address: str, results: Dict[AuthorityKind, OperationResult]) -> Optional[TokenRecord]:
        """Mark successfully revoked authorities on the token record."""
        changes: Dict[str, Any] = {}
        mint_result = results.get(AuthorityKind.MINT)
        if mint_result is not None and mint_result.success:
            changes["mintAuthorityRevoked"] = True
            changes["mintRevokeTransaction"] = mint_result.signature
        freeze_result = results.get(AuthorityKind.FREEZE)
        if freeze_result is not None and freeze_result.success:
            changes["freezeAuthorityRevoked"] = True
            changes["freezeRevokeTransaction"] = freeze_result.signature

        if not changes:
            return self.store.load_by_mint_address(mint_address)
        changes["lastRevokeDate"] = utc_now()
        return self.store.patch(mint_address, changes)

    async def mint_tokens(
        self,
        mint_address: str,
        amount: Any,
        keypair_path: Union[str, Path],
        owner: str,
        recipient: Optional[str] = None
    ) -> MintResult:
        """Mint tokens through spl-token and record the mint.

        Args:
            mint_address: Token to mint
            amount: Whole number of tokens
            keypair_path: Wallet file holding the mint authority
            owner: Public key of that wallet
            recipient: Optional owner of the receiving account

        Raises:
            ValidationError: If the address, recipient or amount is invalid
            ExternalProcessError: If the mint command fails
        """
        if not validate_public_key(mint_address):
            raise ValidationError(f"Invalid mint address: {mint_address}", field="mint_address")
        if recipient and not validate_public_key(recipient):
            raise ValidationError(f"Invalid recipient address: {recipient}", field="recipient")
        amount = validate_amount(amount)

        account = await self.spl_token.create_associated_account(
            mint_address, self.network, keypair_path, owner=recipient
        )
        if not account.success:
            logger.warning(f"Associated account creation failed, continuing: {account.raw_diagnostic}")

        mint = await self.spl_token.mint(mint_address, amount, self.network, keypair_path, recipient=recipient)
        mint.raise_for_failure()

        balance = await self.spl_token.balance(mint_address, self.network, recipient or owner)
        if not balance.success:
            logger.warning(f"Could not check balance: {balance.raw_diagnostic}")

        return MintResult(
            account=account,
            mint=mint,
            balance=balance,
            record=self.record_mint(mint_address, amount),
        )

    async def revoke_authorities(
        self,
        mint_address: str,
        authorities: List[AuthorityKind],
        keypair_path: Union[str, Path]
    ) -> RevokeResult:
        """Revoke each selected authority independently and record the successes."""
        if not validate_public_key(mint_address):
            raise ValidationError(f"Invalid mint address: {mint_address}", field="mint_address")
        if not authorities:
            raise ValidationError("Select at least one authority to revoke", field="authorities")

        outcome = RevokeResult()
        for authority in authorities:
            authority = AuthorityKind(authority)
            outcome.results[authority] = await self.spl_token.revoke_authority(
                mint_address, authority, self.network, keypair_path
            )

        outcome.record = self.record_revocations(mint_address, outcome.results)
        return outcome
