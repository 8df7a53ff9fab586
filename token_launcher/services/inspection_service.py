"""
Token inspection.

Builds a composite view of a mint: the raw mint account facts, its
Metaplex metadata and the off-chain JSON the metadata points to. Only a
missing mint account aborts; every later section may be absent.
"""

from typing import Optional

import httpx

from token_launcher.clients.offchain import fetch_offchain_metadata
from token_launcher.clients.solana_client import TokenChainClient
from token_launcher.decoder import decode_mint_account
from token_launcher.logging_config import get_logger
from token_launcher.models.token import OffChainStatus, TokenInspection
from token_launcher.utils.errors import NotFoundError, ValidationError
from token_launcher.utils.validation import validate_public_key

logger = get_logger(__name__)


async def inspect_token(
    chain: TokenChainClient,
    mint_address: str,
    http_timeout: float = 30.0,
    http_client: Optional[httpx.AsyncClient] = None
) -> TokenInspection:
    """Inspect a token on the chain client's network.

    Args:
        chain: Chain client bound to the network to inspect
        mint_address: Mint to inspect
        http_timeout: Timeout for the off-chain fetch
        http_client: Optional HTTP client for the off-chain fetch

    Returns:
        TokenInspection report

    Raises:
        ValidationError: If the mint address is malformed
        NotFoundError: If no account exists at the mint address
        NetworkError: If the RPC node cannot be reached
    """
    if not validate_public_key(mint_address):
        raise ValidationError(f"Invalid mint address: {mint_address}", field="mint_address")

    data = await chain.get_account_data(mint_address)
    if data is None:
        raise NotFoundError(
            f"Token not found on {chain.network.value}: {mint_address}",
            resource_type="mint",
            resource_id=mint_address
        )

    report = TokenInspection(
        mint_address=mint_address,
        network=chain.network,
        exists=True,
        mint=decode_mint_account(data),
    )

    metadata = await chain.get_metadata(mint_address)
    if metadata is None:
        return report
    report.metadata = metadata

    if metadata.uri:
        status, document = await fetch_offchain_metadata(metadata.uri, timeout=http_timeout, http_client=http_client)
        report.offchain_status = status
        report.offchain = document
    else:
        report.offchain_status = OffChainStatus.ABSENT

    logger.info(
        f"Inspected {mint_address}: metadata={report.metadata_present}, offchain={report.offchain_status.value}"
    )
    return report
