"""Best-effort fetch of off-chain metadata JSON."""

from typing import Optional, Tuple

import httpx
from pydantic import ValidationError as PydanticValidationError

from token_launcher.logging_config import get_logger
from token_launcher.models.token import OffChainMetadata, OffChainStatus

logger = get_logger(__name__)


async def fetch_offchain_metadata(
    uri: str,
    timeout: float = 30.0,
    http_client: Optional[httpx.AsyncClient] = None
) -> Tuple[OffChainStatus, Optional[OffChainMetadata]]:
    """GET a metadata URI and parse it as JSON.

    Never raises for remote problems: transport errors, non-200 responses
    and bodies that are not a JSON object all come back as UNAVAILABLE.

    Args:
        uri: Metadata URI; an empty URI is ABSENT
        timeout: Request timeout in seconds
        http_client: Optional client to use instead of a fresh one

    Returns:
        (status, document) where document is set only when AVAILABLE
    """
    if not uri:
        return OffChainStatus.ABSENT, None

    try:
        if http_client is not None:
            response = await http_client.get(uri, follow_redirects=True)
        else:
            async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as client:
                response = await client.get(uri)
    except httpx.HTTPError as e:
        logger.warning(f"Could not fetch off-chain metadata from {uri}: {e}")
        return OffChainStatus.UNAVAILABLE, None

    if response.status_code != 200:
        logger.warning(f"Off-chain metadata at {uri} returned HTTP {response.status_code}")
        return OffChainStatus.UNAVAILABLE, None

    try:
        document = OffChainMetadata.model_validate(response.json())
    except (ValueError, PydanticValidationError) as e:
        logger.warning(f"Off-chain metadata at {uri} is not a metadata document: {e}")
        return OffChainStatus.UNAVAILABLE, None

    return OffChainStatus.AVAILABLE, document
