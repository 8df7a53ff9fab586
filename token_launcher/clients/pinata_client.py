"""Pinata IPFS pinning client."""

from typing import Any, Dict, Optional

import httpx

from token_launcher.config import PinataConfig
from token_launcher.logging_config import get_logger
from token_launcher.utils.errors import ConfigurationError, NetworkError, handle_network_errors

logger = get_logger(__name__)

SERVICE_NAME = "Pinata"


class PinataClient:
    """Uploads JSON documents to Pinata and returns their gateway URI."""

    def __init__(self, config: PinataConfig, timeout: float = 30.0, http_client: Optional[httpx.AsyncClient] = None):
        """
        Args:
            config: Pinata configuration
            timeout: Request timeout in seconds
            http_client: Optional client to use instead of a fresh one per request
        """
        self.config = config
        self.timeout = timeout
        self._http_client = http_client

    @handle_network_errors(SERVICE_NAME)
    async def upload_json(self, data: Dict[str, Any], name: str) -> str:
        """Pin a JSON document.

        Args:
            data: Document to pin
            name: Name shown in the Pinata dashboard

        Returns:
            Gateway URI of the pinned document

        Raises:
            ConfigurationError: If no Pinata JWT is configured
            NetworkError: If the upload fails
        """
        if not self.config.is_configured:
            raise ConfigurationError(
                "Pinata JWT is not configured; set PINATA_JWT to upload metadata",
                details={"setting": "PINATA_JWT"}
            )

        payload = {
            "pinataContent": data,
            "pinataMetadata": {"name": name},
        }
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.config.jwt}",
        }

        logger.info(f"Uploading {name} to Pinata")
        if self._http_client is not None:
            response = await self._http_client.post(self.config.api_url, json=payload, headers=headers)
        else:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(self.config.api_url, json=payload, headers=headers)
        response.raise_for_status()

        try:
            body = response.json()
        except ValueError as e:
            raise NetworkError(f"Pinata returned a response that is not JSON: {e}", service_name=SERVICE_NAME) from e

        ipfs_hash = body.get("IpfsHash") if isinstance(body, dict) else None
        if not ipfs_hash:
            raise NetworkError("Pinata response did not include an IpfsHash", service_name=SERVICE_NAME)

        uri = f"{self.config.gateway}{ipfs_hash}"
        logger.info(f"Metadata pinned at {uri}")
        return uri
