"""Unit tests for token inspection."""

import httpx
import pytest

from token_launcher.models.token import OffChainStatus
from token_launcher.services.inspection_service import inspect_token
from token_launcher.utils.errors import NotFoundError, ValidationError
from tests.fixtures.common import build_mint_account


def http_client(handler):
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class TestInspectToken:
    """Test suite for inspect_token."""

    @pytest.mark.asyncio
    async def test_mint_without_metadata(self, mock_chain_client, mint_address):
        """A mint without a metadata account is a valid outcome."""
        mock_chain_client.get_account_data.return_value = build_mint_account(supply=10, decimals=1)
        mock_chain_client.get_metadata.return_value = None

        report = await inspect_token(mock_chain_client, mint_address)

        assert report.exists is True
        assert report.metadata_present is False
        assert report.mint.supply == 10
        assert report.offchain_status is OffChainStatus.ABSENT
        assert report.offchain is None

    @pytest.mark.asyncio
    async def test_missing_mint_account(self, mock_chain_client, mint_address):
        mock_chain_client.get_account_data.return_value = None

        with pytest.raises(NotFoundError):
            await inspect_token(mock_chain_client, mint_address)

    @pytest.mark.asyncio
    async def test_invalid_address(self, mock_chain_client):
        with pytest.raises(ValidationError):
            await inspect_token(mock_chain_client, "not-an-address")
        mock_chain_client.get_account_data.assert_not_called()

    @pytest.mark.asyncio
    async def test_undecodable_mint_still_reports(self, mock_chain_client, mint_address):
        mock_chain_client.get_account_data.return_value = b"\x00" * 10

        report = await inspect_token(mock_chain_client, mint_address)

        assert report.exists is True
        assert report.mint_decoded is False

    @pytest.mark.asyncio
    async def test_offchain_404_is_unavailable(self, mock_chain_client, mint_address, sample_metadata):
        """A 404 marks only the off-chain section unavailable."""
        mock_chain_client.get_account_data.return_value = build_mint_account(supply=5)
        mock_chain_client.get_metadata.return_value = sample_metadata

        async with http_client(lambda request: httpx.Response(404)) as client:
            report = await inspect_token(mock_chain_client, mint_address, http_client=client)

        assert report.metadata_present is True
        assert report.metadata.name == "Test Token"
        assert report.mint.supply == 5
        assert report.offchain_status is OffChainStatus.UNAVAILABLE
        assert report.offchain is None

    @pytest.mark.asyncio
    async def test_offchain_transport_error_is_unavailable(self, mock_chain_client, mint_address, sample_metadata):
        mock_chain_client.get_account_data.return_value = build_mint_account()
        mock_chain_client.get_metadata.return_value = sample_metadata

        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        async with http_client(refuse) as client:
            report = await inspect_token(mock_chain_client, mint_address, http_client=client)

        assert report.offchain_status is OffChainStatus.UNAVAILABLE

    @pytest.mark.asyncio
    async def test_offchain_non_json_is_unavailable(self, mock_chain_client, mint_address, sample_metadata):
        mock_chain_client.get_account_data.return_value = build_mint_account()
        mock_chain_client.get_metadata.return_value = sample_metadata

        async with http_client(lambda request: httpx.Response(200, text="<html></html>")) as client:
            report = await inspect_token(mock_chain_client, mint_address, http_client=client)

        assert report.offchain_status is OffChainStatus.UNAVAILABLE

    @pytest.mark.asyncio
    async def test_offchain_available(self, mock_chain_client, mint_address, sample_metadata):
        mock_chain_client.get_account_data.return_value = build_mint_account()
        mock_chain_client.get_metadata.return_value = sample_metadata
        document = {
            "name": "Test Token",
            "description": "From IPFS",
            "image": "https://example.com/i.png",
            "attributes": [{"trait_type": "Type", "value": "Utility Token"}],
            "properties": {"category": "fungible"},
        }

        async with http_client(lambda request: httpx.Response(200, json=document)) as client:
            report = await inspect_token(mock_chain_client, mint_address, http_client=client)

        assert report.offchain_status is OffChainStatus.AVAILABLE
        assert report.offchain.description == "From IPFS"
        assert report.offchain.attributes[0]["value"] == "Utility Token"

    @pytest.mark.asyncio
    async def test_metadata_without_uri(self, mock_chain_client, mint_address, sample_metadata):
        mock_chain_client.get_account_data.return_value = build_mint_account()
        mock_chain_client.get_metadata.return_value = sample_metadata.model_copy(update={"uri": ""})

        report = await inspect_token(mock_chain_client, mint_address)

        assert report.metadata_present is True
        assert report.offchain_status is OffChainStatus.ABSENT
