"""Unit tests for the Pinata client."""

import json

import httpx
import pytest

from token_launcher.clients.pinata_client import PinataClient
from token_launcher.config import PinataConfig
from token_launcher.utils.errors import ConfigurationError, NetworkError


def pinata(handler, jwt="test-jwt"):
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return PinataClient(PinataConfig(jwt=jwt), http_client=http_client)


class TestPinataClient:
    """Test suite for PinataClient."""

    @pytest.mark.asyncio
    async def test_upload_json(self):
        seen = {}

        def handler(request):
            seen["auth"] = request.headers["Authorization"]
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"IpfsHash": "QmHash", "PinSize": 120})

        uri = await pinata(handler).upload_json({"name": "Test Token"}, "TEST-metadata")

        assert uri == "https://gateway.pinata.cloud/ipfs/QmHash"
        assert seen["auth"] == "Bearer test-jwt"
        assert seen["body"]["pinataMetadata"] == {"name": "TEST-metadata"}
        assert seen["body"]["pinataContent"] == {"name": "Test Token"}

    @pytest.mark.asyncio
    async def test_missing_jwt(self):
        def handler(request):
            raise AssertionError("no request expected")

        with pytest.raises(ConfigurationError):
            await pinata(handler, jwt="").upload_json({}, "TEST-metadata")

    @pytest.mark.asyncio
    async def test_server_error(self):
        client = pinata(lambda request: httpx.Response(500, text="boom"))

        with pytest.raises(NetworkError) as excinfo:
            await client.upload_json({}, "TEST-metadata")
        assert excinfo.value.details["service_name"] == "Pinata"

    @pytest.mark.asyncio
    async def test_missing_hash(self):
        client = pinata(lambda request: httpx.Response(200, json={"error": "nope"}))

        with pytest.raises(NetworkError):
            await client.upload_json({}, "TEST-metadata")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("response", [
        httpx.Response(200, text="<html>gateway timeout</html>"),
        httpx.Response(200, json=["QmHash"]),
    ])
    async def test_malformed_success_body(self, response):
        client = pinata(lambda request: response)

        with pytest.raises(NetworkError) as excinfo:
            await client.upload_json({}, "TEST-metadata")
        assert excinfo.value.details["service_name"] == "Pinata"
