"""Tests for the PixelLab HTTP adapter."""

import httpx
import pytest

from pixellab_mcp.errors import PixelLabTransportError
from pixellab_mcp.pixellab_client import PixelLabClient
from tests.conftest import TEST_BASE_URL, RecordingTransport


def make_client(handler=None):
    transport = RecordingTransport(handler)
    return PixelLabClient(api_key="secret", base_url=TEST_BASE_URL, transport=transport), transport


class TestPixelLabClient:

    def test_requires_api_key(self):
        with pytest.raises(ValueError):
            PixelLabClient(api_key="", base_url=TEST_BASE_URL)

    @pytest.mark.asyncio
    async def test_sends_bearer_token_and_json(self):
        client, transport = make_client()

        await client.request("POST", "/balance", json={"a": 1, "skip": None})

        request = transport.requests[0]
        assert request.headers["authorization"] == "Bearer secret"
        assert request.headers["content-type"] == "application/json"
        assert str(request.url) == f"{TEST_BASE_URL}/balance"
        assert transport.last_json == {"a": 1}

    @pytest.mark.asyncio
    async def test_error_status_is_returned_not_raised(self):
        client, _ = make_client(lambda request: httpx.Response(500, json={"message": "boom"}))

        response = await client.request("GET", "/characters/x")

        assert not response.ok
        assert response.status_code == 500
        assert response.data == {"message": "boom"}

    @pytest.mark.asyncio
    async def test_text_body_is_exposed(self):
        client, _ = make_client(
            lambda request: httpx.Response(200, text="# docs", headers={"content-type": "text/plain"})
        )

        response = await client.request("GET", "/llms.txt")

        assert response.data is None
        assert response.text == "# docs"

    @pytest.mark.asyncio
    async def test_redirect_is_not_followed(self):
        client, transport = make_client(
            lambda request: httpx.Response(302, headers={"location": "https://cdn.test/c.zip"})
        )

        response = await client.request("GET", "/characters/c/zip")

        assert response.is_redirect
        assert response.headers["location"] == "https://cdn.test/c.zip"
        assert len(transport.requests) == 1

    @pytest.mark.asyncio
    async def test_timeout_raises_transport_error(self):
        def handler(request):
            raise httpx.ConnectTimeout("timed out", request=request)

        client, _ = make_client(handler)

        with pytest.raises(PixelLabTransportError) as exc_info:
            await client.request("GET", "/balance")

        assert exc_info.value.method == "GET"
        assert exc_info.value.url.endswith("/balance")
