"""Tests for the main KongClient class."""

import httpx
import pytest

from kong_client import KongClient
from kong_client.config import KongClientConfig
from kong_client.endpoints import ConsumerGroupsClient
from kong_client.http import ADMIN_TOKEN_HEADER, AsyncHTTPClient

from conftest import BASE_URL


class TestClientInitialization:
    """Tests for KongClient initialization."""

    def test_basic_initialization(self, base_url):
        """Test basic client initialization."""
        client = KongClient(base_url)
        assert client.base_url == base_url
        assert client.workspace is None
        assert client.http.max_retries == 3

    def test_base_url_trailing_slash_removed(self):
        """Test that trailing slash is removed from base_url."""
        client = KongClient(BASE_URL + "/")
        assert client.base_url == BASE_URL

    def test_custom_http_client(self):
        """Test a pre-built HTTP client is used as is."""
        http = AsyncHTTPClient(base_url=BASE_URL, workspace="team-a")
        client = KongClient(BASE_URL, http_client=http)
        assert client.http is http
        assert client.workspace == "team-a"

    def test_from_config(self):
        """Test creating a client from configuration."""
        config = KongClientConfig(
            admin_url="http://kong.internal:8001",
            admin_token="secret",
            workspace="team-a",
            timeout=5,
            max_retries=2,
            headers={"X-Source": "tests"},
        )
        client = KongClient.from_config(config)
        assert client.base_url == "http://kong.internal:8001"
        assert client.workspace == "team-a"
        assert client.http.timeout == 5
        assert client.http.max_retries == 2
        assert client.http.auth_provider.is_authenticated()

    def test_repr(self):
        """Test client repr."""
        assert repr(KongClient(BASE_URL)) == f"KongClient(base_url={BASE_URL!r})"
        assert "workspace='team-a'" in repr(KongClient(BASE_URL, workspace="team-a"))


class TestEndpointClients:
    """Tests for endpoint client access."""

    def test_consumer_groups_cached(self):
        """Test the endpoint client is created once."""
        client = KongClient(BASE_URL)
        groups = client.consumer_groups
        assert isinstance(groups, ConsumerGroupsClient)
        assert client.consumer_groups is groups
        assert groups.base_path == "/consumer_groups"


class TestClientRequests:
    """Tests for requests issued through the client."""

    @pytest.mark.asyncio
    async def test_workspace_and_token(self, kong_api, group_data):
        """Test workspace scoping and the admin token on a real call."""
        route = kong_api.delete("/team-a/consumer_groups/gold").mock(return_value=httpx.Response(204))

        async with KongClient(BASE_URL, admin_token="secret", workspace="team-a") as kong:
            await kong.consumer_groups.delete("gold")

        assert route.calls.last.request.headers[ADMIN_TOKEN_HEADER] == "secret"

    @pytest.mark.asyncio
    async def test_close(self):
        """Test closing releases the HTTP client."""
        client = KongClient(BASE_URL)
        await client.http._get_client()
        await client.close()
        assert client.http._client is None
