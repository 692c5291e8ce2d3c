"""
Main Kong Admin API client.

This module provides the KongClient class, the entry point for talking to
the Kong Admin API. It owns the HTTP client and hands out endpoint clients.
"""

from typing import Any, Dict, Optional, Type, TypeVar
import logging

from kong_client.config import KongClientConfig
from kong_client.endpoints import ConsumerGroupsClient
from kong_client.http import AdminTokenAuthProvider, AsyncHTTPClient

logger = logging.getLogger(__name__)

T = TypeVar("T")


class KongClient:
    """
    Main client for the Kong Admin API.

    Example usage:
        ```python
        async with KongClient("http://localhost:8001", admin_token="secret") as kong:
            group = await kong.consumer_groups.create(ConsumerGroup(name="gold"))
            groups = await kong.consumer_groups.list_all()
            await kong.consumer_groups.delete(group.id)
        ```
    """

    def __init__(
        self,
        base_url: str,
        *,
        admin_token: Optional[str] = None,
        workspace: Optional[str] = None,
        timeout: float = 30.0,
        max_retries: int = 3,
        headers: Optional[Dict[str, str]] = None,
        http_client: Optional[AsyncHTTPClient] = None,
    ):
        """
        Initialize the Kong client.

        Args:
            base_url: Base URL of the Admin API (e.g., "http://localhost:8001")
            admin_token: RBAC admin token (Kong Enterprise)
            workspace: Workspace every request is scoped to
            timeout: Request timeout in seconds
            max_retries: Maximum attempts for transport failures
            headers: Additional headers to include in all requests
            http_client: Pre-built HTTP client, replaces the settings above
        """
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._max_retries = max_retries

        self._auth_provider = AdminTokenAuthProvider(admin_token)
        self._http = http_client or AsyncHTTPClient(
            base_url=self._base_url,
            auth_provider=self._auth_provider,
            workspace=workspace,
            timeout=timeout,
            max_retries=max_retries,
            headers=headers,
        )

        self._endpoint_clients: Dict[str, Any] = {}
        logger.debug(f"Kong client created for {self._base_url}")

    @classmethod
    def from_config(cls, config: KongClientConfig, **kwargs: Any) -> "KongClient":
        """Create a client from a loaded configuration."""
        return cls(
            config.admin_url,
            admin_token=config.admin_token,
            workspace=config.workspace,
            timeout=config.timeout,
            max_retries=config.max_retries,
            headers=config.headers,
            **kwargs,
        )

    @property
    def base_url(self) -> str:
        """Get the base URL of the Admin API."""
        return self._base_url

    @property
    def workspace(self) -> Optional[str]:
        return self._http.workspace

    @property
    def http(self) -> AsyncHTTPClient:
        """Get the underlying HTTP client for custom requests."""
        return self._http

    def _get_endpoint_client(self, client_class: Type[T]) -> T:
        """Get or create an endpoint client instance."""
        class_name = client_class.__name__
        if class_name not in self._endpoint_clients:
            self._endpoint_clients[class_name] = client_class(self._http)
        return self._endpoint_clients[class_name]

    @property
    def consumer_groups(self) -> ConsumerGroupsClient:
        """Consumer group operations."""
        return self._get_endpoint_client(ConsumerGroupsClient)

    async def close(self) -> None:
        """Close the client and release resources."""
        await self._http.close()
        logger.debug("Kong client closed")

    async def __aenter__(self) -> "KongClient":
        await self._http.__aenter__()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    def __repr__(self) -> str:
        workspace = f", workspace={self.workspace!r}" if self.workspace else ""
        return f"KongClient(base_url={self._base_url!r}{workspace})"
