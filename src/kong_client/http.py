"""
Async HTTP client for the Kong Admin API.

This module provides the request/response helper every endpoint client
builds on. It is a thin layer over httpx with:
- Admin token authentication (``Kong-Admin-Token``)
- Optional workspace scoping
- Kong error body parsing into typed exceptions
- Retries for transient transport failures
- Request/response logging
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Union
import logging

import httpx
from pydantic import BaseModel

from kong_client.exceptions import (
    DecodeError,
    KongClientError,
    NetworkError,
    RateLimitError,
    ServiceUnavailableError,
    ValidationError,
    TimeoutError as ClientTimeoutError,
    exception_from_response,
)

logger = logging.getLogger(__name__)

ADMIN_TOKEN_HEADER = "Kong-Admin-Token"

# Failures raised before the request left the client
UNSENT_ERRORS = (httpx.ConnectError, httpx.ConnectTimeout, httpx.PoolTimeout)

IDEMPOTENT_METHODS = frozenset({"GET", "HEAD", "OPTIONS", "PUT", "DELETE"})


def is_retryable(method: str, error: httpx.TransportError) -> bool:
    """
    Decide whether a transport failure may be retried.

    A request that never reached Kong may always be resent. One that may
    have been processed is only resent for idempotent methods.
    """
    if isinstance(error, UNSENT_ERRORS):
        return True
    return method.upper() in IDEMPOTENT_METHODS


def response_json(response: httpx.Response) -> Any:
    """Decode a success response body, raising DecodeError if it is not JSON."""
    try:
        return response.json()
    except ValueError as e:
        raise DecodeError(
            f"HTTP {response.status_code} response body is not valid JSON",
            details={"status_code": response.status_code, "body": response.text[:200]},
        ) from e


class AuthProvider(ABC):
    """Abstract base class for authentication providers."""

    @abstractmethod
    async def get_headers(self) -> Dict[str, str]:
        """Return the headers that authenticate a request."""
        ...

    @abstractmethod
    def is_authenticated(self) -> bool:
        """Check if credentials are configured."""
        ...


class AdminTokenAuthProvider(AuthProvider):
    """Sends an RBAC admin token in the ``Kong-Admin-Token`` header."""

    def __init__(self, admin_token: Optional[str] = None):
        self._admin_token = admin_token

    async def get_headers(self) -> Dict[str, str]:
        if self._admin_token:
            return {ADMIN_TOKEN_HEADER: self._admin_token}
        return {}

    def is_authenticated(self) -> bool:
        return bool(self._admin_token)

    def set_token(self, admin_token: str) -> None:
        """Set the admin token."""
        self._admin_token = admin_token

    def clear_token(self) -> None:
        """Clear the admin token."""
        self._admin_token = None


class AsyncHTTPClient:
    """
    Async HTTP client for Kong Admin API requests.

    This client handles:
    - Base URL and workspace prefix management
    - Authentication header injection
    - Response parsing and error handling
    - Retries of unsent requests, and of idempotent requests after
      timeouts or dropped connections

    HTTP error responses are raised immediately and never retried.
    """

    def __init__(
        self,
        base_url: str,
        auth_provider: Optional[AuthProvider] = None,
        workspace: Optional[str] = None,
        timeout: float = 30.0,
        max_retries: int = 3,
        headers: Optional[Dict[str, str]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the HTTP client.

        Args:
            base_url: Base URL of the Admin API (e.g., "http://localhost:8001")
            auth_provider: Authentication provider
            workspace: Kong Enterprise workspace to scope every request to
            timeout: Request timeout in seconds
            max_retries: Maximum number of attempts for transport failures
            headers: Additional headers to include in all requests
            transport: Custom httpx transport (mainly for tests)
        """
        self.base_url = base_url.rstrip("/")
        self.auth_provider = auth_provider or AdminTokenAuthProvider()
        self.workspace = workspace.strip("/") if workspace else None
        self.timeout = timeout
        self.max_retries = max(1, max_retries)
        self._default_headers = headers or {}
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the underlying httpx client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=httpx.Timeout(self.timeout),
                follow_redirects=True,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "AsyncHTTPClient":
        await self._get_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    def _build_headers(self, extra_headers: Optional[Dict[str, str]] = None) -> Dict[str, str]:
        """Build request headers."""
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
            **self._default_headers,
        }
        if extra_headers:
            headers.update(extra_headers)
        return headers

    async def _add_auth_header(self, headers: Dict[str, str]) -> Dict[str, str]:
        """Add authentication headers if available."""
        if self.auth_provider and self.auth_provider.is_authenticated():
            headers.update(await self.auth_provider.get_headers())
        return headers

    def build_path(self, path: str) -> str:
        """Prefix ``path`` with the workspace, if one is configured."""
        path = "/" + path.lstrip("/")
        if self.workspace:
            return f"/{self.workspace}{path}"
        return path

    def _handle_error_response(self, response: httpx.Response) -> None:
        """Convert a Kong error response to the matching exception."""
        status_code = response.status_code

        # Kong error bodies look like {"message": ..., "name": ..., "code": ..., "fields": {...}}
        try:
            error_data = response.json()
        except Exception:
            error_data = None

        if isinstance(error_data, dict):
            detail = error_data.get("message") or str(error_data)
            error_code = error_data.get("name")
            details = error_data
        else:
            detail = response.text or f"HTTP {status_code}"
            error_code = None
            details = None

        if status_code == 400:
            fields = error_data.get("fields") if isinstance(error_data, dict) else None
            raise ValidationError(
                detail,
                status_code=status_code,
                error_code=error_code,
                details=details,
                field_errors=fields if isinstance(fields, dict) else None,
            )
        elif status_code in (429, 503):
            retry_after = response.headers.get("Retry-After")
            exc_class = RateLimitError if status_code == 429 else ServiceUnavailableError
            raise exc_class(
                detail,
                status_code=status_code,
                error_code=error_code,
                details=details,
                retry_after=int(retry_after) if retry_after and retry_after.isdigit() else None,
            )
        raise exception_from_response(status_code, detail, error_code, details)

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json_data: Optional[Union[Dict[str, Any], BaseModel]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> httpx.Response:
        """
        Make an HTTP request.

        Args:
            method: HTTP method (GET, POST, PUT, PATCH, DELETE)
            path: Request path, relative to the base URL and workspace
            params: Query parameters
            json_data: JSON body data (can be dict or Pydantic model)
            headers: Additional headers

        Returns:
            httpx.Response object

        Raises:
            KongClientError: On HTTP errors
            NetworkError: On connection failures
            TimeoutError: On request timeout
        """
        client = await self._get_client()

        request_headers = await self._add_auth_header(self._build_headers(headers))
        url = self.build_path(path)

        # Unset model fields are omitted from the body
        if json_data is not None and isinstance(json_data, BaseModel):
            json_data = json_data.model_dump(mode="json", exclude_none=True)

        if params:
            params = {k: v for k, v in params.items() if v is not None}

        last_exception: Optional[KongClientError] = None
        for attempt in range(self.max_retries):
            logger.debug(f"{method} {url} params={params} attempt={attempt + 1}")
            try:
                response = await client.request(
                    method=method,
                    url=url,
                    params=params,
                    json=json_data,
                    headers=request_headers,
                )
            except httpx.TransportError as e:
                if isinstance(e, httpx.TimeoutException):
                    last_exception = ClientTimeoutError(f"Request timed out: {e}")
                else:
                    last_exception = NetworkError(f"Connection failed: {e}")
                if not is_retryable(method, e):
                    raise last_exception from e
            else:
                logger.debug(f"{method} {url} -> {response.status_code}")
                if response.is_success:
                    return response
                self._handle_error_response(response)

            if attempt < self.max_retries - 1:
                logger.warning(f"{method} {url} failed ({last_exception}), retrying")

        raise last_exception

    async def get(
        self,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> httpx.Response:
        """Make a GET request."""
        return await self.request("GET", path, params=params, headers=headers)

    async def post(
        self,
        path: str,
        *,
        json_data: Optional[Union[Dict[str, Any], BaseModel]] = None,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> httpx.Response:
        """Make a POST request."""
        return await self.request("POST", path, json_data=json_data, params=params, headers=headers)

    async def put(
        self,
        path: str,
        *,
        json_data: Optional[Union[Dict[str, Any], BaseModel]] = None,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> httpx.Response:
        """Make a PUT request."""
        return await self.request("PUT", path, json_data=json_data, params=params, headers=headers)

    async def patch(
        self,
        path: str,
        *,
        json_data: Optional[Union[Dict[str, Any], BaseModel]] = None,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> httpx.Response:
        """Make a PATCH request."""
        return await self.request("PATCH", path, json_data=json_data, params=params, headers=headers)

    async def delete(
        self,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> httpx.Response:
        """Make a DELETE request."""
        return await self.request("DELETE", path, params=params, headers=headers)

    async def get_json(
        self,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        """Make a GET request and return JSON response."""
        response = await self.get(path, params=params, headers=headers)
        return response_json(response)
