"""
Kong Admin API Client Library.

A typed async client for Kong consumer groups.

Example usage:
    ```python
    from kong_client import ConsumerGroup, KongClient, ListOpt

    async with KongClient("http://localhost:8001") as kong:
        # Create a group, Kong generates the ID
        gold = await kong.consumer_groups.create(ConsumerGroup(name="gold"))

        # Fetch one page, filtered by tag
        groups, next_opt = await kong.consumer_groups.list(ListOpt(size=10, tags=["tier"]))

        # Fetch everything
        groups = await kong.consumer_groups.list_all()
    ```
"""

__version__ = "0.1.0"

# Main client
from kong_client.client import KongClient

# Configuration
from kong_client.config import KongClientConfig, load_config

# HTTP client components (for advanced usage)
from kong_client.http import (
    AsyncHTTPClient,
    AuthProvider,
    AdminTokenAuthProvider,
)

# Models and paging
from kong_client.models import (
    Consumer,
    ConsumerGroup,
    ConsumerGroupObject,
    ConsumerGroupPlugin,
)
from kong_client.pagination import PAGE_SIZE, ListOpt, list_page

# Endpoint clients
from kong_client.endpoints import ConsumerGroupsClient

# Exceptions
from kong_client.exceptions import (
    KongClientError,
    InvalidArgumentError,
    DecodeError,
    AuthenticationError,
    AuthorizationError,
    ValidationError,
    NotFoundError,
    ConflictError,
    RateLimitError,
    ServerError,
    ServiceUnavailableError,
    NetworkError,
    TimeoutError,
    exception_from_response,
    is_not_found,
)

__all__ = [
    "__version__",
    "KongClient",
    "KongClientConfig",
    "load_config",
    "AsyncHTTPClient",
    "AuthProvider",
    "AdminTokenAuthProvider",
    "Consumer",
    "ConsumerGroup",
    "ConsumerGroupObject",
    "ConsumerGroupPlugin",
    "PAGE_SIZE",
    "ListOpt",
    "list_page",
    "ConsumerGroupsClient",
    "KongClientError",
    "InvalidArgumentError",
    "DecodeError",
    "AuthenticationError",
    "AuthorizationError",
    "ValidationError",
    "NotFoundError",
    "ConflictError",
    "RateLimitError",
    "ServerError",
    "ServiceUnavailableError",
    "NetworkError",
    "TimeoutError",
    "exception_from_response",
    "is_not_found",
]
