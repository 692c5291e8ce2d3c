"""Endpoint clients for Kong Admin API entities."""

from kong_client.endpoints.consumer_groups import ConsumerGroupsClient

__all__ = [
    "ConsumerGroupsClient",
]
