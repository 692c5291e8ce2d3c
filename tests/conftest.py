"""Pytest configuration and fixtures for kong-admin-client tests."""

import json
from typing import Any, Dict, List, Optional
from unittest.mock import MagicMock

import httpx
import pytest
import respx


BASE_URL = "http://kong.test:8001"


# ============================================================================
# Mock HTTP Responses
# ============================================================================


def create_mock_response(
    status_code: int = 200,
    json_data: Optional[Any] = None,
    text: str = "",
    headers: Optional[Dict[str, str]] = None,
) -> httpx.Response:
    """Create a mock httpx.Response for testing."""
    response = MagicMock(spec=httpx.Response)
    response.status_code = status_code
    response.is_success = 200 <= status_code < 300
    response.text = text if text else (json.dumps(json_data) if json_data else "")
    response.headers = headers or {}

    if json_data is not None:
        response.json.return_value = json_data
    else:
        response.json.side_effect = ValueError("No JSON content")

    return response


def request_json(request: httpx.Request) -> Any:
    """Decode the JSON body of a captured request."""
    return json.loads(request.content)


def list_body(
    data: List[Dict[str, Any]],
    offset: Optional[str] = None,
) -> Dict[str, Any]:
    """Build a Kong list response body."""
    body: Dict[str, Any] = {"data": data, "next": None}
    if offset:
        body["next"] = f"/consumer_groups?offset={offset}"
        body["offset"] = offset
    return body


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def base_url():
    """Default Admin API URL for testing."""
    return BASE_URL


@pytest.fixture
def kong_api():
    """respx router standing in for the Kong Admin API."""
    with respx.mock(base_url=BASE_URL, assert_all_called=False) as router:
        yield router


@pytest.fixture
def group_data():
    """A consumer group as Kong returns it."""
    return {
        "id": "5a5f2f8c-1a42-4b7e-9d8b-3c2f0e8f4a11",
        "name": "gold",
        "created_at": 1700000000,
        "updated_at": 1700000100,
        "tags": ["tier", "paid"],
    }


@pytest.fixture
def group_object_data(group_data):
    """The wrapped body of GET /consumer_groups/{name_or_id}."""
    return {
        "consumer_group": group_data,
        "consumers": [
            {"id": "c-1", "username": "alice", "created_at": 1700000200},
            {"id": "c-2", "username": "bob", "custom_id": "ext-2"},
        ],
        "plugins": [
            {
                "id": "p-1",
                "name": "rate-limiting-advanced",
                "config": {"limit": [10], "window_size": [60]},
            },
        ],
    }


@pytest.fixture
def groups_data():
    """Three consumer groups."""
    return [
        {"id": "g-1", "name": "foo1", "created_at": 1700000001},
        {"id": "g-2", "name": "foo2", "created_at": 1700000002},
        {"id": "g-3", "name": "foo3", "created_at": 1700000003},
    ]
