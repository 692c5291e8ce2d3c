"""
Offset pagination for Kong list endpoints.

Kong list responses look like::

    {"data": [...], "next": "/consumer_groups?offset=...", "offset": "..."}

``next`` is null (or missing) on the last page. The opaque ``offset`` token
is passed back as a query parameter to fetch the following page.
"""

from typing import Any, Dict, List, Optional, Tuple
import logging

from pydantic import BaseModel, Field

from kong_client.exceptions import DecodeError
from kong_client.http import AsyncHTTPClient, response_json

logger = logging.getLogger(__name__)

# Page size used when fetching every entity of an endpoint
PAGE_SIZE = 1000


class ListOpt(BaseModel):
    """Options controlling a single list request."""

    size: Optional[int] = Field(None, ge=1, description="Number of entities per page")
    offset: Optional[str] = Field(None, description="Opaque offset token from a previous page")
    tags: Optional[List[str]] = Field(None, description="Only return entities carrying these tags")
    match_all_tags: bool = Field(False, description="Require every tag instead of any of them")

    def to_params(self) -> Dict[str, Any]:
        """Convert the options to query parameters."""
        params: Dict[str, Any] = {}
        if self.size:
            params["size"] = self.size
        if self.offset:
            params["offset"] = self.offset
        if self.tags:
            # Kong: "a,b" matches both tags, "a/b" matches either
            separator = "," if self.match_all_tags else "/"
            params["tags"] = separator.join(self.tags)
        return params


async def list_page(
    http: AsyncHTTPClient,
    endpoint: str,
    opt: Optional[ListOpt] = None,
) -> Tuple[List[Dict[str, Any]], Optional[ListOpt]]:
    """
    Fetch one page of raw entities from a Kong list endpoint.

    Args:
        http: HTTP client to issue the request with
        endpoint: List endpoint path (e.g. "/consumer_groups")
        opt: Paging and filtering options, or None for Kong's defaults

    Returns:
        The raw entity dicts of this page and the options for the next
        page, or None when this was the last page. The next options keep
        the caller's size and tag filter.
    """
    params = opt.to_params() if opt else None
    response = await http.get(endpoint, params=params)
    body = response_json(response)
    if body is None:
        body = {}
    if not isinstance(body, dict):
        raise DecodeError(
            f"Expected a JSON object from {endpoint}, got {type(body).__name__}",
            details={"endpoint": endpoint},
        )

    data = body.get("data") or []
    # Kong encodes an empty array as {}
    if isinstance(data, dict):
        data = []

    next_opt = None
    # A next link without an offset token cannot be followed
    if body.get("next") and body.get("offset"):
        if opt is not None:
            next_opt = opt.model_copy(update={"offset": body.get("offset")})
        else:
            next_opt = ListOpt(offset=body.get("offset"))

    logger.debug(f"Listed {len(data)} entities from {endpoint} (more={next_opt is not None})")
    return data, next_opt
