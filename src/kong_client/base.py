"""
Base class for typed endpoint clients.

Endpoint clients turn Kong entity operations into requests on the shared
``AsyncHTTPClient`` and decode the responses into Pydantic models.
"""

from typing import Any, AsyncIterator, Generic, List, Optional, Tuple, Type, TypeVar
from urllib.parse import quote

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from kong_client.exceptions import DecodeError, InvalidArgumentError
from kong_client.http import AsyncHTTPClient
from kong_client.pagination import PAGE_SIZE, ListOpt, list_page

TEntity = TypeVar("TEntity", bound=BaseModel)


class BaseEndpointClient(Generic[TEntity]):
    """
    Common plumbing for endpoint clients.

    Provides path building, argument checks, decoding and paging over the
    endpoint's collection.
    """

    def __init__(
        self,
        http_client: AsyncHTTPClient,
        base_path: str,
        entity_model: Type[TEntity],
    ):
        """
        Initialize the endpoint client.

        Args:
            http_client: The underlying HTTP client
            base_path: Collection path for this endpoint (e.g., "/consumer_groups")
            entity_model: Model the collection's entities decode into
        """
        self._http = http_client
        self._base_path = base_path.rstrip("/")
        self._entity_model = entity_model

    @property
    def base_path(self) -> str:
        """Get the base path for this endpoint."""
        return self._base_path

    def _build_path(self, *parts: str) -> str:
        """Build a path from the base path and escaped path segments."""
        clean_parts = [quote(p, safe="") for p in parts if p]
        if clean_parts:
            return f"{self._base_path}/{'/'.join(clean_parts)}"
        return self._base_path

    @staticmethod
    def _require(value: Optional[str], argument: str, operation: str) -> str:
        """Reject a missing or empty identifier before any request is made."""
        if value is None or value == "":
            raise InvalidArgumentError(
                f"{argument} cannot be empty for {operation} operation",
                argument=argument,
            )
        return value

    def _decode(self, data: Any, model: Optional[Type[BaseModel]] = None) -> Any:
        """Validate raw JSON into ``model`` (the entity model by default)."""
        model = model or self._entity_model
        try:
            return model.model_validate(data)
        except PydanticValidationError as e:
            raise DecodeError(
                f"Invalid {model.__name__} payload: {e}",
                details={"errors": e.errors(include_url=False)},
            ) from e

    async def _list(self, opt: Optional[ListOpt] = None) -> Tuple[List[TEntity], Optional[ListOpt]]:
        data, next_opt = await list_page(self._http, self._base_path, opt)
        return [self._decode(item) for item in data], next_opt

    async def _iter_all(self, opt: Optional[ListOpt] = None) -> AsyncIterator[TEntity]:
        opt = opt or ListOpt(size=PAGE_SIZE)
        while opt is not None:
            page, opt = await self._list(opt)
            for entity in page:
                yield entity

    async def _list_all(self) -> List[TEntity]:
        entities: List[TEntity] = []
        opt: Optional[ListOpt] = ListOpt(size=PAGE_SIZE)
        while opt is not None:
            page, opt = await self._list(opt)
            entities.extend(page)
        return entities
