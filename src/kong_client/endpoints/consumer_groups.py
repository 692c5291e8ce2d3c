"""
Endpoint client for Kong consumer groups.

Consumer groups are a Kong Enterprise entity (Kong Gateway >= 2.7) that
bundle consumers so plugins can be scoped to all of them at once.
"""

from typing import Any, AsyncIterator, Dict, List, Optional, Tuple, Union
import logging

from kong_client.base import BaseEndpointClient
from kong_client.http import AsyncHTTPClient, response_json
from kong_client.models import ConsumerGroup, ConsumerGroupObject
from kong_client.pagination import ListOpt

logger = logging.getLogger(__name__)


class ConsumerGroupsClient(BaseEndpointClient[ConsumerGroup]):
    """
    Client for ``/consumer_groups`` endpoints.
    """

    def __init__(self, http_client: AsyncHTTPClient) -> None:
        super().__init__(http_client, "/consumer_groups", ConsumerGroup)

    @staticmethod
    def _as_group(group: Union[ConsumerGroup, Dict[str, Any]]) -> ConsumerGroup:
        if isinstance(group, ConsumerGroup):
            return group
        return ConsumerGroup.model_validate(group)

    async def create(self, group: Union[ConsumerGroup, Dict[str, Any]]) -> ConsumerGroup:
        """
        Create a consumer group.

        If the group carries an ID it is created under that ID with a PUT,
        otherwise it is POSTed to the collection and Kong generates the ID.

        Args:
            group: The group to create

        Returns:
            The group as stored by Kong

        Raises:
            ConflictError: If a group with the same name exists
            ValidationError: If Kong rejects the payload
        """
        group = self._as_group(group)
        if group.id:
            response = await self._http.put(self._build_path(group.id), json_data=group)
        else:
            response = await self._http.post(self._base_path, json_data=group)
        created = self._decode(response_json(response))
        logger.info(f"Created consumer group {created.display_name}")
        return created

    async def get(self, name_or_id: Optional[str]) -> Optional[ConsumerGroup]:
        """
        Get a consumer group by name or ID.

        Kong answers with the group wrapped under ``consumer_group``; only
        the group itself is returned. Use ``get_object`` for the members.

        Raises:
            InvalidArgumentError: If ``name_or_id`` is empty
            NotFoundError: If the group does not exist
        """
        return (await self.get_object(name_or_id)).consumer_group

    async def get_object(self, name_or_id: Optional[str]) -> ConsumerGroupObject:
        """Get a consumer group together with its consumers and plugins."""
        name_or_id = self._require(name_or_id, "name_or_id", "get")
        response = await self._http.get(self._build_path(name_or_id))
        return self._decode(response_json(response), ConsumerGroupObject)

    async def update(self, group: Union[ConsumerGroup, Dict[str, Any]]) -> ConsumerGroup:
        """
        Update a consumer group.

        Only the fields set on ``group`` are sent.

        Raises:
            InvalidArgumentError: If the group has no ID
            NotFoundError: If the group does not exist
        """
        group = self._as_group(group)
        group_id = self._require(group.id, "id", "update")
        response = await self._http.patch(self._build_path(group_id), json_data=group)
        return self._decode(response_json(response))

    async def delete(self, name_or_id: Optional[str]) -> None:
        """
        Delete a consumer group by name or ID.

        Raises:
            InvalidArgumentError: If ``name_or_id`` is empty
        """
        name_or_id = self._require(name_or_id, "name_or_id", "delete")
        await self._http.delete(self._build_path(name_or_id))
        logger.info(f"Deleted consumer group {name_or_id}")

    async def list(
        self,
        opt: Optional[ListOpt] = None,
    ) -> Tuple[List[ConsumerGroup], Optional[ListOpt]]:
        """
        List one page of consumer groups.

        Args:
            opt: Paging and tag filtering options

        Returns:
            The groups on this page and the options for the next page,
            or None if this was the last one
        """
        return await self._list(opt)

    async def list_all(self) -> List[ConsumerGroup]:
        """
        Fetch every consumer group, following pagination to the end.

        This can take a while when many groups exist. Any error aborts the
        whole listing.
        """
        return await self._list_all()

    def iter_all(self, opt: Optional[ListOpt] = None) -> AsyncIterator[ConsumerGroup]:
        """Iterate over all consumer groups, fetching pages lazily."""
        return self._iter_all(opt)
