from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class KongEntity(BaseModel):
    id: Optional[str] = Field(None, description="Entity unique identifier")
    created_at: Optional[int] = Field(None, description="Creation timestamp (unix seconds)")

    # Kong adds fields across versions; unknown keys are dropped
    model_config = ConfigDict(extra="ignore")


class ConsumerGroup(KongEntity):
    name: Optional[str] = Field(None, description="Unique consumer group name")
    updated_at: Optional[int] = Field(None, description="Update timestamp (unix seconds)")
    tags: Optional[List[str]] = Field(None, description="Tags attached to the group")

    @property
    def display_name(self) -> str:
        """Get display name for the group"""
        return self.name or self.id or ""


class Consumer(KongEntity):
    username: Optional[str] = Field(None, description="Consumer username")
    custom_id: Optional[str] = Field(None, description="External identifier of the consumer")
    tags: Optional[List[str]] = Field(None, description="Tags attached to the consumer")


class ConsumerGroupPlugin(KongEntity):
    name: Optional[str] = Field(None, description="Plugin name")
    config: Optional[Dict[str, Any]] = Field(None, description="Plugin configuration")


class ConsumerGroupObject(BaseModel):
    """
    Body of ``GET /consumer_groups/{name_or_id}``.

    Kong wraps the group under ``consumer_group`` and returns its member
    consumers and scoped plugins next to it.
    """

    consumer_group: Optional[ConsumerGroup] = None
    consumers: List[Consumer] = Field(default_factory=list)
    plugins: List[ConsumerGroupPlugin] = Field(default_factory=list)

    @field_validator("consumers", "plugins", mode="before")
    @classmethod
    def empty_collection(cls, v):
        # Kong encodes an empty array as null or {}
        if v is None or v == {}:
            return []
        return v

    model_config = ConfigDict(extra="ignore")
