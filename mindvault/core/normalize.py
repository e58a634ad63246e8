"""Validation-and-coercion pass turning loose input into Resource records.

Every field of a resource has a documented default, so any mapping can be
normalized: unusable values are replaced rather than rejected. Only input
that is not a mapping at all is refused.
"""

import math
from collections.abc import Mapping
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel

from mindvault.errors import FormatError
from mindvault.models import RESOURCE_TYPES, Resource, ResourceType
from mindvault.models.resource import (
    DEFAULT_PLATFORM,
    DEFAULT_TITLE,
    DEFAULT_TYPE,
    DEFAULT_URL,
    new_resource_id,
    now_ms,
)


class ResourceDraft(BaseModel):
    """Partially-specified resource with every field coerced to a usable value.

    Accepts both snake_case and camelCase keys; unknown keys are ignored.
    """

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore"
    )

    id: Optional[str] = None
    title: str = DEFAULT_TITLE
    url: str = DEFAULT_URL
    type: ResourceType = DEFAULT_TYPE
    platform: str = DEFAULT_PLATFORM
    content_raw: str = ""
    summary: str = ""
    user_notes: str = ""
    tags: list[str] = Field(default_factory=list)
    created_at: Optional[int] = None

    @field_validator("title", "url", "platform", mode="before")
    @classmethod
    def _label_or_default(cls, value: Any, info: ValidationInfo) -> str:
        if isinstance(value, str) and value.strip():
            return value
        return cls.model_fields[info.field_name].default

    @field_validator("content_raw", "summary", "user_notes", mode="before")
    @classmethod
    def _text_or_empty(cls, value: Any) -> str:
        return value if isinstance(value, str) else ""

    @field_validator("type", mode="before")
    @classmethod
    def _known_type(cls, value: Any) -> str:
        if isinstance(value, str) and value.strip().upper() in RESOURCE_TYPES:
            return value.strip().upper()
        return DEFAULT_TYPE

    @field_validator("tags", mode="before")
    @classmethod
    def _tag_list(cls, value: Any) -> list[str]:
        if not isinstance(value, (list, tuple)):
            return []
        return dedupe_tags(value)

    @field_validator("id", mode="before")
    @classmethod
    def _usable_id(cls, value: Any) -> Optional[str]:
        return value if isinstance(value, str) and value.strip() else None

    @field_validator("created_at", mode="before")
    @classmethod
    def _usable_timestamp(cls, value: Any) -> Optional[int]:
        # bool is an int subclass but never a timestamp
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return None
        if isinstance(value, float) and not math.isfinite(value):
            return None
        return int(value)

    def to_resource(self, preserve_identity: bool = False) -> Resource:
        """Build a complete Resource.

        Args:
            preserve_identity: Keep a well-typed ``id``/``created_at`` from the
                draft instead of generating new ones.
        """
        if preserve_identity:
            resource_id = self.id or new_resource_id()
            created_at = self.created_at if self.created_at is not None else now_ms()
        else:
            resource_id, created_at = new_resource_id(), now_ms()
        return Resource(
            id=resource_id,
            created_at=created_at,
            title=self.title,
            url=self.url,
            type=self.type,
            platform=self.platform,
            content_raw=self.content_raw,
            summary=self.summary,
            user_notes=self.user_notes,
            tags=self.tags,
        )


def dedupe_tags(tags: Any) -> list[str]:
    """Keep non-blank string tags, stripped, first occurrence wins."""
    cleaned = [t.strip() for t in tags if isinstance(t, str) and t.strip()]
    return list(dict.fromkeys(cleaned))


def normalize_resource(
    data: Any,
    *,
    preserve_identity: bool = False,
    index: Optional[int] = None,
) -> Resource:
    """Normalize a partial resource descriptor into a valid Resource.

    Args:
        data: Mapping (snake_case or camelCase keys) or an existing Resource.
        preserve_identity: Keep an existing id/createdAt when well-typed.
        index: Position of ``data`` in a bulk payload, for error reporting.

    Returns:
        A Resource with every field populated.

    Raises:
        FormatError: If ``data`` is not a mapping.
    """
    if isinstance(data, Resource):
        data = data.model_dump()
    if not isinstance(data, Mapping):
        where = f" at index {index}" if index is not None else ""
        raise FormatError(
            f"Resource entry{where} must be an object, got {type(data).__name__}",
            index=index,
        )
    draft = ResourceDraft.model_validate(dict(data))
    return draft.to_resource(preserve_identity=preserve_identity)
