"""Schema for saved resources and AI analysis results."""

import time
import uuid
from typing import Literal, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

ResourceType = Literal["ARTICLE", "VIDEO", "AUDIO", "TWEET"]
RESOURCE_TYPES: tuple[ResourceType, ...] = ("ARTICLE", "VIDEO", "AUDIO", "TWEET")

FallbackReason = Literal[
    "missing_credential", "http_status", "empty_response", "network_error"
]

# Defaults applied when a field is absent or unusable
DEFAULT_TITLE = "Untitled"
DEFAULT_URL = "#"
DEFAULT_TYPE: ResourceType = "ARTICLE"
DEFAULT_PLATFORM = "unknown"


def new_resource_id() -> str:
    """Return a fresh opaque resource id."""
    return str(uuid.uuid4())


def now_ms() -> int:
    """Current time in milliseconds since the epoch."""
    return int(time.time() * 1000)


class Resource(BaseModel):
    """A saved reference to external content plus the user's annotations.

    Attributes are snake_case in Python; the serialized snapshot uses the
    camelCase names (``contentRaw``, ``userNotes``, ``createdAt``).
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(default_factory=new_resource_id, description="Unique identifier (UUID)")
    title: str = Field(DEFAULT_TITLE, description="Display name")
    url: str = Field(DEFAULT_URL, description="Source link")
    type: ResourceType = Field(DEFAULT_TYPE, description="Kind of content")
    platform: str = Field(DEFAULT_PLATFORM, description="Origin label, e.g. publisher")
    content_raw: str = Field("", description="Raw text supplied for AI analysis")
    summary: str = Field("", description="User-authored or AI-generated synopsis")
    user_notes: str = Field("", description="Free-text notes, editable at any time")
    tags: list[str] = Field(default_factory=list, description="Ordered tag labels")
    created_at: int = Field(
        default_factory=now_ms, description="Creation time, ms since epoch"
    )

    def to_snapshot(self) -> dict:
        """Serialize using the snapshot (camelCase) field names."""
        return self.model_dump(by_alias=True)


class AnalysisResult(BaseModel):
    """Summary and tag suggestions for a resource being composed."""

    summary: str
    suggested_tags: list[str] = Field(default_factory=list)

    @property
    def is_fallback(self) -> bool:
        return False


class AIAnalysis(AnalysisResult):
    """Result produced by the remote model."""


class AnalysisFallback(AnalysisResult):
    """Degraded but usable result when the remote model gave no answer."""

    reason: FallbackReason

    @property
    def is_fallback(self) -> bool:
        return True


AnalysisOutcome = Union[AIAnalysis, AnalysisFallback]
