import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class MediaKind(str, Enum):
    IMAGE = "image"
    VIDEO = "video"
    AUDIO = "audio"


def _media_id() -> str:
    return f"media-{uuid.uuid4().hex}"


class MediaItem(BaseModel):
    """One unit of input media. Exactly one of `file_path` / `url` is set."""

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )

    id: str = Field(default_factory=_media_id)
    name: str = Field(min_length=1)
    kind: MediaKind
    size_bytes: int = Field(0, ge=0)   # 0 = unknown (URL-referenced media)
    file_path: Optional[str] = None
    url: Optional[str] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @model_validator(mode="after")
    def _exactly_one_source(self) -> "MediaItem":
        if (self.file_path is None) == (self.url is None):
            raise ValueError("MediaItem needs exactly one source: file_path or url")
        return self

    @property
    def is_remote(self) -> bool:
        return self.url is not None
