import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

_CAMEL = ConfigDict(alias_generator=to_camel, populate_by_name=True)
_FROZEN_CAMEL = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class MethodCategory(str, Enum):
    VISUAL = "visual"
    AUDIO = "audio"
    METADATA = "metadata"
    TEMPORAL = "temporal"


class DetectionMethodOutput(BaseModel):
    """
    One detector's reading for one media item.

    `score` is the method's authenticity estimate (1.0 = fully authentic-looking);
    `confidence` is how sure the method is of that estimate. Both belong in
    [0, 1]; DetectionRunner clamps anything a method reports outside that range.
    """

    model_config = _FROZEN_CAMEL

    method_name: str = Field(min_length=1)
    category: MethodCategory
    score: float
    confidence: float
    details: str = Field(min_length=1)


class Resolution(BaseModel):
    model_config = _FROZEN_CAMEL

    width: int = Field(ge=0)
    height: int = Field(ge=0)


class MediaMetadata(BaseModel):
    """Structural facts about the media. Informational only, never scored."""

    model_config = _FROZEN_CAMEL

    format: str
    file_size: int = Field(ge=0)
    resolution: Optional[Resolution] = None    # absent for audio
    duration: Optional[float] = None           # seconds, absent for images
    created_at: Optional[datetime] = None
    camera: Optional[str] = None
    location: Optional[str] = None
    compression_artifacts: bool = False
    digital_signature: Optional[bool] = None


def _analysis_id() -> str:
    return f"analysis-{uuid.uuid4().hex}"


class AnalysisResult(BaseModel):
    """Immutable record of one completed analysis. Built only by the aggregator."""

    model_config = _FROZEN_CAMEL

    id: str = Field(default_factory=_analysis_id)
    media_id: str
    trust_score: int = Field(ge=0, le=100)
    is_authentic: bool
    confidence: int = Field(ge=0, le=100)
    methods: tuple[DetectionMethodOutput, ...] = Field(min_length=1)
    metadata: MediaMetadata
    explanation: str
    warnings: tuple[str, ...] = ()
    analyzed_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class DashboardStats(BaseModel):
    model_config = _CAMEL

    total_analyses: int
    authentic_media: int
    suspicious_media: int
    avg_trust_score: int
    authenticity_rate: int
