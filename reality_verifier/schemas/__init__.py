from reality_verifier.schemas.media import MediaItem, MediaKind
from reality_verifier.schemas.analysis import (
    AnalysisResult,
    DashboardStats,
    DetectionMethodOutput,
    MediaMetadata,
    MethodCategory,
    Resolution,
)
from reality_verifier.schemas.batch import (
    BatchResult,
    BatchSlot,
    BatchStatus,
    ProgressEvent,
    SlotStatus,
)
from reality_verifier.schemas.requests import (
    AnalyzeUrlRequest,
    BatchAnalyzeRequest,
    BatchAnalyzeResponse,
)

__all__ = [
    "MediaItem",
    "MediaKind",
    "AnalysisResult",
    "DashboardStats",
    "DetectionMethodOutput",
    "MediaMetadata",
    "MethodCategory",
    "Resolution",
    "BatchResult",
    "BatchSlot",
    "BatchStatus",
    "ProgressEvent",
    "SlotStatus",
    "AnalyzeUrlRequest",
    "BatchAnalyzeRequest",
    "BatchAnalyzeResponse",
]
