"""
Structural metadata for an AnalysisResult.

Local images are probed with PIL for their real dimensions; everything else
falls back to configured defaults. Nothing here feeds the trust score.
"""

import logging
import os
from typing import Optional, Sequence

from PIL import Image

from reality_verifier.config import settings
from reality_verifier.schemas.analysis import (
    DetectionMethodOutput,
    MediaMetadata,
    MethodCategory,
    Resolution,
)
from reality_verifier.schemas.media import MediaItem, MediaKind

logger = logging.getLogger(__name__)

DEFAULT_FORMATS = {
    MediaKind.IMAGE: "JPEG",
    MediaKind.VIDEO: "MP4",
    MediaKind.AUDIO: "WAV",
}


def probe_image_resolution(file_path: str) -> Optional[Resolution]:
    """Read width/height from the image header. None if unreadable."""
    if not os.path.exists(file_path):
        return None
    try:
        with Image.open(file_path) as img:
            width, height = img.size
            return Resolution(width=width, height=height)
    except Exception as e:
        logger.warning(f"[METADATA] Could not probe {os.path.basename(file_path)}: {e}")
        return None


def build_metadata(media: MediaItem, methods: Sequence[DetectionMethodOutput]) -> MediaMetadata:
    resolution = None
    if media.kind != MediaKind.AUDIO:
        if media.kind == MediaKind.IMAGE and not media.is_remote:
            resolution = probe_image_resolution(media.file_path)
        if resolution is None:
            resolution = Resolution(
                width=settings.default_resolution_width,
                height=settings.default_resolution_height,
            )

    duration = settings.default_duration_sec if media.kind != MediaKind.IMAGE else None

    compression_artifacts = any(
        m.category == MethodCategory.METADATA
        and m.score < settings.compression_artifact_threshold
        for m in methods
    )

    return MediaMetadata(
        format=DEFAULT_FORMATS[media.kind],
        file_size=media.size_bytes,
        resolution=resolution,
        duration=duration,
        created_at=media.created_at,
        compression_artifacts=compression_artifacts,
    )
