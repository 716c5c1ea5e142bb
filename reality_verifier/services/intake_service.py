"""
Media intake: builds MediaItem instances from uploads and URLs.

Kind inference lives here, not in the analysis core:
  - uploads: MIME prefix (image/, video/, audio/), falling back to extension;
  - URLs:    "video" in the URL → video, "audio" → audio, otherwise image.
"""

import logging
import os
from typing import Optional
from urllib.parse import urlparse

from fastapi import HTTPException

from reality_verifier.config import settings
from reality_verifier.schemas.media import MediaItem, MediaKind

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = ('.jpg', '.jpeg', '.png', '.webp', '.gif', '.heic', '.heif', '.tiff', '.tif', '.bmp')
VIDEO_EXTENSIONS = ('.mp4', '.mov', '.avi', '.mkv', '.webm')
AUDIO_EXTENSIONS = ('.wav', '.mp3', '.m4a', '.aac', '.ogg', '.flac')


def kind_from_upload(filename: str, content_type: Optional[str]) -> MediaKind:
    content_type = (content_type or "").lower()
    for kind in MediaKind:
        if content_type.startswith(f"{kind.value}/"):
            return kind

    ext = os.path.splitext(filename)[1].lower()
    if ext in IMAGE_EXTENSIONS:
        return MediaKind.IMAGE
    if ext in VIDEO_EXTENSIONS:
        return MediaKind.VIDEO
    if ext in AUDIO_EXTENSIONS:
        return MediaKind.AUDIO
    raise HTTPException(status_code=415, detail="Unsupported file format.")


def kind_from_url(url: str) -> MediaKind:
    lower_url = url.lower()
    if "video" in lower_url:
        return MediaKind.VIDEO
    if "audio" in lower_url:
        return MediaKind.AUDIO
    return MediaKind.IMAGE


def name_from_url(url: str) -> str:
    tail = urlparse(url).path.rstrip("/").split("/")[-1]
    return tail or "media-file"


def media_from_upload(
    filename: str,
    content_type: Optional[str],
    size_bytes: int,
    file_path: str,
) -> MediaItem:
    if size_bytes > settings.max_upload_bytes:
        raise HTTPException(
            status_code=413,
            detail=f"File too large. Max {settings.max_upload_mb}MB allowed."
        )
    kind = kind_from_upload(filename, content_type)
    media = MediaItem(
        name=os.path.basename(filename) or "uploaded_file",
        kind=kind,
        size_bytes=size_bytes,
        file_path=file_path,
    )
    logger.info(f"[INTAKE] Upload {media.name} → {kind.value} ({size_bytes} bytes)")
    return media


def media_from_url(url: str) -> MediaItem:
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise HTTPException(status_code=400, detail=f"Invalid media URL: {url}")

    media = MediaItem(name=name_from_url(url), kind=kind_from_url(url), url=url)
    logger.info(f"[INTAKE] URL {media.name} → {media.kind.value}")
    return media
