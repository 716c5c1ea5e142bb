"""
Shared pytest fixtures for all test modules.

Every test starts with Redis disabled and an empty in-memory result store.
Tests that need the Redis path request `mock_redis`.
"""

import asyncio
import io
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from reality_verifier.detection.base import ALL_KINDS, DetectionMethod
from reality_verifier.detection.runner import DetectionRunner
from reality_verifier.schemas.analysis import DetectionMethodOutput, MethodCategory
from reality_verifier.schemas.media import MediaItem, MediaKind
from tests.mocks.redis_mock import MockRedis

from reality_verifier.main import app  # noqa: E402


# ---------------------------------------------------------------------------
# Core infrastructure fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def memory_store(monkeypatch):
    """Null Redis client and a fresh in-memory store for every test."""
    from reality_verifier.integrations import redis_client as rc
    from reality_verifier.services import results_service

    monkeypatch.setattr(rc, "client", None)
    results_service.local_store.clear()
    results_service.local_batches.clear()
    yield results_service
    results_service.local_store.clear()
    results_service.local_batches.clear()


@pytest.fixture
def mock_redis(monkeypatch):
    """Replace redis_client.client with an in-memory MockRedis."""
    from reality_verifier.integrations import redis_client as rc

    mock_rc = MockRedis()
    monkeypatch.setattr(rc, "client", mock_rc)
    return mock_rc


@pytest.fixture
def client():
    """
    FastAPI TestClient with Redis init/shutdown patched to no-ops and a
    deterministic detection runner (three methods averaging 0.9).
    """
    with (
        patch("reality_verifier.integrations.redis_client.initialize"),
        patch("reality_verifier.integrations.redis_client.shutdown"),
    ):
        with TestClient(app) as c:
            app.state.runner = make_runner(0.9, 0.85, 0.95)
            yield c


# ---------------------------------------------------------------------------
# Shared test-data helpers
# ---------------------------------------------------------------------------


class FixedMethod(DetectionMethod):
    """Deterministic detector: returns `score`, or raises `error`, after `delay` seconds."""

    def __init__(
        self,
        name: str,
        score: float = 1.0,
        confidence: float = 0.9,
        category: MethodCategory = MethodCategory.VISUAL,
        kinds=ALL_KINDS,
        error: Exception | None = None,
        delay: float = 0.0,
    ):
        self.name = name
        self.score = score
        self.confidence = confidence
        self.category = category
        self.kinds = frozenset(kinds)
        self.error = error
        self.delay = delay
        self.calls = 0

    async def detect(self, media: MediaItem) -> DetectionMethodOutput:
        self.calls += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return DetectionMethodOutput(
            method_name=self.name,
            category=self.category,
            score=self.score,
            confidence=self.confidence,
            details=f"fixed reading from {self.name}",
        )


def make_runner(*scores: float, parallel: bool = False) -> DetectionRunner:
    methods = [FixedMethod(f"Method {i + 1}", score=s) for i, s in enumerate(scores)]
    return DetectionRunner(methods=methods, parallel=parallel)


def make_media(
    name: str = "photo.jpg",
    kind: MediaKind = MediaKind.IMAGE,
    size_bytes: int = 1024,
    file_path: str | None = None,
    url: str | None = None,
) -> MediaItem:
    if file_path is None and url is None:
        url = f"https://example.com/{name}"
    return MediaItem(name=name, kind=kind, size_bytes=size_bytes, file_path=file_path, url=url)


def make_tiny_jpeg(size=(10, 10)) -> bytes:
    """Create a minimal JPEG in memory — fast and valid."""
    buf = io.BytesIO()
    Image.new("RGB", size, color=(128, 128, 128)).save(buf, format="JPEG")
    return buf.getvalue()


@pytest.fixture
def tiny_jpg(tmp_path) -> str:
    """Write a tiny 10×10 JPEG to a temp file and return the path."""
    p = tmp_path / "test.jpg"
    p.write_bytes(make_tiny_jpeg())
    return str(p)
