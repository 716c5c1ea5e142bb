"""
Upstash Redis integration for the result store.

`client` stays None until `initialize()` runs in the FastAPI lifespan, and
again after `shutdown()`. The store reads `redis_client.client` at call time,
so tests can swap in a mock with monkeypatch.
"""

import logging

from upstash_redis import Redis

from reality_verifier.config import settings

logger = logging.getLogger(__name__)

client = None  # Redis | None


def initialize() -> None:
    global client

    if not (settings.upstash_redis_url and settings.upstash_redis_token):
        logger.warning("[STARTUP] Redis credentials not set. Results are kept in memory only.")
        return

    try:
        client = Redis(url=settings.upstash_redis_url, token=settings.upstash_redis_token)
        logger.info("[STARTUP] Upstash Redis result store connected")
    except Exception as e:
        logger.error(f"[STARTUP] Upstash Redis init failed, using memory store: {e}")
        client = None


def shutdown() -> None:
    global client
    client = None
    logger.info("[SHUTDOWN] Redis client released")
