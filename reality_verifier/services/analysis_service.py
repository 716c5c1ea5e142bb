"""
Analysis request helpers: run the pipeline, persist results, and log memory usage.
"""

import logging
import os
from typing import List, Sequence, Tuple

import psutil

from reality_verifier.detection.batch import BatchCoordinator, collect_progress
from reality_verifier.detection.pipeline import analyze_media
from reality_verifier.detection.runner import DetectionRunner
from reality_verifier.schemas.analysis import AnalysisResult
from reality_verifier.schemas.batch import BatchResult, ProgressEvent
from reality_verifier.schemas.media import MediaItem
from reality_verifier.services import results_service

logger = logging.getLogger(__name__)


def log_memory(stage: str) -> None:
    """Log current process and system memory usage. Only runs when DEBUG logging is active."""
    if not logger.isEnabledFor(logging.DEBUG):
        return
    process = psutil.Process(os.getpid())
    rss_mb = process.memory_info().rss / 1024 / 1024
    sys_mem = psutil.virtual_memory()
    logger.debug(
        f"[MEMORY] {stage} | "
        f"Process RSS: {rss_mb:.2f} MB | "
        f"System Available: {sys_mem.available / 1024 / 1024:.2f} MB"
    )


async def analyze_and_store(media: MediaItem, runner: DetectionRunner = None) -> AnalysisResult:
    log_memory(f"Pre-Analyze: {media.name}")
    result = await analyze_media(media, runner=runner)
    results_service.save_result(result)
    log_memory(f"Post-Analyze: {media.name}")
    return result


async def run_batch_and_store(
    items: Sequence[MediaItem],
    runner: DetectionRunner = None,
) -> Tuple[BatchResult, List[ProgressEvent]]:
    """Run a batch, store every completed result and the batch itself."""
    events, listener = collect_progress()
    coordinator = BatchCoordinator(runner=runner, on_progress=listener)

    log_memory(f"Pre-Batch: {len(items)} items")
    batch = await coordinator.run(items)
    for result in batch.results:
        results_service.save_result(result)
    results_service.save_batch(batch)
    log_memory(f"Post-Batch: {batch.id}")

    return batch, events
