"""
Single-item analysis pipeline — public entry point for /api/v1/analyze.

`analyze_media` runs:
  1. DetectionRunner → ordered method outputs
  2. Aggregator      → AnalysisResult

and reports item progress through settings.progress_checkpoints: the first
checkpoint on start, the middle ones spread across method completions, the
last once the result exists.
"""

import asyncio
import inspect
import logging
import math
from typing import Awaitable, Callable, Optional, Union

from reality_verifier.config import settings
from reality_verifier.detection.aggregator import aggregate
from reality_verifier.detection.runner import DetectionRunner
from reality_verifier.schemas.analysis import AnalysisResult
from reality_verifier.schemas.media import MediaItem

logger = logging.getLogger(__name__)

# on_progress(item_progress): item_progress is one of settings.progress_checkpoints.
ProgressCallback = Callable[[int], Union[None, Awaitable[None]]]


async def analyze_media(
    media: MediaItem,
    runner: Optional[DetectionRunner] = None,
    on_progress: Optional[ProgressCallback] = None,
    cancel_event: Optional[asyncio.Event] = None,
) -> AnalysisResult:
    runner = runner or DetectionRunner()
    checkpoints = settings.progress_checkpoints
    middle = checkpoints[1:-1]
    emitted_middle = 0

    async def _emit(value: int) -> None:
        if on_progress is not None:
            res = on_progress(value)
            if inspect.isawaitable(res):
                await res
        # Suspension point so observers can run between checkpoints.
        await asyncio.sleep(0)

    async def _on_method_done(done: int, total: int) -> None:
        nonlocal emitted_middle
        target = math.ceil(done / total * len(middle))
        # Claim the index before awaiting; parallel completions share this counter.
        while emitted_middle < target:
            value = middle[emitted_middle]
            emitted_middle += 1
            await _emit(value)

    logger.info(f"[PIPELINE] Analyzing {media.kind.value}: {media.name}")
    await _emit(checkpoints[0])

    outputs = await runner.run(media, on_method_done=_on_method_done, cancel_event=cancel_event)
    result = aggregate(media, outputs)
    await _emit(checkpoints[-1])
    return result
