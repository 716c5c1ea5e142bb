"""
BatchCoordinator — runs the single-item pipeline over an ordered list of media.

Guarantees:
  - one slot per input item, always in input order;
  - a slot holds either a complete AnalysisResult or a failed/cancelled marker,
    never a partial result;
  - one item's fatal error (EmptyMethodSet, an unexpected detector crash)
    marks that slot failed and the batch carries on;
  - cumulative progress round(done / n * 100) is emitted after each processed
    item, so an uncancelled batch always ends on 100.

With max_workers > 1 items run concurrently on a bounded pool; completions
are buffered and released in input order by `stream()`.
"""

import asyncio
import inspect
import logging
from datetime import datetime, timezone
from typing import AsyncIterator, Awaitable, Callable, List, Optional, Sequence, Union

from reality_verifier.config import settings
from reality_verifier.detection.aggregator import round_half_up
from reality_verifier.detection.errors import AnalysisCancelled
from reality_verifier.detection.pipeline import analyze_media
from reality_verifier.detection.runner import DetectionRunner
from reality_verifier.schemas.batch import (
    BatchResult,
    BatchSlot,
    BatchStatus,
    ProgressEvent,
    SlotStatus,
)
from reality_verifier.schemas.media import MediaItem

logger = logging.getLogger(__name__)

ProgressListener = Callable[[ProgressEvent], Union[None, Awaitable[None]]]

UNAVAILABLE_MESSAGE = "Analysis unavailable for this item"


class BatchCoordinator:
    def __init__(
        self,
        runner: Optional[DetectionRunner] = None,
        max_workers: Optional[int] = None,
        on_progress: Optional[ProgressListener] = None,
        cancel_event: Optional[asyncio.Event] = None,
    ):
        self.runner = runner or DetectionRunner()
        self.max_workers = max(1, max_workers or settings.batch_max_workers)
        self.on_progress = on_progress
        self.cancel_event = cancel_event or asyncio.Event()
        self._processed = 0
        self._total = 0

    @property
    def progress(self) -> int:
        if self._total == 0:
            return 100
        return round_half_up(self._processed / self._total * 100)

    def cancel(self) -> None:
        self.cancel_event.set()

    async def run(self, items: Sequence[MediaItem]) -> BatchResult:
        batch = BatchResult(status=BatchStatus.PROCESSING)
        logger.info(f"[BATCH] {batch.id}: {len(items)} items, workers={self.max_workers}")

        async for slot in self.stream(items):
            batch.slots.append(slot)

        batch.completed_at = datetime.now(timezone.utc)
        batch.status = BatchStatus.ERROR if batch.failed else BatchStatus.COMPLETED
        logger.info(
            f"[BATCH] {batch.id} finished: {len(batch.results)} completed, "
            f"{len(batch.failed)} failed, {len(batch.cancelled)} cancelled"
        )
        return batch

    async def stream(self, items: Sequence[MediaItem]) -> AsyncIterator[BatchSlot]:
        """Yield one slot per item, in input order, as soon as it can be released."""
        self._processed = 0
        self._total = len(items)

        if not items:
            await self._emit(ProgressEvent(batch_progress=100))
            return

        if self.max_workers == 1:
            for index, media in enumerate(items):
                yield await self._process(index, media)
            return

        semaphore = asyncio.Semaphore(self.max_workers)

        async def _bounded(index: int, media: MediaItem) -> BatchSlot:
            async with semaphore:
                return await self._process(index, media)

        tasks = [asyncio.create_task(_bounded(i, m)) for i, m in enumerate(items)]
        try:
            for task in tasks:
                yield await task
        finally:
            for task in tasks:
                if not task.done():
                    task.cancel()

    async def _process(self, index: int, media: MediaItem) -> BatchSlot:
        slot = BatchSlot(index=index, media_id=media.id, media_name=media.name)

        if self.cancel_event.is_set():
            slot.status = SlotStatus.CANCELLED
            slot.error = "Batch cancelled"
            return slot

        async def _item_progress(value: int) -> None:
            await self._emit(ProgressEvent(
                batch_progress=self.progress,
                item_index=index,
                media_id=media.id,
                item_progress=value,
            ))

        try:
            slot.result = await analyze_media(
                media,
                runner=self.runner,
                on_progress=_item_progress,
                cancel_event=self.cancel_event,
            )
            slot.status = SlotStatus.COMPLETED
        except AnalysisCancelled:
            logger.info(f"[BATCH] Item {index} ({media.name}) cancelled mid-analysis")
            slot.status = SlotStatus.CANCELLED
            slot.error = "Batch cancelled"
            return slot
        except Exception as e:
            logger.error(f"[BATCH] Item {index} ({media.name}) failed: {e}")
            slot.status = SlotStatus.FAILED
            slot.error = f"{UNAVAILABLE_MESSAGE}: {e}"

        self._processed += 1
        await self._emit(ProgressEvent(
            batch_progress=self.progress,
            item_index=index,
            media_id=media.id,
        ))
        return slot

    async def _emit(self, event: ProgressEvent) -> None:
        if self.on_progress is None:
            return
        res = self.on_progress(event)
        if inspect.isawaitable(res):
            await res


async def analyze_batch(
    items: Sequence[MediaItem],
    on_progress: Optional[ProgressListener] = None,
    runner: Optional[DetectionRunner] = None,
    max_workers: Optional[int] = None,
    cancel_event: Optional[asyncio.Event] = None,
) -> BatchResult:
    """Convenience wrapper around BatchCoordinator.run()."""
    coordinator = BatchCoordinator(
        runner=runner,
        max_workers=max_workers,
        on_progress=on_progress,
        cancel_event=cancel_event,
    )
    return await coordinator.run(items)


def collect_progress() -> tuple[List[ProgressEvent], ProgressListener]:
    """Return (events, listener): a listener that appends every event it sees."""
    events: List[ProgressEvent] = []
    return events, events.append
