"""
DetectionRunner — selects and invokes the detection methods for one media item.

Method outputs come back in declaration order whether the methods ran one
after another or concurrently. A method that raises DetectionFailure is
recorded as a zero-score, zero-confidence marker so the result set size used
for averaging never silently shrinks.
"""

import asyncio
import inspect
import logging
from typing import Awaitable, Callable, List, Optional, Sequence, Union

from reality_verifier.config import settings
from reality_verifier.detection.base import DetectionMethod
from reality_verifier.detection.errors import AnalysisCancelled, DetectionFailure, InvalidScoreRange
from reality_verifier.detection.methods import default_methods
from reality_verifier.schemas.analysis import DetectionMethodOutput
from reality_verifier.schemas.media import MediaItem, MediaKind

logger = logging.getLogger(__name__)

# on_method_done(done, total): called after each method output is recorded.
MethodDoneCallback = Callable[[int, int], Union[None, Awaitable[None]]]


def check_score_range(output: DetectionMethodOutput) -> None:
    """Raise InvalidScoreRange if score or confidence is outside [0, 1]."""
    for field in ("score", "confidence"):
        value = getattr(output, field)
        if not 0.0 <= value <= 1.0:
            raise InvalidScoreRange(output.method_name, field, value)


def clamp_output(output: DetectionMethodOutput) -> DetectionMethodOutput:
    return output.model_copy(update={
        "score": min(1.0, max(0.0, output.score)),
        "confidence": min(1.0, max(0.0, output.confidence)),
    })


def failure_marker(method: DetectionMethod, reason: str) -> DetectionMethodOutput:
    return DetectionMethodOutput(
        method_name=method.name,
        category=method.category,
        score=0.0,
        confidence=0.0,
        details=f"Detection failed: {reason}",
    )


class DetectionRunner:
    def __init__(
        self,
        methods: Optional[Sequence[DetectionMethod]] = None,
        parallel: Optional[bool] = None,
    ):
        self.methods: List[DetectionMethod] = list(methods) if methods is not None else default_methods()
        self.parallel = settings.parallel_methods if parallel is None else parallel

        names = [m.name for m in self.methods]
        if len(names) != len(set(names)):
            raise ValueError(f"Detection method names must be unique: {names}")

    def select(self, kind: MediaKind) -> List[DetectionMethod]:
        """Applicable methods for `kind`, in declaration order."""
        return [m for m in self.methods if m.applies_to(kind)]

    async def run(
        self,
        media: MediaItem,
        on_method_done: Optional[MethodDoneCallback] = None,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> List[DetectionMethodOutput]:
        selected = self.select(media.kind)
        total = len(selected)
        logger.info(
            f"[RUNNER] {media.name} ({media.kind.value}): "
            f"{total} methods, {'parallel' if self.parallel else 'sequential'}"
        )

        if self.parallel:
            _raise_if_cancelled(media, cancel_event)
            done = 0

            async def _tracked(method: DetectionMethod) -> DetectionMethodOutput:
                nonlocal done
                output = await self._invoke(method, media)
                done += 1
                await _notify(on_method_done, done, total)
                return output

            tasks = [asyncio.create_task(_tracked(m)) for m in selected]
            try:
                # gather preserves argument order, so outputs stay in declaration order.
                outputs = list(await asyncio.gather(*tasks))
            finally:
                # No method may outlive the item: cancel and join the rest before leaving.
                for task in tasks:
                    if not task.done():
                        task.cancel()
                await asyncio.gather(*tasks, return_exceptions=True)
            _raise_if_cancelled(media, cancel_event)
            return outputs

        outputs: List[DetectionMethodOutput] = []
        for method in selected:
            _raise_if_cancelled(media, cancel_event)
            outputs.append(await self._invoke(method, media))
            await _notify(on_method_done, len(outputs), total)
        return outputs

    async def _invoke(self, method: DetectionMethod, media: MediaItem) -> DetectionMethodOutput:
        try:
            output = await method.detect(media)
        except DetectionFailure as e:
            logger.warning(f"[RUNNER] {e}. Recording zero-score marker.")
            return failure_marker(method, e.reason)

        try:
            check_score_range(output)
        except InvalidScoreRange as e:
            logger.warning(f"[RUNNER] Contract violation: {e}. Clamping.")
            output = clamp_output(output)
        return output


def _raise_if_cancelled(media: MediaItem, cancel_event: Optional[asyncio.Event]) -> None:
    if cancel_event is not None and cancel_event.is_set():
        raise AnalysisCancelled(media.id)


async def _notify(callback: Optional[MethodDoneCallback], done: int, total: int) -> None:
    if callback is None:
        return
    res = callback(done, total)
    if inspect.isawaitable(res):
        await res
