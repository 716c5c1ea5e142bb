"""
DetectionMethod contract.

Every detector, placeholder or model-backed, subclasses `DetectionMethod` and
implements `detect()`. DetectionRunner depends on nothing else, so a real
detector can replace a placeholder without touching the runner or aggregator.
"""

from abc import ABC, abstractmethod
from typing import FrozenSet

from reality_verifier.detection.errors import DetectionFailure
from reality_verifier.schemas.analysis import DetectionMethodOutput, MethodCategory
from reality_verifier.schemas.media import MediaItem, MediaKind

ALL_KINDS: FrozenSet[MediaKind] = frozenset(MediaKind)


class DetectionMethod(ABC):
    """
    One independent evaluator.

    Subclasses set `name` (unique within a runner), `category`, and optionally
    `kinds` to restrict which media kinds the method is selected for.
    `detect()` must not mutate the MediaItem and either returns one output or
    raises DetectionFailure.
    """

    name: str
    category: MethodCategory
    kinds: FrozenSet[MediaKind] = ALL_KINDS

    def applies_to(self, kind: MediaKind) -> bool:
        return kind in self.kinds

    def ensure_supported(self, media: MediaItem) -> None:
        if not self.applies_to(media.kind):
            raise DetectionFailure(self.name, f"cannot evaluate {media.kind.value} media")

    @abstractmethod
    async def detect(self, media: MediaItem) -> DetectionMethodOutput:
        ...

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name!r}>"
