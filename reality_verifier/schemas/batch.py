import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from reality_verifier.schemas.analysis import AnalysisResult

_CAMEL = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SlotStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"


class BatchStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    ERROR = "error"


class BatchSlot(BaseModel):
    """One input position of a batch: a full result, or a marker saying why not."""

    model_config = _CAMEL

    index: int
    media_id: str
    media_name: str
    status: SlotStatus = SlotStatus.PENDING
    result: Optional[AnalysisResult] = None
    error: Optional[str] = None


class ProgressEvent(BaseModel):
    """
    Progress reading emitted by the batch coordinator.

    `batch_progress` is the cumulative reading for the whole batch (0–100).
    Per-item checkpoints set `item_progress`; the cumulative reading emitted
    once an item is done (completed or failed) leaves it None.
    """

    model_config = _CAMEL

    batch_progress: int
    item_index: Optional[int] = None
    media_id: Optional[str] = None
    item_progress: Optional[int] = None


def _batch_id() -> str:
    return f"batch-{uuid.uuid4().hex}"


class BatchResult(BaseModel):
    model_config = _CAMEL

    id: str = Field(default_factory=_batch_id)
    status: BatchStatus = BatchStatus.PENDING
    slots: List[BatchSlot] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    completed_at: Optional[datetime] = None

    @property
    def results(self) -> List[AnalysisResult]:
        """Completed results, in input order."""
        return [s.result for s in self.slots if s.status == SlotStatus.COMPLETED]

    @property
    def failed(self) -> List[BatchSlot]:
        return [s for s in self.slots if s.status == SlotStatus.FAILED]

    @property
    def cancelled(self) -> List[BatchSlot]:
        return [s for s in self.slots if s.status == SlotStatus.CANCELLED]
