"""
Aggregator — turns one item's method outputs into an AnalysisResult.

Policy:
  avg         = unweighted mean of method scores (confidence does not weight)
  trust_score = round_half_up(avg * 100), clamped to [0, 100]
  authentic   = trust_score > settings.authentic_threshold  (strict)
  confidence  = round_half_up(avg * 100)

Warnings are the fixed STANDARD_WARNINGS list, present iff not authentic.
"""

import logging
import math
from datetime import datetime
from typing import Optional, Sequence

from reality_verifier.config import settings
from reality_verifier.detection.errors import EmptyMethodSet
from reality_verifier.detection.metadata import build_metadata
from reality_verifier.schemas.analysis import AnalysisResult, DetectionMethodOutput
from reality_verifier.schemas.media import MediaItem

logger = logging.getLogger(__name__)

AUTHENTIC_EXPLANATION = (
    "Our AI analysis indicates this media appears to be authentic based on multiple "
    "detection methods including facial landmark consistency, temporal coherence, "
    "and metadata validation."
)
MANIPULATED_EXPLANATION = (
    "Our AI analysis has detected potential signs of manipulation. This could indicate "
    "the presence of deepfake technology or other digital alterations."
)

STANDARD_WARNINGS = (
    "Potential AI-generated content detected",
    "Unusual compression patterns found",
    "Temporal inconsistencies identified",
)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def to_percent(avg: float) -> int:
    return min(100, max(0, round_half_up(avg * 100)))


def is_authentic(trust_score: int) -> bool:
    return trust_score > settings.authentic_threshold


def aggregate(
    media: MediaItem,
    methods: Sequence[DetectionMethodOutput],
    analyzed_at: Optional[datetime] = None,
) -> AnalysisResult:
    if not methods:
        raise EmptyMethodSet(media.id)

    avg_score = sum(m.score for m in methods) / len(methods)
    trust_score = to_percent(avg_score)
    authentic = is_authentic(trust_score)

    extra = {"analyzed_at": analyzed_at} if analyzed_at is not None else {}
    result = AnalysisResult(
        media_id=media.id,
        trust_score=trust_score,
        is_authentic=authentic,
        confidence=to_percent(avg_score),
        methods=tuple(methods),
        metadata=build_metadata(media, methods),
        explanation=AUTHENTIC_EXPLANATION if authentic else MANIPULATED_EXPLANATION,
        warnings=() if authentic else STANDARD_WARNINGS,
        **extra,
    )

    logger.info(
        f"[AGGREGATE] {media.name}: avg={avg_score:.3f}, trust={trust_score}, "
        f"authentic={authentic}, methods={len(methods)}"
    )
    return result
