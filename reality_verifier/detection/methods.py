"""
Placeholder detection methods.

Each method draws its score and confidence uniformly from a fixed band, e.g.
Facial Landmark Analysis scores in [0.70, 1.00). They stand in for
model-backed detectors until those exist and satisfy the same contract.

Set DETECTOR_SEED to make runs reproducible.
"""

import asyncio
import logging
from typing import List, Optional

import numpy as np

from reality_verifier.config import settings
from reality_verifier.detection.base import DetectionMethod
from reality_verifier.schemas.analysis import DetectionMethodOutput, MethodCategory
from reality_verifier.schemas.media import MediaItem, MediaKind

logger = logging.getLogger(__name__)


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    return np.random.default_rng(settings.detector_seed if seed is None else seed)


class RandomizedMethod(DetectionMethod):
    """Scores drawn from [score_low, score_low + score_span), same for confidence."""

    score_low: float
    score_span: float
    confidence_low: float
    confidence_span: float
    details: str

    def __init__(self, rng: Optional[np.random.Generator] = None):
        self.rng = rng if rng is not None else make_rng()

    async def detect(self, media: MediaItem) -> DetectionMethodOutput:
        self.ensure_supported(media)

        # Suspension point: real detectors do I/O or inference here.
        await asyncio.sleep(settings.detection_step_delay_sec)

        score = self.score_low + self.rng.random() * self.score_span
        confidence = self.confidence_low + self.rng.random() * self.confidence_span
        logger.debug(f"[DETECT] {self.name} on {media.id}: score={score:.3f}, confidence={confidence:.3f}")

        return DetectionMethodOutput(
            method_name=self.name,
            category=self.category,
            score=float(score),
            confidence=float(confidence),
            details=self.details,
        )


class FacialLandmarkAnalysis(RandomizedMethod):
    name = "Facial Landmark Analysis"
    category = MethodCategory.VISUAL
    score_low, score_span = 0.7, 0.3
    confidence_low, confidence_span = 0.8, 0.2
    details = "Analyzed facial geometry and landmark consistency"


class TemporalCoherence(RandomizedMethod):
    name = "Temporal Coherence"
    category = MethodCategory.TEMPORAL
    score_low, score_span = 0.6, 0.4
    confidence_low, confidence_span = 0.75, 0.2
    details = "Examined frame-to-frame consistency and motion patterns"


class CompressionArtifacts(RandomizedMethod):
    name = "Compression Artifacts"
    category = MethodCategory.METADATA
    score_low, score_span = 0.65, 0.3
    confidence_low, confidence_span = 0.7, 0.25
    details = "Detected compression patterns and digital fingerprints"


class SpectralAnalysis(RandomizedMethod):
    name = "Spectral Analysis"
    category = MethodCategory.AUDIO
    kinds = frozenset({MediaKind.AUDIO})
    score_low, score_span = 0.7, 0.3
    confidence_low, confidence_span = 0.8, 0.2
    details = "Analyzed frequency patterns and voice characteristics"


def default_methods(rng: Optional[np.random.Generator] = None) -> List[DetectionMethod]:
    """Standard method set in invocation order. One generator is shared by all."""
    rng = rng if rng is not None else make_rng()
    return [
        FacialLandmarkAnalysis(rng),
        TemporalCoherence(rng),
        CompressionArtifacts(rng),
        SpectralAnalysis(rng),
    ]
