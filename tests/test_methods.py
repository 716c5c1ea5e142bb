"""
Unit tests for the placeholder detectors in reality_verifier/detection/methods.py.
"""

import pytest

from reality_verifier.detection.errors import DetectionFailure
from reality_verifier.detection.methods import (
    CompressionArtifacts,
    FacialLandmarkAnalysis,
    SpectralAnalysis,
    TemporalCoherence,
    default_methods,
    make_rng,
)
from reality_verifier.schemas.analysis import MethodCategory
from reality_verifier.schemas.media import MediaKind
from tests.conftest import make_media


@pytest.mark.parametrize(
    "method_cls, low, high",
    [
        (FacialLandmarkAnalysis, 0.7, 1.0),
        (TemporalCoherence, 0.6, 1.0),
        (CompressionArtifacts, 0.65, 0.95),
    ],
)
async def test_scores_stay_in_band(method_cls, low, high):
    method = method_cls(make_rng(7))
    for _ in range(25):
        output = await method.detect(make_media("clip.mp4", kind=MediaKind.VIDEO))
        assert low <= output.score <= high
        assert 0.0 <= output.confidence <= 1.0
        assert output.method_name == method.name
        assert output.details


async def test_same_seed_gives_same_readings():
    media = make_media()
    a = [await m.detect(media) for m in default_methods(make_rng(42))[:3]]
    b = [await m.detect(media) for m in default_methods(make_rng(42))[:3]]
    assert [o.score for o in a] == [o.score for o in b]


async def test_spectral_analysis_refuses_images():
    with pytest.raises(DetectionFailure):
        await SpectralAnalysis(make_rng(1)).detect(make_media())


async def test_spectral_analysis_reads_audio():
    output = await SpectralAnalysis(make_rng(1)).detect(make_media("voice.wav", kind=MediaKind.AUDIO))
    assert output.category == MethodCategory.AUDIO


async def test_detect_does_not_mutate_media():
    media = make_media()
    before = media.model_dump()
    for method in default_methods(make_rng(3))[:3]:
        await method.detect(media)
    assert media.model_dump() == before


def test_default_methods_have_unique_names_and_categories():
    methods = default_methods(make_rng(0))
    assert len({m.name for m in methods}) == len(methods)
    assert [m.category for m in methods] == [
        MethodCategory.VISUAL,
        MethodCategory.TEMPORAL,
        MethodCategory.METADATA,
        MethodCategory.AUDIO,
    ]
