"""
Unit tests for reality_verifier/detection/pipeline.py — analyze_media().

Checks the per-item progress checkpoints and the hand-off to the aggregator.
"""

import pytest

from reality_verifier.detection.errors import EmptyMethodSet
from reality_verifier.detection.pipeline import analyze_media
from reality_verifier.detection.runner import DetectionRunner
from reality_verifier.schemas.media import MediaKind
from tests.conftest import FixedMethod, make_media, make_runner

CHECKPOINTS = [10, 25, 45, 70, 85, 100]


@pytest.mark.parametrize("n_methods", [1, 2, 3, 4, 6])
async def test_progress_passes_through_every_checkpoint(n_methods):
    seen = []
    await analyze_media(
        make_media(),
        runner=make_runner(*([0.9] * n_methods)),
        on_progress=seen.append,
    )
    assert seen == CHECKPOINTS


async def test_progress_with_parallel_methods():
    seen = []
    await analyze_media(make_media(), runner=make_runner(0.9, 0.8, 0.7, parallel=True), on_progress=seen.append)
    assert seen == CHECKPOINTS


async def test_async_progress_callback():
    seen = []

    async def _record(value):
        seen.append(value)

    await analyze_media(make_media(), runner=make_runner(0.9), on_progress=_record)
    assert seen[-1] == 100


async def test_result_matches_scores():
    result = await analyze_media(make_media(), runner=make_runner(0.9, 0.85, 0.95))
    assert result.trust_score == 90
    assert result.is_authentic is True
    assert len(result.methods) == 3


async def test_no_applicable_methods_fails_without_result():
    seen = []
    runner = DetectionRunner(methods=[FixedMethod("video only", kinds={MediaKind.VIDEO})])

    with pytest.raises(EmptyMethodSet):
        await analyze_media(make_media(), runner=runner, on_progress=seen.append)

    assert 100 not in seen


async def test_default_runner_produces_valid_result():
    result = await analyze_media(make_media("voice.wav", kind=MediaKind.AUDIO))
    assert 0 <= result.trust_score <= 100
    assert len(result.methods) == 4
