"""
Pure unit tests for reality_verifier/services/export_service.py.
"""

import csv
import io
import json

from reality_verifier.detection.aggregator import aggregate
from reality_verifier.schemas.analysis import DetectionMethodOutput, MethodCategory
from reality_verifier.schemas.media import MediaKind
from reality_verifier.services.export_service import (
    CSV_HEADER,
    report_filename,
    result_from_json,
    result_to_json,
    results_to_csv,
)
from tests.conftest import make_media


def _result(*scores, kind=MediaKind.IMAGE):
    outputs = [
        DetectionMethodOutput(
            method_name=name,
            category=category,
            score=s,
            confidence=0.8,
            details=f"{name} details",
        )
        for s, (name, category) in zip(scores, [
            ("Facial Landmark Analysis", MethodCategory.VISUAL),
            ("Temporal Coherence", MethodCategory.TEMPORAL),
            ("Compression Artifacts", MethodCategory.METADATA),
        ])
    ]
    return aggregate(make_media(kind=kind), outputs)


# ---------------------------------------------------------------------------
# CSV
# ---------------------------------------------------------------------------


def test_csv_rows_follow_input_order():
    good = _result(0.9, 0.85, 0.95)
    bad = _result(0.5, 0.4, 0.55)

    text = results_to_csv([("good.jpg", good), ("bad, copy.jpg", bad)])
    rows = list(csv.reader(io.StringIO(text)))

    assert rows[0] == CSV_HEADER
    assert rows[1] == ["good.jpg", "90", "true", "90", ""]
    assert rows[2][0] == "bad, copy.jpg"
    assert rows[2][1:4] == ["48", "false", "48"]
    assert rows[2][4].split("; ") == list(bad.warnings)


def test_csv_with_no_rows_is_header_only():
    assert results_to_csv([]).strip() == ",".join(CSV_HEADER)


# ---------------------------------------------------------------------------
# JSON
# ---------------------------------------------------------------------------


def test_json_uses_camel_case_keys():
    doc = json.loads(result_to_json(_result(0.9, 0.8, 0.7)))

    for key in ("id", "mediaId", "trustScore", "isAuthentic", "confidence",
                "methods", "metadata", "explanation", "warnings", "analyzedAt"):
        assert key in doc
    assert doc["methods"][0]["methodName"] == "Facial Landmark Analysis"
    assert doc["metadata"]["fileSize"] == 1024


def test_json_round_trip_reproduces_result():
    original = _result(0.5, 0.4, 0.55, kind=MediaKind.VIDEO)
    parsed = result_from_json(result_to_json(original))

    assert parsed == original
    assert [m.method_name for m in parsed.methods] == [m.method_name for m in original.methods]
    assert parsed.warnings == original.warnings
    assert parsed.analyzed_at == original.analyzed_at


def test_report_filename():
    result = _result(0.9)
    assert report_filename(result) == f"analysis-report-{result.id}.json"
