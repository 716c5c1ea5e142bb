"""
Flat exports of AnalysisResult for download and sharing.

CSV:  one row per result: File Name, Trust Score, Authentic, Confidence, Warnings
      (warnings joined with "; ").
JSON: the full result with camelCase keys, including nested methods and
      metadata. `result_from_json` parses it back into an identical model.
"""

import csv
import io
from typing import Iterable, Tuple

from reality_verifier.schemas.analysis import AnalysisResult

CSV_HEADER = ["File Name", "Trust Score", "Authentic", "Confidence", "Warnings"]
CSV_FILENAME = "deepfake-analysis-results.csv"
WARNING_SEPARATOR = "; "


def report_filename(result: AnalysisResult) -> str:
    return f"analysis-report-{result.id}.json"


def results_to_csv(rows: Iterable[Tuple[str, AnalysisResult]]) -> str:
    """rows: (display name, result) pairs in the order they should appear."""
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for name, result in rows:
        writer.writerow([
            name,
            result.trust_score,
            "true" if result.is_authentic else "false",
            result.confidence,
            WARNING_SEPARATOR.join(result.warnings),
        ])
    return buf.getvalue()


def result_to_json(result: AnalysisResult) -> str:
    return result.model_dump_json(by_alias=True, indent=2)


def result_from_json(text: str) -> AnalysisResult:
    return AnalysisResult.model_validate_json(text)
