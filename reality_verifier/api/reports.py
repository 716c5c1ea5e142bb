"""
Report routes: fetch stored analyses and batches, and download them as JSON / CSV.
"""

from fastapi import APIRouter, HTTPException
from fastapi.responses import Response

from reality_verifier.schemas.analysis import AnalysisResult
from reality_verifier.schemas.batch import BatchResult, SlotStatus
from reality_verifier.services.export_service import (
    CSV_FILENAME,
    report_filename,
    result_to_json,
    results_to_csv,
)
from reality_verifier.services.results_service import get_batch, get_result

router = APIRouter(prefix="/api/v1", tags=["Reports"])


def _load_result(analysis_id: str) -> AnalysisResult:
    result = get_result(analysis_id)
    if result is None:
        raise HTTPException(status_code=404, detail="Analysis not found or expired.")
    return result


def _load_batch(batch_id: str) -> BatchResult:
    batch = get_batch(batch_id)
    if batch is None:
        raise HTTPException(status_code=404, detail="Batch not found or expired.")
    return batch


@router.get("/analyses/{analysis_id}", response_model=AnalysisResult)
async def get_analysis(analysis_id: str):
    return _load_result(analysis_id)


@router.get("/analyses/{analysis_id}/export.json")
async def export_analysis_json(analysis_id: str):
    result = _load_result(analysis_id)
    return Response(
        content=result_to_json(result),
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{report_filename(result)}"'},
    )


@router.get("/batches/{batch_id}", response_model=BatchResult)
async def get_batch_route(batch_id: str):
    return _load_batch(batch_id)


@router.get("/batches/{batch_id}/export.csv")
async def export_batch_csv(batch_id: str):
    """Completed slots only, in input order."""
    batch = _load_batch(batch_id)
    rows = [
        (slot.media_name, slot.result)
        for slot in batch.slots
        if slot.status == SlotStatus.COMPLETED
    ]
    return Response(
        content=results_to_csv(rows),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{CSV_FILENAME}"'},
    )
