"""
Dashboard route: aggregate statistics over recently stored analyses.
"""

from fastapi import APIRouter, Query

from reality_verifier.config import settings
from reality_verifier.schemas.analysis import DashboardStats
from reality_verifier.services.results_service import compute_stats, list_results

router = APIRouter(prefix="/api/v1", tags=["Dashboard"])


@router.get("/dashboard/stats", response_model=DashboardStats)
async def dashboard_stats(limit: int = Query(settings.dashboard_recent_limit, ge=1, le=1000)):
    return compute_stats(list_results(limit))
