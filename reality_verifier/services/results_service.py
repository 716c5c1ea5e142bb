"""
Append-only AnalysisResult store: Redis (preferred) → Local Memory (fallback).

Each result is written exactly once under `analysis:{id}`; a second write for
the same id raises ResultAlreadyStored instead of overwriting. The newest ids
are also pushed onto `analysis:index` so the dashboard can list recent work;
the index is trimmed to `result_index_max_size` ids.
Finished batches are kept the same way under `batch:{id}`.

The Redis client is read at call-time via the integration module so it picks
up the instance initialized during the FastAPI lifespan.
"""

import logging
from collections import OrderedDict
from typing import List, Optional, Sequence

from reality_verifier.config import settings
from reality_verifier.detection.aggregator import round_half_up
from reality_verifier.integrations import redis_client as redis_module
from reality_verifier.schemas.analysis import AnalysisResult, DashboardStats
from reality_verifier.schemas.batch import BatchResult

logger = logging.getLogger(__name__)

INDEX_KEY = "analysis:index"

local_store: "OrderedDict[str, AnalysisResult]" = OrderedDict()
local_batches: "OrderedDict[str, BatchResult]" = OrderedDict()


class ResultAlreadyStored(Exception):
    def __init__(self, record_id: str):
        self.record_id = record_id
        super().__init__(f"{record_id} is already stored")


def _key(result_id: str) -> str:
    return f"analysis:{result_id}"


def save_result(result: AnalysisResult) -> None:
    rc = redis_module.client
    if rc:
        payload = result.model_dump_json(by_alias=True)
        written = rc.set(_key(result.id), payload, nx=True, ex=settings.result_store_ttl_sec)
        if not written:
            raise ResultAlreadyStored(result.id)
        rc.lpush(INDEX_KEY, result.id)
        rc.ltrim(INDEX_KEY, 0, settings.result_index_max_size - 1)
        logger.info(f"[STORE] Redis saved {result.id}")
        return

    if result.id in local_store:
        raise ResultAlreadyStored(result.id)
    local_store[result.id] = result
    if len(local_store) > settings.local_store_max_size:
        evicted, _ = local_store.popitem(last=False)
        logger.info(f"[STORE] Local store full, evicted {evicted}")
    logger.info(f"[STORE] Local Memory saved {result.id}")


def get_result(result_id: str) -> Optional[AnalysisResult]:
    rc = redis_module.client
    if rc:
        raw = rc.get(_key(result_id))
        if not raw:
            logger.info(f"[STORE] Redis MISS for {result_id}")
            return None
        return AnalysisResult.model_validate_json(raw)

    return local_store.get(result_id)


def list_results(limit: int = settings.dashboard_recent_limit) -> List[AnalysisResult]:
    """Most recent first. Expired Redis entries are skipped."""
    rc = redis_module.client
    if rc:
        ids = rc.lrange(INDEX_KEY, 0, limit - 1) or []
        results = []
        for result_id in ids:
            result = get_result(result_id)
            if result is not None:
                results.append(result)
        return results

    return list(reversed(local_store.values()))[:limit]


def save_batch(batch: BatchResult) -> None:
    """Store a finished batch (slots + embedded results) once, under `batch:{id}`."""
    rc = redis_module.client
    if rc:
        payload = batch.model_dump_json(by_alias=True)
        if not rc.set(f"batch:{batch.id}", payload, nx=True, ex=settings.result_store_ttl_sec):
            raise ResultAlreadyStored(batch.id)
        logger.info(f"[STORE] Redis saved {batch.id} ({len(batch.slots)} slots)")
        return

    if batch.id in local_batches:
        raise ResultAlreadyStored(batch.id)
    local_batches[batch.id] = batch
    if len(local_batches) > settings.local_store_max_size:
        local_batches.popitem(last=False)


def get_batch(batch_id: str) -> Optional[BatchResult]:
    rc = redis_module.client
    if rc:
        raw = rc.get(f"batch:{batch_id}")
        return BatchResult.model_validate_json(raw) if raw else None
    return local_batches.get(batch_id)


def compute_stats(results: Sequence[AnalysisResult]) -> DashboardStats:
    total = len(results)
    authentic = sum(1 for r in results if r.is_authentic)
    avg_trust = round_half_up(sum(r.trust_score for r in results) / total) if total else 0
    rate = round_half_up(authentic / total * 100) if total else 0
    return DashboardStats(
        total_analyses=total,
        authentic_media=authentic,
        suspicious_media=total - authentic,
        avg_trust_score=avg_trust,
        authenticity_rate=rate,
    )
