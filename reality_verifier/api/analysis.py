"""
Analysis routes: /api/v1/analyze and /api/v1/analyze/batch

/analyze accepts multipart/form-data with a 'file' or 'url' field, or a JSON
payload { "url": "https://..." }. /analyze/batch accepts { "urls": [...] } or
multipart/form-data with repeated 'file' / 'url' fields. Uploads are spooled to temp
files that are removed once the request finishes.
"""

import json
import logging
import os
import tempfile
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from starlette.datastructures import UploadFile

from reality_verifier.config import settings
from reality_verifier.detection.errors import EmptyMethodSet
from reality_verifier.detection.runner import DetectionRunner
from reality_verifier.schemas.analysis import AnalysisResult
from reality_verifier.schemas.media import MediaItem
from reality_verifier.schemas.requests import (
    AnalyzeUrlRequest,
    BatchAnalyzeRequest,
    BatchAnalyzeResponse,
)
from reality_verifier.services.analysis_service import analyze_and_store, run_batch_and_store
from reality_verifier.services.intake_service import media_from_upload, media_from_url
from reality_verifier.services.results_service import ResultAlreadyStored

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["Analysis"])


def get_runner(request: Request) -> DetectionRunner:
    return request.app.state.runner


async def _analyze(media, runner: DetectionRunner) -> AnalysisResult:
    try:
        return await analyze_and_store(media, runner=runner)
    except EmptyMethodSet as e:
        raise HTTPException(status_code=422, detail=str(e))
    except ResultAlreadyStored as e:
        raise HTTPException(status_code=409, detail=str(e))


async def _spool_upload(upload: UploadFile) -> MediaItem:
    """Write an upload to a temp file and describe it as a MediaItem."""
    content = await upload.read()
    filename = upload.filename or "uploaded_file"
    suffix = os.path.splitext(filename)[1].lower()

    with tempfile.NamedTemporaryFile(delete=False, suffix=suffix) as tmp_file:
        tmp_file.write(content)
        temp_path = tmp_file.name

    try:
        return media_from_upload(filename, upload.content_type, len(content), temp_path)
    except HTTPException:
        _remove_temp(temp_path)
        raise


def _remove_temp(path: str) -> None:
    if os.path.exists(path):
        os.remove(path)


def _check_batch_size(count: int) -> None:
    if count > settings.max_batch_items:
        raise HTTPException(
            status_code=400,
            detail=f"Too many items. Max {settings.max_batch_items} per batch."
        )


@router.post("/analyze", response_model=AnalysisResult)
async def analyze(request: Request, runner: DetectionRunner = Depends(get_runner)):
    """Analyze one image, video or audio item and store the result."""
    content_type = request.headers.get("content-type", "")

    if "application/json" in content_type:
        try:
            payload = await request.json()
        except json.JSONDecodeError:
            raise HTTPException(status_code=400, detail="Invalid JSON body")
        try:
            body = AnalyzeUrlRequest.model_validate(payload)
        except ValidationError:
            raise HTTPException(status_code=400, detail="Missing 'url' in JSON body")
        return await _analyze(media_from_url(body.url), runner)

    if "multipart/form-data" not in content_type:
        raise HTTPException(
            status_code=415,
            detail="Unsupported Media Type. Use multipart/form-data or application/json"
        )

    form = await request.form()
    file_obj = form.get("file")
    url_obj = form.get("url")

    if isinstance(url_obj, str) and url_obj and not file_obj:
        return await _analyze(media_from_url(url_obj), runner)

    if not isinstance(file_obj, UploadFile):
        raise HTTPException(status_code=400, detail="Must provide 'file' or 'url' in form data")

    media = await _spool_upload(file_obj)
    try:
        return await _analyze(media, runner)
    finally:
        _remove_temp(media.file_path)


@router.post("/analyze/batch", response_model=BatchAnalyzeResponse)
async def analyze_batch(request: Request, runner: DetectionRunner = Depends(get_runner)):
    """
    Analyze several items in order. Accepts JSON { "urls": [...] } or
    multipart/form-data with repeated 'file' and/or 'url' fields (kept in
    the order they were sent). Items that fail are reported as failed
    slots; the rest of the batch still completes.
    """
    content_type = request.headers.get("content-type", "")

    if "application/json" in content_type:
        try:
            payload = await request.json()
        except json.JSONDecodeError:
            raise HTTPException(status_code=400, detail="Invalid JSON body")
        try:
            body = BatchAnalyzeRequest.model_validate(payload)
        except ValidationError as e:
            raise RequestValidationError(e.errors())
        _check_batch_size(len(body.urls))
        return await _run_batch([media_from_url(url) for url in body.urls], runner)

    if "multipart/form-data" not in content_type:
        raise HTTPException(
            status_code=415,
            detail="Unsupported Media Type. Use multipart/form-data or application/json"
        )

    form = await request.form()
    fields = [
        (key, value) for key, value in form.multi_items()
        if (key == "file" and isinstance(value, UploadFile))
        or (key == "url" and isinstance(value, str) and value)
    ]
    if not fields:
        raise HTTPException(status_code=400, detail="Must provide 'file' or 'url' fields in form data")
    _check_batch_size(len(fields))

    items: List[MediaItem] = []
    try:
        for key, value in fields:
            if key == "file":
                items.append(await _spool_upload(value))
            else:
                items.append(media_from_url(value))
        return await _run_batch(items, runner)
    finally:
        for media in items:
            if not media.is_remote:
                _remove_temp(media.file_path)


async def _run_batch(items: List[MediaItem], runner: DetectionRunner) -> BatchAnalyzeResponse:
    try:
        batch, events = await run_batch_and_store(items, runner=runner)
    except ResultAlreadyStored as e:
        raise HTTPException(status_code=409, detail=str(e))

    return BatchAnalyzeResponse(batch=batch, progress=events)
