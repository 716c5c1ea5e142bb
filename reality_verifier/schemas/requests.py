from typing import List

from pydantic import BaseModel, Field

from reality_verifier.schemas.batch import BatchResult, ProgressEvent


class AnalyzeUrlRequest(BaseModel):
    url: str = Field(min_length=1)


class BatchAnalyzeRequest(BaseModel):
    urls: List[str] = Field(min_length=1)


class BatchAnalyzeResponse(BaseModel):
    batch: BatchResult
    progress: List[ProgressEvent]   # every reading emitted during the run, in order
