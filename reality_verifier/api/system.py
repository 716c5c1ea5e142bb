"""
System routes: health check and robots.txt.
"""

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse

from reality_verifier.integrations import redis_client as redis_module

router = APIRouter(tags=["System"])


@router.get("/health")
async def health(request: Request):
    runner = request.app.state.runner
    return {
        "status": "healthy",
        "store": "redis" if redis_module.client else "memory",
        "methods": [m.name for m in runner.methods],
    }


@router.get("/robots.txt", response_class=PlainTextResponse)
def robots():
    return "User-agent: *\nDisallow: /"
