import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Load environment variables before settings-dependent modules do real work
load_dotenv()

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

from reality_verifier.api import analysis, dashboard, reports, system  # noqa: E402
from reality_verifier.detection.runner import DetectionRunner  # noqa: E402
from reality_verifier.integrations import redis_client  # noqa: E402


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    redis_client.initialize()
    app.state.runner = DetectionRunner()
    logger.info(f"[STARTUP] Detection methods: {[m.name for m in app.state.runner.methods]}")
    yield
    redis_client.shutdown()


app = FastAPI(title="Reality Verifier API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(system.router)
app.include_router(analysis.router)
app.include_router(reports.router)
app.include_router(dashboard.router)
