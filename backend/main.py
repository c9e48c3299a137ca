"""Location Base: capture and list device locations, FastAPI backend."""
import logging
import os
import subprocess
import sys

from fastapi import FastAPI

# Show captures, permission denials and storage warnings (INFO level)
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logging.getLogger("capture_core").setLevel(logging.INFO)
from fastapi.middleware.cors import CORSMiddleware

from api.locations import router as locations_router
from api.preferences import router as preferences_router
from api.routes import router
from capture_core import runtime
from capture_core.capture import CaptureFlow
from capture_core.errors import StorageError
from capture_core.preferences import PreferenceStore
from capture_core.providers import build_provider
from capture_core.storage import LocationStore
from schemas.health import HealthResponse
from utils.config import PORT

LOG = logging.getLogger(__name__)

app = FastAPI(
    title="Location Base",
    description="Captures device locations on demand and keeps them in local storage",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:8080", "http://127.0.0.1:8080"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API routes under /api (no static mount at / so /api is never shadowed)
app.include_router(router, prefix="/api")
app.include_router(locations_router, prefix="/api")
app.include_router(preferences_router, prefix="/api")


@app.get("/api/health", response_model=HealthResponse)
def api_health() -> HealthResponse:
    """Explicit health route so /api/health is always available."""
    return HealthResponse()


@app.on_event("startup")
def startup() -> None:
    """Run DB migrations, load dark mode once and the stored locations."""
    backend_dir = os.path.dirname(os.path.abspath(__file__))
    result = subprocess.run(
        [sys.executable, "-m", "alembic", "upgrade", "head"],
        cwd=backend_dir,
        capture_output=True,
        text=True,
    )
    if result.returncode != 0:
        raise RuntimeError(f"Alembic upgrade failed: {result.stderr or result.stdout}")
    _configure_runtime()


def _configure_runtime() -> None:
    """Build the capture flow and preference store from configuration."""
    preferences = PreferenceStore()
    preferences.load()
    flow = CaptureFlow(provider=build_provider(), store=LocationStore())
    try:
        flow.reload()
    except StorageError as e:
        LOG.error("Could not load stored locations at startup: %s", e)
    runtime.configure(flow, preferences)


@app.get("/")
def root() -> dict:
    """Root redirect/info."""
    return {"service": "location-base", "docs": "/docs", "health": "/api/health"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="127.0.0.1", port=PORT)
