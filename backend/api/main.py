"""
FastAPI application entry point for previewing the guide.

Run with: uvicorn api.main:app --reload
"""
import logging
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Load environment variables from backend/.env (optional) before other imports that read env
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(env_path)

from api.routes import locations, pages, preferences  # noqa: E402
from domain.models import DatasetError  # noqa: E402

logger = logging.getLogger(__name__)

# Create app
app = FastAPI(
    title="Local Guide API",
    description="Preview server and JSON API for the local guide dataset",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "PUT"],
    allow_headers=["*"],
)


@app.on_event("startup")
def startup_event():
    """Load the dataset up front so a broken dataset fails at startup."""
    try:
        count = len(locations.catalog.all_locations())
    except DatasetError:
        logger.exception("Dataset could not be loaded")
        raise
    logger.info("Serving %s locations", count)


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}


# Include routers; the page router's catch-all must come last
app.include_router(locations.router, prefix="/api/locations", tags=["locations"])
app.include_router(preferences.router, prefix="/api/preferences", tags=["preferences"])
app.include_router(pages.router, tags=["pages"])
