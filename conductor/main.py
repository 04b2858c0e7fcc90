"""
FastAPI application entry point.

Assembles the FastAPI app with the advisor team router.
"""

import logging
import os
import sys

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from conductor.orchestration.team_api import router as team_router
from conductor.shared.logging import setup_logging


# ============================================================================
# Logging configuration (single source of truth for the service)
# ============================================================================
LOG_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(name)-35s | %(message)s"
)

logging.basicConfig(
    level=logging.INFO,
    format=LOG_FORMAT,
    datefmt="%Y-%m-%d %H:%M:%S",
    handlers=[logging.StreamHandler(sys.stdout)],
    force=True,  # Override any prior basicConfig calls
)

# Quiet noisy third-party loggers
logging.getLogger("httpcore").setLevel(logging.WARNING)
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("openai").setLevel(logging.WARNING)

# JSON lines for the conductor loggers when requested
if os.environ.get("CONDUCTOR_LOG_FORMAT", "").lower() == "json":
    setup_logging(log_file=os.environ.get("CONDUCTOR_LOG_FILE"))


# Create FastAPI app
app = FastAPI(
    title="Conductor",
    description="Advisor team orchestration for software projects",
    version="0.1.0",
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(team_router)


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "name": "Conductor",
        "version": "0.1.0",
        "endpoints": {
            "team": "/api/team",
            "health": "/health",
        },
    }


@app.get("/health")
async def health():
    """Global health check endpoint."""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
