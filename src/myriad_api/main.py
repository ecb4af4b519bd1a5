"""Main entry point for the Myriad application."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from myriad_api.api.v1 import api_v1
from myriad_api.core.errors import MyriadError
from myriad_api.core.settings import settings
from myriad_api.services.fanout import get_fanout_queue

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Social content API with wallets, tips, votes and reports",
    version=settings.app_version,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

app.include_router(api_v1, prefix="/api/v1")


@app.exception_handler(MyriadError)
async def myriad_error_handler(request: Request, exc: MyriadError) -> JSONResponse:
    """Render domain errors the same way FastAPI renders ``HTTPException``."""
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.on_event("shutdown")
async def on_shutdown() -> None:
    queue = get_fanout_queue()
    if queue.pending:
        logger.info("Waiting for %d side effects before shutdown", queue.pending)
    await queue.drain()


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("myriad_api.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
