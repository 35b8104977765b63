"""
FastAPI application entry point for the Hearth backend.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from hearth.config import get_settings
from hearth.errors import HearthError
from hearth.routes import router

logger = logging.getLogger(__name__)


async def hearth_error_handler(request: Request, exc: HearthError) -> JSONResponse:
    logger.info(
        "%s %s failed: %s (%s)",
        request.method,
        request.url.path,
        exc.detail,
        exc.error_code,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "error_code": exc.error_code},
    )


def create_app() -> FastAPI:
    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper())
    app = FastAPI(title="Hearth Backend (FastAPI)", version="0.1.0")
    app.add_exception_handler(HearthError, hearth_error_handler)
    app.include_router(router, prefix=settings.api_prefix)
    return app


app = create_app()
