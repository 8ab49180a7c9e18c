"""FastAPI app factory."""

from __future__ import annotations

import logging

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from kolam.config import settings
from kolam.errors import KolamError, SequenceIntegrityError

load_dotenv()

logging.basicConfig(
    level=getattr(logging, settings.kolam_log_level.upper(), logging.DEBUG),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)

logger = logging.getLogger(__name__)


async def _kolam_error_handler(request: Request, exc: KolamError) -> JSONResponse:
    # A broken step sequence is an engine defect, not bad input
    status = 500 if isinstance(exc, SequenceIntegrityError) else 422
    logger.warning("%s %s failed: %s (%s)", request.method, request.url.path, exc, exc.code)
    return JSONResponse(status_code=status, content={"error": exc.code, "message": str(exc)})


def create_app() -> FastAPI:
    app = FastAPI(
        title="Kolam",
        description="Kolam pattern engine: generation, symmetry analysis, step sequencing and SVG export",
        version="0.1.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(KolamError, _kolam_error_handler)

    # Import all style modules to trigger registration
    from kolam.engine.generator import register_styles

    register_styles()

    from kolam.api.router import api_router

    app.include_router(api_router)

    return app


app = create_app()
