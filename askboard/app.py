"""
FastAPI application entry point for the question board.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from askboard.config import get_settings
from askboard.errors import BoardError
from askboard.routes import router
from askboard.schemas import HealthResponse

logger = logging.getLogger(__name__)

SERVICE_NAME = "askboard"
SERVICE_VERSION = "0.1.0"

HTTP_ERROR_CODES = {
    404: "not_found",
    405: "method_not_allowed",
}


def _error(status_code: int, code: str, headers: dict | None = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": code}, headers=headers)


async def board_error_handler(request: Request, exc: BoardError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %r", request.method, request.url.path, exc)
    return _error(exc.status_code, exc.code)


async def http_error_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    code = HTTP_ERROR_CODES.get(exc.status_code, "server_error")
    return _error(exc.status_code, code, headers=getattr(exc, "headers", None))


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return _error(400, "invalid_body")


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _error(500, "server_error")


def create_app() -> FastAPI:
    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper())

    app = FastAPI(title="Question Board", version=SERVICE_VERSION)
    app.include_router(router, prefix=settings.api_prefix)

    app.add_exception_handler(BoardError, board_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    @app.get("/health", response_model=HealthResponse)
    def health():
        return HealthResponse(
            status="healthy", service=SERVICE_NAME, version=SERVICE_VERSION
        )

    return app


app = create_app()


if __name__ == "__main__":
    import os

    import uvicorn

    port = int(os.environ.get("PORT", 8080))
    uvicorn.run(app, host="0.0.0.0", port=port)
