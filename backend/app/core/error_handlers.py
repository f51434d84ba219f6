"""
FastAPI exception handlers rendering a uniform error envelope.
"""
import logging
from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from app.core.exceptions import GlobetrotterError, ErrorCode
from app.core.utils import format_error

logger = logging.getLogger(__name__)


def setup_error_handlers(app):
    """
    Set up all error handlers for the FastAPI application.

    Args:
        app: FastAPI application instance
    """

    @app.exception_handler(GlobetrotterError)
    async def globetrotter_exception_handler(request: Request, exc: GlobetrotterError):
        if exc.status_code >= 500:
            logger.error(f"{exc.error_code.value} on {request.method} {request.url.path}: {exc.message}")
        return JSONResponse(
            status_code=exc.status_code,
            content=format_error(exc.message, exc.error_code.value, exc.details)
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        # Missing or malformed request fields are client errors, reported as 400
        return JSONResponse(
            status_code=400,
            content=format_error(
                "Invalid request",
                ErrorCode.VALIDATION_ERROR.value,
                {"errors": jsonable_encoder(exc.errors())}
            )
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(
            status_code=500,
            content=format_error("Internal Server Error", ErrorCode.INTERNAL_SERVER_ERROR.value)
        )
