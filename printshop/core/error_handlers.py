# printshop/core/error_handlers.py

from fastapi import FastAPI, Request, HTTPException
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
import logging
import traceback

from .exceptions import PrintShopError, ErrorCode

logger = logging.getLogger(__name__)

STATUS_CODE_MAP = {
    ErrorCode.INVALID_QUANTITY: 400,
    ErrorCode.UNKNOWN_PRODUCT: 404,
    ErrorCode.MISSING_RATE_TABLE: 503,
    ErrorCode.CALCULATION_ERROR: 422,
    ErrorCode.INVALID_CONFIGURATION: 500,
    ErrorCode.INTERNAL_SERVER_ERROR: 500,
}

def status_code_for(code: ErrorCode) -> int:
    return STATUS_CODE_MAP.get(code, 400)

def failure_response(failure) -> JSONResponse:
    """Render a QuoteFailure with the status mapped from its error code."""
    return JSONResponse(
        status_code=status_code_for(failure.code),
        content=failure.to_response()
    )

def setup_error_handlers(app: FastAPI):
    """Set up global error handlers for the FastAPI application."""

    @app.exception_handler(PrintShopError)
    async def printshop_error_handler(request: Request, exc: PrintShopError):
        """Handle pricing service errors raised outside the engine."""
        status_code = status_code_for(exc.code)

        logger.error(
            f"PrintShop Error: {exc.code.value}",
            extra={
                "error_code": exc.code.value,
                "user_message": exc.user_message,
                "technical_details": exc.technical_details,
                "request_url": str(request.url),
                "request_method": request.method
            }
        )

        return JSONResponse(
            status_code=status_code,
            content=exc.to_response()
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Handle request body validation errors."""
        errors = []
        for error in exc.errors():
            field_path = " -> ".join(str(loc) for loc in error["loc"])
            errors.append({
                "field": field_path,
                "message": error["msg"],
                "type": error["type"]
            })

        logger.warning(
            "Validation error",
            extra={
                "validation_errors": errors,
                "request_url": str(request.url),
                "request_method": request.method
            }
        )

        return JSONResponse(
            status_code=422,
            content={
                "error": {
                    "code": "VALIDATION_ERROR",
                    "message": "Request validation failed",
                    "details": errors
                }
            }
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        """Handle HTTP exceptions, keeping error payloads already in our format."""
        if isinstance(exc.detail, dict) and "error" in exc.detail:
            return JSONResponse(status_code=exc.status_code, content=exc.detail)

        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": {
                    "code": f"HTTP_{exc.status_code}",
                    "message": exc.detail
                }
            }
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle all other exceptions."""
        logger.error(
            f"Unhandled exception: {type(exc).__name__}: {str(exc)}",
            extra={
                "exception_type": type(exc).__name__,
                "request_url": str(request.url),
                "request_method": request.method,
                "traceback": traceback.format_exc()
            }
        )

        return JSONResponse(
            status_code=500,
            content={
                "error": {
                    "code": ErrorCode.INTERNAL_SERVER_ERROR.value,
                    "message": "An internal server error occurred. Please try again later."
                }
            }
        )
