"""
Exception handlers rendering every failure as {"error", "details"?}.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from commlog.core.errors import CommlogError, InternalError, MethodNotAllowed

logger = logging.getLogger(__name__)

# Messages for framework-generated HTTP errors
HTTP_ERROR_MESSAGES = {
    status.HTTP_404_NOT_FOUND: "Not found",
    status.HTTP_405_METHOD_NOT_ALLOWED: MethodNotAllowed().message,
}


def create_error_response(error: CommlogError) -> JSONResponse:
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


def register_exception_handlers(app: FastAPI, debug: bool = False) -> None:
    """
    Attach the error handlers to the app.

    Args:
        app: FastAPI application
        debug: Include the exception message of unexpected errors as details
    """

    @app.exception_handler(CommlogError)
    async def commlog_error_handler(request: Request, exc: CommlogError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message} ({exc.details})")
        else:
            logger.info(f"{request.method} {request.url.path} rejected: {exc.message}")
        return create_error_response(exc)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        message = HTTP_ERROR_MESSAGES.get(exc.status_code, str(exc.detail))
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": message},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        details = "; ".join(
            f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg')}"
            for err in exc.errors()
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Invalid request parameters", "details": details},
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception(f"Unexpected error on {request.method} {request.url.path}")
        error = InternalError(details=str(exc) if debug else None)
        return create_error_response(error)
