from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.exceptions import SessionAuthError
from app.core.logging import get_logger
from app.schemas.response import ErrorResponse
from utils.constants import INVALID_BODY_MESSAGE, SERVER_ERROR_MESSAGE

logger = get_logger(__name__)


def add_exception_handlers(app: FastAPI):
    """
    Registers exception handlers with the FastAPI app.
    Every error body is {message, code}; internal detail is only logged.
    """
    @app.exception_handler(SessionAuthError)
    async def session_auth_exception_handler(request: Request, exc: SessionAuthError):
        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(
                message=exc.message,
                code=exc.code,
            ).model_dump()
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """
        Handles standard HTTP exceptions (404, 405, etc.)
        """
        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(
                message=str(exc.detail),
                code="HTTP_ERROR",
            ).model_dump(),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """
        Handles request parsing errors. Reported as 400 like every other input error.
        """
        logger.debug(f"Request validation failed: {exc.errors()}")
        return JSONResponse(
            status_code=400,
            content=ErrorResponse(
                message=INVALID_BODY_MESSAGE,
                code="VALIDATION_ERROR",
            ).model_dump()
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """
        Catch-all for unhandled exceptions.
        """
        logger.error(
            f"Unhandled exception: {type(exc).__name__}",
            extra={
                "method": request.method,
                "path": request.url.path,
            },
            exc_info=True
        )

        return JSONResponse(
            status_code=500,
            content=ErrorResponse(
                message=SERVER_ERROR_MESSAGE,
                code="INTERNAL_ERROR",
            ).model_dump()
        )
