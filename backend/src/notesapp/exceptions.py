"""
Application exception hierarchy.

Services raise these instead of building HTTP responses; the handlers
registered in ``register_exception_handlers`` turn each kind into a status
code and a ``{"message": ...}`` body.

    NotesAppError (base)        -> 500
    ├── ValidationError         -> 400
    ├── AuthenticationError     -> 401
    ├── NotFoundError           -> 404 (missing OR not visible to the caller)
    └── DatabaseError           -> 500
"""

from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core.logging import get_logger

logger = get_logger("errors")

GENERIC_ERROR_MESSAGE = "Something went wrong!"


class NotesAppError(Exception):
    """Base exception for all application errors.

    ``message`` is safe to return to the client; ``context`` is only logged.
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str = GENERIC_ERROR_MESSAGE, context: Optional[Dict[str, Any]] = None):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(NotesAppError):
    """Client input failed validation."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class AuthenticationError(NotesAppError):
    """Missing or invalid credentials."""

    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Token is not valid", context: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, context=context)


class NotFoundError(NotesAppError):
    """The resource does not exist or the caller may not see it.

    Both cases deliberately produce the same response.
    """

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, message: str = "Note not found", context: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, context=context)


class DatabaseError(NotesAppError):
    """A persistence operation failed. The message stays generic."""

    def __init__(self, message: str = "Server error", context: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, context=context)


def _first_error_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid value")
    return f"{location}: {message}" if location else message


def register_exception_handlers(app: FastAPI) -> None:
    """Map exception kinds to status codes with a ``{"message"}`` body."""

    @app.exception_handler(NotesAppError)
    async def handle_app_error(request: Request, exc: NotesAppError):
        if exc.status_code >= 500:
            logger.error(
                "Request failed",
                exc_info=exc,
                extra={"path": request.url.path, "method": request.method, **exc.context},
            )
        else:
            logger.info(
                exc.message,
                extra={"path": request.url.path, "status_code": exc.status_code, **exc.context},
            )
        return JSONResponse(status_code=exc.status_code, content={"message": exc.message})

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": _first_error_message(exc)},
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
            message = "Route not found"
        else:
            message = exc.detail if isinstance(exc.detail, str) else GENERIC_ERROR_MESSAGE
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": message},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception):
        logger.error(
            "Unhandled exception",
            exc_info=exc,
            extra={"path": request.url.path, "method": request.method},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": GENERIC_ERROR_MESSAGE},
        )
