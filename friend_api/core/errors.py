"""
Error types shared by the stores, the services and the HTTP layer.

Every error carries the HTTP status it maps to, so endpoints can re-raise
it as an HTTPException without a lookup table.
"""

from fastapi import HTTPException, Request, status
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from friend_api.utils.logging import get_logger

logger = get_logger(__name__)


class AppError(Exception):
    """Base exception class for application errors"""

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        code: str = "INTERNAL_ERROR",
    ):
        self.message = message
        self.status_code = status_code
        self.code = code
        super().__init__(self.message)


class NotFoundError(AppError):
    """Lookup target absent"""

    def __init__(self, message: str = "Resource not found"):
        super().__init__(message, status.HTTP_404_NOT_FOUND, "NOT_FOUND")


class InvalidInputError(AppError):
    """Malformed or rejected creation payload"""

    def __init__(self, message: str = "Invalid input"):
        super().__init__(message, status.HTTP_400_BAD_REQUEST, "INVALID_INPUT")


class ConflictError(AppError):
    """Operation clashes with the current state of the record"""

    def __init__(self, message: str = "Conflict"):
        super().__init__(message, status.HTTP_409_CONFLICT, "CONFLICT")


class PersistenceError(AppError):
    """Underlying storage failure"""

    def __init__(self, message: str = "Storage failure"):
        super().__init__(message, status.HTTP_500_INTERNAL_SERVER_ERROR, "PERSISTENCE_ERROR")


async def app_exception_handler(request: Request, exc: AppError) -> JSONResponse:
    """Fallback for application errors that escape an endpoint"""
    logger.error(f"App error on {request.url.path}: {exc.code} {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "code": exc.code},
    )


def http_error(action: str, exc: AppError) -> HTTPException:
    """Wrap an application error with the action that failed"""
    return HTTPException(
        status_code=exc.status_code,
        detail=f"Could not {action}. Error: {exc.message}",
    )


# Bodies rejected by validation on these paths are bad requests, not 422s
BAD_REQUEST_BODIES = {
    "/friend-requests/create": "create new friend request",
}


def describe_validation_error(exc: RequestValidationError) -> str:
    """Flatten pydantic errors into "field: message" pairs"""
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"] if part != "body")
        parts.append(f"{location or 'body'}: {error['msg']}")
    return "; ".join(parts)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    for suffix, action in BAD_REQUEST_BODIES.items():
        if request.url.path.endswith(suffix):
            message = describe_validation_error(exc)
            logger.warning(f"Invalid payload on {request.url.path}: {message}")
            return JSONResponse(
                status_code=status.HTTP_400_BAD_REQUEST,
                content={"detail": f"Could not {action}. Error: {message}"},
            )
    return await request_validation_exception_handler(request, exc)
