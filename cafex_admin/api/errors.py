from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from cafex_admin.application.errors import (
    BackofficeError,
    NotFoundError,
    ProductReferenceError,
    StateError,
    StoreError,
    ValidationError,
)
from shared.core import get_logger

logger = get_logger(__name__)

STATUS_CODES = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    ProductReferenceError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    StateError: status.HTTP_409_CONFLICT,
}

def status_code_for(exc: BackofficeError) -> int:
    for exc_type, code in STATUS_CODES.items():
        if isinstance(exc, exc_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR

async def backoffice_error_handler(request: Request, exc: BackofficeError) -> JSONResponse:
    code = status_code_for(exc)
    if isinstance(exc, StoreError) or code >= 500:
        # Internal detail stays in the logs
        logger.error(
            f"Request failed: {request.method} {request.url.path}",
            exc_info=(type(exc), exc, exc.__traceback__),
        )
        return JSONResponse(status_code=code, content={"detail": "Server error while processing request"})
    return JSONResponse(status_code=code, content={"detail": str(exc)})

def _format_location(loc) -> str:
    # Drop the leading "body" / "path" / "query" segment
    parts = [str(p) for p in loc[1:]] or [str(p) for p in loc]
    return ".".join(parts)

async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if errors:
        first = errors[0]
        message = f"Invalid value for {_format_location(first.get('loc', ()))}: {first.get('msg')}"
    else:
        message = "Invalid request"
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": message})

def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BackofficeError, backoffice_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
