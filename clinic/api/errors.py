"""Exception handlers and error-kind to status mapping."""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from clinic.models.responses import ErrorResponse
from clinic.services.patient_store import PatientAlreadyExistsError
from clinic.services.patients import ErrorKind, ServiceResult
from clinic.utils.logging import get_logger

logger = get_logger(__name__)

ERROR_STATUS: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
}

GENERIC_ERROR_MESSAGE = "An unexpected error occurred"


def error_response(result: ServiceResult) -> JSONResponse:
    """Build the JSON error response for a failed service result."""
    status_code = ERROR_STATUS[result.error]
    return JSONResponse(status_code=status_code, content={"message": result.message})


def _json_error(status_code: int, message: str) -> JSONResponse:
    body = ErrorResponse(statusCode=status_code, message=message)
    return JSONResponse(status_code=status_code, content=body.model_dump())


async def already_exists_handler(request: Request, exc: PatientAlreadyExistsError) -> JSONResponse:
    logger.warning(f"Conflict on {request.method} {request.url.path}: {exc}")
    return _json_error(status.HTTP_409_CONFLICT, str(exc))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all: log the full error, return a generic 500."""
    logger.error(f"Unhandled exception on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return _json_error(status.HTTP_500_INTERNAL_SERVER_ERROR, GENERIC_ERROR_MESSAGE)


def register_exception_handlers(app: FastAPI) -> None:
    """Install the global exception handlers on the application."""
    app.add_exception_handler(PatientAlreadyExistsError, already_exists_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
