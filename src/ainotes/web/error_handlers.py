import structlog
from fastapi import Request
from fastapi.responses import JSONResponse, Response

from ainotes.errors import AuthenticationError, NotFoundError, TooShortError, UserError, ValidationError

logger = structlog.get_logger(__name__)

# First matching class wins
USER_ERROR_RESPONSES: list[tuple[type[UserError], int, str]] = [
    (AuthenticationError, 401, "authentication_error"),
    (NotFoundError, 404, "not_found"),
    (ValidationError, 400, "validation_error"),
    (TooShortError, 422, "too_short"),
]


def error_response(status_code: int, message: str, error_type: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message, "type": error_type})


def classify_user_error(exc: UserError) -> tuple[int, str]:
    """Status code and machine-readable type for a user-facing error."""
    for error_class, status_code, error_type in USER_ERROR_RESPONSES:
        if isinstance(exc, error_class):
            return status_code, error_type
    return 400, "bad_request"


async def user_error_handler(request: Request, exc: Exception) -> Response:
    status_code, error_type = classify_user_error(exc)  # type: ignore[arg-type]
    logger.debug("user_error", path=request.url.path, status_code=status_code, error_type=error_type)
    return error_response(status_code, str(exc), error_type)


async def general_exception_handler(request: Request, exc: Exception) -> Response:
    logger.exception("unexpected_error", path=request.url.path, error=str(exc))
    return error_response(500, "An unexpected error occurred.", "internal_server_error")
