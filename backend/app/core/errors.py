import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..models.api_error import ErrorResponse

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "internal server error"


class CatalogError(Exception):
    """Base class for failures reported to API callers."""
    status_code = 500
    public_message = INTERNAL_ERROR_MESSAGE
    expose_message = False

    def __init__(self, message: str = ""):
        self.message = message or self.public_message
        super().__init__(self.message)

    @property
    def response_message(self) -> str:
        return self.message if self.expose_message else self.public_message


class InvalidQueryError(CatalogError):
    """A query parameter failed validation. The message is safe to return."""
    status_code = 400
    public_message = "invalid request"
    expose_message = True


class CatalogQueryError(CatalogError):
    """The store failed while serving a listing."""
    status_code = 500


class CatalogDecodeError(CatalogQueryError):
    """A row or count returned by the store could not be decoded."""


class CatalogTimeoutError(CatalogQueryError):
    """The listing did not finish before its deadline."""


class StoreUnavailableError(CatalogError):
    status_code = 503
    public_message = "store unavailable"


class StoreError(Exception):
    """Raised by store implementations when a query cannot be executed."""


def error_response(message: str, status: int) -> JSONResponse:
    """Render the shared error envelope and log it."""
    if status >= 500:
        logger.error("[Server Error] %d %s", status, message)
    else:
        logger.warning("[Client Error] %d %s", status, message)
    body = ErrorResponse(message=message, status=status)
    return JSONResponse(status_code=status, content=body.model_dump(mode="json"))


async def handle_catalog_error(request: Request, exc: CatalogError) -> JSONResponse:
    if exc.status_code >= 500:
        # internal detail stays in the log
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message,
                     exc_info=exc.__cause__ or exc)
    return error_response(exc.response_message, exc.status_code)


async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    message = errors[0]["msg"] if errors else "invalid request"
    return error_response(message, 400)


async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(str(exc.detail), exc.status_code)


async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error processing %s %s", request.method, request.url.path)
    return error_response(INTERNAL_ERROR_MESSAGE, 500)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CatalogError, handle_catalog_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(Exception, handle_unexpected)
