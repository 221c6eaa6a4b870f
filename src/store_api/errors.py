"""Exceptions raised by the storage adapters and routers, and the handlers that turn them into responses."""
import logging

import pydantic
from fastapi import Request, status
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """A DynamoDB or S3 call failed.

    The cause is kept on ``__cause__`` for logging; callers only see
    ``"<service> error"``.
    """

    def __init__(self, service: str, operation: str):
        self.service = service
        self.operation = operation
        super().__init__(f"{service} {operation} failed")


class BadRequestError(Exception):
    """The request is missing a required field or carries an unusable body."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


async def handle_store_errors(request: Request, exc: StoreError) -> PlainTextResponse:
    logger.error(
        f"{exc.service} {exc.operation} error on {request.method} {request.url.path}: {exc.__cause__!r}"
    )
    return PlainTextResponse(
        f"{exc.service} error",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


async def handle_bad_request_errors(request: Request, exc: BadRequestError) -> PlainTextResponse:
    logger.info(f"Rejected {request.method} {request.url.path}: {exc.message}")
    return PlainTextResponse(exc.message, status_code=status.HTTP_400_BAD_REQUEST)


async def handle_pydantic_validation_errors(
    request: Request, exc: pydantic.ValidationError
) -> PlainTextResponse:
    """Report the first invalid field of a request payload."""
    errors = exc.errors()
    first = errors[0] if errors else {}
    field = ".".join(str(part) for part in first.get("loc", ())) or "body"
    if first.get("type") == "missing":
        message = f"missing field: {field}"
    else:
        message = f"invalid field: {field} ({first.get('msg', 'invalid')})"
    logger.info(f"Rejected {request.method} {request.url.path}: {message}")
    return PlainTextResponse(message, status_code=status.HTTP_400_BAD_REQUEST)


async def handle_http_exceptions(request: Request, exc: StarletteHTTPException) -> PlainTextResponse:
    """Unmatched routes (and method mismatches on matched paths) are reported as 404."""
    if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
        return PlainTextResponse(
            f"not found: {request.method} {request.url.path}",
            status_code=status.HTTP_404_NOT_FOUND,
        )
    return PlainTextResponse(str(exc.detail), status_code=exc.status_code)


async def handle_broad_exceptions(request: Request, call_next):
    """Handle any exception that propagates during the request lifecycle."""
    try:
        return await call_next(request)
    except Exception:
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return PlainTextResponse(
            "internal server error",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
