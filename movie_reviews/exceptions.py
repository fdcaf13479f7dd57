"""
Application exceptions and their HTTP problem-details handlers.

Services raise MovieReviewsError subclasses; the handlers registered in
movie_reviews.api.main turn them (and anything unexpected) into
application/problem+json responses.
"""

import logging
from collections import defaultdict
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from movie_reviews.api.config import is_development

logger = logging.getLogger(__name__)

PROBLEM_MEDIA_TYPE = "application/problem+json"

_PROBLEM_TYPES = {
    400: "https://tools.ietf.org/html/rfc9110#section-15.5.1",
    404: "https://tools.ietf.org/html/rfc9110#section-15.5.5",
    500: "https://tools.ietf.org/html/rfc9110#section-15.6.1",
}

_PROBLEM_TITLES = {
    400: "Bad Request",
    404: "Not Found",
    500: "An error occurred while processing your request.",
}


class MovieReviewsError(Exception):
    """Base exception for the application"""
    pass


class InvalidRequestError(MovieReviewsError):
    """Client input violates a rule that field validation cannot express."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field


class NotFoundError(MovieReviewsError):
    """Requested resource does not exist."""

    def __init__(self, resource: str, identifier: Any):
        super().__init__(f"{resource} with id {identifier} does not exist.")
        self.resource = resource
        self.identifier = identifier


def problem_response(
    request: Request,
    status_code: int,
    title: Optional[str] = None,
    detail: Optional[str] = None,
    errors: Optional[Dict[str, List[str]]] = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    """Build a problem-details JSON response for the current request."""
    content: Dict[str, Any] = {
        "type": _PROBLEM_TYPES.get(status_code, "about:blank"),
        "title": title or _PROBLEM_TITLES.get(status_code, "Error"),
        "status": status_code,
        "detail": detail,
        "instance": request.url.path,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "request_id": getattr(request.state, "request_id", "unknown"),
    }
    if errors is not None:
        content["errors"] = errors

    return JSONResponse(
        status_code=status_code,
        content=content,
        media_type=PROBLEM_MEDIA_TYPE,
        headers=headers,
    )


def _field_name(loc) -> str:
    # ('body', 'title') -> 'title'; ('path', 'movie_id') -> 'movie_id'
    parts = [str(p) for p in loc if p not in ("body", "path", "query")]
    return ".".join(parts) or "body"


async def invalid_request_handler(request: Request, exc: InvalidRequestError):
    """Render rule violations detected by services as 400."""
    request_id = getattr(request.state, "request_id", "unknown")
    logger.warning("Invalid request: %s", exc.message, extra={"request_id": request_id})

    errors = {exc.field: [exc.message]} if exc.field else None
    return problem_response(request, 400, detail=exc.message, errors=errors)


async def not_found_handler(request: Request, exc: NotFoundError):
    """Render missing resources as 404 naming the resource."""
    request_id = getattr(request.state, "request_id", "unknown")
    logger.info("%s not found", exc.resource, extra={"request_id": request_id})

    return problem_response(
        request,
        404,
        title=f"{exc.resource} not found",
        detail=str(exc),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Handle Pydantic validation errors.

    Every failing field is listed; the status is 400 rather than FastAPI's
    default 422.
    """
    request_id = getattr(request.state, "request_id", "unknown")
    logger.warning("Validation error", extra={"request_id": request_id})

    errors: Dict[str, List[str]] = defaultdict(list)
    for error in exc.errors():
        errors[_field_name(error.get("loc", ()))].append(error.get("msg", "Invalid value"))

    count = sum(len(messages) for messages in errors.values())
    return problem_response(
        request,
        400,
        title="One or more validation errors occurred.",
        detail=f"Error(s) occurred: {count}",
        errors=dict(errors),
    )


async def http_exception_handler(request: Request, exc: HTTPException):
    """
    Handle HTTPExceptions, including Starlette's own 404/405 routing errors.
    """
    request_id = getattr(request.state, "request_id", "unknown")

    # Log 5xx errors as errors, 4xx as info
    if exc.status_code >= 500:
        logger.error(f"HTTP {exc.status_code} error", extra={"request_id": request_id})
    else:
        logger.info(f"HTTP {exc.status_code} error", extra={"request_id": request_id})

    detail = exc.detail if isinstance(exc.detail, str) else None
    return problem_response(
        request,
        exc.status_code,
        detail=detail,
        headers=getattr(exc, "headers", None),
    )


async def global_exception_handler(request: Request, exc: Exception):
    """
    Catch-all exception handler.

    Returns a 500 problem and hides internal error details outside development.
    """
    request_id = getattr(request.state, "request_id", "unknown")

    logger.error(
        "Unhandled exception occurred",
        extra={"request_id": request_id, "path": request.url.path},
        exc_info=exc
    )

    detail = str(exc) if is_development() else "An unexpected error occurred."
    return problem_response(request, 500, detail=detail)


def register_exception_handlers(app) -> None:
    """Attach every handler in this module to a FastAPI app."""
    app.add_exception_handler(InvalidRequestError, invalid_request_handler)
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)
