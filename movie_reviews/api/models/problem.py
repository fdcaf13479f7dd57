"""
Pydantic schema for problem-details error responses.
"""

from pydantic import BaseModel


class ProblemDetails(BaseModel):
    """Error payload returned with every 4xx/5xx response."""

    type: str
    title: str
    status: int
    detail: str | None = None
    instance: str
    timestamp: str
    request_id: str | None = None
    errors: dict[str, list[str]] | None = None


# OpenAPI `responses` entries for routes that can fail with a problem body
BAD_REQUEST = {400: {"model": ProblemDetails}}
NOT_FOUND = {404: {"model": ProblemDetails}}
