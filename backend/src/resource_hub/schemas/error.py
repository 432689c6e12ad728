"""Error response schemas.

All error responses use the same envelope: {"error": {"code": "...", "message": "..."}}.
Exception handlers in main.py construct these from domain exceptions. Codes
are stable identifiers clients can branch on, e.g. "query_failed" means the
listing could not be loaded and the request may be retried.
"""

from pydantic import BaseModel


class ErrorDetail(BaseModel):
    """Machine-readable code plus a message safe to show to end users."""

    code: str
    message: str


class ErrorResponse(BaseModel):
    """Top-level error envelope returned by all error responses."""

    error: ErrorDetail
