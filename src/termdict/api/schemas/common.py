"""
Common API schemas — RFC 7807 error envelope.

Every non-2xx response carries a :class:`ProblemDetail` body.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class ProblemDetail(BaseModel):
    """RFC 7807 «Problem Details for HTTP APIs».

    Error Codes:
        - ``NOT_FOUND`` (404): Term does not exist
        - ``INTERNAL`` (500): Store failure or unexpected error

    Example:
        {
            "type": "about:blank",
            "title": "Word not found",
            "status": 404,
            "detail": "",
            "instance": "/api/words/missing"
        }
    """

    type: str = Field(default="about:blank", description="Error type URI (usually 'about:blank')")
    title: str = Field(description="Short human-readable error summary")
    status: int = Field(description="HTTP status code (e.g., 404, 500)")
    detail: str = Field(default="", description="Human-readable explanation of the error")
    instance: str = Field(default="", description="Path of the failing request")


class HealthResponse(BaseModel):
    """Liveness probe body."""

    ok: bool = True
