"""
Error-handling middleware — maps ops-layer errors to RFC 7807 responses.

A missing term is ``NOT_FOUND`` (404); a store failure is ``INTERNAL``
(500). Anything that escapes a route is caught by
:func:`unhandled_exception_handler` and reported as a generic 500.
"""

from __future__ import annotations

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse

from termdict.api.schemas.common import ProblemDetail
from termdict.core.logging import get_logger
from termdict.ops.result import INTERNAL, NOT_FOUND, OperationResult

logger = get_logger(__name__)

# ── Error code → HTTP status mapping ─────────────────────────────────────

ERROR_CODE_TO_STATUS: dict[str, int] = {
    NOT_FOUND: 404,
    INTERNAL: 500,
}


def status_for_error_code(code: str) -> int:
    """Resolve an ops error code to HTTP status, defaulting to 500."""
    return ERROR_CODE_TO_STATUS.get(code, 500)


def problem_response(
    *,
    status: int,
    title: str,
    detail: str = "",
    instance: str = "",
) -> JSONResponse:
    """Build a RFC 7807 JSON error response."""
    body = ProblemDetail(title=title, status=status, detail=detail, instance=instance)
    return JSONResponse(
        status_code=status,
        content=body.model_dump(),
        media_type="application/problem+json",
    )


def handle_error(result: OperationResult[Any], request: Request | None = None) -> JSONResponse:
    """Convert a failed ``OperationResult`` into a Problem Details response."""
    code = result.error.code if result.error else INTERNAL
    return problem_response(
        status=status_for_error_code(code),
        title=result.error.message if result.error else "Operation failed",
        instance=str(request.url.path) if request is not None else "",
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all for unhandled exceptions — returns 500 with ProblemDetail."""
    logger.error("unhandled_exception", path=request.url.path, error=str(exc))
    return problem_response(
        status=500,
        title="Internal Server Error",
        detail=str(exc) if request.app.state.settings.debug else "An unexpected error occurred.",
        instance=str(request.url.path),
    )
