"""
FastAPI dependency injection — shared singletons and per-request factories.

Usage in routers::

    from termdict.api.deps import OpContext, Settings

    @router.get("/words")
    def list_words(ctx: OpContext, settings: Settings):
        ...

The store connection and schema binding are opened once by the app
lifespan and published on ``app.state.repo_ctx``; each request only wraps
them in a fresh :class:`OperationContext`.
"""

from __future__ import annotations

import uuid
from typing import Annotated

from fastapi import Depends, Request

from termdict.core.context import RepositoryContext
from termdict.core.settings import TermdictSettings, get_settings
from termdict.ops.context import OperationContext

# ── Repository context (process-wide) ────────────────────────────────────


def get_repository_context(request: Request) -> RepositoryContext:
    """Return the context published by the lifespan (or injected by a test)."""
    return request.app.state.repo_ctx


# ── Operation context (per-request) ──────────────────────────────────────


def get_operation_context(
    request: Request,
    repo_ctx: Annotated[RepositoryContext, Depends(get_repository_context)],
) -> OperationContext:
    """Build an :class:`OperationContext` from the current request."""
    request_id = getattr(request.state, "request_id", None) or str(uuid.uuid4())
    return OperationContext(repo_ctx=repo_ctx, request_id=request_id, caller="api")


# ── Convenience type aliases ─────────────────────────────────────────────

Settings = Annotated[TermdictSettings, Depends(get_settings)]
OpContext = Annotated[OperationContext, Depends(get_operation_context)]

__all__ = [
    "OpContext",
    "Settings",
    "get_operation_context",
    "get_repository_context",
    "get_settings",
]
