"""
Request-scoped context for operations.

Every operation function receives an :class:`OperationContext` as its first
argument. It carries the process-wide repository context plus per-call
identity used for logging.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any

from termdict.core.context import RepositoryContext
from termdict.core.repository import TermRepository


@dataclass
class OperationContext:
    """Context passed to every operation function.

    Attributes:
        repo_ctx: Shared, immutable :class:`RepositoryContext`.
        request_id: Unique ID for this operation invocation (auto-generated).
        caller: Origin of the request — ``"api"``, ``"cli"`` or ``"sdk"``.
        metadata: Arbitrary key/value pairs forwarded to logging.
    """

    repo_ctx: RepositoryContext
    request_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    caller: str = "sdk"
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def repository(self) -> TermRepository:
        return TermRepository(self.repo_ctx)
