"""
Operation result envelope.

Provides :class:`OperationResult` — a typed success/failure envelope that
every operation function returns. A missing term is a failed result with
code ``NOT_FOUND``; a store failure is ``INTERNAL``. Transports map the code,
never the exception.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from termdict.core.errors import ErrorCategory

T = TypeVar("T")

NOT_FOUND = "NOT_FOUND"
INTERNAL = "INTERNAL"


@dataclass(frozen=True, slots=True)
class OperationError:
    """Structured error detail for failed operations.

    Attributes:
        code: Machine-readable code (``NOT_FOUND``, ``INTERNAL``).
        message: Human-readable description of the error.
        category: Optional :class:`ErrorCategory` for routing/alerting.
    """

    code: str
    message: str
    category: ErrorCategory | None = None


@dataclass
class OperationResult(Generic[T]):
    """Envelope returned by every operation function.

    Use the :meth:`ok` and :meth:`fail` factories rather than the constructor.
    """

    success: bool
    data: T | None = None
    error: OperationError | None = None
    elapsed_ms: float = 0.0

    @classmethod
    def ok(cls, data: T, *, elapsed_ms: float = 0.0) -> OperationResult[T]:
        """Create a successful result."""
        return cls(success=True, data=data, elapsed_ms=elapsed_ms)

    @classmethod
    def fail(
        cls,
        code: str,
        message: str,
        *,
        category: ErrorCategory | None = None,
        elapsed_ms: float = 0.0,
    ) -> OperationResult[T]:
        """Create a failed result."""
        return cls(
            success=False,
            error=OperationError(code=code, message=message, category=category),
            elapsed_ms=elapsed_ms,
        )

    @property
    def not_found(self) -> bool:
        return self.error is not None and self.error.code == NOT_FOUND

    def to_dict(self) -> dict[str, Any]:
        """Serialise to a plain dict (for JSON output)."""
        d: dict[str, Any] = {"success": self.success}
        if self.data is not None:
            d["data"] = self.data
        if self.error is not None:
            d["error"] = {"code": self.error.code, "message": self.error.message}
        if self.elapsed_ms:
            d["elapsed_ms"] = round(self.elapsed_ms, 2)
        return d


class _Timer:
    """Minimal stopwatch for timing operations."""

    __slots__ = ("_start",)

    def __init__(self) -> None:
        self._start = time.perf_counter()

    @property
    def elapsed_ms(self) -> float:
        return (time.perf_counter() - self._start) * 1000


def start_timer() -> _Timer:
    """Return a lightweight timer.  Use ``timer.elapsed_ms`` when done."""
    return _Timer()
