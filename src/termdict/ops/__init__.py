"""
Operation functions shared by the HTTP API and the CLI.

Every operation takes an :class:`OperationContext` and returns an
:class:`OperationResult` envelope; transports only translate the envelope.
"""

from termdict.ops.context import OperationContext
from termdict.ops.result import OperationError, OperationResult
from termdict.ops.terms import (
    TermDetail,
    build_audio_plan,
    get_term_detail,
    list_terms,
    render_definition,
)

__all__ = [
    "OperationContext",
    "OperationError",
    "OperationResult",
    "TermDetail",
    "build_audio_plan",
    "get_term_detail",
    "list_terms",
    "render_definition",
]
