"""
Term operations.

The four calls the presentation layer makes into the core:
list/search terms, resolve a term to its detail, render a definition and
build an audio playback plan.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
from urllib.parse import quote

from termdict.audio.sequencer import PlaybackPlan, build_plan
from termdict.core.errors import categorize_error
from termdict.core.logging import get_logger
from termdict.core.repository import TermRecord
from termdict.ops.context import OperationContext
from termdict.ops.result import INTERNAL, NOT_FOUND, OperationResult, start_timer
from termdict.render.content import RenderPlan, escape_html, render

logger = get_logger(__name__)

SEARCH_URL = "https://www.google.com/search?q={query}"


def search_url(term: str) -> str:
    """Web search link for *term*, encoded like ``encodeURIComponent``."""
    return SEARCH_URL.format(query=quote(term, safe="!~*'()"))


@dataclass(frozen=True, slots=True)
class TermDetail:
    """A term record together with everything needed to present it."""

    record: TermRecord
    heading_html: str
    rendered: RenderPlan
    audio: PlaybackPlan

    @classmethod
    def from_record(cls, record: TermRecord) -> TermDetail:
        return cls(
            record=record,
            heading_html=escape_html(record.term),
            rendered=render(record.definition),
            audio=build_plan(record.audio_ref),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "word": self.record.term,
            "meaning": self.record.definition,
            "audioUrl": self.record.audio_ref,
            "wikiUrl": self.record.link_ref,
            "searchUrl": search_url(self.record.term),
            "heading": self.heading_html,
            "rendered": self.rendered.to_dict(),
            "audio": self.audio.to_list(),
        }


def list_terms(ctx: OperationContext, query: str | None = None) -> OperationResult[list[str]]:
    """List every term, or those containing *query* (trimmed)."""
    timer = start_timer()
    search = (query or "").strip()

    try:
        items = ctx.repository.list_terms(search)
        return OperationResult.ok(items, elapsed_ms=timer.elapsed_ms)
    except Exception as exc:
        logger.exception("term_list_failed", query=search, request_id=ctx.request_id)
        return OperationResult.fail(
            INTERNAL,
            "Failed to fetch words",
            category=categorize_error(exc),
            elapsed_ms=timer.elapsed_ms,
        )


def get_term_detail(ctx: OperationContext, term: str) -> OperationResult[TermDetail]:
    """Resolve *term* (exact match) to its :class:`TermDetail`."""
    timer = start_timer()

    try:
        record = ctx.repository.get_term(term)
    except Exception as exc:
        logger.exception("term_lookup_failed", term=term, request_id=ctx.request_id)
        return OperationResult.fail(
            INTERNAL,
            "Failed to fetch word detail",
            category=categorize_error(exc),
            elapsed_ms=timer.elapsed_ms,
        )

    if record is None:
        return OperationResult.fail(
            NOT_FOUND,
            "Word not found",
            elapsed_ms=timer.elapsed_ms,
        )

    return OperationResult.ok(TermDetail.from_record(record), elapsed_ms=timer.elapsed_ms)


def render_definition(text: str | None) -> RenderPlan:
    """Render a raw definition; see :func:`termdict.render.content.render`."""
    return render(text)


def build_audio_plan(text: str | None) -> PlaybackPlan:
    """Build a playback plan; see :func:`termdict.audio.sequencer.build_plan`."""
    return build_plan(text)


__all__ = [
    "TermDetail",
    "build_audio_plan",
    "get_term_detail",
    "list_terms",
    "render_definition",
    "search_url",
]
