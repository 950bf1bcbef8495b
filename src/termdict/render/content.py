"""
Content renderer — turn a raw definition into a safely renderable plan.

A definition is markdown with embedded TeX math: ``$$...$$`` for display
blocks and ``$...$`` for inline spans. Math must survive the markdown pass
untouched, so it is lifted out first, replaced by inert placeholder
tokens, and restored afterwards as empty elements that a math typesetter
fills in at presentation time.

Manifesto:
    - **Pure:** ``render()`` is a function of its input; calling it twice
      yields equal plans. No DOM, no math engine.
    - **Untrusted input:** raw HTML in a definition is escaped, never passed
      through; formulas only ever land in escaped attribute values.
    - **Display first:** ``$$...$$`` is extracted before ``$...$`` so a
      display block is never read as two inline spans.
    - **Bounded inline math:** an inline span never crosses a newline, so an
      unterminated ``$`` stays literal instead of swallowing the document.

Architecture:
    ::

        raw definition
             │
             ▼  1. extraction (display pass, then inline pass)
        text with placeholders  +  [MathSegment(id, formula, display_mode)]
             │
             ▼  2. markdown (markdown-it-py, breaks=True, html=False)
        HTML with escaped placeholders
             │
             ▼  3. restoration
        <span class="math" data-math-id=".." data-math-placeholder=".."
              data-math-mode="inline|display"></span>

Examples:
    >>> plan = render("Force ($F$) equals mass times acceleration: $$F = ma$$")
    >>> [(s.formula, s.display_mode) for s in plan.math_segments]
    [('F', False), ('F = ma', True)]

    >>> render(None).html_body == NO_DEFINITION_HTML
    True

Tags:
    markdown, math, katex, escaping, render-plan, termdict
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from markdown_it import MarkdownIt

NO_DEFINITION_HTML = '<em class="no-definition">(بدون تعریف)</em>'

DISPLAY_MATH_RE = re.compile(r"\$\$([\s\S]*?)\$\$")
# Single line, no "$", no pending display token inside.
INLINE_MATH_RE = re.compile(r"\$([^$\n\x00]+?)\$")

_TEMP_TOKEN_RE = re.compile(r"\x00(\d+)\x00")
_TAG_SPLIT_RE = re.compile(r"(<[^>]*>)")

_MARKER_STEM = "termdict-math"

_HTML_ESCAPES = {"&": "&amp;", "<": "&lt;", ">": "&gt;", '"': "&quot;", "'": "&#39;"}
_ATTR_ESCAPES = {'"': "&quot;", "'": "&#39;", "`": "&#96;", "<": "&lt;", ">": "&gt;"}
_HTML_ESCAPE_RE = re.compile(r"[&<>\"']")
_ATTR_ESCAPE_RE = re.compile(r"[\"'`<>]")

_markdown = (
    MarkdownIt("commonmark", {"breaks": True, "html": False})
    .enable("table")
    .enable("strikethrough")
)


def escape_html(text: Any) -> str:
    """Escape ``& < > " '`` for literal display (term headings, fallbacks)."""
    return _HTML_ESCAPE_RE.sub(lambda m: _HTML_ESCAPES[m.group(0)], str(text))


def escape_attribute(text: Any) -> str:
    """Escape ``" ' ` < >`` for use inside a quoted HTML attribute value."""
    return _ATTR_ESCAPE_RE.sub(lambda m: _ATTR_ESCAPES[m.group(0)], str(text))


@dataclass(frozen=True, slots=True)
class MathSegment:
    """One extracted formula, in document order."""

    id: int
    formula: str
    display_mode: bool

    @property
    def mode(self) -> str:
        return "display" if self.display_mode else "inline"

    def element(self) -> str:
        """The inert element standing in for this formula in ``html_body``."""
        return (
            f'<span class="math" data-math-id="{self.id}" '
            f'data-math-placeholder="{escape_attribute(self.formula)}" '
            f'data-math-mode="{self.mode}"></span>'
        )

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "formula": self.formula, "displayMode": self.display_mode}


@dataclass(frozen=True, slots=True)
class RenderPlan:
    """Markdown-converted HTML plus the math segments it references.

    Every ``data-math-id`` element in ``html_body`` matches exactly one entry
    of ``math_segments`` and vice versa.
    """

    html_body: str
    math_segments: tuple[MathSegment, ...] = ()

    @property
    def is_empty(self) -> bool:
        return self.html_body == NO_DEFINITION_HTML

    def to_dict(self) -> dict[str, Any]:
        return {
            "htmlBody": self.html_body,
            "mathSegments": [s.to_dict() for s in self.math_segments],
        }


def _marker_stem(source: str, text: str) -> str:
    """A placeholder stem absent from *source* and from its markdown output.

    *text* is the extracted text; it is rendered once before any marker is
    inserted so that stems spelled with character references
    (``termdict&#45;math``) are caught after decoding too.
    """
    rendered = _markdown.render(text)
    stem, n = _MARKER_STEM, 0
    while f"{stem}:" in source or f"{stem}:" in rendered:
        n += 1
        stem = f"{_MARKER_STEM}-{n}"
    return stem


def _extract(text: str) -> tuple[str, list[tuple[str, bool]]]:
    """Lift math out of *text*, display blocks first.

    Returns the text with ``\\x00{n}\\x00`` tokens and the (formula, display)
    pairs indexed by ``n``. NUL never survives markdown parsing, so these
    tokens cannot be forged by the input.
    """
    found: list[tuple[str, bool]] = []

    def stash(display: bool):
        def _sub(match: re.Match[str]) -> str:
            found.append((match.group(1).strip(), display))
            return f"\x00{len(found) - 1}\x00"

        return _sub

    text = DISPLAY_MATH_RE.sub(stash(True), text)
    text = INLINE_MATH_RE.sub(stash(False), text)
    return text, found


def _restore(html: str, pattern: re.Pattern[str], segments: list[MathSegment]) -> tuple[str, list[MathSegment]]:
    by_id = {segment.id: segment for segment in segments}
    restored: dict[int, MathSegment] = {}

    def _sub(match: re.Match[str]) -> str:
        segment = by_id.get(int(match.group(1)))
        if segment is None or segment.id in restored:
            return match.group(0)
        restored[segment.id] = segment
        return segment.element()

    # Placeholders are only restored in text, never inside a tag's attributes.
    parts = _TAG_SPLIT_RE.split(html)
    for i in range(0, len(parts), 2):
        parts[i] = pattern.sub(_sub, parts[i])

    return "".join(parts), [s for s in segments if s.id in restored]


def render(definition: str | None) -> RenderPlan:
    """Convert a raw definition into a :class:`RenderPlan`.

    ``None`` or an empty string yields the fixed "no definition" marker and
    no segments.
    """
    if not definition:
        return RenderPlan(html_body=NO_DEFINITION_HTML)

    source = str(definition).replace("\x00", "\ufffd")
    text, found = _extract(source)
    stem = _marker_stem(source, text)

    # Renumber in document order; ids follow the order formulas appear.
    segments: list[MathSegment] = []

    def _placeholder(match: re.Match[str]) -> str:
        formula, display = found[int(match.group(1))]
        segments.append(MathSegment(id=len(segments), formula=formula, display_mode=display))
        return f"<!--{stem}:{len(segments) - 1}-->"

    text = _TEMP_TOKEN_RE.sub(_placeholder, text)

    html = _markdown.render(text)

    # html=False: the comment-shaped placeholders come back entity-escaped.
    pattern = re.compile(rf"&lt;!--{re.escape(stem)}:(\d+)--&gt;")
    html, kept = _restore(html, pattern, segments)

    return RenderPlan(html_body=html, math_segments=tuple(kept))


__all__ = [
    "DISPLAY_MATH_RE",
    "INLINE_MATH_RE",
    "NO_DEFINITION_HTML",
    "MathSegment",
    "RenderPlan",
    "escape_attribute",
    "escape_html",
    "render",
]
