"""Typesetting hook — fill a plan's math placeholders with engine output.

The renderer never runs a math engine; a presentation layer that wants
server-side math passes any ``engine(formula, display_mode) -> html``
callable here. A failing segment degrades to its escaped literal formula
and the rest of the document is still rendered.
"""

from __future__ import annotations

from collections.abc import Callable

from termdict.core.errors import RenderDegradation
from termdict.core.logging import get_logger
from termdict.render.content import MathSegment, RenderPlan, escape_html

logger = get_logger(__name__)

MathEngine = Callable[[str, bool], str]


def _typeset_segment(segment: MathSegment, engine: MathEngine) -> str:
    try:
        return engine(segment.formula, segment.display_mode)
    except Exception as exc:  # noqa: BLE001
        degradation = RenderDegradation(
            f"Failed to typeset formula: {exc}", cause=exc
        ).with_context(segment=segment.id)
        logger.warning("math_segment_degraded", **degradation.to_dict())
        return escape_html(segment.formula)


def typeset(plan: RenderPlan, engine: MathEngine) -> str:
    """Return ``plan.html_body`` with every math element replaced by *engine* output."""
    html = plan.html_body
    for segment in plan.math_segments:
        html = html.replace(segment.element(), _typeset_segment(segment, engine), 1)
    return html


__all__ = ["MathEngine", "typeset"]
