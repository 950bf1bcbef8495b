"""
Definition rendering: raw markdown + math text -> :class:`RenderPlan`.
"""

from termdict.render.content import (
    NO_DEFINITION_HTML,
    MathSegment,
    RenderPlan,
    escape_attribute,
    escape_html,
    render,
)
from termdict.render.typeset import typeset

__all__ = [
    "NO_DEFINITION_HTML",
    "MathSegment",
    "RenderPlan",
    "escape_attribute",
    "escape_html",
    "render",
    "typeset",
]
