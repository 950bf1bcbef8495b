"""Response schemas for the term endpoints.

Field names follow the JSON the presentation layer already consumes
(``audioUrl``, ``wikiUrl``, ``htmlBody`` ...), so they are camelCase.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class WordListResponse(BaseModel):
    """Ordered terms, case-insensitive ascending."""

    items: list[str] = Field(default_factory=list)


class MathSegmentSchema(BaseModel):
    """One extracted formula and the element that stands in for it."""

    id: int
    formula: str
    displayMode: bool


class RenderPlanSchema(BaseModel):
    """Sanitized markup plus the formulas to typeset into it."""

    htmlBody: str
    mathSegments: list[MathSegmentSchema] = Field(default_factory=list)


class WordDetailResponse(BaseModel):
    """A term record with its rendered definition and playback plan."""

    word: str
    meaning: str | None = None
    audioUrl: str | None = None
    wikiUrl: str | None = None
    searchUrl: str = Field(description="Web search link for the term")
    heading: str = Field(description="Term, HTML-escaped for direct insertion")
    rendered: RenderPlanSchema
    audio: list[str] = Field(default_factory=list, description="Audio references in play order")
