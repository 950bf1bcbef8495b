"""
Term router — list/search terms and fetch one term's detail.

GET /api/words?search=q
GET /api/words/{word}

Path and query values arrive URL-decoded; the term path segment may
contain an encoded ``/`` and is matched as a path so it survives intact.
"""

from __future__ import annotations

from fastapi import APIRouter, Path, Query, Request

from termdict.api.deps import OpContext
from termdict.api.middleware.errors import handle_error
from termdict.api.schemas.terms import WordDetailResponse, WordListResponse

router = APIRouter(prefix="/words")


@router.get("", response_model=WordListResponse)
def list_words(
    ctx: OpContext,
    request: Request,
    search: str = Query("", description="Substring to match (trimmed; empty lists all)"),
):
    """List terms, optionally filtered by a case-insensitive substring."""
    from termdict.ops.terms import list_terms as _list

    result = _list(ctx, search)

    if not result.success:
        return handle_error(result, request)

    return WordListResponse(items=result.data or [])


@router.get("/{word:path}", response_model=WordDetailResponse)
def get_word(
    ctx: OpContext,
    request: Request,
    word: str = Path(..., description="Exact term (case-sensitive)"),
):
    """Fetch one term with its rendered definition and audio plan."""
    from termdict.ops.terms import get_term_detail as _get

    result = _get(ctx, word)

    if not result.success or result.data is None:
        return handle_error(result, request)

    return result.data.to_dict()
