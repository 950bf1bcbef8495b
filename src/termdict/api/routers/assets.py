"""
Static assets — whitelisted icons, the presentation bundle and SPA fallback.

GET /icons/{name}
GET /{path}          (only when ``public_dir`` is configured)

Icons are served only if *name* is in ``settings.icon_names``; anything
else is a bare 404. Unknown non-API paths fall back to ``index.html`` so
client-side routes resolve. Paths under ``/api`` never fall back.
"""

from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, Request
from fastapi.responses import FileResponse, Response

from termdict.api.deps import Settings
from termdict.api.middleware.errors import problem_response

router = APIRouter()


def _inside(root: Path, candidate: Path) -> bool:
    try:
        candidate.resolve().relative_to(root.resolve())
    except ValueError:
        return False
    return True


@router.get("/icons/{name}", include_in_schema=False)
def get_icon(name: str, settings: Settings):
    """Serve one whitelisted icon file."""
    root = settings.icons_dir or settings.public_dir
    if root is None or name not in settings.icon_names:
        return Response(status_code=404)

    path = root / name
    if not path.is_file():
        return Response(status_code=404)
    return FileResponse(path)


@router.get("/{full_path:path}", include_in_schema=False)
def spa_fallback(full_path: str, request: Request, settings: Settings):
    """Serve a file from ``public_dir``, else its ``index.html``."""
    if full_path == "api" or full_path.startswith("api/"):
        return problem_response(status=404, title="Not Found", instance=request.url.path)

    root = settings.public_dir
    if root is None:
        return problem_response(status=404, title="Not Found", instance=request.url.path)

    if full_path:
        candidate = root / full_path
        if candidate.is_file() and _inside(root, candidate):
            return FileResponse(candidate)

    index = root / "index.html"
    if not index.is_file():
        return problem_response(status=404, title="Not Found", instance=request.url.path)
    return FileResponse(index)
