"""
Fallback route serving the front-end bundle from the static directory.
"""

from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, Request
from fastapi.responses import FileResponse

from booking_gateway.errors import NotFoundError

router = APIRouter()

ENTRY_DOCUMENT = "index.html"


def _resolve_static_file(static_dir: Path, full_path: str) -> Path | None:
    if not full_path:
        return None
    candidate = (static_dir / full_path).resolve()
    if candidate.is_file() and candidate.is_relative_to(static_dir):
        return candidate
    return None


@router.get("/{full_path:path}", include_in_schema=False)
def serve_frontend(full_path: str, request: Request):
    """Serve a static asset if one matches, otherwise the entry document."""
    static_dir = Path(request.app.state.settings.static_dir).resolve()
    asset = _resolve_static_file(static_dir, full_path)
    if asset:
        return FileResponse(asset)
    entry = static_dir / ENTRY_DOCUMENT
    if not entry.is_file():
        raise NotFoundError()
    return FileResponse(entry)
