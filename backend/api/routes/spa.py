"""Fallback route serving static assets and the single-page app entry document."""
import logging
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse, PlainTextResponse, Response

from backend.api.dependencies import get_settings
from backend.config import Settings

logger = logging.getLogger(__name__)

router = APIRouter(tags=["spa"])


def resolve_static_file(static_dir: Path, full_path: str) -> Optional[Path]:
    """Return the file under static_dir for a request path, never escaping the directory."""
    if not full_path:
        return None
    root = static_dir.resolve()
    candidate = (root / full_path).resolve()
    if root not in candidate.parents or not candidate.is_file():
        return None
    return candidate


@router.get("/{full_path:path}", include_in_schema=False)
async def serve_spa(
    full_path: str,
    app_settings: Settings = Depends(get_settings),
) -> Response:
    """Serve a static asset, else index.html, else a plain-text 404."""
    asset = resolve_static_file(app_settings.static_dir, full_path)
    if asset is not None:
        return FileResponse(asset)

    index_file = app_settings.index_file
    logger.debug("Attempting to send file from: %s", index_file)
    if index_file.is_file():
        return FileResponse(index_file)
    return PlainTextResponse("Index file not found", status_code=404)
