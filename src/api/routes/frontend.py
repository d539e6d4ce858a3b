"""Static client: serves assets and falls back to index.html (SPA shell).

Registered last so every /api route wins over the catch-all.
"""

import logging
from pathlib import Path

from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse, JSONResponse

from api.config import Settings
from api.dependencies import get_settings

logger = logging.getLogger(__name__)

router = APIRouter(tags=["frontend"])


def resolve_asset(frontend_dir: Path, full_path: str) -> Path | None:
    """Return the file under frontend_dir for full_path, or None.

    Paths that escape frontend_dir (../) never resolve.
    """
    root = frontend_dir.resolve()
    candidate = (root / full_path).resolve()
    if not candidate.is_relative_to(root) or not candidate.is_file():
        return None
    return candidate


@router.get("/{full_path:path}", include_in_schema=False)
async def serve_frontend(full_path: str, settings: Settings = Depends(get_settings)):
    if full_path == "api" or full_path.startswith("api/"):
        return JSONResponse(status_code=404, content={"message": "Not found"})

    asset = resolve_asset(settings.frontend_dir, full_path) if full_path else None
    if asset:
        return FileResponse(asset)

    index_path = settings.frontend_dir / "index.html"
    if index_path.is_file():
        return FileResponse(index_path)

    logger.error("index.html not found", extra={"path": str(index_path)})
    return JSONResponse(status_code=404, content={"message": "Frontend not found"})
