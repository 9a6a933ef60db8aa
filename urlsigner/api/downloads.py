# urlsigner/api/downloads.py
from pathlib import Path

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import FileResponse

# Bewaakt door SignedURLMiddleware (prefix /downloads), zie main.py
router = APIRouter(prefix="/downloads", tags=["downloads"])


def _sanitize_filename(name: str) -> str:
    name = (name or "").strip()
    if not name:
        raise HTTPException(status_code=400, detail="filename is required")
    if "/" in name or "\\" in name or ".." in name or name.startswith("."):
        raise HTTPException(status_code=400, detail="invalid filename")
    return name


def resolve_download(base_dir: Path, name: str) -> Path:
    base = Path(base_dir).resolve()
    path = (base / _sanitize_filename(name)).resolve()
    if base not in path.parents:
        raise HTTPException(status_code=400, detail="invalid path")
    if not path.is_file():
        raise HTTPException(status_code=404, detail="file not found")
    return path


@router.get("/{name}", name="download_file")
def download_file(name: str, request: Request):
    path = resolve_download(request.app.state.settings.DOWNLOADS_DIR, name)
    return FileResponse(str(path), filename=path.name, media_type="application/octet-stream")
