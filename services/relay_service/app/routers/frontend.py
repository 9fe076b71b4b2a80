"""Serves the single-page client: real files from the public directory, index.html for anything else."""
from pathlib import Path

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import FileResponse

router = APIRouter()


def resolve_asset(public_dir: Path, path: str) -> Path:
    root = public_dir.resolve()
    index = root / "index.html"
    if path:
        try:
            candidate = (root / path).resolve()
            # Never serve anything outside the public directory
            if candidate.is_relative_to(root) and candidate.is_file():
                return candidate
        except (OSError, ValueError):
            pass  # null bytes and overlong names fall back to index.html
    if index.is_file():
        return index
    raise HTTPException(status_code=404, detail="Not found")


@router.get("/{path:path}", include_in_schema=False)
def frontend(path: str, request: Request):
    if path == "api" or path.startswith("api/"):
        raise HTTPException(status_code=404, detail="Not found")
    return FileResponse(resolve_asset(request.app.state.settings.public_dir, path))
