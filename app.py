"""Single listener for the frontend bundle and the backend API.

  /api/*   -> backend.app (FastAPI sub-application)
  /<file>  -> static file from the public directory
  anything else (GET) -> public/index.html, so client-side routes resolve

Run with:  python app.py   (or: uvicorn app:app)
"""
import logging
from pathlib import Path

import uvicorn
from fastapi import FastAPI
from fastapi.responses import FileResponse, JSONResponse

from backend.app import app as backend_app, lifespan
from backend.core.logging import setup_logging
from backend.core.settings import settings

logger = logging.getLogger("backend")


def _resolve_asset(public_dir: Path, rel_path: str) -> Path | None:
    if not rel_path:
        return None
    root = public_dir.resolve()
    try:
        candidate = (root / rel_path).resolve()
        if root not in candidate.parents or not candidate.is_file():
            return None
    except (OSError, ValueError):
        # e.g. embedded NUL bytes or names too long for the filesystem
        return None
    return candidate


def create_app(public_dir: Path | None = None) -> FastAPI:
    public_dir = Path(public_dir or settings.public_dir)
    # Mounted apps do not receive lifespan events, so the storage bootstrap runs here.
    app = FastAPI(lifespan=lifespan)

    app.mount("/api", backend_app)

    @app.get("/{full_path:path}", include_in_schema=False)
    async def serve_frontend(full_path: str):
        asset_path = _resolve_asset(public_dir, full_path)
        if asset_path is not None:
            return FileResponse(asset_path)
        index_path = public_dir / "index.html"
        if index_path.is_file():
            return FileResponse(index_path)
        return JSONResponse({"error": "Frontend not built"}, status_code=404)

    return app


app = create_app()


def main() -> None:
    setup_logging()
    logger.info("Starting server on port %s", settings.port)
    uvicorn.run(app, host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    main()
