"""
FastAPI application entry point.

Run:  python -m uvicorn app.main:app --port 8000

Configuration comes from ``HOSTS_EDITOR_*`` environment variables, see
:mod:`app.settings`.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from fastapi import FastAPI
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles

from app.routes import router, init_service
from app.settings import Settings, get_settings
from core import IHostsSource
from infrastructure import build_source
from services.hosts_service import HostsDocumentService

logger = logging.getLogger(__name__)

_project_root = Path(__file__).resolve().parent.parent


def create_app(
    settings: Optional[Settings] = None,
    source: Optional[IHostsSource] = None,
) -> FastAPI:
    """Build the application around one HostsDocumentService."""
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s  %(name)s  %(levelname)s  %(message)s",
    )

    if source is None:
        source = build_source(settings.hosts_path, settings.elevation)
    service = HostsDocumentService(source)
    init_service(service)
    if settings.load_on_startup:
        service.load()

    app = FastAPI(title="Hosts Editor")

    # API routes
    app.include_router(router)

    # Serve static frontend
    static_dir = Path(settings.static_dir)
    if not static_dir.is_absolute():
        static_dir = _project_root / static_dir
    index_html = static_dir / "index.html"
    if index_html.is_file():
        # Serve /assets/ for JS/CSS bundles produced by Vite
        assets_dir = static_dir / "assets"
        if assets_dir.is_dir():
            app.mount("/assets", StaticFiles(directory=str(assets_dir)), name="assets")
        app.mount("/static", StaticFiles(directory=str(static_dir)), name="static")

        @app.get("/")
        def index():
            """Serve the frontend."""
            return FileResponse(str(index_html))
    else:
        logger.info("No frontend build in %s; serving the API only", static_dir)

    return app


app = create_app()
