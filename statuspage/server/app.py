"""FastAPI status server — index page, status files, metrics proxy.

Endpoints:
  GET /                   — static index page
  GET /status/{id}.json   — latest persisted record for a target
  GET /metrics            — upstream metrics text (empty on failure)
  GET /healthz            — state of the checker tasks themselves
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import FileResponse, PlainTextResponse
from fastapi.staticfiles import StaticFiles

from statuspage import __version__
from statuspage.config import Settings
from statuspage.monitor.checker import build_checkers
from statuspage.monitor.scheduler import CheckerScheduler
from statuspage.monitor.store import StatusStore

logger = logging.getLogger(__name__)

METRICS_TIMEOUT = 10.0


def create_app(settings: Settings) -> FastAPI:
    """Build the status server. Checkers start with the app lifespan."""
    store = StatusStore(settings.status_dir)
    index_path = Path(settings.index_file)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        scheduler: CheckerScheduler = app.state.scheduler
        await scheduler.start()

        yield

        await scheduler.stop()

    app = FastAPI(
        title="statuspage",
        version=__version__,
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.settings = settings
    app.state.store = store
    app.state.scheduler = CheckerScheduler(build_checkers(settings, store))

    @app.get("/")
    async def index() -> FileResponse:
        return FileResponse(index_path, media_type="text/html")

    @app.get("/metrics")
    async def metrics() -> PlainTextResponse:
        url = settings.metrics_upstream_url
        try:
            async with httpx.AsyncClient(timeout=METRICS_TIMEOUT) as client:
                resp = await client.get(url)
            resp.raise_for_status()
            return PlainTextResponse(resp.text)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning("Metrics upstream %s unavailable: %s", url, e)
            return PlainTextResponse("")

    @app.get("/healthz")
    async def healthz(request: Request) -> dict[str, Any]:
        return request.app.state.scheduler.status()

    app.mount("/status", StaticFiles(directory=str(store.directory)), name="status")

    return app
