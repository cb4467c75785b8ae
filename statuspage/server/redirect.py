"""Plaintext redirect server, only started in HTTPS mode."""

from __future__ import annotations

from fastapi import FastAPI, Request, Response
from fastapi.responses import RedirectResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint


class RedirectMiddleware(BaseHTTPMiddleware):
    """Answer every request with a 301 before routing, whatever its method."""

    def __init__(self, app, secure_origin: str) -> None:
        super().__init__(app)
        self.secure_origin = secure_origin

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        return RedirectResponse(self.secure_origin, status_code=301)


def create_redirect_app(secure_origin: str) -> FastAPI:
    """Every request, whatever the path or method, gets a 301 to `secure_origin`."""
    app = FastAPI(
        title="statuspage-redirect",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    app.add_middleware(RedirectMiddleware, secure_origin=secure_origin)

    return app
