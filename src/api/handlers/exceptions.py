from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi.responses import PlainTextResponse

from core.exceptions import BlogException, map_exception_to_http

if TYPE_CHECKING:  # pragma: no cover
    from fastapi import FastAPI, Request


def register_exception_handlers(app: FastAPI) -> None:
    """Register application-wide exception handlers."""

    @app.exception_handler(BlogException)
    async def blog_exception_handler(request: Request, exc: BlogException) -> PlainTextResponse:  # noqa: D401
        http_exc = map_exception_to_http(exc)
        return PlainTextResponse(exc.message, status_code=http_exc.status_code)
