from __future__ import annotations

from pathlib import Path
from typing import Any

from fastapi import Request
from fastapi.templating import Jinja2Templates
from starlette.responses import Response

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


def render(request: Request, view: str, context: dict[str, Any] | None = None, status_code: int = 200) -> Response:
    """Render ``posts/<view>.html`` with the given context."""
    return templates.TemplateResponse(
        request,
        f"posts/{view}.html",
        context or {},
        status_code=status_code,
    )
