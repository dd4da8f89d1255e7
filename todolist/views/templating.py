"""Jinja2 template and static asset locations."""

from collections.abc import Iterable
from pathlib import Path
from urllib.parse import quote

from fastapi import Request
from fastapi.templating import Jinja2Templates
from starlette.responses import Response

from todolist.items.schemas import ItemResponse

PACKAGE_DIR = Path(__file__).resolve().parent.parent
TEMPLATES_DIR = PACKAGE_DIR / "templates"
STATIC_DIR = PACKAGE_DIR / "static"

templates = Jinja2Templates(directory=TEMPLATES_DIR)


def list_url(list_name: str) -> str:
    """URL of a named list page."""
    return "/" + quote(list_name, safe="")


def render_list(request: Request, title: str, items: Iterable[object]) -> Response:
    """Render the list view for any list, Today included.

    Args:
        request: The incoming request.
        title: The list title, posted back as the target of add and delete.
        items: Item or ListItem rows in display order.
    """
    return templates.TemplateResponse(
        request,
        "list.html",
        {
            "list_title": title,
            "new_list_items": [ItemResponse.model_validate(item) for item in items],
        },
    )
