"""Server-rendered to-do list endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import HTMLResponse, PlainTextResponse, RedirectResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.responses import Response

from todolist.db.session import get_db
from todolist.items.schemas import ItemCreate
from todolist.items.service import ItemService
from todolist.lists.service import TODAY_LIST_NAME, ListService, normalize_list_name
from todolist.views.templating import list_url, render_list, templates

logger = logging.getLogger(__name__)

router = APIRouter(tags=["lists"])

# Body of the 500 response for a failed list lookup or creation
LIST_ERROR_MESSAGE = "An error occurred."


def _list_location(list_name: str) -> str:
    if list_name == TODAY_LIST_NAME:
        return "/"
    return list_url(list_name)


@router.get(
    "/",
    response_class=HTMLResponse,
    summary="Show the Today list",
)
async def get_today(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Response:
    """Render the Today list, seeding it with the default items when empty."""
    items = await ItemService.get_all(db)
    if not items:
        await ItemService.insert_defaults(db)
        await db.commit()
        return RedirectResponse(url="/", status_code=status.HTTP_302_FOUND)
    return render_list(request, TODAY_LIST_NAME, items)


@router.post(
    "/",
    response_class=RedirectResponse,
    status_code=status.HTTP_303_SEE_OTHER,
    summary="Add an item to a list",
)
async def add_item(
    db: Annotated[AsyncSession, Depends(get_db)],
    item_name: Annotated[str, Form(alias="newItem")] = "",
    list_name: Annotated[str, Form(alias="list")] = TODAY_LIST_NAME,
) -> RedirectResponse:
    """Add an item to Today or to a named list, then show that list.

    Adding to a list that does not exist raises ListNotFoundError (404).
    """
    data = ItemCreate(name=item_name)
    if list_name == TODAY_LIST_NAME:
        await ItemService.create(db, data)
    else:
        await ListService.add_item(db, list_name, data)
    await db.commit()
    return RedirectResponse(
        url=_list_location(list_name), status_code=status.HTTP_303_SEE_OTHER
    )


@router.post(
    "/delete",
    response_class=RedirectResponse,
    status_code=status.HTTP_303_SEE_OTHER,
    summary="Check off (delete) an item",
)
async def delete_item(
    db: Annotated[AsyncSession, Depends(get_db)],
    item_id: Annotated[str, Form(alias="checkbox")],
    list_name: Annotated[str, Form(alias="listName")] = TODAY_LIST_NAME,
) -> RedirectResponse:
    """Remove an item from Today or from a named list, then show that list."""
    if list_name == TODAY_LIST_NAME:
        deleted = await ItemService.delete(db, item_id)
    else:
        deleted = await ListService.remove_item(db, list_name, item_id)
    if not deleted:
        logger.debug(
            "Nothing to delete",
            extra={"item_id": item_id, "list_name": list_name},
        )
    await db.commit()
    return RedirectResponse(
        url=_list_location(list_name), status_code=status.HTTP_303_SEE_OTHER
    )


@router.get(
    "/about",
    response_class=HTMLResponse,
    summary="About page",
)
async def get_about(request: Request) -> Response:
    """Render the static about page."""
    return templates.TemplateResponse(request, "about.html", {})


@router.get(
    "/{custom_list_name}",
    response_class=HTMLResponse,
    summary="Show a named list, creating it on first visit",
)
async def get_or_create_list(
    custom_list_name: str,
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Response:
    """Render a named list; a first visit creates it with the default items."""
    list_name = normalize_list_name(custom_list_name)
    if list_name == TODAY_LIST_NAME:
        return RedirectResponse(url="/", status_code=status.HTTP_302_FOUND)

    try:
        todo_list = await ListService.get_by_name(db, list_name)
        if todo_list is None:
            await ListService.create_with_defaults(db, list_name)
            await db.commit()
            return RedirectResponse(
                url=list_url(list_name), status_code=status.HTTP_302_FOUND
            )
    except SQLAlchemyError:
        logger.exception("List lookup failed", extra={"list_name": list_name})
        await db.rollback()
        return PlainTextResponse(
            LIST_ERROR_MESSAGE,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    return render_list(request, todo_list.name, todo_list.items)
