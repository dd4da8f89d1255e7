"""Tests for named list endpoints."""

from collections.abc import AsyncGenerator
from unittest.mock import AsyncMock

import pytest
from httpx import AsyncClient
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from tests.factories.items import ItemFactory, list_name
from todolist.db.session import get_db
from todolist.items.defaults import DEFAULT_ITEM_NAMES
from todolist.items.service import ItemService
from todolist.lists.service import ListService
from todolist.main import app


@pytest.mark.asyncio
async def test_first_visit_creates_list_and_redirects(
    client: AsyncClient, db_session: AsyncSession
) -> None:
    """Test that visiting an unknown list creates it with the defaults."""
    response = await client.get("/groceries")

    assert response.status_code == 302
    assert response.headers["location"] == "/Groceries"
    groceries = await ListService.get_by_name(db_session, "Groceries")
    assert groceries is not None
    assert [item.name for item in groceries.items] == list(DEFAULT_ITEM_NAMES)


@pytest.mark.asyncio
async def test_second_visit_renders_list(client: AsyncClient) -> None:
    """Test that the follow-up request renders the list under its title."""
    await client.get("/groceries")

    response = await client.get("/Groceries")

    assert response.status_code == 200
    assert "<h1>Groceries</h1>" in response.text
    assert response.text.count('name="checkbox"') == 3
    assert 'name="listName" value="Groceries"' in response.text


@pytest.mark.asyncio
async def test_list_names_are_case_insensitive(
    client: AsyncClient, db_session: AsyncSession
) -> None:
    """Test that differently cased paths address the same list."""
    await client.get("/WORK")

    response = await client.get("/wOrK")

    assert response.status_code == 200
    assert "<h1>Work</h1>" in response.text
    lists = await ListService.get_all(db_session)
    assert [todo_list.name for todo_list, _ in lists] == ["Work"]


@pytest.mark.asyncio
async def test_repeated_visits_are_idempotent(
    client: AsyncClient, db_session: AsyncSession
) -> None:
    """Test that visiting an existing list never changes it."""
    name = list_name()
    await client.get(f"/{name}")

    first = await client.get(f"/{name}")
    second = await client.get(f"/{name}")

    assert first.status_code == second.status_code == 200
    assert first.text.count('name="checkbox"') == second.text.count('name="checkbox"')
    todo_list = await ListService.get_by_name(db_session, name)
    assert todo_list is not None
    assert len(todo_list.items) == 3


@pytest.mark.asyncio
async def test_lists_get_independent_default_items(
    client: AsyncClient, db_session: AsyncSession
) -> None:
    """Test that two lists never share seed items."""
    await client.get("/home")
    await client.get("/work")
    home = await ListService.get_by_name(db_session, "Home")
    work = await ListService.get_by_name(db_session, "Work")
    assert home is not None and work is not None

    await client.post(
        "/delete", data={"checkbox": home.items[0].id, "listName": "Home"}
    )

    home = await ListService.get_by_name(db_session, "Home")
    work = await ListService.get_by_name(db_session, "Work")
    assert home is not None and work is not None
    assert len(home.items) == 2
    assert len(work.items) == 3
    assert not {item.id for item in home.items} & {item.id for item in work.items}


@pytest.mark.asyncio
async def test_today_path_redirects_home(
    client: AsyncClient, db_session: AsyncSession
) -> None:
    """Test that /today shows the flat collection instead of creating a list."""
    response = await client.get("/today")

    assert response.status_code == 302
    assert response.headers["location"] == "/"
    assert await ListService.get_by_name(db_session, "Today") is None


@pytest.mark.asyncio
async def test_add_item_to_list(client: AsyncClient, db_session: AsyncSession) -> None:
    """Test that adding to a list appends one item and leaves Today alone."""
    await client.get("/groceries")
    today_before = await ItemService.count(db_session)

    response = await client.post("/", data={"newItem": "Milk", "list": "Groceries"})

    assert response.status_code == 303
    assert response.headers["location"] == "/Groceries"
    groceries = await ListService.get_by_name(db_session, "Groceries")
    assert groceries is not None
    assert len(groceries.items) == 4
    assert groceries.items[-1].name == "Milk"
    assert await ItemService.count(db_session) == today_before


@pytest.mark.asyncio
async def test_add_long_item_to_list(
    client: AsyncClient, db_session: AsyncSession
) -> None:
    """Test that a long item name is stored whole in a named list."""
    await client.get("/groceries")
    long_name = "milk" * 80

    response = await client.post(
        "/", data={"newItem": long_name, "list": "Groceries"}
    )

    assert response.status_code == 303
    groceries = await ListService.get_by_name(db_session, "Groceries")
    assert groceries is not None
    assert groceries.items[-1].name == long_name


@pytest.mark.asyncio
async def test_add_item_to_missing_list(
    client: AsyncClient, db_session: AsyncSession
) -> None:
    """Test that adding to an unknown list is an explicit not-found error."""
    response = await client.post("/", data=ItemFactory.form("Nowhere"))

    assert response.status_code == 404
    data = response.json()
    assert data["error"] == "ListNotFoundError"
    assert data["list"] == "Nowhere"
    assert "correlation_id" in data
    assert await ListService.get_by_name(db_session, "Nowhere") is None


@pytest.mark.asyncio
async def test_delete_item_from_list(
    client: AsyncClient, db_session: AsyncSession
) -> None:
    """Test that checking off removes exactly that item from the list."""
    await client.get("/groceries")
    groceries = await ListService.get_by_name(db_session, "Groceries")
    assert groceries is not None
    target, *others = groceries.items
    other_ids = [item.id for item in others]

    response = await client.post(
        "/delete", data={"checkbox": target.id, "listName": "Groceries"}
    )

    assert response.status_code == 303
    assert response.headers["location"] == "/Groceries"
    groceries = await ListService.get_by_name(db_session, "Groceries")
    assert groceries is not None
    assert [item.id for item in groceries.items] == other_ids
    page = await client.get("/Groceries")
    assert page.text.count('name="checkbox"') == 2


@pytest.mark.asyncio
async def test_delete_from_other_list_is_noop(
    client: AsyncClient, db_session: AsyncSession
) -> None:
    """Test that an item id only matches inside its own list."""
    await client.get("/home")
    await client.get("/work")
    home = await ListService.get_by_name(db_session, "Home")
    assert home is not None

    await client.post(
        "/delete", data={"checkbox": home.items[0].id, "listName": "Work"}
    )

    home = await ListService.get_by_name(db_session, "Home")
    work = await ListService.get_by_name(db_session, "Work")
    assert home is not None and work is not None
    assert len(home.items) == 3
    assert len(work.items) == 3


@pytest.mark.asyncio
async def test_list_names_with_spaces_redirect_encoded(
    client: AsyncClient, db_session: AsyncSession
) -> None:
    """Test that list names are percent-encoded in redirects."""
    response = await client.get("/road%20trip")

    assert response.status_code == 302
    assert response.headers["location"] == "/Road%20trip"
    assert await ListService.get_by_name(db_session, "Road trip") is not None


@pytest.mark.asyncio
async def test_store_error_returns_generic_500(client: AsyncClient) -> None:
    """Test that a failing store lookup answers with a plain 500."""
    broken = AsyncMock(spec=AsyncSession)
    broken.execute.side_effect = OperationalError("SELECT", {}, Exception("down"))

    async def override_get_db() -> AsyncGenerator[AsyncSession]:
        yield broken

    app.dependency_overrides[get_db] = override_get_db

    response = await client.get("/groceries")

    assert response.status_code == 500
    assert response.text == "An error occurred."
    broken.rollback.assert_awaited_once()
