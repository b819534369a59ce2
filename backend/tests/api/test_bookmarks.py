"""Tests for bookmark CRUD endpoints."""
import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from models.category import Category
from models.tag import Tag
from models.user import User
from tests.api.conftest import create_bookmark, create_category, create_language, create_tag


async def test__create_bookmark__returns_language_and_tags(auth_client: AsyncClient) -> None:
    category = await create_category(auth_client)
    language = await create_language(auth_client)
    web = await create_tag(auth_client, "web")
    api = await create_tag(auth_client, "api")

    response = await auth_client.post(
        "/bookmarks/",
        json={
            "name": "  FastAPI docs ",
            "url": "https://fastapi.tiangolo.com",
            "description": "Framework docs",
            "category_id": category["id"],
            "language_id": language["id"],
            "tag_ids": [web["id"], api["id"]],
        },
    )

    assert response.status_code == 201
    data = response.json()
    assert data["name"] == "FastAPI docs"
    assert data["category_id"] == category["id"]
    assert data["language"] == {"id": language["id"], "name": "English", "short_name": "en"}
    assert sorted(t["name"] for t in data["tags"]) == ["api", "web"]


async def test__create_bookmark__without_language_or_tags(auth_client: AsyncClient) -> None:
    category = await create_category(auth_client)

    data = await create_bookmark(auth_client, category["id"])

    assert data["language"] is None
    assert data["language_id"] is None
    assert data["tags"] == []


async def test__create_bookmark__unknown_category_returns_404(auth_client: AsyncClient) -> None:
    response = await auth_client.post(
        "/bookmarks/",
        json={"name": "x", "url": "https://example.com", "category_id": 999999},
    )

    assert response.status_code == 404
    assert response.json()["detail"] == "Category not found"


async def test__create_bookmark__unknown_language_returns_404(auth_client: AsyncClient) -> None:
    category = await create_category(auth_client)

    response = await auth_client.post(
        "/bookmarks/",
        json={
            "name": "x",
            "url": "https://example.com",
            "category_id": category["id"],
            "language_id": 999999,
        },
    )

    assert response.status_code == 404
    assert response.json()["detail"] == "Language not found"


async def test__create_bookmark__other_users_tags_are_ignored(
    auth_client: AsyncClient,
    db_session: AsyncSession,
    other_user: User,
) -> None:
    foreign = Tag(user_id=other_user.id, name="foreign")
    db_session.add(foreign)
    await db_session.commit()
    category = await create_category(auth_client)
    mine = await create_tag(auth_client, "mine")

    data = await create_bookmark(
        auth_client, category["id"], tag_ids=[mine["id"], foreign.id],
    )

    assert [t["name"] for t in data["tags"]] == ["mine"]


@pytest.mark.parametrize(
    "payload",
    [
        {"name": "", "url": "https://example.com"},
        {"name": "x", "url": "   "},
        {"name": "x"},
        {"url": "https://example.com"},
    ],
)
async def test__create_bookmark__invalid_payload_returns_422(
    auth_client: AsyncClient,
    payload: dict,
) -> None:
    category = await create_category(auth_client)

    response = await auth_client.post("/bookmarks/", json={**payload, "category_id": category["id"]})

    assert response.status_code == 422


async def test__list_bookmarks__grouped_by_category_and_sorted(auth_client: AsyncClient) -> None:
    work = await create_category(auth_client, "Work")
    fun = await create_category(auth_client, "Fun")
    await create_category(auth_client, "Empty")
    await create_bookmark(auth_client, work["id"], name="Zeta")
    await create_bookmark(auth_client, work["id"], name="Alpha")
    await create_bookmark(auth_client, fun["id"], name="Comics")

    response = await auth_client.get("/bookmarks/")

    assert response.status_code == 200
    data = response.json()
    assert list(data) == ["Fun", "Work"]
    assert [b["name"] for b in data["Work"]] == ["Alpha", "Zeta"]
    assert [b["name"] for b in data["Fun"]] == ["Comics"]


async def test__list_bookmarks__empty(auth_client: AsyncClient) -> None:
    response = await auth_client.get("/bookmarks/")

    assert response.json() == {}


async def test__list_bookmarks__requires_auth(client: AsyncClient) -> None:
    response = await client.get("/bookmarks/")

    assert response.status_code == 401


async def test__get_bookmark__returns_bookmark(auth_client: AsyncClient) -> None:
    category = await create_category(auth_client)
    created = await create_bookmark(auth_client, category["id"])

    response = await auth_client.get(f"/bookmarks/{created['id']}")

    assert response.status_code == 200
    assert response.json() == created


async def test__get_bookmark__unknown_returns_404(auth_client: AsyncClient) -> None:
    response = await auth_client.get("/bookmarks/999999")

    assert response.status_code == 404
    assert response.json()["detail"] == "Bookmark not found"


async def test__replace_bookmark__overwrites_fields_and_tags(auth_client: AsyncClient) -> None:
    reading = await create_category(auth_client, "Reading")
    work = await create_category(auth_client, "Work")
    old_tag = await create_tag(auth_client, "old")
    new_tag = await create_tag(auth_client, "new")
    language = await create_language(auth_client)
    created = await create_bookmark(
        auth_client,
        reading["id"],
        description="before",
        language_id=language["id"],
        tag_ids=[old_tag["id"]],
    )

    response = await auth_client.put(
        f"/bookmarks/{created['id']}",
        json={
            "name": "Renamed",
            "url": "https://example.org",
            "category_id": work["id"],
            "tag_ids": [new_tag["id"]],
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Renamed"
    assert data["url"] == "https://example.org"
    assert data["description"] is None
    assert data["category_id"] == work["id"]
    assert data["language"] is None
    assert [t["name"] for t in data["tags"]] == ["new"]


async def test__replace_bookmark__empty_tag_list_clears_tags(auth_client: AsyncClient) -> None:
    category = await create_category(auth_client)
    tag = await create_tag(auth_client, "python")
    created = await create_bookmark(auth_client, category["id"], tag_ids=[tag["id"]])

    response = await auth_client.put(
        f"/bookmarks/{created['id']}",
        json={"name": "x", "url": "https://example.com", "category_id": category["id"]},
    )

    assert response.json()["tags"] == []


async def test__replace_bookmark__foreign_category_returns_404(
    auth_client: AsyncClient,
    db_session: AsyncSession,
    other_user: User,
) -> None:
    foreign = Category(user_id=other_user.id, name="Bob's")
    db_session.add(foreign)
    await db_session.commit()
    category = await create_category(auth_client)
    created = await create_bookmark(auth_client, category["id"])

    response = await auth_client.put(
        f"/bookmarks/{created['id']}",
        json={"name": "x", "url": "https://example.com", "category_id": foreign.id},
    )

    assert response.status_code == 404
    assert response.json()["detail"] == "Category not found"


async def test__delete_bookmark__returns_204(auth_client: AsyncClient) -> None:
    category = await create_category(auth_client)
    created = await create_bookmark(auth_client, category["id"])

    response = await auth_client.delete(f"/bookmarks/{created['id']}")

    assert response.status_code == 204
    assert (await auth_client.get(f"/bookmarks/{created['id']}")).status_code == 404


async def test__delete_bookmark__keeps_tags(auth_client: AsyncClient) -> None:
    category = await create_category(auth_client)
    tag = await create_tag(auth_client, "python")
    created = await create_bookmark(auth_client, category["id"], tag_ids=[tag["id"]])

    await auth_client.delete(f"/bookmarks/{created['id']}")

    tags = await auth_client.get("/tags/", params={"counts": "true"})
    assert tags.json() == [{"id": tag["id"], "name": "python", "count": 0}]
