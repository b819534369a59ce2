"""Shared helpers for API tests."""
from typing import Any

from httpx import AsyncClient


async def create_category(client: AsyncClient, name: str = "Reading", **fields: Any) -> dict:
    """Create a category through the API and return its JSON."""
    response = await client.post("/categories/", json={"name": name, **fields})
    assert response.status_code == 201, response.text
    return response.json()


async def create_tag(client: AsyncClient, name: str) -> dict:
    """Create a tag through the API and return its JSON."""
    response = await client.post("/tags/", json={"name": name})
    assert response.status_code == 201, response.text
    return response.json()


async def create_language(client: AsyncClient, name: str = "English", short_name: str = "en") -> dict:
    """Create a language through the API and return its JSON."""
    response = await client.post("/languages/", json={"name": name, "short_name": short_name})
    assert response.status_code == 201, response.text
    return response.json()


async def create_bookmark(
    client: AsyncClient,
    category_id: int,
    name: str = "Example",
    url: str = "https://example.com",
    **fields: Any,
) -> dict:
    """Create a bookmark through the API and return its JSON."""
    payload = {"name": name, "url": url, "category_id": category_id, **fields}
    response = await client.post("/bookmarks/", json=payload)
    assert response.status_code == 201, response.text
    return response.json()
