"""
Security test fixtures.

These fixtures enable testing security scenarios like IDOR (Insecure Direct
Object Reference) by creating two users, data owned by the first, and a client
logged in as the second. Authentication goes through real sessions and cookies.
"""
from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from models.category import Category
from models.site import Site
from models.tag import Tag
from models.user import User
from tests.conftest import BASE_URL, TEST_HOST, make_session_token, make_user


@pytest.fixture
async def user_a(db_session: AsyncSession) -> User:
    """Create the first test user (User A)."""
    return await make_user(db_session, "user-a", "user-a@test.com")


@pytest.fixture
async def user_b(db_session: AsyncSession) -> User:
    """Create a second test user (User B) for IDOR testing."""
    return await make_user(db_session, "user-b", "user-b@test.com")


@pytest.fixture
async def user_a_category(db_session: AsyncSession, user_a: User) -> Category:
    """Create a category belonging to User A."""
    category = Category(user_id=user_a.id, name="A's category")
    db_session.add(category)
    await db_session.commit()
    return category


@pytest.fixture
async def user_a_tag(db_session: AsyncSession, user_a: User) -> Tag:
    """Create a tag belonging to User A."""
    tag = Tag(user_id=user_a.id, name="a-private")
    db_session.add(tag)
    await db_session.commit()
    return tag


@pytest.fixture
async def user_a_bookmark(
    db_session: AsyncSession,
    user_a: User,
    user_a_category: Category,
    user_a_tag: Tag,
) -> Site:
    """Create a bookmark belonging to User A, filed under A's category with A's tag."""
    site = Site(
        user_id=user_a.id,
        category_id=user_a_category.id,
        name="User A's Private Bookmark",
        url="https://user-a-bookmark.example.com/",
        tags=[user_a_tag],
    )
    db_session.add(site)
    await db_session.commit()
    return site


@pytest.fixture
async def user_b_category(db_session: AsyncSession, user_b: User) -> Category:
    """Create a category belonging to User B."""
    category = Category(user_id=user_b.id, name="B's category")
    db_session.add(category)
    await db_session.commit()
    return category


@pytest.fixture
async def client_as_user_b(
    db_session: AsyncSession,
    user_b: User,
) -> AsyncGenerator[AsyncClient]:
    """Test client logged in as User B through a real session cookie."""
    from api.main import app
    from db.session import get_async_session

    async def override_get_async_session() -> AsyncGenerator[AsyncSession]:
        yield db_session

    app.dependency_overrides[get_async_session] = override_get_async_session
    token = await make_session_token(db_session, user_b)

    async with AsyncClient(transport=ASGITransport(app=app), base_url=BASE_URL) as client:
        client.cookies.set("auth-session", token, domain=TEST_HOST)
        yield client

    app.dependency_overrides.clear()
