import os

# Must be set before blogsphere.config is imported
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("TESTING", "true")

import pytest
from datetime import date
from typing import AsyncGenerator, Dict, Optional
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession

from blogsphere.main import app
from blogsphere.db.base import Base
from blogsphere.db.session import build_engine, build_session_factory, get_db
from blogsphere.models import Blog, User
from blogsphere.services.auth_service import AuthService
from blogsphere.services.redis_service import RedisService, get_redis

# Test database URL - in-memory SQLite
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


class InMemoryRedis:
    """Just enough of redis.asyncio.Redis for the token blacklist"""

    def __init__(self):
        self.store: Dict[str, str] = {}

    async def set(self, name: str, value: str, ex: Optional[int] = None):
        self.store[name] = value

    async def get(self, name: str):
        return self.store.get(name)

    async def delete(self, *names: str):
        for name in names:
            self.store.pop(name, None)

    async def aclose(self):
        pass


@pytest.fixture
async def test_engine():
    engine = build_engine(TEST_DATABASE_URL, testing=True)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return build_session_factory(test_engine)


@pytest.fixture
async def test_db(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Session for arranging data and calling services directly"""
    async with session_factory() as session:
        yield session


@pytest.fixture
def redis_service() -> RedisService:
    return RedisService(redis=InMemoryRedis())


@pytest.fixture
async def test_client(session_factory, redis_service) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client with the database and Redis dependencies overridden"""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_redis] = lambda: redis_service

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def make_user(test_db):
    """Factory inserting users directly; passwords are not hashed"""
    counter = {"n": 0}

    async def _make_user(preferences=("technology",), name: Optional[str] = None) -> User:
        counter["n"] += 1
        n = counter["n"]
        user = User(
            name=name or f"User {n}",
            email=f"user{n}@example.com",
            hashed_password="not-a-real-hash",
            mobile=f"98765432{n:02d}",
            dob=date(1995, 1, 1),
            preferences=list(preferences),
        )
        test_db.add(user)
        await test_db.commit()
        return user

    return _make_user


@pytest.fixture
def make_blog(test_db):
    async def _make_blog(
        author: User,
        categories=("technology",),
        published: bool = True,
        title: str = "A blog",
    ) -> Blog:
        blog = Blog(
            author_id=author.id,
            title=title,
            content="Some content",
            tags=[],
            categories=list(categories),
            is_published=published,
            like_count=0,
            dislike_count=0,
        )
        test_db.add(blog)
        await test_db.commit()
        return blog

    return _make_blog


@pytest.fixture
def auth_headers(test_db, redis_service):
    """Bearer headers for a user without going through login"""

    def _auth_headers(user: User) -> Dict[str, str]:
        token = AuthService(test_db, redis_service).create_access_token(user)
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers
