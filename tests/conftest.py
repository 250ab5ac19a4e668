"""
Shared pytest fixtures and configuration for all tests.
"""

import os
from collections.abc import Generator
from datetime import datetime, timedelta
from typing import Any

import pytest
import pytest_asyncio

from forum.auth.context import AuthContext
from forum.auth.factory import CredentialServices
from forum.auth.passwords import PasswordHasher
from forum.auth.tokens import TokenService

TEST_SECRET = "test-secret-key-for-testing-only"


@pytest.fixture
def token_service() -> TokenService:
    return TokenService(
        secret_key=TEST_SECRET,
        algorithm="HS256",
        issuer="test-forum",
        audience="test-api",
    )


@pytest.fixture
def credentials(token_service: TokenService) -> CredentialServices:
    # Low iteration count keeps the suite fast
    return CredentialServices(tokens=token_service, passwords=PasswordHasher(iterations=1_000))


@pytest_asyncio.fixture(scope="function")
async def forum_db(tmp_path) -> Any:
    """Point the shared connection pool at a fresh SQLite database with the forum tables."""
    from forum.database.connection import get_async_engine, init_database, reset_database
    from forum.dbmodels import Base

    reset_database()
    init_database(f"sqlite+aiosqlite:///{tmp_path / 'forum.db'}", force_reinit=True)
    engine = get_async_engine()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()
    reset_database()


@pytest.fixture
def make_context(credentials: CredentialServices):
    """Build a resolver context for an anonymous caller or a given user id."""
    from forum.graphql.schema import build_context

    def _make(
        user_id: str | None = None,
        username: str | None = None,
        services: CredentialServices | None = None,
    ) -> dict[str, Any]:
        if user_id is None:
            auth_context = AuthContext.anonymous()
        else:
            identity = {"user_id": user_id}
            if username:
                identity["username"] = username
            auth_context = AuthContext(identity=identity, token="test-token")
        return build_context(auth_context, services or credentials)

    return _make


@pytest.fixture
def seed(forum_db):
    """Insert rows directly, with explicit timestamps where ordering matters."""
    from forum.database.connection import get_async_session
    from forum.dbmodels import Likes, Replies, Threads, Users

    base_time = datetime(2024, 1, 1, 12, 0, 0)

    class Seeder:
        async def user(self, user_id: str, username: str, password_hash: str = "x") -> str:
            async with get_async_session() as session:
                session.add(Users(id=user_id, username=username, hash=password_hash))
            return user_id

        async def thread(
            self, thread_id: str, created_by: str, minutes: int = 0, title: str | None = None
        ) -> str:
            async with get_async_session() as session:
                session.add(
                    Threads(
                        id=thread_id,
                        title=title or f"Thread {thread_id}",
                        text=None,
                        created_by=created_by,
                        created_at=base_time + timedelta(minutes=minutes),
                    )
                )
            return thread_id

        async def reply(
            self, reply_id: str, thread_id: str, created_by: str, minutes: int = 0
        ) -> str:
            async with get_async_session() as session:
                session.add(
                    Replies(
                        id=reply_id,
                        thread_id=thread_id,
                        text=f"Reply {reply_id}",
                        created_by=created_by,
                        created_at=base_time + timedelta(minutes=minutes),
                    )
                )
            return reply_id

        async def like(
            self,
            like_id: str,
            created_by: str,
            thread_id: str | None = None,
            reply_id: str | None = None,
            minutes: int = 0,
        ) -> str:
            async with get_async_session() as session:
                session.add(
                    Likes(
                        id=like_id,
                        created_by=created_by,
                        thread_id=thread_id,
                        reply_id=reply_id,
                        created_at=base_time + timedelta(minutes=minutes),
                    )
                )
            return like_id

    return Seeder()


@pytest.fixture(autouse=True)
def reset_environment() -> Generator[None, None, None]:
    """Reset environment variables for each test."""
    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)
