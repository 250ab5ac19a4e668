"""
Per-request DataLoaders.

A fresh Loaders instance is created for every request, so each lookup is
issued at most once per request and nothing is cached across requests.
"""

from typing import NamedTuple

from strawberry.dataloader import DataLoader

from ..database.connection import get_async_session
from ..database.repository import ForumRepository
from ..dbmodels import Likes, Replies, Threads, Users


class PageKey(NamedTuple):
    """Cache key for a paginated child listing."""

    kind: str  # "thread_replies", "thread_likes" or "reply_likes"
    parent_id: str
    skip: int
    limit: int


async def load_users(keys: list[str]) -> list[Users | None]:
    """Batch load users by ID."""
    async with get_async_session() as session:
        users = await ForumRepository(session).find_users_by_ids(keys)
        return [users.get(key) for key in keys]


async def load_threads(keys: list[str]) -> list[Threads | None]:
    """Batch load threads by ID."""
    async with get_async_session() as session:
        threads = await ForumRepository(session).find_threads_by_ids(keys)
        return [threads.get(key) for key in keys]


async def load_thread_like_counts(keys: list[str]) -> list[int]:
    async with get_async_session() as session:
        counts = await ForumRepository(session).count_likes_by_thread(keys)
        return [counts.get(key, 0) for key in keys]


async def load_reply_like_counts(keys: list[str]) -> list[int]:
    async with get_async_session() as session:
        counts = await ForumRepository(session).count_likes_by_reply(keys)
        return [counts.get(key, 0) for key in keys]


async def load_thread_reply_counts(keys: list[str]) -> list[int]:
    async with get_async_session() as session:
        counts = await ForumRepository(session).count_replies_by_thread(keys)
        return [counts.get(key, 0) for key in keys]


async def load_pages(keys: list[PageKey]) -> list[list[Replies] | list[Likes]]:
    """Load child pages; offset pagination does not batch, so one query per key."""
    async with get_async_session() as session:
        repository = ForumRepository(session)
        pages: list[list[Replies] | list[Likes]] = []
        for key in keys:
            if key.kind == "thread_replies":
                pages.append(await repository.list_replies_page(key.parent_id, key.skip, key.limit))
            elif key.kind == "thread_likes":
                pages.append(
                    await repository.list_likes_page_for_thread(key.parent_id, key.skip, key.limit)
                )
            elif key.kind == "reply_likes":
                pages.append(
                    await repository.list_likes_page_for_reply(key.parent_id, key.skip, key.limit)
                )
            else:
                raise ValueError(f"Unknown page kind: {key.kind}")
        return pages


class Loaders:
    def __init__(self):
        self.user_loader = DataLoader(load_fn=load_users)
        self.thread_loader = DataLoader(load_fn=load_threads)
        self.thread_like_count_loader = DataLoader(load_fn=load_thread_like_counts)
        self.reply_like_count_loader = DataLoader(load_fn=load_reply_like_counts)
        self.thread_reply_count_loader = DataLoader(load_fn=load_thread_reply_counts)
        self.page_loader = DataLoader(load_fn=load_pages)

    def clear_all(self) -> None:
        """Drop every cached value; called after a write so later fields see it."""
        for loader in (
            self.user_loader,
            self.thread_loader,
            self.thread_like_count_loader,
            self.reply_like_count_loader,
            self.thread_reply_count_loader,
            self.page_loader,
        ):
            loader.clear_all()
