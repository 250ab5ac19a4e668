from __future__ import annotations

from typing import TYPE_CHECKING

import strawberry

from ...database.connection import get_async_session
from ...database.repository import ForumRepository, ThreadOrder
from ...dbmodels import Threads
from ...logging import get_logger
from ..access_control import get_loaders, require_identity, resolve_page
from ..loaders import PageKey
from ..types.thread import SortOrder, Thread
from .like import like_from_row
from .user import resolve_creator

if TYPE_CHECKING:
    from ..mutations.root import ThreadInput
    from ..types.like import Like
    from ..types.reply import Reply
    from ..types.user import User

logger = get_logger(__name__)

SORT_ORDERS = {
    SortOrder.LATEST: ThreadOrder.NEWEST_FIRST,
    SortOrder.OLDEST: ThreadOrder.OLDEST_FIRST,
}


def thread_from_row(thread: Threads) -> Thread:
    """Convert a threads row to the GraphQL type."""
    return Thread(
        id=strawberry.ID(thread.id),
        title=thread.title,
        text=thread.text,
        created_at=thread.created_at,
        created_by_id=thread.created_by,
    )


# Query resolvers
async def resolve_threads(
    info: strawberry.Info,
    sort_order: SortOrder,
    skip: int | None,
    limit: int | None,
) -> list[Thread]:
    """
    List threads ordered by creation time.

    Public: no authentication required.
    """
    skip, limit = resolve_page(skip, limit)

    async with get_async_session() as session:
        threads = await ForumRepository(session).list_threads_page(
            SORT_ORDERS[sort_order], skip, limit
        )

    loaders = get_loaders(info)
    for thread in threads:
        loaders.thread_loader.prime(thread.id, thread)

    return [thread_from_row(thread) for thread in threads]


async def resolve_thread_by_id(info: strawberry.Info, id: str) -> Thread | None:
    """Resolve a thread by its ID; an unknown ID yields None."""
    thread = await get_loaders(info).thread_loader.load(id)
    if thread is None:
        logger.info("Thread not found", thread_id=id)
        return None
    return thread_from_row(thread)


# Thread field resolvers
async def resolve_thread_created_by(thread: Thread, info: strawberry.Info) -> User:
    return await resolve_creator(info, thread.created_by_id)


async def resolve_thread_likes_number(thread: Thread, info: strawberry.Info) -> int:
    return await get_loaders(info).thread_like_count_loader.load(str(thread.id))


async def resolve_thread_likes(
    thread: Thread, info: strawberry.Info, skip: int | None, limit: int | None
) -> list[Like]:
    skip, limit = resolve_page(skip, limit)
    likes = await get_loaders(info).page_loader.load(
        PageKey("thread_likes", str(thread.id), skip, limit)
    )
    return [like_from_row(like) for like in likes]


async def resolve_thread_replies_number(thread: Thread, info: strawberry.Info) -> int:
    return await get_loaders(info).thread_reply_count_loader.load(str(thread.id))


async def resolve_thread_replies(
    thread: Thread, info: strawberry.Info, skip: int | None, limit: int | None
) -> list[Reply]:
    from .reply import reply_from_row

    skip, limit = resolve_page(skip, limit)
    replies = await get_loaders(info).page_loader.load(
        PageKey("thread_replies", str(thread.id), skip, limit)
    )
    return [reply_from_row(reply) for reply in replies]


# Mutation resolvers
async def create_thread(info: strawberry.Info, input: ThreadInput) -> Thread:
    """
    Create a new thread.

    The authenticated user becomes the thread's creator.
    """
    identity = require_identity(info)

    async with get_async_session() as session:
        thread = await ForumRepository(session).insert_thread(
            title=input.title,
            text=input.text or None,
            created_by=identity["user_id"],
        )

    get_loaders(info).clear_all()
    logger.info("Thread created", thread_id=thread.id, user_id=identity["user_id"])

    return thread_from_row(thread)


async def like_thread(info: strawberry.Info, thread_id: str) -> Thread:
    """
    Like a thread and return the re-fetched thread.

    Repeated likes by the same user are each recorded.
    """
    identity = require_identity(info)

    async with get_async_session() as session:
        repository = ForumRepository(session)
        like = await repository.insert_like(created_by=identity["user_id"], thread_id=thread_id)
        thread = await repository.find_thread_by_id(thread_id)

    get_loaders(info).clear_all()

    if thread is None:
        raise RuntimeError("Thread not found")

    logger.info("Thread liked", thread_id=thread_id, like_id=like.id, user_id=identity["user_id"])

    return thread_from_row(thread)
