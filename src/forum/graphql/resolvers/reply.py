from __future__ import annotations

from typing import TYPE_CHECKING

import strawberry

from ...database.connection import get_async_session
from ...database.repository import ForumRepository
from ...dbmodels import Replies
from ...logging import get_logger
from ..access_control import get_loaders, require_identity, resolve_page
from ..loaders import PageKey
from ..types.reply import Reply
from .like import like_from_row
from .user import resolve_creator

if TYPE_CHECKING:
    from ..mutations.root import ReplyInput
    from ..types.like import Like
    from ..types.thread import Thread
    from ..types.user import User

logger = get_logger(__name__)


def reply_from_row(reply: Replies) -> Reply:
    """Convert a replies row to the GraphQL type."""
    return Reply(
        id=strawberry.ID(reply.id),
        text=reply.text,
        created_at=reply.created_at,
        thread_id=reply.thread_id,
        created_by_id=reply.created_by,
    )


# Reply field resolvers
async def resolve_reply_thread(reply: Reply, info: strawberry.Info) -> Thread:
    from .thread import thread_from_row

    thread = await get_loaders(info).thread_loader.load(reply.thread_id)
    if thread is None:
        raise RuntimeError("Reply thread not found")
    return thread_from_row(thread)


async def resolve_reply_created_by(reply: Reply, info: strawberry.Info) -> User:
    return await resolve_creator(info, reply.created_by_id)


async def resolve_reply_likes_number(reply: Reply, info: strawberry.Info) -> int:
    return await get_loaders(info).reply_like_count_loader.load(str(reply.id))


async def resolve_reply_likes(
    reply: Reply, info: strawberry.Info, skip: int | None, limit: int | None
) -> list[Like]:
    skip, limit = resolve_page(skip, limit)
    likes = await get_loaders(info).page_loader.load(
        PageKey("reply_likes", str(reply.id), skip, limit)
    )
    return [like_from_row(like) for like in likes]


# Mutation resolvers
async def create_reply(info: strawberry.Info, input: ReplyInput) -> Reply:
    """
    Reply to a thread.

    The thread is not looked up first; an unknown thread ID fails on the
    foreign key when the row is written.
    """
    identity = require_identity(info)

    async with get_async_session() as session:
        reply = await ForumRepository(session).insert_reply(
            thread_id=str(input.thread_id),
            text=input.text,
            created_by=identity["user_id"],
        )

    get_loaders(info).clear_all()
    logger.info(
        "Reply created",
        reply_id=reply.id,
        thread_id=reply.thread_id,
        user_id=identity["user_id"],
    )

    return reply_from_row(reply)


async def like_reply(info: strawberry.Info, reply_id: str) -> Reply:
    """
    Like a reply and return the re-fetched reply.

    Repeated likes by the same user are each recorded.
    """
    identity = require_identity(info)

    async with get_async_session() as session:
        repository = ForumRepository(session)
        like = await repository.insert_like(created_by=identity["user_id"], reply_id=reply_id)
        reply = (await repository.find_replies_by_ids([reply_id])).get(reply_id)

    get_loaders(info).clear_all()

    if reply is None:
        raise RuntimeError("Reply not found")

    logger.info("Reply liked", reply_id=reply_id, like_id=like.id, user_id=identity["user_id"])

    return reply_from_row(reply)
