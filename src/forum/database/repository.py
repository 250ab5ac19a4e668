"""Repository for the forum tables.

One method per access pattern used by the GraphQL layer. Every method takes
and returns ORM rows from ``forum.dbmodels``; callers own the session and
its transaction.
"""

from __future__ import annotations

import secrets
import threading
import time
from collections.abc import Sequence
from enum import Enum
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..dbmodels import Likes, Replies, Threads, Users


class ThreadOrder(Enum):
    """Creation-time ordering for thread listings."""

    NEWEST_FIRST = "newest_first"
    OLDEST_FIRST = "oldest_first"


_id_lock = threading.Lock()
_last_id_ms = 0
_last_id_seq = 0


def new_id() -> str:
    """
    Generate a time-ordered identifier in the UUID version 7 layout.

    A 48-bit millisecond timestamp is followed by a 12-bit sequence that
    increases for ids generated within the same millisecond, so ids created
    later in this process always sort after earlier ones. Listings use the
    id to order rows whose ``created_at`` is equal.
    """
    global _last_id_ms, _last_id_seq

    with _id_lock:
        now_ms = time.time_ns() // 1_000_000
        if now_ms > _last_id_ms:
            _last_id_ms, _last_id_seq = now_ms, 0
        else:
            _last_id_seq += 1
            if _last_id_seq > 0xFFF:
                _last_id_ms, _last_id_seq = _last_id_ms + 1, 0
        ms, seq = _last_id_ms, _last_id_seq

    value = (ms & (2**48 - 1)) << 80
    value |= 0x7 << 76
    value |= seq << 64
    value |= 0b10 << 62
    value |= secrets.randbits(62)
    return str(UUID(int=value))


class ForumRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    # Users
    async def find_user_by_id(self, user_id: str) -> Users | None:
        result = await self.session.execute(select(Users).where(Users.id == user_id))
        return result.scalar_one_or_none()

    async def find_users_by_ids(self, user_ids: Sequence[str]) -> dict[str, Users]:
        result = await self.session.execute(select(Users).where(Users.id.in_(user_ids)))
        return {user.id: user for user in result.scalars().all()}

    async def find_user_by_username(self, username: str) -> Users | None:
        result = await self.session.execute(select(Users).where(Users.username == username))
        return result.scalars().first()

    async def insert_user(self, *, username: str, password_hash: str) -> Users:
        user = Users(id=new_id(), username=username, hash=password_hash)
        return await self._insert(user)

    # Threads
    async def list_threads_page(self, order: ThreadOrder, skip: int, limit: int) -> list[Threads]:
        if order == ThreadOrder.OLDEST_FIRST:
            order_by = (Threads.created_at.asc(), Threads.id.asc())
        else:
            order_by = (Threads.created_at.desc(), Threads.id.desc())

        stmt = select(Threads).order_by(*order_by).offset(skip).limit(limit)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def find_thread_by_id(self, thread_id: str) -> Threads | None:
        result = await self.session.execute(select(Threads).where(Threads.id == thread_id))
        return result.scalar_one_or_none()

    async def find_threads_by_ids(self, thread_ids: Sequence[str]) -> dict[str, Threads]:
        result = await self.session.execute(select(Threads).where(Threads.id.in_(thread_ids)))
        return {thread.id: thread for thread in result.scalars().all()}

    async def insert_thread(self, *, title: str, text: str | None, created_by: str) -> Threads:
        thread = Threads(id=new_id(), title=title, text=text, created_by=created_by)
        return await self._insert(thread)

    # Replies
    async def find_replies_by_ids(self, reply_ids: Sequence[str]) -> dict[str, Replies]:
        result = await self.session.execute(select(Replies).where(Replies.id.in_(reply_ids)))
        return {reply.id: reply for reply in result.scalars().all()}

    async def list_replies_page(self, thread_id: str, skip: int, limit: int) -> list[Replies]:
        stmt = (
            select(Replies)
            .where(Replies.thread_id == thread_id)
            .order_by(Replies.created_at.desc(), Replies.id.desc())
            .offset(skip)
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count_replies_by_thread(self, thread_ids: Sequence[str]) -> dict[str, int]:
        stmt = (
            select(Replies.thread_id, func.count(Replies.id))
            .where(Replies.thread_id.in_(thread_ids))
            .group_by(Replies.thread_id)
        )
        result = await self.session.execute(stmt)
        return {thread_id: count for thread_id, count in result.all()}

    async def insert_reply(self, *, thread_id: str, text: str, created_by: str) -> Replies:
        reply = Replies(id=new_id(), thread_id=thread_id, text=text, created_by=created_by)
        return await self._insert(reply)

    # Likes
    async def list_likes_page_for_thread(
        self, thread_id: str, skip: int, limit: int
    ) -> list[Likes]:
        return await self._list_likes(Likes.thread_id == thread_id, skip, limit)

    async def list_likes_page_for_reply(self, reply_id: str, skip: int, limit: int) -> list[Likes]:
        return await self._list_likes(Likes.reply_id == reply_id, skip, limit)

    async def count_likes_by_thread(self, thread_ids: Sequence[str]) -> dict[str, int]:
        stmt = (
            select(Likes.thread_id, func.count(Likes.id))
            .where(Likes.thread_id.in_(thread_ids))
            .group_by(Likes.thread_id)
        )
        result = await self.session.execute(stmt)
        return {thread_id: count for thread_id, count in result.all()}

    async def count_likes_by_reply(self, reply_ids: Sequence[str]) -> dict[str, int]:
        stmt = (
            select(Likes.reply_id, func.count(Likes.id))
            .where(Likes.reply_id.in_(reply_ids))
            .group_by(Likes.reply_id)
        )
        result = await self.session.execute(stmt)
        return {reply_id: count for reply_id, count in result.all()}

    async def insert_like(
        self,
        *,
        created_by: str,
        thread_id: str | None = None,
        reply_id: str | None = None,
    ) -> Likes:
        if (thread_id is None) == (reply_id is None):
            raise ValueError("A like must target exactly one of a thread or a reply")

        like = Likes(id=new_id(), created_by=created_by, thread_id=thread_id, reply_id=reply_id)
        return await self._insert(like)

    async def _list_likes(self, condition, skip: int, limit: int) -> list[Likes]:
        stmt = (
            select(Likes)
            .where(condition)
            .order_by(Likes.created_at.desc(), Likes.id.desc())
            .offset(skip)
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def _insert(self, row):
        self.session.add(row)
        await self.session.flush()
        # Pull back server-assigned columns (created_at)
        await self.session.refresh(row)
        return row
