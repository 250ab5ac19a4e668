"""
Thread GraphQL type definitions
"""

from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Annotated

import strawberry

if TYPE_CHECKING:
    from .like import Like
    from .reply import Reply
    from .user import User


@strawberry.enum
class SortOrder(Enum):
    """Creation-time ordering for thread listings."""

    LATEST = "latest"
    OLDEST = "oldest"


@strawberry.type
class Thread:
    """Thread type for GraphQL API."""

    id: strawberry.ID
    title: str
    text: str | None
    created_at: datetime
    created_by_id: strawberry.Private[str]

    @strawberry.field
    async def created_by(
        self, info: strawberry.Info
    ) -> Annotated["User", strawberry.lazy(".user")]:
        """Get the user who started this thread."""
        from ..resolvers.thread import resolve_thread_created_by

        return await resolve_thread_created_by(self, info)

    @strawberry.field
    async def likes_number(self, info: strawberry.Info) -> int:
        """Get the number of likes on this thread."""
        from ..resolvers.thread import resolve_thread_likes_number

        return await resolve_thread_likes_number(self, info)

    @strawberry.field
    async def likes(
        self,
        info: strawberry.Info,
        skip: int | None = 0,
        limit: int | None = None,
    ) -> list[Annotated["Like", strawberry.lazy(".like")]]:
        """Get likes on this thread, newest first."""
        from ..resolvers.thread import resolve_thread_likes

        return await resolve_thread_likes(self, info, skip, limit)

    @strawberry.field
    async def replies_number(self, info: strawberry.Info) -> int:
        """Get the number of replies to this thread."""
        from ..resolvers.thread import resolve_thread_replies_number

        return await resolve_thread_replies_number(self, info)

    @strawberry.field
    async def replies(
        self,
        info: strawberry.Info,
        skip: int | None = 0,
        limit: int | None = None,
    ) -> list[Annotated["Reply", strawberry.lazy(".reply")]]:
        """Get replies to this thread, newest first."""
        from ..resolvers.thread import resolve_thread_replies

        return await resolve_thread_replies(self, info, skip, limit)
