"""
Reply GraphQL type definitions
"""

from datetime import datetime
from typing import TYPE_CHECKING, Annotated

import strawberry

if TYPE_CHECKING:
    from .like import Like
    from .thread import Thread
    from .user import User


@strawberry.type
class Reply:
    """Reply type for GraphQL API."""

    id: strawberry.ID
    text: str
    created_at: datetime
    thread_id: strawberry.Private[str]
    created_by_id: strawberry.Private[str]

    @strawberry.field
    async def thread(
        self, info: strawberry.Info
    ) -> Annotated["Thread", strawberry.lazy(".thread")]:
        """Get the thread this reply belongs to."""
        from ..resolvers.reply import resolve_reply_thread

        return await resolve_reply_thread(self, info)

    @strawberry.field
    async def created_by(
        self, info: strawberry.Info
    ) -> Annotated["User", strawberry.lazy(".user")]:
        """Get the author of this reply."""
        from ..resolvers.reply import resolve_reply_created_by

        return await resolve_reply_created_by(self, info)

    @strawberry.field
    async def likes_number(self, info: strawberry.Info) -> int:
        """Get the number of likes on this reply."""
        from ..resolvers.reply import resolve_reply_likes_number

        return await resolve_reply_likes_number(self, info)

    @strawberry.field
    async def likes(
        self,
        info: strawberry.Info,
        skip: int | None = 0,
        limit: int | None = None,
    ) -> list[Annotated["Like", strawberry.lazy(".like")]]:
        """Get likes on this reply, newest first."""
        from ..resolvers.reply import resolve_reply_likes

        return await resolve_reply_likes(self, info, skip, limit)
