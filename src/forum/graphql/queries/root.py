"""
Root GraphQL query definitions
"""

import strawberry

from ..types.thread import SortOrder, Thread
from ..types.user import User


@strawberry.type
class Query:
    """Root GraphQL query type."""

    @strawberry.field
    async def threads(
        self,
        info: strawberry.Info,
        sort_order: SortOrder,
        skip: int | None = 0,
        limit: int | None = None,
    ) -> list[Thread]:
        """List threads, LATEST or OLDEST first."""
        from ..resolvers.thread import resolve_threads

        return await resolve_threads(info, sort_order, skip, limit)

    @strawberry.field
    async def thread(self, info: strawberry.Info, id: strawberry.ID) -> Thread | None:
        """Get a thread by ID."""
        from ..resolvers.thread import resolve_thread_by_id

        return await resolve_thread_by_id(info, str(id))

    @strawberry.field
    async def me(self, info: strawberry.Info) -> User | None:
        """Get the current authenticated user."""
        from ..resolvers.auth import resolve_current_user

        return await resolve_current_user(info)
