"""
Like GraphQL type definitions
"""

from datetime import datetime
from typing import TYPE_CHECKING, Annotated

import strawberry

if TYPE_CHECKING:
    from .user import User


@strawberry.type
class Like:
    """Like type for GraphQL API."""

    id: strawberry.ID
    created_at: datetime
    created_by_id: strawberry.Private[str]

    @strawberry.field
    async def created_by(
        self, info: strawberry.Info
    ) -> Annotated["User", strawberry.lazy(".user")]:
        """Get the user who left this like."""
        from ..resolvers.like import resolve_like_created_by

        return await resolve_like_created_by(self, info)
