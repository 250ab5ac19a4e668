from __future__ import annotations

import strawberry

from ...dbmodels import Users
from ..access_control import get_loaders
from ..types.user import User


def user_from_row(user: Users) -> User:
    """Convert a users row to the GraphQL type."""
    return User(
        id=strawberry.ID(user.id),
        username=user.username,
        avatar=user.avatar,
        created_at=user.created_at,
    )


async def resolve_user_by_id(info: strawberry.Info, id: str) -> User | None:
    user = await get_loaders(info).user_loader.load(id)
    if user is None:
        return None
    return user_from_row(user)


async def resolve_creator(info: strawberry.Info, user_id: str) -> User:
    """Resolve the non-nullable ``createdBy`` of a thread, reply or like."""
    user = await resolve_user_by_id(info, user_id)
    if user is None:
        raise RuntimeError("Creator not found")
    return user
