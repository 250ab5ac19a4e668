from __future__ import annotations

import strawberry

from ...dbmodels import Likes
from ..types.like import Like
from ..types.user import User
from .user import resolve_creator


def like_from_row(like: Likes) -> Like:
    return Like(
        id=strawberry.ID(like.id),
        created_at=like.created_at,
        created_by_id=like.created_by,
    )


async def resolve_like_created_by(like: Like, info: strawberry.Info) -> User:
    return await resolve_creator(info, like.created_by_id)
