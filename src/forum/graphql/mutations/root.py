"""
Root GraphQL mutation definitions
"""

import strawberry

from ..types.auth import SigninResult
from ..types.reply import Reply
from ..types.thread import Thread


# Input types for mutations
@strawberry.input
class ThreadInput:
    """Input for starting a new thread."""

    title: str
    text: str | None = None


@strawberry.input
class ReplyInput:
    """Input for replying to a thread."""

    thread_id: strawberry.ID
    text: str


@strawberry.type
class Mutation:
    """Root GraphQL mutation type."""

    # Thread mutations
    @strawberry.mutation(name="createThread")
    async def create_thread(self, info: strawberry.Info, input: ThreadInput) -> Thread:
        """Start a new thread."""
        from ..resolvers.thread import create_thread

        return await create_thread(info, input)

    @strawberry.mutation
    async def reply(self, info: strawberry.Info, input: ReplyInput) -> Reply:
        """Reply to a thread."""
        from ..resolvers.reply import create_reply

        return await create_reply(info, input)

    # Like mutations
    @strawberry.mutation(name="likeThread")
    async def like_thread(self, info: strawberry.Info, thread_id: strawberry.ID) -> Thread:
        """Like a thread."""
        from ..resolvers.thread import like_thread

        return await like_thread(info, str(thread_id))

    @strawberry.mutation(name="likeReply")
    async def like_reply(self, info: strawberry.Info, reply_id: strawberry.ID) -> Reply:
        """Like a reply."""
        from ..resolvers.reply import like_reply

        return await like_reply(info, str(reply_id))

    # Account mutations
    @strawberry.mutation
    async def signup(self, info: strawberry.Info, username: str, password: str) -> SigninResult:
        """Create an account and receive a token."""
        from ..resolvers.auth import signup

        return await signup(info, username, password)

    @strawberry.mutation
    async def signin(self, info: strawberry.Info, username: str, password: str) -> SigninResult:
        """Sign in and receive a token."""
        from ..resolvers.auth import signin

        return await signin(info, username, password)
