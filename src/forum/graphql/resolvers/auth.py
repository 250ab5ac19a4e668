from __future__ import annotations

import strawberry

from ...database.connection import get_async_session
from ...database.repository import ForumRepository
from ...logging import get_logger
from ..access_control import get_auth_context_from_info, get_credentials, get_loaders
from ..errors import AuthenticationFailedError, ConflictError, NotFoundError
from ..types.auth import SigninResult
from ..types.user import User
from .user import user_from_row

logger = get_logger(__name__)


async def resolve_current_user(info: strawberry.Info) -> User | None:
    """Return the caller's user, or None for anonymous requests."""
    auth_context = get_auth_context_from_info(info)
    if not auth_context.is_authenticated or auth_context.user_id is None:
        return None

    async with get_async_session() as session:
        user = await ForumRepository(session).find_user_by_id(auth_context.user_id)

    if user is None:
        logger.info("Token subject has no user record", user_id=auth_context.user_id)
        return None

    return user_from_row(user)


async def signup(info: strawberry.Info, username: str, password: str) -> SigninResult:
    """
    Register a new user and issue a token for it.

    The username check runs immediately before the insert; two concurrent
    signups for the same name are left to the table's unique constraint.
    """
    credentials = get_credentials(info)

    async with get_async_session() as session:
        repository = ForumRepository(session)

        if await repository.find_user_by_username(username) is not None:
            logger.info("Signup rejected, username taken", username=username)
            raise ConflictError("A user with this username already exists!")

        user = await repository.insert_user(
            username=username,
            password_hash=credentials.passwords.hash(password),
        )

    get_loaders(info).clear_all()
    logger.info("User signed up", user_id=user.id, username=username)

    token = await credentials.tokens.issue_token(user)
    return SigninResult(user=user_from_row(user), token=token)


async def signin(info: strawberry.Info, username: str, password: str) -> SigninResult:
    """
    Issue a token for an existing user.

    Unless the credential services have ``verify_signin_password`` set, the
    supplied password is not compared against the stored credential.
    """
    credentials = get_credentials(info)

    async with get_async_session() as session:
        user = await ForumRepository(session).find_user_by_username(username)

    if user is None:
        logger.info("Signin rejected, unknown username", username=username)
        raise NotFoundError("A user with this username does not exist!")

    if credentials.verify_signin_password:
        if not credentials.passwords.verify(password, user.hash):
            logger.info("Signin rejected, wrong password", user_id=user.id)
            raise AuthenticationFailedError()
    else:
        logger.debug("Signin issued token without password verification", user_id=user.id)

    token = await credentials.tokens.issue_token(user)
    return SigninResult(user=user_from_row(user), token=token)
