"""Request authentication for the HTTP layer."""

from __future__ import annotations

from collections.abc import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from ..logging import get_logger
from .base import AuthenticationError
from .context import AuthContext
from .tokens import TokenService

logger = get_logger(__name__)


async def get_auth_context(authorization: str | None, tokens: TokenService) -> AuthContext:
    """
    Resolve the authentication context from an Authorization header.

    This never raises: a missing, malformed, unsigned or expired token yields
    an anonymous context so that public reads keep working.

    Args:
        authorization: Authorization header value (``Bearer <token>``)
        tokens: Token service used to verify the bearer token
    """
    if not authorization:
        return AuthContext.anonymous()

    scheme, _, token = authorization.partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        logger.warning("Invalid authorization format received")
        return AuthContext.anonymous()

    try:
        identity = await tokens.verify_token(token)
    except AuthenticationError as e:
        if e.is_expired:
            logger.warning("Expired bearer token, continuing anonymously")
        else:
            logger.warning("Authentication failed", error=str(e), reason=e.reason)
        return AuthContext.anonymous()

    return AuthContext(identity=identity, token=token)


class AuthContextMiddleware(BaseHTTPMiddleware):
    """
    Attach the request's AuthContext to ``request.state.auth_context``.

    Must wrap LoggingContextMiddleware, which reads the user id from it.
    """

    def __init__(self, app, tokens: TokenService):
        super().__init__(app)
        self.tokens = tokens

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        auth_context = await get_auth_context(request.headers.get("authorization"), self.tokens)
        request.state.auth_context = auth_context
        return await call_next(request)
