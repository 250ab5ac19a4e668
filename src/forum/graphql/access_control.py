"""
Shared request-context helpers for GraphQL resolvers
"""

from typing import TYPE_CHECKING

import strawberry

from ..auth.context import AuthContext
from ..config import settings
from ..logging import get_logger
from .errors import InvalidArgumentError, NotAuthenticatedError

if TYPE_CHECKING:
    from ..auth.base import Identity
    from ..auth.factory import CredentialServices
    from .loaders import Loaders

logger = get_logger(__name__)


def get_auth_context_from_info(info: strawberry.Info) -> AuthContext:
    """
    Extract auth context from GraphQL info object.

    Falls back to an anonymous context when none was attached upstream.
    """
    auth_context = info.context.get("auth")
    if auth_context is None:
        logger.error("Auth context not found in GraphQL context")
        return AuthContext.anonymous()
    return auth_context


def require_identity(info: strawberry.Info) -> "Identity":
    """Return the caller's identity or raise NotAuthenticatedError."""
    auth_context = get_auth_context_from_info(info)
    if not auth_context.is_authenticated or auth_context.identity is None:
        raise NotAuthenticatedError()
    return auth_context.identity


def get_loaders(info: strawberry.Info) -> "Loaders":
    """Return the request's DataLoaders."""
    return info.context["loaders"]


def get_credentials(info: strawberry.Info) -> "CredentialServices":
    """Return the process-wide credential services."""
    return info.context["credentials"]


def resolve_page(skip: int | None, limit: int | None) -> tuple[int, int]:
    """
    Apply pagination defaults and reject negative values.

    No upper bound is placed on ``limit``.
    """
    skip = 0 if skip is None else skip
    limit = settings.default_page_limit if limit is None else limit

    if skip < 0:
        raise InvalidArgumentError("skip must be a non-negative integer")
    if limit < 0:
        raise InvalidArgumentError("limit must be a non-negative integer")

    return skip, limit
