"""
Errors raised by GraphQL resolvers.

Each error carries an ``extensions`` dict; graphql-core copies it onto the
GraphQLError so clients can branch on ``extensions.code``.
"""


class ForumError(Exception):
    """Base class for errors surfaced verbatim to API clients."""

    code = "INTERNAL_SERVER_ERROR"
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)
        self.extensions = {"code": self.code}


class NotAuthenticatedError(ForumError):
    code = "UNAUTHENTICATED"
    default_message = "Not Authenticated"


class AuthenticationFailedError(ForumError):
    code = "UNAUTHENTICATED"
    default_message = "Invalid username or password"


class ConflictError(ForumError):
    code = "CONFLICT"
    default_message = "Resource already exists"


class NotFoundError(ForumError):
    code = "NOT_FOUND"
    default_message = "Resource not found"


class InvalidArgumentError(ForumError):
    code = "BAD_USER_INPUT"
    default_message = "Invalid argument"
