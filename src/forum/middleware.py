"""
Middleware for request context and logging
"""

import json
import time
from collections.abc import Callable
from typing import Any

from fastapi import Request, Response
from graphql import GraphQLError, OperationDefinitionNode, parse
from starlette.middleware.base import BaseHTTPMiddleware

from .logging import get_logger, request_scope

logger = get_logger(__name__)

# Substrings of parameter names whose values never reach the logs
SENSITIVE_KEYS = ("password", "token", "secret", "auth", "jwt", "session", "cookie", "credential")
REDACTED = "[REDACTED]"


def sanitize_query_params(params: dict[str, Any]) -> dict[str, Any]:
    """Redact query parameters whose name looks like a credential."""
    return {
        key: REDACTED if any(marker in key.lower() for marker in SENSITIVE_KEYS) else value
        for key, value in params.items()
    }


def _operation_name_from_document(query: Any) -> str | None:
    """
    Name the first operation in a GraphQL document for log correlation.

    Mutations are prefixed with ``mutation:``; introspection queries are
    reported as ``__introspection``.
    """
    if not isinstance(query, str) or not query:
        return None

    try:
        document = parse(query)
    except GraphQLError:
        return "unparsable_operation"

    for definition in document.definitions:
        if not isinstance(definition, OperationDefinitionNode):
            continue
        name = definition.name.value if definition.name else None
        if name == "IntrospectionQuery" or "__schema" in query:
            return "__introspection"
        if name is None:
            return "unnamed_operation"
        if definition.operation.value == "mutation":
            return f"mutation:{name}"
        return name

    return None


async def extract_graphql_operation_name(request: Request) -> str | None:
    """Operation name for GET and POST /graphql requests, if one can be found."""
    if request.url.path != "/graphql":
        return None

    if request.method == "GET":
        payload: Any = dict(request.query_params)
    elif request.method == "POST":
        body = await request.body()
        if not body:
            return None
        try:
            payload = json.loads(body)
        except (json.JSONDecodeError, UnicodeDecodeError):
            return None
    else:
        return None

    if not isinstance(payload, dict):
        return None

    explicit = payload.get("operationName")
    if isinstance(explicit, str) and explicit:
        return explicit
    return _operation_name_from_document(payload.get("query"))


class LoggingContextMiddleware(BaseHTTPMiddleware):
    """Assign a request ID and log the start and end of each request."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        auth_context = getattr(request.state, "auth_context", None)
        user_id = auth_context.user_id if auth_context is not None else None

        with request_scope(request.headers.get("x-request-id"), user_id) as request_id:
            started = time.perf_counter()
            path = request.url.path

            query_params = None
            if request.query_params:
                query_params = sanitize_query_params(dict(request.query_params))
                # GraphQL documents and variables may carry passwords
                if path == "/graphql":
                    for key in ("query", "variables", "extensions"):
                        if key in query_params:
                            query_params[key] = REDACTED

            operation = await extract_graphql_operation_name(request)

            logger.info(
                "Request started",
                method=request.method,
                path=path,
                query_params=query_params,
                graphql_operation=operation,
                user_agent=request.headers.get("user-agent"),
                remote_addr=request.client.host if request.client else None,
            )

            try:
                response = await call_next(request)
            except Exception as e:
                logger.error("Request failed", method=request.method, path=path, error=str(e))
                raise

            logger.info(
                "Request completed",
                status_code=response.status_code,
                method=request.method,
                path=path,
                graphql_operation=operation,
                duration_ms=round((time.perf_counter() - started) * 1000, 2),
            )

            response.headers["X-Request-ID"] = request_id
            return response
