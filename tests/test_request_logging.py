"""
Tests for request-context logging helpers and middleware utilities
"""

import pytest

from forum.logging import (
    add_request_context,
    new_request_id,
    request_id_ctx,
    request_scope,
    user_id_ctx,
)
from forum.middleware import _operation_name_from_document, sanitize_query_params


class TestRequestContext:
    def test_generated_ids_are_compact_and_distinct(self):
        first = new_request_id()
        second = new_request_id()

        assert len(first) == 14
        assert first != second

    def test_scope_binds_and_restores(self):
        with request_scope("req-1", "user-1") as request_id:
            assert request_id == "req-1"
            assert request_id_ctx.get() == "req-1"
            assert user_id_ctx.get() == "user-1"

        assert request_id_ctx.get() is None
        assert user_id_ctx.get() is None

    def test_missing_request_id_is_generated(self):
        with request_scope() as request_id:
            assert request_id
            assert request_id_ctx.get() == request_id
            assert user_id_ctx.get() is None

    def test_processor_adds_context(self):
        with request_scope("req-2", "user-2"):
            event = add_request_context(None, "info", {"event": "hello"})

        assert event == {"event": "hello", "request_id": "req-2", "user_id": "user-2"}

    def test_processor_without_context_is_noop(self):
        assert add_request_context(None, "info", {"event": "hello"}) == {"event": "hello"}


class TestSanitizeQueryParams:
    def test_sensitive_keys_redacted(self):
        sanitized = sanitize_query_params(
            {"password": "pw", "access_token": "abc", "Authorization": "x", "page": "2"}
        )

        assert sanitized == {
            "password": "[REDACTED]",
            "access_token": "[REDACTED]",
            "Authorization": "[REDACTED]",
            "page": "2",
        }


class TestOperationName:
    @pytest.mark.parametrize(
        "document,expected",
        [
            ("query Threads { threads(sortOrder: LATEST) { id } }", "Threads"),
            ("mutation Signup { signup(username: \"a\", password: \"b\") { token } }",
             "mutation:Signup"),
            ("{ me { id } }", "unnamed_operation"),
            ("query IntrospectionQuery { __schema { types { name } } }", "__introspection"),
            (None, None),
            ("", None),
            ("{ threads(", "unparsable_operation"),
        ],
    )
    def test_operation_name(self, document, expected):
        assert _operation_name_from_document(document) == expected
