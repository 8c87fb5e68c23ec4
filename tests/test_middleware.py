"""Tests for request logging context helpers."""

import pytest

from memberhub.logging import bind_request_context, clear_request_context, get_request_id
from memberhub.middleware import operation_name_from_query


@pytest.mark.parametrize(
    ("query", "expected"),
    [
        ("query GetUsers { users { id } }", "GetUsers"),
        ("mutation AddUser { deleteUser(id: \"x\") }", "mutation:AddUser"),
        ("{ users { id } }", "unnamed_operation"),
        ("query IntrospectionQuery { __schema { types { name } } }", "__introspection"),
    ],
)
def test_operation_name_from_query(query, expected):
    assert operation_name_from_query(query) == expected


def test_request_context_lifecycle():
    bind_request_context("abc123", operation="GetUsers")

    assert get_request_id() == "abc123"

    clear_request_context()
    assert get_request_id() is None
