from contextvars import ContextVar

import pytest

from blazeexplain.core import Column, Statement
from blazeexplain.explain import ExplainSubscriber, ignore_payload
from blazeexplain.notifications import SQLEvent


@pytest.mark.parametrize(
    "event",
    [
        SQLEvent("SELECT 1", name="SCHEMA"),
        SQLEvent("SELECT 1", name="EXPLAIN"),
        SQLEvent("SELECT 1", name="CACHE"),
        SQLEvent("BEGIN", name="TRANSACTION"),
        SQLEvent("SELECT 1", exception=RuntimeError("failed")),
        SQLEvent("PRAGMA foreign_keys = ON"),
        SQLEvent("CREATE TABLE cars (id INTEGER)"),
        SQLEvent("SELECTED_VIEW"),
    ],
)
def test_ignored_payloads(event):
    assert ignore_payload(event)


@pytest.mark.parametrize(
    "sql",
    [
        "SELECT * FROM cars",
        "  select 1",
        "\ninsert into cars (name) values (?)",
        "UPDATE cars SET name = ?",
        "DELETE FROM cars",
    ],
)
def test_explainable_payloads(sql):
    assert not ignore_payload(SQLEvent(sql))


def test_subscriber_collects_only_while_collecting():
    state = ContextVar("test_state", default=None)
    subscriber = ExplainSubscriber(state)
    event = SQLEvent("SELECT * FROM cars WHERE name = ?", ((Column("name"), "honda"),))

    subscriber(event)

    queries = []
    token = state.set(queries)
    try:
        subscriber(event)
    finally:
        state.reset(token)

    token = state.set(False)
    try:
        subscriber(event)
    finally:
        state.reset(token)

    assert queries == [Statement("SELECT * FROM cars WHERE name = ?", ((Column("name"), "honda"),))]


def test_subscriber_filters_foreign_connections():
    state = ContextVar("test_connection_state", default=None)
    subscriber = ExplainSubscriber(state, connection_id=lambda: 1)
    queries = []
    token = state.set(queries)
    try:
        subscriber(SQLEvent("SELECT 1", connection_id=2))
        subscriber(SQLEvent("SELECT 2", connection_id=1))
        subscriber(SQLEvent("SELECT 3"))
    finally:
        state.reset(token)
    assert [query.sql for query in queries] == ["SELECT 2", "SELECT 3"]
