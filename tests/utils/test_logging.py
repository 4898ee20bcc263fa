import logging

import pytest

from blazeexplain.utils.logging import (
    CorrelationIdFilter,
    _level_from_env,
    correlation_scope,
    get_correlation_id,
    get_logger,
    set_correlation_id,
)


def test_correlation_id_round_trip():
    token = set_correlation_id("test-token")
    assert token == "test-token"
    assert get_correlation_id() == "test-token"


def test_correlation_scope_restores_previous_id():
    set_correlation_id("outer")
    with correlation_scope("inner") as value:
        assert value == "inner"
        assert get_correlation_id() == "inner"
    assert get_correlation_id() == "outer"


def test_correlation_scope_generates_id():
    with correlation_scope() as value:
        assert value
        assert get_correlation_id() == value


def test_filter_stamps_records():
    record = logging.LogRecord("blazeexplain.test", logging.INFO, __file__, 1, "msg", None, None)
    with correlation_scope("req-1"):
        assert CorrelationIdFilter().filter(record) is True
    assert record.correlation_id == "req-1"


def test_get_logger_namespaces_under_package():
    assert get_logger("explain").name == "blazeexplain.explain"


def test_log_level_from_environment(monkeypatch):
    monkeypatch.setenv("BLAZE_EXPLAIN_LOG_LEVEL", "debug")
    assert _level_from_env(logging.INFO) == logging.DEBUG
    monkeypatch.setenv("BLAZE_EXPLAIN_LOG_LEVEL", "30")
    assert _level_from_env(logging.INFO) == logging.WARNING
    monkeypatch.delenv("BLAZE_EXPLAIN_LOG_LEVEL")
    assert _level_from_env(logging.INFO) == logging.INFO


def test_invalid_log_level_raises(monkeypatch):
    monkeypatch.setenv("BLAZE_EXPLAIN_LOG_LEVEL", "loud")
    with pytest.raises(ValueError):
        _level_from_env(logging.INFO)
