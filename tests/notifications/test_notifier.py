import logging

import pytest

from blazeexplain.core import Column
from blazeexplain.notifications import SQL_EVENT, Notifier, SQLEvent, SQLLogSubscriber


def test_publish_delivers_in_subscription_order():
    notifier = Notifier()
    received = []
    notifier.subscribe("custom", lambda payload: received.append(("first", payload)))
    notifier.subscribe("custom", lambda payload: received.append(("second", payload)))

    notifier.publish("custom", 42)
    notifier.publish("other", 0)

    assert received == [("first", 42), ("second", 42)]


def test_subscribed_unregisters_on_exit_even_after_error():
    notifier = Notifier()
    events = []

    with pytest.raises(RuntimeError):
        with notifier.subscribed(events.append):
            assert notifier.has_subscribers(SQL_EVENT)
            raise RuntimeError("boom")

    assert not notifier.has_subscribers(SQL_EVENT)
    notifier.publish(SQL_EVENT, SQLEvent("SELECT 1"))
    assert events == []


def test_instrument_publishes_timed_event():
    notifier = Notifier()
    events = []
    binds = ((Column("id"), 1),)
    with notifier.subscribed(events.append):
        with notifier.instrument("SELECT * FROM cars WHERE id = ?", binds, name="SQL", connection_id=9):
            pass

    assert len(events) == 1
    event = events[0]
    assert event.sql == "SELECT * FROM cars WHERE id = ?"
    assert event.binds == binds
    assert event.connection_id == 9
    assert event.exception is None
    assert event.duration >= 0


def test_instrument_records_exception_and_reraises():
    notifier = Notifier()
    events = []
    with notifier.subscribed(events.append):
        with pytest.raises(ValueError):
            with notifier.instrument("SELECT broken"):
                raise ValueError("no such table")

    assert isinstance(events[0].exception, ValueError)


def test_handler_errors_propagate():
    notifier = Notifier()

    def broken(payload):
        raise KeyError("handler failed")

    notifier.subscribe(SQL_EVENT, broken)
    with pytest.raises(KeyError):
        notifier.publish(SQL_EVENT, SQLEvent("SELECT 1"))
    notifier.clear()
    notifier.publish(SQL_EVENT, SQLEvent("SELECT 1"))


def test_sql_log_subscriber_logs_redacted_binds(caplog):
    caplog.set_level(logging.DEBUG, logger="blazeexplain.sql")
    subscriber = SQLLogSubscriber()
    subscriber(
        SQLEvent(
            "SELECT * FROM users WHERE password = ?",
            ((Column("password"), "hunter2"),),
            duration=0.0125,
        )
    )
    records = [record for record in caplog.records if record.name == "blazeexplain.sql"]
    assert records
    assert records[0].getMessage() == "SQL (12.5ms) SELECT * FROM users WHERE password = ?"
    assert records[0].params == [("password", "***")]
