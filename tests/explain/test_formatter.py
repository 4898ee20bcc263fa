import datetime
import types

from blazeexplain.core import Column
from blazeexplain.explain import format_binds, render_entry, render_report


def test_render_report_without_binds():
    report = render_report(
        [("foo", [], "query plan foo"), ("bar", [], "query plan bar")]
    )
    assert report == "EXPLAIN for: foo\nquery plan foo\n\nEXPLAIN for: bar\nquery plan bar"


def test_render_entry_with_binds_strips_trailing_newline():
    column = types.SimpleNamespace(name="wadus")
    assert render_entry("foo", [(column, 1)], "query plan foo\n") == (
        'EXPLAIN for: foo [["wadus", 1]]\nquery plan foo'
    )


def test_empty_binds_omit_suffix():
    assert render_entry("SELECT 1", (), "plan") == "EXPLAIN for: SELECT 1\nplan"


def test_format_binds_renders_literal_pairs():
    binds = [
        (Column("name"), "honda"),
        (Column("engines_count"), None),
        (Column("active"), True),
        (Column("built_at"), datetime.date(2012, 1, 20)),
    ]
    assert format_binds(binds) == (
        '[["name", "honda"], ["engines_count", null], ["active", true], ["built_at", "2012-01-20"]]'
    )


def test_format_binds_unknown_column_name():
    binds = [(object(), 1), (Column(None), 2)]
    assert format_binds(binds) == '[["unknown", 1], ["unknown", 2]]'


def test_format_binds_redaction_toggle():
    binds = [(Column("password"), "hunter2")]
    assert format_binds(binds) == '[["password", "***"]]'
    assert format_binds(binds, redact=False) == '[["password", "hunter2"]]'


def test_format_binds_accepts_plain_column_names():
    assert format_binds([("name", "honda")]) == '[["name", "honda"]]'
