import logging

from examples.cars_app import bootstrap_session, find_cars_by_name, run_demo, seed_cars


def test_cars_example_logs_plan_for_lookup(tmp_path, caplog):
    caplog.set_level(logging.WARNING, logger="blazeexplain.explain")
    session = bootstrap_session(dsn=f"sqlite:///{tmp_path / 'cars_example.db'}")
    try:
        assert seed_cars(session) == 2
        cars = find_cars_by_name(session, "honda")
    finally:
        session.close()

    assert [car["name"] for car in cars] == ["honda"]
    warnings = [record.getMessage() for record in caplog.records if record.name == "blazeexplain.explain"]
    assert len(warnings) == 1
    assert warnings[0].startswith('EXPLAIN for: SELECT id, name, engines_count FROM "cars" WHERE name = ?')
    assert "index_cars_on_name" in warnings[0]


def test_cars_example_without_threshold_is_quiet(tmp_path, caplog):
    caplog.set_level(logging.WARNING, logger="blazeexplain.explain")
    session = bootstrap_session(dsn=f"sqlite:///{tmp_path / 'quiet.db'}", threshold=None)
    try:
        seed_cars(session)
        assert find_cars_by_name(session, "zyke")
    finally:
        session.close()
    assert not [record for record in caplog.records if record.name == "blazeexplain.explain"]


def test_run_cars_demo_returns_matches():
    cars = run_demo()
    assert [car["name"] for car in cars] == ["honda"]
