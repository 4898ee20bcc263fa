"""
Cars example: log the query plan of every lookup by running with a zero
threshold.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from blazeexplain import Column, ExplainSettings, Session, SQLiteAdapter
from blazeexplain.utils import configure_logging, correlation_scope

CARS = [
    {"name": "honda", "engines_count": 1},
    {"name": "zyke", "engines_count": 2},
]

NAME = Column("name", "TEXT")


def bootstrap_session(
    dsn: str = "sqlite:///:memory:", threshold: Optional[float] = 0.0
) -> Session:
    session = Session(
        SQLiteAdapter(),
        dsn=dsn,
        explain_settings=ExplainSettings(threshold_seconds=threshold),
    )
    session.execute(
        'CREATE TABLE IF NOT EXISTS "cars" '
        "(id INTEGER PRIMARY KEY AUTOINCREMENT, name TEXT NOT NULL, engines_count INTEGER)",
        name="SCHEMA",
    )
    session.execute('CREATE INDEX IF NOT EXISTS "index_cars_on_name" ON "cars" (name)', name="SCHEMA")
    return session


def seed_cars(session: Session) -> int:
    with session.transaction():
        for car in CARS:
            session.execute(
                'INSERT INTO "cars" (name, engines_count) VALUES (?, ?)',
                (car["name"], car["engines_count"]),
                columns=[NAME, Column("engines_count", "INTEGER")],
            )
    return len(CARS)


def find_cars_by_name(session: Session, name: str) -> List[Dict[str, Any]]:
    rows = session.fetch_all(
        'SELECT id, name, engines_count FROM "cars" WHERE name = ?', (name,), columns=[NAME]
    )
    return [dict(row) for row in rows]


def run_demo(dsn: str = "sqlite:///:memory:") -> List[Dict[str, Any]]:
    configure_logging(logging.INFO)
    session = bootstrap_session(dsn)
    try:
        with correlation_scope("cars-demo"):
            seed_cars(session)
            return find_cars_by_name(session, "honda")
    finally:
        session.close()


if __name__ == "__main__":
    for car in run_demo("sqlite:///cars_demo.db"):
        print(f"{car['id']}: {car['name']} ({car['engines_count']} engine(s))")
