from .demo import (  # noqa: F401
    CARS,
    bootstrap_session,
    find_cars_by_name,
    run_demo,
    seed_cars,
)

__all__ = [
    "CARS",
    "bootstrap_session",
    "find_cars_by_name",
    "run_demo",
    "seed_cars",
]
