"""
Shared pytest fixtures.

The app is pointed at an in-memory SQLite database before anything from
``app`` is imported; every test starts from empty tables.
"""
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest  # noqa: E402

from app.core.database import engine  # noqa: E402
from app.core.schema import drop_schema, init_schema  # noqa: E402


@pytest.fixture(autouse=True)
def fresh_schema():
    drop_schema(engine)
    init_schema(engine)
    yield
