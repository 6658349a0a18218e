"""
Point the app at a throwaway sqlite file before anything imports
liftlog.db (the engine is built at import time), and give every test
a fresh schema.
"""
import os
import tempfile

import pytest

_DB_FILE = os.path.join(tempfile.mkdtemp(prefix="liftlog-tests-"), "test.db")
os.environ["DB_URL"] = f"sqlite+pysqlite:///{_DB_FILE}"
os.environ["CREATE_TABLES"] = "false"

from liftlog.db import Base, engine, init_db  # noqa: E402


@pytest.fixture(autouse=True)
def fresh_schema():
    init_db()
    yield
    Base.metadata.drop_all(bind=engine)
