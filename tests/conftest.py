# tests/conftest.py

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from eventually.database import build_engine, get_db, init_db, make_session_factory
from eventually.main import create_app


@pytest.fixture()
def engine(tmp_path: Path):
    """File-backed store with production pragmas, schema and seed data."""
    eng = build_engine(str(tmp_path / "eventually.db"))
    init_db(eng)
    yield eng
    eng.dispose()


@pytest.fixture()
def session_factory(engine):
    return make_session_factory(engine)


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client(engine, session_factory):
    app = create_app(engine)

    def _get_test_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_test_db
    with TestClient(app) as c:
        yield c
