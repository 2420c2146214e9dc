from datetime import datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from habit_tracker.database import build_engine, init_db
from habit_tracker.main import app, get_db, get_today

# 2023-01-02 is a Monday (weekday index 1)
MONDAY = datetime(2023, 1, 2)


@pytest.fixture
def engine():
    engine = build_engine("sqlite://", poolclass=StaticPool)
    init_db(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def today():
    """Mutable holder for the day the API treats as "today"."""
    return {"value": MONDAY}


@pytest.fixture
def client(session_factory, today):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_today] = lambda: today["value"]
    yield TestClient(app)
    app.dependency_overrides.clear()
