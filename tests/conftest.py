import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from app.core.database import Base
from app.main import create_app
from app.services.student.student import StudentStore


@pytest.fixture
def engine():
    # One shared in-memory connection so every session sees the same tables
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def store(engine):
    store = StudentStore(engine)
    store.init_schema()
    return store


@pytest.fixture
def client(engine):
    app = create_app(store=StudentStore(engine))
    with TestClient(app) as client:
        yield client


@pytest.fixture
def ada():
    return {"first_name": "Ada", "last_name": "Lovelace", "email": "ada@example.com"}
