import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, text

from app.main import create_app
from app.services.student.student import StudentStore


class UntouchableStore:
    """Store double that fails the test if a request reaches it."""

    def init_schema(self):
        pass

    def __getattr__(self, name):
        raise AssertionError(f"store.{name} should not have been called")


@pytest.fixture
def untouched_client():
    with TestClient(create_app(store=UntouchableStore())) as client:
        yield client


def _assert_cors_headers(response):
    assert response.headers["content-type"] == "application/json"
    assert response.headers["access-control-allow-origin"] == "*"
    assert response.headers["access-control-allow-methods"] == "GET, POST, OPTIONS, PUT, DELETE"
    assert response.headers["access-control-allow-headers"] == "Content-Type"


@pytest.mark.parametrize("path", ["/api/students", "/api/students/1", "/api/students/abc"])
def test_preflight_short_circuits_without_store(untouched_client, path):
    response = untouched_client.options(path)

    assert response.status_code == 200
    assert response.content == b""
    _assert_cors_headers(response)


def test_non_numeric_id_is_rejected_before_store_access(untouched_client):
    response = untouched_client.get("/api/students/abc")

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"
    assert "path.student_id" in response.json()["error"]["details"]
    _assert_cors_headers(response)


def test_malformed_body_is_rejected_before_store_access(untouched_client):
    response = untouched_client.post(
        "/api/students",
        content="{",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    _assert_cors_headers(response)


def test_cors_headers_on_success_and_errors(client, ada):
    _assert_cors_headers(client.get("/api/students"))
    _assert_cors_headers(client.post("/api/students", json=ada))
    _assert_cors_headers(client.get("/api/students/9999"))
    _assert_cors_headers(client.patch("/api/students", json={}))

    created = client.post(
        "/api/students",
        json={"first_name": "Alan", "last_name": "Turing", "email": "alan@example.com"},
    ).json()
    _assert_cors_headers(client.delete(f"/api/students/{created['id']}"))


def test_docs_are_left_alone(client):
    response = client.get("/openapi.json")

    assert response.status_code == 200
    assert "access-control-allow-origin" not in response.headers


def test_startup_fails_when_database_is_unreachable(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'missing' / 'students.db'}")
    app = create_app(store=StudentStore(engine))

    with pytest.raises(Exception):
        with TestClient(app):
            pass

    engine.dispose()


def test_startup_creates_table_idempotently(engine):
    StudentStore(engine).init_schema()

    with TestClient(create_app(store=StudentStore(engine))) as client:
        assert client.get("/api/students").json() == []


def test_undecodable_row_is_a_store_error_with_cors_headers(client, engine):
    with engine.begin() as conn:
        conn.execute(text(
            "INSERT INTO students (id, first_name, last_name, email, enrollment_date) "
            "VALUES (2, 'Bad', 'Row', 'bad@example.com', 'not-a-date')"
        ))

    response = client.get("/api/students/2")

    assert response.status_code == 500
    assert response.json()["error"]["code"] == "STORE_ERROR"
    assert response.json()["error"]["message"].startswith("Error decoding student 2:")
    _assert_cors_headers(response)
