"""
Integration tests for the task routes.
Drives the FastAPI app with real JWT verification, the SQLAlchemy repository on
in-memory SQLite and fake user/project services.
"""

import pytest
from datetime import datetime, timedelta, timezone
from fastapi.testclient import TestClient
from jose import jwt
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from task_api.config import Settings
from task_api.domain.models.base import ServiceUnavailableError
from task_api.infrastructure.auth.dependencies import get_jwt_handler
from task_api.infrastructure.auth.jwt_handler import JWTHandler
from task_api.infrastructure.db.database import Base
from task_api.infrastructure.repositories.task_repository import SQLAlchemyTaskRepository
from task_api.infrastructure.web.routers.dependencies import (
    get_task_repository,
    get_user_repository,
    get_project_repository,
)
from task_api.main import create_application

SECRET = "integration-secret"


def _token(user_id, scope=("ROLE_USER",)):
    return jwt.encode(
        {
            "sub": str(user_id),
            "userId": user_id,
            "scope": list(scope),
            "exp": datetime.now(timezone.utc) + timedelta(minutes=10),
        },
        SECRET,
        algorithm="HS256",
    )


def _auth(user_id, scope=("ROLE_USER",)):
    return {"Authorization": f"Bearer {_token(user_id, scope)}"}


ADMIN_SCOPE = ("ROLE_USER", "ROLE_ADMIN")


@pytest.fixture
def session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    db = sessionmaker(bind=engine, autoflush=False)()
    try:
        yield db
    finally:
        db.close()
        engine.dispose()


@pytest.fixture
def app(session, user_repository, project_repository):
    application = create_application()
    handler = JWTHandler(Settings(jwt_algorithm="HS256", jwt_secret_key=SECRET))
    application.dependency_overrides[get_jwt_handler] = lambda: handler
    application.dependency_overrides[get_task_repository] = lambda: SQLAlchemyTaskRepository(session)
    application.dependency_overrides[get_user_repository] = lambda: user_repository
    application.dependency_overrides[get_project_repository] = lambda: project_repository
    return application


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def due_date():
    return (datetime.now(timezone.utc) + timedelta(days=5)).replace(microsecond=0)


def _create(client, due_date, user_id=2, responsible=(3,), project_id=100, title="Review docs"):
    return client.post(
        f"/api/project/{project_id}/task",
        json={
            "title": title,
            "description": "Read them all",
            "due_date": due_date.isoformat(),
            "responsible_user_ids": list(responsible),
        },
        headers=_auth(user_id),
    )


class TestHealth:
    """Test cases for the health endpoint."""

    def test_health(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestTaskRoutes:
    """Test cases for the task endpoints."""

    def test_create_task(self, client, due_date):
        response = _create(client, due_date)

        assert response.status_code == 201
        body = response.json()
        assert body["status"] == "TODO"
        assert body["project_id"] == 100
        assert body["owner"]["username"] == "alice"
        assert [u["user_id"] for u in body["responsible_users"]] == [3, 2]
        assert body["due_date"].startswith(due_date.replace(tzinfo=None).isoformat())

    def test_create_requires_token(self, client, due_date):
        response = client.post(
            "/api/project/100/task",
            json={"title": "x", "due_date": due_date.isoformat()},
        )
        assert response.status_code == 401
        assert response.json()["error"] == "Unauthorized"

    def test_create_with_invalid_token(self, client, due_date):
        response = client.post(
            "/api/project/100/task",
            json={"title": "x", "due_date": due_date.isoformat()},
            headers={"Authorization": "Bearer nonsense"},
        )
        assert response.status_code == 401

    def test_create_outside_team(self, client, due_date):
        response = _create(client, due_date, user_id=4)

        assert response.status_code == 403
        assert response.json()["message"] == "You do not have permission to access this project."
        assert response.json()["code"] == "FORBIDDEN"

    def test_create_invalid_body(self, client):
        response = client.post(
            "/api/project/100/task",
            json={"title": "x" * 51},
            headers=_auth(2),
        )

        assert response.status_code == 400
        fields = {error["field"] for error in response.json()["field_errors"]}
        assert {"title", "due_date"} <= fields

    def test_create_past_due_date(self, client):
        past = datetime.now(timezone.utc) - timedelta(days=1)
        response = _create(client, past)

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"
        assert response.json()["details"] == {"field": "due_date"}

    def test_create_with_unknown_responsible(self, client, due_date):
        response = _create(client, due_date, responsible=[99])

        assert response.status_code == 404
        assert "User with ID 99" in response.json()["message"]

    def test_get_task(self, client, due_date):
        task_id = _create(client, due_date).json()["id"]

        response = client.get(f"/api/project/100/task/{task_id}", headers=_auth(3))

        assert response.status_code == 200
        assert response.json()["title"] == "Review docs"

    def test_get_task_forbidden(self, client, due_date):
        task_id = _create(client, due_date).json()["id"]

        response = client.get(f"/api/project/100/task/{task_id}", headers=_auth(4))

        assert response.status_code == 403

    def test_get_task_wrong_project(self, client, due_date):
        task_id = _create(client, due_date).json()["id"]

        response = client.get(f"/api/project/200/task/{task_id}", headers=_auth(2))

        assert response.status_code == 404
        assert "does not belong to project with ID 200" in response.json()["message"]

    def test_get_missing_task(self, client):
        response = client.get("/api/project/100/task/999", headers=_auth(2))

        assert response.status_code == 404
        assert response.json()["message"] == "Task with ID 999 not found."

    def test_list_user_tasks(self, client, due_date):
        for _ in range(3):
            _create(client, due_date)

        response = client.get(
            "/api/project/100/tasks/user/3?page=1&size=2", headers=_auth(3)
        )

        assert response.status_code == 200
        body = response.json()
        assert len(body["content"]) == 2
        assert body["page_number"] == 1
        assert body["page_size"] == 2
        assert body["total_elements"] == 3
        assert body["total_pages"] == 2
        assert body["last"] is False

    def test_list_other_user_tasks_forbidden(self, client, due_date):
        response = client.get("/api/project/100/tasks/user/3", headers=_auth(2))
        assert response.status_code == 403

    def test_search_tasks(self, client, due_date):
        _create(client, due_date)
        _create(client, due_date, user_id=3, responsible=[])

        response = client.get("/api/project/task/search?status=todo", headers=_auth(2))

        assert response.status_code == 200
        body = response.json()
        assert body["total_elements"] == 1
        assert body["content"][0]["project"]["title"] == "Docs"

    def test_search_as_admin(self, client, due_date):
        _create(client, due_date)
        _create(client, due_date, user_id=4, project_id=200, responsible=[])

        response = client.get("/api/project/task/search", headers=_auth(1, ADMIN_SCOPE))

        assert response.status_code == 200
        assert response.json()["total_elements"] == 2

    def test_search_invalid_status(self, client):
        response = client.get("/api/project/task/search?status=BOGUS", headers=_auth(2))

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid status value: BOGUS"

    def test_update_task(self, client, due_date):
        task_id = _create(client, due_date).json()["id"]
        new_due = due_date + timedelta(days=1)

        response = client.put(
            f"/api/project/100/task/{task_id}",
            json={
                "title": "Renamed",
                "due_date": new_due.isoformat(),
                "responsible_user_ids": [3],
            },
            headers=_auth(3),
        )

        assert response.status_code == 200
        body = response.json()
        assert body["title"] == "Renamed"
        assert body["description"] is None
        assert body["status"] == "TODO"
        assert body["owner"]["user_id"] == 2

    def test_update_status(self, client, due_date):
        task_id = _create(client, due_date).json()["id"]

        response = client.patch(
            f"/api/project/100/task/{task_id}/updateStatus",
            json={"status": "inprogress"},
            headers=_auth(2),
        )

        assert response.status_code == 200
        assert response.json()["status"] == "INPROGRESS"

    def test_update_status_invalid_value(self, client, due_date):
        task_id = _create(client, due_date).json()["id"]

        response = client.patch(
            f"/api/project/100/task/{task_id}/updateStatus",
            json={"status": "ARCHIVED"},
            headers=_auth(2),
        )

        assert response.status_code == 400

    def test_admin_delete(self, client, due_date):
        task_id = _create(client, due_date).json()["id"]

        response = client.delete(
            f"/api/project/100/task/{task_id}", headers=_auth(4, ADMIN_SCOPE)
        )

        assert response.status_code == 204
        assert response.content == b""
        assert client.get(f"/api/project/100/task/{task_id}", headers=_auth(2)).status_code == 404

    def test_delete_forbidden(self, client, due_date):
        task_id = _create(client, due_date).json()["id"]

        response = client.delete(f"/api/project/100/task/{task_id}", headers=_auth(4))

        assert response.status_code == 403

    def test_unknown_route(self, client):
        response = client.get("/api/nothing-here", headers=_auth(2))
        assert response.status_code == 404
        assert response.json()["error"] == "Not Found"


class TestCamelCaseContract:
    """Test cases for the camelCase route, query and body names."""

    def test_create_with_camel_case_body(self, client, due_date):
        response = client.post(
            "/api/project/100/task",
            json={
                "title": "Plan sprint",
                "dueDate": due_date.isoformat(),
                "usersResponsability": [3],
            },
            headers=_auth(2),
        )

        assert response.status_code == 201
        assert [u["user_id"] for u in response.json()["responsible_users"]] == [3, 2]

    def test_update_with_camel_case_body(self, client, due_date):
        task_id = _create(client, due_date).json()["id"]

        response = client.put(
            f"/api/project/100/task/{task_id}",
            json={
                "title": "Replan",
                "dueDate": (due_date + timedelta(days=2)).isoformat(),
                "usersResponsability": [],
            },
            headers=_auth(2),
        )

        assert response.status_code == 200
        assert [u["user_id"] for u in response.json()["responsible_users"]] == [2]

    def test_status_path_alias(self, client, due_date):
        task_id = _create(client, due_date).json()["id"]

        response = client.patch(
            f"/api/project/100/task/{task_id}/status",
            json={"status": "DONE"},
            headers=_auth(2),
        )

        assert response.status_code == 200
        assert response.json()["status"] == "DONE"

    def test_search_due_date_ceiling(self, client, due_date):
        _create(client, due_date)

        before = client.get(
            "/api/project/task/search",
            params={"dueDate": "2000-01-01T00:00:00"},
            headers=_auth(2),
        )
        after = client.get(
            "/api/project/task/search",
            params={"dueDate": (due_date + timedelta(days=1)).replace(tzinfo=None).isoformat()},
            headers=_auth(2),
        )

        assert before.status_code == 200
        assert before.json()["total_elements"] == 0
        assert after.json()["total_elements"] == 1

    def test_search_by_project(self, client, due_date):
        _create(client, due_date)
        _create(client, due_date, user_id=4, project_id=200, responsible=[])

        response = client.get(
            "/api/project/task/search",
            params={"projectId": 200},
            headers=_auth(1, ADMIN_SCOPE),
        )

        assert response.status_code == 200
        body = response.json()
        assert body["total_elements"] == 1
        assert body["content"][0]["project_id"] == 200


class TestRemoteFailures:
    """Test cases for remote failures surfacing through the API."""

    def test_project_service_unavailable(self, app, client, due_date, project_repository):
        def unavailable(project_id, token):
            raise ServiceUnavailableError("project")

        project_repository.get_project = unavailable

        response = _create(client, due_date)

        assert response.status_code == 503
        assert response.json()["code"] == "SERVICE_UNAVAILABLE"

    def test_unexpected_error(self, app, client):
        class BrokenRepository:
            def find_by_id(self, task_id):
                raise RuntimeError("disk on fire")

        app.dependency_overrides[get_task_repository] = lambda: BrokenRepository()

        response = client.get("/api/project/100/task/1", headers=_auth(2))

        assert response.status_code == 500
        assert response.json()["message"] == "An unexpected error occurred"
        assert "disk on fire" not in response.text
