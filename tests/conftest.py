"""
Shared fixtures: in-memory fakes of the three ports and a wired TaskService.
"""

import copy
from datetime import timedelta

import pytest

from task_api.application.services.task_service import TaskService
from task_api.domain.models.base import EntityNotFoundError, utcnow
from task_api.domain.models.page import Page
from task_api.domain.models.project import Project
from task_api.domain.models.user import User
from task_api.domain.repositories.project_repository import ProjectRepository
from task_api.domain.repositories.task_repository import TaskRepository
from task_api.domain.repositories.user_repository import UserRepository


class FakeUserRepository(UserRepository):
    """Users held in a dict; records every lookup."""

    def __init__(self, users):
        self.users = {user.user_id: user for user in users}
        self.calls = []

    def get_user(self, user_id, token):
        self.calls.append(user_id)
        if user_id not in self.users:
            raise EntityNotFoundError("User", user_id)
        return self.users[user_id]


class FakeProjectRepository(ProjectRepository):
    """Projects held in a dict; records every lookup."""

    def __init__(self, projects):
        self.projects = {project.id: project for project in projects}
        self.calls = []

    def get_project(self, project_id, token):
        self.calls.append(project_id)
        if project_id not in self.projects:
            raise EntityNotFoundError("Project", project_id)
        return self.projects[project_id]


class InMemoryTaskRepository(TaskRepository):
    """Tasks held in a dict keyed by id. Entities are copied in and out."""

    def __init__(self):
        self.tasks = {}
        self.next_id = 1
        self.saves = 0
        self.deletes = 0
        self.queries = 0

    def save(self, task):
        stored = copy.deepcopy(task)
        if stored.id is None:
            stored.id = self.next_id
            self.next_id += 1
        self.tasks[stored.id] = stored
        self.saves += 1
        return copy.deepcopy(stored)

    def find_by_id(self, task_id):
        self.queries += 1
        task = self.tasks.get(task_id)
        return copy.deepcopy(task) if task else None

    def delete(self, task):
        self.deletes += 1
        del self.tasks[task.id]

    def find_by_project_and_responsible(self, project_id, user_id, page_request):
        return self._page(
            lambda t: t.project_id == project_id and user_id in t.responsible_user_ids,
            page_request
        )

    def find_filtered(self, status, due_date, project_id, page_request):
        return self._page(lambda t: self._matches(t, status, due_date, project_id), page_request)

    def find_filtered_for_user(self, user_id, status, due_date, project_id, page_request):
        return self._page(
            lambda t: self._matches(t, status, due_date, project_id)
            and (t.owner_user_id == user_id or user_id in t.responsible_user_ids),
            page_request
        )

    @staticmethod
    def _matches(task, status, due_date, project_id):
        return (
            (status is None or task.status == status)
            and (due_date is None or task.due_date <= due_date)
            and (project_id is None or task.project_id == project_id)
        )

    def _page(self, predicate, page_request):
        self.queries += 1
        matches = [copy.deepcopy(t) for _, t in sorted(self.tasks.items()) if predicate(t)]
        window = matches[page_request.offset:page_request.offset + page_request.limit]
        return Page.of(window, page_request, len(matches))


def make_user(user_id, username):
    return User(user_id=user_id, username=username, email=f"{username}@example.com")


USERS = {
    1: make_user(1, "root"),
    2: make_user(2, "alice"),
    3: make_user(3, "bob"),
    4: make_user(4, "carol"),
}


@pytest.fixture
def users():
    return dict(USERS)


@pytest.fixture
def user_repository(users):
    return FakeUserRepository(users.values())


@pytest.fixture
def project_repository(users):
    return FakeProjectRepository([
        Project(
            id=100,
            title="Docs",
            team=[users[2], users[3]],
            creator=users[2],
        ),
        Project(
            id=200,
            title="Ops",
            team=[users[4]],
            creator=users[4],
        ),
    ])


@pytest.fixture
def task_repository():
    return InMemoryTaskRepository()


@pytest.fixture
def task_service(task_repository, user_repository, project_repository):
    return TaskService(task_repository, user_repository, project_repository)


@pytest.fixture
def future_date():
    return (utcnow() + timedelta(days=7)).replace(microsecond=0)
