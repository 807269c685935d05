"""
Fixtures de test.

- Repositories en mémoire pour les tests unitaires des services
- Base SQLite en mémoire (StaticPool) et TestClient FastAPI pour les tests d'API
- Helpers d'authentification (inscription, connexion, headers Bearer)
"""

import copy
import logging
from typing import Dict, Generator, List, Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app import create_app
from application.relationships import RelationshipGraph
from config import Config
from domain.entities import Project, Task, User
from domain.repositories import ProjectRepository, TaskRepository, UserRepository
from infrastructure.database.models import Base
from infrastructure.dependencies import get_db

logging.basicConfig(level=logging.WARNING)

API = "/api/v1"
PASSWORD = "s3cret-pass"


# ============================================================================
# REPOSITORIES EN MÉMOIRE
# ============================================================================

class _InMemoryStore:
    """Stocke des copies : chaque lecture renvoie une entité détachée, comme une base"""

    def __init__(self) -> None:
        self._items: Dict[str, object] = {}

    def _get(self, item_id):
        item = self._items.get(str(item_id))
        return copy.deepcopy(item) if item else None

    def _get_many(self, ids) -> list:
        return [copy.deepcopy(self._items[str(i)]) for i in ids if str(i) in self._items]

    def _values(self) -> list:
        return [copy.deepcopy(item) for item in self._items.values()]

    def _put(self, item):
        item.validate()
        self._items[str(item.id)] = copy.deepcopy(item)
        return copy.deepcopy(item)

    def _remove(self, item_id) -> None:
        self._items.pop(str(item_id), None)


class InMemoryUserRepository(_InMemoryStore, UserRepository):
    def find_by_id(self, user_id: str) -> Optional[User]:
        return self._get(user_id)

    def find_by_username(self, username: str) -> Optional[User]:
        return next((u for u in self._values() if u.username == username), None)

    def find_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self._values() if u.email == email), None)

    def find_by_ids(self, user_ids: List[str]) -> List[User]:
        return self._get_many(user_ids)

    def save(self, user: User) -> User:
        return self._put(user)

    def delete(self, user_id: str) -> None:
        self._remove(user_id)


class InMemoryProjectRepository(_InMemoryStore, ProjectRepository):
    def find_by_id(self, project_id: str) -> Optional[Project]:
        return self._get(project_id)

    def find_by_ids(self, project_ids: List[str]) -> List[Project]:
        return self._get_many(project_ids)

    def find_by_member(self, user_id: str) -> List[Project]:
        return [p for p in self._values() if str(user_id) in map(str, p.member_ids)]

    def save(self, project: Project) -> Project:
        return self._put(project)

    def delete(self, project_id: str) -> None:
        self._remove(project_id)


class InMemoryTaskRepository(_InMemoryStore, TaskRepository):
    def find_by_id(self, task_id: str) -> Optional[Task]:
        return self._get(task_id)

    def find_by_ids(self, task_ids: List[str]) -> List[Task]:
        return self._get_many(task_ids)

    def find_by_project(self, project_id: str) -> List[Task]:
        return [t for t in self._values() if str(t.project_id) == str(project_id)]

    def save(self, task: Task) -> Task:
        return self._put(task)

    def delete(self, task_id: str) -> None:
        self._remove(task_id)

    def delete_by_assignee(self, user_id: str) -> int:
        doomed = [t.id for t in self._values() if str(t.assigned_to) == str(user_id)]
        for task_id in doomed:
            self._remove(task_id)
        return len(doomed)


@pytest.fixture
def user_repo() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def project_repo() -> InMemoryProjectRepository:
    return InMemoryProjectRepository()


@pytest.fixture
def task_repo() -> InMemoryTaskRepository:
    return InMemoryTaskRepository()


@pytest.fixture
def graph(user_repo, project_repo, task_repo) -> RelationshipGraph:
    return RelationshipGraph(user_repo, project_repo, task_repo)


# ============================================================================
# API (SQLite en mémoire + TestClient)
# ============================================================================

@pytest.fixture
def test_config(tmp_path) -> Config:
    return Config(
        database_url="sqlite://",
        bcrypt_rounds=4,
        cookie_secure=True,
        export_dir=str(tmp_path / "exports"),
        log_file_enabled=False
    )


@pytest.fixture
def test_db() -> Generator[Session, None, None]:
    """Base SQLite en mémoire, recréée pour chaque test"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    db = TestingSessionLocal()

    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def client(test_config: Config, test_db: Session) -> Generator[TestClient, None, None]:
    """TestClient avec la dépendance get_db surchargée"""
    app = create_app(test_config)

    def override_get_db():
        yield test_db

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


def auth_headers(access_token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {access_token}"}


def register(client: TestClient, username: str, full_name: Optional[str] = None, password: str = PASSWORD) -> dict:
    response = client.post(f"{API}/users/register", json={
        "fullName": full_name or username.capitalize(),
        "email": f"{username}@example.com",
        "password": password,
        "username": username
    })
    assert response.status_code == 201, response.text
    return response.json()["data"]


def login(client: TestClient, username: str, password: str = PASSWORD) -> dict:
    response = client.post(f"{API}/users/login", json={"username": username, "password": password})
    assert response.status_code == 200, response.text
    return response.json()["data"]


def signup(client: TestClient, username: str, full_name: Optional[str] = None) -> dict:
    """Inscrit et connecte un utilisateur ; retourne {id, user, headers, refresh_token}"""
    register(client, username, full_name)
    data = login(client, username)
    return {
        "id": data["user"]["id"],
        "user": data["user"],
        "headers": auth_headers(data["accessToken"]),
        "refresh_token": data["refreshToken"],
    }


def create_project(client: TestClient, headers: Dict[str, str], name: str = "Apollo",
                   description: str = "Moon landing") -> dict:
    response = client.post(f"{API}/projects", json={"name": name, "description": description}, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]


def create_task(client: TestClient, headers: Dict[str, str], project_id: str, assigned_to: str,
                name: str = "Design", start: str = "2024-01-01T09:00:00",
                end: str = "2024-01-01T10:00:00") -> dict:
    response = client.post(f"{API}/projects/{project_id}/tasks", json={
        "name": name,
        "description": f"{name} work",
        "assignedTo": assigned_to,
        "startTime": start,
        "endTime": end
    }, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]


@pytest.fixture
def alice(client) -> dict:
    return signup(client, "alice", "Alice Martin")


@pytest.fixture
def bob(client) -> dict:
    return signup(client, "bob", "Bob Durand")
