"""Tests des repositories SQLAlchemy (SQLite en mémoire)."""

from datetime import datetime

import pytest

from domain.entities import Project, Task
from infrastructure.database.repositories import SQLAlchemyProjectRepository, SQLAlchemyTaskRepository

NOW = datetime(2024, 1, 1, 8, 0, 0)


@pytest.fixture
def project_repository(test_db) -> SQLAlchemyProjectRepository:
    return SQLAlchemyProjectRepository(test_db)


@pytest.fixture
def task_repository(test_db) -> SQLAlchemyTaskRepository:
    return SQLAlchemyTaskRepository(test_db)


def test_invalid_project_is_never_committed(project_repository):
    project = project_repository.save(Project(
        id="p1", name="Apollo", description="Moon", created_at=NOW, updated_at=NOW
    ))

    project.name = ""
    with pytest.raises(ValueError):
        project_repository.save(project)

    stored = project_repository.find_by_id("p1")
    assert stored.name == "Apollo"
    assert [p.id for p in project_repository.find_by_ids(["p1"])] == ["p1"]


def test_invalid_task_is_never_committed(task_repository):
    task = task_repository.save(Task(
        id="t1",
        name="Design",
        description="Sketch",
        assigned_to="u1",
        project_id="p1",
        start_time=datetime(2024, 1, 1, 9, 0, 0),
        end_time=datetime(2024, 1, 1, 10, 0, 0),
        created_at=NOW,
        updated_at=NOW
    ))

    task.description = "   "
    with pytest.raises(ValueError):
        task_repository.save(task)

    assert task_repository.find_by_id("t1").description == "Sketch"
    assert [t.id for t in task_repository.find_by_project("p1")] == ["t1"]
