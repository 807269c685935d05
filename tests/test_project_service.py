"""Tests unitaires pour ProjectService."""

import pytest

from application.services.project_service import ProjectService, parse_status
from domain.entities import ProjectStatus, User
from domain.exceptions import BadRequestError, ForbiddenError, NotFoundError


@pytest.fixture
def service(project_repo, user_repo, task_repo, graph) -> ProjectService:
    for user_id in ("alice", "bob"):
        user_repo.save(User(
            id=user_id,
            username=user_id,
            email=f"{user_id}@example.com",
            full_name=user_id.capitalize(),
            hashed_password="hash"
        ))
    return ProjectService(project_repo, user_repo, task_repo, graph)


def test_create_project_success(service, project_repo, user_repo):
    project = service.create_project("alice", "  My Project ", "Something to build")

    assert project.name == "My Project"
    assert project.status == ProjectStatus.ACTIVE
    assert project.member_ids == ["alice"]
    assert project.task_ids == []
    # Le projet est bien stocké et référencé par son créateur
    assert project_repo.find_by_id(project.id) is not None
    assert user_repo.find_by_id("alice").project_ids == [project.id]


def test_create_project_requires_name_and_description(service, project_repo):
    with pytest.raises(BadRequestError):
        service.create_project("alice", "", "desc")
    with pytest.raises(BadRequestError):
        service.create_project("alice", "Name", "   ")

    assert project_repo.find_by_member("alice") == []


def test_parse_status_rejects_unknown_values():
    assert parse_status("archived") == ProjectStatus.ARCHIVED

    with pytest.raises(BadRequestError) as exc:
        parse_status("paused")
    assert exc.value.message == "Invalid status value"


def test_update_project_requires_at_least_one_field(service):
    project = service.create_project("alice", "Apollo", "Moon")

    with pytest.raises(BadRequestError):
        service.update_project("alice", project.id)


def test_non_member_cannot_update_and_nothing_changes(service, project_repo):
    project = service.create_project("alice", "Apollo", "Moon")

    with pytest.raises(ForbiddenError):
        service.update_project("bob", project.id, name="Hijacked")
    with pytest.raises(ForbiddenError):
        service.change_status("bob", project.id, "archived")

    stored = project_repo.find_by_id(project.id)
    assert stored.name == "Apollo"
    assert stored.status == ProjectStatus.ACTIVE


def test_unknown_project_is_not_found(service):
    with pytest.raises(NotFoundError):
        service.get_project("alice", "missing")


def test_list_owned_projects_follows_user_list_order(service):
    first = service.create_project("alice", "First", "1")
    second = service.create_project("alice", "Second", "2")

    owned = service.list_owned_projects("alice")

    assert [p.id for p in owned] == [first.id, second.id]


def test_add_and_remove_member(service, user_repo):
    project = service.create_project("alice", "Apollo", "Moon")

    project = service.add_member("alice", project.id, "bob")
    assert project.member_ids == ["alice", "bob"]
    assert user_repo.find_by_id("bob").project_ids == [project.id]

    # Ajout d'un membre existant : pas de doublon
    project = service.add_member("alice", project.id, "bob")
    assert project.member_ids == ["alice", "bob"]

    project = service.remove_member("bob", project.id, "bob")
    assert project.member_ids == ["alice"]
    assert user_repo.find_by_id("bob").project_ids == []

    with pytest.raises(NotFoundError):
        service.remove_member("alice", project.id, "bob")


def test_add_unknown_user_is_not_found(service):
    project = service.create_project("alice", "Apollo", "Moon")

    with pytest.raises(NotFoundError):
        service.add_member("alice", project.id, "ghost")


def test_update_project_rejects_whitespace_fields(service, project_repo):
    project = service.create_project("alice", "Apollo", "Moon")

    with pytest.raises(BadRequestError) as exc:
        service.update_project("alice", project.id, name="   ")
    assert exc.value.message == "Name cannot be empty"
    with pytest.raises(BadRequestError) as exc:
        service.update_project("alice", project.id, description="\t", status="completed")
    assert exc.value.message == "Description cannot be empty"

    stored = project_repo.find_by_id(project.id)
    assert stored.name == "Apollo"
    assert stored.status == ProjectStatus.ACTIVE


def test_update_project_checks_fields_before_loading(service):
    # Un champ vide est refusé avant même de chercher le projet
    with pytest.raises(BadRequestError):
        service.update_project("alice", "missing-project", name=" ")
