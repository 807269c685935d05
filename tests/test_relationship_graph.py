"""Tests unitaires du RelationshipGraph (références croisées User / Project / Task)."""

from datetime import datetime

from domain.entities import Project, Task, User


def _user(user_repo, user_id: str) -> User:
    return user_repo.save(User(
        id=user_id,
        username=user_id,
        email=f"{user_id}@example.com",
        full_name=user_id.capitalize(),
        hashed_password="hash"
    ))


def _task(task_id: str, assigned_to: str) -> Task:
    return Task(
        id=task_id,
        name=f"Task {task_id}",
        description="Work",
        assigned_to=assigned_to,
        project_id="pending",
        start_time=datetime(2024, 1, 1, 9),
        end_time=datetime(2024, 1, 1, 10)
    )


def test_create_project_makes_creator_the_only_member(graph, user_repo, project_repo):
    creator = _user(user_repo, "alice")
    draft = Project(id="p1", name="Apollo", description="Moon", member_ids=["someone-else"])

    project = graph.create_project(draft, creator)

    assert project.member_ids == ["alice"]
    assert project_repo.find_by_id("p1").member_ids == ["alice"]
    assert user_repo.find_by_id("alice").project_ids == ["p1"]


def test_add_member_is_idempotent_on_both_sides(graph, user_repo):
    alice = _user(user_repo, "alice")
    bob = _user(user_repo, "bob")
    project = graph.create_project(Project(id="p1", name="Apollo", description="Moon"), alice)

    project = graph.add_member(project, bob)
    project = graph.add_member(project, user_repo.find_by_id("bob"))

    assert project.member_ids == ["alice", "bob"]
    assert user_repo.find_by_id("bob").project_ids == ["p1"]


def test_remove_member_updates_both_sides(graph, user_repo, project_repo):
    alice = _user(user_repo, "alice")
    bob = _user(user_repo, "bob")
    project = graph.create_project(Project(id="p1", name="Apollo", description="Moon"), alice)
    project = graph.add_member(project, bob)

    graph.remove_member(project, "bob")

    assert project_repo.find_by_id("p1").member_ids == ["alice"]
    assert user_repo.find_by_id("bob").project_ids == []


def test_add_task_links_task_and_project(graph, user_repo, project_repo, task_repo):
    alice = _user(user_repo, "alice")
    project = graph.create_project(Project(id="p1", name="Apollo", description="Moon"), alice)

    task = graph.add_task(project, _task("t1", "alice"))

    assert task.project_id == "p1"
    assert task_repo.find_by_id("t1").project_id == "p1"
    assert project_repo.find_by_id("p1").task_ids == ["t1"]


def test_remove_task_prunes_project_task_list(graph, user_repo, project_repo, task_repo):
    alice = _user(user_repo, "alice")
    project = graph.create_project(Project(id="p1", name="Apollo", description="Moon"), alice)
    graph.add_task(project, _task("t1", "alice"))
    graph.add_task(project, _task("t2", "alice"))

    graph.remove_task(project_repo.find_by_id("p1"), "t1")

    assert task_repo.find_by_id("t1") is None
    assert project_repo.find_by_id("p1").task_ids == ["t2"]


def test_delete_project_unlinks_members_and_keeps_tasks(graph, user_repo, project_repo, task_repo):
    alice = _user(user_repo, "alice")
    bob = _user(user_repo, "bob")
    project = graph.create_project(Project(id="p1", name="Apollo", description="Moon"), alice)
    project = graph.add_member(project, bob)
    graph.add_task(project, _task("t1", "bob"))

    graph.delete_project(project_repo.find_by_id("p1"))

    assert project_repo.find_by_id("p1") is None
    assert user_repo.find_by_id("alice").project_ids == []
    assert user_repo.find_by_id("bob").project_ids == []
    # Les tâches du projet ne sont pas supprimées
    assert task_repo.find_by_id("t1") is not None


def test_delete_user_cascades_but_keeps_project_task_reference(graph, user_repo, project_repo, task_repo):
    alice = _user(user_repo, "alice")
    bob = _user(user_repo, "bob")
    project = graph.create_project(Project(id="p1", name="Apollo", description="Moon"), alice)
    project = graph.add_member(project, bob)
    graph.add_task(project, _task("t1", "bob"))
    graph.add_task(project_repo.find_by_id("p1"), _task("t2", "alice"))

    graph.delete_user(user_repo.find_by_id("bob"))

    assert user_repo.find_by_id("bob") is None
    assert task_repo.find_by_id("t1") is None
    assert task_repo.find_by_id("t2") is not None

    project = project_repo.find_by_id("p1")
    assert project.member_ids == ["alice"]
    # La liste des tâches garde la référence vers la tâche supprimée
    assert project.task_ids == ["t1", "t2"]
