"""Tests de l'export CSV /projects/get-summary."""

import asyncio
import csv
import io
import os

from api.responses import csv_attachment
from conftest import API, create_project, create_task
from infrastructure.export.csv_writer import CsvSummaryWriter

HEADER = [
    "Project Name", "Project Description", "Project Status", "Project Created At",
    "Project Users", "Total Tasks", "Completed Tasks", "Total Hours", "Task Name",
    "Task Description", "Task Assigned To", "Task Start Time", "Task End Time",
    "Task Duration (hours)",
]


def _rows(response):
    return list(csv.reader(io.StringIO(response.text)))


def test_project_summary_is_a_csv_attachment(client, alice, bob, test_config):
    project = create_project(client, alice["headers"], "Apollo", "Moon")
    client.post(f"{API}/projects/{project['id']}/members", json={"userId": bob["id"]}, headers=alice["headers"])
    create_task(client, alice["headers"], project["id"], assigned_to=alice["id"], name="One",
                start="2024-01-01T09:00:00", end="2024-01-01T10:00:00")
    create_task(client, alice["headers"], project["id"], assigned_to=bob["id"], name="Two",
                start="2024-01-02T09:00:00", end="2024-01-02T11:30:00")

    response = client.get(f"{API}/projects/get-summary/{project['id']}", headers=alice["headers"])

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    disposition = response.headers["content-disposition"]
    assert disposition.startswith("attachment;")
    assert 'filename="project-summary-Apollo-' in disposition

    rows = _rows(response)
    assert rows[0] == HEADER
    assert [row[7] for row in rows[1:]] == ["1.00", "3.50"]
    assert rows[1][4] == "Alice Martin, Bob Durand"
    assert rows[2][10] == "Bob Durand"
    assert rows[1][5] == "2" and rows[1][6] == "2"

    # Le fichier temporaire est supprimé après le flux
    assert os.listdir(test_config.export_dir) == []


def test_all_projects_summary(client, alice):
    busy = create_project(client, alice["headers"], "Busy", "Has tasks")
    create_project(client, alice["headers"], "Idle", "No tasks")
    create_task(client, alice["headers"], busy["id"], assigned_to=alice["id"])

    response = client.get(f"{API}/projects/get-summary", headers=alice["headers"])

    assert response.status_code == 200
    assert 'filename="all-projects-summary-' in response.headers["content-disposition"]

    rows = _rows(response)
    assert rows[0] == HEADER
    by_project = {row[0]: row for row in rows[1:]}
    assert set(by_project) == {"Busy", "Idle"}
    assert by_project["Idle"][8] == "No tasks"
    assert by_project["Idle"][5] == "0"
    assert by_project["Idle"][7] == "0"


def test_summary_errors(client, alice, bob):
    assert client.get(f"{API}/projects/get-summary", headers=alice["headers"]).status_code == 404

    project = create_project(client, alice["headers"])
    assert client.get(f"{API}/projects/get-summary/{project['id']}", headers=bob["headers"]).status_code == 403
    assert client.get(f"{API}/projects/get-summary/missing", headers=alice["headers"]).status_code == 404
    assert client.get(f"{API}/projects/get-summary").status_code == 401


def test_export_file_removed_when_stream_never_starts(tmp_path):
    writer = CsvSummaryWriter(export_dir=str(tmp_path))
    path = writer.write("project-summary", [("name", "Project Name")], [{"name": "Apollo"}])

    response = csv_attachment("project-summary.csv", path, writer)
    assert response.headers["content-disposition"] == 'attachment; filename="project-summary.csv"'

    # Envoi interrompu avant le premier bloc : seule la tâche de fond s'exécute
    asyncio.run(response.background())
    assert not path.exists()
    assert os.listdir(tmp_path) == []

    # Sans effet si le flux a déjà supprimé le fichier
    asyncio.run(response.background())
