from unittest.mock import MagicMock

import requests

from tasktrack.client.api_client import TaskClient
from tasktrack.client.tables import (
    DocumentLink,
    TaskBoard,
    functional_id_options,
    functional_rows,
    partition_tasks,
    technical_rows,
)

TASKS = [
    {
        "taskId": "FT01", "project": "Billing", "taskName": "Export", "taskDescription": "CSV",
        "responsiblePerson": "Ana", "internalDeadline": "2024-05-01", "userDeadline": "2024-05-10",
        "status": "Open", "changingStatusDate": "2024-04-20",
        "taskDocumentationName": None, "taskDocumentationKey": None,
    },
    {
        "taskId": "TT01", "functionalTaskId": "FT01", "responsiblePerson": "Ben",
        "estimateDeadline": "2024-05-05", "status": "Open", "changingStatusDate": "2024-04-21",
        "taskDocumentationName": None, "taskDocumentationKey": None,
    },
    {
        "taskId": "FT02", "project": "Billing", "taskName": "Import", "taskDescription": None,
        "responsiblePerson": "Ana", "internalDeadline": None, "userDeadline": None,
        "status": "Done", "changingStatusDate": None,
        "taskDocumentationName": "plan.pdf", "taskDocumentationKey": "17-5_plan.pdf",
    },
    {"taskId": None, "status": "Open"},
]


def response(status=200, payload=None):
    resp = MagicMock()
    resp.status_code = status
    resp.ok = status < 400
    resp.reason = "Not Found" if status == 404 else "OK"
    resp.json.return_value = payload
    if status >= 400:
        resp.raise_for_status.side_effect = requests.HTTPError(f"{status} error")
    return resp


def test_partition_by_prefix():
    functional, technical = partition_tasks(TASKS)
    assert [t["taskId"] for t in functional] == ["FT01", "FT02"]
    assert [t["taskId"] for t in technical] == ["TT01"]


def test_functional_rows_document_cell():
    rows = functional_rows(TASKS, "http://localhost:3000/")
    assert rows[0][0] == "FT01"
    assert rows[0][4] == ""
    assert rows[1][4] == DocumentLink(name="plan.pdf", url="http://localhost:3000/download/17-5_plan.pdf")
    assert len(rows[0]) == 10


def test_technical_rows_columns():
    assert technical_rows(TASKS) == [["TT01", "FT01", "Ben", "2024-05-05", "Open", "2024-04-21"]]


def test_functional_id_options():
    assert functional_id_options(TASKS) == ["FT01", "FT02"]


def test_list_tasks_failure_returns_empty():
    session = MagicMock()
    session.get.side_effect = requests.ConnectionError("refused")
    assert TaskClient(session=session).list_tasks() == []


def test_create_task_posts_category_and_fields():
    session = MagicMock()
    session.post.return_value = response(201, {"taskId": "FT01"})
    client = TaskClient("http://tracker/", session=session)

    saved = client.create_task("functional", {"taskName": "Export", "status": "Open", "project": None})

    assert saved == {"taskId": "FT01"}
    args, kwargs = session.post.call_args
    assert args[0] == "http://tracker/tasks"
    assert kwargs["data"] == {"taskName": "Export", "status": "Open", "category": "functional"}


def test_create_task_with_document(tmp_path):
    doc = tmp_path / "notes.txt"
    doc.write_text("hello")
    session = MagicMock()
    session.post.return_value = response(201, {"taskId": "TT01"})

    TaskClient(session=session).create_task("TT", {"status": "Open"}, document=str(doc))

    files = session.post.call_args.kwargs["files"]
    assert files["taskDocumentation"][0] == "notes.txt"


def test_create_task_failure_returns_none():
    session = MagicMock()
    session.post.return_value = response(500)
    assert TaskClient(session=session).create_task("FT", {}) is None


def test_delete_task_reports_status():
    session = MagicMock()
    session.delete.return_value = response(204)
    assert TaskClient(session=session).delete_task("FT01") is True
    session.delete.return_value = response(404)
    assert TaskClient(session=session).delete_task("FT01") is False


def test_board_refresh_builds_views():
    client = MagicMock(base_url="http://tracker")
    client.load_tasks.return_value = TASKS
    board = TaskBoard(client)
    board.refresh()
    assert len(board.functional) == 2
    assert len(board.technical) == 1
    assert board.functional_ids == ["FT01", "FT02"]


def test_board_keeps_state_when_refresh_fails():
    client = MagicMock(base_url="http://tracker")
    client.load_tasks.return_value = TASKS
    board = TaskBoard(client)
    board.refresh()

    client.load_tasks.return_value = None
    board.refresh()
    assert board.functional_ids == ["FT01", "FT02"]


def test_board_delete_failure_leaves_tasks():
    client = MagicMock(base_url="http://tracker")
    client.load_tasks.return_value = TASKS
    client.delete_task.return_value = False
    board = TaskBoard(client)
    board.refresh()

    assert board.delete("FT01") is False
    assert len(board.tasks) == 4


def test_board_against_live_app(client):
    # Drive the board through the Flask test client instead of the network.
    class FlaskSession:
        def get(self, url, timeout=None, **kwargs):
            return _wrap(client.get(_path(url)))

        def post(self, url, data=None, files=None, timeout=None):
            return _wrap(client.post(_path(url), data=data))

        def delete(self, url, timeout=None):
            return _wrap(client.delete(_path(url)))

    board = TaskBoard(TaskClient("http://tracker", session=FlaskSession()))
    board.add("functional", {"taskName": "Export", "responsiblePerson": "Ana", "status": "Open"})
    board.add("technical", {"functionalTaskId": "FT01", "responsiblePerson": "Ben", "status": "Open"})

    assert board.functional_ids == ["FT01"]
    assert board.functional[0][4] == ""
    assert board.technical[0][:2] == ["TT01", "FT01"]

    assert board.delete("FT01") is True
    assert board.functional == []
    assert [t["taskId"] for t in board.tasks] == ["TT01"]


def _path(url):
    return url.replace("http://tracker", "")


def _wrap(flask_resp):
    resp = MagicMock()
    resp.status_code = flask_resp.status_code
    resp.ok = flask_resp.status_code < 400
    resp.reason = flask_resp.status
    resp.json.return_value = flask_resp.get_json()
    return resp


def test_download_writes_file(tmp_path):
    resp = response(200)
    resp.__enter__.return_value = resp
    resp.iter_content.return_value = [b"abc", b"def"]
    session = MagicMock()
    session.get.return_value = resp
    dest = tmp_path / "out.bin"

    assert TaskClient("http://tracker", session=session).download("1-2_a.bin", str(dest)) is True
    assert session.get.call_args.args[0] == "http://tracker/download/1-2_a.bin"
    assert dest.read_bytes() == b"abcdef"


def test_download_missing_file_returns_false(tmp_path):
    resp = response(404)
    resp.__enter__.return_value = resp
    session = MagicMock()
    session.get.return_value = resp
    assert TaskClient(session=session).download("gone.pdf", str(tmp_path / "x")) is False
