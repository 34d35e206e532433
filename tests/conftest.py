import pytest

from tasktrack.app import create_app
from tasktrack.models.task_store import TaskStore
from tasktrack.utils.storage import JsonFilePersistence


@pytest.fixture
def app(tmp_path):
    app = create_app({
        "TESTING": True,
        "TASKS_FILE": str(tmp_path / "tasks.json"),
        "UPLOAD_FOLDER": str(tmp_path / "uploads"),
    })
    yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def tasks_file(tmp_path):
    return tmp_path / "store" / "tasks.json"


@pytest.fixture
def store(tasks_file):
    return TaskStore(JsonFilePersistence(str(tasks_file)))
