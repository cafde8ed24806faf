# Shared fixtures for the client and server tests.

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient
from PyQt5.QtCore import QSettings

from FileServer.main import create_app
from gui.session_store import SessionStore


class Recorder:
    """Collects calls made to the UI hooks a controller is given."""

    def __init__(self):
        self.toasts = []
        self.scheduled = []

    def notify(self, title, description, destructive=False):
        self.toasts.append((title, description, destructive))

    def schedule(self, delay_ms, fn):
        self.scheduled.append((delay_ms, fn))

    def run_scheduled(self):
        for _, fn in self.scheduled:
            fn()

    @property
    def titles(self):
        return [t[0] for t in self.toasts]


@pytest.fixture
def ui():
    return Recorder()


@pytest.fixture
def store(tmp_path):
    settings = QSettings(str(tmp_path / "client.ini"), QSettings.IniFormat)
    return SessionStore(settings)


def fake_response(status=200, json_data=None):
    r = MagicMock()
    r.status_code = status
    r.ok = 200 <= status < 400
    if json_data is None:
        r.json.side_effect = ValueError("no json")
    else:
        r.json.return_value = json_data
    return r


@pytest.fixture
def respond():
    return fake_response


@pytest.fixture
def server(tmp_path):
    with TestClient(create_app(str(tmp_path / "data"))) as client:
        yield client


@pytest.fixture
def admin_headers(server):
    token = server.post("/api/login", json={"username": "admin", "password": "admin"}).json()["token"]
    return {"Authorization": f"Bearer {token}"}
