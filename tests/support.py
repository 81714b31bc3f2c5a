import os
import tempfile
import unittest

from fastapi.testclient import TestClient

from core.config import Settings
from main import create_app


def make_settings(root: str, **overrides) -> Settings:
    values = {
        "DATABASE_URL": f"sqlite:///{os.path.join(root, 'test.db')}",
        "JWT_SECRET": "unit-test-secret",
        "BCRYPT_ROUNDS": 4,
        "UPLOAD_DIR": os.path.join(root, "uploads"),
        "LOG_LEVEL": "WARNING",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


class ApiTestCase(unittest.TestCase):
    """Fresh app, database and upload directory per test."""

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.settings = make_settings(self._tmp.name)
        self.app = create_app(self.settings)
        self.client = TestClient(self.app)

    def tearDown(self):
        self.client.close()
        self.app.state.engine.dispose()
        self._tmp.cleanup()

    def register(self, username="alice", password="pw123"):
        return self.client.post("/api/register", json={"username": username, "password": password})

    def login(self, username="alice", password="pw123"):
        return self.client.post("/api/login", json={"username": username, "password": password})

    def auth_headers(self, username="alice", password="pw123"):
        self.register(username, password)
        token = self.login(username, password).json()["token"]
        return {"Authorization": f"Bearer {token}"}

    def create_project(self, headers, **fields):
        body = {"title": "Hello", "code": "<b>hi</b>"}
        body.update(fields)
        resp = self.client.post("/api/projects", json=body, headers=headers)
        self.assertEqual(resp.status_code, 200, resp.text)
        return resp.json()
