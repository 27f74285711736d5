"""
Shared fixtures.

The app runs against a throwaway SQLite file, an in-memory mongomock client
and a scripted DeepSeek client, so no external service is needed.
Environment variables must be set before anything under skillsync is
imported: settings are read once and cached.
"""

import os
import tempfile
from collections import deque

_TMP_DIR = tempfile.mkdtemp(prefix="skillsync-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP_DIR, 'test.db')}"
os.environ["STORAGE_DIR"] = os.path.join(_TMP_DIR, "storage")
os.environ["MONGODB_DB"] = "skillsync_test"
os.environ["JWT_SECRET_KEY"] = "test-secret"
os.environ["DEBUG"] = "false"
os.environ["AUTO_ANALYZE_UPLOADS"] = "true"

import json  # noqa: E402

import mongomock  # noqa: E402
import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import text  # noqa: E402

from skillsync.db import mongodb  # noqa: E402
from skillsync.db.postgres import get_db_session  # noqa: E402
from skillsync.db.schema import TABLES, init_schema  # noqa: E402
from skillsync.services import deepseek_client  # noqa: E402
from skillsync.services.deepseek_client import DeepSeekClient  # noqa: E402

mongodb._client = mongomock.MongoClient()
mongodb._db = None

init_schema()

TEST_PASSWORD = "Vivid#Ocean7Tree"


# ============================================================
# SCRIPTED AI CLIENT
# ============================================================

class FakeDeepSeekClient(DeepSeekClient):
    """
    Replies come from a queue instead of the API. Queue a string for a
    normal reply or an exception instance to make the call fail.
    """

    def __init__(self):
        self.model = "fake"
        self.replies = deque()
        self.calls = []

    def reply(self, *replies):
        for item in replies:
            if isinstance(item, (dict, list)):
                item = json.dumps(item)
            self.replies.append(item)

    def _call_api(self, system_prompt, user_content, max_tokens=1000, temperature=0.3, json_mode=False):
        self.calls.append({
            "system_prompt": system_prompt,
            "user_content": user_content,
            "json_mode": json_mode
        })
        if not self.replies:
            raise RuntimeError("No scripted reply left")
        item = self.replies.popleft()
        if isinstance(item, Exception):
            raise item
        return item


# ============================================================
# FIXTURES
# ============================================================

@pytest.fixture(autouse=True)
def clean_stores():
    with get_db_session() as db:
        for table in TABLES:
            db.execute(text(f"DELETE FROM {table}"))

    mongodb.get_mongo_client().drop_database(os.environ["MONGODB_DB"])
    mongodb._db = None
    mongodb.init_mongo_indexes()
    yield


@pytest.fixture
def ai():
    fake = FakeDeepSeekClient()
    deepseek_client._deepseek_client = fake
    yield fake
    deepseek_client._deepseek_client = None


@pytest.fixture
def client(ai):
    from skillsync.main import app
    return TestClient(app)


def register_and_login(client, email):
    response = client.post("/api/auth/register", json={"email": email, "password": TEST_PASSWORD})
    assert response.status_code == 201, response.text
    response = client.post("/api/auth/login", json={"email": email, "password": TEST_PASSWORD})
    assert response.status_code == 200, response.text
    body = response.json()
    return {"Authorization": f"Bearer {body['accessToken']}"}, body["userId"]


@pytest.fixture
def auth(client):
    """(headers, user_id) for a freshly registered user."""
    return register_and_login(client, "student@example.com")


@pytest.fixture
def other_auth(client):
    return register_and_login(client, "someone.else@example.com")


@pytest.fixture
def manual_analysis(monkeypatch):
    """Uploads stay PROCESSING until /documents/analyze is called."""
    from skillsync.core.config import get_settings
    monkeypatch.setattr(get_settings(), "auto_analyze_uploads", False)


def upload(client, headers, filename="resume.txt", content=b"Built REST APIs in Python."):
    response = client.post(
        "/api/documents/upload",
        files={"file": (filename, content, "text/plain")},
        headers=headers
    )
    assert response.status_code == 201, response.text
    return response.json()


def onboard(client, headers, **fields):
    body = {"careerGoal": "Backend Developer", "currentStudy": "Computer Science"}
    body.update(fields)
    response = client.post("/api/onboarding", json=body, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()
