# tests/conftest.py

"""
Pytest Fixtures - Shared stores, seed data and clients for all tests

SEED DATA ID REFERENCE (seeded_store):
- Projects:   PRJ-0001 Solar Dryer, PRJ-0002 Water Filter, PRJ-0003 Smart Bin
- Evaluators: EVAL-0001 .. EVAL-0004, codes 111111 .. 444444
- Panels:     PNL-0001 = EVAL-0001..0003 on PRJ-0001, PRJ-0002
              PNL-0002 = EVAL-0002..0004 on PRJ-0003
"""

import json
import os

# Settings are read once at import; keep tests offline and on the default passcode
os.environ["REMOTE_URL"] = ""
os.environ["LOAD_REMOTE_ON_STARTUP"] = "false"
os.environ["ADMIN_PASSCODE"] = "admin123"
os.environ["APP_ENV"] = "development"

import httpx
import pytest
from fastapi.testclient import TestClient

from fairscore.core.dependencies import reset_dependencies
from fairscore.main import app
from fairscore.models.evaluator import EvaluatorCreate
from fairscore.models.event_settings import EventSettings
from fairscore.models.panel import PanelCreate
from fairscore.models.project import ProjectCreate
from fairscore.repositories.entity_store import EntityStore
from fairscore.repositories.evaluator_repository import EvaluatorRepository
from fairscore.repositories.panel_repository import PanelRepository
from fairscore.repositories.project_repository import ProjectRepository
from fairscore.services.lifecycle_service import ResultLifecycleEngine
from fairscore.services.sync_service import SynchronizationCoordinator

REMOTE_URL = "https://script.example.com/macros/s/abc/exec"
ADMIN_PASSCODE = "admin123"

# problem 8 + originality 7 + description 9 + method 6 + impact 8 + presentation 9
SCENARIO_SCORES = {
    "problem": 8,
    "originality": 7,
    "description": 9,
    "method": 6,
    "impact": 8,
    "presentation": 9,
}
SCENARIO_TOTAL = 47

SECOND_SCORES = {
    "problem": 7,
    "originality": 6,
    "description": 7,
    "method": 7,
    "impact": 7,
    "presentation": 7,
}
SECOND_TOTAL = 41


# =============================================================================
# STORE FIXTURES
# =============================================================================

@pytest.fixture
def store():
    """Empty store with the default admin passcode."""
    return EntityStore(EventSettings(admin_pass=ADMIN_PASSCODE))


@pytest.fixture
def seeded_store(store):
    """Store with three projects, four evaluators and two panels."""
    projects = ProjectRepository(store)
    for title, category in (
        ("Solar Dryer", "Environment"),
        ("Water Filter", "Health"),
        ("Smart Bin", "IoT"),
    ):
        projects.create(ProjectCreate(title=title, category=category, team="Team " + title.split()[0]))

    evaluators = EvaluatorRepository(store)
    for n in range(1, 5):
        evaluators.create(
            EvaluatorCreate(
                name=f"Judge {n}",
                email=f"judge{n}@fair.org",
                expertise="Science",
                code=str(n) * 6,
            )
        )

    panels = PanelRepository(store)
    panels.create(
        PanelCreate(
            evaluator_ids=["EVAL-0001", "EVAL-0002", "EVAL-0003"],
            project_ids=["PRJ-0001", "PRJ-0002"],
        )
    )
    panels.create(
        PanelCreate(
            name="Junior Jury",
            evaluator_ids=["EVAL-0002", "EVAL-0003", "EVAL-0004"],
            project_ids=["PRJ-0003"],
        )
    )
    return store


@pytest.fixture
def engine(seeded_store):
    """Lifecycle engine with no remote sync."""
    return ResultLifecycleEngine(seeded_store)


# =============================================================================
# REMOTE STORE FIXTURES
# =============================================================================

class FakeRemote:
    """
    Scriptable stand-in for the spreadsheet web-app, served through
    httpx.MockTransport. Records every request it sees.
    """

    def __init__(self):
        self.requests = []
        self.password = "sheet-secret"
        self.token = "tok-123"
        self.dataset = None
        self.fail_status = None
        self.reject_results = False
        self.reject_bulk = False
        self.stored = {}

    def handler(self, request: httpx.Request) -> httpx.Response:
        if self.fail_status:
            return httpx.Response(self.fail_status, text="Server Error")

        if request.method == "GET":
            self.requests.append({"type": "getData", "params": dict(request.url.params)})
            if self.dataset is None:
                return httpx.Response(200, text="<html>not json</html>")
            return httpx.Response(200, json=self.dataset)

        body = json.loads(request.content)
        self.requests.append(body)
        kind = body.get("type")
        if kind == "adminLogin":
            if body.get("password") == self.password:
                return httpx.Response(200, json={"ok": True, "token": self.token})
            return httpx.Response(200, json={"ok": False, "error": "Invalid password"})
        if kind == "bulk":
            if self.reject_bulk or body.get("token") != self.token:
                return httpx.Response(200, json={"ok": False, "error": "Unauthorized"})
            return httpx.Response(200, json={"ok": True})
        if kind == "result":
            if self.reject_results:
                return httpx.Response(200, json={"ok": False, "error": "Sheet locked"})
            self.stored[body["data"]["id"]] = body["data"]
            return httpx.Response(200, json={"ok": True})
        return httpx.Response(400, json={"ok": False, "error": "Unknown type"})

    def of_type(self, kind):
        return [r for r in self.requests if r.get("type") == kind]


@pytest.fixture
def remote():
    return FakeRemote()


@pytest.fixture
def synced_store(seeded_store):
    """Seeded store pointing at the fake remote URL."""
    seeded_store.settings.gas_url = REMOTE_URL
    return seeded_store


@pytest.fixture
def coordinator(synced_store, remote):
    return SynchronizationCoordinator(synced_store, transport=httpx.MockTransport(remote.handler))


@pytest.fixture
def synced_engine(synced_store, coordinator):
    return ResultLifecycleEngine(synced_store, sync=coordinator)


# =============================================================================
# FASTAPI TEST CLIENT FIXTURES
# =============================================================================

@pytest.fixture
def client():
    """TestClient over a fresh process-wide store."""
    reset_dependencies()
    with TestClient(app) as test_client:
        yield test_client
    reset_dependencies()


@pytest.fixture
def admin_headers():
    return {"X-Admin-Passcode": ADMIN_PASSCODE}
