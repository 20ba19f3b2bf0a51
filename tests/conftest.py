import pytest

import app.config
from app.workspace import workspaces


@pytest.fixture(autouse=True)
def fast_auth(monkeypatch):
    """No simulated latency in tests, demo tasks on, and no workspaces left behind."""
    monkeypatch.setattr(app.config, "AUTH_DELAY_SECONDS", 0)
    monkeypatch.setattr(app.config, "SEED_DEMO_TASKS", True)
    yield
    workspaces.clear()
