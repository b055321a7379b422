# worker/tests/conftest.py
from __future__ import annotations

# Import/bootstrap so "import worker.app" works when running pytest from anywhere
import os
import sys
import tempfile
from pathlib import Path
import pytest

TESTS_DIR = Path(__file__).resolve().parent  # .../worker/tests
WORKER_DIR = TESTS_DIR.parent  # .../worker
REPO_ROOT = WORKER_DIR.parent  # repo root

if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

# Deterministic defaults; settings are read once at import time.
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="jsonsampler-logs-"))
os.environ.setdefault("DEFAULT_LIST_LENGTH", "5")
os.environ.setdefault("MAX_DISPLAY_LINES", "4096")
os.environ["WORKER_AUTH_TOKEN"] = ""


@pytest.fixture
def client():
    from fastapi.testclient import TestClient
    from worker.app.main import app

    with TestClient(app) as c:
        yield c


@pytest.fixture
def auth_token(monkeypatch):
    from worker.app.config import settings

    monkeypatch.setattr(settings, "WORKER_AUTH_TOKEN", "s3cret")
    return "s3cret"
