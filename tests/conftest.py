import sys
from pathlib import Path
from typing import List, Tuple

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1] / "src"))

from gestmaint.api_client import ApiClient
from gestmaint.notifications import Notifier

BASE_URL = "http://api.test/api"
JSON = {"Content-Type": "application/json"}


def url(path: str) -> str:
    return f"{BASE_URL}{path}"


def pytest_addoption(parser):
    """
    Ajoute le flag --run-integration pour exécuter les tests live.
    Usage :
      GESTMAINT_API_URL=http://localhost:8080/api pytest --run-integration
    Sans ce flag, les tests marqués @pytest.mark.integration seront ignorés.
    """
    parser.addoption(
        "--run-integration",
        action="store_true",
        default=False,
        help="run tests that hit the real backend",
    )


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "integration: mark test as hitting external APIs"
    )


def pytest_collection_modifyitems(config, items):
    """Skip integration tests unless --run-integration is passed."""
    if config.getoption("--run-integration"):
        return
    skip_live = pytest.mark.skip(reason="integration tests skipped (add --run-integration)")
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip_live)


# ---------------------------------------------------------------------------
# Notifier mock
# ---------------------------------------------------------------------------


class RecordingNotifier(Notifier):
    """Garde la trace de chaque notification ; confirmations scriptées."""

    def __init__(self, confirm_answer: bool = True):
        self.confirm_answer = confirm_answer
        self.events: List[Tuple[str, str, str]] = []
        self.loading = False

    def show_success(self, title, text=""):
        self.events.append(("success", title, text))

    def show_error(self, title, text=""):
        self.events.append(("error", title, text))

    def show_warning(self, title, text=""):
        self.events.append(("warning", title, text))

    def confirm(self, title, text, confirm_text="Oui, supprimer", cancel_text="Annuler"):
        self.events.append(("confirm", title, text))
        return self.confirm_answer

    def show_loading(self, title="Chargement...", text="Veuillez patienter"):
        self.loading = True
        self.events.append(("loading", title, text))

    def close_loading(self):
        self.loading = False

    def kinds(self):
        return [e[0] for e in self.events]

    def last(self, kind=None):
        matching = [e for e in self.events if kind is None or e[0] == kind]
        return matching[-1] if matching else None


@pytest.fixture
def api():
    return ApiClient(BASE_URL)


@pytest.fixture
def notifier():
    return RecordingNotifier()
