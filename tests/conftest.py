"""
Pytest configuration and fixtures for report-freshness tests.
"""

import sys
from pathlib import Path

# Ensure project root is in sys.path for 'freshness' imports
# This must happen before any imports from freshness
_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

import pytest


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: marks integration tests")
    config.addinivalue_line("markers", "tui: marks TUI tests")


@pytest.fixture
def temp_state_dir(tmp_path: Path, monkeypatch) -> Path:
    """Create and return a temporary state directory.

    Sets REPORT_VIEWER_STATE, points settings at a file that does not exist,
    and resets the debug logger so it picks up the new paths.
    """
    state_dir = tmp_path / ".local" / "state" / "report-viewer"
    state_dir.mkdir(parents=True)
    monkeypatch.setenv("REPORT_VIEWER_STATE", str(state_dir))
    monkeypatch.setenv("REPORT_VIEWER_SETTINGS", str(tmp_path / "no-settings.json"))
    monkeypatch.delenv("REPORT_VIEWER_DEBUG", raising=False)

    from freshness.debug_logger import reset_logger
    reset_logger()

    return state_dir


@pytest.fixture(autouse=True)
def isolate_state_dir(temp_state_dir: Path):
    """Autouse fixture that keeps every test away from the real state dir."""
    yield temp_state_dir

    from freshness.debug_logger import reset_logger
    reset_logger()


@pytest.fixture
def debug_log(temp_state_dir: Path) -> Path:
    """Path of the debug log inside the isolated state dir."""
    return temp_state_dir / "debug.log"
