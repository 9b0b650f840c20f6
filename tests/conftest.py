"""Shared pytest fixtures for GSD hook tests."""

from datetime import datetime, timezone

import pytest


@pytest.fixture
def sample_state():
    """A STATE.md with a status line and an existing Session Continuity section."""
    return """# Project State

## Current Position

Phase: 3 of 5 (API layer)
Plan: 2 of 4
Status: Implementing phase 3
Last activity: 2026-10-18 - finished auth endpoints

## Decisions

- Use SQLite for local cache

## Session Continuity

Last session: 2026-10-17 09:12:44
Stopped at: Finished planning phase 3
Resume file: .planning/phases/03-api/03-02-PLAN.md
"""


@pytest.fixture
def state_without_continuity():
    """A STATE.md that has never been stamped."""
    return """# Project State

## Current Position

Status: Planning phase 1

## Blockers

None yet.
"""


@pytest.fixture
def fixed_now():
    """A fixed instant with sub-second precision, to check truncation."""
    return datetime(2026, 10, 19, 14, 30, 5, 987654, tzinfo=timezone.utc)


@pytest.fixture
def project_dir(tmp_path):
    """A project directory with an empty .planning/ folder."""
    (tmp_path / ".planning").mkdir()
    return tmp_path


@pytest.fixture
def write_state(project_dir):
    """Write STATE.md into the project and return its path."""
    def _write(content):
        path = project_dir / ".planning" / "STATE.md"
        path.write_bytes(content.encode("utf-8"))
        return path
    return _write


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Point the hook config at a temp dir so tests never touch ~/.gsd."""
    from gsd import config as config_module

    config_dir = tmp_path / "gsd-home"
    monkeypatch.setattr(config_module, "default_config_dir", lambda: config_dir)
    return config_dir / "config.json"
