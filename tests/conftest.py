# tests/conftest.py
# Keep structured logs off the console and out of the user's log directory.

from __future__ import annotations

import dataclasses
from pathlib import Path as NativePath

import pytest

from hellobase import config


@pytest.fixture(autouse=True)
def quiet_settings(monkeypatch):
    """Run every test with console logging off and no log directory."""
    quiet = dataclasses.replace(
        config.settings, log_dir=None, log_console=False, log_max_size_mb=None, log_max_files=5
    )
    monkeypatch.setattr(config, "settings", quiet)
    return quiet


@pytest.fixture
def log_dir(monkeypatch, tmp_path: NativePath) -> NativePath:
    """Send structured logs to a temporary directory and return it."""
    logs = tmp_path / "logs"
    monkeypatch.setattr(config, "settings", dataclasses.replace(config.settings, log_dir=str(logs)))
    return logs
