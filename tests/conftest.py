# tests/conftest.py

"""Shared pytest fixtures for all tracker tests."""

import logging
from collections.abc import Generator
from pathlib import Path

import pytest

from src.config.settings import Settings


@pytest.fixture(autouse=True)
def isolated_paths(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[Path, None, None]:
    """Point every on-disk Settings path at a per-test temp directory."""
    data_dir = tmp_path / "data"
    monkeypatch.setattr(Settings, "DATA_DIR", data_dir)
    monkeypatch.setattr(Settings, "STATE_FILE", data_dir / "stock_data.json")
    monkeypatch.setattr(Settings, "COOKIE_FILE", data_dir / "cookies.json")
    monkeypatch.setattr(Settings, "LOGS_DIR", tmp_path / "logs")
    yield tmp_path

    root_logger = logging.getLogger("restock_tracker")
    for handler in list(root_logger.handlers):
        handler.close()
        root_logger.removeHandler(handler)
