"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from statuspage.config import Settings
from statuspage.monitor.store import StatusStore

INDEX_HTML = "<!doctype html><html><body><h1>status</h1></body></html>\n"


@pytest.fixture
def index_file(tmp_path: Path) -> Path:
    path = tmp_path / "index.html"
    path.write_text(INDEX_HTML, encoding="utf-8")
    return path


@pytest.fixture
def settings(tmp_path: Path, index_file: Path) -> Settings:
    """Settings pointing every file path into a temp directory."""
    return Settings(
        status_dir=str(tmp_path / "status"),
        index_file=str(index_file),
        metrics_upstream_url="http://metrics.test/metrics",
        check_interval=30,
        probe_timeout=10,
    )


@pytest.fixture
def store(settings: Settings) -> StatusStore:
    return StatusStore(settings.status_dir)
