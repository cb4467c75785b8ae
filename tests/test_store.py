"""Tests for the file-backed StatusStore."""

from __future__ import annotations

import errno
from pathlib import Path

import pytest

from statuspage.monitor.records import SystemRecord, SystemStatus
from statuspage.monitor.store import StatusPersistError, StatusStore


class TestStatusStore:
    def test_creates_directory(self, tmp_path: Path) -> None:
        StatusStore(tmp_path / "nested" / "status")
        assert (tmp_path / "nested" / "status").is_dir()

    def test_path_for(self, store: StatusStore) -> None:
        assert store.path_for("api") == store.directory / "api.json"

    def test_persist_writes_exact_json(self, store: StatusStore) -> None:
        record = SystemRecord(id="api", status=SystemStatus.GREEN, created=100, updated=100)
        path = store.persist(record)

        assert path == store.path_for("api")
        assert path.read_bytes() == record.to_json()

    def test_persist_overwrites_previous_content(self, store: StatusStore) -> None:
        record = SystemRecord.new("website").apply_observation(SystemStatus.GREEN, 100)
        store.persist(record)
        record.apply_observation(SystemStatus.RED, 130)
        store.persist(record)

        assert store.path_for("website").read_bytes() == (
            b'{"id":"website","status":"Red","updated":130,"created":130}'
        )

    def test_no_temp_files_left_behind(self, store: StatusStore) -> None:
        for t in range(3):
            store.persist(SystemRecord.new("api").apply_observation(SystemStatus.GREEN, 100 + t))
        assert sorted(p.name for p in store.directory.iterdir()) == ["api.json"]

    def test_one_file_per_target(self, store: StatusStore) -> None:
        store.persist(SystemRecord.new("api"))
        store.persist(SystemRecord.new("website"))
        assert sorted(p.name for p in store.directory.iterdir()) == ["api.json", "website.json"]

    def test_load_round_trip(self, store: StatusStore) -> None:
        record = SystemRecord(id="api", status=SystemStatus.RED, created=130, updated=160)
        store.persist(record)
        assert store.load("api") == record

    def test_load_missing(self, store: StatusStore) -> None:
        assert store.load("nope") is None

    def test_persist_failure_propagates(self, tmp_path: Path) -> None:
        store = StatusStore(tmp_path / "status")
        store.directory.rmdir()
        (tmp_path / "status").write_text("not a directory")

        with pytest.raises(StatusPersistError) as exc_info:
            store.persist(SystemRecord.new("api"))
        assert isinstance(exc_info.value, OSError)
        assert exc_info.value.errno in (errno.ENOTDIR, errno.ENOENT)
