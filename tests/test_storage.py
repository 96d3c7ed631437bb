"""Tests for simplyauto.core.storage — JSONStorage."""
import json

import pytest

from simplyauto.core.errors import StorageError
from simplyauto.core.events import EventKind, InputEvent
from simplyauto.core.recording import Recording
from simplyauto.core.storage import JSONStorage


def _recording():
    rec = Recording("saved")
    rec.add_event(InputEvent(EventKind.MOUSE_LEFT_DOWN, timestamp=0.0, x=5, y=6))
    rec.add_event(InputEvent(EventKind.MOUSE_LEFT_UP, timestamp=0.08, x=5, y=6))
    return rec


class TestSave:
    def test_appends_extension(self, tmp_path):
        written = JSONStorage().save(_recording(), tmp_path / "macro")
        assert written.name == "macro.simplyauto"
        assert written.exists()

    def test_keeps_explicit_suffix(self, tmp_path):
        written = JSONStorage().save(_recording(), tmp_path / "macro.json")
        assert written.suffix == ".json"

    def test_creates_parent_dirs(self, tmp_path):
        written = JSONStorage().save(_recording(), tmp_path / "a" / "b" / "m.simplyauto")
        assert written.exists()

    def test_writes_indented_json(self, tmp_path):
        written = JSONStorage().save(_recording(), tmp_path / "m")
        text = written.read_text(encoding="utf-8")
        assert "\n  " in text
        data = json.loads(text)
        assert data["metadata"]["eventCount"] == 2
        assert data["events"][1]["timestamp"] == 80_000_000

    def test_unwritable_path(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("x")
        with pytest.raises(StorageError):
            JSONStorage().save(_recording(), blocker / "m.simplyauto")

    def test_live_recording_not_finalized(self, tmp_path):
        rec = _recording()
        written = JSONStorage().save(rec, tmp_path / "m")
        assert rec.metadata.event_count == 0
        assert rec.metadata.app_version == ""
        data = json.loads(written.read_text(encoding="utf-8"))
        assert data["metadata"]["eventCount"] == 2


class TestLoad:
    def test_round_trip(self, tmp_path):
        storage = JSONStorage()
        original = _recording()
        written = storage.save(original, tmp_path / "m")
        loaded = storage.load(written)
        assert loaded.name == "saved"
        assert loaded.events == original.events

    def test_bare_path_falls_back_to_extension(self, tmp_path):
        storage = JSONStorage()
        storage.save(_recording(), tmp_path / "m")
        assert len(storage.load(tmp_path / "m")) == 2

    def test_missing_file(self, tmp_path):
        with pytest.raises(StorageError, match="failed to read"):
            JSONStorage().load(tmp_path / "nope.simplyauto")

    def test_invalid_json(self, tmp_path):
        p = tmp_path / "bad.simplyauto"
        p.write_text("{not json", encoding="utf-8")
        with pytest.raises(StorageError, match="failed to parse"):
            JSONStorage().load(p)

    def test_not_an_object(self, tmp_path):
        p = tmp_path / "list.simplyauto"
        p.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(StorageError):
            JSONStorage().load(p)

    def test_malformed_event(self, tmp_path):
        p = tmp_path / "bad_event.simplyauto"
        p.write_text(json.dumps({"events": [{"type": 1}]}), encoding="utf-8")
        with pytest.raises(StorageError, match="malformed"):
            JSONStorage().load(p)

    def test_out_of_order_events(self, tmp_path):
        p = tmp_path / "unsorted.simplyauto"
        p.write_text(json.dumps({"events": [
            {"type": 0x0200, "timestamp": 2_000_000},
            {"type": 0x0200, "timestamp": 1_000_000},
        ]}), encoding="utf-8")
        with pytest.raises(StorageError, match="malformed"):
            JSONStorage().load(p)
