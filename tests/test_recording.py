"""Tests for simplyauto.core.events / recording — event types and Recording."""
from datetime import datetime, timezone

import pytest

from simplyauto.core.constants import APP_VERSION
from simplyauto.core.events import (
    EventKind, InputEvent, MouseButton, button_event_kind, button_transition,
)
from simplyauto.core.recording import Recording, RecordingMetadata


class TestEventKind:
    def test_wire_codes(self):
        assert EventKind.MOUSE_MOVE == 0x0200
        assert EventKind.MOUSE_WHEEL == 0x020A
        assert EventKind.KEY_DOWN == 0x0100
        assert EventKind.KEY_UP == 0x0101

    def test_predicates(self):
        assert EventKind.MOUSE_LEFT_DOWN.is_mouse
        assert not EventKind.MOUSE_LEFT_DOWN.is_key
        assert EventKind.KEY_UP.is_key
        assert not EventKind.KEY_UP.is_mouse

    def test_button_transition(self):
        assert button_transition(EventKind.MOUSE_RIGHT_UP) == (MouseButton.RIGHT, False)
        assert button_transition(EventKind.MOUSE_MOVE) is None

    def test_button_event_kind(self):
        assert button_event_kind(MouseButton.MIDDLE, True) is EventKind.MOUSE_MIDDLE_DOWN
        for kind in (EventKind.MOUSE_LEFT_DOWN, EventKind.MOUSE_LEFT_UP):
            assert button_event_kind(*button_transition(kind)) is kind


class TestRecording:
    def test_defaults(self):
        rec = Recording()
        assert rec.name == "Untitled Recording"
        assert rec.is_empty
        assert len(rec) == 0
        assert rec.duration == 0.0

    def test_add_event_extends_duration(self):
        rec = Recording()
        rec.add_event(InputEvent(EventKind.MOUSE_MOVE, timestamp=0.5))
        rec.add_event(InputEvent(EventKind.MOUSE_MOVE, timestamp=1.25))
        assert len(rec) == 2
        assert rec.duration == 1.25

    def test_finalize(self):
        rec = Recording()
        rec.add_event(InputEvent(EventKind.KEY_DOWN, key_code=65))
        rec.finalize()
        assert rec.metadata.event_count == 1
        assert rec.metadata.app_version == APP_VERSION


class TestSerialisation:
    def _sample(self):
        rec = Recording(
            name="demo",
            created_at=datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc),
        )
        rec.add_event(InputEvent(EventKind.MOUSE_MOVE, timestamp=0.0, x=10, y=20))
        rec.add_event(InputEvent(EventKind.MOUSE_WHEEL, timestamp=0.5, delta=-1))
        rec.add_event(InputEvent(EventKind.KEY_DOWN, timestamp=1.5, key_code=65, scan_code=30))
        rec.finalize()
        return rec

    def test_to_dict_shape(self):
        d = self._sample().to_dict()
        assert d["version"] == "1.0"
        assert d["name"] == "demo"
        assert d["duration"] == 1_500_000_000
        assert "description" not in d
        assert d["events"][0] == {"type": 0x0200, "timestamp": 0, "x": 10, "y": 20}
        assert d["events"][1] == {"type": 0x020A, "timestamp": 500_000_000, "delta": -1}
        assert d["events"][2]["keyCode"] == 65
        assert d["metadata"] == {"appVersion": APP_VERSION, "eventCount": 3}

    def test_from_dict_restores_events(self):
        original = self._sample()
        restored = Recording.from_dict(original.to_dict())
        assert restored.events == original.events
        assert restored.duration == pytest.approx(1.5)
        assert restored.created_at == original.created_at
        assert restored.metadata == original.metadata

    def test_from_dict_minimal(self):
        rec = Recording.from_dict({"events": [{"type": 256, "keyCode": 13}]})
        assert rec.events == [InputEvent(EventKind.KEY_DOWN, key_code=13)]
        assert rec.metadata == RecordingMetadata()

    def test_nanosecond_created_at(self):
        rec = Recording.from_dict({"createdAt": "2024-05-01T12:00:00.123456789Z", "events": []})
        assert rec.created_at == datetime(2024, 5, 1, 12, 0, 0, 123456, tzinfo=timezone.utc)

    def test_unknown_event_type_rejected(self):
        with pytest.raises(ValueError):
            Recording.from_dict({"events": [{"type": 9999}]})

    def test_missing_event_type_rejected(self):
        with pytest.raises(KeyError):
            Recording.from_dict({"events": [{"timestamp": 0}]})

    def test_decreasing_timestamps_rejected(self):
        data = {"events": [
            {"type": 0x0200, "timestamp": 500},
            {"type": 0x0200, "timestamp": 100},
        ]}
        with pytest.raises(ValueError, match="non-decreasing"):
            Recording.from_dict(data)

    def test_equal_timestamps_accepted(self):
        data = {"events": [
            {"type": 0x0201, "timestamp": 100},
            {"type": 0x0202, "timestamp": 100},
        ]}
        assert len(Recording.from_dict(data).events) == 2

    def test_duration_raised_to_last_timestamp(self):
        data = {"duration": 1_000_000_000, "events": [
            {"type": 0x0200, "timestamp": 0},
            {"type": 0x0200, "timestamp": 3_000_000_000},
        ]}
        assert Recording.from_dict(data).duration == pytest.approx(3.0)

    def test_longer_stored_duration_kept(self):
        data = {"duration": 5_000_000_000, "events": [{"type": 0x0200, "timestamp": 0}]}
        assert Recording.from_dict(data).duration == pytest.approx(5.0)
