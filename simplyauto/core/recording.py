"""Recording — an ordered sequence of captured input events plus metadata.

A Recording is mutated only by the Recorder session that owns it
(``add_event``) and finalized before it is handed out. Players treat it
as read-only.

Persisted schema (see ``to_dict``)
----------------------------------
Durations and timestamps are integer nanoseconds, zero-valued optional
event fields are omitted, ``createdAt`` is ISO-8601::

    {"version": "1.0", "name": "...", "createdAt": "...", "duration": 1500000000,
     "events": [{"type": 512, "timestamp": 0, "x": 10, "y": 20}, ...],
     "metadata": {"eventCount": 1, "appVersion": "0.1.0"}}
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from simplyauto.core.constants import APP_VERSION, RECORDING_VERSION
from simplyauto.core.events import EventKind, InputEvent

_NS = 1_000_000_000

# createdAt may carry nanosecond precision; datetime stops at µs.
_FRACTION_RE = re.compile(r"(\.\d{6})\d+")


def _to_ns(seconds: float) -> int:
    return round(seconds * _NS)


def _from_ns(value: Any) -> float:
    return int(value or 0) / _NS


def _parse_created(text: str) -> datetime:
    text = _FRACTION_RE.sub(r"\1", text.strip())
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


@dataclass
class RecordingMetadata:
    screen_width:  int = 0
    screen_height: int = 0
    app_version:   str = ""
    event_count:   int = 0

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {}
        if self.screen_width:
            d["screenWidth"] = self.screen_width
        if self.screen_height:
            d["screenHeight"] = self.screen_height
        if self.app_version:
            d["appVersion"] = self.app_version
        if self.event_count:
            d["eventCount"] = self.event_count
        return d

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RecordingMetadata:
        return cls(
            screen_width  = int(data.get("screenWidth", 0)),
            screen_height = int(data.get("screenHeight", 0)),
            app_version   = str(data.get("appVersion", "")),
            event_count   = int(data.get("eventCount", 0)),
        )


@dataclass
class Recording:
    name:        str                  = "Untitled Recording"
    description: str                  = ""
    version:     str                  = RECORDING_VERSION
    created_at:  datetime             = field(default_factory=lambda: datetime.now().astimezone())
    duration:    float                = 0.0
    events:      list[InputEvent]     = field(default_factory=list)
    metadata:    RecordingMetadata    = field(default_factory=RecordingMetadata)

    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self.events)

    @property
    def is_empty(self) -> bool:
        return not self.events

    def add_event(self, event: InputEvent) -> None:
        self.events.append(event)
        if event.timestamp > self.duration:
            self.duration = event.timestamp

    def finalize(self) -> None:
        self.metadata.event_count = len(self.events)
        if not self.metadata.app_version:
            self.metadata.app_version = APP_VERSION

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "version":   self.version,
            "name":      self.name,
            "createdAt": self.created_at.isoformat(),
            "duration":  _to_ns(self.duration),
            "events":    [_event_to_dict(e) for e in self.events],
            "metadata":  self.metadata.to_dict(),
        }
        if self.description:
            d["description"] = self.description
        return d

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Recording:
        """Build a Recording from its persisted form.

        Raises ValueError (or KeyError/TypeError) on malformed input; the
        storage layer wraps those in StorageError. Timestamps must be
        non-decreasing; ``duration`` is raised to the last timestamp.
        """
        events = [_event_from_dict(e) for e in data.get("events") or []]
        for prev, cur in zip(events, events[1:]):
            if cur.timestamp < prev.timestamp:
                raise ValueError("event timestamps must be non-decreasing")
        duration = _from_ns(data.get("duration"))
        if events and events[-1].timestamp > duration:
            duration = events[-1].timestamp

        created = data.get("createdAt")
        return cls(
            name        = str(data.get("name", "")),
            description = str(data.get("description", "")),
            version     = str(data.get("version", RECORDING_VERSION)),
            created_at  = _parse_created(created) if created else datetime.now().astimezone(),
            duration    = duration,
            events      = events,
            metadata    = RecordingMetadata.from_dict(data.get("metadata") or {}),
        )


def _event_to_dict(event: InputEvent) -> dict[str, Any]:
    d: dict[str, Any] = {
        "type":      int(event.kind),
        "timestamp": _to_ns(event.timestamp),
    }
    for key, value in (
        ("x",        event.x),
        ("y",        event.y),
        ("keyCode",  event.key_code),
        ("scanCode", event.scan_code),
        ("delta",    event.delta),
    ):
        if value:
            d[key] = value
    return d


def _event_from_dict(data: dict[str, Any]) -> InputEvent:
    return InputEvent(
        kind      = EventKind(int(data["type"])),
        timestamp = _from_ns(data.get("timestamp")),
        x         = int(data.get("x", 0)),
        y         = int(data.get("y", 0)),
        key_code  = int(data.get("keyCode", 0)),
        scan_code = int(data.get("scanCode", 0)),
        delta     = int(data.get("delta", 0)),
    )
