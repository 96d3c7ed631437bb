"""JSON persistence for recordings (``*.simplyauto`` files)."""
from __future__ import annotations

import json
from dataclasses import replace
from pathlib import Path
from typing import Union

from simplyauto.core.constants import FILE_EXTENSION
from simplyauto.core.errors import StorageError
from simplyauto.core.recording import Recording

PathLike = Union[str, Path]


class JSONStorage:
    extension = FILE_EXTENSION

    def save(self, recording: Recording, path: PathLike) -> Path:
        """Write ``recording`` as indented JSON; return the path written.

        A path without a suffix gets ``.simplyauto`` appended.
        """
        path = Path(path)
        if not path.suffix:
            path = path.with_suffix(FILE_EXTENSION)

        # finalize a copy: the live Recording may be in use by the Player
        snapshot = replace(recording, metadata=replace(recording.metadata))
        snapshot.finalize()
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            text = json.dumps(snapshot.to_dict(), indent=2, ensure_ascii=False)
            path.write_text(text, encoding="utf-8")
        except (OSError, TypeError, ValueError) as exc:
            raise StorageError(f"failed to save recording to {path}: {exc}") from exc
        return path

    def load(self, path: PathLike) -> Recording:
        """Read a recording; a bare path falls back to ``<path>.simplyauto``."""
        path = Path(path)
        if not path.exists() and not path.suffix:
            path = path.with_suffix(FILE_EXTENSION)

        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise StorageError(f"failed to read {path}: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise StorageError(f"failed to parse {path}: {exc}") from exc

        if not isinstance(data, dict):
            raise StorageError(f"failed to parse {path}: not a recording object")
        try:
            return Recording.from_dict(data)
        except (KeyError, TypeError, ValueError) as exc:
            raise StorageError(f"malformed recording {path}: {exc}") from exc
