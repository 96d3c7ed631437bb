"""Error log file — WARNING and ERROR engine messages appended to disk.

An ``ErrorLog`` is itself a ``log_fn``; ``tee`` combines it with the
GUI's log so both see every message.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

from simplyauto.core.interfaces import LogFn

_LEVELS = {"WARNING": logging.WARNING, "ERROR": logging.ERROR}


class ErrorLog:
    """Appends WARNING/ERROR messages to ``path``, creating it if missing.

    Raises OSError when the file cannot be opened for appending.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)
        self._handler = logging.FileHandler(self.path, mode="a", encoding="utf-8")
        self._handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(message)s", datefmt="%Y/%m/%d %H:%M:%S"))
        # private logger: never propagates to the root logger's handlers
        self._logger = logging.Logger(f"simplyauto.errors:{self.path}", logging.WARNING)
        self._logger.addHandler(self._handler)

    def __call__(self, level: str, message: str) -> None:
        lvl = _LEVELS.get(level.upper())
        if lvl is not None:
            self._logger.log(lvl, message)

    def close(self) -> None:
        self._logger.removeHandler(self._handler)
        self._handler.close()


def tee(*fns: LogFn) -> LogFn:
    def log(level: str, message: str) -> None:
        for fn in fns:
            fn(level, message)
    return log
