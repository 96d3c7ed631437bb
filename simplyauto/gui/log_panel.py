"""Log dock — timestamped engine messages with a minimum-level filter.

Entries arrive through ``log(level, message)`` (the engine's ``log_fn``,
bridged into the GUI thread). The panel keeps the most recent
``_MAX_ENTRIES`` of them so changing the filter can re-render history.
"""
from collections import deque
from datetime import datetime

from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout,
    QPlainTextEdit, QPushButton, QLabel, QComboBox,
)
from PySide6.QtGui import QColor, QTextCharFormat, QTextCursor, QFont

_MAX_ENTRIES = 2000

# level → (rank, colour)
_LEVELS: dict[str, tuple[int, str]] = {
    "DEBUG":   (0, "#858585"),
    "INFO":    (1, "#D4D4D4"),
    "SUCCESS": (1, "#4EC9B0"),
    "WARNING": (2, "#CE9178"),
    "ERROR":   (3, "#F44747"),
}
_FILTERS = ("DEBUG", "INFO", "WARNING", "ERROR")


class LogPanel(QWidget):
    def __init__(self, show_debug: bool = False) -> None:
        super().__init__()
        self._entries: deque[tuple[str, str, str]] = deque(maxlen=_MAX_ENTRIES)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(4, 2, 4, 4)
        layout.setSpacing(2)

        bar = QHBoxLayout()
        bar.addWidget(QLabel("Show:"))
        self._filter = QComboBox()
        self._filter.addItems(list(_FILTERS))
        self._filter.setCurrentText("DEBUG" if show_debug else "INFO")
        self._filter.currentTextChanged.connect(self._render)
        bar.addWidget(self._filter)
        bar.addStretch()
        clear_btn = QPushButton("Clear")
        clear_btn.setFixedWidth(56)
        clear_btn.clicked.connect(self.clear)
        bar.addWidget(clear_btn)
        layout.addLayout(bar)

        self._view = QPlainTextEdit()
        self._view.setReadOnly(True)
        self._view.setMaximumBlockCount(_MAX_ENTRIES)
        font = QFont("Consolas", 9)
        font.setStyleHint(QFont.StyleHint.Monospace)
        self._view.setFont(font)
        self._view.setStyleSheet(
            "QPlainTextEdit { background:#0C0C0C; color:#CCCCCC; border:none; }"
        )
        layout.addWidget(self._view)

    def log(self, level: str, message: str) -> None:
        level = level.upper()
        entry = (datetime.now().strftime("%H:%M:%S.%f")[:-3], level, message)
        self._entries.append(entry)
        if self._visible(level):
            self._append(*entry)

    def clear(self) -> None:
        self._entries.clear()
        self._view.clear()

    # ------------------------------------------------------------------

    def _visible(self, level: str) -> bool:
        floor = _LEVELS[self._filter.currentText()][0]
        return _LEVELS.get(level, (1, ""))[0] >= floor

    def _render(self, *_) -> None:
        self._view.clear()
        for entry in self._entries:
            if self._visible(entry[1]):
                self._append(*entry)

    def _append(self, ts: str, level: str, message: str) -> None:
        cursor = self._view.textCursor()
        cursor.movePosition(QTextCursor.MoveOperation.End)

        fmt = QTextCharFormat()
        fmt.setForeground(QColor("#858585"))
        cursor.insertText(f"[{ts}] ", fmt)
        fmt.setForeground(QColor(_LEVELS.get(level, (1, "#D4D4D4"))[1]))
        cursor.insertText(f"{level:<7} {message}\n", fmt)

        self._view.setTextCursor(cursor)
        self._view.ensureCursorVisible()
