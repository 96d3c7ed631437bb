"""Auto-clicker panel: interval, jitter, button, repeat and position controls."""
from __future__ import annotations

from PySide6.QtWidgets import (
    QGroupBox, QVBoxLayout, QHBoxLayout, QFormLayout,
    QSpinBox, QComboBox, QCheckBox, QPushButton, QLabel, QWidget,
)
from PySide6.QtCore import Signal

from simplyauto.core.config import AutoClickerConfig, PositionMode, RepeatMode, interval_from_parts
from simplyauto.core.events import ClickType, MouseButton
from simplyauto.gui.styles import BUTTON, GROUP_BOX


def _spin(maximum: int, suffix: str = "", minimum: int = 0) -> QSpinBox:
    s = QSpinBox(minimum=minimum, maximum=maximum)
    if suffix:
        s.setSuffix(suffix)
    return s


def _combo(enum_cls) -> QComboBox:
    c = QComboBox()
    for member in enum_cls:
        c.addItem(member.value.replace("_", " ").capitalize(), member)
    return c


class AutoClickerPanel(QGroupBox):
    """Edits an AutoClickerConfig and shows the running state.

    Signals
    -------
    toggle_requested : start/stop button pressed
    config_edited    : any field changed
    """

    toggle_requested = Signal()
    config_edited    = Signal()

    def __init__(self) -> None:
        super().__init__("Auto Clicker")
        self._hotkey = "F6"
        self.setStyleSheet(GROUP_BOX)
        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)
        form = QFormLayout()

        interval_row = QWidget()
        row = QHBoxLayout(interval_row)
        row.setContentsMargins(0, 0, 0, 0)
        self._hours = _spin(23, " h")
        self._mins  = _spin(59, " m")
        self._secs  = _spin(59, " s")
        self._ms    = _spin(999, " ms")
        for w in (self._hours, self._mins, self._secs, self._ms):
            row.addWidget(w)
        form.addRow("Interval:", interval_row)

        jitter_row = QWidget()
        row = QHBoxLayout(jitter_row)
        row.setContentsMargins(0, 0, 0, 0)
        self._random = QCheckBox("Random ±")
        self._jitter = _spin(60_000, " ms")
        row.addWidget(self._random)
        row.addWidget(self._jitter)
        form.addRow("Offset:", jitter_row)

        self._button     = _combo(MouseButton)
        self._click_type = _combo(ClickType)
        form.addRow("Button:", self._button)
        form.addRow("Click:", self._click_type)

        repeat_row = QWidget()
        row = QHBoxLayout(repeat_row)
        row.setContentsMargins(0, 0, 0, 0)
        self._repeat_mode  = _combo(RepeatMode)
        self._repeat_count = _spin(1_000_000, " times", minimum=1)
        row.addWidget(self._repeat_mode)
        row.addWidget(self._repeat_count)
        form.addRow("Repeat:", repeat_row)

        pos_row = QWidget()
        row = QHBoxLayout(pos_row)
        row.setContentsMargins(0, 0, 0, 0)
        self._position = _combo(PositionMode)
        self._fixed_x  = _spin(100_000, minimum=-100_000)
        self._fixed_y  = _spin(100_000, minimum=-100_000)
        row.addWidget(self._position)
        row.addWidget(QLabel("X"))
        row.addWidget(self._fixed_x)
        row.addWidget(QLabel("Y"))
        row.addWidget(self._fixed_y)
        form.addRow("Position:", pos_row)
        layout.addLayout(form)

        self._toggle = QPushButton("Start (F6)")
        self._toggle.setStyleSheet(BUTTON.format(color="#4EC9B0"))
        self._toggle.clicked.connect(self.toggle_requested)
        self._count_label = QLabel("Clicks: 0")
        bottom = QHBoxLayout()
        bottom.addWidget(self._toggle)
        bottom.addWidget(self._count_label)
        layout.addLayout(bottom)

        for spin in (self._hours, self._mins, self._secs, self._ms, self._jitter,
                     self._repeat_count, self._fixed_x, self._fixed_y):
            spin.valueChanged.connect(self._on_edited)
        for combo in (self._button, self._click_type, self._repeat_mode, self._position):
            combo.currentIndexChanged.connect(self._on_edited)
        self._random.toggled.connect(self._on_edited)

    def _on_edited(self, *_) -> None:
        self._sync_enabled()
        self.config_edited.emit()

    def _sync_enabled(self) -> None:
        self._jitter.setEnabled(self._random.isChecked())
        self._repeat_count.setEnabled(self._repeat_mode.currentData() is RepeatMode.COUNT)
        fixed = self._position.currentData() is PositionMode.FIXED
        self._fixed_x.setEnabled(fixed)
        self._fixed_y.setEnabled(fixed)

    # ------------------------------------------------------------------

    def config(self) -> AutoClickerConfig:
        return AutoClickerConfig(
            interval_ms   = interval_from_parts(self._hours.value(), self._mins.value(),
                                                self._secs.value(), self._ms.value()),
            jitter_ms     = self._jitter.value() if self._random.isChecked() else 0,
            button        = self._button.currentData(),
            click_type    = self._click_type.currentData(),
            repeat_mode   = self._repeat_mode.currentData(),
            repeat_count  = self._repeat_count.value(),
            position_mode = self._position.currentData(),
            fixed_x       = self._fixed_x.value(),
            fixed_y       = self._fixed_y.value(),
        )

    def set_config(self, cfg: AutoClickerConfig) -> None:
        hours, rest = divmod(cfg.interval_ms, 3_600_000)
        mins,  rest = divmod(rest, 60_000)
        secs,  ms   = divmod(rest, 1000)
        widgets = (self._hours, self._mins, self._secs, self._ms, self._jitter, self._random,
                   self._button, self._click_type, self._repeat_mode, self._repeat_count,
                   self._position, self._fixed_x, self._fixed_y)
        for w in widgets:
            w.blockSignals(True)
        self._hours.setValue(hours)
        self._mins.setValue(mins)
        self._secs.setValue(secs)
        self._ms.setValue(ms)
        self._random.setChecked(cfg.jitter_ms > 0)
        self._jitter.setValue(cfg.jitter_ms)
        self._button.setCurrentIndex(self._button.findData(cfg.button))
        self._click_type.setCurrentIndex(self._click_type.findData(cfg.click_type))
        self._repeat_mode.setCurrentIndex(self._repeat_mode.findData(cfg.repeat_mode))
        self._repeat_count.setValue(cfg.repeat_count)
        self._position.setCurrentIndex(self._position.findData(cfg.position_mode))
        self._fixed_x.setValue(cfg.fixed_x)
        self._fixed_y.setValue(cfg.fixed_y)
        for w in widgets:
            w.blockSignals(False)
        self._sync_enabled()

    def set_hotkey(self, key: str) -> None:
        self._hotkey = key
        self._toggle.setText(f"Start ({key})")

    def set_running(self, running: bool, count: int) -> None:
        key = self._hotkey
        self._toggle.setText(f"Stop ({key})" if running else f"Start ({key})")
        self._count_label.setText(f"Clicks: {count}")
        for w in self.findChildren(QSpinBox) + self.findChildren(QComboBox) + [self._random]:
            w.setEnabled(not running)
        if not running:
            self._sync_enabled()

    def set_enabled_toggle(self, enabled: bool) -> None:
        self._toggle.setEnabled(enabled)
