"""Macro panel: record / play / pause / stop buttons and playback options."""
from __future__ import annotations

from PySide6.QtWidgets import (
    QGroupBox, QVBoxLayout, QHBoxLayout, QGridLayout,
    QPushButton, QComboBox, QSpinBox, QLabel,
)
from PySide6.QtCore import Signal

from simplyauto.core.config import LoopMode, PlaybackConfig
from simplyauto.core.constants import SPEED_CHOICES
from simplyauto.gui.styles import BUTTON, GROUP_BOX


def _btn(label: str, color: str = "#CCCCCC") -> QPushButton:
    b = QPushButton(label)
    b.setStyleSheet(BUTTON.format(color=color))
    return b


class RecorderPanel(QGroupBox):
    """Controls for the recorder and the player.

    Signals
    -------
    record_requested, play_requested, pause_requested, stop_requested,
    save_requested, load_requested
    speed_changed(float)
    loop_changed(object, int)   : (LoopMode, loop count)
    """

    record_requested = Signal()
    play_requested   = Signal()
    pause_requested  = Signal()
    stop_requested   = Signal()
    save_requested   = Signal()
    load_requested   = Signal()
    speed_changed    = Signal(float)
    loop_changed     = Signal(object, int)

    def __init__(self) -> None:
        super().__init__("Macro")
        self.setStyleSheet(GROUP_BOX)
        self._build_ui()
        self.set_state("idle")

    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)

        grid = QGridLayout()
        grid.setSpacing(4)
        self._rec   = _btn("⏺  Record", "#F48771")
        self._play  = _btn("▶  Play",   "#4EC9B0")
        self._pause = _btn("⏸  Pause")
        self._stop  = _btn("⏹  Stop")
        self._save  = _btn("💾  Save")
        self._load  = _btn("📂  Load")
        grid.addWidget(self._rec,   0, 0)
        grid.addWidget(self._play,  0, 1)
        grid.addWidget(self._pause, 0, 2)
        grid.addWidget(self._stop,  1, 0)
        grid.addWidget(self._save,  1, 1)
        grid.addWidget(self._load,  1, 2)
        layout.addLayout(grid)

        opts = QHBoxLayout()
        self._speed = QComboBox()
        for s in SPEED_CHOICES:
            self._speed.addItem(f"{s:g}x", s)
        self._speed.setCurrentIndex(self._speed.findData(1.0))
        self._loop_mode = QComboBox()
        for mode in LoopMode:
            self._loop_mode.addItem(mode.value.capitalize(), mode)
        self._loop_count = QSpinBox(minimum=1, maximum=100_000)
        opts.addWidget(QLabel("Speed:"))
        opts.addWidget(self._speed)
        opts.addWidget(QLabel("Loop:"))
        opts.addWidget(self._loop_mode)
        opts.addWidget(self._loop_count)
        layout.addLayout(opts)

        self._status = QLabel("No recording")
        layout.addWidget(self._status)

        self._rec.clicked.connect(self.record_requested)
        self._play.clicked.connect(self.play_requested)
        self._pause.clicked.connect(self.pause_requested)
        self._stop.clicked.connect(self.stop_requested)
        self._save.clicked.connect(self.save_requested)
        self._load.clicked.connect(self.load_requested)
        self._speed.currentIndexChanged.connect(
            lambda _: self.speed_changed.emit(float(self._speed.currentData())))
        self._loop_mode.currentIndexChanged.connect(self._emit_loop)
        self._loop_count.valueChanged.connect(self._emit_loop)

    def _emit_loop(self, *_) -> None:
        mode = self._loop_mode.currentData()
        self._loop_count.setEnabled(mode is LoopMode.COUNT)
        self.loop_changed.emit(mode, self._loop_count.value())

    # ------------------------------------------------------------------

    def set_playback_config(self, cfg: PlaybackConfig) -> None:
        for w in (self._speed, self._loop_mode, self._loop_count):
            w.blockSignals(True)
        idx = self._speed.findData(cfg.speed)
        if idx < 0:
            self._speed.addItem(f"{cfg.speed:g}x", cfg.speed)
            idx = self._speed.count() - 1
        self._speed.setCurrentIndex(idx)
        self._loop_mode.setCurrentIndex(self._loop_mode.findData(cfg.loop_mode))
        self._loop_count.setValue(cfg.loop_count)
        self._loop_count.setEnabled(cfg.loop_mode is LoopMode.COUNT)
        for w in (self._speed, self._loop_mode, self._loop_count):
            w.blockSignals(False)

    def set_state(self, state: str) -> None:
        """Enable/disable buttons for 'idle' | 'recording' | 'playing' | 'paused' | 'busy'."""
        idle      = (state == "idle")
        recording = (state == "recording")
        playing   = state in ("playing", "paused")

        self._rec.setEnabled(idle or recording)
        self._play.setEnabled(idle)
        self._pause.setEnabled(playing)
        self._pause.setText("▶  Resume" if state == "paused" else "⏸  Pause")
        self._stop.setEnabled(recording or playing)
        self._save.setEnabled(idle)
        self._load.setEnabled(idle)
        for w in (self._speed, self._loop_mode, self._loop_count):
            w.setEnabled(idle)
        if idle:
            self._loop_count.setEnabled(self._loop_mode.currentData() is LoopMode.COUNT)

    def set_status(self, text: str) -> None:
        self._status.setText(text)
