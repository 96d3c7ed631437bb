"""Main application window."""
from __future__ import annotations

from pathlib import Path

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QDockWidget,
    QLabel, QFileDialog, QMessageBox,
)
from PySide6.QtCore import Qt, QObject, QSettings, QTimer, Signal
from PySide6.QtGui import QAction, QCloseEvent

from simplyauto.core.actuator import PynputActuator
from simplyauto.core.app import App, HotkeyAction
from simplyauto.core.capture import InputCapture
from simplyauto.core.constants import APP_VERSION, ERROR_LOG_NAME, FILE_EXTENSION
from simplyauto.core.error_log import ErrorLog, tee
from simplyauto.core.errors import BusyError, StorageError, ValidationError
from simplyauto.core.hotkey_manager import HotkeyManager
from simplyauto.core.keys import hotkey_code
from simplyauto.core.notifier import AUTOCLICKER, PLAYER, RECORDER, StateEvent
from simplyauto.core.settings_manager import SettingsManager
from simplyauto.gui.autoclicker_panel import AutoClickerPanel
from simplyauto.gui.log_panel import LogPanel
from simplyauto.gui.recorder_panel import RecorderPanel
from simplyauto.gui.settings_dialog import SettingsDialog
from simplyauto.gui.styles import MAIN_WINDOW

_POLL_MS = 50


class _LogBridge(QObject):
    """Carries log_fn calls from engine threads into the GUI thread."""
    message = Signal(str, str)


class MainWindow(QMainWindow):
    def __init__(self, settings: SettingsManager, base_dir: Path) -> None:
        super().__init__()
        self._settings    = settings
        self._records_dir = base_dir / "recordings"

        self._bridge = _LogBridge()
        log_fn = self._bridge.message.emit
        self._error_log: ErrorLog | None = None
        log_error: OSError | None = None
        try:
            self._error_log = ErrorLog(base_dir / ERROR_LOG_NAME)
            log_fn = tee(log_fn, self._error_log)
        except OSError as exc:
            log_error = exc

        self._app = App(
            PynputActuator(),
            InputCapture(),
            settings    = settings,
            key_code_fn = hotkey_code,
            log_fn      = log_fn,
        )
        self._log_fn  = log_fn
        self._hotkeys = HotkeyManager(self)

        self.setWindowTitle("SimplyAuto")
        self.setMinimumSize(520, 560)
        self.setStyleSheet(MAIN_WINDOW)
        if settings.always_on_top:
            self.setWindowFlag(Qt.WindowType.WindowStaysOnTopHint, True)

        self._build_central()
        self._build_log_dock()
        self._build_menu()
        self._build_statusbar()
        self._connect_signals()
        self._restore_geometry()

        self._timer = QTimer(self)
        self._timer.timeout.connect(self._poll)
        self._timer.start(_POLL_MS)

        self._log("INFO", "SimplyAuto ready")
        if log_error is not None:
            QMessageBox.warning(
                self, "SimplyAuto - Warning",
                f"Could not create error log file: {log_error}\n\n"
                "The application does not have write privileges to its directory.",
            )

    # ================================================================
    # UI construction
    # ================================================================

    def _build_central(self) -> None:
        central = QWidget()
        layout = QVBoxLayout(central)
        layout.setContentsMargins(6, 6, 6, 6)

        self._clicker_panel = AutoClickerPanel()
        self._clicker_panel.set_config(self._app.autoclicker.config)
        layout.addWidget(self._clicker_panel)

        self._macro_panel = RecorderPanel()
        self._macro_panel.set_playback_config(self._app.playback_config)
        layout.addWidget(self._macro_panel)
        layout.addStretch()
        self.setCentralWidget(central)

    def _build_log_dock(self) -> None:
        self._log_panel = LogPanel()
        dock = QDockWidget("Log", self)
        dock.setAllowedAreas(Qt.DockWidgetArea.BottomDockWidgetArea)
        dock.setFeatures(
            QDockWidget.DockWidgetFeature.DockWidgetClosable |
            QDockWidget.DockWidgetFeature.DockWidgetMovable
        )
        dock.setWidget(self._log_panel)
        self.addDockWidget(Qt.DockWidgetArea.BottomDockWidgetArea, dock)
        self._log_dock = dock

    def _build_menu(self) -> None:
        mb = self.menuBar()

        file_menu = mb.addMenu("&File")
        a_open = QAction("&Open recording...", self)
        a_save = QAction("&Save recording...", self)
        a_exit = QAction("E&xit", self)
        a_open.triggered.connect(self._do_load)
        a_save.triggered.connect(self._do_save)
        a_exit.triggered.connect(self.close)
        file_menu.addActions([a_open, a_save])
        file_menu.addSeparator()
        file_menu.addAction(a_exit)

        tools_menu = mb.addMenu("&Tools")
        a_settings = QAction("&Settings...", self)
        a_settings.triggered.connect(self._open_settings)
        log_toggle = self._log_dock.toggleViewAction()
        log_toggle.setText("&Log panel")
        tools_menu.addActions([a_settings, log_toggle])

        help_menu = mb.addMenu("&Help")
        a_about = QAction("&About", self)
        a_about.triggered.connect(self._show_about)
        help_menu.addAction(a_about)

    def _build_statusbar(self) -> None:
        self._status_label = QLabel("Ready")
        self.statusBar().addWidget(self._status_label)

    # ================================================================
    # Signal wiring
    # ================================================================

    def _connect_signals(self) -> None:
        self._bridge.message.connect(self._log)

        self._clicker_panel.toggle_requested.connect(self._app.toggle_autoclicker)
        self._clicker_panel.config_edited.connect(self._apply_clicker_config)

        self._macro_panel.record_requested.connect(self._app.toggle_recording)
        self._macro_panel.play_requested.connect(self._app.toggle_playback)
        self._macro_panel.pause_requested.connect(self._app.toggle_pause)
        self._macro_panel.stop_requested.connect(self._app.stop)
        self._macro_panel.save_requested.connect(self._do_save)
        self._macro_panel.load_requested.connect(self._do_load)
        self._macro_panel.speed_changed.connect(self._app.set_playback_speed)
        self._macro_panel.loop_changed.connect(self._app.set_playback_loop)

        self._hotkeys.autoclicker_triggered.connect(self._app.toggle_autoclicker)
        self._hotkeys.record_triggered.connect(self._app.toggle_recording)
        self._hotkeys.playback_triggered.connect(self._app.toggle_playback)
        self._hotkeys.stop_triggered.connect(self._app.stop)
        self._start_hotkeys()

    def _start_hotkeys(self) -> None:
        bindings = self._app.hotkey_bindings()
        for action in self._hotkeys.restart(bindings):
            self._log_fn("WARNING", f"Cannot bind {action.value} hotkey {bindings[action]!r}")
        self._clicker_panel.set_hotkey(bindings[HotkeyAction.AUTOCLICKER])

    # ================================================================
    # Action handlers
    # ================================================================

    def _apply_clicker_config(self) -> None:
        try:
            self._app.set_autoclicker_config(self._clicker_panel.config())
        except ValidationError as exc:
            self._status_label.setText(f"Invalid settings: {exc}")

    def _do_save(self) -> None:
        if not self._app.has_recording:
            self._log_fn("WARNING", "Nothing to save")
            return
        self._records_dir.mkdir(parents=True, exist_ok=True)
        path, _ = QFileDialog.getSaveFileName(
            self, "Save recording", str(self._records_dir),
            f"SimplyAuto recordings (*{FILE_EXTENSION});;All Files (*)",
        )
        if not path:
            return
        try:
            self._app.save_recording(path)
        except StorageError as exc:
            QMessageBox.warning(self, "Save failed", str(exc))

    def _do_load(self) -> None:
        path, _ = QFileDialog.getOpenFileName(
            self, "Open recording", str(self._records_dir),
            f"SimplyAuto recordings (*{FILE_EXTENSION});;All Files (*)",
        )
        if not path:
            return
        try:
            recording = self._app.load_recording(path)
        except (BusyError, StorageError) as exc:
            QMessageBox.warning(self, "Load failed", str(exc))
            return
        self._macro_panel.set_status(f"{recording.name}: {len(recording.events)} events")

    def _open_settings(self) -> None:
        dlg = SettingsDialog(self._app, self._settings, self)
        if dlg.exec() == SettingsDialog.DialogCode.Accepted:
            self._start_hotkeys()
            self.setWindowFlag(Qt.WindowType.WindowStaysOnTopHint, self._settings.always_on_top)
            self.show()

    # ================================================================
    # State polling
    # ================================================================

    def _poll(self) -> None:
        for event in self._app.events.drain():
            self._on_state(event)

        if self._app.autoclicker.is_running:
            self._clicker_panel.set_running(True, self._app.autoclicker.click_count)
        elif self._app.recorder.is_recording:
            self._macro_panel.set_status(
                f"Recording… {self._app.recorder.event_count} events, "
                f"{self._app.recorder.duration:.1f} s")
        elif self._app.player.is_playing:
            current, total, loop = self._app.player.progress()
            self._macro_panel.set_status(f"Playing {current} / {total} (loop {loop})")

    def _on_state(self, event: StateEvent) -> None:
        if event.kind == AUTOCLICKER:
            self._clicker_panel.set_running(event.running, event.count)
            self._macro_panel.set_state("busy" if event.running else "idle")
            self._status_label.setText("Clicking…" if event.running else "Ready")
        elif event.kind == RECORDER:
            self._clicker_panel.set_enabled_toggle(not event.running)
            self._macro_panel.set_state("recording" if event.running else "idle")
            if not event.running:
                self._macro_panel.set_status(f"Recorded {event.count} events")
            self._status_label.setText("⏺ Recording…" if event.running else "Ready")
        elif event.kind == PLAYER:
            self._clicker_panel.set_enabled_toggle(not event.running)
            state = "idle"
            if event.running:
                state = "paused" if event.paused else "playing"
            self._macro_panel.set_state(state)
            self._status_label.setText({
                "idle":    "Ready",
                "playing": "▶ Playing…",
                "paused":  "⏸ Paused",
            }[state])

    # ================================================================
    # Helpers
    # ================================================================

    def _log(self, level: str, message: str) -> None:
        self._log_panel.log(level, message)

    def _show_about(self) -> None:
        QMessageBox.about(
            self, "About",
            f"<b>SimplyAuto</b> v{APP_VERSION}<br>"
            "Python 3 + PySide6 + pynput<br><br>"
            "Auto clicker and macro recorder/player",
        )

    def _restore_geometry(self) -> None:
        qs = QSettings("SimplyAuto", "MainWindow")
        geom = qs.value("geometry")
        if geom:
            self.restoreGeometry(geom)
        else:
            self.resize(560, 720)

    def closeEvent(self, event: QCloseEvent) -> None:
        self._timer.stop()
        self._hotkeys.stop()
        self._app.cleanup()
        if self._error_log is not None:
            self._error_log.close()

        qs = QSettings("SimplyAuto", "MainWindow")
        qs.setValue("geometry", self.saveGeometry())
        event.accept()
