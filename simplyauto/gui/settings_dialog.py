"""Settings dialog — hotkey bindings and window options."""
from PySide6.QtWidgets import (
    QDialog, QVBoxLayout, QFormLayout,
    QLineEdit, QCheckBox, QDialogButtonBox, QMessageBox,
)
from PySide6.QtCore import Qt

from simplyauto.core.app import App, HotkeyAction
from simplyauto.core.errors import ValidationError
from simplyauto.core.settings_manager import SettingsManager
from simplyauto.gui.styles import DIALOG

_LABELS: dict[HotkeyAction, str] = {
    HotkeyAction.AUTOCLICKER: "Auto clicker:",
    HotkeyAction.RECORD:      "Record:",
    HotkeyAction.PLAYBACK:    "Playback:",
    HotkeyAction.STOP:        "Stop:",
}


class SettingsDialog(QDialog):
    def __init__(self, app: App, settings: SettingsManager, parent=None) -> None:
        super().__init__(parent)
        self._app = app
        self._s   = settings
        self.setWindowTitle("Settings")
        self.setMinimumWidth(360)
        self.setStyleSheet(DIALOG)
        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)
        form = QFormLayout()
        form.setLabelAlignment(Qt.AlignmentFlag.AlignRight)

        bindings = self._app.hotkey_bindings()
        self._edits: dict[HotkeyAction, QLineEdit] = {}
        for action in HotkeyAction:
            edit = QLineEdit(bindings[action])
            self._edits[action] = edit
            form.addRow(_LABELS[action], edit)

        self._on_top = QCheckBox()
        self._on_top.setChecked(self._s.always_on_top)
        form.addRow("Always on top:", self._on_top)
        layout.addLayout(form)

        btns = QDialogButtonBox(
            QDialogButtonBox.StandardButton.Ok | QDialogButtonBox.StandardButton.Cancel
        )
        btns.accepted.connect(self._save)
        btns.rejected.connect(self.reject)
        layout.addWidget(btns)

    def _save(self) -> None:
        wanted = {a: e.text().strip() for a, e in self._edits.items()}
        if not all(wanted.values()):
            QMessageBox.warning(self, "Settings", "Every action needs a key.")
            return
        if len({k.upper() for k in wanted.values()}) != len(wanted):
            QMessageBox.warning(self, "Settings", "Each action needs its own key.")
            return

        # Rebind in an order that never collides with a still-bound old key
        pending = dict(wanted)
        while pending:
            progressed = False
            for action, key in list(pending.items()):
                try:
                    self._app.rebind_hotkey(action, key)
                except ValidationError:
                    continue
                del pending[action]
                progressed = True
            if not progressed:
                # swapped keys: park one action on a placeholder, then retry
                action = next(iter(pending))
                self._app.rebind_hotkey(action, f"__swap_{action.value}")

        self._s.set("WINDOW", "always_on_top", str(self._on_top.isChecked()).lower())
        self.accept()
