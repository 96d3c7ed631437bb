"""SimplyAuto — Entry point."""
import sys
from pathlib import Path

from PySide6.QtWidgets import QApplication

from simplyauto.core.constants import APP_VERSION
from simplyauto.core.settings_manager import SettingsManager
from simplyauto.gui.main_window import MainWindow

BASE_DIR = Path(__file__).parent


def main() -> None:
    app = QApplication(sys.argv)
    app.setApplicationName("SimplyAuto")
    app.setApplicationVersion(APP_VERSION)
    app.setOrganizationName("SimplyAuto")
    app.setStyle("Fusion")

    settings = SettingsManager(BASE_DIR / "settings.ini")
    window = MainWindow(settings, BASE_DIR)
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
