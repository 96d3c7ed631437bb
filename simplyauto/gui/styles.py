"""Dark-theme stylesheets shared across the application."""

MAIN_WINDOW = """
    QMainWindow           { background: #1E1E1E; }
    QWidget               { color: #CCCCCC; }
    QMenuBar              { background: #3C3C3C; color: #CCCCCC; }
    QMenuBar::item        { padding: 4px 10px; }
    QMenuBar::item:selected { background: #094771; }
    QMenu                 { background: #252526; color: #CCCCCC; border: 1px solid #454545; }
    QMenu::item           { padding: 4px 20px; }
    QMenu::item:selected  { background: #094771; }
    QDockWidget::title    {
        background: #333333; color: #CCCCCC;
        padding: 4px 6px; font-size: 12px;
    }
    QStatusBar            { background: #007ACC; color: #FFFFFF; font-size: 12px; }
    QStatusBar::item      { border: none; }
"""

GROUP_BOX = """
    QGroupBox {
        color: #AAAAAA; border: 1px solid #3C3C3C;
        border-radius: 4px; margin-top: 6px; font-size: 11px;
    }
    QGroupBox::title { subcontrol-origin: margin; left: 8px; }
    QSpinBox, QComboBox, QLineEdit {
        background: #3C3C3C; color: #CCCCCC;
        border: 1px solid #555; border-radius: 3px; padding: 2px;
    }
"""

BUTTON = """
    QPushButton {{
        padding: 6px 8px;
        border-radius: 4px;
        background: #3C3C3C;
        color: {color};
        border: 1px solid #555555;
        font-size: 12px;
    }}
    QPushButton:hover {{ background: #4A4A4A; }}
    QPushButton:pressed {{ background: #2A2A2A; }}
    QPushButton:disabled {{ color: #555555; border-color: #444; }}
"""

DIALOG = """
    QDialog, QWidget, QGroupBox {
        background-color: #252526; color: #CCCCCC;
    }
    QLineEdit {
        background: #3C3C3C; color: #CCCCCC;
        border: 1px solid #555; border-radius: 3px; padding: 3px;
    }
    QCheckBox { color: #CCCCCC; }
    QDialogButtonBox QPushButton {
        background:#3C3C3C; color:#CCCCCC; border:1px solid #555;
        border-radius:3px; padding:4px 14px; min-width:60px;
    }
    QDialogButtonBox QPushButton:hover { background:#4A4A4A; }
"""
