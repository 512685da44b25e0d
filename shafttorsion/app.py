import sys
from PyQt6.QtWidgets import QApplication

from .logging_config import setup_logging
from .ui.main_window import MainWindow

def main():
    setup_logging()
    app = QApplication(sys.argv)
    win = MainWindow()
    win.show()
    sys.exit(app.exec())
