# shapecanvas/__main__.py
import sys
import os
from PyQt5.QtWidgets import QApplication
from shapecanvas.bug_report import install_excepthook
from shapecanvas.logger import setup_logging
from shapecanvas.settings import AppSettings


def main():
    # Ensure uncaught exceptions are logged and reported
    install_excepthook()
    if os.name == "nt":
        import ctypes

        ctypes.windll.user32.ShowWindow(ctypes.windll.kernel32.GetConsoleWindow(), 0)
    app = QApplication(sys.argv)
    app.setApplicationName("Shape Canvas")
    settings = AppSettings.load()
    setup_logging(settings.log_level)

    from shapecanvas.ui.main_window import MainWindow

    win = MainWindow(settings)
    win.show()
    sys.exit(app.exec_())


if __name__ == "__main__":
    main()
