"""
Perfboard Designer entry point.

Run from the app/ directory with ``python main.py`` or through the
``perfboard`` console script.
"""

import logging
import sys

from PyQt6.QtWidgets import QApplication

from GUI.main_window import MainWindow


def main() -> int:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    app = QApplication(sys.argv)
    app.setOrganizationName("Perfboard")
    app.setApplicationName("Perfboard Designer")

    window = MainWindow()
    window.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
