import logging
import os
import sys

from PyQt5.QtWidgets import QApplication

from zenith import config
from zenith.ui import MainWindow


def configure_logging():
    """Log to stderr at the level named by ZENITH_LOG_LEVEL (default INFO)."""
    level_name = os.environ.get("ZENITH_LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main():
    """
    Run the editor.
    An optional PDF path on the command line is opened at start.
    """
    configure_logging()
    app = QApplication(sys.argv)
    app.setApplicationName(config.APP_TITLE)

    file_path = None
    if len(sys.argv) > 1:
        file_path = sys.argv[1]

    window = MainWindow(file_path)
    window.showMaximized()
    sys.exit(app.exec_())
