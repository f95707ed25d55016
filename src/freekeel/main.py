#!/usr/bin/env python3
"""
FreeKeel - PDF markup application
Main entry point
"""
import logging
import os
import sys

from PyQt6.QtWidgets import QApplication

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(level: str = None):
    """Configure application logging, level from FREEKEEL_LOG_LEVEL by default"""
    level = (level or os.environ.get("FREEKEEL_LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format=LOG_FORMAT)


def main():
    """Main entry point"""
    setup_logging()

    from .ui import MainWindow

    app = QApplication(sys.argv)
    app.setApplicationName("FreeKeel")
    app.setStyle("Fusion")

    window = MainWindow()
    window.show()

    if len(sys.argv) > 1:
        window.load_file(sys.argv[1])

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
