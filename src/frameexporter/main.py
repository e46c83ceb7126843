# -*- coding: utf-8 -*-
"""Application entry point."""

from __future__ import annotations

import logging
import sys
import traceback
from pathlib import Path

from PyQt6.QtWidgets import QApplication, QMessageBox

from frameexporter.config import load_config
from frameexporter.constants import APP_NAME
from frameexporter.gui.main_window import MainWindow
from frameexporter.utils.logger import log_session_context, setup_session_logging


def global_exception_handler(exc_type, exc_value, exc_traceback):
    """Log fatal errors and keep a copy of the last crash next to the session logs."""
    error_msg = "".join(traceback.format_exception(exc_type, exc_value, exc_traceback))
    logging.getLogger().critical("FATAL CRASH:\n%s", error_msg)

    crash_path = Path.cwd() / "logs" / "LAST_CRASH.log"
    try:
        crash_path.parent.mkdir(parents=True, exist_ok=True)
        crash_path.write_text(error_msg, encoding="utf-8")
    except OSError:
        logging.getLogger().exception("Could not write crash report")

    if QApplication.instance():
        QMessageBox.critical(None, "Application Crash", f"A fatal error occurred.\nDetails saved to: {crash_path}")

    sys.__excepthook__(exc_type, exc_value, exc_traceback)


def main() -> int:
    """Start the GUI application."""
    sys.excepthook = global_exception_handler
    setup_session_logging(Path.cwd(), APP_NAME)
    logger = logging.getLogger(__name__)
    app = QApplication(sys.argv)

    settings_path = Path(sys.argv[1]) if len(sys.argv) > 1 else None
    try:
        settings = load_config(settings_path)
    except ValueError as exc:
        logger.error("Invalid settings: %s", exc)
        QMessageBox.critical(None, "Invalid Settings", str(exc))
        return 2

    log_session_context(settings)

    window = MainWindow(settings=settings)
    window.show()
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
