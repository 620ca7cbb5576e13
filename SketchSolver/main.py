"""Application entry point launching the PyQt6 UI.

Configuration comes from `.env` / environment variables (see
`SketchSolver.core.config`); `SKETCH_SOLVER_LOG_LEVEL` sets the log level.
"""
from __future__ import annotations

import logging
import os
import sys

from dotenv import load_dotenv
from PyQt6.QtWidgets import QApplication

from SketchSolver.core.config import load_config
from SketchSolver.ui.main_window import create_app_window


def configure_logging() -> None:
    level_name = os.getenv("SKETCH_SOLVER_LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main() -> None:
    # .env may set SKETCH_SOLVER_LOG_LEVEL
    load_dotenv()
    configure_logging()
    cfg = load_config()
    app = QApplication(sys.argv)
    win = create_app_window(cfg)
    win.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
