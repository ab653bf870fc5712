"""
Application Initialization
==========================
This module wires configuration, logging, the main window and the
controller together and starts the Qt Event Loop.

Why is this file needed?
------------------------
It acts as the "Dependency Injection" root. It:
1. Reads command line options and the settings file.
2. Builds the generator client for the configured transport.
3. Creates the Main Window (View), which owns the request controller.
"""
from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Optional, Sequence

from PySide6.QtCore import QCoreApplication, QSettings
from PySide6.QtWidgets import QApplication

from mazebuilder.config import APP_ID, BOUND_PROFILES, ORG_ID, VISIBLE_APP_NAME, load_config, make_generator
from mazebuilder.exceptions import ConfigurationError
from mazebuilder.logging_config import setup_logging
from mazebuilder.model.display import uncovered_by_tiers
from mazebuilder.view.main_window import MainWindow

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="mazebuilder", description=VISIBLE_APP_NAME)
    parser.add_argument("--profile", choices=sorted(BOUND_PROFILES), help="bounds profile to start with")
    parser.add_argument("--settings", help="path to an INI settings file")
    parser.add_argument("--log-level", default="INFO",
                        choices=LOG_LEVELS)
    parser.add_argument("--generator-log-level", choices=LOG_LEVELS,
                        help="separate level for the generator client and its worker thread")
    parser.add_argument("--log-file", help="also write the log to this file")
    return parser


def create_app(argv: Sequence[str]) -> QApplication:
    """Create and configure the QApplication instance."""
    os.environ.setdefault("QT_ENABLE_HIGHDPI_SCALING", "1")

    QCoreApplication.setOrganizationName(ORG_ID)
    QCoreApplication.setApplicationName(APP_ID)
    QSettings.setDefaultFormat(QSettings.Format.IniFormat)

    app = QApplication.instance() or QApplication(list(argv))
    app.setApplicationDisplayName(VISIBLE_APP_NAME)
    return app


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for the application."""
    if argv is None:
        argv = sys.argv[1:]
    args = build_parser().parse_args(argv)

    setup_logging(
        level=getattr(logging, args.log_level),
        log_file=args.log_file,
        generator_level=getattr(logging, args.generator_log_level) if args.generator_log_level else None,
    )

    app = create_app([sys.argv[0]])

    settings = QSettings(args.settings, QSettings.Format.IniFormat) if args.settings else QSettings()
    try:
        config = load_config(settings, profile=args.profile)
    except ConfigurationError as e:
        logger.error(f"Invalid configuration: {e}")
        return 2

    if uncovered_by_tiers(config.bounds):
        logger.warning(
            f"Bounds profile '{config.profile_name}' allows sizes up to "
            f"{config.bounds.max_width}x{config.bounds.max_height}, beyond the largest display tier; "
            "those mazes use the profile's maximal tier."
        )

    generator = make_generator(config.generator)
    logger.info(f"Using profile '{config.profile_name}' and generator '{generator.describe()}'")

    window = MainWindow(config, generator)
    window.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
