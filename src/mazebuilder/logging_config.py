"""
Logging Configuration
=====================
Log output for the `mazebuilder` package.

Generator calls run on a worker thread, so every record carries the thread
name next to the logger name. The generator client and its worker can be
given their own level, which makes it possible to trace the external process
or endpoint without turning the whole GUI to DEBUG.
"""
import logging
import sys
from typing import Mapping, Optional

PACKAGE_LOGGER = "mazebuilder"
GENERATOR_LOGGERS = ("mazebuilder.controller.generator", "mazebuilder.controller.workers")

LOG_FORMAT = "%(asctime)s [%(threadName)s] %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%H:%M:%S"


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    generator_level: Optional[int] = None,
    module_levels: Optional[Mapping[str, int]] = None,
) -> logging.Logger:
    """
    Configures the 'mazebuilder' logger and returns it.

    Args:
        level: Level of the package logger.
        log_file: Optional path; the file is truncated on every start.
        generator_level: Level for the generator client and worker loggers.
        module_levels: Further per-logger levels, keyed by full logger name.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    # main() may run more than once in one process (tests)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    # Handlers pass everything; filtering happens on the loggers
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    levels = dict(module_levels or {})
    for name in GENERATOR_LOGGERS:
        # NOTSET follows the package level
        levels.setdefault(name, logging.NOTSET if generator_level is None else generator_level)
    for name, child_level in levels.items():
        logging.getLogger(name).setLevel(child_level)

    logger.debug(f"Logging to stdout{f' and {log_file}' if log_file else ''}, level overrides: {levels}")
    return logger
