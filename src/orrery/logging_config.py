# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Logging configuration for the command-line entry point.

Library modules only create loggers; handlers are installed here.
"""
import logging
import sys


def setup_logging(level: int = logging.WARNING, log_file: str | None = None) -> logging.Logger:
    """
    Configure the 'orrery' logger namespace.

    Args:
        level: Logging level (e.g. logging.DEBUG, logging.INFO).
        log_file: Optional path to also write logs to.

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger("orrery")
    logger.setLevel(level)

    # Avoid duplicate handlers when main() runs more than once in a process.
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S',
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
