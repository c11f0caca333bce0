"""
Logging configuration for the TidyLDA pipeline.

Each stage logs one INFO line per step (documents loaded, vocabulary kept,
matrix shape, LDA fit settings and iterations, classification counts) and
WARNING for join mismatches. Those lines go to stdout and, when the CLI is
given ``--log-file``, to that file too. Loggers of the table, plotting and
modelling libraries are held at WARNING so the step log stays readable.
"""

import logging
import sys

NOISY_LOGGERS = ("nltk", "polars", "sklearn", "matplotlib", "PIL")


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """
    Set up logging configuration with both console and optional file output.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path for logging output

    Raises:
        ValueError: If the provided logging level is invalid

    Example:
        >>> from TidyLDA.logging_config import setup_logging
        >>> setup_logging(level="DEBUG", log_file="tidylda.log")
    """
    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    log_level = logging.getLevelName(level.upper())
    if not isinstance(log_level, int):
        raise ValueError(f"Invalid logging level: {level}")

    logger = logging.getLogger()
    logger.setLevel(log_level)
    logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance with the specified name.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)
