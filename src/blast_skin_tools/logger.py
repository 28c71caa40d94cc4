# blast_skin_tools/logger.py
"""
Logging for BLAST Skin Tools.

Every module logs to the 'blast_skin_tools' logger; setup_logger attaches the
console and file handlers once per run.
"""

import os
import logging

LOGGER_NAME = 'blast_skin_tools'
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def resolve_level(log_level):
    """Accept a logging level number or a name such as 'info' / 'DEBUG'."""
    if isinstance(log_level, int):
        return log_level
    level = logging.getLevelName(str(log_level).upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {log_level}")
    return level


def setup_logger(log_file=None, log_level=logging.INFO):
    """
    Configure the package logger for one run.

    Args:
        log_file: Path to log file (optional)
        log_level: Level number or name (default: INFO)

    Returns:
        Logger instance
    """
    log_level = resolve_level(log_level)
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(log_level)

    # a second run in the same process must not duplicate output
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT)
    ch = logging.StreamHandler()
    ch.setLevel(log_level)
    ch.setFormatter(formatter)
    logger.addHandler(ch)

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        fh = logging.FileHandler(log_file)
        fh.setLevel(log_level)
        fh.setFormatter(formatter)
        logger.addHandler(fh)

    return logger


def log_print(message, level='info'):
    """
    Print message to console and log it with the specified level.

    Args:
        message: Message to print and log
        level: Logging level name (info, debug, warning, error, critical)
    """
    print(message)
    logging.getLogger(LOGGER_NAME).log(resolve_level(level), message)


def log_table_summary(df, description, level='info'):
    """
    Log the size of a table produced by a pipeline stage.

    Args:
        df: The table
        description: What the table holds, e.g. "Aggregated BLAST hits"
        level: Logging level name

    Returns:
        The logged message
    """
    message = f"{description}: {len(df)} rows x {df.shape[1]} columns"
    logging.getLogger(LOGGER_NAME).log(resolve_level(level), message)
    return message
