"""Logging setup for flux_space.

Every module obtains its logger through :func:`get_logger`; the base
``flux_space`` logger is configured on first use. The level can be forced
with the ``FLUX_SPACE_LOG`` environment variable, either as an integer or as
one of the standard level names.
"""

from __future__ import annotations

import logging
import os
import warnings
from typing import Optional, Union

LOG_LEVEL_ENV_VAR = "FLUX_SPACE_LOG"
BASE_LOGGER_NAME = "flux_space"
NAMED_LOG_LEVELS = {
    "NOTSET": logging.NOTSET,
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def formatter() -> logging.Formatter:
    """Build the formatter used by flux_space handlers."""
    return logging.Formatter(
        "%(asctime)s.%(msecs)03d - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _level_from_env(default: int) -> int:
    if LOG_LEVEL_ENV_VAR not in os.environ:
        return default
    value = os.environ[LOG_LEVEL_ENV_VAR]
    try:
        return int(value)
    except ValueError:
        if value in NAMED_LOG_LEVELS:
            return NAMED_LOG_LEVELS[value]
        raise ValueError(
            f'Environment variable {LOG_LEVEL_ENV_VAR} contains an invalid value "{value}". '
            f"If set, its value must be one of {', '.join(NAMED_LOG_LEVELS)} "
            "(case-sensitive) or an integer log level."
        )


def setup_logger(
    level: int = logging.WARNING,
    console_output: bool = True,
    file_output: Union[bool, str] = False,
) -> logging.Logger:
    """(Re)configure the base flux_space logger.

    Any handlers already attached to the base logger are replaced.

    Parameters
    ----------
    level:
        Logging level, e.g. ``logging.DEBUG``. Overridden by
        ``FLUX_SPACE_LOG`` when that variable is set.
    console_output:
        Attach a stderr stream handler.
    file_output:
        A filename to copy log output to, or False.
    """
    log = logging.getLogger(BASE_LOGGER_NAME)
    log.setLevel(_level_from_env(level))
    log.handlers = []

    fmt = formatter()
    if console_output:
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(fmt)
        log.addHandler(stream_handler)
    if file_output:
        file_handler = logging.FileHandler(str(file_output))
        file_handler.setFormatter(fmt)
        log.addHandler(file_handler)

    log.debug("Logging started at level %s", logging.getLevelName(log.level))
    return log


def get_logger(
    logger_name: str = BASE_LOGGER_NAME,
    log_level: Optional[Union[bool, int]] = None,
    **kwargs,
) -> logging.Logger:
    """Return a logger in the flux_space namespace.

    The base logger is set up on the first call; later calls return existing
    loggers and ignore ``kwargs`` (with a warning).

    ``log_level`` overrides the level of the returned logger: True means
    DEBUG, an integer is used directly, None or False keeps the current one.
    """
    if BASE_LOGGER_NAME not in logging.Logger.manager.loggerDict:
        setup_logger(**kwargs)
    elif kwargs:
        warnings.warn("flux_space logger already exists, ignoring keyword arguments to setup_logger")

    logger = logging.getLogger(logger_name)

    if log_level is not None and log_level is not False:
        if isinstance(log_level, bool):
            log_level = logging.DEBUG
        elif not isinstance(log_level, int):
            raise ValueError("log_level must be a boolean, integer or None")
        if logger.getEffectiveLevel() != log_level:
            logger.debug("Changing log_level from %d to %d", logger.getEffectiveLevel(), log_level)
            logger.setLevel(log_level)

    return logger
