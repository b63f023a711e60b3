"""Console logging setup for the energy_analytics package."""

import logging

logger = logging.getLogger("energy_analytics")

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"


def init_console_logging(level: str | None = None) -> logging.Logger:
    """Attach a console handler to the package logger.

    Calling this more than once replaces the level but never stacks handlers.

    Parameters
    ----------
    level : str | None, optional
        Logging level name, by default ``ENERGY_LOG_LEVEL``

    Returns
    -------
    logging.Logger
        The configured package logger
    """
    if level is None:
        from energy_analytics.config import get_settings

        level = get_settings().LOG_LEVEL

    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {level}")

    if not any(getattr(h, "_energy_console", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._energy_console = True
        logger.addHandler(handler)

    logger.setLevel(numeric_level)
    return logger


__all__ = ["init_console_logging", "logger", "logging"]
