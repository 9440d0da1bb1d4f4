"""Package-wide loggers for the crypto MCP client."""

import logging
import sys

_LOGGER_NAME = "crypto_mcp_client"
_DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the package logger, or a child of it.

    Module names that already start with the package name (``__name__`` inside
    the package) are used unchanged.
    """
    if not name or name == _LOGGER_NAME:
        return logging.getLogger(_LOGGER_NAME)
    if name.startswith(f"{_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{_LOGGER_NAME}.{name}")


def setup_logging(level: int | str = logging.INFO, format_str: str = _DEFAULT_FORMAT) -> None:
    """Print client logs to stdout.

    Meant for scripts and services embedding the client, such as a chat backend or
    a dashboard job. Repeated calls keep the first console handler.

    Args:
        level: Numeric level or level name such as ``"DEBUG"``.
        format_str: ``logging.Formatter`` format string.
    """
    logger = logging.getLogger(_LOGGER_NAME)
    if any(not isinstance(h, logging.NullHandler) for h in logger.handlers):
        return

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(logging.Formatter(format_str))
    logger.addHandler(console)
    logger.setLevel(level.upper() if isinstance(level, str) else level)


logging.getLogger(_LOGGER_NAME).addHandler(logging.NullHandler())
