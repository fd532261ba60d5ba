"""Logging utilities for gql-hookgen commands."""

import logging

_LOGGER_NAME = "gql_hookgen"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the gql_hookgen hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(*, verbose: bool = False, quiet: bool = False) -> logging.Logger:
    """Configure the gql_hookgen logger with console output.

    quiet keeps only warnings and errors, for machine-readable output.
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # Reset handlers to avoid duplicate output when the CLI is invoked repeatedly
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.setFormatter(logging.Formatter("[gql-hookgen] %(levelname)s %(message)s"))
    logger.addHandler(stream_handler)

    return logger


__all__ = ["configure_logging", "get_logger"]
