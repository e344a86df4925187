"""Logging configuration for polymesh-tvl."""

import logging
import sys

# Define TRACE level (lower than DEBUG)
TRACE = 5
logging.addLevelName(TRACE, "TRACE")

PACKAGE_LOGGER = "polymesh_tvl"
PACKAGE_HANDLER_ATTR = "_polymesh_tvl_handler"

NOISY_LOGGERS = ("substrateinterface", "websocket", "urllib3", "backoff")


class ColoredFormatter(logging.Formatter):
    """Colored log formatter using ANSI escape codes."""

    COLORS = {
        "TRACE": "\033[90m",  # Dark gray
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"
    BOLD = "\033[1m"

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with colors."""
        levelname = record.levelname
        if levelname in self.COLORS:
            record.levelname = (
                f"{self.COLORS[levelname]}{self.BOLD}{levelname}{self.RESET}"
            )

        result = super().format(record)

        record.levelname = levelname

        return result


class SilentModeFilter(logging.Filter):
    """Drop everything below ERROR. Errors are always emitted."""

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno >= logging.ERROR


def _resolve_level(log_level: str) -> int:
    if log_level == "TRACE":
        return TRACE
    return getattr(logging, log_level, logging.INFO)


def _build_handler(silent: bool) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        ColoredFormatter(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    if silent:
        handler.addFilter(SilentModeFilter())
    return handler


def setup_logging(log_level: str = "INFO", silent: bool = False) -> None:
    """Configure logging for the application.

    Sets up a console handler with formatted, colored output. In silent mode
    only ERROR and CRITICAL records reach the handler.

    Unless the level is TRACE, chatty third-party loggers (websocket,
    substrate-interface, urllib3, backoff) are capped at WARNING.
    """
    log_level = log_level.upper()
    level = _resolve_level(log_level)
    handler = _build_handler(silent)

    logging.basicConfig(
        level=level,
        handlers=[handler],
        force=True,
    )

    noisy_level = TRACE if log_level == "TRACE" else logging.WARNING
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(noisy_level)


def configure_package_logging(log_level: str = "INFO", silent: bool = False) -> None:
    """Route the package's logs to its own console handler.

    Used when the adapter is embedded in a host process: root handlers are
    left untouched, and repeated calls replace the package handler instead
    of stacking new ones.
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    stale = [
        h for h in package_logger.handlers if getattr(h, PACKAGE_HANDLER_ATTR, False)
    ]
    for handler in stale:
        package_logger.removeHandler(handler)

    handler = _build_handler(silent)
    setattr(handler, PACKAGE_HANDLER_ATTR, True)
    package_logger.addHandler(handler)
    package_logger.setLevel(_resolve_level(log_level.upper()))
    package_logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for a module.

    Args:
        name: Usually __name__ of the calling module

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)
