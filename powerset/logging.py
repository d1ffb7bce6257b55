import logging
import sys
import traceback
from collections.abc import Iterable
from logging import Formatter, Logger, StreamHandler

FORMAT = "%(levelname)s\t%(name)s:%(lineno)d %(message)s"
LOGGER_NAMES = ("powerset", "__main__")

RESET = "\033[0m"
LEVEL_COLORS = {
    logging.DEBUG: "\033[36m",  # cyan
    logging.INFO: "\033[32m",  # green
    logging.WARNING: "\033[33m",  # yellow
    logging.ERROR: "\033[31m",  # red
    logging.CRITICAL: "\033[91m",  # bright red
}


def log_exception(logger: Logger, e: BaseException) -> None:
    """Log an exception at ERROR level together with its full traceback."""
    lines = traceback.format_exception(type(e), e, e.__traceback__)
    logger.error("Caught exception:\n" + "".join(lines))


class ColorFormatter(Formatter):
    """Formatter that wraps the level name in an ANSI color."""

    def format(self, record: logging.LogRecord) -> str:
        color = LEVEL_COLORS.get(record.levelno)
        if color is None:
            return super().format(record)
        levelname = record.levelname
        record.levelname = color + levelname + RESET
        try:
            return super().format(record)
        finally:
            # Other handlers may see the same record.
            record.levelname = levelname


def make_handler(format: str = FORMAT, *, color: bool | None = None) -> StreamHandler:
    """Create a stderr handler, colored iff stdout is a tty unless overridden."""
    if color is None:
        color = sys.stdout.isatty()
    handler = StreamHandler()
    handler.setFormatter(ColorFormatter(format) if color else Formatter(format))
    return handler


def setup_color_logging(
    format: str = FORMAT,
    level: int = logging.INFO,
    *,
    names: Iterable[str] = LOGGER_NAMES,
) -> None:
    """Route the library's and the calling script's loggers to one handler."""
    handler = make_handler(format)
    for name in names:
        logger = logging.getLogger(name)
        logger.handlers.clear()
        logger.addHandler(handler)
        logger.setLevel(level)
