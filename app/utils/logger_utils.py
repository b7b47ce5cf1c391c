# app/utils/logger_utils.py

import logging
import logging.handlers
import sys
import traceback
from pathlib import Path

from app.core.constants import DEBUG_LOG_FILE_NAME, ERROR_LOG_FILE_NAME

LOGGER_NAME = "Launcher_App"

# File format shared by the debug log and errors.log.
FILE_LOG_FORMAT = "{asctime} | {levelname} | {name}:{funcName}:{lineno} - {message}"
FILE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


# ANSI escape codes for colors
class LogColors:
    RESET = "\x1b[0m"
    GREY = "\x1b[38;21m"
    GREEN = "\x1b[32m"
    YELLOW = "\x1b[33m"
    RED = "\x1b[31m"
    BOLD_RED = "\x1b[31;1m"
    CYAN = "\x1b[36m"


class ColoredFormatter(logging.Formatter):
    """
    Formatter for console output:
    <green>time</green> | <level>LEVEL</level> | <cyan>name:func:line</cyan> - <level>message</level>
    """

    LOG_LEVEL_COLORS = {
        logging.DEBUG: LogColors.GREY,
        logging.INFO: LogColors.GREEN,
        logging.WARNING: LogColors.YELLOW,
        logging.ERROR: LogColors.RED,
        logging.CRITICAL: LogColors.BOLD_RED,
    }

    def __init__(self, datefmt="%B %d, %Y > %H:%M:%S"):
        super().__init__(fmt="%(message)s", datefmt=datefmt)

    def format(self, record):
        level_color = self.LOG_LEVEL_COLORS.get(record.levelno, LogColors.RESET)

        colored_time = f"{LogColors.GREEN}{self.formatTime(record, self.datefmt)}{LogColors.RESET}"
        colored_level = f"{level_color}{record.levelname:<8}{LogColors.RESET}"
        location = f"{record.name}:{record.funcName}:{record.lineno}"
        colored_location = f"{LogColors.CYAN}{location}{LogColors.RESET}"
        colored_message = f"{level_color}{record.getMessage()}{LogColors.RESET}"

        log_entry = f"{colored_time} | {colored_level} | {colored_location} - {colored_message}"

        if record.exc_info:
            if not record.exc_text:
                record.exc_text = self.formatException(record.exc_info)
            log_entry += f"\n{LogColors.RED}{record.exc_text}{LogColors.RESET}"

        return log_entry


class SingleLineFormatter(logging.Formatter):
    """
    Formatter for errors.log: every record is exactly one line. Exceptions are
    reduced to their final "Type: message" line; the full traceback only goes
    to the console and the debug log.
    """

    def formatException(self, ei):
        return " ".join(traceback.format_exception_only(ei[0], ei[1])).strip()

    def format(self, record):
        # Does not touch record.exc_text, which other handlers share.
        record.message = record.getMessage()
        if self.usesTime():
            record.asctime = self.formatTime(record, self.datefmt)
        line = self.formatMessage(record)
        if record.exc_info:
            line += f" | {self.formatException(record.exc_info)}"
        return " ".join(line.splitlines())


# Global variable to store the logger instance
_logger_instance = None
_custom_log_dir = None


def set_log_directory(log_dir):
    """
    Set the log directory. Must be called before first use of logger,
    normally with the launcher's configuration directory so that
    errors.log ends up next to config.json.
    """
    global _custom_log_dir
    _custom_log_dir = log_dir


def get_logger():
    """
    Get the logger instance, creating it on first access.
    """
    global _logger_instance
    if _logger_instance is None:
        _logger_instance = setup_logger(_custom_log_dir)
    return _logger_instance


def setup_logger(log_dir=None):
    # === Setup log folder ===
    if log_dir is None:
        log_dir = Path(__file__).resolve().parent.parent / "logs"
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)

    # === Remove existing handlers (if this function is called again) ===
    if logger.hasHandlers():
        for handler in list(logger.handlers):
            handler.close()
        logger.handlers.clear()

    # === Console handler (manual coloring) ===
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.DEBUG)
    console_handler.setFormatter(ColoredFormatter())
    logger.addHandler(console_handler)

    file_formatter = logging.Formatter(
        fmt=FILE_LOG_FORMAT, datefmt=FILE_DATE_FORMAT, style="{"
    )

    # === Debug file handler (rotating, everything) ===
    # 5 MB = 5 * 1024 * 1024 bytes
    debug_handler = logging.handlers.RotatingFileHandler(
        log_dir / DEBUG_LOG_FILE_NAME,
        maxBytes=5 * 1024 * 1024,
        backupCount=10,
        encoding="utf-8",
    )
    debug_handler.setLevel(logging.DEBUG)
    debug_handler.setFormatter(file_formatter)
    logger.addHandler(debug_handler)

    # === errors.log handler (append-only, errors only) ===
    # Never rotated: the launcher shows the tail of this file to the user.
    error_handler = logging.FileHandler(
        log_dir / ERROR_LOG_FILE_NAME, mode="a", encoding="utf-8"
    )
    error_handler.setLevel(logging.ERROR)
    error_handler.setFormatter(SingleLineFormatter(
        fmt=FILE_LOG_FORMAT, datefmt=FILE_DATE_FORMAT, style="{"
    ))
    logger.addHandler(error_handler)

    return logger


def reconfigure_logger(log_dir):
    """
    Reconfigure the existing logger with a new log directory.
    Called from main.py once the configuration directory is known.
    """
    global _logger_instance, _custom_log_dir
    _custom_log_dir = log_dir
    _logger_instance = setup_logger(log_dir)
    return _logger_instance


class LoggerProxy:
    """
    Forwards all logging calls to the actual logger instance, so modules can
    import `logger` before the log directory is known.
    """

    def __getattr__(self, name):
        return getattr(get_logger(), name)


logger = LoggerProxy()
__all__ = ["logger", "reconfigure_logger", "set_log_directory"]
