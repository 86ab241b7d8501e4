import logging
import os
import sys

from dotenv import load_dotenv

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class ANSIColors:
    """Options for colors."""

    DEBUG = "\033[36m"  # Cyan
    INFO = "\033[32m"  # Green
    WARNING = "\033[33m"  # Yellow
    ERROR = "\033[31m"  # Red
    CRITICAL = "\033[1;31m"  # Bold Red
    RESET = "\033[0m"


class CustomFormatter(logging.Formatter):
    """Colors on terminals, workflow commands under GitHub Actions, plain text otherwise."""

    def __init__(self, fmt=None, *, github_actions=False, color=False):
        super().__init__(fmt)
        self.github_actions = github_actions
        self.color = color

    def format(self, record):
        log_message = super().format(record)

        if self.github_actions:
            if record.levelno == logging.DEBUG:
                return f"::debug::{log_message}"
            elif record.levelno == logging.WARNING:
                return f"::warning::{log_message}"
            elif record.levelno >= logging.ERROR:
                return f"::error::{log_message}"
            return log_message

        if not self.color:
            return log_message

        log_color = {
            logging.DEBUG: ANSIColors.DEBUG,
            logging.INFO: ANSIColors.INFO,
            logging.WARNING: ANSIColors.WARNING,
            logging.ERROR: ANSIColors.ERROR,
            logging.CRITICAL: ANSIColors.CRITICAL,
        }.get(record.levelno, ANSIColors.RESET)
        return f"{log_color}{log_message}{ANSIColors.RESET}"


def log_level_from_env() -> str:
    level = os.getenv("LOG_LEVEL", "INFO").strip().upper()
    return level if level in VALID_LOG_LEVELS else "INFO"


def configure_logging(level: str | None = None, *, stream=None) -> logging.Handler:
    """Install one console handler on the root logger (for scripts; the library never calls this).

    The level comes from ``level`` or LOG_LEVEL (read from the environment or .env); an
    unknown name falls back to INFO. Output goes to stderr so stdout stays parseable.
    """
    load_dotenv()
    lvl = (level or log_level_from_env()).upper()
    if lvl not in VALID_LOG_LEVELS:
        lvl = "INFO"

    out = stream or sys.stderr
    handler = logging.StreamHandler(out)
    handler.setFormatter(
        CustomFormatter(
            "%(asctime)s - %(levelname)s - %(name)s - %(message)s",
            github_actions=os.getenv("GITHUB_ACTIONS") == "true",
            color=hasattr(out, "isatty") and out.isatty(),
        )
    )
    logging.basicConfig(level=getattr(logging, lvl), handlers=[handler], force=True)
    return handler


def get_logger(name: str):
    """Return a logger for the given module."""
    return logging.getLogger(name)
