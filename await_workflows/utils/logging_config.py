import logging
import os
import sys
from datetime import datetime
from typing import Optional, Union


class ColoredFormatter(logging.Formatter):
    """Custom formatter to add colors to console output."""

    blue = "\x1b[38;5;39m"
    cyan = "\x1b[36m"
    green = "\x1b[32m"
    yellow = "\x1b[33m"
    red = "\x1b[31m"
    bold_red = "\x1b[31;1m"
    reset = "\x1b[0m"

    format_str = "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d - %(message)s"

    FORMATS = {
        logging.DEBUG: cyan + format_str + reset,
        logging.INFO: green + format_str + reset,
        logging.WARNING: yellow + format_str + reset,
        logging.ERROR: red + format_str + reset,
        logging.CRITICAL: bold_red + format_str + reset
    }

    def format(self, record):
        log_fmt = self.FORMATS.get(record.levelno)
        # Handle cases where level might be outside standard range
        if not log_fmt:
            log_fmt = self.format_str
        formatter = logging.Formatter(log_fmt, datefmt="%Y-%m-%d %H:%M:%S")
        return formatter.format(record)


class ActionsFormatter(logging.Formatter):
    """Render records as GitHub Actions workflow commands (::error:: etc.)."""

    COMMANDS = {
        logging.DEBUG: "debug",
        logging.WARNING: "warning",
        logging.ERROR: "error",
        logging.CRITICAL: "error",
    }

    def __init__(self) -> None:
        super().__init__("%(message)s")

    def format(self, record):
        message = super().format(record)
        command = self.COMMANDS.get(record.levelno)
        if not command:
            return message
        # Workflow command data must be single-line
        escaped = message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")
        return f"::{command}::{escaped}"


def setup_logging(
    level: Union[int, str] = logging.INFO,
    github_actions: Optional[bool] = None,
    log_dir: Optional[str] = None,
) -> None:
    """Setup centralized logging configuration."""
    if github_actions is None:
        github_actions = os.getenv("GITHUB_ACTIONS", "").lower() == "true"

    root_logger = logging.getLogger()

    # Clear existing handlers to prevent duplicate logs
    if root_logger.handlers:
        for handler in root_logger.handlers[:]:
            root_logger.removeHandler(handler)

    root_logger.setLevel(level)

    # 1. Console handler: the runner parses workflow commands from stdout
    if github_actions:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(ActionsFormatter())
    else:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(ColoredFormatter())
    root_logger.addHandler(console_handler)

    # 2. Optional file handler for persistence
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.FileHandler(
            os.path.join(log_dir, f"await_workflows_{datetime.now().strftime('%Y%m%d')}.log")
        )
        file_fmt = logging.Formatter(
            "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )
        file_handler.setFormatter(file_fmt)
        root_logger.addHandler(file_handler)

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("await_workflows").setLevel(level)
