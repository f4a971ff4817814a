"""Rich console logging for the relay.

setup_logging() is called once by the entry point; modules take their
loggers from get_logger().
"""

import logging
from typing import Optional
from rich.logging import RichHandler
from .config import get_settings

# Chatty third-party loggers, kept at WARNING unless we run at DEBUG
NOISY = ("httpx", "httpcore", "openai", "trafilatura")

def setup_logging(level: Optional[str] = None):
    level = (level or get_settings().LOG_LEVEL).upper()
    logging.basicConfig(
        level=level,
        format="%(name)s: %(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=level == "DEBUG")]
    )

    if level != "DEBUG":
        for name in NOISY:
            logging.getLogger(name).setLevel(logging.WARNING)

def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(f"rtjc.{name}")
