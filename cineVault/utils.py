
import logging
import re
from datetime import date
from logging.handlers import RotatingFileHandler
from pathlib import Path

from cineVault.settings import (
    LOG_PATH, IMAGE_BASE_URL, IMAGE_SIZES, PLACEHOLDER_IMAGE,
)

LOGGER = logging.getLogger("cineVault")


def configure_logging(level: int = logging.DEBUG, log_path: Path = LOG_PATH) -> None:
    """Attach a rotating file handler to the package logger (idempotent)."""
    for handler in LOGGER.handlers:
        if isinstance(handler, RotatingFileHandler):
            return
    log_path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        log_path, maxBytes=1_000_000, backupCount=3, encoding="utf-8"
    )
    handler.setFormatter(
        logging.Formatter("[%(asctime)s] %(levelname)s %(message)s", "%Y-%m-%dT%H:%M:%S")
    )
    LOGGER.addHandler(handler)
    LOGGER.setLevel(level)


def log_debug(message: str) -> None:
    """Send a timestamped debug line to the package log."""
    LOGGER.debug(message)


def normalize(text: str) -> str:
    """Lowercase, strip, and remove non-alphanumeric characters."""
    return re.sub(r"[^a-z0-9]", "", text.strip().lower())


def image_url(path: str | None, size: str = "w500") -> str:
    """
    Resolve a TMDb image *path* fragment ("/abc.jpg") to a full URL.

    A missing path yields the local placeholder asset instead.
    """
    if size not in IMAGE_SIZES:
        raise ValueError(f"Unknown image size: {size}")
    if not path:
        return PLACEHOLDER_IMAGE
    return f"{IMAGE_BASE_URL}/{size}{path}"


def format_runtime(minutes: int) -> str:
    hours, mins = divmod(int(minutes), 60)
    return f"{hours}h {mins}m"


def format_date(date_str: str | None) -> str:
    """'1999-03-30' → 'March 30, 1999'; empty or bad input → 'Unknown'."""
    if not date_str:
        return "Unknown"
    try:
        d = date.fromisoformat(date_str[:10])
    except ValueError:
        return "Unknown"
    return f"{d.strftime('%B')} {d.day}, {d.year}"
