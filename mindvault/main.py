"""Console entry point: configure logging, then hand over to the Typer app."""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from pydantic import ValidationError

from .cli import app
from .config import get_settings

LOG_FILE_MAX_BYTES = 5 * 1024 * 1024
LOG_FILE_BACKUP_COUNT = 3

_FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_CONSOLE_FORMAT = "%(levelname)-8s | %(name)s | %(message)s"


def default_log_file() -> Path:
    """Log location used when settings cannot be loaded."""
    return Path.home() / ".mindvault" / "data" / "mindvault.log"


def _log_target() -> tuple[Path, str]:
    try:
        settings = get_settings()
    except ValidationError as e:
        print(f"Warning: invalid MindVault settings, using defaults: {e}", file=sys.stderr)
        return default_log_file(), "INFO"
    return settings.log_file, settings.log_level


def setup_logging() -> None:
    """Send every record to the rotating log file and warnings to stderr.

    Command output goes to stdout, so the console handler stays at WARNING
    and a keyless or offline run prints nothing extra.
    """
    log_file, log_level = _log_target()
    log_file.parent.mkdir(parents=True, exist_ok=True)

    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=LOG_FILE_MAX_BYTES,
        backupCount=LOG_FILE_BACKUP_COUNT,
        encoding="utf-8",
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(logging.Formatter(_CONSOLE_FORMAT))

    root = logging.getLogger()
    root.setLevel(log_level)
    root.addHandler(file_handler)
    root.addHandler(console_handler)

    # httpx logs every request at INFO
    for name in ("httpx", "httpcore"):
        logging.getLogger(name).setLevel(logging.WARNING)


def main() -> None:
    setup_logging()
    app()


if __name__ == "__main__":
    main()
