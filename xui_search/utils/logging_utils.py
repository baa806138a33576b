"""Logging setup for xui-search.

Modules use the standard pattern:

    import logging
    logger = logging.getLogger(__name__)

and the entry points decide where records go. The TUI owns the terminal, so
it writes to a rotating file; the plain CLI commands log to stderr.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

from xui_search.config.constants import XUI_SEARCH_CONFIG_DIR

# Max log file size: 5MB, keep 2 backups
_MAX_LOG_BYTES = 5 * 1024 * 1024
_BACKUP_COUNT = 2

_FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _package_logger(level: str) -> logging.Logger:
    package_logger = logging.getLogger("xui_search")
    package_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    return package_logger


def setup_tui_logging(level: str = "INFO", log_dir: Path | None = None) -> Path | None:
    """
    Send xui_search.* records to a rotating file while the TUI is running.

    The root logger stays at WARNING to keep third-party noise out.

    Returns:
        Path of the log file, or None if the file could not be set up
    """
    log_dir = log_dir or XUI_SEARCH_CONFIG_DIR
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / "tui_debug.log"

        if not logging.getLogger().handlers:
            handler = RotatingFileHandler(
                log_file, maxBytes=_MAX_LOG_BYTES, backupCount=_BACKUP_COUNT
            )
            handler.setFormatter(logging.Formatter(_FILE_FORMAT))
            logging.basicConfig(level=logging.WARNING, handlers=[handler])

        _package_logger(level)
        return log_file

    except OSError as e:
        # Logging itself is what failed, so report on stderr
        print(f"Warning: TUI logging setup failed: {e}", file=sys.stderr)
        _package_logger(level)
        return None


def setup_cli_logging(level: str = "INFO") -> None:
    """Route xui_search.* records to stderr through Rich."""
    package_logger = _package_logger(level)
    if not any(isinstance(h, RichHandler) for h in package_logger.handlers):
        handler = RichHandler(console=Console(stderr=True), show_path=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
        package_logger.addHandler(handler)
