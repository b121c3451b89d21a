import logging
import re
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, List

from gitly.config.config import LogConfig

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# uvicorn ships its own handlers; route these through the root logger instead
UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def log_file_name(service_name: str) -> str:
    """'Gitly API' → 'gitly-api.log'."""
    slug = re.sub(r"[^a-z0-9]+", "-", service_name.lower()).strip("-")
    return f"{slug or 'gitly'}.log"


# =============================================================================
#   setup_logging
# =============================================================================
def setup_logging(log_config: LogConfig, service_name: str) -> Path:
    """Configure the root logger for the service.

    Console output uses ``log_config.log_level``; a rotating file named after
    the service receives everything from ``log_config.file_log_level`` up.
    uvicorn's loggers lose their own handlers and propagate to ours, with the
    per-request access log held back to WARNING since the request logging
    middleware already covers it.

    Args:
        log_config: The ``logging`` section of config.yml.
        service_name: Display name of the service, used for the log file name.

    Returns:
        Path of the log file.
    """
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    log_file = log_config.resolved_log_dir / log_file_name(service_name)

    handlers: List[logging.Handler] = [
        logging.StreamHandler(),
        RotatingFileHandler(
            log_file,
            maxBytes=1024 * 1024 * log_config.file_log_file_size_mb,
            backupCount=log_config.file_log_max_files,
        ),
    ]
    handlers[0].setLevel(log_config.log_level)
    handlers[1].setLevel(log_config.file_log_level)
    for handler in handlers:
        handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers = handlers
    root.setLevel(logging.NOTSET)

    for name in UVICORN_LOGGERS:
        uvicorn_logger = logging.getLogger(name)
        uvicorn_logger.handlers = []
        uvicorn_logger.propagate = True
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    def _handle_uncaught(exc_type: Any, exc_value: Any, exc_traceback: Any) -> None:
        if issubclass(exc_type, KeyboardInterrupt):
            sys.__excepthook__(exc_type, exc_value, exc_traceback)
            return
        root.error("Uncaught exception", exc_info=(exc_type, exc_value, exc_traceback))

    sys.excepthook = _handle_uncaught
    return log_file
