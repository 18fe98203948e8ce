import logging
import os
import sys
from logging.handlers import RotatingFileHandler

from clyp.config import settings

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(module)s - %(funcName)s - %(lineno)d - %(message)s"


def setup_logging(level=None, log_file=None):
    """
    Configures logging for applications that use the client.
    Outputs to console and, when a log file is configured, to a rotating file.

    The library itself never calls this; it only emits records through
    module-level loggers under the ``clyp`` namespace.
    """
    level = level or settings.LOG_LEVEL
    log_file = log_file or settings.LOG_FILE

    log_formatter = logging.Formatter(LOG_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Avoid adding handlers multiple times
    has_console_handler = any(
        isinstance(h, logging.StreamHandler) and getattr(h, "stream", None) is sys.stdout
        for h in root_logger.handlers
    )
    if not has_console_handler:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(log_formatter)
        root_logger.addHandler(console_handler)

    if log_file:
        log_path = os.path.abspath(log_file)
        has_file_handler = any(
            isinstance(h, logging.FileHandler) and os.path.abspath(h.baseFilename) == log_path
            for h in root_logger.handlers
        )
        if not has_file_handler:
            log_dir = os.path.dirname(log_file)
            if log_dir:
                os.makedirs(log_dir, exist_ok=True)
            file_handler = RotatingFileHandler(log_file, maxBytes=1024*1024*5, backupCount=2) # 5MB per file, 2 backups
            file_handler.setFormatter(log_formatter)
            root_logger.addHandler(file_handler)

    logging.getLogger("clyp").setLevel(level)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    logging.info("Logging configured successfully.")
