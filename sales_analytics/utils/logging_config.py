"""
Process-wide logging setup.

Library modules only call ``logging.getLogger(__name__)``; handlers are
installed by the entry points (CLI, app, dashboard) through ``setup_logging``.
"""
import os
import logging
from datetime import datetime
import threading
from typing import List, Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DIR_ENV = "SALES_ANALYTICS_LOG_DIR"

_configured = False
_lock = threading.Lock()


def _log_file_path(log_dir: str) -> str:
    os.makedirs(log_dir, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return os.path.join(log_dir, f"sales_analytics_{timestamp}.log")


def _build_handlers(log_level: int, log_file: Optional[str]) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    formatter = logging.Formatter(LOG_FORMAT)
    for handler in handlers:
        handler.setLevel(log_level)
        handler.setFormatter(formatter)
    return handlers


def setup_logging(log_level=logging.INFO, log_dir: Optional[str] = None, log_to_file: bool = True) -> logging.Logger:
    """
    Install console and file handlers on the root logger.

    Only the first call installs handlers; later calls just change the level.

    Args:
        log_level: Logging level (default: INFO)
        log_dir (Optional[str]): Directory for the log file, defaults to
            ``$SALES_ANALYTICS_LOG_DIR`` or ``logs``
        log_to_file (bool): Also write a timestamped log file

    Returns:
        logging.Logger: The root logger
    """
    global _configured

    root = logging.getLogger()
    with _lock:
        root.setLevel(log_level)
        if _configured:
            for handler in root.handlers:
                handler.setLevel(log_level)
            return root

        log_file = None
        if log_to_file:
            log_file = _log_file_path(log_dir or os.environ.get(LOG_DIR_ENV, "logs"))

        for handler in root.handlers[:]:
            root.removeHandler(handler)
        for handler in _build_handlers(log_level, log_file):
            root.addHandler(handler)

        _configured = True

    if log_file:
        root.info(f"Logging initialized. Log file: {log_file}")
    return root
