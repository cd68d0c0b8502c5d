"""
Inkwell Backend — Error Log Sink
==================================

What:  Single place where internal failures are reported.
Why:   Every 500 response must leave a trace server-side while the client
       only ever sees "Internal Server Error".
How:   Writes to the `inkwell.errors` logger with the traceback attached.
       When ERROR_LOG_FILE is configured, setup_error_log() also attaches
       a file handler so errors accumulate in their own file.
"""

import logging
import os
from typing import Any, Dict, Optional

from app.middleware.request_id import request_id_var

logger = logging.getLogger("inkwell.errors")

_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_error_log(path: Optional[str]) -> None:
    """Attach a file handler for the error log, once."""
    if not path:
        return
    target = os.path.abspath(path)
    for handler in logger.handlers:
        if isinstance(handler, logging.FileHandler) and handler.baseFilename == target:
            return
    file_handler = logging.FileHandler(path, encoding="utf-8")
    file_handler.setFormatter(logging.Formatter(_LOG_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S"))
    logger.addHandler(file_handler)


def log_error(error: BaseException, context: Optional[Dict[str, Any]] = None) -> None:
    """
    Report an internal failure.

    Args:
        error:   The exception that turned into a 500
        context: Extra debug details (never sent to the client)
    """
    rid = request_id_var.get("")
    logger.error(
        "[%s] %s: %s | Context: %s",
        rid,
        type(error).__name__,
        str(error),
        context or {},
        exc_info=(type(error), error, error.__traceback__),
    )
