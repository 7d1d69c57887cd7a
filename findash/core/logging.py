"""
logging.py — Application-Wide Logging Configuration

Purpose:
- Configure a standardized logging format for the entire backend and client.
- Provide a file sink with an explicit lifecycle (open at startup, close at shutdown)
  instead of a module-level file stream.
- Log process-level uncaught exceptions (main thread and worker threads).

Uniform formatting: timestamp | level | module | message
"""

import logging
import sys
import threading
from pathlib import Path
from typing import Optional

# -----------------------------------------------------------------------------
# Log Format
# -----------------------------------------------------------------------------

LOG_FORMAT = (
    "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
)

# -----------------------------------------------------------------------------
# Root Logger Initialization
# -----------------------------------------------------------------------------

def configure_logging(level: str = "INFO") -> None:
    """
    Configure root logging settings.

    Parameters:
        level (str): "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"

    Behavior:
    - Sets logging format globally.
    - Ensures logs stream to stdout (Uvicorn picks this up).
    - Should be called ONCE, at app startup.
    """

    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=numeric_level,
        format=LOG_FORMAT
    )
    # basicConfig is a no-op once the root logger has handlers; the level still applies
    logging.getLogger().setLevel(numeric_level)

    logging.getLogger(__name__).info("Logging initialized with level %s", level)

# -----------------------------------------------------------------------------
# Logger Access Helper
# -----------------------------------------------------------------------------

def get_logger(name: str) -> logging.Logger:
    """
    Return a logger instance to be used in any module.

    In any module:
        from findash.core.logging import get_logger
        logger = get_logger(__name__)
        logger.info("something happened")
    """
    return logging.getLogger(name)

# -----------------------------------------------------------------------------
# File Sink
# -----------------------------------------------------------------------------

class LogFileSink:
    """
    Append-mode log file attached to a logger for the lifetime of the app.

    Usage:
        sink = LogFileSink("server.log")
        sink.open()
        ...
        sink.close()

    An empty path makes both calls no-ops.
    """

    def __init__(self, path: str, logger: Optional[logging.Logger] = None):
        self.path = path
        self._logger = logger or logging.getLogger()
        self._handler: Optional[logging.FileHandler] = None

    @property
    def is_open(self) -> bool:
        return self._handler is not None

    def open(self) -> None:
        if not self.path or self._handler is not None:
            return
        Path(self.path).expanduser().parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(Path(self.path).expanduser(), mode="a", encoding="utf-8")
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        self._logger.addHandler(handler)
        self._handler = handler
        get_logger(__name__).info("Log file sink opened at %s", self.path)

    def close(self) -> None:
        if self._handler is None:
            return
        handler = self._handler
        self._handler = None
        handler.flush()
        self._logger.removeHandler(handler)
        handler.close()

# -----------------------------------------------------------------------------
# Uncaught Exception Hooks
# -----------------------------------------------------------------------------

def install_exception_hooks(logger: Optional[logging.Logger] = None) -> None:
    """
    Log uncaught exceptions from the main thread and from worker threads.

    The exceptions are only logged; the interpreter's default handling
    (process exit for the main thread) still applies.
    """
    if getattr(sys.excepthook, "_findash_hook", False):
        return
    log = logger or get_logger("findash.uncaught")
    previous_hook = sys.excepthook

    def _log_uncaught(exc_type, exc_value, exc_tb):
        if not issubclass(exc_type, KeyboardInterrupt):
            log.critical("Uncaught exception", exc_info=(exc_type, exc_value, exc_tb))
        previous_hook(exc_type, exc_value, exc_tb)

    def _log_thread_uncaught(args):
        log.critical(
            "Uncaught exception in thread %s",
            args.thread.name if args.thread else "<unknown>",
            exc_info=(args.exc_type, args.exc_value, args.exc_traceback),
        )

    _log_uncaught._findash_hook = True
    sys.excepthook = _log_uncaught
    threading.excepthook = _log_thread_uncaught
