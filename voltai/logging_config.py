"""
Logging for VoltAI

Two sinks, one set of helpers:
- logs/voltai.log and stderr through the standard `logging` module
  (stderr shows everything in DEBUG_MODE, warnings only otherwise, so a
  file indexed as empty or a generation fallback is never silent)
- logs/debug_flow.txt, a plain trace of every helper call, opened on first
  use so importing the package does not create it

Modules log through these helpers rather than their own loggers:
    from voltai.logging_config import debug_log, info, warning, Timer

Tag messages with the component in brackets, e.g. "[INDEX] ...", "[OLLAMA] ...".
"""

import logging
import sys
import time
from datetime import datetime

from voltai.config import DEBUG_FLOW_FILE, DEBUG_MODE, LOG_DATE_FORMAT, LOG_FILE, LOG_FORMAT


class _FlowFile:
    """Append-only trace file shared by the whole process."""

    def __init__(self, path):
        self.path = path
        self._handle = None
        self._unavailable = False

    def _open(self):
        try:
            self._handle = open(self.path, 'a', encoding='utf-8')
        except OSError:
            # Read-only home directory: keep the standard logger, skip the trace
            self._unavailable = True
            return
        self._handle.write(f"=== VoltAI session {datetime.now().isoformat()} (DEBUG_MODE={DEBUG_MODE}) ===\n")

    def write(self, message: str):
        if self._handle is None and not self._unavailable:
            self._open()
        if self._handle is not None:
            stamp = datetime.now().strftime("%H:%M:%S.%f")[:-3]
            self._handle.write(f"[{stamp}] {message}\n")
            self._handle.flush()

    def close(self):
        if self._handle is not None:
            self._handle.write(f"=== session end {datetime.now().isoformat()} ===\n\n")
            self._handle.close()
            self._handle = None


_flow = _FlowFile(DEBUG_FLOW_FILE)


def _build_logger() -> logging.Logger:
    logger = logging.getLogger('VoltAI')
    logger.setLevel(logging.DEBUG if DEBUG_MODE else logging.INFO)
    if logger.handlers:
        return logger

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    try:
        to_file = logging.FileHandler(LOG_FILE, encoding='utf-8')
    except OSError:
        to_file = None
    if to_file is not None:
        to_file.setLevel(logging.DEBUG)
        to_file.setFormatter(formatter)
        logger.addHandler(to_file)

    to_console = logging.StreamHandler(sys.stderr)
    to_console.setLevel(logging.DEBUG if DEBUG_MODE else logging.WARNING)
    to_console.setFormatter(formatter)
    logger.addHandler(to_console)
    return logger


_logger = _build_logger()


class Timer:
    """
    Times a block and reports it through debug_log.

        with Timer("Vector encoding"):
            rows = list(pool.map(encode, token_lists))

    writes "Starting Vector encoding..." and "Vector encoding took 42 ms".
    The measured time stays available as ``duration_ms``.
    """

    def __init__(self, operation_name: str, auto_log: bool = True):
        self.operation_name = operation_name
        self.auto_log = auto_log
        self.duration_ms: float | None = None
        self._start = 0.0

    def __enter__(self):
        if self.auto_log:
            debug_log(f"Starting {self.operation_name}...")
        self._start = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.duration_ms = (time.perf_counter() - self._start) * 1000
        if self.auto_log:
            if self.duration_ms < 1000:
                debug_log(f"{self.operation_name} took {self.duration_ms:.0f} ms")
            else:
                debug_log(f"{self.operation_name} took {self.duration_ms / 1000:.1f} seconds")
        return False


def debug_log(message: str):
    """Trace-level message: flow file always, console only in DEBUG_MODE."""
    _flow.write(message)
    _logger.debug(message)


def info(message: str):
    _flow.write(f"[INFO] {message}")
    _logger.info(message)


def warning(message: str):
    """Warning: always reaches stderr as well as the log files."""
    _flow.write(f"[WARNING] {message}")
    _logger.warning(message)


def close_debug_log():
    """Finish the flow file; call once at process exit."""
    _flow.close()


__all__ = [
    'debug_log',
    'info',
    'warning',
    'close_debug_log',
    'Timer',
    'DEBUG_MODE',
]
