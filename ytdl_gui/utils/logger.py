"""Thread-safe logging for the extended downloader.

Media sessions log from info-retrieval workers as well as from the thread
that owns the window, so entries are queued and written by one background
thread. Entries go to:
- stderr, so stdout stays free for the argument string the CLI prints
- a rotating log file
- GUI callbacks (the log window)

Only protected arguments are ever passed to the logger.
"""

import os
import sys
import threading
import logging
import queue
import traceback
from datetime import datetime
from enum import Enum
from typing import Optional, Callable, List
from logging.handlers import RotatingFileHandler


class LogLevel(Enum):
    """Log severity levels, mapped onto the standard logging levels."""
    DEBUG = logging.DEBUG
    INFO = logging.INFO
    SUCCESS = logging.INFO + 5
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL


class LogEntry:
    """One line of the log window.

    Attributes:
        level: Severity
        message: Text, never containing live credentials
        source: Component tag (session, provider, arguments, config, ...)
        timestamp: Creation time
    """

    __slots__ = ('level', 'message', 'source', 'timestamp')

    def __init__(self, level: LogLevel, message: str, source: Optional[str] = None):
        self.level = level
        self.message = message
        self.source = source
        self.timestamp = datetime.now()

    def format(self) -> str:
        prefix = f"[{self.timestamp:%H:%M:%S}] [{self.level.name}]"
        if self.source:
            prefix += f" [{self.source}]"
        return f"{prefix} {self.message}"


class Logger:
    """Queue-backed logger shared by sessions, the provider and the config.

    Usage:
        logger = Logger(log_dir="logs")
        logger.info("Retrieved 24 formats", source="session")
        logger.flush()
    """

    COLORS = {
        LogLevel.DEBUG: '\033[36m',
        LogLevel.SUCCESS: '\033[32m',
        LogLevel.WARNING: '\033[33m',
        LogLevel.ERROR: '\033[31m',
        LogLevel.CRITICAL: '\033[35m',
    }
    RESET_COLOR = '\033[0m'

    def __init__(
        self,
        name: str = "youtube-dl-gui",
        log_dir: Optional[str] = None,
        log_to_console: bool = True,
        log_to_file: bool = True,
        min_level: LogLevel = LogLevel.INFO,
        max_file_size: int = 5 * 1024 * 1024,
        backup_count: int = 3,
        max_history: int = 1000
    ):
        """Initialize the logger and start its writer thread.

        Args:
            name: Log file prefix
            log_dir: Directory for log files (default: ./logs)
            log_to_console: Write entries to stderr
            log_to_file: Write entries to a rotating file
            min_level: Entries below this level are dropped
            max_file_size: Size in bytes before the file rotates
            backup_count: Rotated files to keep
            max_history: Entries kept for the log window
        """
        self.name = name
        self.log_to_console = log_to_console
        self.min_level = min_level
        self.use_colors = log_to_console and sys.stderr.isatty()

        self._lock = threading.RLock()
        self._queue: queue.Queue = queue.Queue()
        self._callbacks: List[Callable[[LogEntry], None]] = []
        self._history: List[LogEntry] = []
        self._max_history = max_history

        self._file_handler: Optional[RotatingFileHandler] = None
        if log_to_file:
            log_dir = log_dir or os.path.join(os.getcwd(), "logs")
            self._file_handler = self._open_log_file(log_dir, max_file_size, backup_count)

        self._running = True
        self._thread = threading.Thread(target=self._run, name="log-writer", daemon=True)
        self._thread.start()

    def _open_log_file(self, log_dir: str, max_size: int, backup_count: int) -> RotatingFileHandler:
        os.makedirs(log_dir, exist_ok=True)
        path = os.path.join(log_dir, f"{self.name}_{datetime.now():%Y%m%d}.log")

        handler = RotatingFileHandler(path, maxBytes=max_size, backupCount=backup_count, encoding='utf-8')
        handler.setFormatter(logging.Formatter('%(asctime)s - %(message)s', datefmt='%Y-%m-%d %H:%M:%S'))
        return handler

    def _run(self):
        while self._running:
            try:
                entry = self._queue.get(timeout=0.1)
            except queue.Empty:
                continue
            try:
                self._write(entry)
            finally:
                self._queue.task_done()

    def _write(self, entry: LogEntry):
        line = entry.format()

        with self._lock:
            self._history.append(entry)
            del self._history[:-self._max_history]

            if self.log_to_console:
                color = self.COLORS.get(entry.level) if self.use_colors else None
                print(f"{color}{line}{self.RESET_COLOR}" if color else line, file=sys.stderr)

            if self._file_handler is not None:
                self._file_handler.emit(logging.LogRecord(
                    self.name, entry.level.value, "", 0, line, (), None
                ))

            callbacks = list(self._callbacks)

        for callback in callbacks:
            try:
                callback(entry)
            except Exception as e:
                sys.stderr.write(f"Log callback failed: {e}\n")

    def log(self, level: LogLevel, message: str, source: Optional[str] = None):
        if level.value >= self.min_level.value:
            self._queue.put(LogEntry(level, message, source))

    def debug(self, message: str, source: Optional[str] = None):
        self.log(LogLevel.DEBUG, message, source)

    def info(self, message: str, source: Optional[str] = None):
        self.log(LogLevel.INFO, message, source)

    def success(self, message: str, source: Optional[str] = None):
        self.log(LogLevel.SUCCESS, message, source)

    def warning(self, message: str, source: Optional[str] = None):
        self.log(LogLevel.WARNING, message, source)

    def error(self, message: str, source: Optional[str] = None):
        self.log(LogLevel.ERROR, message, source)

    def critical(self, message: str, source: Optional[str] = None):
        self.log(LogLevel.CRITICAL, message, source)

    def exception(self, message: str, exc: BaseException, source: Optional[str] = None):
        """Log an error followed by the exception's traceback."""
        tb = ''.join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        self.error(f"{message}\n{tb}", source)

    def add_gui_callback(self, callback: Callable[[LogEntry], None]):
        """Register the log window; called on the writer thread."""
        with self._lock:
            self._callbacks.append(callback)

    def get_history(self, level: Optional[LogLevel] = None, limit: int = 100) -> List[LogEntry]:
        """Get recent entries, optionally of one level only."""
        with self._lock:
            entries = [e for e in self._history if level is None or e.level == level]
        return entries[-limit:]

    def flush(self):
        """Write every queued entry and wait for the one being written."""
        while True:
            try:
                entry = self._queue.get_nowait()
            except queue.Empty:
                break
            try:
                self._write(entry)
            finally:
                self._queue.task_done()
        self._queue.join()

    def shutdown(self):
        """Stop the writer thread, write what is left and close the file."""
        self._running = False
        self.flush()

        if self._file_handler is not None:
            self._file_handler.close()


_global_logger: Optional[Logger] = None


def get_logger() -> Logger:
    """Get the process-wide logger, creating it on first use."""
    global _global_logger
    if _global_logger is None:
        _global_logger = Logger()
    return _global_logger


def set_logger(logger: Logger):
    global _global_logger
    _global_logger = logger
