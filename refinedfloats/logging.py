"""Logging framework for refinedfloats.
Provides leveled, categorised logging with optional color and file output.
Library code logs at VERBOSE and below, so nothing is printed at the default
NORMAL level unless the caller raises the verbosity.
"""

from __future__ import annotations

import logging
import os
import sys
import time
from collections import deque
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import IntEnum
from pathlib import Path
from typing import Any, TextIO


class LogLevel(IntEnum):
    """Log levels for refinedfloats."""

    QUIET = 0
    NORMAL = 1
    VERBOSE = 2
    DEBUG = 3
    TRACE = 4


class Colors:
    """ANSI color codes for terminal output."""

    RESET = "\033[0m"
    RED = "\033[31m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    MAGENTA = "\033[35m"
    CYAN = "\033[36m"
    WHITE = "\033[37m"
    GRAY = "\033[90m"


def supports_color(stream: TextIO) -> bool:
    """Check if the stream supports ANSI colors."""
    if not hasattr(stream, "isatty") or not stream.isatty():
        return False
    if sys.platform == "win32":
        return bool(os.environ.get("TERM") or "ANSICON" in os.environ)
    return True


@dataclass
class LogEntry:
    """A log entry with metadata."""

    level: LogLevel
    message: str
    category: str = "general"
    timestamp: float = field(default_factory=time.time)
    context: dict[str, Any] = field(default_factory=dict)

    def format(self, color: bool = True, show_time: bool = True) -> str:
        """Format the log entry for display."""
        parts = []
        if show_time:
            stamp = time.strftime("%H:%M:%S", time.localtime(self.timestamp))
            parts.append(f"{Colors.GRAY}{stamp}{Colors.RESET}" if color else stamp)
        indicator = self._indicator(color)
        if indicator:
            parts.append(indicator)
        if self.category != "general":
            if color:
                parts.append(f"{Colors.CYAN}[{self.category}]{Colors.RESET}")
            else:
                parts.append(f"[{self.category}]")
        parts.append(self.message)
        return " ".join(parts)

    def _indicator(self, color: bool) -> str:
        indicators = {
            LogLevel.NORMAL: ("•", Colors.WHITE),
            LogLevel.VERBOSE: ("→", Colors.BLUE),
            LogLevel.DEBUG: ("⚙", Colors.MAGENTA),
            LogLevel.TRACE: ("⋯", Colors.GRAY),
        }
        if self.level not in indicators:
            return ""
        char, col = indicators[self.level]
        return f"{col}{char}{Colors.RESET}" if color else char


class RefinedFloatsLogger:
    """Main logger for refinedfloats.
    Entries that pass the level filter are kept in a bounded history so
    callers and tests can inspect what was logged.
    """

    def __init__(
        self,
        level: LogLevel = LogLevel.NORMAL,
        color: bool = True,
        stream: TextIO | None = None,
        file_path: Path | None = None,
        max_entries: int = 10000,
    ):
        self.level = level
        self._stream = stream or sys.stderr
        self._color = color and supports_color(self._stream)
        self._file_handle: TextIO | None = None
        self._entries: deque[LogEntry] = deque(maxlen=max_entries)
        self._counters: dict[str, int] = {}
        if file_path is not None:
            self.open_file(file_path)

    def set_level(self, level: LogLevel) -> None:
        """Set the logging level."""
        self.level = level

    def is_enabled_for(self, level: LogLevel) -> bool:
        return level <= self.level

    def _emit(self, entry: LogEntry) -> None:
        if not self.is_enabled_for(entry.level):
            return
        self._entries.append(entry)
        self._stream.write(entry.format(color=self._color) + "\n")
        self._stream.flush()
        if self._file_handle:
            self._file_handle.write(entry.format(color=False) + "\n")
            self._file_handle.flush()

    def log(
        self,
        level: LogLevel,
        message: str,
        category: str = "general",
        **context: Any,
    ) -> None:
        """Log a message at the specified level."""
        if not self.is_enabled_for(level):
            return
        self._emit(LogEntry(level=level, message=message, category=category, context=context))

    def info(self, message: str, **context: Any) -> None:
        self.log(LogLevel.NORMAL, message, **context)

    def verbose(self, message: str, **context: Any) -> None:
        self.log(LogLevel.VERBOSE, message, **context)

    def debug(self, message: str, **context: Any) -> None:
        self.log(LogLevel.DEBUG, message, **context)

    def trace(self, message: str, **context: Any) -> None:
        self.log(LogLevel.TRACE, message, **context)

    def warning(self, message: str) -> None:
        """Log a warning message (always shown)."""
        if self._color:
            self._stream.write(f"{Colors.YELLOW}⚠{Colors.RESET} {message}\n")
        else:
            self._stream.write(f"⚠ {message}\n")
        self._stream.flush()

    def error(self, message: str) -> None:
        """Log an error message (always shown)."""
        if self._color:
            self._stream.write(f"{Colors.RED}✗{Colors.RESET} {message}\n")
        else:
            self._stream.write(f"✗ {message}\n")
        self._stream.flush()

    @contextmanager
    def timer(self, name: str, category: str = "timing"):
        """Context manager for timing operations."""
        start = time.perf_counter()
        try:
            yield
        finally:
            elapsed = time.perf_counter() - start
            self.verbose(f"{name}: {elapsed:.3f}s", category=category)

    def count(self, name: str, increment: int = 1) -> int:
        """Increment a counter and return new value."""
        self._counters[name] = self._counters.get(name, 0) + increment
        return self._counters[name]

    def get_count(self, name: str) -> int:
        return self._counters.get(name, 0)

    def get_entries(
        self,
        level: LogLevel | None = None,
        category: str | None = None,
    ) -> list[LogEntry]:
        """Get logged entries, optionally filtered."""
        entries = list(self._entries)
        if level is not None:
            entries = [e for e in entries if e.level == level]
        if category is not None:
            entries = [e for e in entries if e.category == category]
        return entries

    def open_file(self, path: Path) -> None:
        """Mirror output to a file."""
        self.close()
        self._file_handle = open(path, "w", encoding="utf-8")

    def close(self) -> None:
        if self._file_handle:
            self._file_handle.close()
            self._file_handle = None


_logger: RefinedFloatsLogger | None = None


def get_logger() -> RefinedFloatsLogger:
    """Get the global logger instance."""
    global _logger
    if _logger is None:
        _logger = RefinedFloatsLogger()
    return _logger


def set_logger(logger: RefinedFloatsLogger) -> None:
    """Set the global logger instance."""
    global _logger
    _logger = logger


def configure_logging(
    level: LogLevel = LogLevel.NORMAL,
    color: bool = True,
    file_path: Path | None = None,
    stream: TextIO | None = None,
) -> RefinedFloatsLogger:
    """Configure and return the global logger."""
    global _logger
    if _logger is not None:
        _logger.close()
    _logger = RefinedFloatsLogger(level=level, color=color, stream=stream, file_path=file_path)
    return _logger


class PythonLoggingBridge(logging.Handler):
    """Forward records from the standard logging module to the refinedfloats logger."""

    _LEVELS = {
        logging.DEBUG: LogLevel.DEBUG,
        logging.INFO: LogLevel.VERBOSE,
    }

    def __init__(self, target: RefinedFloatsLogger):
        super().__init__()
        self.target = target

    def emit(self, record: logging.LogRecord) -> None:
        message = self.format(record)
        if record.levelno >= logging.ERROR:
            self.target.error(message)
        elif record.levelno >= logging.WARNING:
            self.target.warning(message)
        else:
            level = self._LEVELS.get(record.levelno, LogLevel.TRACE)
            self.target.log(level, message, category="python")


def setup_python_logging(level: int = logging.INFO) -> logging.Logger:
    """Route the ``refinedfloats`` standard-library logger to the global logger."""
    logger = logging.getLogger("refinedfloats")
    logger.setLevel(level)
    if not any(isinstance(h, PythonLoggingBridge) for h in logger.handlers):
        logger.addHandler(PythonLoggingBridge(get_logger()))
    return logger


__all__ = [
    "LogLevel",
    "LogEntry",
    "Colors",
    "RefinedFloatsLogger",
    "get_logger",
    "set_logger",
    "configure_logging",
    "PythonLoggingBridge",
    "setup_python_logging",
    "supports_color",
]
