"""Asynchronous logging: a logger thread draining a queue of payloads into sinks."""

from __future__ import annotations

import os
import queue
import sys
import threading
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Callable, Optional, TextIO

from dckit.clock import Timestamp, make_timestamp

__all__ = [
    "Level",
    "Payload",
    "Sink",
    "Logger",
    "ConsoleSink",
    "ColoredConsoleSink",
    "get_global_logger",
    "init",
    "deinit",
    "set_level",
]


class Level(IntEnum):
    """Severity of a payload; a logger passes payloads at or above its level."""

    VERBOSE = 0
    INFO = 1
    WARNING = 2
    ERROR = 3
    RAW = 4
    NONE = 5

    def __str__(self) -> str:
        return self.name.capitalize()


@dataclass(frozen=True)
class Payload:
    """One log entry."""

    level: Level
    message: str
    file_name: str = ""
    function_name: str = ""
    lineno: int = 0
    timestamp: Timestamp = field(default_factory=make_timestamp)


Sink = Callable[[Payload, Level], None]

_SHUTDOWN = object()


def _format_message(message: str, args: tuple, kwargs: dict) -> str:
    if not args and not kwargs:
        return message
    try:
        return message.format(*args, **kwargs)
    except (IndexError, KeyError, ValueError, AttributeError, TypeError):
        return f"<failed to format data: {message}>"


###############################################################################
# Logger
#


class Logger:
    """Queues payloads from any thread and hands them to sinks on its own thread."""

    def __init__(self, sink: Optional[Sink] = None, name: str = "console") -> None:
        self._queue: queue.Queue = queue.Queue()
        self._dead = threading.Semaphore(0)
        self._sinks_lock = threading.Lock()
        self._sinks: list[tuple[Sink, str]] = [
            (sink if sink is not None else ConsoleSink(), name)
        ]
        self._level = Level.VERBOSE
        self._thread: Optional[threading.Thread] = None
        self.is_active = False

    @property
    def level(self) -> Level:
        return self._level

    def set_level(self, level: Level) -> None:
        self._level = Level(level)

    def start(self) -> None:
        """Start the logger thread; does nothing if it is already running."""
        if self._thread is not None and self._thread.is_alive():
            return
        self._thread = threading.Thread(target=self._run, name="logger", daemon=True)
        self._thread.start()

    def stop(self, timeout_us: int) -> bool:
        """Ask the logger thread to finish and wait for it.

        Returns True if the thread finished within ``timeout_us`` microseconds.
        """
        if not self.enqueue(_SHUTDOWN):
            return False
        return self._dead.acquire(timeout=max(timeout_us, 0) / 1_000_000)

    def enqueue(self, payload) -> bool:
        """Put a payload on the queue; returns whether it was accepted."""
        try:
            self._queue.put_nowait(payload)
        except queue.Full:
            return False
        return True

    def log(self, level: Level, message: str, *args, **kwargs) -> bool:
        """Format ``message`` with the arguments and queue it at ``level``."""
        caller = sys._getframe(1)
        payload = Payload(
            level=Level(level),
            message=_format_message(message, args, kwargs),
            file_name=caller.f_code.co_filename,
            function_name=caller.f_code.co_name,
            lineno=caller.f_lineno,
        )
        return self.enqueue(payload)

    def approx_payloads_in_queue(self) -> int:
        return self._queue.qsize()

    def attach_sink(self, sink: Sink, name: str) -> "Logger":
        with self._sinks_lock:
            self._sinks.append((sink, name))
        return self

    def detach_sink(self, name: str) -> "Logger":
        """Remove every sink attached under ``name``."""
        with self._sinks_lock:
            self._sinks = [entry for entry in self._sinks if entry[1] != name]
        return self

    def _current_sinks(self) -> list[Sink]:
        with self._sinks_lock:
            return [sink for sink, _ in self._sinks]

    def _run(self) -> None:
        self.is_active = True
        while True:
            payload = self._queue.get()
            if payload is _SHUTDOWN:
                break
            level = self._level
            for sink in self._current_sinks():
                if payload.level >= level:
                    sink(payload, level)

        # Shutdown received: drain what is left of the backlog.
        while True:
            try:
                payload = self._queue.get_nowait()
            except queue.Empty:
                break
            if payload is _SHUTDOWN:
                continue
            for sink in self._current_sinks():
                sink(payload, self._level)

        self.is_active = False
        self._dead.release()


###############################################################################
# Sinks
#


def _format_timestamp(ts: Timestamp) -> str:
    return (
        f"{ts.year:04}-{ts.month:02}-{ts.day:02} "
        f"{ts.hour:02}:{ts.minute:02}:{ts.second:09.6f}"
    )


_RESET = "\033[0m"
_LEVEL_COLORS = {
    Level.VERBOSE: "\033[90m",
    Level.INFO: "\033[97m",
    Level.WARNING: "\033[93m",
    Level.ERROR: "\033[91m",
    Level.RAW: "\033[97m",
    Level.NONE: "\033[97m",
}
_FALLBACK_COLOR = "\033[35m"


@dataclass
class ConsoleSink:
    """Writes payloads as text lines, with an optional bracketed prefix."""

    stream: Optional[TextIO] = None
    show_datetime: bool = True
    show_level: bool = True
    show_filestamp: bool = False
    show_function: bool = False

    def _level_text(self, level: Level) -> str:
        return f"{str(level):<7} "

    def _line(self, payload: Payload) -> str:
        parts = []
        if self.show_datetime:
            parts.append(_format_timestamp(payload.timestamp) + " ")
        if self.show_level:
            parts.append(self._level_text(payload.level))
        if self.show_filestamp:
            parts.append(f"{os.path.basename(payload.file_name)}:{payload.lineno}")
        if self.show_function:
            parts.append(f"{payload.function_name:<10}")
        if parts:
            return f"[{''.join(parts)}] {payload.message}\n"
        return f"{payload.message}\n"

    def __call__(self, payload: Payload, level: Level) -> None:
        if payload.level < level:
            return
        out = self.stream if self.stream is not None else sys.stdout
        if payload.level == Level.RAW:
            out.write(payload.message)
        else:
            out.write(self._line(payload))
        out.flush()


@dataclass
class ColoredConsoleSink(ConsoleSink):
    """Console sink that paints the level with an ANSI colour."""

    def _level_text(self, level: Level) -> str:
        color = _LEVEL_COLORS.get(level, _FALLBACK_COLOR)
        return f"{color}{str(level):<7}{_RESET} "

    def __call__(self, payload: Payload, level: Level) -> None:
        super().__call__(payload, level)


###############################################################################
# Global logger
#

_global_logger: Optional[Logger] = None
_global_lock = threading.Lock()


def get_global_logger() -> Logger:
    global _global_logger
    with _global_lock:
        if _global_logger is None:
            _global_logger = Logger()
        return _global_logger


def init(logger: Optional[Logger] = None) -> None:
    (logger if logger is not None else get_global_logger()).start()


def deinit(timeout_us: int = 1_000_000, logger: Optional[Logger] = None) -> bool:
    return (logger if logger is not None else get_global_logger()).stop(timeout_us)


def set_level(level: Level, logger: Optional[Logger] = None) -> None:
    (logger if logger is not None else get_global_logger()).set_level(level)