import os
import sys
import time
import inspect
from enum import Enum
from datetime import datetime
from typeguard import typechecked
from contextlib import contextmanager


# Global log level setting - can be changed at runtime
class LogLevel(Enum):
    DEBUG = 0
    INFO = 1
    SUCCESS = 2
    WARNING = 3
    ERROR = 4


# Default log level - stdout belongs to the judge, so everything goes to stderr
CURRENT_LOG_LEVEL = LogLevel.DEBUG


@typechecked
def set_log_level(level: LogLevel) -> None:
    """
    Set the minimum log level that will be displayed.

    Parameters:
        level (LogLevel): The minimum level to display.
    """
    global CURRENT_LOG_LEVEL
    CURRENT_LOG_LEVEL = level


@typechecked
def get_log_level() -> LogLevel:
    """Return the currently active minimum log level."""
    return CURRENT_LOG_LEVEL


@typechecked
def _should_log(level: LogLevel) -> bool:
    """Check if we should log based on level."""
    return level.value >= CURRENT_LOG_LEVEL.value


def _emit(frame, color: str, label: str, text: str) -> None:
    caller = frame.f_code.co_name
    filename = os.path.basename(frame.f_code.co_filename)
    current_time = datetime.now().strftime("%H:%M:%S.%f")[:-3]
    print(f"[{current_time}][{filename}::{caller}] \033[{color}m{label}: {text}\033[0m", file=sys.stderr)


@typechecked
def error(text: str) -> None:
    """
    Print an error message with timestamp and caller info in red.

    Parameters:
        text (str): The error message to display.
    """
    if not _should_log(LogLevel.ERROR):
        return
    _emit(inspect.currentframe().f_back, "31", "✗ Error", text)


@typechecked
def warning(text: str) -> None:
    """
    Print a warning message with timestamp and caller info in yellow.

    Parameters:
        text (str): The warning message to display.
    """
    if not _should_log(LogLevel.WARNING):
        return
    _emit(inspect.currentframe().f_back, "33", "⚠ Warning", text)


@typechecked
def info(text: str) -> None:
    """
    Print an info message with timestamp and caller info in blue.

    Parameters:
        text (str): The info message to display.
    """
    if not _should_log(LogLevel.INFO):
        return
    _emit(inspect.currentframe().f_back, "34", "ℹ Info", text)


@typechecked
def success(text: str) -> None:
    """
    Print a success message with timestamp and caller info in green.

    Parameters:
        text (str): The success message to display.
    """
    if not _should_log(LogLevel.SUCCESS):
        return
    _emit(inspect.currentframe().f_back, "32", "✓ Success", text)


@typechecked
def debug(text: str) -> None:
    """
    Print a debug message with timestamp and caller info in cyan.

    Parameters:
        text (str): The debug message to display.
    """
    if not _should_log(LogLevel.DEBUG):
        return
    _emit(inspect.currentframe().f_back, "36", "⚙︎ Debug", text)


@contextmanager
def timed_block(name: str, level: LogLevel = LogLevel.DEBUG, budget_ms: float = 0.0):
    """
    Context manager that times a block of code and logs the execution time.

    A positive ``budget_ms`` turns an overrun into a warning regardless of
    ``level``.

    Parameters:
        name (str): Name of the operation being timed.
        level (LogLevel): Log level to use for timing messages.
        budget_ms (float): Wall-clock budget for the block, 0 to disable.

    Usage:
        with timed_block("Tick 12", budget_ms=50):
            # code to time
    """
    start_time = time.perf_counter()
    frame = inspect.currentframe().f_back.f_back
    if _should_log(level):
        _emit(frame, "35", "⏱ Started", name)

    try:
        yield
    finally:
        elapsed_ms = (time.perf_counter() - start_time) * 1000.0
        if budget_ms > 0 and elapsed_ms > budget_ms:
            if _should_log(LogLevel.WARNING):
                _emit(frame, "33", "⚠ Warning", f"{name} took {elapsed_ms:.2f}ms, budget is {budget_ms:.0f}ms")
        elif _should_log(level):
            _emit(frame, "35", "⏱ Completed", f"{name} in {elapsed_ms:.2f}ms")
