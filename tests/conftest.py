from collections.abc import Iterator

import pytest

from kutulu.core.console import LogLevel, get_log_level, set_log_level


@pytest.fixture(autouse=True)
def restore_log_level() -> Iterator[None]:
    """The tick loop sets the global log level, put it back after each test."""
    previous = get_log_level()
    set_log_level(LogLevel.WARNING)
    yield
    set_log_level(previous)
