import os
import sys
from typing import Iterator, Optional, TextIO
from typeguard import typechecked

from kutulu.core.console import *
from kutulu.agent.decision import decide
from kutulu.agent.yell_registry import YellRegistry
from kutulu.config.bot_config import BotConfig
from kutulu.pathing.oracle import UnweightedOracle
from kutulu.protocol.parser import MatchHeader, parse_header, parse_snapshot
from kutulu.utils.report_utils import render_grid, render_snapshot


@typechecked
class TickLoop:
    """
    Drives one match: reads the judge's input, answers one action per tick.

    The yell registry and the oracle live as long as the loop. Everything else
    is rebuilt from the snapshot on every tick.
    """

    def __init__(self, config: Optional[BotConfig] = None) -> None:
        self.config = config if config is not None else BotConfig()
        self.header: Optional[MatchHeader] = None
        self.registry = YellRegistry()
        self.oracle: Optional[UnweightedOracle] = None
        self.tick = 0

    def _tables_enabled(self) -> bool:
        return self.config.show_tables or get_log_level() is LogLevel.DEBUG

    def run(self, stdin: TextIO, stdout: TextIO) -> int:
        """
        Play the match until the input ends.

        Args:
            stdin (TextIO): Judge input.
            stdout (TextIO): Judge output, one command line per tick.

        Returns:
            int: Number of ticks answered.

        Raises:
            ProtocolError: On malformed input.
            InvariantViolation: If the core detects an impossible state.
        """
        set_log_level(self.config.log_level)
        lines: Iterator[str] = iter(stdin)

        self.header = parse_header(lines)
        grid = self.header.grid
        self.oracle = UnweightedOracle(grid, memoize=self.config.memoize_oracle)
        if self.config.warm_oracle:
            with timed_block("Oracle warm-up", level=LogLevel.INFO):
                built = self.oracle.warm()
            debug(f"Oracle warmed with {built} distance maps")
        if self._tables_enabled():
            render_grid(grid)

        while True:
            snapshot = parse_snapshot(lines)
            if snapshot is None:
                break
            self.tick += 1
            self.registry.record_effects(snapshot.effects, snapshot.me.id)

            with timed_block(f"Tick {self.tick}", budget_ms=float(self.config.tick_budget_ms)):
                action = decide(grid, snapshot, self.config, self.registry, self.oracle)

            stdout.write(action.to_command() + "\n")
            stdout.flush()
            if self._tables_enabled():
                render_grid(grid, snapshot)
                render_snapshot(self.tick, snapshot, action, self.registry)

        success(f"Input closed after {self.tick} ticks, {self.oracle.searches} oracle searches")
        return self.tick

    @classmethod
    def launch_from_files(
        cls,
        *,
        config_main: Optional[str] = "config/bot_config.yml",
        extra_defs: Optional[str] = None,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
    ) -> "TickLoop":
        """
        One-liner runner: load the config if present, then play on stdin/stdout.
        """
        if config_main and os.path.exists(config_main):
            config = BotConfig.from_file(config_main, extra_defs)
        else:
            if config_main:
                warning(f"Config file {config_main} not found, using defaults")
            config = BotConfig()

        loop = cls(config)
        loop.run(stdin if stdin is not None else sys.stdin, stdout if stdout is not None else sys.stdout)
        return loop

    def __str__(self) -> str:
        return f"TickLoop(tick={self.tick}, yelled={len(self.registry)}, config={self.config!r})"
