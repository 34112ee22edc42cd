"""
Tuning for the explorer bot.

Overview of Sections:
    1. threat     - alert radius per minion kind, retreat horizon
    2. pathing    - which minion kind congests the weighted search, and how
    3. abilities  - LIGHT / PLAN / YELL thresholds
    4. runtime    - tick budget, log level, diagnostics
"""

from pathlib import Path
from typing import Any, Dict, Optional, Union
from typeguard import typechecked

from kutulu.core.console import *
from kutulu.core.errors import ConfigError
from kutulu.config.config_loader import ConfigLoader
from kutulu.config.config_utils import merged_config
from kutulu.game.entities import MinionKind
from kutulu.pathing.shortest_path import MAX_DISTANCE, CongestionPolicy

DEFAULT_CONFIG: Dict[str, Any] = {
    "threat": {
        # Weighted distance at which a minion of each kind becomes frightening.
        "alert_radius": {
            "wanderer": 7,
            "slasher": 6,
            "spawning_minion": 7,
        },
        # How far we are willing to consider running.
        "retreat_horizon": 5,
    },
    "pathing": {
        "congestion_kind": "wanderer",
        "congestion_policy": "tie_break",
        # Extra cost per occupant, additive policy only.
        "congestion_factor": 2,
        # Keep one unweighted distance map per source cell for the whole match,
        # and build them all right after the header when warm_oracle is set.
        "memoize_oracle": True,
        "warm_oracle": True,
    },
    "abilities": {
        "light": {"radius": 5},
        "plan": {
            "self_sanity": 100,
            "max_own_sanity": 190,
            "max_ally_sanity": 235,
            "radius": 2,
        },
        "yell": {"radius": 1, "min_sanity": 220},
    },
    "runtime": {
        "tick_budget_ms": 50,
        "log_level": "WARNING",
        "show_tables": False,
    },
}


def _lookup(data: Dict[str, Any], *path: str) -> Any:
    value: Any = data
    for key in path:
        if not isinstance(value, dict) or key not in value:
            error(f"Missing config value {'.'.join(path)}")
            raise ConfigError(f"Missing config value {'.'.join(path)}")
        value = value[key]
    return value


def _as_int(data: Dict[str, Any], *path: str, minimum: int = 0, maximum: int = MAX_DISTANCE) -> int:
    value = _lookup(data, *path)
    if isinstance(value, bool) or not isinstance(value, int):
        error(f"Config value {'.'.join(path)} must be an integer, got {value!r}")
        raise ConfigError(f"Config value {'.'.join(path)} must be an integer, got {value!r}")
    if not minimum <= value <= maximum:
        error(f"Config value {'.'.join(path)}={value} outside {minimum}..{maximum}")
        raise ConfigError(f"Config value {'.'.join(path)}={value} outside {minimum}..{maximum}")
    return value


def _as_bool(data: Dict[str, Any], *path: str) -> bool:
    value = _lookup(data, *path)
    if not isinstance(value, bool):
        error(f"Config value {'.'.join(path)} must be true or false, got {value!r}")
        raise ConfigError(f"Config value {'.'.join(path)} must be true or false, got {value!r}")
    return value


def _as_enum(enum_type, raw: Any, name: str):
    try:
        if enum_type is LogLevel:
            return LogLevel[str(raw).upper()]
        return enum_type(str(raw).lower())
    except (KeyError, ValueError):
        if enum_type is LogLevel:
            allowed = ", ".join(member.name for member in LogLevel)
        else:
            allowed = ", ".join(member.value for member in enum_type)
        error(f"Config value {name}={raw!r} is not one of: {allowed}")
        raise ConfigError(f"Config value {name}={raw!r} is not one of: {allowed}") from None


@typechecked
class BotConfig:
    """Validated, typed view of the bot configuration."""

    def __init__(self, data: Optional[Dict[str, Any]] = None) -> None:
        """
        Build the configuration from defaults overridden by ``data``.

        Args:
            data (Optional[Dict[str, Any]]): Partial configuration, same layout
                as DEFAULT_CONFIG.

        Raises:
            ConfigError: If a value is missing, of the wrong type or out of range.
        """
        raw = merged_config(DEFAULT_CONFIG, data or {})

        self.alert_radii: Dict[MinionKind, int] = {
            kind: _as_int(raw, "threat", "alert_radius", kind.value) for kind in MinionKind
        }
        self.retreat_horizon = _as_int(raw, "threat", "retreat_horizon")

        pathing = raw["pathing"]
        self.congestion_kind: MinionKind = _as_enum(MinionKind, pathing.get("congestion_kind"), "pathing.congestion_kind")
        self.congestion_policy: CongestionPolicy = _as_enum(CongestionPolicy, pathing.get("congestion_policy"), "pathing.congestion_policy")
        self.congestion_factor = _as_int(raw, "pathing", "congestion_factor", maximum=100)
        self.memoize_oracle = _as_bool(raw, "pathing", "memoize_oracle")
        self.warm_oracle = _as_bool(raw, "pathing", "warm_oracle")

        self.light_radius = _as_int(raw, "abilities", "light", "radius")
        self.plan_self_sanity = _as_int(raw, "abilities", "plan", "self_sanity", maximum=250)
        self.plan_max_own_sanity = _as_int(raw, "abilities", "plan", "max_own_sanity", maximum=250)
        self.plan_max_ally_sanity = _as_int(raw, "abilities", "plan", "max_ally_sanity", maximum=250)
        self.plan_radius = _as_int(raw, "abilities", "plan", "radius")
        self.yell_radius = _as_int(raw, "abilities", "yell", "radius")
        self.yell_min_sanity = _as_int(raw, "abilities", "yell", "min_sanity", maximum=250)

        runtime = raw["runtime"]
        self.tick_budget_ms = _as_int(raw, "runtime", "tick_budget_ms", maximum=10_000)
        self.log_level: LogLevel = _as_enum(LogLevel, runtime.get("log_level"), "runtime.log_level")
        self.show_tables = _as_bool(raw, "runtime", "show_tables")

        unknown = sorted(set(raw) - set(DEFAULT_CONFIG))
        if unknown:
            warning(f"Ignoring unknown config categories: {', '.join(unknown)}")

    @classmethod
    def from_file(cls, path: Union[str, Path], extra_path: Optional[Union[str, Path]] = None) -> "BotConfig":
        """
        Load a YAML file, optionally merge a second one on top, and validate.

        Args:
            path: Main YAML configuration file.
            extra_path: Optional YAML file whose entries override the main one.

        Returns:
            BotConfig: The validated configuration.
        """
        loader = ConfigLoader(path)
        if extra_path is not None:
            loader.load_extra_definitions(extra_path, force=True)
        debug(str(loader))
        return cls(loader.config_data)

    def alert_radius(self, kind: MinionKind) -> int:
        return self.alert_radii[kind]

    def __repr__(self) -> str:
        radii = ", ".join(f"{kind.value}={radius}" for kind, radius in self.alert_radii.items())
        return f"BotConfig({radii}, horizon={self.retreat_horizon}, congestion={self.congestion_kind.value}/{self.congestion_policy.value})"
