import pytest

from kutulu.config.bot_config import DEFAULT_CONFIG, BotConfig
from kutulu.config.config_loader import ConfigLoader
from kutulu.config.config_utils import merged_config, recursive_update
from kutulu.core.console import LogLevel
from kutulu.core.errors import ConfigError
from kutulu.game.entities import MinionKind
from kutulu.pathing.shortest_path import CongestionPolicy


def test_defaults():
    config = BotConfig()
    assert config.alert_radius(MinionKind.WANDERER) == 7
    assert config.alert_radius(MinionKind.SLASHER) == 6
    assert config.alert_radius(MinionKind.SPAWNING_MINION) == 7
    assert config.retreat_horizon == 5
    assert config.congestion_kind is MinionKind.WANDERER
    assert config.congestion_policy is CongestionPolicy.TIE_BREAK
    assert config.light_radius == 5
    assert config.log_level is LogLevel.WARNING
    assert config.memoize_oracle
    assert config.warm_oracle
    assert not config.show_tables


def test_partial_override_keeps_other_defaults():
    config = BotConfig({"threat": {"alert_radius": {"slasher": 3}}, "pathing": {"congestion_policy": "ADDITIVE"}})
    assert config.alert_radius(MinionKind.SLASHER) == 3
    assert config.alert_radius(MinionKind.WANDERER) == 7
    assert config.congestion_policy is CongestionPolicy.ADDITIVE
    assert DEFAULT_CONFIG["threat"]["alert_radius"]["slasher"] == 6


@pytest.mark.parametrize(
    "override",
    [
        {"threat": {"retreat_horizon": -1}},
        {"threat": {"alert_radius": {"wanderer": 1001}}},
        {"threat": {"retreat_horizon": True}},
        {"pathing": {"congestion_policy": "bogus"}},
        {"pathing": {"congestion_kind": "ghost"}},
        {"runtime": {"log_level": "loud"}},
        {"pathing": {"memoize_oracle": "false"}},
        {"pathing": {"warm_oracle": 0}},
        {"runtime": {"show_tables": "no"}},
    ],
)
def test_invalid_values_raise(override):
    with pytest.raises(ConfigError):
        BotConfig(override)


def test_from_file_with_extra(tmp_path):
    main = tmp_path / "bot.yml"
    main.write_text("threat:\n  retreat_horizon: 4\nruntime:\n  log_level: debug\n")
    extra = tmp_path / "extra.yml"
    extra.write_text("threat:\n  retreat_horizon: 2\n")

    assert BotConfig.from_file(main).retreat_horizon == 4
    config = BotConfig.from_file(main, extra)
    assert config.retreat_horizon == 2
    assert config.log_level is LogLevel.DEBUG


def test_loader_rejects_missing_and_malformed_files(tmp_path):
    with pytest.raises(FileNotFoundError):
        ConfigLoader(tmp_path / "missing.yml")
    bad = tmp_path / "list.yml"
    bad.write_text("- 1\n- 2\n")
    with pytest.raises(ConfigError):
        ConfigLoader(bad)


def test_recursive_update_without_force_only_fills_gaps():
    default = {"a": 1, "b": None, "nested": {"c": 2}}
    result = recursive_update(default, {"a": 5, "b": 6, "nested": {"c": 7, "d": 8}}, force=False)
    assert result == {"a": 1, "b": 6, "nested": {"c": 2, "d": 8}}


def test_merged_config_does_not_touch_inputs():
    default = {"x": {"y": 1}}
    override = {"x": {"y": 2}}
    assert merged_config(default, override) == {"x": {"y": 2}}
    assert default == {"x": {"y": 1}}


def test_yaml_booleans(tmp_path):
    path = tmp_path / "bot.yml"
    path.write_text("pathing:\n  memoize_oracle: false\n  warm_oracle: no\nruntime:\n  show_tables: true\n")
    config = BotConfig.from_file(path)
    assert config.memoize_oracle is False
    assert config.warm_oracle is False
    assert config.show_tables is True
