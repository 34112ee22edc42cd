import pytest

from kutulu.core.errors import ProtocolError
from kutulu.game.entities import EffectKind, MinionState
from kutulu.protocol.actions import Action, ActionKind
from kutulu.protocol.parser import build_snapshot, parse_header, parse_snapshot


def test_parse_header():
    lines = iter(["4", "3", "####", "#wU#", "#..#", "3 1 3 40"])
    header = parse_header(lines)
    assert (header.grid.width, header.grid.height) == (4, 3)
    assert header.grid.rows() == ["####", "#wU#", "#..#"]
    assert (header.sanity_loss_lonely, header.sanity_loss_group) == (3, 1)
    assert (header.wanderer_spawn_time, header.wanderer_life_time) == (3, 40)


def test_header_row_width_mismatch():
    with pytest.raises(ProtocolError):
        parse_header(iter(["3", "1", "....", "3 1 3 40"]))


def test_truncated_header():
    with pytest.raises(ProtocolError):
        parse_header(iter(["3", "2", "..."]))


def test_snapshot_classification():
    snapshot = build_snapshot([
        "EXPLORER 0 1 1 250 2 3",
        "EXPLORER 1 2 1 180 1 0",
        "WANDERER 5 3 1 12 1 0",
        "WANDERER 6 3 2 4 0 -1",
        "SLASHER 7 1 3 2 2 1",
        "SLASHER 8 2 3 6 0 -1",
        "EFFECT_PLAN 9 1 1 4 0 -1",
        "EFFECT_YELL 10 1 1 2 0 1",
        "EFFECT_SHELTER 11 4 4 10 0 0",
    ])
    assert snapshot.me.id == 0
    assert (snapshot.me.sanity, snapshot.me.plans_remaining, snapshot.me.lights_remaining) == (250, 2, 3)
    assert [a.id for a in snapshot.allies] == [1]
    assert [(w.id, w.countdown, w.target) for w in snapshot.wanderers] == [(5, 12, 0)]
    assert [s.id for s in snapshot.slashers] == [7]
    assert snapshot.slashers[0].state is MinionState.STALKING
    assert [m.id for m in snapshot.spawning_minions] == [6, 8]
    assert [e.kind for e in snapshot.effects] == [EffectKind.PLAN, EffectKind.YELL, EffectKind.SHELTER]
    yell = snapshot.effects_of(EffectKind.YELL, caster=0)[0]
    assert (yell.target, yell.remaining) == (1, 2)
    assert snapshot.effects_of(EffectKind.PLAN)[0].target == -1


@pytest.mark.parametrize(
    "line",
    [
        "GHOST 1 0 0 0 0 0",
        "WANDERER 1 0 0 0 2 0",
        "SLASHER 1 0 0 0 9 0",
        "EXPLORER 1 0 0",
        "EXPLORER a 0 0 0 0 0",
    ],
)
def test_bad_entity_lines(line):
    with pytest.raises(ProtocolError):
        build_snapshot(["EXPLORER 0 0 0 250 0 0", line])


def test_tick_without_explorer():
    with pytest.raises(ProtocolError):
        build_snapshot(["WANDERER 5 3 1 12 1 0"])


def test_parse_snapshot_end_of_input():
    assert parse_snapshot(iter([])) is None
    lines = iter(["1", "EXPLORER 0 0 0 250 0 0"])
    assert parse_snapshot(lines).me.coord == (0, 0)
    assert parse_snapshot(lines) is None
    with pytest.raises(ProtocolError):
        parse_snapshot(iter(["2", "EXPLORER 0 0 0 250 0 0"]))


def test_action_commands():
    assert Action.move((3, 4), "Avoiding minion").to_command() == "MOVE 3 4 Avoiding minion"
    assert Action.wait().to_command() == "WAIT"
    assert Action(ActionKind.LIGHT, "Light it up").to_command() == "LIGHT Light it up"
    with pytest.raises(ValueError):
        Action(ActionKind.MOVE)
    with pytest.raises(ValueError):
        Action(ActionKind.YELL, target=(0, 0))
