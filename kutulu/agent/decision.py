from typing import Optional, Sequence
from typeguard import typechecked

from kutulu.core.console import *
from kutulu.agent.abilities import (
    ability_in_progress,
    can_use_light,
    can_use_plan,
    can_use_yell,
    exists_ally_to_yell,
    exists_light_target,
    should_plan,
)
from kutulu.agent.yell_registry import YellRegistry
from kutulu.config.bot_config import BotConfig
from kutulu.game.entities import Explorer, Snapshot
from kutulu.map.grid import Grid
from kutulu.pathing.oracle import UnweightedOracle
from kutulu.protocol.actions import Action, ActionKind
from kutulu.threat.retreat import plan_retreat, weighted_distances_for


@typechecked
def healthiest_ally(me: Explorer, allies: Sequence[Explorer]) -> Optional[Explorer]:
    """The teammate with the highest sanity, the first one listed on ties."""
    best: Optional[Explorer] = None
    for ally in allies:
        if ally.id != me.id and (best is None or ally.sanity > best.sanity):
            best = ally
    return best


@typechecked
def decide(grid: Grid, snapshot: Snapshot, config: BotConfig, registry: YellRegistry, oracle: Optional[UnweightedOracle] = None) -> Action:
    """
    Choose this tick's action.

    Priority order: LIGHT, PLAN, YELL, run from frightening minions, follow
    the healthiest teammate, WAIT.

    Args:
        grid (Grid): The match grid.
        snapshot (Snapshot): Current tick.
        config (BotConfig): Bot tuning.
        registry (YellRegistry): Explorers already yelled at, read only here.
        oracle (Optional[UnweightedOracle]): Scoring oracle for the retreat.

    Returns:
        Action: Exactly one action for the judge.
    """
    me = snapshot.me
    distances = weighted_distances_for(grid, snapshot, config)
    busy = ability_in_progress(snapshot)
    if busy:
        debug("An ability of ours is still active, abilities blocked")

    if can_use_light(me, busy) and exists_light_target(distances, snapshot.wanderers, config.light_radius):
        return Action(ActionKind.LIGHT, "Light it up")
    if can_use_plan(me, busy) and should_plan(me, snapshot.allies, distances, config):
        return Action(ActionKind.PLAN, "Planning")
    if can_use_yell(busy) and exists_ally_to_yell(me, snapshot.allies, distances, registry, config):
        return Action(ActionKind.YELL, "Yelling")

    target = plan_retreat(grid, snapshot, config, oracle=oracle, distances=distances)
    if target is not None:
        return Action.move(target, "Avoiding minion")

    leader = healthiest_ally(me, snapshot.allies)
    if leader is not None:
        return Action.move(leader.coord, "Following leader")
    return Action.wait("Nothing to do")
