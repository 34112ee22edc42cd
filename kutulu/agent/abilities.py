from typing import Sequence
from typeguard import typechecked

from kutulu.core.console import *
from kutulu.agent.yell_registry import YellRegistry
from kutulu.config.bot_config import BotConfig
from kutulu.game.entities import EffectKind, Explorer, Snapshot, Wanderer
from kutulu.pathing.shortest_path import DistanceMap

# Abilities whose own active effect blocks casting any other ability.
BLOCKING_EFFECTS = (EffectKind.YELL, EffectKind.PLAN, EffectKind.LIGHT)


@typechecked
def ability_in_progress(snapshot: Snapshot) -> bool:
    """True while one of our own LIGHT, PLAN or YELL effects is still active."""
    return any(snapshot.effects_of(kind, caster=snapshot.me.id) for kind in BLOCKING_EFFECTS)


@typechecked
def can_use_light(me: Explorer, busy: bool) -> bool:
    return me.lights_remaining > 0 and not busy


@typechecked
def can_use_plan(me: Explorer, busy: bool) -> bool:
    return me.plans_remaining > 0 and not busy


@typechecked
def can_use_yell(busy: bool) -> bool:
    return not busy


@typechecked
def exists_light_target(distances: DistanceMap, wanderers: Sequence[Wanderer], radius: int) -> bool:
    """A wanderer close enough for a light to push it away."""
    for wanderer in wanderers:
        distance = distances.get(wanderer.coord)
        if distance is not None and distance <= radius:
            return True
    return False


@typechecked
def exists_ally_to_heal(me: Explorer, allies: Sequence[Explorer], distances: DistanceMap, config: BotConfig) -> bool:
    """
    Whether a plan cast now would also heal a hurt teammate.

    Only worth it while our own sanity is low enough to benefit too.
    """
    if me.sanity > config.plan_max_own_sanity:
        return False
    for ally in allies:
        distance = distances.get(ally.coord)
        if ally.id != me.id and distance is not None and distance <= config.plan_radius and ally.sanity <= config.plan_max_ally_sanity:
            return True
    return False


@typechecked
def should_plan(me: Explorer, allies: Sequence[Explorer], distances: DistanceMap, config: BotConfig) -> bool:
    return me.sanity < config.plan_self_sanity or exists_ally_to_heal(me, allies, distances, config)


@typechecked
def exists_ally_to_yell(me: Explorer, allies: Sequence[Explorer], distances: DistanceMap, registry: YellRegistry, config: BotConfig) -> bool:
    """
    An adjacent, weakened teammate we have never yelled at.

    Args:
        me (Explorer): Our explorer.
        allies (Sequence[Explorer]): Teammates this tick.
        distances (DistanceMap): Weighted distances from our explorer.
        registry (YellRegistry): Explorers already yelled at this match.
        config (BotConfig): Yell radius and sanity threshold.

    Returns:
        bool: True if a yell would stun someone useful.
    """
    for ally in allies:
        distance = distances.get(ally.coord)
        if (
            ally.id != me.id
            and distance is not None
            and distance <= config.yell_radius
            and not registry.already_yelled(ally.id)
            and ally.sanity < config.yell_min_sanity
        ):
            return True
    return False
