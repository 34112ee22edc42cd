from typing import Dict, List, Sequence
from typeguard import typechecked

from kutulu.core.console import *
from kutulu.game.entities import Minion, MinionKind, Slasher, SpawningMinion, Wanderer
from kutulu.pathing.shortest_path import DistanceMap


@typechecked
def within_radius(minions: Sequence[Minion], distances: DistanceMap, radius: int) -> List[Minion]:
    """
    Minions whose cell is reachable and at most ``radius`` away.

    Args:
        minions (Sequence[Minion]): Candidates of a single kind.
        distances (DistanceMap): Weighted distances from the acting explorer.
        radius (int): Inclusive alert radius for that kind.

    Returns:
        List[Minion]: The minions within range, in input order.
    """
    result = []
    for minion in minions:
        distance = distances.get(minion.coord)
        if distance is not None and distance <= radius:
            result.append(minion)
    return result


@typechecked
def frightening_minions(
    distances: DistanceMap,
    wanderers: Sequence[Wanderer],
    slashers: Sequence[Slasher],
    spawning_minions: Sequence[SpawningMinion],
    radii: Dict[MinionKind, int],
) -> List[Minion]:
    """
    Build the set of minions we should currently run from.

    Each kind is tested independently against its own alert radius. A minion
    sealed off by walls is absent from ``distances`` and never counts, however
    close it is in a straight line.

    Args:
        distances (DistanceMap): Weighted distances from the acting explorer.
        wanderers (Sequence[Wanderer]): Live wanderers.
        slashers (Sequence[Slasher]): Live slashers.
        spawning_minions (Sequence[SpawningMinion]): Minions still spawning.
        radii (Dict[MinionKind, int]): Alert radius per minion kind.

    Returns:
        List[Minion]: Frightening minions, wanderers first, then slashers,
            then spawning minions.
    """
    frightening: List[Minion] = []
    frightening += within_radius(wanderers, distances, radii[MinionKind.WANDERER])
    frightening += within_radius(slashers, distances, radii[MinionKind.SLASHER])
    frightening += within_radius(spawning_minions, distances, radii[MinionKind.SPAWNING_MINION])
    if frightening:
        debug(f"Frightening minions: {frightening}")
    return frightening
