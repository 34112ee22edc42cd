from typing import List, Optional, Sequence

from kutulu.game.entities import Effect, Explorer, MinionState, Slasher, Snapshot, SpawningMinion, Wanderer
from kutulu.map.grid import Coord, Grid


def open_grid(width: int, height: int) -> Grid:
    """A wall-free grid."""
    return Grid.from_rows(["." * width for _ in range(height)])


def wanderer(coord: Coord, id: int = 100) -> Wanderer:
    return Wanderer(id, coord, MinionState.WANDERING)


def slasher(coord: Coord, id: int = 200, state: MinionState = MinionState.STALKING) -> Slasher:
    return Slasher(id, coord, state)


def spawning(coord: Coord, id: int = 300) -> SpawningMinion:
    return SpawningMinion(id, coord, MinionState.SPAWNING, countdown=3)


def make_snapshot(
    me_coord: Coord,
    *,
    sanity: int = 250,
    plans: int = 0,
    lights: int = 0,
    allies: Optional[List[Explorer]] = None,
    wanderers: Sequence[Coord] = (),
    slashers: Sequence[Coord] = (),
    spawning_minions: Sequence[Coord] = (),
    effects: Optional[List[Effect]] = None,
) -> Snapshot:
    """A snapshot where our explorer has id 0 and minions get sequential ids."""
    return Snapshot(
        Explorer(0, me_coord, sanity, plans, lights),
        allies or [],
        [wanderer(c, 100 + i) for i, c in enumerate(wanderers)],
        [slasher(c, 200 + i) for i, c in enumerate(slashers)],
        [spawning(c, 300 + i) for i, c in enumerate(spawning_minions)],
        effects or [],
    )
