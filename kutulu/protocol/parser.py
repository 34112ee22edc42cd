from typing import Iterator, List, Optional, Tuple
from typeguard import typechecked

from kutulu.core.console import *
from kutulu.core.errors import ProtocolError
from kutulu.game.entities import (
    Effect,
    EffectKind,
    Explorer,
    MinionState,
    Slasher,
    Snapshot,
    SpawningMinion,
    Wanderer,
)
from kutulu.map.grid import Grid

ENTITY_EXPLORER = "EXPLORER"
ENTITY_WANDERER = "WANDERER"
ENTITY_SLASHER = "SLASHER"


@typechecked
class MatchHeader:
    """Data sent once, before the first tick."""

    def __init__(self, grid: Grid, sanity_loss_lonely: int, sanity_loss_group: int, wanderer_spawn_time: int, wanderer_life_time: int) -> None:
        self.grid = grid
        self.sanity_loss_lonely = sanity_loss_lonely
        self.sanity_loss_group = sanity_loss_group
        self.wanderer_spawn_time = wanderer_spawn_time
        self.wanderer_life_time = wanderer_life_time

    def __repr__(self) -> str:
        return (
            f"MatchHeader(grid={self.grid!r}, sanity_loss=({self.sanity_loss_lonely}, {self.sanity_loss_group}), "
            f"wanderer_times=({self.wanderer_spawn_time}, {self.wanderer_life_time}))"
        )


def _next_line(lines: Iterator[str], what: str) -> str:
    try:
        return next(lines).rstrip("\r\n")
    except StopIteration:
        error(f"Input ended while reading {what}")
        raise ProtocolError(f"Input ended while reading {what}") from None


def _ints(line: str, count: int, what: str) -> List[int]:
    tokens = line.split()
    if len(tokens) != count:
        error(f"Expected {count} integers for {what}, got {line!r}")
        raise ProtocolError(f"Expected {count} integers for {what}, got {line!r}")
    try:
        return [int(token) for token in tokens]
    except ValueError:
        error(f"Non-integer value in {what}: {line!r}")
        raise ProtocolError(f"Non-integer value in {what}: {line!r}") from None


@typechecked
def parse_header(lines: Iterator[str]) -> MatchHeader:
    """
    Read the match header: grid size, grid rows and the game constants.

    Args:
        lines (Iterator[str]): Input lines from the judge.

    Returns:
        MatchHeader: The decoded header.
    """
    (width,) = _ints(_next_line(lines, "grid width"), 1, "grid width")
    (height,) = _ints(_next_line(lines, "grid height"), 1, "grid height")
    rows = [_next_line(lines, f"grid row {y}").strip() for y in range(height)]
    for y, row in enumerate(rows):
        if len(row) != width:
            error(f"Grid row {y} has {len(row)} cells, expected {width}")
            raise ProtocolError(f"Grid row {y} has {len(row)} cells, expected {width}")
    grid = Grid.from_rows(rows)

    constants = _ints(_next_line(lines, "game constants"), 4, "game constants")
    header = MatchHeader(grid, *constants)
    info(f"Match header parsed: {header!r}")
    return header


@typechecked
def parse_entity(line: str) -> Tuple[str, int, int, int, int, int, int]:
    """Split one ``TYPE id x y param0 param1 param2`` line."""
    tokens = line.split()
    if len(tokens) != 7:
        error(f"Malformed entity line {line!r}")
        raise ProtocolError(f"Malformed entity line {line!r}")
    entity_type = tokens[0]
    entity_id, x, y, param0, param1, param2 = _ints(" ".join(tokens[1:]), 6, f"{entity_type} entity")
    return entity_type, entity_id, x, y, param0, param1, param2


def _minion_state(raw: int, entity_type: str) -> MinionState:
    try:
        return MinionState(raw)
    except ValueError:
        error(f"Unrecognized state {raw} for {entity_type}")
        raise ProtocolError(f"Unrecognized state {raw} for {entity_type}") from None


@typechecked
def build_snapshot(entity_lines: List[str]) -> Snapshot:
    """
    Classify the entity lines of one tick into a snapshot.

    The first explorer listed is always us. Spawning wanderers and spawning
    slashers both become spawning minions.

    Args:
        entity_lines (List[str]): The tick's entity lines.

    Returns:
        Snapshot: The tick's entities.

    Raises:
        ProtocolError: On an unknown entity type or minion state.
    """
    explorers: List[Explorer] = []
    wanderers: List[Wanderer] = []
    slashers: List[Slasher] = []
    spawning: List[SpawningMinion] = []
    effects: List[Effect] = []

    for line in entity_lines:
        entity_type, entity_id, x, y, param0, param1, param2 = parse_entity(line)
        coord = (x, y)

        if entity_type == ENTITY_EXPLORER:
            explorers.append(Explorer(entity_id, coord, param0, param1, param2))
        elif entity_type == ENTITY_WANDERER:
            state = _minion_state(param1, entity_type)
            if state is MinionState.SPAWNING:
                spawning.append(SpawningMinion(entity_id, coord, state, param2, param0))
            elif state is MinionState.WANDERING:
                wanderers.append(Wanderer(entity_id, coord, state, param2, param0))
            else:
                error(f"Unexpected state {state.name} for {entity_type} {entity_id}")
                raise ProtocolError(f"Unexpected state {state.name} for {entity_type} {entity_id}")
        elif entity_type == ENTITY_SLASHER:
            state = _minion_state(param1, entity_type)
            if state is MinionState.SPAWNING:
                spawning.append(SpawningMinion(entity_id, coord, state, param2, param0))
            else:
                slashers.append(Slasher(entity_id, coord, state, param2, param0))
        else:
            try:
                kind = EffectKind(entity_type)
            except ValueError:
                error(f"Unrecognized entity type {entity_type!r}")
                raise ProtocolError(f"Unrecognized entity type {entity_type!r}") from None
            if kind is EffectKind.SHELTER:
                effects.append(Effect(kind, entity_id, coord, param0, -1))
            else:
                effects.append(Effect(kind, entity_id, coord, param0, param1, param2 if kind is EffectKind.YELL else -1))

    if not explorers:
        error("Tick without any explorer")
        raise ProtocolError("Tick without any explorer")
    return Snapshot(explorers[0], explorers[1:], wanderers, slashers, spawning, effects)


@typechecked
def parse_snapshot(lines: Iterator[str]) -> Optional[Snapshot]:
    """
    Read one tick from the judge.

    Returns:
        Optional[Snapshot]: The tick, or None once the input is exhausted.
    """
    try:
        count_line = next(lines)
    except StopIteration:
        return None
    if not count_line.strip():
        return None
    (entity_count,) = _ints(count_line, 1, "entity count")
    entity_lines = [_next_line(lines, f"entity {i + 1}/{entity_count}") for i in range(entity_count)]
    return build_snapshot(entity_lines)
