import sys
from collections import Counter
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple
from typeguard import typechecked

from kutulu.core.console import *
from kutulu.core.errors import DistanceInvariantError
from kutulu.map.grid import Coord, Grid
from kutulu.pathing.frontier import OrderedFrontier

# Largest distance the model accepts. Anything above is a modeling bug.
MAX_DISTANCE = 1000

# Frontier priority of a cell no path has reached yet.
UNREACHED = sys.maxsize


class CongestionPolicy(Enum):
    """How occupancy of the congestion category perturbs the weighted search."""

    TIE_BREAK = "tie_break"
    ADDITIVE = "additive"


def check_distance(value: int) -> int:
    """
    Validate a computed distance.

    Args:
        value (int): The distance to validate.

    Returns:
        int: The same value, for use in expressions.

    Raises:
        DistanceInvariantError: If the value is negative or above MAX_DISTANCE.
    """
    if value < 0 or value > MAX_DISTANCE:
        error(f"Distance was {value}, expected 0..{MAX_DISTANCE}")
        raise DistanceInvariantError(f"Distance was {value}, expected 0..{MAX_DISTANCE}")
    return value


class DistanceMap:
    """
    Single-source shortest-path result.

    Holds the cost of every reached cell and the predecessor each one was
    reached from. Cells absent from the map are unreachable from the source.
    Lookups are left unchecked, retreat scoring calls them once per threat
    per candidate.
    """

    @typechecked
    def __init__(self, source: Coord, distances: Dict[Coord, int], previous: Dict[Coord, Coord]) -> None:
        self.source = source
        self._distances = distances
        self._previous = previous

    def __contains__(self, coord: Coord) -> bool:
        return coord in self._distances

    def __getitem__(self, coord: Coord) -> int:
        return self._distances[coord]

    def __len__(self) -> int:
        return len(self._distances)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DistanceMap):
            return NotImplemented
        return self.source == other.source and self._distances == other._distances and self._previous == other._previous

    def get(self, coord: Coord, default: Optional[int] = None) -> Optional[int]:
        return self._distances.get(coord, default)

    def items(self) -> List[Tuple[Coord, int]]:
        return list(self._distances.items())

    def previous(self, coord: Coord) -> Optional[Coord]:
        """Predecessor of ``coord`` on its recorded shortest path, None for the source."""
        return self._previous.get(coord)

    @typechecked
    def path_to(self, target: Coord) -> Optional[List[Coord]]:
        """
        Rebuild the recorded path from the source to ``target``.

        Args:
            target (Coord): Destination cell.

        Returns:
            Optional[List[Coord]]: Cells from source to target, both included,
                or None if the target was never reached.
        """
        if target not in self._distances:
            return None
        path = [target]
        current = target
        while current in self._previous:
            current = self._previous[current]
            path.append(current)
        path.reverse()
        return path

    def __repr__(self) -> str:
        return f"DistanceMap(source={self.source}, reached={len(self._distances)})"


def _seed_frontier(grid: Grid, source: Coord) -> OrderedFrontier:
    # Every traversable cell is queued up front so the frontier size never changes.
    frontier = OrderedFrontier()
    for coord in grid.traversable_cells():
        frontier.push(coord, 0 if coord == source else UNREACHED)
    return frontier


@typechecked
def weighted_distances(
    grid: Grid,
    source: Coord,
    congestion: Iterable[Coord] = (),
    policy: CongestionPolicy = CongestionPolicy.TIE_BREAK,
    factor: int = 2,
) -> DistanceMap:
    """
    Shortest paths from ``source`` that steer around congested cells.

    With ``TIE_BREAK`` every step costs 1. When a neighbour can be reached at
    exactly its current best cost, the new arrival replaces the recorded one
    only if the neighbour hosts no congestion entity and the new path crosses
    fewer congested cells. Costs stay in hop units, predecessors change.

    With ``ADDITIVE`` stepping onto a cell costs ``1 + factor * occupancy``.

    Args:
        grid (Grid): The map to search.
        source (Coord): Start cell.
        congestion (Iterable[Coord]): Positions of the congestion category,
            one entry per entity (stacked entities repeat the coordinate).
        policy (CongestionPolicy): How congestion affects the search.
        factor (int): Extra cost per occupying entity for ``ADDITIVE``.

    Returns:
        DistanceMap: Costs and predecessors of every cell reachable from source.

    Raises:
        CoordinateOutOfRangeError: If ``source`` or a congestion position lies
            outside the grid.
        DistanceInvariantError: If any cost leaves 0..MAX_DISTANCE.
    """
    grid.check_coord(source)
    occupancy = Counter(congestion)
    for coord in occupancy:
        grid.check_coord(coord)
    additive = policy is CongestionPolicy.ADDITIVE

    frontier = _seed_frontier(grid, source)
    distances: Dict[Coord, int] = {source: 0}
    previous: Dict[Coord, Coord] = {}
    crowding: Dict[Coord, int] = {source: 1 if occupancy[source] else 0}

    while frontier:
        u, _ = frontier.pop()
        if u not in distances:
            # Only unreached cells remain.
            break
        du = distances[u]
        for v in grid.neighbors(u):
            occupants = occupancy[v]
            step = 1 + factor * occupants if additive else 1
            alt = check_distance(du + step)
            via = crowding[u] + (1 if occupants else 0)
            best = distances.get(v)
            if best is None or alt < best or (not additive and alt == best and occupants == 0 and via < crowding[v]):
                distances[v] = alt
                previous[v] = u
                crowding[v] = via
                frontier.update(v, alt)

    return DistanceMap(source, distances, previous)


@typechecked
def unweighted_distances(grid: Grid, source: Coord) -> DistanceMap:
    """
    Plain hop-count shortest paths from ``source``.

    Used to score retreat candidates, so it must stay free of any bias from
    the acting explorer's own routing preferences.

    Args:
        grid (Grid): The map to search.
        source (Coord): Start cell.

    Returns:
        DistanceMap: Hop counts of every cell reachable from source.
    """
    grid.check_coord(source)
    frontier = _seed_frontier(grid, source)
    distances: Dict[Coord, int] = {source: 0}
    previous: Dict[Coord, Coord] = {}

    while frontier:
        u, _ = frontier.pop()
        if u not in distances:
            break
        alt = check_distance(distances[u] + 1)
        for v in grid.neighbors(u):
            best = distances.get(v)
            if best is None or alt < best:
                distances[v] = alt
                previous[v] = u
                frontier.update(v, alt)

    return DistanceMap(source, distances, previous)
