from typing import Dict
from typeguard import typechecked

from kutulu.core.console import *
from kutulu.map.grid import Coord, Grid
from kutulu.pathing.shortest_path import DistanceMap, unweighted_distances


@typechecked
class UnweightedOracle:
    """
    Answers "how far is cell C from cell E" on a fixed grid.

    The grid never changes during a match, so when ``memoize`` is set the
    distance map of each source is kept and reused for the rest of the match.
    """

    def __init__(self, grid: Grid, memoize: bool = True) -> None:
        """
        Initialize the oracle.

        Args:
            grid (Grid): The immutable match grid.
            memoize (bool): Keep one distance map per source once computed.
        """
        self.grid = grid
        self.memoize = memoize
        self._cache: Dict[Coord, DistanceMap] = {}
        self.searches = 0

    def distances_from(self, source: Coord) -> DistanceMap:
        """
        Hop counts from ``source`` to every reachable cell.

        Args:
            source (Coord): The cell to search from.

        Returns:
            DistanceMap: The unweighted distance map of ``source``.
        """
        cached = self._cache.get(source)
        if cached is not None:
            return cached

        result = unweighted_distances(self.grid, source)
        self.searches += 1
        if self.memoize:
            self._cache[source] = result
            if len(self._cache) % 100 == 0:
                debug(f"Oracle cache holds {len(self._cache)} distance maps")
        return result

    def warm(self) -> int:
        """
        Build the distance map of every traversable cell up front.

        Meant to run once, right after the grid is known, so that retreat
        scoring during ticks only reads the cache. Does nothing when the
        oracle does not memoize.

        Returns:
            int: Number of distance maps built by this call.
        """
        if not self.memoize:
            debug("Oracle memo disabled, skipping warm-up")
            return 0
        before = self.searches
        debug(f"Building oracle distance cache for {self.grid!r}")
        for coord in self.grid.traversable_cells():
            self.distances_from(coord)
        return self.searches - before

    def __len__(self) -> int:
        return len(self._cache)
