from fractions import Fraction
from typing import List, Optional, Sequence, Tuple
from typeguard import typechecked

from kutulu.core.console import *
from kutulu.core.errors import EmptyCandidateSetError, NoScorableCandidateError
from kutulu.config.bot_config import BotConfig
from kutulu.game.entities import Minion, Snapshot
from kutulu.map.grid import Coord, Grid
from kutulu.pathing.oracle import UnweightedOracle
from kutulu.pathing.shortest_path import DistanceMap, weighted_distances
from kutulu.threat.aggregator import frightening_minions


@typechecked
def retreat_candidates(grid: Grid, distances: DistanceMap, horizon: int) -> List[Coord]:
    """
    Traversable cells we can reach within ``horizon``, in row-major order.

    Args:
        grid (Grid): The match grid.
        distances (DistanceMap): Weighted distances from the acting explorer.
        horizon (int): Inclusive maximum weighted distance.

    Returns:
        List[Coord]: Candidate retreat cells, including the current cell.
    """
    candidates = []
    for coord in grid.traversable_cells():
        distance = distances.get(coord)
        if distance is not None and distance <= horizon:
            candidates.append(coord)
    return candidates


@typechecked
def mean_threat_distance(distances: DistanceMap, threats: Sequence[Minion]) -> Optional[Fraction]:
    """
    Exact mean distance from a candidate to the threats it can reach.

    Threats unreachable from the candidate are left out of the mean.

    Returns:
        Optional[Fraction]: The mean, or None if no threat is reachable.
    """
    total = 0
    count = 0
    for threat in threats:
        distance = distances.get(threat.coord)
        if distance is not None:
            total += distance
            count += 1
    if count == 0:
        return None
    return Fraction(total, count)


@typechecked
def select_retreat(threats: Sequence[Minion], candidates: Sequence[Coord], oracle: UnweightedOracle) -> Tuple[Coord, Fraction]:
    """
    Pick the candidate farthest, on average, from every frightening minion.

    The oracle runs once per candidate. The strictly greatest mean wins, so
    the first-seen candidate keeps ties. Candidates that reach no threat are
    skipped instead of scored.

    Args:
        threats (Sequence[Minion]): The frightening set.
        candidates (Sequence[Coord]): Cells to score, see retreat_candidates.
        oracle (UnweightedOracle): Unweighted distances on the match grid.

    Returns:
        Tuple[Coord, Fraction]: The chosen cell and its mean threat distance.

    Raises:
        EmptyCandidateSetError: If ``candidates`` is empty.
        NoScorableCandidateError: If no candidate reaches any threat.
    """
    if not candidates:
        error("No candidates for the farthest coord")
        raise EmptyCandidateSetError("No candidates for the farthest coord")

    best: Optional[Coord] = None
    best_score: Optional[Fraction] = None
    for candidate in candidates:
        score = mean_threat_distance(oracle.distances_from(candidate), threats)
        if score is None:
            continue
        if best_score is None or score > best_score:
            best = candidate
            best_score = score
            debug(f"Farthest so far: {best} with mean distance {best_score}")

    if best is None:
        error(f"None of {len(candidates)} candidates reaches a frightening minion")
        raise NoScorableCandidateError(f"None of {len(candidates)} candidates reaches a frightening minion")
    return best, best_score


@typechecked
def plan_retreat(grid: Grid, snapshot: Snapshot, config: BotConfig, oracle: Optional[UnweightedOracle] = None, distances: Optional[DistanceMap] = None) -> Optional[Coord]:
    """
    Decide where to run this tick, if anywhere.

    Args:
        grid (Grid): The match grid.
        snapshot (Snapshot): Current tick.
        config (BotConfig): Radii, horizon and congestion settings.
        oracle (Optional[UnweightedOracle]): Reused across ticks when given.
        distances (Optional[DistanceMap]): Weighted distances from our explorer,
            computed here when not supplied.

    Returns:
        Optional[Coord]: The cell to move toward, or None when no minion is
            frightening and the caller should fall back to its own policy.
    """
    if distances is None:
        distances = weighted_distances_for(grid, snapshot, config)

    threats = frightening_minions(distances, snapshot.wanderers, snapshot.slashers, snapshot.spawning_minions, config.alert_radii)
    if not threats:
        return None

    if oracle is None:
        oracle = UnweightedOracle(grid, memoize=config.memoize_oracle)
    candidates = retreat_candidates(grid, distances, config.retreat_horizon)
    debug(f"{len(candidates)} retreat candidates within {config.retreat_horizon}")
    target, score = select_retreat(threats, candidates, oracle)
    info(f"Retreating to {target} (mean distance {score} from {len(threats)} minions)")
    return target


@typechecked
def weighted_distances_for(grid: Grid, snapshot: Snapshot, config: BotConfig) -> DistanceMap:
    """
    Weighted distances from our explorer, congested by the configured minion kind.

    Every explorer and minion position is bounds-checked first.

    Raises:
        CoordinateOutOfRangeError: If any entity of the snapshot is off the grid.
    """
    for entity in [snapshot.me] + snapshot.allies + snapshot.wanderers + snapshot.slashers + snapshot.spawning_minions:
        grid.check_coord(entity.coord)
    congestion = [m.coord for m in snapshot.minions_of(config.congestion_kind)]
    return weighted_distances(grid, snapshot.me.coord, congestion, config.congestion_policy, config.congestion_factor)
