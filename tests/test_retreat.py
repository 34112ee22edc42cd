from fractions import Fraction

import pytest

from kutulu.config.bot_config import BotConfig
from kutulu.core.errors import CoordinateOutOfRangeError, EmptyCandidateSetError, NoScorableCandidateError
from kutulu.game.entities import Explorer
from kutulu.map.grid import Grid
from kutulu.pathing.oracle import UnweightedOracle
from kutulu.pathing.shortest_path import weighted_distances
from kutulu.threat.retreat import mean_threat_distance, plan_retreat, retreat_candidates, select_retreat, weighted_distances_for
from tests.helpers import make_snapshot, open_grid, wanderer


def test_runs_to_the_far_side():
    grid = open_grid(5, 5)
    snapshot = make_snapshot((2, 2), wanderers=[(2, 0)])
    config = BotConfig({"threat": {"retreat_horizon": 3}})
    target = plan_retreat(grid, snapshot, config)
    assert target == (0, 3)
    assert target[1] > 2
    assert target != (2, 1)


def test_single_threat_in_open_room():
    grid = open_grid(4, 4)
    snapshot = make_snapshot((1, 1), wanderers=[(3, 3)])
    config = BotConfig({"threat": {"retreat_horizon": 2}})
    assert plan_retreat(grid, snapshot, config) == (0, 0)


def test_no_threat_means_no_retreat():
    grid = open_grid(5, 5)
    snapshot = make_snapshot((0, 0), wanderers=[(4, 4)])
    assert plan_retreat(grid, snapshot, BotConfig()) is None


def test_candidates_stay_within_horizon():
    grid = open_grid(5, 5)
    distances = weighted_distances(grid, (2, 2))
    candidates = retreat_candidates(grid, distances, 1)
    assert candidates == [(2, 1), (1, 2), (2, 2), (3, 2), (2, 3)]


def test_best_mean_beats_best_nearest_threat():
    grid = open_grid(5, 5)
    threats = [wanderer((0, 0), id=1), wanderer((4, 0), id=2)]
    # (2, 3) is 5 away from both, (0, 4) is 4 and 8 away.
    target, score = select_retreat(threats, [(2, 3), (0, 4)], UnweightedOracle(grid))
    assert target == (0, 4)
    assert score == Fraction(6)


def test_first_candidate_keeps_ties():
    grid = open_grid(5, 5)
    threats = [wanderer((0, 2), id=1), wanderer((4, 2), id=2)]
    target, score = select_retreat(threats, [(2, 0), (2, 4)], UnweightedOracle(grid))
    assert target == (2, 0)
    assert score == Fraction(4)


def test_mean_is_exact():
    grid = open_grid(5, 1)
    distances = UnweightedOracle(grid).distances_from((0, 0))
    threats = [wanderer((1, 0), id=1), wanderer((2, 0), id=2)]
    assert mean_threat_distance(distances, threats) == Fraction(3, 2)


def test_candidates_that_reach_no_threat_are_skipped():
    grid = Grid.from_rows(["..#.."])
    threats = [wanderer((0, 0))]
    target, score = select_retreat(threats, [(4, 0), (1, 0)], UnweightedOracle(grid))
    assert target == (1, 0)
    assert score == 1

    with pytest.raises(NoScorableCandidateError):
        select_retreat(threats, [(3, 0), (4, 0)], UnweightedOracle(grid))


def test_empty_candidate_set_raises():
    with pytest.raises(EmptyCandidateSetError):
        select_retreat([wanderer((0, 0))], [], UnweightedOracle(open_grid(2, 2)))


@pytest.mark.parametrize(
    "snapshot",
    [
        make_snapshot((2, 2), wanderers=[(9, 9)]),
        make_snapshot((2, 2), slashers=[(-1, 2)]),
        make_snapshot((2, 2), spawning_minions=[(2, 5)]),
        make_snapshot((2, 2), allies=[Explorer(1, (5, 0), 250)]),
    ],
)
def test_off_grid_entity_is_fatal(snapshot):
    grid = open_grid(5, 5)
    with pytest.raises(CoordinateOutOfRangeError):
        plan_retreat(grid, snapshot, BotConfig())
    with pytest.raises(CoordinateOutOfRangeError):
        weighted_distances_for(grid, snapshot, BotConfig())
