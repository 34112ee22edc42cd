from kutulu.game.entities import MinionKind
from kutulu.map.grid import Grid
from kutulu.pathing.shortest_path import weighted_distances
from kutulu.threat.aggregator import frightening_minions, within_radius
from tests.helpers import open_grid, slasher, spawning, wanderer

RADII = {MinionKind.WANDERER: 7, MinionKind.SLASHER: 6, MinionKind.SPAWNING_MINION: 7}


def test_radius_is_inclusive():
    distances = weighted_distances(open_grid(10, 1), (0, 0))
    at_radius = wanderer((7, 0), id=1)
    beyond = wanderer((8, 0), id=2)
    assert within_radius([at_radius, beyond], distances, 7) == [at_radius]


def test_walled_off_minion_is_ignored():
    grid = Grid.from_rows(["...#....."])
    distances = weighted_distances(grid, (0, 0))
    assert frightening_minions(distances, [wanderer((4, 0))], [], [], RADII) == []


def test_each_kind_uses_its_own_radius():
    distances = weighted_distances(open_grid(10, 1), (0, 0))
    near_slasher = slasher((6, 0), id=1)
    far_slasher = slasher((7, 0), id=2)
    egg = spawning((7, 0))
    result = frightening_minions(distances, [wanderer((7, 0))], [near_slasher, far_slasher], [egg], RADII)
    assert [m.kind for m in result] == [MinionKind.WANDERER, MinionKind.SLASHER, MinionKind.SPAWNING_MINION]
    assert far_slasher not in result


def test_nothing_nearby():
    distances = weighted_distances(open_grid(3, 3), (0, 0))
    assert frightening_minions(distances, [], [], [], RADII) == []
