import pytest

from kutulu.core.errors import CoordinateOutOfRangeError, ProtocolError
from kutulu.map.grid import Cell, Grid
from tests.helpers import open_grid


def test_from_rows_decodes_cells():
    grid = Grid.from_rows(["#w", "U."])
    assert (grid.width, grid.height) == (2, 2)
    assert grid.cell_at((0, 0)) is Cell.WALL
    assert grid.cell_at((1, 0)) is Cell.SPAWN
    assert grid.cell_at((0, 1)) is Cell.SHELTER
    assert grid.cell_at((1, 1)) is Cell.EMPTY
    assert grid.rows() == ["#w", "U."]


def test_neighbors_follow_up_down_left_right():
    grid = open_grid(3, 3)
    assert grid.neighbors((1, 1)) == [(1, 0), (1, 2), (0, 1), (2, 1)]
    assert grid.neighbors((0, 0)) == [(0, 1), (1, 0)]


def test_neighbors_skip_walls():
    grid = Grid.from_rows(["...", ".#.", "..."])
    assert grid.neighbors((1, 0)) == [(0, 0), (2, 0)]
    assert grid.neighbors((1, 1)) == []
    assert not grid.is_traversable_at((1, 1))


def test_out_of_range_lookup_raises():
    grid = open_grid(3, 2)
    with pytest.raises(CoordinateOutOfRangeError):
        grid.neighbors((3, 0))
    with pytest.raises(CoordinateOutOfRangeError):
        grid.cell_at((0, -1))


def test_bad_rows_raise():
    with pytest.raises(ProtocolError):
        Grid.from_rows(["..x"])
    with pytest.raises(ProtocolError):
        Grid.from_rows(["...", ".."])


def test_graph_mirrors_traversable_cells():
    grid = Grid.from_rows(["..#", "..."])
    graph = grid.graph
    assert set(graph.nodes) == set(grid.traversable_cells())
    assert graph.has_edge((0, 0), (1, 0))
    assert not graph.has_node((2, 0))
    assert grid.traversable_cells() == [(0, 0), (1, 0), (0, 1), (1, 1), (2, 1)]
