import networkx as nx
from enum import Enum
from typing import Dict, Iterable, List, Tuple
from typeguard import typechecked

from kutulu.core.console import *
from kutulu.core.errors import CoordinateOutOfRangeError, ProtocolError

Coord = Tuple[int, int]

# Up, down, left, right. Neighbour order is part of the search determinism.
OFFSETS: Tuple[Coord, ...] = ((0, -1), (0, 1), (-1, 0), (1, 0))


class Cell(Enum):
    WALL = "#"
    SPAWN = "w"
    SHELTER = "U"
    EMPTY = "."


@typechecked
def is_traversable(cell: Cell) -> bool:
    """Walls block movement, every other cell kind can be walked on."""
    return cell is not Cell.WALL


@typechecked
def parse_cell(char: str) -> Cell:
    """
    Decode one map character.

    Args:
        char (str): A single character from a grid row.

    Returns:
        Cell: The decoded cell kind.

    Raises:
        ProtocolError: If the character is not a known cell symbol.
    """
    try:
        return Cell(char)
    except ValueError:
        error(f"Unrecognized grid character {char!r}")
        raise ProtocolError(f"Unrecognized grid character {char!r}") from None


class Grid:
    """
    Immutable rectangular map of cells.

    Traversable cells and the orthogonal steps between them are mirrored in a
    NetworkX graph built once at construction. Cells are stored row-major,
    so ``cells[y][x]`` is the cell at coordinate ``(x, y)``.

    Lookups used inside the shortest-path loops (``in_bounds``,
    ``check_coord``, ``neighbors``) are not type-checked and read neighbour
    lists precomputed at construction.
    """

    @typechecked
    def __init__(self, cells: List[List[Cell]]) -> None:
        """
        Initialize the grid from rows of cells.

        Args:
            cells (List[List[Cell]]): Rows of cells, all of the same length.
        """
        if not cells or not cells[0]:
            raise ProtocolError("Grid must have at least one row and one column")
        width = len(cells[0])
        for y, row in enumerate(cells):
            if len(row) != width:
                error(f"Row {y} has {len(row)} cells, expected {width}")
                raise ProtocolError(f"Row {y} has {len(row)} cells, expected {width}")

        self._cells: Tuple[Tuple[Cell, ...], ...] = tuple(tuple(row) for row in cells)
        self._width = width
        self._height = len(cells)
        self._graph = self._build_graph()
        self._neighbors: Dict[Coord, List[Coord]] = {
            (x, y): [(x + dx, y + dy) for dx, dy in OFFSETS if (x + dx, y + dy) in self._graph.adj[(x, y)]]
            for x, y in self._graph.nodes
        }
        self._traversable = [(x, y) for y in range(self._height) for x in range(self._width) if is_traversable(self._cells[y][x])]
        debug(f"Grid {self._width}x{self._height} built with {self._graph.number_of_nodes()} traversable cells and {self._graph.number_of_edges()} steps")

    @classmethod
    @typechecked
    def from_rows(cls, rows: Iterable[str]) -> "Grid":
        """
        Build a grid from the textual rows sent by the judge.

        Args:
            rows (Iterable[str]): One string per grid row, e.g. ``"#..w#"``.

        Returns:
            Grid: The decoded grid.
        """
        return cls([[parse_cell(char) for char in row] for row in rows])

    def _build_graph(self) -> nx.Graph:
        graph = nx.Graph()
        for y, row in enumerate(self._cells):
            for x, cell in enumerate(row):
                if is_traversable(cell):
                    graph.add_node((x, y), cell=cell)
        # Right and down steps are enough for an undirected grid.
        for x, y in list(graph.nodes):
            for nx_, ny_ in ((x + 1, y), (x, y + 1)):
                if graph.has_node((nx_, ny_)):
                    graph.add_edge((x, y), (nx_, ny_))
        return graph

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def graph(self) -> nx.Graph:
        """Read-only view of the traversable-cell graph."""
        return self._graph.copy(as_view=True)

    def in_bounds(self, coord: Coord) -> bool:
        x, y = coord
        return 0 <= x < self._width and 0 <= y < self._height

    def check_coord(self, coord: Coord) -> None:
        """
        Ensure a coordinate lies inside the grid.

        Raises:
            CoordinateOutOfRangeError: If the coordinate is outside the grid.
        """
        if not self.in_bounds(coord):
            error(f"Coord {coord} outside {self._width}x{self._height} grid")
            raise CoordinateOutOfRangeError(f"Coord {coord} outside {self._width}x{self._height} grid")

    @typechecked
    def cell_at(self, coord: Coord) -> Cell:
        self.check_coord(coord)
        x, y = coord
        return self._cells[y][x]

    def is_traversable_at(self, coord: Coord) -> bool:
        return is_traversable(self.cell_at(coord))

    def neighbors(self, coord: Coord) -> List[Coord]:
        """
        Traversable cells one orthogonal step away from ``coord``.

        Args:
            coord (Coord): The origin cell. Must be inside the grid.

        Returns:
            List[Coord]: Up to four coordinates, in up/down/left/right order.
                Empty when the origin itself is a wall.
        """
        self.check_coord(coord)
        return self._neighbors.get(coord, [])

    def traversable_cells(self) -> List[Coord]:
        """All traversable coordinates in row-major order."""
        return list(self._traversable)

    def rows(self) -> List[str]:
        """Textual rows, the inverse of :meth:`from_rows`."""
        return ["".join(cell.value for cell in row) for row in self._cells]

    def __str__(self) -> str:
        return "\n".join(self.rows())

    def __repr__(self) -> str:
        return f"Grid(width={self._width}, height={self._height}, traversable={self._graph.number_of_nodes()})"
