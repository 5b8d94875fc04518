from enum import Enum
from typing import Iterator, List, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field, model_validator

from panelgen.engine.errors import OutOfBoundsError


class Point(BaseModel):
    """Integer coordinate of a grid node (or the top-left node of a cell)"""
    model_config = ConfigDict(frozen=True)

    x: int
    y: int

    def __init__(self, x: int, y: int, **data):
        super().__init__(x=x, y=y, **data)

    def as_tuple(self) -> Tuple[int, int]:
        return (self.x, self.y)

    def distance(self, other: "Point") -> int:
        """Manhattan distance"""
        return abs(self.x - other.x) + abs(self.y - other.y)


class CellType(str, Enum):
    EMPTY = "empty"
    WALL = "wall"
    START = "start"
    END = "end"


class WallSpace(str, Enum):
    NODE = "node" # cells matrix classifies nodes, walls block nodes
    CELL = "cell" # cells matrix classifies cells, walls are solid blocks


class Grid(BaseModel):
    """
    Static lattice of width x height nodes.
    In node space `cells` is indexed [y][x] over nodes and carries the start/end markers.
    In cell space `cells` is indexed [y][x] over the (width-1) x (height-1) cells and only
    holds empty/wall.
    """
    model_config = ConfigDict(frozen=True)

    width: int = Field(ge=3, le=20)
    height: int = Field(ge=3, le=20)
    cells: Tuple[Tuple[CellType, ...], ...]
    start: Point
    end: Point
    wall_space: WallSpace = WallSpace.NODE

    @model_validator(mode="after")
    def check_layout(self):
        rows, cols = self.matrix_shape
        if len(self.cells) != rows or any(len(row) != cols for row in self.cells):
            raise ValueError(f"cells must be {rows} rows of {cols} for {self.wall_space.value} space")
        if self.start == self.end:
            raise ValueError("start and end must be distinct")
        for name, point in (("start", self.start), ("end", self.end)):
            if not self.in_bounds(point):
                raise ValueError(f"{name} {point.as_tuple()} is outside the grid")
            if not self.is_on_border(point):
                raise ValueError(f"{name} {point.as_tuple()} is not on the border")

        flat = [cell for row in self.cells for cell in row]
        if self.wall_space == WallSpace.NODE:
            if flat.count(CellType.START) != 1 or flat.count(CellType.END) != 1:
                raise ValueError("node grid needs exactly one start and one end marker")
            if self.cells[self.start.y][self.start.x] != CellType.START:
                raise ValueError("start marker does not match start node")
            if self.cells[self.end.y][self.end.x] != CellType.END:
                raise ValueError("end marker does not match end node")
        elif CellType.START in flat or CellType.END in flat:
            raise ValueError("cell grid may only hold empty and wall cells")
        return self

    @classmethod
    def build(
            cls,
            width: int,
            height: int,
            start: Point,
            end: Point,
            walls: Optional[List[Point]] = None,
            wall_space: WallSpace = WallSpace.NODE,
    ) -> "Grid":
        """Build a grid from start/end and a list of wall coordinates"""
        wall_set = {wall.as_tuple() for wall in walls or []}
        if wall_space == WallSpace.NODE:
            rows, cols = height, width
        else:
            rows, cols = height - 1, width - 1

        matrix = []
        for y in range(rows):
            row = []
            for x in range(cols):
                cell = CellType.WALL if (x, y) in wall_set else CellType.EMPTY
                if wall_space == WallSpace.NODE:
                    if (x, y) == start.as_tuple():
                        cell = CellType.START
                    elif (x, y) == end.as_tuple():
                        cell = CellType.END
                row.append(cell)
            matrix.append(tuple(row))
        return cls(width=width, height=height, cells=tuple(matrix), start=start, end=end,
                   wall_space=wall_space)

    @property
    def matrix_shape(self) -> Tuple[int, int]:
        if self.wall_space == WallSpace.NODE:
            return self.height, self.width
        return self.height - 1, self.width - 1

    @property
    def cell_count(self) -> int:
        return (self.width - 1) * (self.height - 1)

    # --- queries ---

    def in_bounds(self, point: Point) -> bool:
        return 0 <= point.x < self.width and 0 <= point.y < self.height

    def in_cell_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width - 1 and 0 <= y < self.height - 1

    def is_on_border(self, point: Point) -> bool:
        if not self.in_bounds(point):
            raise OutOfBoundsError(f"node {point.as_tuple()} outside {self.width}x{self.height} grid")
        return point.x in (0, self.width - 1) or point.y in (0, self.height - 1)

    @staticmethod
    def are_adjacent(a: Point, b: Point) -> bool:
        return a.distance(b) == 1

    def cell_type(self, point: Point) -> CellType:
        """Classification lookup in this grid's wall space"""
        rows, cols = self.matrix_shape
        if not (0 <= point.x < cols and 0 <= point.y < rows):
            raise OutOfBoundsError(f"{point.as_tuple()} outside {cols}x{rows} {self.wall_space.value} matrix")
        return self.cells[point.y][point.x]

    def is_blocked(self, point: Point) -> bool:
        """True if the line may not step onto this node"""
        if not self.in_bounds(point):
            raise OutOfBoundsError(f"node {point.as_tuple()} outside {self.width}x{self.height} grid")
        if self.wall_space == WallSpace.NODE:
            return self.cells[point.y][point.x] == CellType.WALL
        return False

    def is_wall_cell(self, x: int, y: int) -> bool:
        if self.wall_space == WallSpace.NODE:
            return False
        return self.cell_type(Point(x, y)) == CellType.WALL

    def cells_beside(self, a: Point, b: Point) -> List[Tuple[int, int]]:
        """The (up to two) cells bordering the edge between two adjacent nodes"""
        if a.y == b.y:
            x = min(a.x, b.x)
            candidates = [(x, a.y - 1), (x, a.y)]
        else:
            y = min(a.y, b.y)
            candidates = [(a.x - 1, y), (a.x, y)]
        return [(x, y) for x, y in candidates if self.in_cell_bounds(x, y)]

    def can_traverse(self, a: Point, b: Point) -> bool:
        """Whether the line may run along the edge a-b"""
        if not (self.in_bounds(a) and self.in_bounds(b)) or not self.are_adjacent(a, b):
            return False
        if self.is_blocked(a) or self.is_blocked(b):
            return False
        return not any(self.is_wall_cell(x, y) for x, y in self.cells_beside(a, b))

    def neighbours(self, point: Point) -> List[Point]:
        candidates = [
            Point(point.x, point.y - 1),
            Point(point.x + 1, point.y),
            Point(point.x, point.y + 1),
            Point(point.x - 1, point.y),
        ]
        return [p for p in candidates if self.in_bounds(p)]

    def iter_cells(self) -> Iterator[Tuple[int, int]]:
        for y in range(self.height - 1):
            for x in range(self.width - 1):
                yield (x, y)

    def wall_cells(self) -> set:
        return {(x, y) for x, y in self.iter_cells() if self.is_wall_cell(x, y)}

    def wall_nodes(self) -> List[Point]:
        if self.wall_space != WallSpace.NODE:
            return []
        return [Point(x, y) for y, row in enumerate(self.cells) for x, cell in enumerate(row)
                if cell == CellType.WALL]
