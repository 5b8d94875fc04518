"""
Region decomposition: split the grid cells into the areas separated by a traced line.
"""
from collections import deque
from typing import Dict, FrozenSet, Sequence, Set, Tuple

from panelgen.schemas.grid_schema import Grid, Point

Cell = Tuple[int, int]
Edge = Tuple[Tuple[int, int], Tuple[int, int]]


def edge_key(a: Point, b: Point) -> Edge:
    """Direction independent key of the edge between two nodes"""
    first, second = a.as_tuple(), b.as_tuple()
    return (first, second) if first <= second else (second, first)


def path_edges(path: Sequence[Point]) -> Set[Edge]:
    return {edge_key(a, b) for a, b in zip(path, path[1:])}


def _crossing_edge(cell: Cell, neighbour: Cell) -> Edge:
    """The grid edge lying between two 4-adjacent cells"""
    (x, y), (nx, ny) = cell, neighbour
    if nx != x:
        # horizontal neighbours share a vertical edge
        col = max(x, nx)
        return ((col, y), (col, y + 1))
    row = max(y, ny)
    return ((x, row), (x + 1, row))


def decompose(grid: Grid, path: Sequence[Point]) -> Dict[Cell, int]:
    """
    Label every non-wall cell with a region id.
    Two neighbouring cells share a region unless an edge of the path lies between them.
    Ids carry no meaning beyond grouping; compare results with `partition`.
    """
    cuts = path_edges(path)
    walls = grid.wall_cells()
    labels: Dict[Cell, int] = {}
    region_id = 0

    for cell in grid.iter_cells():
        if cell in labels or cell in walls:
            continue
        region_id += 1
        labels[cell] = region_id
        queue = deque([cell])
        while queue:
            x, y = queue.popleft()
            for neighbour in ((x, y - 1), (x + 1, y), (x, y + 1), (x - 1, y)):
                if neighbour in labels or neighbour in walls:
                    continue
                if not grid.in_cell_bounds(*neighbour):
                    continue
                if _crossing_edge((x, y), neighbour) in cuts:
                    continue
                labels[neighbour] = region_id
                queue.append(neighbour)

    return labels


def partition(labels: Dict[Cell, int]) -> Set[FrozenSet[Cell]]:
    """Group a labelling into a set of regions, independent of the id values"""
    groups: Dict[int, Set[Cell]] = {}
    for cell, region in labels.items():
        groups.setdefault(region, set()).add(cell)
    return {frozenset(cells) for cells in groups.values()}
