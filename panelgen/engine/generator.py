"""
Procedural panel generation: walls and symbols scattered with difficulty-scaled density.
No solvability guarantee is made.
"""
import logging
import math
import random
from enum import Enum
from typing import List, Optional, Set, Tuple

from panelgen.core.config import settings
from panelgen.schemas.grid_schema import Grid, Point, WallSpace
from panelgen.schemas.panel_schema import Panel
from panelgen.schemas.symbol_schema import Color, Dot, Hexagon, Square, SymbolKind

logger = logging.getLogger(__name__)

SYMBOL_KINDS = [SymbolKind.DOT, SymbolKind.SQUARE, SymbolKind.HEXAGON]
SYMBOL_COLORS = [Color.WHITE, Color.BLACK, Color.RED, Color.BLUE, Color.YELLOW]


class EndpointPlacement(str, Enum):
    CORNER = "corner" # start top-left, end bottom-right
    BORDER = "border" # any two distinct border nodes


def wall_density(difficulty: int) -> float:
    return min(0.1 + 0.05 * (difficulty - 1), 0.3)


def symbol_count(difficulty: int, rng: random.Random) -> int:
    return math.floor(2 * difficulty + rng.random() * 3)


def border_nodes(width: int, height: int) -> List[Point]:
    nodes = []
    for y in range(height):
        for x in range(width):
            if x in (0, width - 1) or y in (0, height - 1):
                nodes.append(Point(x, y))
    return nodes


def pick_endpoints(width: int, height: int, placement: EndpointPlacement,
                   rng: random.Random) -> Tuple[Point, Point]:
    if placement == EndpointPlacement.CORNER:
        return Point(0, 0), Point(width - 1, height - 1)
    start, end = rng.sample(border_nodes(width, height), 2)
    return start, end


def scatter_walls(width: int, height: int, start: Point, end: Point, density: float,
                  wall_space: WallSpace, rng: random.Random) -> List[Point]:
    """Each eligible node (or cell) independently becomes a wall with probability `density`"""
    walls = []
    if wall_space == WallSpace.NODE:
        for y in range(height):
            for x in range(width):
                point = Point(x, y)
                if point in (start, end):
                    continue
                if rng.random() < density:
                    walls.append(point)
    else:
        endpoints = {start.as_tuple(), end.as_tuple()}
        for y in range(height - 1):
            for x in range(width - 1):
                corners = {(x, y), (x + 1, y), (x, y + 1), (x + 1, y + 1)}
                # a wall cell touching start/end would trap the line
                if corners & endpoints:
                    continue
                if rng.random() < density:
                    walls.append(Point(x, y))
    return walls


def place_symbols(grid: Grid, count: int, rng: random.Random, max_attempts: int) -> list:
    """
    Draw `count` symbols. A candidate coordinate is redrawn while it is a wall, start/end or
    already holds a symbol of the same space; after `max_attempts` the symbol is skipped.
    """
    symbols = []
    taken_nodes: Set[Tuple[int, int]] = {grid.start.as_tuple(), grid.end.as_tuple()}
    taken_cells: Set[Tuple[int, int]] = set()

    for index in range(count):
        kind = rng.choice(SYMBOL_KINDS)
        color = rng.choice(SYMBOL_COLORS)
        on_node = kind != SymbolKind.SQUARE

        position = None
        for _ in range(max_attempts):
            if on_node:
                candidate = Point(rng.randrange(grid.width), rng.randrange(grid.height))
                if candidate.as_tuple() in taken_nodes or grid.is_blocked(candidate):
                    continue
            else:
                candidate = Point(rng.randrange(grid.width - 1), rng.randrange(grid.height - 1))
                if candidate.as_tuple() in taken_cells or grid.is_wall_cell(candidate.x, candidate.y):
                    continue
            position = candidate
            break

        if position is None:
            logger.debug("No free spot for symbol %d (%s) after %d attempts, skipping",
                         index, kind.value, max_attempts)
            continue

        if kind == SymbolKind.DOT:
            symbols.append(Dot(position=position))
            taken_nodes.add(position.as_tuple())
        elif kind == SymbolKind.HEXAGON:
            symbols.append(Hexagon(position=position))
            taken_nodes.add(position.as_tuple())
        else:
            symbols.append(Square(position=position, color=color))
            taken_cells.add(position.as_tuple())

    return symbols


def generate_panel(
        width: int,
        height: int,
        difficulty: int,
        placement: Optional[EndpointPlacement] = None,
        wall_space: Optional[WallSpace] = None,
        rng: Optional[random.Random] = None,
        max_attempts: Optional[int] = None,
        name: Optional[str] = None,
) -> Panel:
    """Generate a random panel. Policy arguments default to the configured settings."""
    rng = rng or random.Random()
    placement = EndpointPlacement(placement or settings.ENDPOINT_PLACEMENT)
    wall_space = WallSpace(wall_space or settings.WALL_SPACE)
    max_attempts = max_attempts or settings.MAX_PLACEMENT_ATTEMPTS

    start, end = pick_endpoints(width, height, placement, rng)
    walls = scatter_walls(width, height, start, end, wall_density(difficulty), wall_space, rng)
    grid = Grid.build(width, height, start, end, walls=walls, wall_space=wall_space)

    requested = symbol_count(difficulty, rng)
    symbols = place_symbols(grid, requested, rng, max_attempts)
    logger.info("Generated %dx%d panel (difficulty %d): %d walls, %d/%d symbols",
                width, height, difficulty, len(walls), len(symbols), requested)

    return Panel(grid=grid, symbols=tuple(symbols), difficulty=difficulty, name=name)
