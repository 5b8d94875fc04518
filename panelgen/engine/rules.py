"""
Rule validator.

`validate(panel, path)` decides whether a traced line solves a panel. The line rules
(endpoints, connectivity) run first; afterwards every symbol kind present on the panel is
checked by the predicate registered for it in `SYMBOL_RULES`. A new symbol kind plugs in by
adding a predicate with the signature `(context, symbols) -> bool`.
"""
import logging
from collections import Counter
from dataclasses import dataclass, field
from functools import cached_property
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from panelgen.engine.errors import InvalidPathError
from panelgen.engine.regions import Cell, decompose, path_edges, edge_key
from panelgen.schemas.grid_schema import Point
from panelgen.schemas.panel_schema import Panel
from panelgen.schemas.symbol_schema import SymbolKind

logger = logging.getLogger(__name__)


@dataclass
class RuleContext:
    """Everything a predicate may look at. Regions are only computed when a rule asks."""
    panel: Panel
    path: Tuple[Point, ...]
    edges: set = field(init=False)

    def __post_init__(self):
        self.edges = path_edges(self.path)

    @cached_property
    def regions(self) -> Dict[Cell, int]:
        return decompose(self.panel.grid, self.path)

    def region_of(self, cell: Point) -> Optional[int]:
        return self.regions.get(cell.as_tuple())


# --- line rules ---

def check_endpoints(ctx: RuleContext) -> bool:
    return ctx.path[0] == ctx.panel.start and ctx.path[-1] == ctx.panel.end


def check_connectivity(ctx: RuleContext) -> bool:
    """Every step follows a traversable edge and no node is visited twice"""
    grid = ctx.panel.grid
    if len(set(ctx.path)) != len(ctx.path):
        return False
    if not grid.in_bounds(ctx.path[0]) or grid.is_blocked(ctx.path[0]):
        return False
    return all(grid.can_traverse(a, b) for a, b in zip(ctx.path, ctx.path[1:]))


# --- symbol rules ---

def check_must_visit(ctx: RuleContext, symbols: list) -> bool:
    """Dots and hexagons: the line passes through the symbol's node"""
    visited = set(ctx.path)
    return all(symbol.position in visited for symbol in symbols)


def check_separation(ctx: RuleContext, symbols: list) -> bool:
    """Squares of different colors may not share a region"""
    colors_by_region: Dict[int, set] = {}
    for square in symbols:
        region = ctx.region_of(square.position)
        colors_by_region.setdefault(region, set()).add(square.color)
    return all(len(colors) < 2 for colors in colors_by_region.values())


def check_triangles(ctx: RuleContext, symbols: list) -> bool:
    """The line covers exactly `value` edges of the triangle's cell"""
    for triangle in symbols:
        x, y = triangle.position.x, triangle.position.y
        corners = [Point(x, y), Point(x + 1, y), Point(x + 1, y + 1), Point(x, y + 1)]
        sides = [edge_key(a, b) for a, b in zip(corners, corners[1:] + corners[:1])]
        if sum(1 for side in sides if side in ctx.edges) != triangle.value:
            return False
    return True


def check_stars(ctx: RuleContext, symbols: list) -> bool:
    """Each star shares its region with exactly one other star or square of its color"""
    counts = Counter()
    for symbol in ctx.panel.symbols:
        if symbol.kind in (SymbolKind.STAR, SymbolKind.SQUARE):
            counts[(ctx.region_of(symbol.position), symbol.color)] += 1
    return all(counts[(ctx.region_of(star.position), star.color)] == 2 for star in symbols)


def check_elimination(ctx: RuleContext, symbols: list) -> bool:
    # TODO: cancel exactly one violated symbol in the elimination's region
    return True


SymbolRule = Callable[[RuleContext, list], bool]

SYMBOL_RULES: Dict[str, SymbolRule] = {
    SymbolKind.DOT.value: check_must_visit,
    SymbolKind.HEXAGON.value: check_must_visit,
    SymbolKind.SQUARE.value: check_separation,
    SymbolKind.TRIANGLE.value: check_triangles,
    SymbolKind.STAR.value: check_stars,
    SymbolKind.ELIMINATION.value: check_elimination,
}


def _context(panel: Panel, path: Sequence[Point]) -> RuleContext:
    if panel is None or panel.grid is None:
        raise InvalidPathError("panel with start and end is required")
    if path is None or len(path) < 2:
        raise InvalidPathError("a path needs at least two points")
    return RuleContext(panel=panel, path=tuple(path))


def _symbols_by_kind(panel: Panel) -> Dict[str, list]:
    grouped: Dict[str, list] = {}
    for symbol in panel.symbols:
        grouped.setdefault(symbol.kind, []).append(symbol)
    return grouped


def explain(panel: Panel, path: Sequence[Point]) -> List[str]:
    """Names of every rule the path breaks; empty when the path solves the panel"""
    ctx = _context(panel, path)
    if not check_endpoints(ctx):
        return ["endpoints"]
    if not check_connectivity(ctx):
        return ["connectivity"]

    failed = []
    for kind, symbols in _symbols_by_kind(panel).items():
        if not SYMBOL_RULES[kind](ctx, symbols):
            failed.append(kind)
    return failed


def validate(panel: Panel, path: Sequence[Point]) -> bool:
    ctx = _context(panel, path)
    if not (check_endpoints(ctx) and check_connectivity(ctx)):
        return False
    for kind, symbols in _symbols_by_kind(panel).items():
        if not SYMBOL_RULES[kind](ctx, symbols):
            logger.debug("Path breaks the %s rule", kind)
            return False
    return True
