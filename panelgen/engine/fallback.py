from panelgen.schemas.grid_schema import Grid, Point
from panelgen.schemas.panel_schema import Panel
from panelgen.schemas.symbol_schema import Color, Hexagon, Square


# Served whenever a panel source fails. The line runs up the x=2 column through the hexagon,
# leaving both black squares to its left and both white squares to its right.
FALLBACK_PANEL = Panel(
    name="Fallback panel",
    difficulty=1,
    grid=Grid.build(5, 5, start=Point(0, 4), end=Point(4, 0)),
    symbols=(
        Square(position=Point(0, 0), color=Color.BLACK),
        Square(position=Point(1, 2), color=Color.BLACK),
        Square(position=Point(2, 1), color=Color.WHITE),
        Square(position=Point(3, 3), color=Color.WHITE),
        Hexagon(position=Point(2, 2)),
    ),
    solution=(
        Point(0, 4), Point(1, 4), Point(2, 4), Point(2, 3), Point(2, 2),
        Point(2, 1), Point(2, 0), Point(3, 0), Point(4, 0),
    ),
)


def fallback_panel() -> Panel:
    return FALLBACK_PANEL
