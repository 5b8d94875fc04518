from enum import Enum
from typing import Annotated, Literal, Union
from pydantic import BaseModel, ConfigDict, Field

from panelgen.schemas.grid_schema import Point


class SymbolKind(str, Enum):
    DOT = "dot"
    HEXAGON = "hexagon"
    SQUARE = "square"
    STAR = "star"
    TRIANGLE = "triangle"
    ELIMINATION = "elimination"


class Color(str, Enum):
    WHITE = "white"
    BLACK = "black"
    RED = "red"
    BLUE = "blue"
    YELLOW = "yellow"
    GREEN = "green"
    ORANGE = "orange"
    PURPLE = "purple"


# kinds whose position is a node; all other kinds sit on cells
NODE_KINDS = frozenset({SymbolKind.DOT, SymbolKind.HEXAGON})


class _SymbolBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    position: Point

    @property
    def on_node(self) -> bool:
        return SymbolKind(self.kind) in NODE_KINDS


class Dot(_SymbolBase):
    kind: Literal["dot"] = "dot"


class Hexagon(_SymbolBase):
    kind: Literal["hexagon"] = "hexagon"


class Square(_SymbolBase):
    kind: Literal["square"] = "square"
    color: Color


class Star(_SymbolBase):
    kind: Literal["star"] = "star"
    color: Color


class Triangle(_SymbolBase):
    kind: Literal["triangle"] = "triangle"
    value: int = Field(ge=1, le=4) # number of the cell's edges the line must cover


class Elimination(_SymbolBase):
    kind: Literal["elimination"] = "elimination"


Symbol = Annotated[
    Union[Dot, Hexagon, Square, Star, Triangle, Elimination],
    Field(discriminator="kind"),
]
