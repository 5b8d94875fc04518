from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import Optional, List, Tuple
from uuid import UUID
from datetime import datetime

from panelgen.schemas.grid_schema import Grid, Point
from panelgen.schemas.symbol_schema import Symbol


class Panel(BaseModel):
    """One complete puzzle instance: grid, symbols and an optional known solution"""
    model_config = ConfigDict(frozen=True)

    grid: Grid
    symbols: Tuple[Symbol, ...] = ()
    solution: Optional[Tuple[Point, ...]] = None
    difficulty: int = Field(default=1, ge=1, le=10)
    name: Optional[str] = None

    @model_validator(mode="after")
    def check_symbols(self):
        grid = self.grid
        for symbol in self.symbols:
            pos = symbol.position
            if symbol.on_node:
                if not grid.in_bounds(pos):
                    raise ValueError(f"{symbol.kind} at node {pos.as_tuple()} is outside the grid")
                if grid.is_blocked(pos):
                    raise ValueError(f"{symbol.kind} at node {pos.as_tuple()} sits on a wall")
            else:
                if not grid.in_cell_bounds(pos.x, pos.y):
                    raise ValueError(f"{symbol.kind} at cell {pos.as_tuple()} is outside the grid")
                if grid.is_wall_cell(pos.x, pos.y):
                    raise ValueError(f"{symbol.kind} at cell {pos.as_tuple()} sits on a wall")
        return self

    @property
    def start(self) -> Point:
        return self.grid.start

    @property
    def end(self) -> Point:
        return self.grid.end

    def symbols_of(self, kind: str) -> list:
        return [symbol for symbol in self.symbols if symbol.kind == kind]


# Data sent by user to store an existing panel
class PanelCreate(BaseModel):
    name: Optional[str] = None
    model: str = "manual"
    panel: Panel


# Data sent by user to request a new panel
class PanelGenerate(BaseModel):
    name: Optional[str] = None
    model: str = "random" # "random", "gemini-..." or "gpt-..."
    width: int = Field(default=8, ge=3, le=20)
    height: int = Field(default=8, ge=3, le=20)
    difficulty: int = Field(default=1, ge=1, le=10)


class PanelSummary(BaseModel):
    id: UUID
    name: str
    model: str
    width: int
    height: int
    difficulty: int
    symbol_count: int
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class PanelRead(PanelSummary):
    panel: Panel


# LLM generation (flat schema so structured output stays simple)
class PointGenerate(BaseModel):
    x: int
    y: int


class ElementGenerate(BaseModel):
    type: str # "black_square", "white_square" or "hexagon"
    x: int
    y: int


class PanelLLMResponse(BaseModel):
    grid_size: int
    start: PointGenerate
    end: PointGenerate
    elements: List[ElementGenerate]
    solution: Optional[List[PointGenerate]] = None
