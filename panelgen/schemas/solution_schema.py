from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List
from uuid import UUID
from datetime import datetime

from panelgen.schemas.grid_schema import Point


class SolutionCreate(BaseModel):
    panel_id: UUID
    path: List[Point] = Field(min_length=2)
    solve_time: Optional[float] = None # seconds


class SolutionResult(BaseModel):
    valid: bool
    solution_id: UUID
    failed_rules: List[str] = []


class SolutionRead(BaseModel):
    id: UUID
    panel_id: UUID
    path: List[Point]
    is_correct: bool
    solve_time: Optional[float] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
