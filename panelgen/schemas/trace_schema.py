from enum import Enum
from typing import Annotated, Literal, Optional, Tuple, Union
from pydantic import BaseModel, ConfigDict, Field

from panelgen.schemas.grid_schema import Point
from panelgen.schemas.panel_schema import Panel


class TracePhase(str, Enum):
    IDLE = "idle"
    DRAWING = "drawing"
    COMPLETED = "completed"
    REJECTED = "rejected" # released before reaching the end, waiting for feedback to elapse


# Input events, already snapped to the nearest grid node by the UI
class PointerDown(BaseModel):
    type: Literal["down"] = "down"
    point: Point


class PointerMove(BaseModel):
    type: Literal["move"] = "move"
    point: Point


class PointerUp(BaseModel):
    type: Literal["up"] = "up"


class ResetTrace(BaseModel):
    type: Literal["reset"] = "reset"


class FeedbackElapsed(BaseModel):
    type: Literal["feedback_elapsed"] = "feedback_elapsed"


TraceEvent = Annotated[
    Union[PointerDown, PointerMove, PointerUp, ResetTrace, FeedbackElapsed],
    Field(discriminator="type"),
]


class TraceState(BaseModel):
    """Caller-owned state of one solving session"""
    model_config = ConfigDict(frozen=True)

    panel: Optional[Panel] = None
    path: Tuple[Point, ...] = ()
    phase: TracePhase = TracePhase.IDLE
    verdict: Optional[bool] = None # set once a completed path was validated
    generation: int = 0 # ticket of the latest panel request
