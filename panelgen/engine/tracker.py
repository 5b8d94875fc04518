"""
Path tracker: a pure state machine over pointer events.

The caller owns the `TraceState` and feeds every event through `apply_event`, which returns
the next state. Panel loading goes through `begin_panel_request` / `receive_panel` so that a
late answer to an older request never replaces a newer panel.
"""
import logging
from typing import Tuple

from panelgen.engine.rules import validate
from panelgen.schemas.grid_schema import Point
from panelgen.schemas.panel_schema import Panel
from panelgen.schemas.trace_schema import (TracePhase, TraceState, PointerDown, PointerMove, PointerUp,
                                           ResetTrace, FeedbackElapsed)

logger = logging.getLogger(__name__)


def new_trace(panel: Panel) -> TraceState:
    return TraceState(panel=panel)


def _idle(state: TraceState) -> TraceState:
    return state.model_copy(update={"path": (), "phase": TracePhase.IDLE, "verdict": None})


def _pointer_down(state: TraceState, point: Point) -> TraceState:
    if state.phase == TracePhase.DRAWING:
        return state
    if state.phase == TracePhase.COMPLETED and state.verdict:
        # solved panels stay solved until reset
        return state
    if point != state.panel.start:
        return state
    return state.model_copy(update={"path": (point,), "phase": TracePhase.DRAWING, "verdict": None})


def _pointer_move(state: TraceState, point: Point) -> TraceState:
    if state.phase != TracePhase.DRAWING:
        return state
    path = state.path
    last = path[-1]
    if point == last:
        return state

    # moving back onto the previous node undoes the last step
    if len(path) > 1 and point == path[-2]:
        return state.model_copy(update={"path": path[:-1]})

    grid = state.panel.grid
    if point in path or not grid.can_traverse(last, point):
        return state
    return state.model_copy(update={"path": path + (point,)})


def _pointer_up(state: TraceState) -> TraceState:
    if state.phase != TracePhase.DRAWING:
        return state
    if state.path[-1] == state.panel.end and len(state.path) > 1:
        verdict = validate(state.panel, state.path)
        logger.info("Trace completed with %d points, valid=%s", len(state.path), verdict)
        return state.model_copy(update={"phase": TracePhase.COMPLETED, "verdict": verdict})
    return state.model_copy(update={"phase": TracePhase.REJECTED})


def apply_event(state: TraceState, event) -> TraceState:
    """Return the state after `event`. Events that do not apply leave the state unchanged."""
    if isinstance(event, ResetTrace):
        return _idle(state)
    if state.panel is None:
        return state

    if state.phase == TracePhase.REJECTED:
        if isinstance(event, FeedbackElapsed):
            return _idle(state)
        if isinstance(event, PointerDown):
            return _pointer_down(_idle(state), event.point)
        return state

    if isinstance(event, PointerDown):
        return _pointer_down(state, event.point)
    if isinstance(event, PointerMove):
        return _pointer_move(state, event.point)
    if isinstance(event, PointerUp):
        return _pointer_up(state)
    return state


def begin_panel_request(state: TraceState) -> Tuple[TraceState, int]:
    """Start waiting for a new panel. Returns the ticket the answer must present."""
    ticket = state.generation + 1
    return state.model_copy(update={"generation": ticket}), ticket


def receive_panel(state: TraceState, ticket: int, panel: Panel) -> TraceState:
    """Install `panel` if `ticket` belongs to the latest request; a replaced panel resets the trace."""
    if ticket != state.generation:
        logger.info("Discarding stale panel (ticket %d, latest %d)", ticket, state.generation)
        return state
    return TraceState(panel=panel, generation=state.generation)
