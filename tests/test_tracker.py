from functools import reduce

import pytest
from conftest import BORDER_PATH, STAIRCASE, pts
from pydantic import TypeAdapter

from panelgen.engine.tracker import apply_event, begin_panel_request, new_trace, receive_panel
from panelgen.schemas import (FeedbackElapsed, Grid, Panel, Point, PointerDown, PointerMove, PointerUp, ResetTrace,
                              TraceEvent, TracePhase, TraceState)


def trace(state, path):
    """Press on the first point and drag through the rest"""
    events = [PointerDown(point=path[0])] + [PointerMove(point=point) for point in path[1:]]
    return reduce(apply_event, events, state)


@pytest.fixture
def walled_panel():
    grid = Grid.build(8, 8, start=Point(0, 0), end=Point(7, 7), walls=[Point(3, 3)])
    return Panel(grid=grid, difficulty=2)


class TestDrawing:
    def test_press_away_from_start_is_ignored(self, separation_panel) -> None:
        state = apply_event(new_trace(separation_panel), PointerDown(point=Point(2, 2)))
        assert state.phase == TracePhase.IDLE
        assert state.path == ()

    def test_press_on_start_begins_a_path(self, separation_panel) -> None:
        state = apply_event(new_trace(separation_panel), PointerDown(point=Point(0, 4)))
        assert state.phase == TracePhase.DRAWING
        assert state.path == (Point(0, 4),)

    def test_moves_extend_along_edges(self, separation_panel) -> None:
        state = trace(new_trace(separation_panel), STAIRCASE[:5])
        assert state.path == STAIRCASE[:5]

    def test_jump_is_refused(self, separation_panel) -> None:
        state = trace(new_trace(separation_panel), pts((0, 4), (2, 4)))
        assert state.path == pts((0, 4))

    def test_moving_back_retracts(self, separation_panel) -> None:
        state = trace(new_trace(separation_panel), pts((0, 4), (1, 4), (1, 3), (1, 4)))
        assert state.path == pts((0, 4), (1, 4))

    def test_loop_onto_older_node_is_refused(self, separation_panel) -> None:
        state = trace(new_trace(separation_panel), pts((0, 4), (1, 4), (1, 3), (0, 3), (0, 4)))
        assert state.path == pts((0, 4), (1, 4), (1, 3), (0, 3))

    def test_wall_stops_the_line(self, walled_panel) -> None:
        path = pts((0, 0), (1, 0), (2, 0), (3, 0), (3, 1), (3, 2))
        state = trace(new_trace(walled_panel), path)
        assert state.path == path
        refused = apply_event(state, PointerMove(point=Point(3, 3)))
        assert refused.path == path
        assert refused.phase == TracePhase.DRAWING

    def test_events_never_mutate_the_state(self, separation_panel) -> None:
        state = new_trace(separation_panel)
        apply_event(state, PointerDown(point=Point(0, 4)))
        assert state.phase == TracePhase.IDLE and state.path == ()

    def test_moves_without_a_press_do_nothing(self, separation_panel) -> None:
        state = new_trace(separation_panel)
        assert apply_event(state, PointerMove(point=Point(0, 3))) == state
        assert apply_event(state, PointerUp()) == state


class TestRelease:
    def test_release_on_end_with_valid_path(self, separation_panel) -> None:
        state = apply_event(trace(new_trace(separation_panel), STAIRCASE), PointerUp())
        assert state.phase == TracePhase.COMPLETED
        assert state.verdict is True

    def test_release_on_end_with_invalid_path(self, separation_panel) -> None:
        state = apply_event(trace(new_trace(separation_panel), BORDER_PATH), PointerUp())
        assert state.phase == TracePhase.COMPLETED
        assert state.verdict is False
        # a failed attempt may be redrawn right away
        retry = apply_event(state, PointerDown(point=Point(0, 4)))
        assert retry.phase == TracePhase.DRAWING
        assert retry.path == pts((0, 4))
        assert retry.verdict is None

    def test_solved_trace_waits_for_reset(self, separation_panel) -> None:
        solved = apply_event(trace(new_trace(separation_panel), STAIRCASE), PointerUp())
        assert apply_event(solved, PointerDown(point=Point(0, 4))) == solved
        reset = apply_event(solved, ResetTrace())
        assert reset.phase == TracePhase.IDLE
        assert reset.path == () and reset.verdict is None

    def test_release_before_end_is_rejected(self, separation_panel) -> None:
        state = apply_event(trace(new_trace(separation_panel), STAIRCASE[:4]), PointerUp())
        assert state.phase == TracePhase.REJECTED
        assert state.verdict is None
        assert apply_event(state, PointerMove(point=STAIRCASE[4])) == state

        idle = apply_event(state, FeedbackElapsed())
        assert idle.phase == TracePhase.IDLE
        assert idle.path == ()

    def test_press_during_feedback_starts_over(self, separation_panel) -> None:
        rejected = apply_event(trace(new_trace(separation_panel), STAIRCASE[:3]), PointerUp())
        state = apply_event(rejected, PointerDown(point=Point(0, 4)))
        assert state.phase == TracePhase.DRAWING
        assert state.path == pts((0, 4))


class TestPanelReplacement:
    def test_new_panel_resets_the_trace(self, separation_panel, hexagon_panel) -> None:
        drawing = trace(new_trace(separation_panel), STAIRCASE[:4])
        waiting, ticket = begin_panel_request(drawing)
        state = receive_panel(waiting, ticket, hexagon_panel)
        assert state.panel == hexagon_panel
        assert state.phase == TracePhase.IDLE
        assert state.path == ()

    def test_stale_panel_is_discarded(self, separation_panel, hexagon_panel, walled_panel) -> None:
        state, first = begin_panel_request(new_trace(separation_panel))
        state, second = begin_panel_request(state)
        assert second > first

        state = receive_panel(state, second, walled_panel)
        late = receive_panel(state, first, hexagon_panel)
        assert late.panel == walled_panel
        assert late is state

    def test_no_panel_ignores_pointer_events(self) -> None:
        state = TraceState()
        assert apply_event(state, PointerDown(point=Point(0, 0))) == state


def test_events_parse_from_json() -> None:
    adapter = TypeAdapter(TraceEvent)
    move = adapter.validate_python({"type": "move", "point": {"x": 1, "y": 2}})
    assert isinstance(move, PointerMove) and move.point == Point(1, 2)
    assert isinstance(adapter.validate_python({"type": "up"}), PointerUp)
    assert isinstance(adapter.validate_python({"type": "feedback_elapsed"}), FeedbackElapsed)
