import asyncio
import random
from uuid import uuid4

import pytest
from conftest import BORDER_PATH, STAIRCASE
from fastapi import HTTPException

from panelgen import models
from panelgen.engine.errors import PanelGenerationError
from panelgen.engine.fallback import FALLBACK_PANEL
from panelgen.engine.generator import generate_panel
from panelgen.engine.rules import validate
from panelgen.llm import get_llm
from panelgen.schemas import Color, PanelGenerate, PanelLLMResponse, SolutionCreate
from panelgen.services import PanelServices, SolutionServices
from panelgen.services.panel_services import panel_from_llm, panel_to_llm_example


def llm_answer(solution=STAIRCASE, **overrides) -> PanelLLMResponse:
    data = {
        "grid_size": 5,
        "start": {"x": 0, "y": 4},
        "end": {"x": 4, "y": 0},
        "elements": [
            {"type": "black_square", "x": 0, "y": 0},
            {"type": "white_square", "x": 3, "y": 3},
            {"type": "hexagon", "x": 2, "y": 2},
        ],
        "solution": [point.model_dump() for point in solution] if solution else None,
    }
    data.update(overrides)
    return PanelLLMResponse.model_validate(data)


class FakeLLM:
    def __init__(self, answer=None, error=None):
        self.answer = answer
        self.error = error
        self.prompts = []

    async def generate(self, prompt):
        self.prompts.append(prompt)
        if self.error:
            raise self.error
        return self.answer


@pytest.fixture
def fake_llm(monkeypatch):
    def install(llm):
        monkeypatch.setattr("panelgen.services.panel_services.get_llm", lambda model: llm)
        return llm
    return install


class TestLLMConversion:
    def test_answer_becomes_a_panel(self) -> None:
        panel = panel_from_llm(llm_answer(), difficulty=2, name="from llm")
        assert panel.name == "from llm"
        assert panel.difficulty == 2
        assert {symbol.kind for symbol in panel.symbols} == {"square", "hexagon"}
        assert panel.solution == STAIRCASE

    def test_wrong_solution_is_dropped(self) -> None:
        panel = panel_from_llm(llm_answer(solution=BORDER_PATH), difficulty=2)
        assert panel.solution is None

    def test_unknown_element_type(self) -> None:
        answer = llm_answer(elements=[{"type": "triangle", "x": 1, "y": 1}])
        with pytest.raises(PanelGenerationError):
            panel_from_llm(answer, difficulty=1)

    def test_empty_answer(self) -> None:
        with pytest.raises(PanelGenerationError):
            panel_from_llm(None, difficulty=1)

    def test_example_format_round_trips(self) -> None:
        panel = panel_from_llm(llm_answer(), difficulty=2)
        example = panel_to_llm_example(panel)
        assert example["grid_size"] == 5
        assert {"type": "black_square", "x": 0, "y": 0} in example["elements"]
        assert len(example["solution"]) == len(STAIRCASE)
        assert panel_from_llm(PanelLLMResponse.model_validate(example), difficulty=2) == panel

    def test_panels_outside_the_example_format(self) -> None:
        panel = generate_panel(6, 8, 1, rng=random.Random(0))
        assert panel_to_llm_example(panel) is None


class TestStorage:
    def test_stored_panel_loads_back_unchanged(self, db_session, separation_panel) -> None:
        services = PanelServices(db_session)
        panel = separation_panel.model_copy(update={"name": "stored", "solution": STAIRCASE})
        row = services.create_panel(panel, model="manual")
        assert row.symbol_count == 2
        assert services.load_panel(row.id) == panel

    def test_default_name(self, db_session, hexagon_panel) -> None:
        row = PanelServices(db_session).create_panel(hexagon_panel)
        assert row.name.startswith("Panel ")

    def test_listing_filters_and_orders(self, db_session, separation_panel, hexagon_panel) -> None:
        services = PanelServices(db_session)
        first = services.create_panel(separation_panel, name="first", model="manual")
        second = services.create_panel(hexagon_panel, name="second", model="random")
        assert [row.id for row in services.get_all_panels()] == [second.id, first.id]
        assert [row.id for row in services.get_all_panels(order="asc")] == [first.id, second.id]
        assert [row.id for row in services.get_all_panels(model="random")] == [second.id]
        assert len(services.get_all_panels(limit=1)) == 1

    def test_unknown_panel(self, db_session) -> None:
        with pytest.raises(HTTPException) as exc_info:
            PanelServices(db_session).get_panel_by_id(uuid4())
        assert exc_info.value.status_code == 404

    def test_delete_removes_the_panel_and_its_attempts(self, db_session, separation_panel) -> None:
        row = PanelServices(db_session).create_panel(separation_panel)
        SolutionServices(db_session).submit_solution(SolutionCreate(panel_id=row.id, path=list(STAIRCASE)))
        PanelServices(db_session).delete_panel(row.id)
        with pytest.raises(HTTPException):
            SolutionServices(db_session).list_solutions(row.id)
        assert db_session.query(models.Solution).count() == 0

    def test_solved_panels_become_examples(self, db_session, separation_panel, hexagon_panel) -> None:
        services = PanelServices(db_session)
        solved = services.create_panel(separation_panel)
        unsolved = services.create_panel(hexagon_panel)
        solutions = SolutionServices(db_session)
        solutions.submit_solution(SolutionCreate(panel_id=solved.id, path=list(STAIRCASE)))
        solutions.submit_solution(SolutionCreate(panel_id=unsolved.id, path=list(BORDER_PATH)))

        examples = services.example_panels(5)
        assert len(examples) == 1
        assert {"type": "white_square", "x": 3, "y": 3} in examples[0]["elements"]


class TestPanelSource:
    def test_random_source(self, db_session) -> None:
        panel = asyncio.run(PanelServices(db_session).request_panel(6, 7, 2, "random"))
        assert (panel.grid.width, panel.grid.height) == (6, 7)

    def test_llm_source(self, db_session, fake_llm) -> None:
        llm = fake_llm(FakeLLM(answer=llm_answer()))
        panel = asyncio.run(PanelServices(db_session).request_panel(5, 5, 3, "gemini-test"))
        assert panel.solution == STAIRCASE
        assert "Grid Size: 5" in llm.prompts[0]["user_prompt"]

    def test_llm_failure_serves_the_fallback(self, db_session, fake_llm) -> None:
        fake_llm(FakeLLM(error=RuntimeError("quota exceeded")))
        services = PanelServices(db_session)
        panels = [asyncio.run(services.request_panel(8, 8, 4, "gpt-test")) for _ in range(3)]
        assert all(panel == FALLBACK_PANEL for panel in panels)
        assert validate(panels[0], panels[0].solution)

    def test_broken_llm_answer_serves_the_fallback(self, db_session, fake_llm) -> None:
        fake_llm(FakeLLM(answer=llm_answer(start={"x": 2, "y": 2})))
        panel = asyncio.run(PanelServices(db_session).request_panel(5, 5, 1, "gemini-test"))
        assert panel is FALLBACK_PANEL

    def test_unknown_model_serves_the_fallback(self, db_session) -> None:
        panel = asyncio.run(PanelServices(db_session).request_panel(5, 5, 1, "mystery-model"))
        assert panel is FALLBACK_PANEL

    def test_generated_fallback_is_stored_as_such(self, db_session, fake_llm) -> None:
        fake_llm(FakeLLM(error=RuntimeError("offline")))
        config = PanelGenerate(name="try llm", model="gemini-test", width=5, height=5)
        row = asyncio.run(PanelServices(db_session).generate_panel(config))
        assert row.model == "fallback"
        assert row.name == "try llm"
        stored = PanelServices(db_session).load_panel(row.id)
        assert stored.symbols == FALLBACK_PANEL.symbols
        assert [s.color for s in stored.symbols if s.kind == "square"].count(Color.BLACK) == 2


def test_unknown_llm_name_is_refused() -> None:
    with pytest.raises(ValueError):
        get_llm("claude-test")
