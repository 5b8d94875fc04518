import logging
from datetime import datetime, timezone
from typing import List, Optional
from uuid import uuid4

from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError

from panelgen import models
from panelgen.core.config import settings
from panelgen.engine.errors import PanelGenerationError
from panelgen.engine.fallback import fallback_panel
from panelgen.engine.generator import generate_panel
from panelgen.engine.rules import validate
from panelgen.llm import get_llm
from panelgen.prompts.prompt_manager import get_prompt
from panelgen.schemas import (Panel, PanelGenerate, PanelLLMResponse, PanelRead, PanelSummary, Grid, Point, Square,
                              Hexagon, Color, SymbolKind)

logger = logging.getLogger(__name__)

LLM_ELEMENT_COLORS = {"black_square": Color.BLACK, "white_square": Color.WHITE}


def panel_from_llm(response: PanelLLMResponse, difficulty: int, name: Optional[str] = None) -> Panel:
    """Convert the flat LLM answer into a Panel. Raises on anything that breaks a panel invariant."""
    if response is None:
        raise PanelGenerationError("LLM returned no panel")

    size = response.grid_size
    grid = Grid.build(size, size, start=Point(response.start.x, response.start.y),
                      end=Point(response.end.x, response.end.y))

    symbols = []
    for element in response.elements:
        position = Point(element.x, element.y)
        if element.type == "hexagon":
            symbols.append(Hexagon(position=position))
        elif element.type in LLM_ELEMENT_COLORS:
            symbols.append(Square(position=position, color=LLM_ELEMENT_COLORS[element.type]))
        else:
            raise PanelGenerationError(f"Unknown element type: {element.type}")

    panel = Panel(grid=grid, symbols=tuple(symbols), difficulty=difficulty, name=name)

    if response.solution:
        solution = tuple(Point(p.x, p.y) for p in response.solution)
        if len(solution) >= 2 and validate(panel, solution):
            panel = panel.model_copy(update={"solution": solution})
        else:
            logger.warning("Dropping LLM solution that does not solve its own panel")
    return panel


def panel_to_llm_example(panel: Panel) -> Optional[dict]:
    """Flat example in the LLM schema, or None if the panel uses features the LLM schema lacks"""
    grid = panel.grid
    if grid.width != grid.height or grid.wall_nodes() or grid.wall_cells():
        return None
    elements = []
    for symbol in panel.symbols:
        if symbol.kind == SymbolKind.HEXAGON:
            elements.append({"type": "hexagon", "x": symbol.position.x, "y": symbol.position.y})
        elif symbol.kind == SymbolKind.SQUARE and symbol.color in (Color.BLACK, Color.WHITE):
            elements.append({"type": f"{symbol.color.value}_square", "x": symbol.position.x, "y": symbol.position.y})
        else:
            return None
    example = {
        "grid_size": grid.width,
        "start": grid.start.model_dump(),
        "end": grid.end.model_dump(),
        "elements": elements,
    }
    if panel.solution:
        example["solution"] = [point.model_dump() for point in panel.solution]
    return example


class PanelServices:
    """ Handles all panel related DB operation"""

    def __init__(self, db):
        self.db = db

    # create panel
    def create_panel(self, panel: Panel, name: Optional[str] = None, model: str = "manual") -> models.Panel:
        """Insert a panel. Either the whole panel is stored or nothing is."""
        row = models.Panel(
            id=uuid4(),
            name=name or panel.name or f"Panel {datetime.now(timezone.utc):%Y-%m-%d %H:%M:%S}",
            model=model,
            width=panel.grid.width,
            height=panel.grid.height,
            difficulty=panel.difficulty,
            wall_space=panel.grid.wall_space.value,
            grid_data=panel.grid.model_dump(mode="json"),
            symbols_data=[symbol.model_dump(mode="json") for symbol in panel.symbols],
            solution_path=[point.model_dump() for point in panel.solution] if panel.solution else None,
        )
        try:
            self.db.add(row)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception("Storing panel %s failed", row.id)
            raise
        self.db.refresh(row)
        logger.info("Stored panel %s (%s, %dx%d)", row.id, model, row.width, row.height)
        return row

    # get all panels
    def get_all_panels(
            self,
            limit: Optional[int] = None,
            difficulty: Optional[int] = None,
            model: Optional[str] = None,
            order: Optional[str] = "desc"  # newest first
    ) -> List[models.Panel]:
        """Fetch panels with filter"""
        query = self.db.query(models.Panel)

        if difficulty:
            query = query.filter(models.Panel.difficulty == difficulty)
        if model:
            query = query.filter(models.Panel.model == model)
        sort_column = models.Panel.created_at
        query = query.order_by(sort_column.asc() if order == "asc" else sort_column.desc())

        return query.limit(limit or settings.PANEL_LIST_LIMIT).all()

    # get one panel by id
    def get_panel_by_id(self, panel_id) -> models.Panel:
        """Fetch panel by id"""
        panel = self.db.query(models.Panel).filter(models.Panel.id == panel_id).first()
        if not panel:
            raise HTTPException(status_code=404, detail="Panel not found")
        return panel

    def load_panel(self, panel_id) -> Panel:
        return self.to_panel(self.get_panel_by_id(panel_id))

    @staticmethod
    def to_panel(row: models.Panel) -> Panel:
        """Rebuild the domain panel from its stored row"""
        return Panel.model_validate({
            "name": row.name,
            "difficulty": row.difficulty,
            "grid": row.grid_data,
            "symbols": row.symbols_data,
            "solution": row.solution_path,
        })

    def to_read(self, row: models.Panel) -> PanelRead:
        summary = PanelSummary.model_validate(row)
        return PanelRead(**summary.model_dump(), panel=self.to_panel(row))

    # delete one panel
    def delete_panel(self, panel_id):
        """Fetch panel by id and delete"""
        panel = self.get_panel_by_id(panel_id)
        try:
            self.db.delete(panel)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        logger.info("Deleted panel %s", panel_id)

    def example_panels(self, limit: int) -> List[dict]:
        """Stored panels that were solved at least once, in the LLM example format"""
        rows = (self.db.query(models.Panel)
                .join(models.Solution)
                .filter(models.Solution.is_correct.is_(True))
                .distinct()
                .limit(limit)
                .all())
        examples = []
        for row in rows:
            example = panel_to_llm_example(self.to_panel(row))
            if example:
                examples.append(example)
        return examples

    # generate panel
    async def request_panel(self, width: int, height: int, difficulty: int, model: str,
                            name: Optional[str] = None) -> Panel:
        """
        Ask a panel source for a new panel. "random" uses the procedural generator, any other
        model name goes to the LLM. LLM failures of any kind fall back to the fixed panel.
        """
        if model == "random":
            return generate_panel(width, height, difficulty, name=name)

        if width != height:
            logger.info("LLM panels are square, using %dx%d", width, width)

        try:
            examples = self.example_panels(settings.EXAMPLE_PANEL_COUNT)
            prompt = get_prompt(grid_size=width, difficulty=difficulty, example_panels=examples)
            llm = get_llm(model)
            generated = await llm.generate(prompt)
            return panel_from_llm(generated, difficulty, name)
        except Exception as e:
            logger.warning("Panel generation with %s failed, serving fallback panel: %s", model, e)
            return fallback_panel()

    async def generate_panel(self, config: PanelGenerate) -> models.Panel:
        """Request a panel and store it"""
        panel = await self.request_panel(config.width, config.height, config.difficulty, config.model,
                                         name=config.name)
        source = config.model
        if panel is fallback_panel():
            source = "fallback"
        return self.create_panel(panel, name=config.name, model=source)
