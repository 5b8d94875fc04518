import logging
from uuid import uuid4, UUID
from typing import List

from sqlalchemy.exc import SQLAlchemyError

from panelgen import models
from panelgen.engine.rules import explain
from panelgen.schemas import SolutionCreate, SolutionResult
from panelgen.services.panel_services import PanelServices

logger = logging.getLogger(__name__)


class SolutionServices:
    """ Validates and stores solution attempts"""

    def __init__(self, db):
        self.db = db
        self.panel_services = PanelServices(db)

    def submit_solution(self, solution: SolutionCreate) -> SolutionResult:
        """Validate a path against its panel and store the attempt. Unknown panels raise 404."""
        panel = self.panel_services.load_panel(solution.panel_id)

        failed_rules = explain(panel, solution.path)
        valid = not failed_rules
        logger.info("Solution for panel %s: valid=%s %s", solution.panel_id, valid, failed_rules or "")

        attempt = models.Solution(
            id=uuid4(),
            panel_id=solution.panel_id,
            path=[point.model_dump() for point in solution.path],
            is_correct=valid,
            solve_time=solution.solve_time,
        )
        try:
            self.db.add(attempt)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception("Storing solution for panel %s failed", solution.panel_id)
            raise

        return SolutionResult(valid=valid, solution_id=attempt.id, failed_rules=failed_rules)

    def list_solutions(self, panel_id: UUID) -> List[models.Solution]:
        """Attempts for one panel, newest first"""
        self.panel_services.get_panel_by_id(panel_id)
        return (self.db.query(models.Solution)
                .filter(models.Solution.panel_id == panel_id)
                .order_by(models.Solution.created_at.desc())
                .all())
