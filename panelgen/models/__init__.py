from panelgen.models.panel_model import Panel
from panelgen.models.solution_model import Solution
