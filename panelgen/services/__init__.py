from panelgen.services.panel_services import PanelServices
from panelgen.services.solution_services import SolutionServices
