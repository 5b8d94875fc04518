from panelgen.schemas.grid_schema import Point, CellType, WallSpace, Grid
from panelgen.schemas.symbol_schema import (SymbolKind, Color, NODE_KINDS, Symbol, Dot, Hexagon, Square, Star,
                                            Triangle, Elimination)
from panelgen.schemas.panel_schema import (Panel, PanelCreate, PanelGenerate, PanelSummary, PanelRead,
                                           PanelLLMResponse, ElementGenerate, PointGenerate)
from panelgen.schemas.solution_schema import SolutionCreate, SolutionResult, SolutionRead
from panelgen.schemas.trace_schema import (TracePhase, TraceState, TraceEvent, PointerDown, PointerMove, PointerUp,
                                           ResetTrace, FeedbackElapsed)
