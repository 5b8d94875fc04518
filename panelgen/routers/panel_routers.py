# import moduls/libraries
import json
from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse, Response
from sqlalchemy.orm import Session
from typing import List, Optional
from uuid import UUID


# import form project
from panelgen.core.database import get_db
from panelgen.schemas import PanelCreate, PanelGenerate, PanelRead, PanelSummary
from panelgen.services import PanelServices
from panelgen.visualization.panel_visualization import generate_panel_visualization


router = APIRouter()


# Store an existing panel
@router.post("/", response_model=PanelRead, status_code=201)
async def create_panel(panel_data: PanelCreate, db: Session = Depends(get_db)):
    """Store a panel supplied by the client"""
    services = PanelServices(db)
    row = services.create_panel(panel_data.panel, name=panel_data.name, model=panel_data.model)
    return services.to_read(row)


# Generate panel (random generator or LLM endpoint)
@router.post("/generate", response_model=PanelRead, status_code=201)
async def generate_panel(panel_generate: PanelGenerate, db: Session = Depends(get_db)):
    """Generate a new panel and store it"""
    services = PanelServices(db)
    row = await services.generate_panel(panel_generate)
    return services.to_read(row)


# get a list of panels (GET)
@router.get("/", response_model=List[PanelSummary])
async def get_panels(
    db: Session = Depends(get_db),
    limit: Optional[int] = Query(None, ge=1, le=100, description="Maximum number of panels"),
    difficulty: Optional[int] = Query(None, ge=1, le=10, description="Filter by difficulty"),
    model: Optional[str] = Query(None, description="Filter by panel source"),
    order: Optional[str] = Query("desc", description="Sort order by creation time")
):
    """Get a list of panels, newest first"""
    services = PanelServices(db)
    return services.get_all_panels(limit, difficulty, model, order)


# Get panel by id
@router.get("/{panel_id}", response_model=PanelRead)
async def get_panel(panel_id: UUID, db: Session = Depends(get_db)):
    """Fetch one panel by ID"""
    services = PanelServices(db)
    return services.to_read(services.get_panel_by_id(panel_id))


# Plotly figure for panel visualization
@router.get("/{panel_id}/figure", response_class=JSONResponse)
async def get_panel_figure(panel_id: UUID, db: Session = Depends(get_db)):
    """Get the panel (and its known solution) as Plotly figure JSON"""
    services = PanelServices(db)
    figure = generate_panel_visualization(services.load_panel(panel_id))
    return JSONResponse(content=json.loads(figure.to_json()))


# API Delete Request
@router.delete("/{panel_id}/delete", status_code=204)
async def delete_panel(panel_id: UUID, db: Session = Depends(get_db)):
    """Delete a panel"""
    services = PanelServices(db)
    services.delete_panel(panel_id)
    return Response(status_code=204)
