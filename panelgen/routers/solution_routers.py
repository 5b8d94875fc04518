from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List
from uuid import UUID

from panelgen.core.database import get_db
from panelgen.schemas import SolutionCreate, SolutionResult, SolutionRead
from panelgen.services import SolutionServices


router = APIRouter()


# Submit a solution
@router.post("/", response_model=SolutionResult)
async def submit_solution(solution: SolutionCreate, db: Session = Depends(get_db)):
    """Validate a traced path and store the attempt"""
    services = SolutionServices(db)
    return services.submit_solution(solution)


@router.get("/{panel_id}", response_model=List[SolutionRead])
async def get_solutions(panel_id: UUID, db: Session = Depends(get_db)):
    """List the attempts made on a panel"""
    services = SolutionServices(db)
    return services.list_solutions(panel_id)
