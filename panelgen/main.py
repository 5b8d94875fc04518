import logging
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from panelgen.routers import panel_routers, solution_routers
from panelgen.core.database import Base, engine
from panelgen.utils.logger_config import configure_logging
from panelgen import models  # noqa: F401  registers the tables

configure_logging()
logger = logging.getLogger(__name__)

# Create database tables
Base.metadata.create_all(bind=engine)

# create FastAPI
app = FastAPI(title="Panel Generator API", version="1.0")

# get routers
app.include_router(panel_routers.router, prefix="/panels", tags=["Panels"])
app.include_router(solution_routers.router, prefix="/solutions", tags=["Solutions"])


# Storage failures are retryable for the client
@app.exception_handler(SQLAlchemyError)
async def storage_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error("Storage error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=503, content={"detail": "Storage is unavailable, please try again."})


# Landing page
@app.get("/")
async def index():
    return {"name": app.title, "version": app.version, "panels": "/panels", "solutions": "/solutions"}
