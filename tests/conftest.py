import os
import tempfile

# keep the test run away from the on-disk database and error log
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_FILE", os.path.join(tempfile.gettempdir(), "panelgen_test_errors.log"))

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from panelgen.core.database import Base, get_db
from panelgen.main import app
from panelgen.schemas import Color, Grid, Hexagon, Panel, Point, Square


def pts(*coords):
    """(x, y) pairs to a tuple of Points"""
    return tuple(Point(x, y) for x, y in coords)


# 5x5 nodes (4x4 cells), start bottom-left, end top-right
STAIRCASE = pts((0, 4), (0, 3), (1, 3), (1, 2), (2, 2), (2, 1), (3, 1), (3, 0), (4, 0))
BORDER_PATH = pts((0, 4), (1, 4), (2, 4), (3, 4), (4, 4), (4, 3), (4, 2), (4, 1), (4, 0))
COLUMN_PATH = pts((0, 4), (1, 4), (2, 4), (2, 3), (2, 2), (2, 1), (2, 0), (3, 0), (4, 0))


@pytest.fixture
def grid5():
    return Grid.build(5, 5, start=Point(0, 4), end=Point(4, 0))


@pytest.fixture
def separation_panel(grid5):
    return Panel(grid=grid5, symbols=(
        Square(position=Point(0, 0), color=Color.BLACK),
        Square(position=Point(3, 3), color=Color.WHITE),
    ))


@pytest.fixture
def hexagon_panel(grid5):
    return Panel(grid=grid5, symbols=(Hexagon(position=Point(2, 2)),))


@pytest.fixture
def db_session():
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    db = TestingSession()
    try:
        yield db
    finally:
        db.close()
        engine.dispose()


@pytest.fixture
def client(db_session):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
