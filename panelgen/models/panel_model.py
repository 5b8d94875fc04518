from sqlalchemy import Column, Integer, String, DateTime, JSON, Uuid
from sqlalchemy.orm import relationship
from panelgen.core.database import Base
from uuid import uuid4
from datetime import datetime, timezone


class Panel(Base):
    __tablename__ = "panels"

    id = Column(Uuid, primary_key=True, default=uuid4)
    name = Column(String, nullable=False)
    model = Column(String, nullable=False) # source: random, manual, gemini-..., gpt-...
    width = Column(Integer, nullable=False)
    height = Column(Integer, nullable=False)
    difficulty = Column(Integer, nullable=False, default=1)
    wall_space = Column(String, nullable=False, default="node")
    grid_data = Column(JSON, nullable=False)
    symbols_data = Column(JSON, nullable=False)
    solution_path = Column(JSON) # known solution, if the source provided one
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    # relationship
    solutions = relationship("Solution", back_populates="panel", cascade="all, delete-orphan")

    @property
    def symbol_count(self) -> int:
        return len(self.symbols_data or [])
