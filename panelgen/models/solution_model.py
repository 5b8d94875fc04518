from sqlalchemy import Column, ForeignKey, Boolean, Float, DateTime, JSON, Uuid
from sqlalchemy.orm import relationship
from panelgen.core.database import Base
from uuid import uuid4
from datetime import datetime, timezone


class Solution(Base):
    __tablename__ = "solutions"

    id = Column(Uuid, primary_key=True, default=uuid4)
    panel_id = Column(Uuid, ForeignKey("panels.id", ondelete="CASCADE"), nullable=False)
    path = Column(JSON, nullable=False) # [{"x": .., "y": ..}, ...]
    is_correct = Column(Boolean, nullable=False, default=False)
    solve_time = Column(Float)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    # Relationship
    panel = relationship("Panel", back_populates="solutions")
