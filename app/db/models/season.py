from datetime import datetime
from sqlalchemy import Boolean, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from typing import List, TYPE_CHECKING
from app.db.session import Base

if TYPE_CHECKING:
    from app.db.models.team import Team
    from app.db.models.tournament import Tournament

class Season(Base):
    __tablename__ = "seasons"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False)  # Ej: "2026"
    # Ventana [start_date, end_date)
    start_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    end_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    # Solo una temporada activa a la vez
    is_active: Mapped[bool] = mapped_column(Boolean, default=False)

    # Relaciones
    teams: Mapped[List["Team"]] = relationship("Team", back_populates="season")
    tournaments: Mapped[List["Tournament"]] = relationship("Tournament", back_populates="season")
