# app/db/models/tournament.py
from datetime import datetime
from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, JSON, String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func
from app.db.session import Base

class Tournament(Base):
    __tablename__ = "tournaments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    season_id: Mapped[int] = mapped_column(Integer, ForeignKey("seasons.id"), nullable=False)
    start_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    end_date: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)

    # Reglas (ver app/services/rules.py)
    tournament_type: Mapped[str] = mapped_column(String, nullable=False, default="rollup_stableford")
    scoring_format: Mapped[str] = mapped_column(String, nullable=False, default="stableford")
    is_multi_day: Mapped[bool] = mapped_column(Boolean, default=False)
    # Se guarda al crear/cambiar de tipo, no se recalcula al leer
    multiplier: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    status: Mapped[str] = mapped_column(String, nullable=False, default="draft")
    participating_golfer_ids: Mapped[list[int]] = mapped_column(JSON, default=list)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), onupdate=func.now(), server_default=func.now())

    # Relaciones
    season: Mapped["Season"] = relationship("Season", back_populates="tournaments")
    scores: Mapped[list["Score"]] = relationship(
        "Score", back_populates="tournament", cascade="all, delete-orphan"
    )
