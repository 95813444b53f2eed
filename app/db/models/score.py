# app/db/models/score.py
from datetime import datetime
from sqlalchemy import Boolean, DateTime, Float, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func
from app.db.session import Base

class Score(Base):
    __tablename__ = "scores"
    __table_args__ = (
        # Un golfista solo tiene una fila por torneo
        UniqueConstraint("tournament_id", "golfer_id", name="uq_tournament_golfer"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    tournament_id: Mapped[int] = mapped_column(Integer, ForeignKey("tournaments.id"), nullable=False)
    golfer_id: Mapped[int] = mapped_column(Integer, ForeignKey("golfers.id"), nullable=False)

    participated: Mapped[bool] = mapped_column(Boolean, default=False)
    position: Mapped[int | None] = mapped_column(Integer, nullable=True)  # Solo 1-3 puntúan
    raw_score: Mapped[float | None] = mapped_column(Float, nullable=True)

    # Derivados: siempre se reescriben juntos desde app/services/scoring.py
    base_points: Mapped[int] = mapped_column(Integer, default=0)
    bonus_points: Mapped[int] = mapped_column(Integer, default=0)
    multiplied_points: Mapped[int] = mapped_column(Integer, default=0)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), onupdate=func.now(), server_default=func.now())

    # Relaciones
    tournament: Mapped["Tournament"] = relationship("Tournament", back_populates="scores")
    golfer: Mapped["Golfer"] = relationship("Golfer", back_populates="scores")
