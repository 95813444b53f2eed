from datetime import datetime
from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, JSON, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func
from app.db.session import Base

class Team(Base):
    __tablename__ = "teams"
    __table_args__ = (
        # Un usuario solo tiene un equipo por temporada
        UniqueConstraint("user_id", "season_id", name="uq_user_season"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False)
    season_id: Mapped[int] = mapped_column(Integer, ForeignKey("seasons.id"), nullable=False)

    # Exactamente 6 golfistas distintos
    golfer_ids: Mapped[list[int]] = mapped_column(JSON, nullable=False, default=list)
    captain_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    total_spent: Mapped[int] = mapped_column(Integer, default=0)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), onupdate=func.now(), server_default=func.now())

    # Relaciones
    season: Mapped["Season"] = relationship("Season", back_populates="teams")
    user: Mapped["User"] = relationship("User", back_populates="teams")
