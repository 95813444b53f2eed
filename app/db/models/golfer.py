# app/db/models/golfer.py
from sqlalchemy import Boolean, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from app.db.session import Base

class Golfer(Base):
    __tablename__ = "golfers"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    first_name: Mapped[str] = mapped_column(String, nullable=False)
    last_name: Mapped[str] = mapped_column(String, nullable=False)
    # En libras, entre 3.5M y 14.5M, múltiplo de 100K
    price: Mapped[int] = mapped_column(Integer, nullable=False, default=3_500_000)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)

    # Relaciones
    scores: Mapped[list["Score"]] = relationship("Score", back_populates="golfer")
    season_stats: Mapped[list["GolferSeasonStats"]] = relationship(
        "GolferSeasonStats", back_populates="golfer", cascade="all, delete-orphan"
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
