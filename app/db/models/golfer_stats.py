# app/db/models/golfer_stats.py
from sqlalchemy import Column, Integer, ForeignKey
from sqlalchemy.orm import relationship
from app.db.session import Base

class GolferSeasonStats(Base):
    """
    Contadores de rendimiento de un golfista en una temporada.
    Se reconstruyen desde las filas de Score cada vez que se reintroducen
    los resultados de un torneo, así que nunca se editan a mano.
    """
    __tablename__ = "golfer_season_stats"

    golfer_id = Column(Integer, ForeignKey("golfers.id"), primary_key=True)
    season_id = Column(Integer, ForeignKey("seasons.id"), primary_key=True)

    times_played = Column(Integer, default=0)
    times_finished_1st = Column(Integer, default=0)
    times_finished_2nd = Column(Integer, default=0)
    times_finished_3rd = Column(Integer, default=0)
    # Veces que ha superado el umbral de bonus (36+ stableford, par o mejor en medal...)
    times_bonus = Column(Integer, default=0)
    # Puntos multiplicados acumulados (entrada del cálculo de precios)
    total_points = Column(Integer, default=0)

    golfer = relationship("Golfer", back_populates="season_stats")
