import logging
import time
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from sqlalchemy.orm import Session

from app.core.config import ACTIVE_SEASON_TTL
from app.db.models.season import Season

logger = logging.getLogger(__name__)


class SeasonError(ValueError):
    """Operación no permitida sobre una temporada."""


@dataclass(frozen=True)
class SeasonInfo:
    """Copia desacoplada de la sesión de BD, apta para cachear."""

    id: int
    name: str
    start_date: datetime
    end_date: datetime

    @classmethod
    def from_model(cls, season: Season) -> "SeasonInfo":
        return cls(
            id=season.id,
            name=season.name,
            start_date=season.start_date,
            end_date=season.end_date,
        )


class ActiveSeasonCache:
    """
    Caché en memoria de la temporada activa con TTL.
    Cualquier escritura sobre temporadas debe llamar a invalidate().
    """

    def __init__(self, ttl: float = ACTIVE_SEASON_TTL, clock: Callable[[], float] = time.monotonic):
        self.ttl = ttl
        self._clock = clock
        self._value: Optional[SeasonInfo] = None
        self._expires_at = 0.0

    def get(self, db: Session) -> Optional[SeasonInfo]:
        now = self._clock()
        if self._value is not None and now < self._expires_at:
            return self._value

        season = db.query(Season).filter(Season.is_active == True).first()
        if not season:
            # No cacheamos la ausencia: en cuanto se active una, se ve
            self._value = None
            return None

        self._value = SeasonInfo.from_model(season)
        self._expires_at = now + self.ttl
        return self._value

    def invalidate(self) -> None:
        self._value = None
        self._expires_at = 0.0
        logger.info("Active season cache invalidated")


active_season_cache = ActiveSeasonCache()


def get_active_season(db: Session, cache: ActiveSeasonCache = active_season_cache) -> Optional[SeasonInfo]:
    return cache.get(db)


def create_season(
    db: Session,
    name: str,
    start_date: datetime,
    end_date: datetime,
    is_active: bool = False,
    cache: ActiveSeasonCache = active_season_cache,
) -> Season:
    # Si nace activa, desactivamos las demás
    if is_active:
        db.query(Season).update({Season.is_active: False})

    season = Season(name=name, start_date=start_date, end_date=end_date, is_active=is_active)
    db.add(season)
    db.commit()
    db.refresh(season)

    cache.invalidate()
    return season


def update_season(db: Session, season: Season, changes: dict, cache: ActiveSeasonCache = active_season_cache) -> Season:
    if changes.get("is_active"):
        db.query(Season).filter(Season.id != season.id).update({Season.is_active: False})

    for field, value in changes.items():
        setattr(season, field, value)

    db.commit()
    db.refresh(season)

    cache.invalidate()
    return season


def set_active_season(db: Session, season: Season, cache: ActiveSeasonCache = active_season_cache) -> Season:
    db.query(Season).update({Season.is_active: False})
    season.is_active = True
    db.commit()
    db.refresh(season)

    cache.invalidate()
    return season


def delete_season(db: Session, season: Season, cache: ActiveSeasonCache = active_season_cache) -> None:
    if season.is_active:
        raise SeasonError("Cannot delete the active season")
    if season.tournaments or season.teams:
        raise SeasonError("Cannot delete a season that has tournaments or teams")

    db.delete(season)
    db.commit()
    cache.invalidate()
