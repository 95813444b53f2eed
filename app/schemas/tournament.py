from pydantic import BaseModel, field_validator
from datetime import datetime
from typing import Optional

from app.services.gameweek import to_local_naive
from app.services.rules import ScoringFormat, TournamentStatus, TournamentType

# Esquemas para Torneos
class TournamentCreate(BaseModel):
    season_id: int
    name: str
    start_date: datetime
    end_date: Optional[datetime] = None
    tournament_type: TournamentType = TournamentType.ROLLUP_STABLEFORD
    # Si no vienen, salen de la tabla de reglas del tipo
    scoring_format: Optional[ScoringFormat] = None
    is_multi_day: Optional[bool] = None

    @field_validator("start_date", "end_date")
    @classmethod
    def naive_dates(cls, v):
        return to_local_naive(v)

class TournamentUpdate(BaseModel):
    name: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    tournament_type: Optional[TournamentType] = None
    scoring_format: Optional[ScoringFormat] = None
    is_multi_day: Optional[bool] = None
    status: Optional[TournamentStatus] = None

    @field_validator("start_date", "end_date")
    @classmethod
    def naive_dates(cls, v):
        return to_local_naive(v)

class TournamentOut(BaseModel):
    id: int
    season_id: int
    name: str
    start_date: datetime
    end_date: Optional[datetime] = None
    tournament_type: str
    scoring_format: str
    is_multi_day: bool
    multiplier: int
    status: str
    participating_golfer_ids: list[int] = []
    class Config:
        from_attributes = True
