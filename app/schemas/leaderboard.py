from pydantic import BaseModel
from datetime import datetime
from typing import Optional

class PeriodOut(BaseModel):
    kind: str
    start_date: datetime
    end_date: datetime
    label: str
    has_previous: bool
    has_next: bool
    class Config:
        from_attributes = True

class LeaderboardEntryOut(BaseModel):
    user_id: int
    username: str
    points: int
    rank: int
    previous_rank: Optional[int] = None
    movement: str
    movement_amount: int
    events_played: int
    team_value: int
    class Config:
        from_attributes = True

class LeaderboardOut(BaseModel):
    entries: list[LeaderboardEntryOut]
    period: Optional[PeriodOut] = None
    tournament_count: int = 0
    page: int = 1
    page_size: int
    total: int = 0
    has_more: bool = False

class LeaderOut(BaseModel):
    leader: Optional[LeaderboardEntryOut] = None
    period: Optional[PeriodOut] = None

class PeriodOptionOut(BaseModel):
    value: str
    label: str
    class Config:
        from_attributes = True
