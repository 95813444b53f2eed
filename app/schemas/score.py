from pydantic import BaseModel, Field
from typing import Optional

class ScoreEntry(BaseModel):
    golfer_id: int
    participated: bool = False
    position: Optional[int] = Field(default=None, ge=1, le=100)
    raw_score: Optional[float] = None

class ScoreBatch(BaseModel):
    scores: list[ScoreEntry] = Field(min_length=1)

class ScoreOut(BaseModel):
    id: int
    tournament_id: int
    golfer_id: int
    participated: bool
    position: Optional[int] = None
    raw_score: Optional[float] = None
    base_points: int
    bonus_points: int
    multiplied_points: int
    class Config:
        from_attributes = True
