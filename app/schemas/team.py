from pydantic import BaseModel
from typing import Optional

class TeamSave(BaseModel):
    golfer_ids: list[int]
    captain_id: Optional[int] = None

class TeamOut(BaseModel):
    id: int
    season_id: int
    golfer_ids: list[int]
    captain_id: Optional[int] = None
    total_spent: int
    class Config:
        from_attributes = True
