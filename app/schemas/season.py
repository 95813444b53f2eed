from pydantic import BaseModel, field_validator, model_validator
from datetime import datetime
from typing import Optional

from app.services.gameweek import to_local_naive

# Esquemas para Temporadas
class SeasonBase(BaseModel):
    name: str
    start_date: datetime
    end_date: datetime
    is_active: bool = False

    # Todas las fechas se guardan en hora local sin tz
    @field_validator("start_date", "end_date")
    @classmethod
    def naive_dates(cls, v):
        return to_local_naive(v)

class SeasonCreate(SeasonBase):
    @model_validator(mode="after")
    def check_dates(self):
        if self.end_date <= self.start_date:
            raise ValueError("end_date must be after start_date")
        return self

class SeasonUpdate(BaseModel):
    name: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    is_active: Optional[bool] = None

    @field_validator("start_date", "end_date")
    @classmethod
    def naive_dates(cls, v):
        return to_local_naive(v)

class SeasonOut(SeasonBase):
    id: int
    class Config:
        from_attributes = True
