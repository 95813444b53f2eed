from pydantic import BaseModel

class GolferOut(BaseModel):
    id: int
    first_name: str
    last_name: str
    price: int
    is_active: bool
    class Config:
        from_attributes = True

class PriceRecalculation(BaseModel):
    # None = reubicar los precios actuales sobre la curva sin mirar resultados
    season_id: int | None = None
    dry_run: bool = False

class GolferStatsOut(BaseModel):
    golfer_id: int
    season_id: int
    times_played: int = 0
    times_finished_1st: int = 0
    times_finished_2nd: int = 0
    times_finished_3rd: int = 0
    times_bonus: int = 0
    total_points: int = 0
    class Config:
        from_attributes = True
