from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from app.core.deps import get_db, require_admin
from app.db.models.season import Season
from app.schemas.season import SeasonCreate, SeasonOut, SeasonUpdate
from app.services.seasons import SeasonError, create_season, delete_season, set_active_season, update_season

router = APIRouter(prefix="/seasons", tags=["Seasons"])

@router.get("/", response_model=list[SeasonOut])
def get_seasons(db: Session = Depends(get_db)):
    return db.query(Season).order_by(Season.start_date.desc()).all()

@router.post("/", response_model=SeasonOut)
def create(
    data: SeasonCreate,
    db: Session = Depends(get_db),
    current_user = Depends(require_admin)
):
    return create_season(db, data.name, data.start_date, data.end_date, data.is_active)

@router.patch("/{season_id}", response_model=SeasonOut)
def update(
    season_id: int,
    data: SeasonUpdate,
    db: Session = Depends(get_db),
    current_user = Depends(require_admin)
):
    season = db.get(Season, season_id)
    if not season:
        raise HTTPException(status_code=404, detail="Season not found")

    changes = data.model_dump(exclude_unset=True, exclude_none=True)
    start = changes.get("start_date", season.start_date)
    end = changes.get("end_date", season.end_date)
    if end <= start:
        raise HTTPException(status_code=422, detail="end_date must be after start_date")

    return update_season(db, season, changes)

@router.patch("/{season_id}/activate", response_model=SeasonOut)
def activate(
    season_id: int,
    db: Session = Depends(get_db),
    current_user = Depends(require_admin)
):
    season = db.get(Season, season_id)
    if not season:
        raise HTTPException(status_code=404, detail="Season not found")

    return set_active_season(db, season)

@router.delete("/{season_id}")
def delete(
    season_id: int,
    db: Session = Depends(get_db),
    current_user = Depends(require_admin)
):
    season = db.get(Season, season_id)
    if not season:
        raise HTTPException(status_code=404, detail="Season not found")

    try:
        delete_season(db, season)
    except SeasonError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"message": "Season deleted"}
