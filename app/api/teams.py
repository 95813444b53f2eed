from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from app.core.deps import get_db, get_current_user
from app.schemas.team import TeamOut, TeamSave
from app.services.seasons import get_active_season
from app.services.teams import TeamValidationError, get_team, save_team

router = APIRouter(prefix="/teams", tags=["Teams"])

@router.get("/me", response_model=TeamOut | None)
def get_my_team(
    db: Session = Depends(get_db),
    current_user = Depends(get_current_user)
):
    """
    Equipo del usuario en la temporada activa.
    Si no hay temporada activa o aún no tiene equipo, devuelve null.
    """
    season = get_active_season(db)
    if season is None:
        return None
    return get_team(db, current_user.id, season.id)

@router.post("/me", response_model=TeamOut)
def save_my_team(
    data: TeamSave,
    db: Session = Depends(get_db),
    current_user = Depends(get_current_user)
):
    season = get_active_season(db)
    if season is None:
        raise HTTPException(status_code=400, detail="No active season")

    try:
        return save_team(db, current_user.id, season.id, data.golfer_ids, data.captain_id)
    except TeamValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))
