from fastapi import APIRouter, HTTPException, Depends
from sqlalchemy.orm import Session
from app.core.deps import get_db, get_current_user, require_admin
from app.db.models.golfer import Golfer
from app.db.models.score import Score
from app.db.models.season import Season
from app.db.models.tournament import Tournament
from app.schemas.tournament import TournamentCreate, TournamentOut, TournamentUpdate
from app.services.rules import get_tournament_type_label
from app.services.scoring import delete_tournament_scores
from app.services.tournaments import create_tournament, update_tournament

router = APIRouter(prefix="/tournaments", tags=["Tournaments"])

@router.post("/", response_model=TournamentOut)
def create(
    data: TournamentCreate,
    db: Session = Depends(get_db),
    current_user = Depends(require_admin)
):
    season = db.get(Season, data.season_id)
    if not season:
        raise HTTPException(status_code=404, detail="Season not found")

    return create_tournament(db, data.model_dump())

@router.get("/season/{season_id}", response_model=list[TournamentOut])
def list_tournaments(season_id: int, db: Session = Depends(get_db)):
    return (
        db.query(Tournament)
        .filter(Tournament.season_id == season_id)
        .order_by(Tournament.start_date.desc())
        .all()
    )

@router.get("/{tournament_id}")
def tournament_detail(
    tournament_id: int,
    db: Session = Depends(get_db),
    current_user = Depends(get_current_user)
):
    tournament = db.get(Tournament, tournament_id)
    if not tournament:
        raise HTTPException(status_code=404, detail="Tournament not found")

    rows = (
        db.query(Score, Golfer)
        .join(Golfer, Golfer.id == Score.golfer_id)
        .filter(Score.tournament_id == tournament_id)
        .order_by(Score.multiplied_points.desc())
        .all()
    )

    data = TournamentOut.model_validate(tournament).model_dump()
    data["type_label"] = get_tournament_type_label(tournament.tournament_type)
    data["scores"] = [
        {
            "golfer_id": golfer.id,
            "golfer_name": golfer.full_name,
            "participated": score.participated,
            "position": score.position,
            "raw_score": score.raw_score,
            "base_points": score.base_points,
            "bonus_points": score.bonus_points,
            "multiplied_points": score.multiplied_points,
        }
        for score, golfer in rows
    ]
    return data

@router.patch("/{tournament_id}", response_model=TournamentOut)
def update(
    tournament_id: int,
    data: TournamentUpdate,
    db: Session = Depends(get_db),
    current_user = Depends(require_admin)
):
    tournament = db.get(Tournament, tournament_id)
    if not tournament:
        raise HTTPException(status_code=404, detail="Tournament not found")

    return update_tournament(db, tournament, data.model_dump(exclude_unset=True))

@router.delete("/{tournament_id}")
def delete(
    tournament_id: int,
    db: Session = Depends(get_db),
    current_user = Depends(require_admin)
):
    tournament = db.get(Tournament, tournament_id)
    if not tournament:
        raise HTTPException(status_code=404, detail="Tournament not found")

    delete_tournament_scores(db, tournament)
    db.delete(tournament)
    db.commit()
    return {"message": "Tournament deleted"}
