from fastapi import APIRouter, HTTPException, Depends
from sqlalchemy.orm import Session
from app.core.deps import get_db, get_current_user, require_admin
from app.db.models.golfer import Golfer
from app.db.models.score import Score
from app.db.models.tournament import Tournament
from app.schemas.score import ScoreBatch, ScoreOut
from app.services.scoring import (
    ScoreValidationError,
    delete_tournament_scores,
    enter_tournament_scores,
)

router = APIRouter(prefix="/scores", tags=["Scores"])

@router.get("/{tournament_id}", response_model=list[ScoreOut])
def list_scores(
    tournament_id: int,
    db: Session = Depends(get_db),
    current_user = Depends(get_current_user)
):
    return (
        db.query(Score)
        .filter(Score.tournament_id == tournament_id)
        .order_by(Score.golfer_id)
        .all()
    )

@router.post("/{tournament_id}", response_model=list[ScoreOut])
def enter_scores(
    tournament_id: int,
    batch: ScoreBatch,
    db: Session = Depends(get_db),
    current_user = Depends(require_admin)
):
    tournament = db.get(Tournament, tournament_id)
    if not tournament:
        raise HTTPException(status_code=404, detail="Tournament not found")

    golfer_ids = {s.golfer_id for s in batch.scores}
    if len(golfer_ids) != len(batch.scores):
        raise HTTPException(status_code=422, detail="Each golfer can only appear once per tournament")

    known = db.query(Golfer.id).filter(Golfer.id.in_(golfer_ids)).count()
    if known != len(golfer_ids):
        raise HTTPException(status_code=404, detail="One or more golfers not found")

    try:
        return enter_tournament_scores(db, tournament, batch.scores)
    except ScoreValidationError as e:
        db.rollback()
        raise HTTPException(status_code=422, detail=str(e))

@router.delete("/{tournament_id}")
def delete_scores(
    tournament_id: int,
    db: Session = Depends(get_db),
    current_user = Depends(require_admin)
):
    tournament = db.get(Tournament, tournament_id)
    if not tournament:
        raise HTTPException(status_code=404, detail="Tournament not found")

    deleted = delete_tournament_scores(db, tournament)
    return {"deleted": deleted}
