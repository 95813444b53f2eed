from dataclasses import asdict
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.core.config import LEADERBOARD_PAGE_SIZE
from app.core.deps import get_db, get_current_user
from app.schemas.leaderboard import LeaderboardEntryOut, LeaderboardOut, LeaderOut, PeriodOptionOut
from app.services.gameweek import generate_month_options, generate_week_options
from app.services.leaderboard import (
    SqlLeaderboardSource,
    build_leaderboard,
    build_leaders,
    build_tournament_leaderboard,
    paginate,
    to_local_naive,
)
from app.services.seasons import get_active_season
from app.services.teams import get_team

router = APIRouter(prefix="/leaderboard", tags=["Leaderboard"])

@router.get("/", response_model=LeaderboardOut)
def leaderboard(
    period: str = "week",
    date: Optional[datetime] = None,
    page: int = Query(1, ge=1),
    page_size: int = Query(LEADERBOARD_PAGE_SIZE, ge=1, le=200),
    db: Session = Depends(get_db)
):
    try:
        result = build_leaderboard(SqlLeaderboardSource(db), period, anchor=date)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    current = paginate(result.entries, page, page_size)
    return {
        "entries": [asdict(e) for e in current.items],
        "period": asdict(result.period) if result.period else None,
        "tournament_count": result.tournament_count,
        "page": current.page,
        "page_size": current.page_size,
        "total": current.total,
        "has_more": current.has_more,
    }

@router.get("/leaders", response_model=dict[str, LeaderOut])
def leaders(db: Session = Depends(get_db)):
    summary = build_leaders(SqlLeaderboardSource(db))
    return {
        kind: {
            "leader": asdict(item["leader"]) if item["leader"] else None,
            "period": asdict(item["period"]) if item["period"] else None,
        }
        for kind, item in summary.items()
    }

@router.get("/tournament/{tournament_id}", response_model=list[LeaderboardEntryOut])
def tournament_leaderboard(tournament_id: int, db: Session = Depends(get_db)):
    # Solo torneos publicados o completos de la temporada activa
    entries = build_tournament_leaderboard(SqlLeaderboardSource(db), tournament_id)
    return [asdict(e) for e in entries]

@router.get("/periods/weeks", response_model=list[PeriodOptionOut])
def week_options(
    db: Session = Depends(get_db),
    current_user = Depends(get_current_user)
):
    """Jornadas seleccionables: desde que el usuario creó su equipo (o el inicio de temporada)."""
    season = get_active_season(db)
    if season is None:
        return []

    team = get_team(db, current_user.id, season.id)
    effective_start = season.start_date
    if team and team.created_at:
        effective_start = max(to_local_naive(team.created_at), season.start_date)

    return [asdict(o) for o in generate_week_options(effective_start, season.start_date)]

@router.get("/periods/months", response_model=list[PeriodOptionOut])
def month_options(db: Session = Depends(get_db)):
    season = get_active_season(db)
    if season is None:
        return []
    return [asdict(o) for o in generate_month_options(season.start_date)]
