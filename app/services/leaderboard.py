"""
Leaderboards por periodo (jornada, mes, temporada).

Flujo de cada petición:
1. `resolve_period`: convierte (tipo, fecha ancla) en una ventana [inicio, fin).
2. Se recogen los torneos publicados/completos de la temporada activa y sus Scores.
3. `aggregate_points`: suma de multiplied_points de los 6 golfistas de cada
   equipo; el capitán puntúa doble en cada torneo.
4. `rank_entries`: orden por puntos y ranking con empates.
5. Movimiento respecto al periodo anterior (`previous_window`).

Los datos llegan a través de un `LeaderboardSource`, así el cálculo se puede
probar sin base de datos. Si no hay temporada activa el resultado es vacío:
nunca se mezclan datos de otras temporadas.
"""
from dataclasses import dataclass, field
from datetime import datetime
from itertools import islice
from typing import Dict, Iterable, List, Optional, Protocol, Sequence, Tuple

from sqlalchemy.orm import Session

from app.core.config import LEADERBOARD_PAGE_SIZE
from app.db.models.score import Score
from app.db.models.team import Team
from app.db.models.tournament import Tournament
from app.db.models.user import User
from app.services.gameweek import (
    WEEK,
    format_month_label,
    format_week_label,
    gameweek_number,
    month_start,
    month_window,
    previous_month_start,
    saturday_of_week,
    to_local_naive,
    week_window,
)
from app.services.rules import SCORED_STATUSES
from app.services.seasons import ActiveSeasonCache, SeasonInfo, active_season_cache, get_active_season

PERIOD_KINDS = ("week", "month", "season")
CAPTAIN_FACTOR = 2


@dataclass
class TeamSelection:
    user_id: int
    username: str
    golfer_ids: List[int]
    captain_id: Optional[int] = None
    total_spent: int = 0
    created_at: Optional[datetime] = None


@dataclass
class Period:
    kind: str
    start_date: datetime
    end_date: datetime
    label: str
    has_previous: bool
    has_next: bool


@dataclass
class UserTotal:
    user_id: int
    username: str
    points: int = 0
    events_played: int = 0
    team_value: int = 0


@dataclass
class LeaderboardEntry:
    user_id: int
    username: str
    points: int
    rank: int
    previous_rank: Optional[int]
    movement: str  # up | down | same | new
    movement_amount: int
    events_played: int
    team_value: int


@dataclass
class LeaderboardResult:
    entries: List[LeaderboardEntry] = field(default_factory=list)
    period: Optional[Period] = None
    tournament_count: int = 0


@dataclass
class Page:
    items: List[LeaderboardEntry]
    page: int
    page_size: int
    total: int

    @property
    def has_more(self) -> bool:
        return self.page * self.page_size < self.total


class LeaderboardSource(Protocol):
    def get_active_season(self) -> Optional[SeasonInfo]: ...

    def get_tournaments(self, season_id: int) -> Sequence: ...

    def get_tournament(self, tournament_id: int): ...

    def get_scores(self, tournament_ids: Sequence[int]) -> Sequence: ...

    def get_teams(self, season_id: int) -> Sequence[TeamSelection]: ...


# ==============================================================================
# 1. PERIODOS
# ==============================================================================

def resolve_period(
    kind: str,
    season: SeasonInfo,
    anchor: Optional[datetime] = None,
    now: Optional[datetime] = None,
) -> Period:
    if kind not in PERIOD_KINDS:
        raise ValueError(f"Unknown period '{kind}'. Expected one of: {', '.join(PERIOD_KINDS)}")

    now = to_local_naive(now) or datetime.now()
    anchor = to_local_naive(anchor) or now

    if kind == "week":
        start, end = week_window(anchor)
        gw = gameweek_number(start, season.start_date)
        return Period(
            kind=kind,
            start_date=start,
            end_date=end,
            label=format_week_label(start, gw),
            has_previous=start > season.start_date,
            has_next=start < saturday_of_week(now),
        )

    if kind == "month":
        start, end = month_window(anchor)
        return Period(
            kind=kind,
            start_date=start,
            end_date=end,
            label=format_month_label(start),
            has_previous=start > season.start_date,
            has_next=start < month_start(now),
        )

    return Period(
        kind=kind,
        start_date=season.start_date,
        end_date=season.end_date,
        label=f"{season.name} Season",
        has_previous=False,
        has_next=False,
    )


def previous_window(
    period: Period,
    season: SeasonInfo,
    now: Optional[datetime] = None,
) -> Optional[Tuple[datetime, datetime]]:
    """
    Ventana contra la que se calcula el movimiento:
    - week: la jornada anterior
    - month: el mes anterior
    - season: la clasificación de la temporada al empezar la jornada actual
    """
    if period.kind == "week":
        return period.start_date - WEEK, period.start_date
    if period.kind == "month":
        return previous_month_start(period.start_date), period.start_date

    now = to_local_naive(now) or datetime.now()
    cutoff = min(saturday_of_week(now), season.end_date)
    if cutoff <= season.start_date:
        return None
    return season.start_date, cutoff


# ==============================================================================
# 2-3. AGREGACIÓN
# ==============================================================================

def _in_window(moment: datetime, start: datetime, end: datetime) -> bool:
    return start <= moment < end


def aggregate_points(
    teams: Iterable[TeamSelection],
    tournaments: Iterable,
    scores: Iterable,
    start: datetime,
    end: datetime,
) -> List[UserTotal]:
    """
    Puntos de cada equipo en la ventana [start, end).
    El capitán dobla su aportación de cada torneo (después del multiplicador del torneo).
    """
    window_ids = {t.id for t in tournaments if _in_window(t.start_date, start, end)}
    return sum_team_points(teams, [s for s in scores if s.tournament_id in window_ids])


def sum_team_points(teams: Iterable[TeamSelection], scores: Iterable) -> List[UserTotal]:
    """Suma sin filtrar: todas las filas de `scores` cuentan."""
    scores_by_golfer: Dict[int, list] = {}
    for score in scores:
        scores_by_golfer.setdefault(score.golfer_id, []).append(score)

    totals = []
    for team in teams:
        points = 0
        events = set()

        for golfer_id in team.golfer_ids:
            factor = CAPTAIN_FACTOR if golfer_id == team.captain_id else 1
            for score in scores_by_golfer.get(golfer_id, []):
                points += (score.multiplied_points or 0) * factor
                if score.participated:
                    events.add(score.tournament_id)

        totals.append(UserTotal(
            user_id=team.user_id,
            username=team.username,
            points=points,
            events_played=len(events),
            team_value=team.total_spent,
        ))

    return totals


# ==============================================================================
# 4-5. RANKING Y MOVIMIENTO
# ==============================================================================

def _ranking_key(total: UserTotal):
    # Empates: mismo rank; dentro del empate, orden alfabético y luego id
    return (-total.points, total.username.lower(), total.user_id)


def _ranked(totals: Iterable[UserTotal]) -> List[Tuple[int, UserTotal]]:
    ordered = sorted(totals, key=_ranking_key)
    ranked = []
    rank = 1
    for index, total in enumerate(ordered):
        if index > 0 and total.points < ordered[index - 1].points:
            rank = index + 1
        ranked.append((rank, total))
    return ranked


def assign_ranks(totals: Iterable[UserTotal]) -> Dict[int, int]:
    return {total.user_id: rank for rank, total in _ranked(totals)}


def movement_between(previous_rank: Optional[int], rank: int) -> Tuple[str, int]:
    if previous_rank is None:
        return "new", 0
    delta = previous_rank - rank
    if delta > 0:
        return "up", delta
    if delta < 0:
        return "down", -delta
    return "same", 0


def rank_entries(
    totals: Iterable[UserTotal],
    previous_ranks: Optional[Dict[int, int]] = None,
) -> List[LeaderboardEntry]:
    previous_ranks = previous_ranks or {}
    entries = []
    for rank, total in _ranked(totals):
        previous_rank = previous_ranks.get(total.user_id)
        movement, amount = movement_between(previous_rank, rank)
        entries.append(LeaderboardEntry(
            user_id=total.user_id,
            username=total.username,
            points=total.points,
            rank=rank,
            previous_rank=previous_rank,
            movement=movement,
            movement_amount=amount,
            events_played=total.events_played,
            team_value=total.team_value,
        ))
    return entries


def paginate(entries: Iterable[LeaderboardEntry], page: int = 1, page_size: int = LEADERBOARD_PAGE_SIZE) -> Page:
    entries = list(entries)
    page = max(page, 1)
    page_size = max(page_size, 1)
    offset = (page - 1) * page_size
    items = list(islice(entries, offset, offset + page_size))
    return Page(items=items, page=page, page_size=page_size, total=len(entries))


# ==============================================================================
# PUNTO DE ENTRADA
# ==============================================================================

def build_leaderboard(
    source: LeaderboardSource,
    kind: str = "week",
    anchor: Optional[datetime] = None,
    now: Optional[datetime] = None,
) -> LeaderboardResult:
    season = source.get_active_season()
    if season is None:
        return LeaderboardResult()

    now = to_local_naive(now) or datetime.now()
    period = resolve_period(kind, season, anchor, now)

    tournaments = list(source.get_tournaments(season.id))
    scores = list(source.get_scores([t.id for t in tournaments])) if tournaments else []
    teams = list(source.get_teams(season.id))

    current = aggregate_points(teams, tournaments, scores, period.start_date, period.end_date)

    previous_ranks = None
    window = previous_window(period, season, now)
    if window is not None:
        prev_start, prev_end = window
        # Un equipo creado después de la ventana anterior cuenta como "new"
        earlier_teams = [t for t in teams if t.created_at is None or t.created_at < prev_end]
        previous = aggregate_points(earlier_teams, tournaments, scores, prev_start, prev_end)
        previous_ranks = assign_ranks(previous)

    tournament_count = sum(
        1 for t in tournaments if _in_window(t.start_date, period.start_date, period.end_date)
    )

    return LeaderboardResult(
        entries=rank_entries(current, previous_ranks),
        period=period,
        tournament_count=tournament_count,
    )


def build_leaders(source: LeaderboardSource, now: Optional[datetime] = None) -> dict:
    """Líderes de la jornada, el mes y la temporada actuales."""
    now = now or datetime.now()
    summary = {}
    for kind in PERIOD_KINDS:
        result = build_leaderboard(source, kind, now=now)
        summary[kind] = {
            "leader": result.entries[0] if result.entries else None,
            "period": result.period,
        }
    return summary


def build_tournament_leaderboard(source: LeaderboardSource, tournament_id: int) -> List[LeaderboardEntry]:
    """
    Clasificación de un solo torneo de la temporada activa. Un torneo en
    borrador (o de otra temporada) devuelve lista vacía. Sin ranking
    anterior: todas las filas salen como "new".
    """
    season = source.get_active_season()
    if season is None:
        return []

    tournament = source.get_tournament(tournament_id)
    if (
        tournament is None
        or tournament.season_id != season.id
        or tournament.status not in SCORED_STATUSES
    ):
        return []

    scores = source.get_scores([tournament.id])
    totals = sum_team_points(source.get_teams(season.id), scores)
    return rank_entries(totals)


# ==============================================================================
# ORIGEN DE DATOS (SQLAlchemy)
# ==============================================================================

class SqlLeaderboardSource:
    def __init__(self, db: Session, cache: ActiveSeasonCache = active_season_cache):
        self.db = db
        self.cache = cache

    def get_active_season(self) -> Optional[SeasonInfo]:
        return get_active_season(self.db, self.cache)

    def get_tournaments(self, season_id: int):
        return (
            self.db.query(Tournament)
            .filter(
                Tournament.season_id == season_id,
                Tournament.status.in_(SCORED_STATUSES),
            )
            .order_by(Tournament.start_date)
            .all()
        )

    def get_tournament(self, tournament_id: int):
        return self.db.get(Tournament, tournament_id)

    def get_scores(self, tournament_ids: Sequence[int]):
        if not tournament_ids:
            return []
        return self.db.query(Score).filter(Score.tournament_id.in_(tournament_ids)).all()

    def get_teams(self, season_id: int) -> List[TeamSelection]:
        rows = (
            self.db.query(Team, User.username)
            .join(User, User.id == Team.user_id)
            .filter(Team.season_id == season_id, Team.is_active == True)
            .all()
        )
        return [
            TeamSelection(
                user_id=team.user_id,
                username=username,
                golfer_ids=list(team.golfer_ids or []),
                captain_id=team.captain_id,
                total_spent=team.total_spent or 0,
                created_at=to_local_naive(team.created_at),
            )
            for team, username in rows
        ]

