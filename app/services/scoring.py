import logging
from dataclasses import asdict, dataclass
from typing import Iterable, List, Optional

from sqlalchemy.orm import Session

from app.db.models.golfer_stats import GolferSeasonStats
from app.db.models.score import Score
from app.db.models.tournament import Tournament
from app.services.rules import POSITION_POINTS, ScoringFormat

logger = logging.getLogger(__name__)

# Umbrales de bonus: (umbral para 3 puntos, umbral para 1 punto)
# En multi-día se duplican los de stableford y se amplía la banda de medal
STABLEFORD_THRESHOLDS = {False: (36, 32), True: (72, 64)}
MEDAL_THRESHOLDS = {False: (0, 4), True: (0, 8)}

ORDINALS = {1: "1st", 2: "2nd", 3: "3rd"}


class ScoreValidationError(ValueError):
    """Un lote de resultados incumple las reglas; no se guarda nada."""


@dataclass
class ScoreBreakdown:
    base_points: int
    bonus_points: int
    multiplied_points: int


@dataclass
class ScoreRow:
    """Fila derivada lista para persistir."""

    golfer_id: int
    participated: bool
    position: Optional[int]
    raw_score: Optional[float]
    base_points: int
    bonus_points: int
    multiplied_points: int


def get_base_points(position: Optional[int]) -> int:
    return POSITION_POINTS.get(position, 0)


def get_bonus_points(raw_score: Optional[float], scoring_format, is_multi_day: bool = False) -> int:
    """
    Stableford: más es mejor. Medal: golpes respecto al par, menos es mejor.
    """
    if raw_score is None:
        return 0

    if ScoringFormat(scoring_format) == ScoringFormat.MEDAL:
        top, low = MEDAL_THRESHOLDS[bool(is_multi_day)]
        if raw_score <= top:
            return 3
        if raw_score <= low:
            return 1
        return 0

    top, low = STABLEFORD_THRESHOLDS[bool(is_multi_day)]
    if raw_score >= top:
        return 3
    if raw_score >= low:
        return 1
    return 0


def calculate_golfer_points(result, tournament) -> ScoreBreakdown:
    """
    Puntos de un golfista en un torneo.
    Usa el multiplicador guardado en el torneo, no el de la tabla.
    """
    if not result.participated:
        return ScoreBreakdown(0, 0, 0)

    base_points = get_base_points(result.position)
    bonus_points = get_bonus_points(
        result.raw_score, tournament.scoring_format, tournament.is_multi_day
    )

    return ScoreBreakdown(
        base_points=base_points,
        bonus_points=bonus_points,
        multiplied_points=(base_points + bonus_points) * tournament.multiplier,
    )


def required_positions(participant_count: int) -> List[int]:
    if participant_count <= 10:
        return [1]
    if participant_count <= 20:
        return [1, 2]
    return [1, 2, 3]


def _field_size_label(participant_count: int) -> str:
    if participant_count <= 10:
        return "1-10"
    if participant_count <= 20:
        return "11-20"
    return "more than 20"


def validate_score_batch(entries: Iterable) -> None:
    """
    Comprueba un lote completo de un torneo. Lanza ScoreValidationError con
    el primer fallo encontrado.
    """
    participants = [e for e in entries if e.participated]

    # 1. Al menos un participante
    if not participants:
        raise ScoreValidationError("At least one golfer must have participated")

    # 2. Podio obligatorio según tamaño del campo
    count = len(participants)
    assigned = {e.position for e in participants if e.position is not None}
    missing = [p for p in required_positions(count) if p not in assigned]
    if missing:
        names = " and ".join(f"{ORDINALS[p]} place" for p in missing)
        what = f"a {names} finish" if len(missing) == 1 else f"{names} finishes"
        raise ScoreValidationError(
            f"With {_field_size_label(count)} golfers, you must assign {what}"
        )

    # 3. Todo participante necesita su resultado bruto
    without_score = [e.golfer_id for e in participants if e.raw_score is None]
    if without_score:
        raise ScoreValidationError(
            f"Every participating golfer must have a raw score (missing for golfer ids: "
            f"{', '.join(str(g) for g in without_score)})"
        )

    # 4. Posiciones repetidas
    positions = [e.position for e in participants if e.position is not None]
    if len(positions) != len(set(positions)):
        raise ScoreValidationError(
            "Duplicate positions found. Each position (1st, 2nd, 3rd) can only be assigned once"
        )


def score_tournament(tournament, entries) -> List[ScoreRow]:
    """
    Valida y calcula todas las filas de un torneo. O salen todas o ninguna.
    """
    entries = list(entries)
    validate_score_batch(entries)

    rows = []
    for entry in entries:
        points = calculate_golfer_points(entry, tournament)
        rows.append(ScoreRow(
            golfer_id=entry.golfer_id,
            participated=entry.participated,
            position=entry.position if entry.participated else None,
            raw_score=entry.raw_score if entry.participated else None,
            base_points=points.base_points,
            bonus_points=points.bonus_points,
            multiplied_points=points.multiplied_points,
        ))
    return rows


# ==============================================================================
# Persistencia
# ==============================================================================

def enter_tournament_scores(db: Session, tournament: Tournament, entries) -> List[Score]:
    """
    Reescribe de golpe todas las filas del torneo. Si un golfista deja de
    estar marcado como participante, su fila queda a cero.
    """
    try:
        rows = score_tournament(tournament, entries)
    except ScoreValidationError as e:
        logger.warning("Rejected score batch for tournament %s: %s", tournament.id, e)
        raise

    previous_golfers = {
        golfer_id for (golfer_id,) in
        db.query(Score.golfer_id).filter(Score.tournament_id == tournament.id).all()
    }

    # 🔄 Borramos las filas anteriores
    db.query(Score).filter(Score.tournament_id == tournament.id).delete()

    scores = []
    for row in rows:
        score = Score(tournament_id=tournament.id, **asdict(row))
        db.add(score)
        scores.append(score)

    tournament.participating_golfer_ids = [r.golfer_id for r in rows if r.participated]
    db.flush()

    touched = previous_golfers | {r.golfer_id for r in rows}
    rebuild_golfer_season_stats(db, tournament.season_id, touched)

    db.commit()
    logger.info(
        "Stored %d scores for tournament %s (%d participants)",
        len(rows), tournament.id, len(tournament.participating_golfer_ids),
    )
    return scores


def recalculate_tournament_scores(db: Session, tournament: Tournament) -> int:
    """
    Vuelve a derivar los puntos guardados (p. ej. tras cambiar el tipo del torneo).
    No revalida el lote: ya se validó al introducirlo.
    """
    scores = db.query(Score).filter(Score.tournament_id == tournament.id).all()
    if not scores:
        return 0

    for score in scores:
        points = calculate_golfer_points(score, tournament)
        score.base_points = points.base_points
        score.bonus_points = points.bonus_points
        score.multiplied_points = points.multiplied_points

    db.flush()
    rebuild_golfer_season_stats(db, tournament.season_id, {s.golfer_id for s in scores})
    db.commit()

    logger.info("Recalculated %d scores for tournament %s", len(scores), tournament.id)
    return len(scores)


def delete_tournament_scores(db: Session, tournament: Tournament) -> int:
    golfer_ids = {
        golfer_id for (golfer_id,) in
        db.query(Score.golfer_id).filter(Score.tournament_id == tournament.id).all()
    }
    deleted = db.query(Score).filter(Score.tournament_id == tournament.id).delete()
    tournament.participating_golfer_ids = []
    db.flush()

    rebuild_golfer_season_stats(db, tournament.season_id, golfer_ids)
    db.commit()
    return deleted


def rebuild_golfer_season_stats(db: Session, season_id: int, golfer_ids) -> None:
    """
    Recalcula desde cero los contadores de temporada de los golfistas indicados.
    """
    for golfer_id in golfer_ids:
        rows = (
            db.query(Score)
            .join(Tournament, Tournament.id == Score.tournament_id)
            .filter(
                Score.golfer_id == golfer_id,
                Score.participated == True,
                Tournament.season_id == season_id,
            )
            .all()
        )

        stats = db.get(GolferSeasonStats, (golfer_id, season_id))
        if not stats:
            stats = GolferSeasonStats(golfer_id=golfer_id, season_id=season_id)
            db.add(stats)

        stats.times_played = len(rows)
        stats.times_finished_1st = sum(1 for r in rows if r.position == 1)
        stats.times_finished_2nd = sum(1 for r in rows if r.position == 2)
        stats.times_finished_3rd = sum(1 for r in rows if r.position == 3)
        stats.times_bonus = sum(1 for r in rows if r.bonus_points > 0)
        stats.total_points = sum(r.multiplied_points for r in rows)
