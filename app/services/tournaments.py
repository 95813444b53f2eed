import logging

from sqlalchemy.orm import Session

from app.db.models.tournament import Tournament
from app.services.rules import TournamentType, resolve_tournament_settings
from app.services.scoring import recalculate_tournament_scores

logger = logging.getLogger(__name__)

RULE_FIELDS = ("tournament_type", "scoring_format", "is_multi_day")
PLAIN_FIELDS = ("name", "start_date", "end_date", "status")


def create_tournament(db: Session, data: dict) -> Tournament:
    """
    Crea un torneo en borrador. Formato, multi-día y multiplicador salen de
    la tabla de reglas (el formato forzado gana a lo que pida el admin).
    """
    tournament_type = TournamentType(data["tournament_type"])
    scoring_format, is_multi_day, multiplier = resolve_tournament_settings(
        tournament_type, data.get("scoring_format"), data.get("is_multi_day")
    )

    tournament = Tournament(
        name=data["name"],
        season_id=data["season_id"],
        start_date=data["start_date"],
        end_date=data.get("end_date"),
        tournament_type=tournament_type.value,
        scoring_format=scoring_format,
        is_multi_day=is_multi_day,
        multiplier=multiplier,
        status="draft",
        participating_golfer_ids=[],
    )
    db.add(tournament)
    db.commit()
    db.refresh(tournament)
    return tournament


def update_tournament(db: Session, tournament: Tournament, changes: dict) -> Tournament:
    """
    Aplica cambios. Si cambian las reglas (tipo, formato o multi-día) se
    vuelven a derivar los puntos ya guardados.
    """
    for field in PLAIN_FIELDS:
        if field in changes and changes[field] is not None:
            value = changes[field]
            setattr(tournament, field, getattr(value, "value", value))

    if any(changes.get(f) is not None for f in RULE_FIELDS):
        new_type = TournamentType(changes.get("tournament_type") or tournament.tournament_type)
        type_changed = new_type.value != tournament.tournament_type

        if type_changed:
            # Tipo nuevo: lo que no venga en la petición vuelve al valor por defecto del tipo
            requested_format = changes.get("scoring_format")
            requested_multi_day = changes.get("is_multi_day")
        else:
            requested_format = changes.get("scoring_format") or tournament.scoring_format
            requested_multi_day = changes.get("is_multi_day")
            if requested_multi_day is None:
                requested_multi_day = tournament.is_multi_day

        scoring_format, is_multi_day, multiplier = resolve_tournament_settings(
            new_type, requested_format, requested_multi_day
        )

        rules_changed = (
            type_changed
            or scoring_format != tournament.scoring_format
            or is_multi_day != tournament.is_multi_day
        )

        tournament.tournament_type = new_type.value
        tournament.scoring_format = scoring_format
        tournament.is_multi_day = is_multi_day
        tournament.multiplier = multiplier

        if rules_changed:
            db.flush()
            count = recalculate_tournament_scores(db, tournament)
            logger.info("Tournament %s rules changed, %d scores re-derived", tournament.id, count)

    db.commit()
    db.refresh(tournament)
    return tournament
