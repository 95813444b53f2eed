import logging
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from app.db.models.golfer import Golfer
from app.db.models.team import Team
from app.services.rules import BUDGET_CAP, TEAM_SIZE

logger = logging.getLogger(__name__)


class TeamValidationError(ValueError):
    """La selección de golfistas no cumple las reglas del juego."""


def validate_team(golfer_ids: List[int], captain_id: Optional[int], prices: Dict[int, int]) -> int:
    """
    Comprueba la selección y devuelve el total gastado.
    `prices` solo debe contener golfistas activos.
    """
    if len(golfer_ids) != TEAM_SIZE:
        raise TeamValidationError(f"You must select exactly {TEAM_SIZE} golfers")

    if len(set(golfer_ids)) != len(golfer_ids):
        raise TeamValidationError("Duplicate golfers are not allowed")

    unknown = [g for g in golfer_ids if g not in prices]
    if unknown:
        raise TeamValidationError(
            f"One or more golfers not found or inactive: {', '.join(str(g) for g in unknown)}"
        )

    if captain_id is not None and captain_id not in golfer_ids:
        raise TeamValidationError("Captain must be one of the selected golfers")

    total_spent = sum(prices[g] for g in golfer_ids)
    if total_spent > BUDGET_CAP:
        raise TeamValidationError(
            f"Budget exceeded. Maximum is £{BUDGET_CAP / 1_000_000:g}M"
        )

    return total_spent


def get_team(db: Session, user_id: int, season_id: int) -> Optional[Team]:
    return (
        db.query(Team)
        .filter(
            Team.user_id == user_id,
            Team.season_id == season_id,
            Team.is_active == True,
        )
        .first()
    )


def save_team(
    db: Session,
    user_id: int,
    season_id: int,
    golfer_ids: List[int],
    captain_id: Optional[int] = None,
) -> Team:
    golfers = (
        db.query(Golfer)
        .filter(Golfer.id.in_(golfer_ids), Golfer.is_active == True)
        .all()
    )
    prices = {g.id: g.price for g in golfers}

    try:
        total_spent = validate_team(golfer_ids, captain_id, prices)
    except TeamValidationError as e:
        logger.warning("Rejected team for user %s: %s", user_id, e)
        raise

    team = db.query(Team).filter(Team.user_id == user_id, Team.season_id == season_id).first()
    if not team:
        team = Team(user_id=user_id, season_id=season_id)
        db.add(team)

    team.golfer_ids = list(golfer_ids)
    team.captain_id = captain_id
    team.total_spent = total_spent
    team.is_active = True

    db.commit()
    db.refresh(team)
    return team
