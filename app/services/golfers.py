import logging
from typing import List

from sqlalchemy.orm import Session

from app.db.models.golfer import Golfer
from app.db.models.golfer_stats import GolferSeasonStats
from app.services.pricing import (
    dampened_average,
    is_ranking_preserved,
    normalize,
    calculate_price,
    reprice_by_rank,
)

logger = logging.getLogger(__name__)


def _price_change(golfer: Golfer, new_price: int) -> dict:
    return {
        "golfer_id": golfer.id,
        "name": golfer.full_name,
        "old_price": golfer.price,
        "new_price": new_price,
    }


def calculate_golfer_prices(db: Session, season_id: int, dry_run: bool = False) -> dict:
    """
    Precio de cada golfista activo según su media de puntos en la temporada.
    Los que han jugado poco se acercan a la media de la liga.
    """
    golfers: List[Golfer] = db.query(Golfer).filter(Golfer.is_active == True).all()
    if not golfers:
        return {"updated": 0, "changes": []}

    stats = {
        s.golfer_id: s
        for s in db.query(GolferSeasonStats).filter(GolferSeasonStats.season_id == season_id).all()
    }

    averages = {}
    for golfer in golfers:
        s = stats.get(golfer.id)
        points = (s.total_points or 0) if s else 0
        played = (s.times_played or 0) if s else 0
        averages[golfer.id] = dampened_average(points, played)

    normalized = normalize(averages)
    changes = [_price_change(g, calculate_price(normalized[g.id])) for g in golfers]
    changes.sort(key=lambda c: c["new_price"], reverse=True)

    if not dry_run:
        _apply(db, golfers, changes)

    logger.info(
        "Priced %d golfers for season %s%s", len(changes), season_id, " (dry run)" if dry_run else ""
    )
    return {"updated": 0 if dry_run else len(changes), "changes": changes}


def reprice_current_golfers(db: Session, dry_run: bool = False) -> dict:
    """
    Lleva los precios actuales a la curva convexa manteniendo el orden
    (respeta los ajustes manuales del admin).
    """
    golfers: List[Golfer] = db.query(Golfer).all()
    if not golfers:
        return {"updated": 0, "ranking_preserved": True, "changes": []}

    current = {g.id: g.price for g in golfers}
    new_prices = reprice_by_rank(current)
    preserved = is_ranking_preserved(current, new_prices)
    if not preserved:
        logger.warning("Repricing changed the golfer ranking")

    changes = [_price_change(g, new_prices[g.id]) for g in golfers]
    changes.sort(key=lambda c: c["new_price"], reverse=True)

    if not dry_run:
        _apply(db, golfers, changes)

    return {
        "updated": 0 if dry_run else len(changes),
        "ranking_preserved": preserved,
        "changes": changes,
    }


def _apply(db: Session, golfers: List[Golfer], changes: List[dict]) -> None:
    by_id = {g.id: g for g in golfers}
    for change in changes:
        by_id[change["golfer_id"]].price = change["new_price"]
    db.commit()
