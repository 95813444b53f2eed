from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.core.deps import get_db, require_admin
from app.db.models.golfer import Golfer
from app.db.models.golfer_stats import GolferSeasonStats
from app.db.models.season import Season
from app.schemas.golfer import GolferOut, GolferStatsOut, PriceRecalculation
from app.services.golfers import calculate_golfer_prices, reprice_current_golfers
from app.services.pricing import calculate_price
from app.services.seasons import get_active_season

router = APIRouter(prefix="/golfers", tags=["Golfers"])

@router.get("/", response_model=list[GolferOut])
def list_golfers(active_only: bool = True, db: Session = Depends(get_db)):
    query = db.query(Golfer)
    if active_only:
        query = query.filter(Golfer.is_active == True)
    return query.order_by(Golfer.price.desc(), Golfer.last_name).all()

@router.get("/price-preview")
def price_preview(score: Optional[float] = None):
    """Precio que correspondería a una puntuación normalizada (0..1, fuera de rango se acota)."""
    return {"score": score, "price": calculate_price(score)}

@router.post("/prices")
def recalculate_prices(
    data: PriceRecalculation,
    db: Session = Depends(get_db),
    current_user = Depends(require_admin)
):
    # Sin temporada: solo se recoloca la curva manteniendo el orden actual
    if data.season_id is None:
        return reprice_current_golfers(db, dry_run=data.dry_run)

    if not db.get(Season, data.season_id):
        raise HTTPException(status_code=404, detail="Season not found")

    return calculate_golfer_prices(db, data.season_id, dry_run=data.dry_run)

@router.get("/{golfer_id}/stats", response_model=GolferStatsOut)
def golfer_stats(
    golfer_id: int,
    season_id: Optional[int] = None,
    db: Session = Depends(get_db)
):
    """
    Contadores de temporada de un golfista (por defecto, la temporada activa).
    Si aún no ha jugado, todo a cero.
    """
    golfer = db.get(Golfer, golfer_id)
    if not golfer:
        raise HTTPException(status_code=404, detail="Golfer not found")

    if season_id is None:
        season = get_active_season(db)
        if season is None:
            raise HTTPException(status_code=404, detail="No active season")
        season_id = season.id

    stats = db.get(GolferSeasonStats, (golfer_id, season_id))
    if not stats:
        return GolferStatsOut(golfer_id=golfer_id, season_id=season_id)
    return stats
