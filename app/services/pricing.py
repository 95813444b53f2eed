"""
Precios de mercado de los golfistas.

calculate_price convierte una puntuación normalizada (0-1) en un precio con
una curva convexa: los mejores se acercan al techo más rápido que el resto.
"""
import math
from typing import Dict, Hashable, Optional

MIN_PRICE = 3_500_000   # £3.5M
MAX_PRICE = 14_500_000  # £14.5M
PRICE_RANGE = MAX_PRICE - MIN_PRICE
POWER_EXPONENT = 1.3    # > 1 infla los precios altos
ROUND_TO = 100_000      # Redondeo a £100K

# Amortiguación de muestras pequeñas
MEAN_AVG_PTS = 3        # Media de la liga por evento
MIN_SAMPLE_SIZE = 5     # Eventos mínimos para fiarse de la media real


def calculate_price(normalized_score: Optional[float]) -> int:
    """Nunca lanza: None/NaN cuenta como 0 y todo se acota a [MIN_PRICE, MAX_PRICE]."""
    if normalized_score is None or math.isnan(normalized_score):
        normalized_score = 0.0

    clamped = max(0.0, min(1.0, normalized_score))
    price_factor = clamped ** POWER_EXPONENT
    raw_price = MIN_PRICE + price_factor * PRICE_RANGE
    # Redondeo "half up", no el bancario de round()
    rounded = int(math.floor(raw_price / ROUND_TO + 0.5)) * ROUND_TO
    return min(max(rounded, MIN_PRICE), MAX_PRICE)


def dampened_average(points: float, events: int) -> float:
    """
    Media de puntos por evento. Con menos de MIN_SAMPLE_SIZE eventos se
    rellenan los que faltan con la media de la liga.
    """
    if events >= MIN_SAMPLE_SIZE:
        return points / events
    missing = MIN_SAMPLE_SIZE - max(events, 0)
    return (points + MEAN_AVG_PTS * missing) / MIN_SAMPLE_SIZE


def normalize(values: Dict[Hashable, float]) -> Dict[Hashable, float]:
    """Escala min-max a [0, 1]. Si todos son iguales, todos a 0."""
    if not values:
        return {}
    low = min(values.values())
    high = max(values.values())
    spread = high - low
    if spread == 0:
        return {key: 0.0 for key in values}
    return {key: (value - low) / spread for key, value in values.items()}


def reprice_by_rank(current_prices: Dict[Hashable, int]) -> Dict[Hashable, int]:
    """
    Recoloca los precios actuales sobre la curva nueva sin alterar el orden.
    """
    return {key: calculate_price(score) for key, score in normalize(current_prices).items()}


def is_ranking_preserved(before: Dict[Hashable, float], after: Dict[Hashable, int]) -> bool:
    """Ningún par invierte su orden (los empates nuevos por redondeo se permiten)."""
    ordered = sorted(before, key=before.get)
    return all(after[a] <= after[b] for a, b in zip(ordered, ordered[1:]))
