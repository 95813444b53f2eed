"""
Calendario de jornadas (gameweeks).

Una jornada empieza el sábado a las 00:00 (hora local) y dura 7 días. Las
jornadas se numeran desde el primer sábado de la temporada.

Ojo: saturday_of_week redondea HACIA ATRÁS y season_first_saturday redondea
HACIA DELANTE. Es el comportamiento histórico y cambia la numeración de las
temporadas que no empiezan en sábado, así que no se toca.
"""
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import List, Optional, Tuple

SATURDAY = 5  # datetime.weekday(): lunes=0 ... domingo=6
WEEK = timedelta(days=7)


@dataclass(frozen=True)
class PeriodOption:
    value: str  # YYYY-MM-DD
    label: str


def _as_datetime(d) -> datetime:
    if isinstance(d, datetime):
        return d
    if isinstance(d, date):
        return datetime(d.year, d.month, d.day)
    raise TypeError(f"Expected date or datetime, got {type(d).__name__}")


def to_local_naive(moment: Optional[datetime]) -> Optional[datetime]:
    """Fechas con zona horaria pasan a hora local sin tz; el calendario solo trabaja así."""
    if moment is None or moment.tzinfo is None:
        return moment
    return moment.astimezone().replace(tzinfo=None)


def start_of_day(d) -> datetime:
    return _as_datetime(d).replace(hour=0, minute=0, second=0, microsecond=0)


def saturday_of_week(d) -> datetime:
    """Sábado 00:00 de la semana que contiene d (sábado→0 días, domingo→1, ..., viernes→6)."""
    d = start_of_day(d)
    days_since_saturday = (d.weekday() - SATURDAY) % 7
    return d - timedelta(days=days_since_saturday)


def season_first_saturday(season_start) -> datetime:
    """Primer sábado en o después del inicio de temporada."""
    d = start_of_day(season_start)
    days_until_saturday = (SATURDAY - d.weekday()) % 7
    return d + timedelta(days=days_until_saturday)


def gameweek_number(d, season_start) -> int:
    """Jornada 1 = primer sábado de la temporada. Antes de eso sale < 1."""
    diff = saturday_of_week(d) - season_first_saturday(season_start)
    return diff.days // 7 + 1


def month_start(d) -> datetime:
    d = _as_datetime(d)
    return datetime(d.year, d.month, 1)


def next_month_start(d) -> datetime:
    d = _as_datetime(d)
    if d.month == 12:
        return datetime(d.year + 1, 1, 1)
    return datetime(d.year, d.month + 1, 1)


def previous_month_start(d) -> datetime:
    d = _as_datetime(d)
    if d.month == 1:
        return datetime(d.year - 1, 12, 1)
    return datetime(d.year, d.month - 1, 1)


def week_window(d) -> Tuple[datetime, datetime]:
    start = saturday_of_week(d)
    return start, start + WEEK


def month_window(d) -> Tuple[datetime, datetime]:
    return month_start(d), next_month_start(d)


def format_date_key(d) -> str:
    return _as_datetime(d).strftime("%Y-%m-%d")


def format_week_label(week_start, gameweek: Optional[int] = None) -> str:
    """Ej: "Gameweek 3: Sat, Feb 1, 2025"."""
    d = _as_datetime(week_start)
    date_str = f"{d:%a}, {d:%b} {d.day}, {d.year}"
    if gameweek and gameweek > 0:
        return f"Gameweek {gameweek}: {date_str}"
    return date_str


def format_month_label(d) -> str:
    """Ej: "February 2026"."""
    return f"{_as_datetime(d):%B %Y}"


def generate_week_options(
    team_effective_start,
    season_start=None,
    now: Optional[datetime] = None,
) -> List[PeriodOption]:
    """
    Opciones del desplegable de jornadas, la más reciente primero.

    Con temporada: desde el más tardío entre el primer sábado de la temporada
    y la semana de alta del equipo, hasta la semana actual (o hasta el primer
    sábado si aún es pretemporada).
    Sin temporada: hacia atrás desde la semana actual hasta el alta del equipo.
    """
    now = now or datetime.now()
    current_week = saturday_of_week(now)
    effective_start = start_of_day(team_effective_start)
    options = []

    if season_start is not None:
        first_saturday = season_first_saturday(season_start)
        start = first_saturday if first_saturday >= effective_start else saturday_of_week(effective_start)
        end_week = first_saturday if now < first_saturday else current_week

        current = start
        while current <= end_week:
            gw = gameweek_number(current, season_start)
            options.append(PeriodOption(format_date_key(current), format_week_label(current, gw)))
            current += WEEK

        options.reverse()
    else:
        current = current_week
        while current >= effective_start:
            options.append(PeriodOption(format_date_key(current), format_week_label(current)))
            current -= WEEK

    # Siempre al menos una opción
    if not options:
        options.append(PeriodOption(format_date_key(current_week), format_week_label(current_week)))

    return options


def generate_month_options(season_start, now: Optional[datetime] = None) -> List[PeriodOption]:
    """Meses desde el inicio de temporada hasta el actual, el más reciente primero."""
    now = now or datetime.now()
    options = []

    current = month_start(season_start)
    while current <= now:
        options.append(PeriodOption(format_date_key(current), format_month_label(current)))
        current = next_month_start(current)

    options.reverse()
    return options
