"""
Tablas de reglas del juego.

Todo lo que depende del tipo de torneo (multiplicador, formato por defecto,
formato forzado, multi-día) sale de TOURNAMENT_TYPE_CONFIG, así no hay
condicionales repartidos por el código.
"""
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Optional, Tuple

BUDGET_CAP = 50_000_000  # £50M
TEAM_SIZE = 6


class TournamentType(str, Enum):
    ROLLUP_STABLEFORD = "rollup_stableford"
    WEEKDAY_MEDAL = "weekday_medal"
    WEEKEND_MEDAL = "weekend_medal"
    PRESIDENTS_CUP = "presidents_cup"
    FOUNDERS = "founders"
    CLUB_CHAMPS_NETT = "club_champs_nett"


class ScoringFormat(str, Enum):
    STABLEFORD = "stableford"
    MEDAL = "medal"


class TournamentStatus(str, Enum):
    DRAFT = "draft"
    PUBLISHED = "published"
    COMPLETE = "complete"


# Estados que cuentan para el leaderboard
SCORED_STATUSES = (TournamentStatus.PUBLISHED.value, TournamentStatus.COMPLETE.value)


@dataclass(frozen=True)
class TournamentTypeConfig:
    label: str
    multiplier: int
    default_format: ScoringFormat
    forced_format: Optional[ScoringFormat]
    default_multi_day: bool


TOURNAMENT_TYPE_CONFIG = MappingProxyType({
    TournamentType.ROLLUP_STABLEFORD: TournamentTypeConfig(
        "Rollup Stableford", 1, ScoringFormat.STABLEFORD, ScoringFormat.STABLEFORD, False
    ),
    TournamentType.WEEKDAY_MEDAL: TournamentTypeConfig(
        "Weekday Medal", 1, ScoringFormat.MEDAL, ScoringFormat.MEDAL, False
    ),
    TournamentType.WEEKEND_MEDAL: TournamentTypeConfig(
        "Weekend Medal", 2, ScoringFormat.MEDAL, None, False
    ),
    TournamentType.PRESIDENTS_CUP: TournamentTypeConfig(
        "Presidents Cup", 3, ScoringFormat.STABLEFORD, None, False
    ),
    TournamentType.FOUNDERS: TournamentTypeConfig(
        "Founders", 4, ScoringFormat.STABLEFORD, None, True
    ),
    TournamentType.CLUB_CHAMPS_NETT: TournamentTypeConfig(
        "Club Champs Nett", 5, ScoringFormat.MEDAL, None, True
    ),
})

# Puntos base por posición. Cualquier otra posición (o None) vale 0
POSITION_POINTS = MappingProxyType({1: 10, 2: 7, 3: 5})


def get_type_config(tournament_type) -> TournamentTypeConfig:
    return TOURNAMENT_TYPE_CONFIG[TournamentType(tournament_type)]


def get_multiplier_for_type(tournament_type) -> int:
    return get_type_config(tournament_type).multiplier


def get_tournament_type_label(tournament_type) -> str:
    return get_type_config(tournament_type).label


def resolve_tournament_settings(
    tournament_type,
    scoring_format=None,
    is_multi_day: Optional[bool] = None,
) -> Tuple[str, bool, int]:
    """
    Devuelve (scoring_format, is_multi_day, multiplier) para un torneo nuevo
    o que cambia de tipo.

    Si el tipo fuerza un formato, gana siempre sobre lo que pida el admin.
    """
    config = get_type_config(tournament_type)

    if config.forced_format is not None:
        resolved_format = config.forced_format
    elif scoring_format is not None:
        resolved_format = ScoringFormat(scoring_format)
    else:
        resolved_format = config.default_format

    resolved_multi_day = config.default_multi_day if is_multi_day is None else is_multi_day

    return resolved_format.value, resolved_multi_day, config.multiplier
