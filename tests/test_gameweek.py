from datetime import date, datetime, timedelta, timezone

import pytest

from app.services.gameweek import (
    format_date_key,
    format_month_label,
    format_week_label,
    gameweek_number,
    generate_month_options,
    generate_week_options,
    month_window,
    saturday_of_week,
    season_first_saturday,
    to_local_naive,
    week_window,
)

SATURDAY = datetime(2025, 1, 18)
SEASON_START = datetime(2025, 1, 1)  # miércoles


class TestSaturdayOfWeek:
    def test_idempotent_on_saturday(self):
        assert saturday_of_week(SATURDAY) == SATURDAY
        assert saturday_of_week(saturday_of_week(SATURDAY)) == SATURDAY

    def test_constant_over_the_week(self):
        for offset in range(7):
            moment = SATURDAY + timedelta(days=offset, hours=13, minutes=45)
            assert saturday_of_week(moment) == SATURDAY

    def test_friday_belongs_to_previous_saturday(self):
        assert saturday_of_week(datetime(2025, 1, 24, 23, 59)) == SATURDAY

    def test_accepts_plain_dates(self):
        assert saturday_of_week(date(2025, 1, 20)) == SATURDAY


class TestGameweekNumber:
    def test_first_saturday_rounds_forward(self):
        assert season_first_saturday(SEASON_START) == datetime(2025, 1, 4)
        assert season_first_saturday(SATURDAY) == SATURDAY

    def test_numbering(self):
        assert gameweek_number(datetime(2025, 1, 4), SEASON_START) == 1
        assert gameweek_number(datetime(2025, 1, 10), SEASON_START) == 1
        assert gameweek_number(datetime(2025, 1, 11), SEASON_START) == 2
        assert gameweek_number(datetime(2025, 2, 1), SEASON_START) == 5

    def test_pre_season_is_below_one(self):
        assert gameweek_number(datetime(2025, 1, 2), SEASON_START) < 1


class TestWindows:
    def test_week_window_is_half_open(self):
        start, end = week_window(datetime(2025, 1, 22, 10))
        assert start == SATURDAY
        assert end == datetime(2025, 1, 25)

    def test_month_window_crosses_year(self):
        assert month_window(datetime(2024, 12, 31)) == (datetime(2024, 12, 1), datetime(2025, 1, 1))


class TestLabels:
    def test_date_key(self):
        assert format_date_key(SATURDAY) == "2025-01-18"

    def test_week_label(self):
        assert format_week_label(datetime(2025, 2, 1), 3) == "Gameweek 3: Sat, Feb 1, 2025"

    @pytest.mark.parametrize("gameweek", [None, 0, -1])
    def test_week_label_without_gameweek(self, gameweek):
        assert format_week_label(datetime(2025, 2, 1), gameweek) == "Sat, Feb 1, 2025"

    def test_month_label(self):
        assert format_month_label(datetime(2026, 2, 14)) == "February 2026"


class TestWeekOptions:
    def test_from_first_saturday_to_current_week(self):
        options = generate_week_options(SEASON_START, SEASON_START, now=datetime(2025, 1, 20))
        assert [o.value for o in options] == ["2025-01-18", "2025-01-11", "2025-01-04"]
        assert options[0].label == "Gameweek 3: Sat, Jan 18, 2025"

    def test_late_team_starts_at_its_week(self):
        options = generate_week_options(datetime(2025, 1, 13), SEASON_START, now=datetime(2025, 1, 20))
        assert [o.value for o in options] == ["2025-01-18", "2025-01-11"]

    def test_pre_season_offers_first_saturday(self):
        options = generate_week_options(SEASON_START, SEASON_START, now=datetime(2025, 1, 2))
        assert [o.value for o in options] == ["2025-01-04"]

    def test_without_season_runs_backwards(self):
        options = generate_week_options(datetime(2025, 1, 5), now=datetime(2025, 1, 20))
        assert [o.value for o in options] == ["2025-01-18", "2025-01-11"]
        assert options[0].label == "Sat, Jan 18, 2025"

    def test_never_empty(self):
        options = generate_week_options(datetime(2025, 2, 1), now=datetime(2025, 1, 20))
        assert [o.value for o in options] == ["2025-01-18"]

    def test_restartable(self):
        options = generate_week_options(SEASON_START, SEASON_START, now=datetime(2025, 1, 20))
        assert list(options) == list(options)


class TestMonthOptions:
    def test_most_recent_first(self):
        options = generate_month_options(datetime(2024, 11, 15), now=datetime(2025, 2, 3))
        assert [o.value for o in options] == ["2025-02-01", "2025-01-01", "2024-12-01", "2024-11-01"]
        assert options[0].label == "February 2025"


class TestLocalNaive:
    def test_naive_is_untouched(self):
        assert to_local_naive(SATURDAY) is SATURDAY
        assert to_local_naive(None) is None

    def test_aware_becomes_naive(self):
        moment = datetime(2025, 1, 20, 10, tzinfo=timezone.utc)
        local = to_local_naive(moment)
        assert local.tzinfo is None
        assert local == moment.astimezone().replace(tzinfo=None)
        assert saturday_of_week(local) == SATURDAY
