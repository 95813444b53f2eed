from datetime import datetime, timezone
from types import SimpleNamespace

import pytest

from app.services.leaderboard import (
    TeamSelection,
    UserTotal,
    build_leaderboard,
    build_leaders,
    build_tournament_leaderboard,
    paginate,
    previous_window,
    rank_entries,
    resolve_period,
)
from app.services.seasons import SeasonInfo

SEASON = SeasonInfo(id=1, name="2025", start_date=datetime(2025, 1, 1), end_date=datetime(2026, 1, 1))
NOW = datetime(2025, 1, 22, 12)  # miércoles de la jornada del 18 de enero


def tournament(tid, start, multiplier=1, status="published", season_id=1):
    return SimpleNamespace(id=tid, start_date=start, multiplier=multiplier, status=status, season_id=season_id)


def score(tournament_id, golfer_id, points, participated=True):
    return SimpleNamespace(
        tournament_id=tournament_id, golfer_id=golfer_id,
        multiplied_points=points, participated=participated,
    )


class FakeSource:
    def __init__(self, season=SEASON, tournaments=(), scores=(), teams=()):
        self.season = season
        self.tournaments = list(tournaments)
        self.scores = list(scores)
        self.teams = list(teams)

    def get_active_season(self):
        return self.season

    def get_tournaments(self, season_id):
        return self.tournaments

    def get_tournament(self, tournament_id):
        return next((t for t in self.tournaments if t.id == tournament_id), None)

    def get_scores(self, tournament_ids):
        return [s for s in self.scores if s.tournament_id in tournament_ids]

    def get_teams(self, season_id):
        return self.teams


@pytest.fixture
def source():
    tournaments = [
        tournament(1, datetime(2025, 1, 19, 9), multiplier=2),  # jornada actual
        tournament(2, datetime(2025, 1, 12, 9)),                # jornada anterior
        tournament(3, datetime(2025, 1, 25)),                   # ya es la siguiente
    ]
    scores = [
        score(1, 1, 26), score(1, 2, 10), score(1, 8, 13), score(1, 7, 0),
        score(2, 7, 20), score(2, 13, 5),
        score(3, 2, 100),
    ]
    early = datetime(2025, 1, 1)
    teams = [
        TeamSelection(1, "alice", [1, 2, 3, 4, 5, 6], captain_id=1, total_spent=48_000_000, created_at=early),
        TeamSelection(2, "bob", [7, 8, 9, 10, 11, 12], created_at=early),
        TeamSelection(3, "carol", [1, 8, 13, 14, 15, 16], captain_id=8, created_at=early),
        TeamSelection(4, "dave", [20, 21, 22, 23, 24, 25], created_at=datetime(2025, 1, 20)),
    ]
    return FakeSource(tournaments=tournaments, scores=scores, teams=teams)


class TestResolvePeriod:
    def test_week(self):
        period = resolve_period("week", SEASON, now=NOW)
        assert period.start_date == datetime(2025, 1, 18)
        assert period.end_date == datetime(2025, 1, 25)
        assert period.label == "Gameweek 3: Sat, Jan 18, 2025"
        assert period.has_previous is True
        assert period.has_next is False

    def test_past_week_has_next(self):
        period = resolve_period("week", SEASON, anchor=datetime(2025, 1, 12), now=NOW)
        assert period.start_date == datetime(2025, 1, 11)
        assert period.has_next is True

    def test_month(self):
        period = resolve_period("month", SEASON, now=NOW)
        assert (period.start_date, period.end_date) == (datetime(2025, 1, 1), datetime(2025, 2, 1))
        assert period.label == "January 2025"
        assert period.has_previous is False
        assert period.has_next is False

    def test_season(self):
        period = resolve_period("season", SEASON, now=NOW)
        assert (period.start_date, period.end_date) == (SEASON.start_date, SEASON.end_date)
        assert period.label == "2025 Season"

    def test_offset_aware_dates(self):
        anchor = datetime(2025, 1, 20, 10, tzinfo=timezone.utc)
        period = resolve_period("week", SEASON, anchor=anchor, now=NOW.replace(tzinfo=timezone.utc))
        assert period.start_date == datetime(2025, 1, 18)
        assert period.start_date.tzinfo is None

    def test_unknown_kind(self):
        with pytest.raises(ValueError, match="Unknown period"):
            resolve_period("year", SEASON, now=NOW)


class TestPreviousWindow:
    def test_week(self):
        period = resolve_period("week", SEASON, now=NOW)
        assert previous_window(period, SEASON, NOW) == (datetime(2025, 1, 11), datetime(2025, 1, 18))

    def test_month(self):
        period = resolve_period("month", SEASON, anchor=datetime(2025, 3, 9), now=NOW)
        assert previous_window(period, SEASON, NOW) == (datetime(2025, 2, 1), datetime(2025, 3, 1))

    def test_season_as_of_current_gameweek(self):
        period = resolve_period("season", SEASON, now=NOW)
        assert previous_window(period, SEASON, NOW) == (SEASON.start_date, datetime(2025, 1, 18))

    def test_season_without_history(self):
        period = resolve_period("season", SEASON, now=datetime(2025, 1, 2))
        assert previous_window(period, SEASON, datetime(2025, 1, 2)) is None


class TestRanking:
    def test_ties_share_rank(self):
        entries = rank_entries([
            UserTotal(1, "zed", points=10),
            UserTotal(2, "Amy", points=10),
            UserTotal(3, "bob", points=5),
        ])
        assert [(e.username, e.rank) for e in entries] == [("Amy", 1), ("zed", 1), ("bob", 3)]

    def test_tie_on_name_falls_back_to_id(self):
        entries = rank_entries([UserTotal(9, "sam", points=0), UserTotal(4, "sam", points=0)])
        assert [e.user_id for e in entries] == [4, 9]

    def test_movement(self):
        entries = rank_entries(
            [UserTotal(1, "a", points=30), UserTotal(2, "b", points=20), UserTotal(3, "c", points=10),
             UserTotal(4, "d", points=5)],
            previous_ranks={1: 3, 2: 2, 3: 1},
        )
        moves = {e.user_id: (e.movement, e.movement_amount) for e in entries}
        assert moves == {1: ("up", 2), 2: ("same", 0), 3: ("down", 2), 4: ("new", 0)}


class TestBuildLeaderboard:
    def test_week_totals_and_captain(self, source):
        result = build_leaderboard(source, "week", now=NOW)
        points = {e.username: e.points for e in result.entries}
        # alice: capitán 26 * 2 + 10; carol: 26 + capitán 13 * 2
        assert points == {"alice": 62, "carol": 52, "bob": 13, "dave": 0}
        assert result.tournament_count == 1

    def test_events_played(self, source):
        result = build_leaderboard(source, "week", now=NOW)
        played = {e.username: e.events_played for e in result.entries}
        assert played == {"alice": 1, "carol": 1, "bob": 1, "dave": 0}

    def test_movement_against_previous_week(self, source):
        entries = {e.username: e for e in build_leaderboard(source, "week", now=NOW).entries}
        assert (entries["alice"].movement, entries["alice"].movement_amount) == ("up", 2)
        assert entries["carol"].movement == "same"
        assert (entries["bob"].movement, entries["bob"].movement_amount) == ("down", 2)
        assert entries["dave"].movement == "new"
        assert entries["dave"].previous_rank is None

    def test_month_includes_every_tournament_in_month(self, source):
        result = build_leaderboard(source, "month", now=NOW)
        points = {e.username: e.points for e in result.entries}
        assert points["alice"] == 162
        assert points["bob"] == 33
        assert result.tournament_count == 3

    def test_team_value(self, source):
        result = build_leaderboard(source, "week", now=NOW)
        assert result.entries[0].team_value == 48_000_000

    def test_no_active_season(self, source):
        source.season = None
        result = build_leaderboard(source, "season", now=NOW)
        assert result.entries == []
        assert result.period is None

    def test_leaders(self, source):
        summary = build_leaders(source, now=NOW)
        assert set(summary) == {"week", "month", "season"}
        assert summary["week"]["leader"].username == "alice"
        assert summary["season"]["period"].label == "2025 Season"


class TestPaginate:
    def test_pages(self):
        entries = rank_entries([UserTotal(i, f"u{i}", points=i) for i in range(5)])
        first = paginate(entries, page=1, page_size=2)
        assert len(first.items) == 2
        assert first.has_more
        last = paginate(entries, page=3, page_size=2)
        assert [e.user_id for e in last.items] == [0]
        assert not last.has_more
        assert paginate(entries, page=4, page_size=2).items == []


class TestTournamentLeaderboard:
    def test_ranks_one_tournament(self, source):
        entries = build_tournament_leaderboard(source, 1)
        assert [(e.username, e.points, e.rank) for e in entries] == [
            ("alice", 62, 1), ("carol", 52, 2), ("bob", 13, 3), ("dave", 0, 4),
        ]
        assert {e.movement for e in entries} == {"new"}

    def test_draft_tournament_is_empty(self, source):
        source.tournaments.append(tournament(4, datetime(2025, 1, 20), status="draft"))
        source.scores.append(score(4, 1, 50))
        assert build_tournament_leaderboard(source, 4) == []

    def test_other_season_is_empty(self, source):
        source.tournaments.append(tournament(5, datetime(2024, 6, 1), season_id=99))
        assert build_tournament_leaderboard(source, 5) == []

    def test_unknown_tournament(self, source):
        assert build_tournament_leaderboard(source, 404) == []

    def test_no_active_season(self, source):
        source.season = None
        assert build_tournament_leaderboard(source, 1) == []
