from datetime import datetime

import pytest

from app.db.models.season import Season
from app.services.teams import TeamValidationError, get_team, save_team, validate_team

PRICES = {i: 8_000_000 for i in range(1, 9)}


class TestValidateTeam:
    def test_valid_team_returns_total(self):
        assert validate_team([1, 2, 3, 4, 5, 6], 1, PRICES) == 48_000_000

    def test_captain_is_optional(self):
        assert validate_team([1, 2, 3, 4, 5, 6], None, PRICES) == 48_000_000

    def test_wrong_size(self):
        with pytest.raises(TeamValidationError, match="exactly 6"):
            validate_team([1, 2, 3], None, PRICES)

    def test_duplicates(self):
        with pytest.raises(TeamValidationError, match="Duplicate"):
            validate_team([1, 1, 2, 3, 4, 5], None, PRICES)

    def test_unknown_golfer(self):
        with pytest.raises(TeamValidationError, match="99"):
            validate_team([1, 2, 3, 4, 5, 99], None, PRICES)

    def test_captain_outside_team(self):
        with pytest.raises(TeamValidationError, match="Captain"):
            validate_team([1, 2, 3, 4, 5, 6], 7, PRICES)

    def test_budget_cap(self):
        prices = {**PRICES, 6: 11_000_000}
        with pytest.raises(TeamValidationError, match="£50M"):
            validate_team([1, 2, 3, 4, 5, 6], None, prices)


class TestSaveTeam:
    @pytest.fixture
    def season(self, db):
        season = Season(name="2025", start_date=datetime(2025, 1, 1), end_date=datetime(2026, 1, 1), is_active=True)
        db.add(season)
        db.commit()
        return season

    def test_create_then_replace(self, db, season, player, golfers):
        ids = [g.id for g in golfers]
        team = save_team(db, player.id, season.id, ids[:6], ids[0])
        assert team.total_spent == 30_000_000

        again = save_team(db, player.id, season.id, ids[4:], ids[5])
        assert again.id == team.id
        assert again.golfer_ids == ids[4:]
        assert get_team(db, player.id, season.id).captain_id == ids[5]

    def test_inactive_golfer_rejected(self, db, season, player, golfers):
        golfers[0].is_active = False
        db.commit()
        with pytest.raises(TeamValidationError, match="inactive"):
            save_team(db, player.id, season.id, [g.id for g in golfers[:6]])
