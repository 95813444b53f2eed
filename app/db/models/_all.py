# Importa todos los modelos para que Base.metadata los conozca antes de create_all
from app.db.models.season import Season
from app.db.models.tournament import Tournament
from app.db.models.score import Score
from app.db.models.golfer import Golfer
from app.db.models.golfer_stats import GolferSeasonStats
from app.db.models.team import Team
from app.db.models.user import User
