import random
from datetime import datetime, timedelta
from app.db.session import SessionLocal, engine, Base
from app.db.models import _all
from app.db.models.user import User
from app.db.models.golfer import Golfer
from app.db.models.tournament import Tournament
from app.schemas.score import ScoreEntry
from app.services.gameweek import saturday_of_week
from app.services.golfers import calculate_golfer_prices
from app.services.rules import TournamentStatus, TournamentType
from app.services.scoring import enter_tournament_scores
from app.services.seasons import create_season as create_season_record
from app.services.teams import TeamValidationError, save_team
from app.services.tournaments import create_tournament

# Configuración
NUM_USERS = 20
NUM_GOLFERS = 30
NUM_WEEKS = 6

FIRST_NAMES = ["James", "Oliver", "Harry", "Jack", "George", "Noah", "Charlie", "Jacob", "Alfie", "Freddie"]
LAST_NAMES = ["Smith", "Jones", "Taylor", "Brown", "Williams", "Wilson", "Johnson", "Davies", "Robinson", "Wright",
              "Thompson", "Evans", "Walker", "White", "Roberts"]

def reset_db():
    print("🗑️ Borrando base de datos antigua...")
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    print("✅ Tablas creadas.")

def create_season(db):
    start = saturday_of_week(datetime.now()) - timedelta(weeks=NUM_WEEKS)
    return create_season_record(
        db,
        name=str(start.year),
        start_date=start,
        end_date=start + timedelta(days=365),
        is_active=True,
    )

def create_golfers(db):
    print("🏌️ Creando golfistas...")
    golfers = []
    used = set()
    while len(golfers) < NUM_GOLFERS:
        first, last = random.choice(FIRST_NAMES), random.choice(LAST_NAMES)
        if (first, last) in used:
            continue
        used.add((first, last))
        g = Golfer(first_name=first, last_name=last, price=random.randrange(35, 146) * 100_000)
        db.add(g)
        golfers.append(g)
    db.commit()
    return golfers

def create_users_and_teams(db, season, golfers):
    users = []
    admin = User(email="admin@test.com", username="ADMIN", role="admin")
    users.append(admin)
    for i in range(NUM_USERS - 1):
        users.append(User(email=f"bot{i}@test.com", username=f"Jugador_{i+1}", role="user"))
    db.add_all(users)
    db.commit()

    print("👥 Creando equipos...")
    for user in users:
        for _ in range(50):
            picks = random.sample(golfers, 6)
            try:
                save_team(db, user.id, season.id, [g.id for g in picks], random.choice(picks).id)
                break
            except TeamValidationError:
                continue
    return users

def simulate_tournament(db, season, golfers, week_index):
    tournament_type = random.choice(list(TournamentType))
    tournament = create_tournament(db, {
        "name": f"Torneo {week_index + 1}",
        "season_id": season.id,
        "start_date": season.start_date + timedelta(weeks=week_index, days=1),
        "tournament_type": tournament_type,
    })
    print(f"⛳ Simulando {tournament.name} ({tournament_type.value})...")

    field = random.sample(golfers, random.randint(8, len(golfers)))
    medal = tournament.scoring_format == "medal"
    entries = []
    for position, golfer in enumerate(field, start=1):
        raw = random.randint(-4, 12) if medal else random.randint(24, 42)
        entries.append(ScoreEntry(golfer_id=golfer.id, participated=True, position=position, raw_score=raw))

    enter_tournament_scores(db, tournament, entries)
    tournament.status = TournamentStatus.COMPLETE.value
    db.commit()

def main():
    db = SessionLocal()
    try:
        reset_db()
        season = create_season(db)
        golfers = create_golfers(db)
        create_users_and_teams(db, season, golfers)

        for i in range(NUM_WEEKS):
            simulate_tournament(db, season, golfers, i)

        result = calculate_golfer_prices(db, season.id)
        print(f"💷 Precios recalculados: {result['updated']} golfistas")

        db.add(Tournament(
            name="Torneo Futuro",
            season_id=season.id,
            start_date=datetime.now() + timedelta(days=7),
            tournament_type=TournamentType.WEEKEND_MEDAL.value,
            scoring_format="medal",
            is_multi_day=False,
            multiplier=2,
            status=TournamentStatus.DRAFT.value,
            participating_golfer_ids=[],
        ))
        db.commit()

        print("✅ ¡Simulación completada con éxito!")
    except Exception as e:
        print(f"❌ Error: {e}")
        import traceback
        traceback.print_exc()
    finally:
        db.close()

if __name__ == "__main__":
    main()
