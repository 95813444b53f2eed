"""
Arranque de una liga vacía: administrador + primera temporada activa.

    python -m app.scripts.create_admin [AÑO]

Las contraseñas las gestiona el servicio de auth; aquí solo se saca un token
de 24h para empezar a cargar torneos y resultados desde la API.
"""
import sys
from datetime import datetime

from app.core.security import create_access_token
from app.db.session import SessionLocal, engine, Base
from app.db.models import _all
from app.db.models.season import Season
from app.db.models.user import User
from app.services.seasons import create_season

ADMIN_EMAIL = "administrador@example.com"
ADMIN_USERNAME = "ADMINISTRADOR"
TOKEN_MINUTES = 24 * 60


def get_or_create_admin(db) -> User:
    admin = (
        db.query(User)
        .filter((User.email == ADMIN_EMAIL) | (User.username == ADMIN_USERNAME))
        .first()
    )
    if admin:
        if admin.role != "admin":
            admin.role = "admin"
            db.commit()
        print(f"⚠️  El administrador ya existía (id {admin.id})")
        return admin

    admin = User(email=ADMIN_EMAIL, username=ADMIN_USERNAME, role="admin")
    db.add(admin)
    db.commit()
    db.refresh(admin)
    print(f"✅ Administrador creado (id {admin.id})")
    return admin


def ensure_active_season(db, year: int) -> Season:
    """Si ya hay temporada activa se respeta; si no, se crea la del año indicado."""
    active = db.query(Season).filter(Season.is_active == True).first()
    if active:
        print(f"⛳ Temporada activa: {active.name}")
        return active

    season = create_season(
        db,
        name=str(year),
        start_date=datetime(year, 1, 1),
        end_date=datetime(year + 1, 1, 1),
        is_active=True,
    )
    print(f"⛳ Temporada {season.name} creada y activada")
    return season


def main(year: int) -> None:
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        admin = get_or_create_admin(db)
        ensure_active_season(db, year)
        print(f"➡️  Token ({TOKEN_MINUTES // 60}h):", create_access_token(admin.id, expires_minutes=TOKEN_MINUTES))
    except Exception as e:
        db.rollback()
        print(f"❌ Error preparando la liga: {e}")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    main(int(sys.argv[1]) if len(sys.argv) > 1 else datetime.now().year)
