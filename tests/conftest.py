"""
Fixtures compartidas: BD SQLite en memoria y cliente de la API.
"""
import os

# Antes de importar la app: nada de ficheros .db durante los tests
os.environ["DATABASE_URL"] = "sqlite://"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.deps import get_db
from app.core.security import create_access_token
from app.db.models import _all
from app.db.models.golfer import Golfer
from app.db.models.user import User
from app.db.session import Base
from app.services.seasons import active_season_cache
from main import app

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)


@pytest.fixture(autouse=True)
def fresh_cache():
    active_season_cache.invalidate()
    yield
    active_season_cache.invalidate()


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def admin(db):
    user = User(email="admin@test.com", username="admin", role="admin")
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def player(db):
    user = User(email="player@test.com", username="player", role="user")
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def auth_headers(user):
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


@pytest.fixture
def admin_headers(admin):
    return auth_headers(admin)


@pytest.fixture
def player_headers(player):
    return auth_headers(player)


@pytest.fixture
def golfers(db):
    """Diez golfistas a 5M (seis de ellos caben justos en el presupuesto)."""
    rows = [
        Golfer(first_name=f"Golfer{i}", last_name=f"Test{i}", price=5_000_000)
        for i in range(1, 11)
    ]
    db.add_all(rows)
    db.commit()
    return rows
