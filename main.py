import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import CORS_ORIGINS, LOG_LEVEL

# IMPORTANTE: Importar Base y Engine para que funcione la creación de tablas
from app.db.session import engine, Base

# Importar modelos para que SQLAlchemy los "vea" antes de crear las tablas
from app.db.models import _all

# Importar las rutas (los routers)
from app.api.seasons import router as seasons_router
from app.api.tournaments import router as tournaments_router
from app.api.scores import router as scores_router
from app.api.golfers import router as golfers_router
from app.api.teams import router as teams_router
from app.api.leaderboard import router as leaderboard_router

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="Fantasy Golf League",
    version="1.0.0"
)

# Creamos las tablas en la base de datos
Base.metadata.create_all(bind=engine)

# Conectamos las piezas (routers)
app.include_router(seasons_router)
app.include_router(tournaments_router)
app.include_router(scores_router)
app.include_router(golfers_router)
app.include_router(teams_router)
app.include_router(leaderboard_router)


# Configuramos el permiso para que el frontend pueda hablar con Python
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.get("/")
def read_root():
    return {"message": "API Fantasy Golf funcionando ⛳"}
