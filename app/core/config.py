"""
Configuración central del servicio.

Todas las variables se leen del entorno (o de un fichero .env en la raíz)
para que el mismo código funcione en local, en tests y en producción.
"""
import os
from dotenv import load_dotenv

load_dotenv()

# --- Base de datos ---
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./fantasy_golf.db")

# --- JWT (la emisión de tokens vive en el servicio de auth) ---
SECRET_KEY = os.getenv("SECRET_KEY", "change-me")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")

# --- Caché de temporada activa ---
ACTIVE_SEASON_TTL = int(os.getenv("ACTIVE_SEASON_TTL", "60"))  # segundos

# --- Leaderboard ---
LEADERBOARD_PAGE_SIZE = int(os.getenv("LEADERBOARD_PAGE_SIZE", "50"))

# --- Logging ---
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# --- CORS (frontend React) ---
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv(
        "CORS_ORIGINS", "http://localhost:5173,http://127.0.0.1:5173"
    ).split(",")
    if origin.strip()
]
