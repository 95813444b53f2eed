from datetime import datetime, timedelta, timezone
from jose import jwt, JWTError

from app.core.config import SECRET_KEY, JWT_ALGORITHM

ALGORITHM = JWT_ALGORITHM


def create_access_token(user_id: int, expires_minutes: int = 60) -> str:
    # Lo usan los tests y los scripts; los tokens de usuarios los emite el servicio de auth
    expire = datetime.now(timezone.utc) + timedelta(minutes=expires_minutes)
    return jwt.encode({"sub": str(user_id), "exp": expire}, SECRET_KEY, algorithm=ALGORITHM)


def decode_access_token(token: str) -> int:
    """Devuelve el id de usuario del token o lanza JWTError/ValueError."""
    payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    subject = payload.get("sub")
    if subject is None:
        raise JWTError("Token without subject")
    return int(subject)
