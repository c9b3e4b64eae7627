from datetime import datetime, timedelta, timezone

import jwt

from backend.core.config import Settings


def create_session_token(session_id: str, settings: Settings, expires_minutes: int | None = None) -> str:
    expire_minutes = expires_minutes or settings.session_expires_minutes
    expire = datetime.now(timezone.utc) + timedelta(minutes=expire_minutes)
    payload = {"sub": session_id, "exp": expire, "iat": datetime.now(timezone.utc)}
    return jwt.encode(payload, settings.session_secret, algorithm=settings.session_algorithm)


def decode_session_token(token: str, settings: Settings) -> dict:
    return jwt.decode(token, settings.session_secret, algorithms=[settings.session_algorithm])
