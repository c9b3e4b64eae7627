import logging

from fastapi import Depends, Request
from jwt import InvalidTokenError

from backend.auth import jwt_handler
from backend.auth.sessions import AdminSession, SessionStore
from backend.core.config import Settings
from backend.core.errors import unauthorized
from backend.database import Database

logger = logging.getLogger(__name__)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_session_store(request: Request) -> SessionStore:
    return request.app.state.session_store


def get_db(database: Database = Depends(get_database)):
    db = database.session()
    try:
        yield db
    finally:
        db.close()


def get_admin_session(
    request: Request,
    settings: Settings = Depends(get_settings),
    store: SessionStore = Depends(get_session_store),
) -> AdminSession | None:
    token = request.cookies.get(settings.session_cookie_name)
    if not token:
        return None
    try:
        payload = jwt_handler.decode_session_token(token, settings)
    except InvalidTokenError:
        logger.debug('Rejected invalid or expired session cookie')
        return None

    session_id = payload.get("sub")
    if not session_id:
        return None
    return store.get(session_id)


def require_admin(session: AdminSession | None = Depends(get_admin_session)) -> AdminSession:
    if session is None:
        raise unauthorized()
    return session
