import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import PlainTextResponse, RedirectResponse
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backend.auth import jwt_handler
from backend.auth.dependencies import get_admin_session, get_db, get_settings, get_session_store
from backend.auth.passwords import verify_password
from backend.auth.sessions import AdminSession, SessionStore
from backend.core.config import Settings
from backend.models.admin import Admin
from backend.routes.pages import page_response
from backend.routes.request_data import read_request_data

router = APIRouter(tags=['admin'])

logger = logging.getLogger(__name__)

DASHBOARD_URL = '/admin/dashboard'
LOGIN_URL = '/admin'
INVALID_CREDENTIALS_MESSAGE = 'Invalid credentials'


class LoginForm(BaseModel):
    username: str
    password: str


def authenticate(credentials: LoginForm, db: Session) -> Admin | None:
    """Return the admin whose username and password match, else ``None``.

    Unknown usernames and wrong passwords both yield ``None`` so callers
    cannot tell the two apart.
    """
    admin = db.query(Admin).filter(Admin.username == credentials.username).first()
    if admin is None:
        logger.info('Login failed: unknown username')
        return None

    if not verify_password(credentials.password, admin.password_hash):
        logger.info('Login failed: wrong password for admin %s', admin.id)
        return None

    return admin


def redirect(url: str) -> RedirectResponse:
    return RedirectResponse(url=url, status_code=status.HTTP_302_FOUND)


@router.get('')
def admin_entry(session: AdminSession | None = Depends(get_admin_session)):
    if session is not None:
        return redirect(DASHBOARD_URL)
    return page_response('admin_login.html')


@router.post('/login')
def login(
    data: dict[str, str] = Depends(read_request_data),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
    store: SessionStore = Depends(get_session_store),
):
    credentials = LoginForm(username=data.get('username', ''), password=data.get('password', ''))

    try:
        admin = authenticate(credentials, db)
    except SQLAlchemyError:
        logger.exception('Login error')
        return PlainTextResponse('Internal Server Error', status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    if admin is None:
        return PlainTextResponse(INVALID_CREDENTIALS_MESSAGE, status_code=status.HTTP_401_UNAUTHORIZED)

    session = store.create(admin.id)
    token = jwt_handler.create_session_token(session.session_id, settings)

    response = redirect(DASHBOARD_URL)
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.session_expires_minutes * 60,
        httponly=True,
        samesite='lax',
        secure=settings.session_cookie_secure,
    )
    logger.info('Admin %s logged in', admin.id)
    return response


@router.get('/dashboard')
def dashboard(session: AdminSession | None = Depends(get_admin_session)):
    if session is None:
        return redirect(LOGIN_URL)
    return page_response('admin_dashboard.html')


@router.get('/logout')
def logout(
    session: AdminSession | None = Depends(get_admin_session),
    settings: Settings = Depends(get_settings),
    store: SessionStore = Depends(get_session_store),
):
    if session is not None:
        store.destroy(session.session_id)
        logger.info('Admin %s logged out', session.admin_id)

    response = redirect('/')
    response.delete_cookie(settings.session_cookie_name)
    return response
