from datetime import datetime, timedelta, timezone

from backend.auth import jwt_handler
from backend.auth.sessions import SessionStore
from backend.core.config import Settings


def test_create_and_get_session() -> None:
    store = SessionStore(timedelta(minutes=5))

    session = store.create(admin_id=7)

    assert store.get(session.session_id) == session
    assert session.admin_id == 7
    assert session.expires_at > datetime.now(timezone.utc)


def test_sessions_have_distinct_ids() -> None:
    store = SessionStore(timedelta(minutes=5))

    first = store.create(admin_id=1)
    second = store.create(admin_id=1)

    assert first.session_id != second.session_id
    assert len(store) == 2


def test_destroy_removes_session() -> None:
    store = SessionStore(timedelta(minutes=5))
    session = store.create(admin_id=1)

    store.destroy(session.session_id)
    store.destroy(session.session_id)

    assert store.get(session.session_id) is None


def test_expired_session_is_purged_on_read() -> None:
    store = SessionStore(timedelta(seconds=-1))
    session = store.create(admin_id=1)

    assert store.get(session.session_id) is None
    assert len(store) == 0


def test_clear_drops_every_session() -> None:
    store = SessionStore(timedelta(minutes=5))
    store.create(admin_id=1)
    store.create(admin_id=2)

    store.clear()

    assert len(store) == 0


def test_session_token_round_trips_session_id() -> None:
    settings = Settings(session_secret='unit-test-secret')

    token = jwt_handler.create_session_token('abc123', settings)
    payload = jwt_handler.decode_session_token(token, settings)

    assert payload['sub'] == 'abc123'
    assert payload['exp'] > payload['iat']
