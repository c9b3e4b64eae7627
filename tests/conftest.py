from datetime import date, time

import pytest
from fastapi.testclient import TestClient

from backend.core.config import Settings
from backend.main import create_app
from backend.models.appointment import Appointment
from backend.seed_admin import seed_admin

ADMIN_USERNAME = 'admin'
ADMIN_PASSWORD = 'correct horse battery staple'


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        database_url=f'sqlite:///{tmp_path / "appointments.db"}',
        session_secret='test-session-secret',
        bcrypt_rounds=4,
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def database(app):
    return app.state.database


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def admin_credentials(database) -> tuple[str, str]:
    seed_admin(database, ADMIN_USERNAME, ADMIN_PASSWORD, rounds=4)
    return ADMIN_USERNAME, ADMIN_PASSWORD


@pytest.fixture
def admin_client(client, admin_credentials):
    username, password = admin_credentials
    response = client.post(
        '/admin/login',
        data={'username': username, 'password': password},
        follow_redirects=False,
    )
    assert response.status_code == 302
    return client


@pytest.fixture
def make_appointment(database):
    def _make_appointment(**overrides) -> int:
        values = {
            'full_name': 'Jane Doe',
            'phone': '555-0100',
            'category': 'General',
            'service': 'Checkup',
            'appointment_date': date(2026, 1, 5),
            'appointment_time': time(9, 0),
        }
        values.update(overrides)
        with database.session() as db:
            appointment = Appointment(**values)
            db.add(appointment)
            db.commit()
            db.refresh(appointment)
            return appointment.id

    return _make_appointment


@pytest.fixture
def appointment_count(database):
    def _appointment_count() -> int:
        with database.session() as db:
            return db.query(Appointment).count()

    return _appointment_count
