import pytest
from fastapi.testclient import TestClient
from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError

from backend.database import Database
from backend.main import create_app

LEGACY_APPOINTMENTS_TABLE = """
    CREATE TABLE appointments (
        id INTEGER PRIMARY KEY,
        full_name VARCHAR(255) NOT NULL,
        phone VARCHAR(50) NOT NULL,
        service VARCHAR(100) NOT NULL,
        appointment_date DATE NOT NULL,
        appointment_time TIME NOT NULL,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    )
"""


@pytest.fixture
def database_url(tmp_path) -> str:
    return f'sqlite:///{tmp_path / "schema.db"}'


def test_initialize_creates_both_tables(database_url: str) -> None:
    database = Database(database_url)

    database.initialize()

    assert {'appointments', 'admins'} <= set(inspect(database.engine).get_table_names())
    database.dispose()


def test_initialize_adds_category_column_to_legacy_table(database_url: str) -> None:
    legacy = Database(database_url)
    legacy.query(LEGACY_APPOINTMENTS_TABLE)
    legacy.query(
        'INSERT INTO appointments (full_name, phone, service, appointment_date, appointment_time) '
        'VALUES (:full_name, :phone, :service, :appointment_date, :appointment_time)',
        {
            'full_name': 'Legacy Patient',
            'phone': '555-0199',
            'service': 'Checkup',
            'appointment_date': '2025-12-01',
            'appointment_time': '10:00:00',
        },
    )

    legacy.initialize()

    columns = {column['name'] for column in inspect(legacy.engine).get_columns('appointments')}
    assert 'category' in columns
    result = legacy.query('SELECT category FROM appointments')
    assert [row.category for row in result.rows] == ['General']
    legacy.dispose()


def test_initialize_is_idempotent(database_url: str) -> None:
    first = Database(database_url)
    first.initialize()
    first.initialize()
    first.dispose()

    second = Database(database_url)
    second.initialize()

    columns = [column['name'] for column in inspect(second.engine).get_columns('appointments')]
    assert columns.count('category') == 1
    second.dispose()


def test_query_returns_rows_and_rowcount(database_url: str) -> None:
    database = Database(database_url)
    database.initialize()
    database.query(
        'INSERT INTO admins (username, password_hash) VALUES (:username, :password_hash)',
        {'username': 'admin', 'password_hash': 'x'},
    )

    selected = database.query('SELECT username FROM admins WHERE username = :username', {'username': 'admin'})
    deleted = database.query('DELETE FROM admins WHERE username = :username', {'username': 'admin'})

    assert [row.username for row in selected.rows] == ['admin']
    assert deleted.rows == []
    assert deleted.rowcount == 1
    database.dispose()


def test_query_propagates_store_errors(database_url: str) -> None:
    database = Database(database_url)

    with pytest.raises(SQLAlchemyError):
        database.query('SELECT * FROM table_that_does_not_exist')
    database.dispose()


def test_startup_fails_when_initialization_fails(settings, monkeypatch: pytest.MonkeyPatch) -> None:
    def failing_initialize(_self):
        raise SQLAlchemyError('cannot reach database')

    monkeypatch.setattr(Database, 'initialize', failing_initialize)
    app = create_app(settings)

    with pytest.raises(SQLAlchemyError):
        with TestClient(app):
            pass
