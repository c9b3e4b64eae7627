import logging
from dataclasses import dataclass, field
from threading import Lock
from typing import Any, Mapping

from sqlalchemy import create_engine, inspect, text
from sqlalchemy.engine import Row
from sqlalchemy.orm import Session, declarative_base, sessionmaker


Base = declarative_base()

logger = logging.getLogger(__name__)


@dataclass
class QueryResult:
    rows: list[Row] = field(default_factory=list)
    rowcount: int = 0


class Database:
    """Owns the engine and hands out sessions and raw statement execution."""

    def __init__(self, url: str) -> None:
        connect_args = {}
        if url.startswith("sqlite"):
            connect_args["check_same_thread"] = False

        self.url = url
        self.engine = create_engine(url, connect_args=connect_args)
        self.SessionLocal = sessionmaker(
            autocommit=False,
            autoflush=False,
            bind=self.engine,
        )
        self._schema_lock = Lock()
        self._appointment_schema_checked = False

    def session(self) -> Session:
        return self.SessionLocal()

    def query(self, statement: str, params: Mapping[str, Any] | None = None) -> QueryResult:
        with self.engine.begin() as connection:
            result = connection.execute(text(statement), dict(params or {}))
            rows = list(result) if result.returns_rows else []
            return QueryResult(rows=rows, rowcount=result.rowcount)

    def initialize(self) -> None:
        # Registers both tables on Base.metadata.
        from backend.models import admin, appointment  # noqa: F401

        Base.metadata.create_all(bind=self.engine)
        self.ensure_appointment_schema()
        logger.info('Database initialized successfully.')

    def ensure_appointment_schema(self) -> None:
        if self._appointment_schema_checked:
            return

        with self._schema_lock:
            if self._appointment_schema_checked:
                return

            inspector = inspect(self.engine)

            if 'appointments' not in inspector.get_table_names():
                self._appointment_schema_checked = True
                return

            existing_columns = {column['name'] for column in inspector.get_columns('appointments')}
            migration_steps = [
                ('category', "ALTER TABLE appointments ADD COLUMN category VARCHAR(100) DEFAULT 'General'"),
            ]

            with self.engine.begin() as connection:
                for column_name, statement in migration_steps:
                    if column_name not in existing_columns:
                        logger.info('Adding missing column appointments.%s', column_name)
                        connection.execute(text(statement))

            self._appointment_schema_checked = True

    def dispose(self) -> None:
        self.engine.dispose()
