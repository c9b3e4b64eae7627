import logging
from contextlib import asynccontextmanager
from datetime import timedelta

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from backend.auth.sessions import SessionStore
from backend.core.config import Settings, validate_runtime_config
from backend.core.errors import register_error_handlers
from backend.database import Database
from backend.routes import admin_routes, appointment_routes

logger = logging.getLogger(__name__)


def initialize_database(database: Database) -> None:
    try:
        database.initialize()
    except SQLAlchemyError:
        logger.exception('Database initialization failed. Check DATABASE_URL and database credentials.')
        raise


@asynccontextmanager
async def lifespan(app: FastAPI):
    initialize_database(app.state.database)
    yield
    app.state.session_store.clear()
    app.state.database.dispose()


def create_app(settings: Settings | None = None, database: Database | None = None) -> FastAPI:
    settings = settings or Settings.from_env()
    validate_runtime_config(settings)

    app = FastAPI(title='Appointment Booking', lifespan=lifespan)
    app.state.settings = settings
    app.state.database = database or Database(settings.database_url)
    app.state.session_store = SessionStore(timedelta(minutes=settings.session_expires_minutes))

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials='*' not in settings.cors_origins,
        allow_methods=['*'],
        allow_headers=['*'],
    )
    register_error_handlers(app)

    app.include_router(appointment_routes.router)
    app.include_router(appointment_routes.api_router, prefix='/api')
    app.include_router(admin_routes.router, prefix='/admin')

    return app
