"""Create the admins table if needed and insert one admin account.

Usage:
    python -m backend.seed_admin <username> <password>

Seeding an existing username is a no-op.
"""
import logging
import sys

from sqlalchemy.exc import SQLAlchemyError

from backend.auth.passwords import hash_password
from backend.core.config import Settings, configure_logging
from backend.database import Database
from backend.models.admin import Admin

logger = logging.getLogger(__name__)

USAGE = "Usage: python -m backend.seed_admin <username> <password>"

INSERT_ADMIN = """
    INSERT INTO admins (username, password_hash)
    VALUES (:username, :password_hash)
    ON CONFLICT (username) DO NOTHING
"""


def seed_admin(database: Database, username: str, password: str, rounds: int) -> bool:
    """Insert the admin and return whether a new row was written."""
    Admin.__table__.create(bind=database.engine, checkfirst=True)
    password_hash = hash_password(password, rounds=rounds)
    result = database.query(INSERT_ADMIN, {"username": username, "password_hash": password_hash})
    return result.rowcount > 0


def main(argv: list[str] | None = None, settings: Settings | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    if len(args) < 2:
        print(USAGE, file=sys.stderr)
        return 1

    username, password = args[0], args[1]
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)

    database = Database(settings.database_url)
    try:
        created = seed_admin(database, username, password, settings.bcrypt_rounds)
        if not created:
            logger.info("Admin %r already exists; nothing inserted", username)
        print(f"Admin user '{username}' seeded successfully.")
    except SQLAlchemyError:
        logger.exception("Error seeding admin")
    finally:
        database.dispose()
    return 0


if __name__ == "__main__":
    sys.exit(main())
