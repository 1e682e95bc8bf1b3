import logging

from sqlalchemy import create_engine, event
from sqlalchemy.orm import declarative_base, sessionmaker

from goal_tracker.config import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()

connect_args = {"check_same_thread": False} if settings.database_url.startswith("sqlite") else {}
engine = create_engine(settings.database_url, connect_args=connect_args)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def enable_sqlite_foreign_keys(target_engine) -> None:
    """Turn on cascading foreign keys for every SQLite connection of an engine."""
    if target_engine.dialect.name != "sqlite":
        return

    @event.listens_for(target_engine, "connect")
    def set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


enable_sqlite_foreign_keys(engine)


def get_db():
    """Yield a database session for the duration of one request."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind=None) -> None:
    """Create tables and seed the anonymous settings row."""
    # Register models on Base.metadata
    from goal_tracker import models  # noqa: F401
    from goal_tracker.models.setting import seed_defaults

    bind = bind or engine
    Base.metadata.create_all(bind=bind)

    db = SessionLocal(bind=bind)
    try:
        seed_defaults(db)
    finally:
        db.close()
    logger.info("Database initialized")
