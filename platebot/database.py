# platebot/database.py
"""
Database connection, session management, and table creation.
The relational database only backs a single key-value table; see
services/kv_store.py for the store built on top of it.
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from platebot.config import settings


def _engine_kwargs(url: str) -> dict:
    if url.startswith("sqlite"):
        # Handlers run on the event loop thread, FastAPI sync routes on a pool thread
        return {"connect_args": {"check_same_thread": False}}
    return {"pool_size": 10, "max_overflow": 20}


engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,          # Auto-reconnect if DB connection drops
    echo=False,                  # Set True to log all SQL queries (debug only)
    **_engine_kwargs(settings.DATABASE_URL),
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """FastAPI dependency — yields a DB session and closes it after request."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_tables(bind=None):
    """
    Creates all DB tables on startup. Safe to call multiple times.
    Import all models here so SQLAlchemy knows about them.
    """
    from platebot.models.kv_entry import KVEntry  # noqa

    Base.metadata.create_all(bind=bind or engine)
