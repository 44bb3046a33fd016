"""
Database engine, session management, and base model.

This module is the foundation for all database operations.
Every model inherits from Base. Every request gets a session
from get_db().
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase

from money_manager.config import get_settings

settings = get_settings()

# --- Engine ---
# pool_pre_ping=True tests connections before using them,
# which handles cases where the database restarted or a
# connection went stale.
# SQLite connections are shared across FastAPI's worker
# threads, so the same-thread check has to be disabled.
connect_args = {}
if settings.DATABASE_URL.startswith("sqlite"):
    connect_args["check_same_thread"] = False

engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    connect_args=connect_args,
)

# --- Session Factory ---
# autocommit=False means the API layer decides when a request's
# changes are saved: the entry write and its balance adjustments
# are committed together or not at all.
# autoflush=False means SQL is only sent when we flush or commit.
SessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
)


# --- Base Model Class ---
class Base(DeclarativeBase):
    pass


# --- Dependency for FastAPI ---
def get_db():
    """
    Provide a database session for a single request.

    FastAPI uses this generator as a dependency. The
    try/finally guarantees the session is closed when the
    request finishes, even if an error occurs, so pooled
    connections are never leaked.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
