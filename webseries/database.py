"""
Database engine, session factory and the atomic unit-of-work helper
"""
import logging
import sqlite3
from contextlib import contextmanager

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from webseries.config import settings
from webseries.exceptions import Conflict, InternalFailure

logger = logging.getLogger(__name__)

connect_args = {}
if settings.DATABASE_URL.startswith("sqlite"):
    connect_args = {"check_same_thread": False}

engine = create_engine(settings.DATABASE_URL, connect_args=connect_args, pool_pre_ping=True)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores ON DELETE CASCADE unless this is set per connection
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def get_db():
    """FastAPI dependency: one session per request"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_tables():
    # Import models so they register on Base.metadata
    from webseries import models  # noqa: F401

    Base.metadata.create_all(bind=engine)


@contextmanager
def atomic(db: Session):
    """
    Run a group of reads/writes as one unit.

    Commits when the block finishes, rolls back on any exception. Unique
    constraint violations surface as Conflict and other driver errors as
    InternalFailure, so callers never see a half-applied state.
    """
    try:
        yield db
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.warning("Rolled back on integrity error: %s", exc.orig)
        raise Conflict("Resource already exists") from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Rolled back on database error")
        raise InternalFailure() from exc
    except Exception:
        db.rollback()
        raise
