"""
Roster database: SQLite through SQLAlchemy
"""
import logging

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase

from crease.config import settings

logger = logging.getLogger(__name__)

DATABASE_URL = f"sqlite:///{settings.DATABASE_PATH}"

# Request sessions may be closed from a different worker thread than the one that opened them
engine = create_engine(DATABASE_URL, echo=False, connect_args={"check_same_thread": False})
SessionLocal = sessionmaker(bind=engine)


class Base(DeclarativeBase):
    pass


def init_db():
    """Create all tables"""
    from crease.models import player, team  # noqa
    Base.metadata.create_all(bind=engine)
    logger.info("Roster database ready at %s", settings.DATABASE_PATH)


def get_session():
    """Get a database session - for direct use (caller must close)"""
    return SessionLocal()


def get_db():
    """FastAPI dependency - yields session and closes after request"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
