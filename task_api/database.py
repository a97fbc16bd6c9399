import logging
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from .config import settings

logger = logging.getLogger(__name__)

connect_args = {"check_same_thread": False} if settings.is_sqlite else {}

engine = create_engine(settings.DATABASE_URL, connect_args=connect_args, pool_pre_ping=True)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)

Base = declarative_base()


def get_db() -> Generator[Session, None, None]:
    """Yield one session per request and close it when the request ends."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind: Engine = engine) -> bool:
    """
    Create the tasks table if it does not exist.

    Failures are logged and reported through the return value; nothing is
    retried. Existing tables are left as they are.
    """
    # Register the mapped tables on Base.metadata.
    from . import models  # noqa: F401

    try:
        Base.metadata.create_all(bind=bind)
    except Exception:
        logger.exception("Database initialization failed")
        return False
    logger.info("Database tables created or verified")
    return True
