"""
Database session management.
"""
from contextlib import contextmanager
import logging
from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError, OperationalError, DBAPIError
from sqlalchemy.orm import sessionmaker, Session
from app.core.config import settings
from app.core.exceptions import StorageError
from app.db.base import Base

logger = logging.getLogger(__name__)

engine = create_engine(
    settings.DATABASE_URL,
    echo=settings.DB_ECHO,
    pool_pre_ping=True,
    pool_recycle=3600
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Session:
    """Dependency for getting database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def storage_error_from(exc: SQLAlchemyError) -> StorageError:
    """Translate a SQLAlchemy failure into a StorageError."""
    transient = isinstance(exc, OperationalError) or (
        isinstance(exc, DBAPIError) and exc.connection_invalidated
    )
    return StorageError(
        "Storage unavailable" if transient else "Transaction failed",
        {"reason": exc.__class__.__name__},
        transient=transient
    )


@contextmanager
def unit_of_work(db: Session):
    """
    Commit everything done inside the block as one transaction.

    Any exception rolls the whole block back. SQLAlchemy errors surface as
    StorageError; domain errors propagate unchanged. Pending changes are
    flushed before the commit is sent, so a failure up to that point left
    nothing behind and keeps its transient flag. A failure during the commit
    itself is never transient: the server may have applied it.
    """
    try:
        yield db
        db.flush()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error(f"Transaction rolled back: {exc.__class__.__name__}: {exc}")
        raise storage_error_from(exc) from exc
    except Exception:
        db.rollback()
        raise

    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error(f"Commit failed, outcome unknown: {exc.__class__.__name__}: {exc}")
        raise StorageError(
            "Transaction outcome unknown",
            {"reason": exc.__class__.__name__},
            transient=False
        ) from exc


def init_db(bind=None):
    """Initialize database tables."""
    # Models must be imported so their tables are registered on Base.metadata
    import app.models  # noqa: F401
    Base.metadata.create_all(bind=bind or engine)
