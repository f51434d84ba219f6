"""
Bounded retry for storage operations.

Transient connection failures are retried with exponential backoff. Once
the attempts run out the StorageError reaches the caller; there is no
alternate data source to fall back on.
"""
import logging
from typing import Callable, TypeVar
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from tenacity import Retrying, retry_if_exception, stop_after_attempt, wait_exponential
from app.core.config import settings
from app.core.exceptions import StorageError
from app.db.session import storage_error_from

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _is_transient(exc: BaseException) -> bool:
    return isinstance(exc, StorageError) and exc.transient


def run_with_retry(db: Session, operation: Callable[..., T], *args, **kwargs) -> T:
    """
    Run `operation(*args, **kwargs)` against `db`, retrying transient storage failures.

    The operation must be safe to re-run from scratch: each attempt starts
    from a rolled-back session. Writes are re-run only when they failed
    before their commit was sent; `unit_of_work` reports a failed commit as
    non-transient so a write the server may have applied is not repeated.

    This blocks the calling thread while it backs off. Async handlers call
    services through `run_in_threadpool`.
    """
    def attempt() -> T:
        try:
            return operation(*args, **kwargs)
        except SQLAlchemyError as exc:
            db.rollback()
            raise storage_error_from(exc) from exc

    def before_sleep(retry_state):
        logger.warning(
            f"Transient storage failure in {getattr(operation, '__name__', 'operation')} "
            f"(attempt {retry_state.attempt_number}/{settings.STORAGE_RETRY_ATTEMPTS}), retrying"
        )

    retryer = Retrying(
        retry=retry_if_exception(_is_transient),
        stop=stop_after_attempt(settings.STORAGE_RETRY_ATTEMPTS),
        wait=wait_exponential(
            multiplier=settings.STORAGE_RETRY_MIN_WAIT,
            min=settings.STORAGE_RETRY_MIN_WAIT,
            max=settings.STORAGE_RETRY_MAX_WAIT
        ),
        before_sleep=before_sleep,
        reraise=True,
    )
    try:
        return retryer(attempt)
    except StorageError:
        logger.error(f"Storage operation {getattr(operation, '__name__', 'operation')} failed")
        raise
