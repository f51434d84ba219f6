"""
Tests for storage failure handling: bounded retry, and failures never read as "not found".
"""
import asyncio
import pytest
from sqlalchemy.exc import IntegrityError, OperationalError
from app.api.routes import trips as trips_routes
from app.core.config import settings
from app.core.exceptions import StorageError
from app.db.retry import run_with_retry
from app.db.session import get_db
from app.main import app
from app.models.trip import Trip
from app.services import trip_service


def _connection_refused(*args, **kwargs):
    raise OperationalError("SELECT 1", {}, Exception("connection refused"))


def test_transient_failure_is_retried(db):
    calls = []

    def flaky():
        calls.append(1)
        if len(calls) < 3:
            _connection_refused()
        return "ok"

    assert run_with_retry(db, flaky) == "ok"
    assert len(calls) == 3


def test_retries_are_bounded(db):
    calls = []

    def down():
        calls.append(1)
        _connection_refused()

    with pytest.raises(StorageError) as exc_info:
        run_with_retry(db, down)

    assert exc_info.value.transient is True
    assert len(calls) == 3


def test_non_transient_failure_is_not_retried(db):
    calls = []

    def broken():
        calls.append(1)
        raise IntegrityError("INSERT", {}, Exception("constraint failed"))

    with pytest.raises(StorageError) as exc_info:
        run_with_retry(db, broken)

    assert exc_info.value.transient is False
    assert len(calls) == 1


def test_unreachable_store_is_not_reported_as_not_found(client, auth_headers, session_factory):
    """With the store down, reading a trip fails with 503 rather than 404."""
    def broken_db():
        session = session_factory()
        session.query = _connection_refused
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = broken_db

    response = client.get("/api/trips/1", headers=auth_headers)

    assert response.status_code == 503
    assert response.json()["error_code"] == "STORAGE_UNAVAILABLE"


def test_failed_commit_is_not_retried(db, user, monkeypatch):
    """A commit that may have reached the server is reported, never repeated."""
    calls = []

    def commit():
        calls.append(1)
        raise OperationalError("COMMIT", {}, Exception("connection lost"))

    monkeypatch.setattr(db, "commit", commit)

    with pytest.raises(StorageError) as exc_info:
        trip_service.create_trip(user.user_id, "Europe", "2025-06-01", "2025-06-15", db=db)

    assert exc_info.value.transient is False
    assert len(calls) == 1


def test_failure_before_commit_is_retried(db, user, monkeypatch):
    real_flush = db.flush
    calls = []

    def flush(*args, **kwargs):
        calls.append(1)
        if len(calls) == 1:
            _connection_refused()
        return real_flush(*args, **kwargs)

    monkeypatch.setattr(db, "flush", flush)

    trip = trip_service.create_trip(user.user_id, "Europe", "2025-06-01", "2025-06-15", db=db)

    assert len(calls) > 1
    assert db.query(Trip).filter(Trip.user_id == user.user_id).count() == 1
    assert trip.trip_id is not None


def test_retry_backoff_keeps_event_loop_responsive(session_factory, user, monkeypatch):
    """Other requests keep being served while a failing one backs off."""
    monkeypatch.setattr(settings, "STORAGE_RETRY_MIN_WAIT", 0.2)
    monkeypatch.setattr(settings, "STORAGE_RETRY_MAX_WAIT", 0.2)
    session = session_factory()
    session.query = _connection_refused

    async def list_trips_while_ticking():
        loop = asyncio.get_running_loop()
        gaps = []
        finished = asyncio.Event()

        async def ticker():
            last = loop.time()
            while not finished.is_set():
                await asyncio.sleep(0.01)
                now = loop.time()
                gaps.append(now - last)
                last = now

        ticking = asyncio.create_task(ticker())
        try:
            with pytest.raises(StorageError):
                await trips_routes.list_trips(current_user=user, db=session)
        finally:
            finished.set()
            await ticking
        return gaps

    try:
        gaps = asyncio.run(list_trips_while_ticking())
    finally:
        session.close()

    # Two backoff sleeps of 0.2s each happened while the loop kept ticking
    assert len(gaps) > 10
    assert max(gaps) < 0.1
