"""
Trip aggregate service.

A trip owns its stops and budget lines; a stop owns its scheduled
activities. Every operation is scoped to the acting user. A trip that does
not exist and a trip owned by someone else raise the same NotFoundError.
Each mutation runs as one unit of work under the storage retry policy.
"""
import logging
from datetime import date, datetime, time
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional, Union
from sqlalchemy import func, or_
from sqlalchemy.orm import Session
from app.core.exceptions import NotFoundError, ValidationError
from app.core.utils import parse_date, parse_time
from app.db.retry import run_with_retry
from app.db.session import unit_of_work
from app.services import catalog_service
from app.models.activity import Activity
from app.models.budget import BudgetLine
from app.models.city import City
from app.models.trip import Trip, TripStop, TripActivity
from app.schemas.budget import BudgetLineResponse
from app.schemas.trip import (
    TripResponse, TripSummaryResponse, TripDetailResponse,
    StopResponse, StopDetailResponse, ScheduledActivityResponse,
    ScheduledActivityDetailResponse
)

logger = logging.getLogger(__name__)

DateLike = Union[date, str]

# Fields a partial update may touch, and which of them may be cleared with None
UPDATABLE_TRIP_FIELDS = {"trip_name", "start_date", "end_date", "description", "cover_photo", "is_public"}
CLEARABLE_TRIP_FIELDS = {"description", "cover_photo"}


def _money(value: Any, field: str) -> Decimal:
    """Coerce an optional amount to a non-negative Decimal (None means 0)."""
    if value is None:
        return Decimal(0)
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValidationError(f"{field} must be a number", {"field": field})
    if not amount.is_finite() or amount < 0:
        raise ValidationError(f"{field} must be non-negative", {"field": field})
    return amount


def _require(value: Any, field: str) -> Any:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError("Missing required fields", {"field": field})
    return value


def _check_date_range(start: date, end: date, start_field: str, end_field: str):
    if start > end:
        raise ValidationError(
            f"{start_field} must not be after {end_field}",
            {start_field: start.isoformat(), end_field: end.isoformat()}
        )


def get_owned_trip(user_id: int, trip_id: int, db: Session) -> Trip:
    """Load a trip owned by `user_id` or raise NotFoundError."""
    trip = db.query(Trip).filter(
        Trip.trip_id == trip_id,
        Trip.user_id == user_id
    ).first()
    if not trip:
        raise NotFoundError("Trip", trip_id)
    return trip


def get_owned_stop(user_id: int, stop_id: int, db: Session) -> TripStop:
    """Load a stop whose parent trip is owned by `user_id` or raise NotFoundError."""
    stop = db.query(TripStop).join(
        Trip, TripStop.trip_id == Trip.trip_id
    ).filter(
        TripStop.stop_id == stop_id,
        Trip.user_id == user_id
    ).first()
    if not stop:
        raise NotFoundError("Stop", stop_id)
    return stop


def create_trip(
    user_id: int,
    trip_name: Optional[str],
    start_date: Optional[DateLike],
    end_date: Optional[DateLike],
    description: Optional[str] = None,
    cover_photo: Optional[str] = None,
    db: Session = None
) -> Trip:
    """Create a new private trip for a user."""
    _require(trip_name, "trip_name")
    start = parse_date(_require(start_date, "start_date"), "start_date")
    end = parse_date(_require(end_date, "end_date"), "end_date")
    _check_date_range(start, end, "start_date", "end_date")

    def create() -> Trip:
        with unit_of_work(db):
            trip = Trip(
                user_id=user_id,
                trip_name=trip_name,
                start_date=start,
                end_date=end,
                description=description,
                cover_photo=cover_photo,
                is_public=False
            )
            db.add(trip)
        return trip

    trip = run_with_retry(db, create)
    run_with_retry(db, db.refresh, trip)
    logger.info(f"Trip {trip.trip_id} created for user {user_id}")
    return trip


def list_trips(user_id: int, db: Session) -> List[TripSummaryResponse]:
    """List a user's trips with stop counts and budget totals, latest start first."""
    def query() -> List[TripSummaryResponse]:
        # Aggregate in separate subqueries so stops and budget lines never multiply each other
        stop_counts = db.query(
            TripStop.trip_id.label("trip_id"),
            func.count(TripStop.stop_id).label("stop_count")
        ).group_by(TripStop.trip_id).subquery()

        budget_totals = db.query(
            BudgetLine.trip_id.label("trip_id"),
            func.sum(BudgetLine.estimated_amount).label("total_budget")
        ).group_by(BudgetLine.trip_id).subquery()

        rows = db.query(
            Trip, stop_counts.c.stop_count, budget_totals.c.total_budget
        ).outerjoin(
            stop_counts, stop_counts.c.trip_id == Trip.trip_id
        ).outerjoin(
            budget_totals, budget_totals.c.trip_id == Trip.trip_id
        ).filter(
            Trip.user_id == user_id
        ).order_by(Trip.start_date.desc(), Trip.trip_id.desc()).all()

        return [
            TripSummaryResponse(
                **TripResponse.model_validate(trip).model_dump(),
                stop_count=stop_count or 0,
                total_budget=Decimal(str(total_budget)) if total_budget is not None else Decimal(0)
            )
            for trip, stop_count, total_budget in rows
        ]

    return run_with_retry(db, query)


def _activity_sort_key(row):
    scheduled, _ = row
    return (
        scheduled.scheduled_date is None,
        scheduled.scheduled_date or date.min,
        scheduled.scheduled_time is None,
        scheduled.scheduled_time or time.min,
        scheduled.trip_activity_id,
    )


def get_trip(user_id: int, trip_id: int, db: Session) -> TripDetailResponse:
    """
    Assemble the full read view of a trip.

    Owners can always read their trips; other users can read a trip only
    while it is public. Stops come back ordered by (stop_order, stop_id),
    each with its city fields and its activities ordered by date then time.
    """
    def query() -> TripDetailResponse:
        trip = db.query(Trip).filter(
            Trip.trip_id == trip_id,
            or_(Trip.user_id == user_id, Trip.is_public.is_(True))
        ).first()
        if not trip:
            raise NotFoundError("Trip", trip_id)

        stop_rows = db.query(TripStop, City).join(
            City, TripStop.city_id == City.city_id
        ).filter(
            TripStop.trip_id == trip_id
        ).order_by(TripStop.stop_order, TripStop.stop_id).all()

        activities_by_stop: Dict[int, List[ScheduledActivityDetailResponse]] = {}
        stop_ids = [stop.stop_id for stop, _ in stop_rows]
        if stop_ids:
            activity_rows = db.query(TripActivity, Activity).join(
                Activity, TripActivity.activity_id == Activity.activity_id
            ).filter(TripActivity.stop_id.in_(stop_ids)).all()
            for scheduled, activity in sorted(activity_rows, key=_activity_sort_key):
                activities_by_stop.setdefault(scheduled.stop_id, []).append(
                    ScheduledActivityDetailResponse(
                        **ScheduledActivityResponse.model_validate(scheduled).model_dump(),
                        activity_name=activity.activity_name,
                        category=activity.category,
                        description=activity.description,
                        image_url=activity.image_url
                    )
                )

        stops = [
            StopDetailResponse(
                **StopResponse.model_validate(stop).model_dump(),
                city_name=city.city_name,
                country=city.country,
                image_url=city.image_url,
                activities=activities_by_stop.get(stop.stop_id, [])
            )
            for stop, city in stop_rows
        ]

        budget_lines = db.query(BudgetLine).filter(BudgetLine.trip_id == trip_id).all()

        return TripDetailResponse(
            **TripResponse.model_validate(trip).model_dump(),
            stops=stops,
            budget_breakdown=[BudgetLineResponse.model_validate(line) for line in budget_lines]
        )

    return run_with_retry(db, query)


def update_trip(user_id: int, trip_id: int, partial_fields: Dict[str, Any], db: Session) -> Trip:
    """
    Apply a partial update to a trip.

    A field is applied when its key is present in `partial_fields`, whatever
    its value, so `{"is_public": False}` really sets the flag to false.
    `updated_at` is refreshed even when no field changes.
    """
    unknown = set(partial_fields) - UPDATABLE_TRIP_FIELDS
    if unknown:
        raise ValidationError("Unknown trip fields", {"fields": sorted(unknown)})

    changes = {}
    for field, value in partial_fields.items():
        if value is None and field not in CLEARABLE_TRIP_FIELDS:
            raise ValidationError(f"{field} cannot be null", {"field": field})
        if field in ("start_date", "end_date"):
            value = parse_date(value, field)
        elif field == "trip_name":
            value = _require(value, field)
        elif field == "is_public" and not isinstance(value, bool):
            raise ValidationError("is_public must be a boolean", {"field": field})
        changes[field] = value

    def update() -> Trip:
        with unit_of_work(db):
            trip = get_owned_trip(user_id, trip_id, db)
            _check_date_range(
                changes.get("start_date", trip.start_date),
                changes.get("end_date", trip.end_date),
                "start_date", "end_date"
            )
            for field, value in changes.items():
                setattr(trip, field, value)
            trip.updated_at = datetime.utcnow()
        return trip

    trip = run_with_retry(db, update)
    run_with_retry(db, db.refresh, trip)
    logger.info(f"Trip {trip_id} updated by user {user_id}: {sorted(changes)}")
    return trip


def delete_trip(user_id: int, trip_id: int, db: Session) -> None:
    """Delete a trip together with all its stops, scheduled activities and budget lines."""
    def delete():
        with unit_of_work(db):
            trip = get_owned_trip(user_id, trip_id, db)
            # ORM cascades remove stops, their activities and budget lines in the same transaction
            db.delete(trip)

    run_with_retry(db, delete)
    logger.info(f"Trip {trip_id} deleted by user {user_id}")


def add_stop(
    user_id: int,
    trip_id: int,
    city_id: int,
    arrival_date: DateLike,
    departure_date: DateLike,
    stop_order: int,
    accommodation_cost: Any = None,
    transport_cost: Any = None,
    db: Session = None
) -> TripStop:
    """
    Add a city stop to a trip.

    Stop dates are not required to fall within the trip's date range.
    """
    arrival = parse_date(_require(arrival_date, "arrival_date"), "arrival_date")
    departure = parse_date(_require(departure_date, "departure_date"), "departure_date")
    _require(stop_order, "stop_order")
    accommodation = _money(accommodation_cost, "accommodation_cost")
    transport = _money(transport_cost, "transport_cost")

    run_with_retry(db, get_owned_trip, user_id, trip_id, db)
    if catalog_service.resolve_city(city_id, db) is None:
        raise ValidationError("Unknown city", {"city_id": city_id})
    _check_date_range(arrival, departure, "arrival_date", "departure_date")

    def add() -> TripStop:
        with unit_of_work(db):
            get_owned_trip(user_id, trip_id, db)
            stop = TripStop(
                trip_id=trip_id,
                city_id=city_id,
                arrival_date=arrival,
                departure_date=departure,
                stop_order=stop_order,
                accommodation_cost=accommodation,
                transport_cost=transport
            )
            db.add(stop)
        return stop

    stop = run_with_retry(db, add)
    run_with_retry(db, db.refresh, stop)
    logger.info(f"Stop {stop.stop_id} (city {city_id}) added to trip {trip_id}")
    return stop


def add_scheduled_activity(
    user_id: int,
    stop_id: int,
    activity_id: int,
    scheduled_date: Optional[DateLike] = None,
    scheduled_time: Optional[Union[time, str]] = None,
    actual_cost: Any = None,
    db: Session = None
) -> TripActivity:
    """Schedule a catalog activity at a stop of one of the user's trips."""
    when = parse_date(scheduled_date, "scheduled_date")
    at = parse_time(scheduled_time, "scheduled_time")
    cost = _money(actual_cost, "actual_cost")

    run_with_retry(db, get_owned_stop, user_id, stop_id, db)
    if catalog_service.resolve_activity(activity_id, db) is None:
        raise ValidationError("Unknown activity", {"activity_id": activity_id})

    def add() -> TripActivity:
        with unit_of_work(db):
            get_owned_stop(user_id, stop_id, db)
            scheduled = TripActivity(
                stop_id=stop_id,
                activity_id=activity_id,
                scheduled_date=when,
                scheduled_time=at,
                actual_cost=cost
            )
            db.add(scheduled)
        return scheduled

    scheduled = run_with_retry(db, add)
    run_with_retry(db, db.refresh, scheduled)
    logger.info(f"Activity {activity_id} scheduled at stop {stop_id}")
    return scheduled


def add_budget_line(
    user_id: int,
    trip_id: int,
    category: str,
    estimated_amount: Any,
    db: Session = None
) -> BudgetLine:
    """Add an estimated cost category to a trip's budget."""
    _require(category, "category")
    amount = _money(_require(estimated_amount, "estimated_amount"), "estimated_amount")

    def add() -> BudgetLine:
        with unit_of_work(db):
            get_owned_trip(user_id, trip_id, db)
            line = BudgetLine(trip_id=trip_id, category=category.strip(), estimated_amount=amount)
            db.add(line)
        return line

    line = run_with_retry(db, add)
    run_with_retry(db, db.refresh, line)
    logger.info(f"Budget line {line.budget_id} ({line.category}) added to trip {trip_id}")
    return line
