"""
Trip itinerary routes: trips, their stops and budget lines.
"""
from fastapi import APIRouter, Depends, status
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session
from typing import List
from app.db.session import get_db
from app.models.user import User
from app.schemas.trip import (
    TripCreate, TripUpdate, TripResponse, TripSummaryResponse, TripDetailResponse,
    StopCreate, StopResponse
)
from app.schemas.budget import BudgetLineCreate, BudgetLineResponse
from app.core.utils import format_response
from app.api.dependencies import get_current_user
from app.services import trip_service

router = APIRouter(prefix="/trips", tags=["trips"])


@router.get("", response_model=List[TripSummaryResponse])
async def list_trips(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List all trips for current user."""
    return await run_in_threadpool(trip_service.list_trips, current_user.user_id, db)


@router.get("/{trip_id}", response_model=TripDetailResponse)
async def get_trip(
    trip_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get a trip with its stops, scheduled activities and budget breakdown."""
    return await run_in_threadpool(trip_service.get_trip, current_user.user_id, trip_id, db)


@router.post("", response_model=TripResponse, status_code=status.HTTP_201_CREATED)
async def create_trip(
    trip_data: TripCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Create a new trip."""
    return await run_in_threadpool(
        trip_service.create_trip,
        current_user.user_id,
        trip_data.trip_name,
        trip_data.start_date,
        trip_data.end_date,
        description=trip_data.description,
        cover_photo=trip_data.cover_photo,
        db=db
    )


@router.put("/{trip_id}", response_model=TripResponse)
async def update_trip(
    trip_id: int,
    trip_data: TripUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Update the fields present in the request body."""
    return await run_in_threadpool(
        trip_service.update_trip,
        current_user.user_id, trip_id, trip_data.model_dump(exclude_unset=True), db
    )


@router.delete("/{trip_id}")
async def delete_trip(
    trip_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Delete a trip and everything planned in it."""
    await run_in_threadpool(trip_service.delete_trip, current_user.user_id, trip_id, db)
    return format_response({"trip_id": trip_id}, "Trip deleted successfully")


@router.post("/{trip_id}/stops", response_model=StopResponse, status_code=status.HTTP_201_CREATED)
async def add_stop(
    trip_id: int,
    stop_data: StopCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Add a city stop to a trip."""
    return await run_in_threadpool(
        trip_service.add_stop,
        current_user.user_id,
        trip_id,
        stop_data.city_id,
        stop_data.arrival_date,
        stop_data.departure_date,
        stop_data.stop_order,
        accommodation_cost=stop_data.accommodation_cost,
        transport_cost=stop_data.transport_cost,
        db=db
    )


@router.post("/{trip_id}/budget", response_model=BudgetLineResponse, status_code=status.HTTP_201_CREATED)
async def add_budget_line(
    trip_id: int,
    budget_data: BudgetLineCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Add an estimated cost category to a trip's budget."""
    return await run_in_threadpool(
        trip_service.add_budget_line,
        current_user.user_id,
        trip_id,
        budget_data.category,
        budget_data.estimated_amount,
        db=db
    )
