"""
Stop routes: scheduling activities at a stop.
"""
from fastapi import APIRouter, Depends, status
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session
from app.db.session import get_db
from app.models.user import User
from app.schemas.trip import ScheduledActivityCreate, ScheduledActivityResponse
from app.api.dependencies import get_current_user
from app.services import trip_service

router = APIRouter(prefix="/stops", tags=["stops"])


@router.post(
    "/{stop_id}/activities",
    response_model=ScheduledActivityResponse,
    status_code=status.HTTP_201_CREATED
)
async def add_scheduled_activity(
    stop_id: int,
    activity_data: ScheduledActivityCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Schedule a catalog activity at a stop."""
    return await run_in_threadpool(
        trip_service.add_scheduled_activity,
        current_user.user_id,
        stop_id,
        activity_data.activity_id,
        scheduled_date=activity_data.scheduled_date,
        scheduled_time=activity_data.scheduled_time,
        actual_cost=activity_data.actual_cost,
        db=db
    )
