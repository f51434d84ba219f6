"""
Activity catalog routes.
"""
from fastapi import APIRouter, Depends, Query
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session
from typing import List, Optional
from decimal import Decimal
from app.db.session import get_db
from app.models.user import User
from app.schemas.catalog import ActivityResponse
from app.api.dependencies import get_current_user
from app.services import catalog_service

router = APIRouter(prefix="/activities", tags=["activities"])


@router.get("/search", response_model=List[ActivityResponse])
async def search_activities(
    city_id: Optional[int] = None,
    category: Optional[str] = None,
    min_cost: Optional[Decimal] = None,
    max_cost: Optional[Decimal] = None,
    query: Optional[str] = None,
    limit: int = Query(50, ge=1, le=200),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Search activities by city, category, cost range or text."""
    return await run_in_threadpool(
        catalog_service.search_activities,
        db,
        city_id=city_id,
        category=category,
        min_cost=min_cost,
        max_cost=max_cost,
        query=query,
        limit=limit
    )


@router.get("/categories", response_model=List[str])
async def get_activity_categories(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List distinct activity categories."""
    return await run_in_threadpool(catalog_service.activity_categories, db)


@router.get("/{activity_id}", response_model=ActivityResponse)
async def get_activity(
    activity_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get a single activity."""
    return await run_in_threadpool(catalog_service.get_activity, activity_id, db)
