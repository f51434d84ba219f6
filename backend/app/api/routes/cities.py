"""
City catalog routes.
"""
from fastapi import APIRouter, Depends, Query
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session
from typing import List, Optional
from app.db.session import get_db
from app.models.user import User
from app.schemas.catalog import CityResponse, CityDetailResponse, ActivityResponse
from app.api.dependencies import get_current_user
from app.services import catalog_service

router = APIRouter(prefix="/cities", tags=["cities"])


@router.get("/search", response_model=List[CityResponse])
async def search_cities(
    query: Optional[str] = None,
    country: Optional[str] = None,
    region: Optional[str] = None,
    limit: int = Query(20, ge=1, le=100),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Search cities by name, country or region."""
    return await run_in_threadpool(
        catalog_service.search_cities, db, query=query, country=country, region=region, limit=limit
    )


@router.get("/popular", response_model=List[CityResponse])
async def get_popular_cities(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get the ten most popular cities."""
    return await run_in_threadpool(catalog_service.popular_cities, db)


@router.get("/{city_id}", response_model=CityDetailResponse)
async def get_city(
    city_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get a city with its activities."""
    city = await run_in_threadpool(catalog_service.get_city, city_id, db)
    activities = await run_in_threadpool(catalog_service.get_city_activities, city_id, db)
    return CityDetailResponse(
        **CityResponse.model_validate(city).model_dump(),
        activities=[ActivityResponse.model_validate(a) for a in activities]
    )
