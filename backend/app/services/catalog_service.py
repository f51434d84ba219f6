"""
City and activity catalog lookups.

The catalogs are shared read-only reference data. The trip aggregate only
resolves ids against them; nothing here mutates a city or an activity.
"""
from sqlalchemy import func, or_
from sqlalchemy.orm import Session
from decimal import Decimal
from typing import List, Optional
from app.core.exceptions import NotFoundError
from app.db.retry import run_with_retry
from app.models.city import City
from app.models.activity import Activity


def resolve_city(city_id: int, db: Session) -> Optional[City]:
    """Return the city with this id, or None."""
    return run_with_retry(db, db.get, City, city_id)


def resolve_activity(activity_id: int, db: Session) -> Optional[Activity]:
    """Return the activity with this id, or None."""
    return run_with_retry(db, db.get, Activity, activity_id)


def search_cities(
    db: Session,
    query: Optional[str] = None,
    country: Optional[str] = None,
    region: Optional[str] = None,
    limit: int = 20
) -> List[City]:
    """
    Search cities by free text, country or region.

    `query` matches a substring of the city name or the country. Results are
    ordered by popularity, then name.
    """
    def search():
        q = db.query(City)
        if query:
            pattern = f"%{query}%"
            q = q.filter(or_(City.city_name.ilike(pattern), City.country.ilike(pattern)))
        if country:
            q = q.filter(func.lower(City.country) == country.lower())
        if region:
            q = q.filter(City.region == region)
        return q.order_by(City.popularity_score.desc(), City.city_name).limit(limit).all()

    return run_with_retry(db, search)


def popular_cities(db: Session, limit: int = 10) -> List[City]:
    """Most popular cities first."""
    def popular():
        return db.query(City).order_by(
            City.popularity_score.desc(), City.city_name
        ).limit(limit).all()

    return run_with_retry(db, popular)


def get_city(city_id: int, db: Session) -> City:
    """Get a city or raise NotFoundError."""
    city = resolve_city(city_id, db)
    if not city:
        raise NotFoundError("City", city_id)
    return city


def get_city_activities(city_id: int, db: Session) -> List[Activity]:
    """Activities offered in a city, grouped by category."""
    def activities():
        return db.query(Activity).filter(
            Activity.city_id == city_id
        ).order_by(Activity.category, Activity.activity_name).all()

    return run_with_retry(db, activities)


def search_activities(
    db: Session,
    city_id: Optional[int] = None,
    category: Optional[str] = None,
    min_cost: Optional[Decimal] = None,
    max_cost: Optional[Decimal] = None,
    query: Optional[str] = None,
    limit: int = 50
) -> List[Activity]:
    """Search activities. Cost bounds are inclusive on the estimated cost."""
    def search():
        q = db.query(Activity)
        if city_id is not None:
            q = q.filter(Activity.city_id == city_id)
        if category:
            q = q.filter(func.lower(Activity.category) == category.lower())
        if min_cost is not None:
            q = q.filter(Activity.estimated_cost >= min_cost)
        if max_cost is not None:
            q = q.filter(Activity.estimated_cost <= max_cost)
        if query:
            pattern = f"%{query}%"
            q = q.filter(or_(Activity.activity_name.ilike(pattern), Activity.description.ilike(pattern)))
        return q.order_by(Activity.activity_name).limit(limit).all()

    return run_with_retry(db, search)


def activity_categories(db: Session) -> List[str]:
    """Distinct activity categories, sorted."""
    def categories():
        rows = db.query(Activity.category).filter(
            Activity.category.isnot(None)
        ).distinct().order_by(Activity.category).all()
        return [row[0] for row in rows]

    return run_with_retry(db, categories)


def get_activity(activity_id: int, db: Session) -> Activity:
    """Get an activity or raise NotFoundError."""
    activity = resolve_activity(activity_id, db)
    if not activity:
        raise NotFoundError("Activity", activity_id)
    return activity
