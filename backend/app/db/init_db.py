"""
Database initialization script: creates tables and seeds the catalogs.
"""
import logging
from decimal import Decimal
from sqlalchemy.orm import Session
from app.core.config import settings
from app.db.session import SessionLocal, engine, init_db, unit_of_work
from app.models import City, Activity

logger = logging.getLogger(__name__)

SAMPLE_CITIES = [
    {"city_id": 1, "city_name": "Paris", "country": "France", "region": "Europe",
     "description": "The City of Light", "image_url": "https://example.com/paris.jpg",
     "cost_index": Decimal("120"), "popularity_score": 95},
    {"city_id": 2, "city_name": "Tokyo", "country": "Japan", "region": "Asia",
     "description": "Vibrant metropolis blending tradition and modernity",
     "image_url": "https://example.com/tokyo.jpg", "cost_index": Decimal("150"), "popularity_score": 98},
    {"city_id": 3, "city_name": "New York", "country": "USA", "region": "North America",
     "description": "The Big Apple", "image_url": "https://example.com/ny.jpg",
     "cost_index": Decimal("200"), "popularity_score": 97},
    {"city_id": 4, "city_name": "London", "country": "UK", "region": "Europe",
     "description": "Historic capital of England", "image_url": "https://example.com/london.jpg",
     "cost_index": Decimal("140"), "popularity_score": 93},
    {"city_id": 5, "city_name": "Sydney", "country": "Australia", "region": "Oceania",
     "description": "Harbor city with iconic Opera House", "image_url": "https://example.com/sydney.jpg",
     "cost_index": Decimal("130"), "popularity_score": 88},
]

SAMPLE_ACTIVITIES = [
    {"activity_id": 1, "activity_name": "Eiffel Tower Visit", "city_id": 1, "category": "Landmark",
     "description": "Visit the iconic Eiffel Tower", "image_url": "https://example.com/eiffel.jpg",
     "estimated_cost": Decimal("25"), "duration_hours": Decimal("2"), "rating": Decimal("4.8")},
    {"activity_id": 2, "activity_name": "Louvre Museum", "city_id": 1, "category": "Museum",
     "description": "Explore world-class art", "image_url": "https://example.com/louvre.jpg",
     "estimated_cost": Decimal("18"), "duration_hours": Decimal("4"), "rating": Decimal("4.9")},
    {"activity_id": 3, "activity_name": "Shibuya Crossing", "city_id": 2, "category": "Landmark",
     "description": "Experience the famous scramble crossing", "image_url": "https://example.com/shibuya.jpg",
     "estimated_cost": Decimal("0"), "duration_hours": Decimal("1"), "rating": Decimal("4.7")},
    {"activity_id": 4, "activity_name": "Statue of Liberty", "city_id": 3, "category": "Landmark",
     "description": "Visit the iconic symbol of freedom", "image_url": "https://example.com/statue.jpg",
     "estimated_cost": Decimal("20"), "duration_hours": Decimal("3"), "rating": Decimal("4.6")},
]


def seed_catalog(db: Session) -> int:
    """Insert the sample cities and activities when the catalog is empty. Returns rows added."""
    if db.query(City).first() is not None:
        return 0
    with unit_of_work(db):
        db.add_all(City(**city) for city in SAMPLE_CITIES)
        db.flush()
        db.add_all(Activity(**activity) for activity in SAMPLE_ACTIVITIES)
    return len(SAMPLE_CITIES) + len(SAMPLE_ACTIVITIES)


if __name__ == "__main__":
    logging.basicConfig(level=settings.LOG_LEVEL, format=settings.LOG_FORMAT)
    logger.info("Initializing database...")
    init_db(engine)
    if settings.SEED_CATALOG:
        db = SessionLocal()
        try:
            added = seed_catalog(db)
            logger.info(f"Seeded {added} catalog rows")
        finally:
            db.close()
    logger.info("Database initialized successfully!")
