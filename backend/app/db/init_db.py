"""
Database initialization: tables plus the read-mostly reference data.
"""
import logging
from decimal import Decimal
from sqlalchemy.orm import Session
from app.db.session import SessionLocal, init_db
from app.models import City, ActivityTemplate

logger = logging.getLogger(__name__)

# name, country, region, cost_index, popularity_score, description, templates
# templates: name, category, estimated_cost, duration_hours
REFERENCE_CITIES = [
    ("Paris", "France", "Europe", "85.00", 98, "The city of light, art and cafes.", [
        ("Eiffel Tower Summit", "sightseeing", "35.00", "2.5"),
        ("Louvre Museum", "culture", "22.00", "3"),
        ("Seine River Cruise", "sightseeing", "18.00", "1.5"),
        ("Montmartre Food Walk", "food", "95.00", "3"),
    ]),
    ("Tokyo", "Japan", "Asia", "80.00", 96, "Neon streets, temples and ramen.", [
        ("Senso-ji Temple", "culture", "0.00", "1.5"),
        ("Tsukiji Outer Market Tour", "food", "60.00", "2.5"),
        ("Shibuya Nightlife", "nightlife", "50.00", "3"),
        ("Akihabara Shopping", "shopping", "0.00", "2"),
    ]),
    ("Amsterdam", "Netherlands", "Europe", "78.00", 88, "Canals, bikes and museums.", [
        ("Canal Boat Tour", "sightseeing", "20.00", "1"),
        ("Rijksmuseum", "culture", "22.50", "3"),
        ("Bike Through Vondelpark", "adventure", "15.00", "2"),
    ]),
    ("New York", "United States", "North America", "95.00", 97, "The city that never sleeps.", [
        ("Statue of Liberty Ferry", "sightseeing", "24.00", "4"),
        ("Broadway Show", "culture", "120.00", "3"),
        ("Central Park Walk", "sightseeing", "0.00", "2"),
    ]),
    ("Barcelona", "Spain", "Europe", "70.00", 92, "Gaudi, beaches and tapas.", [
        ("Sagrada Familia", "culture", "26.00", "2"),
        ("Tapas Crawl", "food", "55.00", "3"),
        ("Barceloneta Beach Day", "adventure", "0.00", "4"),
    ]),
    ("Bali", "Indonesia", "Asia", "40.00", 90, "Rice terraces, temples and surf.", [
        ("Mount Batur Sunrise Trek", "adventure", "45.00", "6"),
        ("Ubud Monkey Forest", "sightseeing", "5.00", "1.5"),
        ("Balinese Cooking Class", "food", "35.00", "4"),
    ]),
]


def seed_reference_data(db: Session) -> int:
    """Insert reference cities and their activity templates. Existing cities are left alone."""
    created = 0
    for name, country, region, cost_index, popularity, description, templates in REFERENCE_CITIES:
        exists = db.query(City).filter(City.name == name, City.country == country).first()
        if exists:
            continue
        city = City(
            name=name,
            country=country,
            region=region,
            cost_index=Decimal(cost_index),
            popularity_score=popularity,
            description=description,
        )
        city.activity_templates = [
            ActivityTemplate(
                name=t_name,
                category=category,
                estimated_cost=Decimal(cost),
                duration_hours=Decimal(hours),
            )
            for t_name, category, cost, hours in templates
        ]
        db.add(city)
        created += 1
    db.commit()
    if created:
        logger.info(f"Seeded {created} reference cities")
    return created


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    print("Initializing database...")
    init_db()
    session = SessionLocal()
    try:
        seed_reference_data(session)
    finally:
        session.close()
    print("Database initialized successfully!")
