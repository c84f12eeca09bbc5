"""
Populate an empty database with an admin, two customers and the salon menu.

    python -m salonbase.seed

Existing rows (matched by email / service name) are left untouched.
"""

from salonbase.database import Base, SessionLocal, engine
from salonbase.models.appointment_model import Appointment  # noqa: F401
from salonbase.models.service_model import Service
from salonbase.models.token_blacklist import TokenBlacklist  # noqa: F401
from salonbase.models.user_model import User
from salonbase.security.auth import get_password_hash
from salonbase.logger import get_logger

logger = get_logger(__name__)

SAMPLE_USERS = [
    {"name": "Admin User", "email": "admin@salonbase.com", "phone": "+905551234567", "password": "admin123", "role": "admin"},
    {"name": "John Doe", "email": "john@example.com", "phone": "+905551234568", "password": "user123", "role": "user"},
    {"name": "Jane Smith", "email": "jane@example.com", "phone": "+905551234569", "password": "user123", "role": "user"},
]

SAMPLE_SERVICES = [
    {"name": "Haircut & Styling", "description": "Professional haircut and styling for all hair types", "duration": 60, "price": 45.0, "category": "hair"},
    {"name": "Hair Colouring", "description": "Full hair colouring with premium products", "duration": 120, "price": 85.0, "category": "hair"},
    {"name": "Manicure", "description": "Classic manicure with nail shaping and polish", "duration": 45, "price": 25.0, "category": "nails"},
    {"name": "Pedicure", "description": "Relaxing pedicure with foot massage and polish", "duration": 60, "price": 35.0, "category": "nails"},
    {"name": "Facial Care", "description": "Deep cleansing facial with a moisturising mask", "duration": 75, "price": 55.0, "category": "facial"},
    {"name": "Swedish Massage", "description": "Relaxing full body massage for stress relief", "duration": 90, "price": 75.0, "category": "massage"},
]


def seed(db) -> dict:
    created = {"users": 0, "services": 0}

    for sample in SAMPLE_USERS:
        if db.query(User).filter(User.email == sample["email"]).first():
            continue
        db.add(User(
            name=sample["name"],
            email=sample["email"],
            phone=sample["phone"],
            password_hash=get_password_hash(sample["password"]),
            role=sample["role"],
        ))
        created["users"] += 1

    for sample in SAMPLE_SERVICES:
        if db.query(Service).filter(Service.name == sample["name"]).first():
            continue
        db.add(Service(**sample))
        created["services"] += 1

    db.commit()
    return created


def main():
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        created = seed(db)
        logger.info(f"Seeded {created['users']} users and {created['services']} services")
    except Exception as e:
        db.rollback()
        logger.error(f"Seeding failed: {e}")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    main()
