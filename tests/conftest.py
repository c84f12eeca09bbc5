import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("LOG_FILE", os.devnull)
os.environ["RATE_LIMIT_ENABLED"] = "false"

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from salonbase.main import app
from salonbase.database import Base, get_db
from salonbase.models.service_model import Service
from salonbase.models.user_model import User
from salonbase.security.auth import create_token_pair, get_password_hash

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def future_date(days: int = 7) -> str:
    return (datetime.now(timezone.utc).date() + timedelta(days=days)).isoformat()


@pytest.fixture()
def db_session():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def client(db_session):
    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def make_user(db_session):
    def _make_user(email, role="user", name="Test User", phone="+1234567890", password="password123", is_active=True):
        user = User(
            name=name,
            email=email,
            phone=phone,
            password_hash=get_password_hash(password),
            role=role,
            is_active=is_active,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make_user


def auth_headers(user) -> dict:
    access_token, _ = create_token_pair(user)
    return {"Authorization": f"Bearer {access_token}"}


@pytest.fixture()
def admin(make_user):
    return make_user("admin@salonbase.com", role="admin", name="Admin User")


@pytest.fixture()
def customer(make_user):
    return make_user("john@example.com", name="John Doe", phone="+905551234568")


@pytest.fixture()
def other_customer(make_user):
    return make_user("jane@example.com", name="Jane Smith", phone="+905551234569")


@pytest.fixture()
def admin_headers(admin):
    return auth_headers(admin)


@pytest.fixture()
def user_headers(customer):
    return auth_headers(customer)


@pytest.fixture()
def other_user_headers(other_customer):
    return auth_headers(other_customer)


@pytest.fixture()
def make_service(db_session):
    def _make_service(name="Haircut & Styling", duration=60, price=45.0, category="hair", is_active=True):
        service = Service(
            name=name,
            description=f"{name} performed by our stylists",
            duration=duration,
            price=price,
            category=category,
            is_active=is_active,
        )
        db_session.add(service)
        db_session.commit()
        db_session.refresh(service)
        return service

    return _make_service


@pytest.fixture()
def haircut(make_service):
    return make_service()
