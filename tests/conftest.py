import os

os.environ.setdefault("ENV", "testing")
os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("ALGORITHM", "HS256")
os.environ.setdefault("LOG_DIR", "logs")

import pytest
from datetime import datetime, timedelta, timezone
from httpx import ASGITransport, AsyncClient
from jose import jwt
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from typing import Generator

from main import app
from core.config import settings
from core.database import Base
from utils.deps import get_db
from models.users import User
from models.restaurants import Restaurant, MenuItem
from models.payment_methods import PaymentMethod
from services.scope_service import resolve_scope

# SYNC SQLite for testing (matches sync service layer)
SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False}
)

TestingSessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine
)


@pytest.fixture
def session() -> Generator[Session, None, None]:
    """
    Creates a fresh, empty database for each test.
    """
    Base.metadata.create_all(bind=engine)

    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()

    Base.metadata.drop_all(bind=engine)


@pytest.fixture
async def client(session: Session):
    """
    Yields an HTTP client that talks to the app using the test database.
    """
    def override_get_db():
        try:
            yield session
        finally:
            pass  # Session cleanup handled by session fixture

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


def make_token(user_id: str, token_type: str = "access", expires_in: timedelta = timedelta(minutes=15)) -> str:
    """Mint a token the way the identity provider does."""
    payload = {
        "sub": user_id,
        "type": token_type,
        "exp": datetime.now(timezone.utc) + expires_in
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


@pytest.fixture
def auth_headers():
    """Bearer headers for a user, as the frontend sends them."""
    def _headers(user: User) -> dict:
        return {"Authorization": f"Bearer {make_token(user.id)}"}
    return _headers


@pytest.fixture
def scope_for():
    def _scope(user: User):
        return resolve_scope(user_id=user.id, role=user.role, home_country=user.country)
    return _scope


def _make_user(session: Session, email: str, role: str, country: str) -> User:
    user = User(email=email, role=role, country=country)
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


@pytest.fixture
def admin(session):
    return _make_user(session, "admin@example.com", "ADMIN", "IN")


@pytest.fixture
def manager_in(session):
    return _make_user(session, "manager.in@example.com", "MANAGER", "IN")


@pytest.fixture
def manager_us(session):
    return _make_user(session, "manager.us@example.com", "MANAGER", "US")


@pytest.fixture
def member_in(session):
    return _make_user(session, "member.in@example.com", "MEMBER", "IN")


@pytest.fixture
def member_us(session):
    return _make_user(session, "member.us@example.com", "MEMBER", "US")


@pytest.fixture
def restaurant_in(session):
    restaurant = Restaurant(name="Spice Route", country="IN")
    session.add(restaurant)
    session.commit()
    session.refresh(restaurant)
    return restaurant


@pytest.fixture
def restaurant_us(session):
    restaurant = Restaurant(name="Liberty Diner", country="US")
    session.add(restaurant)
    session.commit()
    session.refresh(restaurant)
    return restaurant


@pytest.fixture
def biryani(session, restaurant_in):
    item = MenuItem(restaurant_id=restaurant_in.id, name="Biryani", price_cents=3500, currency="INR")
    session.add(item)
    session.commit()
    session.refresh(item)
    return item


@pytest.fixture
def dosa(session, restaurant_in):
    item = MenuItem(restaurant_id=restaurant_in.id, name="Dosa", price_cents=1200, currency="INR")
    session.add(item)
    session.commit()
    session.refresh(item)
    return item


@pytest.fixture
def sold_out_item(session, restaurant_in):
    item = MenuItem(restaurant_id=restaurant_in.id, name="Thali", price_cents=5000,
                    currency="INR", available=False)
    session.add(item)
    session.commit()
    session.refresh(item)
    return item


@pytest.fixture
def burger(session, restaurant_us):
    item = MenuItem(restaurant_id=restaurant_us.id, name="Burger", price_cents=999, currency="USD")
    session.add(item)
    session.commit()
    session.refresh(item)
    return item


@pytest.fixture
def active_method(session, admin):
    method = PaymentMethod(label="Primary Card", brand="MOCK", last4="4242",
                           active=True, is_default=True, created_by_user_id=admin.id)
    session.add(method)
    session.commit()
    session.refresh(method)
    return method


@pytest.fixture
def inactive_method(session, admin):
    method = PaymentMethod(label="Expired Card", brand="MOCK", last4="0000",
                           active=False, created_by_user_id=admin.id)
    session.add(method)
    session.commit()
    session.refresh(method)
    return method


@pytest.fixture
def issue_token():
    return make_token


@pytest.fixture
def session_factory(session):
    """Independent sessions on the test database, one per simulated client."""
    return TestingSessionLocal
