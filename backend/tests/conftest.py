"""Pytest configuration and fixtures."""

import os

# Must be set before the application settings are first imported
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-smartmenu-tests-0123456789abcdef0123456789")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

import pytest
from decimal import Decimal
from typing import Generator

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from smartmenu.core.rbac import UserRole
from smartmenu.core.security import get_password_hash, get_token_issuer
from smartmenu.db.base import Base
from smartmenu.db.session import get_db
from smartmenu.main import app
# Import all models to ensure they're registered with Base.metadata
from smartmenu.models import *  # noqa: F401,F403
from smartmenu.models.restaurant import MenuItem, Table
from smartmenu.models.user import User

# Use in-memory SQLite for tests
TEST_DATABASE_URL = "sqlite:///:memory:"

TEST_PASSWORD = "testpass123"


@pytest.fixture(scope="function")
def db_engine():
    """Create a test database engine."""
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db_session(db_engine) -> Generator[Session, None, None]:
    """Create a test database session."""
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """Create a test client with database override."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    # Disable the rate limiter during tests to avoid flaky failures
    from smartmenu.core.rate_limit import limiter
    limiter.enabled = False
    # Don't raise server exceptions so we can test error status codes
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def make_user(db_session: Session, username: str, role: UserRole = UserRole.OWNER, **kwargs) -> User:
    user = User(
        username=username,
        email=kwargs.pop("email", f"{username}@example.com"),
        password_hash=get_password_hash(kwargs.pop("password", TEST_PASSWORD)),
        role=role,
        restaurant_name=kwargs.pop("restaurant_name", f"{username}'s place"),
        is_active=kwargs.pop("is_active", True),
        **kwargs,
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


def bearer(user: User) -> dict:
    return {"Authorization": f"Bearer {get_token_issuer().issue(user.username)}"}


@pytest.fixture
def owner(db_session: Session) -> User:
    """Restaurant owner account."""
    return make_user(db_session, "owner")


@pytest.fixture
def other_owner(db_session: Session) -> User:
    """Owner of a different restaurant."""
    return make_user(db_session, "rival")


@pytest.fixture
def auth_headers(owner: User) -> dict:
    """Get authentication headers for the owner."""
    return bearer(owner)


@pytest.fixture
def table(db_session: Session, owner: User) -> Table:
    table = Table(
        owner_id=owner.id,
        table_number="Table 1",
        qr_code_id="11111111-1111-4111-8111-111111111111",
        qr_code_url="http://localhost:5173/customer-menu?table=1",
        location="Main Hall",
    )
    db_session.add(table)
    db_session.commit()
    db_session.refresh(table)
    return table


@pytest.fixture
def menu_items(db_session: Session, owner: User) -> list[MenuItem]:
    items = [
        MenuItem(owner_id=owner.id, name="Nyama Choma", price=Decimal("12.50"), category="Main Course"),
        MenuItem(owner_id=owner.id, name="Chapati", price=Decimal("1.25"), category="Sides"),
        MenuItem(owner_id=owner.id, name="Mango Juice", price=Decimal("3.00"), category="Drinks", available=False),
    ]
    db_session.add_all(items)
    db_session.commit()
    for item in items:
        db_session.refresh(item)
    return items
