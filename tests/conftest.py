"""
Shared fixtures: an in-memory SQLite database recreated for every test and a
TestClient wired to it through the get_db dependency override.
"""
from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from app.db.base import Base
from app.db.models.user import User, UserRole
from app.db.models.ai_employee import AIEmployee, EmployeeStatus
from app.core.auth_dependency import get_db
from app.core.rate_limit import rate_limit_store
from app.core.security import hash_password, create_user_token


# Setup in-memory SQLite database for testing
TEST_DATABASE_URL = "sqlite:///:memory:"
test_engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


def override_get_db():
    """Override get_db dependency for testing."""
    db = TestSessionLocal()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(scope="function", autouse=True)
def setup_db():
    """Create and drop tables for each test."""
    Base.metadata.create_all(bind=test_engine)
    rate_limit_store.clear()
    yield
    Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def db():
    """Database session for arranging and inspecting state."""
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def other_db():
    """An independent session, for interleaving two callers."""
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def make_user(db):
    """Factory creating users with a known password ("testpass123")."""
    def _make_user(username="alice", role=UserRole.USER.value, email=None):
        user = User(
            email=email or f"{username}@example.com",
            username=username,
            password_hash=hash_password("testpass123"),
            role=role,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user
    return _make_user


@pytest.fixture
def user(make_user):
    return make_user("alice")


@pytest.fixture
def other_user(make_user):
    return make_user("bob")


@pytest.fixture
def admin_user(make_user):
    return make_user("root", role=UserRole.ADMIN.value)


@pytest.fixture
def auth_headers():
    """Build an Authorization header for a user."""
    def _headers(for_user):
        return {"Authorization": f"Bearer {create_user_token(for_user)}"}
    return _headers


@pytest.fixture
def make_employee(db):
    counter = {"n": 0}

    def _make_employee(name="Data Analyst Alex", category="tech", hourly_rate=45.0,
                       status=EmployeeStatus.AVAILABLE.value, rating=0.0, total_reviews=0):
        counter["n"] += 1
        employee = AIEmployee(
            employee_code=f"AI-{counter['n']:04d}",
            name=name,
            category=category,
            description=f"{name} description",
            hourly_rate=hourly_rate,
            monthly_rate=hourly_rate * 120,
            status=status,
            rating=rating,
            total_reviews=total_reviews,
        )
        db.add(employee)
        db.commit()
        db.refresh(employee)
        return employee
    return _make_employee


@pytest.fixture
def employee(make_employee):
    return make_employee()


@pytest.fixture
def start_date():
    return datetime(2026, 2, 1, 9, 0, tzinfo=timezone.utc)
