"""
Pytest configuration and fixtures for backend tests.
"""

import os

# Settings are read at import time: point the app at SQLite and keep the
# background generator and demo seeding off before anything is imported.
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("DAILY_GENERATOR_ENABLED", "false")
os.environ.setdefault("SEED_ON_STARTUP", "false")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("GOOGLE_API_KEY", "")
os.environ.setdefault("GOOGLE_SEARCH_API_KEY", "")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from rest_api.main import app
from rest_api.models import Base, Chef, Customer, DiningTable, Dish, Restaurant
from rest_api.routers.realtime.robot_calls import get_robot_call_service
from rest_api.routers.reports.insights import get_insights_service
from rest_api.services.domain import BusinessInsightsService, RobotCallService
from rest_api.services.external import AINotConfiguredError, DispatchResult
from shared.infrastructure.db import get_db
from shared.security.password import hash_password


# SQLite in-memory database for testing
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

RESTAURANT_ID = "restro-1"
CUSTOMER_PASSWORD = "secret123"


# =============================================================================
# Fakes for outbound integrations
# =============================================================================


class FakeDispatcher:
    """Robot server stand-in recording every dispatch."""

    def __init__(self, success: bool = True):
        self.success = success
        self.calls: list[int] = []

    async def dispatch(self, table_no: int, priority: str = "normal") -> DispatchResult:
        self.calls.append(table_no)
        if self.success:
            return DispatchResult(True, 200, data={"accepted": True})
        return DispatchResult(False, 503, error="robot server down")


class EventSink:
    """Collects published robot-call events instead of sending them to Redis."""

    def __init__(self):
        self.events: list[tuple[str, dict, str | None]] = []

    async def __call__(self, event_type: str, payload: dict, restaurant_id: str | None) -> None:
        self.events.append((event_type, payload, restaurant_id))


class FakeAI:
    """Gemini stand-in answering with canned text and JSON."""

    model = "fake-model"

    def __init__(self, json_answer=None, text_answer: str = "Summary text", configured: bool = True):
        self.json_answer = json_answer if json_answer is not None else {}
        self.text_answer = text_answer
        self.configured = configured
        self.prompts: list[str] = []

    async def generate(self, prompt: str, temperature: float = 0.4) -> str:
        if not self.configured:
            raise AINotConfiguredError("GOOGLE_API_KEY is not set")
        self.prompts.append(prompt)
        return self.text_answer

    async def generate_json(self, prompt: str, temperature: float = 0.4):
        if not self.configured:
            raise AINotConfiguredError("GOOGLE_API_KEY is not set")
        self.prompts.append(prompt)
        return self.json_answer


# =============================================================================
# Database and client
# =============================================================================


@pytest.fixture(scope="function")
def db_session():
    """
    Create a fresh database session for each test.
    Uses SQLite in-memory for isolation.
    """
    Base.metadata.create_all(bind=engine)

    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def dispatcher():
    return FakeDispatcher()


@pytest.fixture
def event_sink():
    return EventSink()


@pytest.fixture
def fake_ai():
    return FakeAI()


@pytest.fixture(scope="function")
def client(db_session, dispatcher, event_sink, fake_ai):
    """
    Create a test client with the database session and outbound
    integrations overridden.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_robot_call_service] = lambda: RobotCallService(
        db_session, dispatcher=dispatcher, event_sink=event_sink
    )
    app.dependency_overrides[get_insights_service] = lambda: BusinessInsightsService(db_session, ai_client=fake_ai)

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# Seed data
# =============================================================================


@pytest.fixture
def seed_restaurant(db_session):
    restaurant = Restaurant(restaurant_id=RESTAURANT_ID, name_id="Test Bistro", location_id="Test Street 1", logo={})
    db_session.add(restaurant)
    db_session.commit()
    db_session.refresh(restaurant)
    return restaurant


@pytest.fixture
def seed_dishes(db_session, seed_restaurant):
    """DISH-1 at 100 and DISH-2 at 80."""
    dishes = [
        Dish(
            dish_id="DISH-1",
            restaurant_id=RESTAURANT_ID,
            name="Masala Dosa",
            price=100.0,
            type_of_dish=["Main Course"],
            genre_of_taste=["Spicy"],
            images=[],
        ),
        Dish(
            dish_id="DISH-2",
            restaurant_id=RESTAURANT_ID,
            name="Filter Coffee",
            price=80.0,
            type_of_dish=["Beverage"],
            genre_of_taste=[],
            images=[],
        ),
    ]
    db_session.add_all(dishes)
    db_session.commit()
    return dishes


@pytest.fixture
def seed_customer(db_session, seed_restaurant):
    customer = Customer(
        customer_id="CUSTOMER-1",
        restaurant_id=RESTAURANT_ID,
        name="Asha",
        email="asha@test.com",
        password=hash_password(CUSTOMER_PASSWORD),
        images=[],
    )
    db_session.add(customer)
    db_session.commit()
    db_session.refresh(customer)
    return customer


@pytest.fixture
def seed_chef(db_session, seed_restaurant):
    chef = Chef(
        chef_id="CHEF-1",
        restaurant_id=RESTAURANT_ID,
        name="Ravi",
        email="ravi@test.com",
        password=hash_password("chefpass"),
    )
    db_session.add(chef)
    db_session.commit()
    return chef


@pytest.fixture
def seed_tables(db_session, seed_restaurant):
    """Tables 1-3, all free."""
    tables = [DiningTable(restaurant_id=RESTAURANT_ID, table_no=n) for n in (1, 2, 3)]
    db_session.add_all(tables)
    db_session.commit()
    return tables
