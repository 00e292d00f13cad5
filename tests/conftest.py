"""
Test configuration and fixtures for the LightBnB API.
Provides database fixtures, test data factories, and common test utilities.
"""

import os

os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")

import pytest
import uuid
from datetime import date
from typing import AsyncGenerator, Optional
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool
from httpx import AsyncClient, ASGITransport

from lightbnb.main import app
from lightbnb.database import get_db, create_tables, drop_tables
from lightbnb.models import User, Property, Reservation, PropertyReview
from lightbnb.repositories.user import UserRepository
from lightbnb.repositories.property import PropertyRepository
from lightbnb.repositories.reservation import ReservationRepository
from lightbnb.data_store import DataStore, InstrumentedDataStore
from lightbnb.services.auth import AuthService
from lightbnb.services.property import PropertyService
from lightbnb.services.reservation import ReservationService
from lightbnb.utils.auth import create_access_token


TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite+aiosqlite://")


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create a fresh database with the full schema for each test."""
    connect_args = {"check_same_thread": False} if TEST_DATABASE_URL.startswith("sqlite") else {}
    test_engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args=connect_args
    )

    await create_tables(test_engine)

    yield test_engine

    await drop_tables(test_engine)
    await test_engine.dispose()


@pytest.fixture
async def db_session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    session_factory = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        try:
            yield session
        finally:
            await session.rollback()
            await session.close()


@pytest.fixture
async def async_client(engine: AsyncEngine, db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create an async test client with database session override."""
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.state.engine = engine

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


# Data store fixtures
@pytest.fixture
def data_store(db_session: AsyncSession) -> InstrumentedDataStore:
    """Create an instrumented data store bound to the test session."""
    return InstrumentedDataStore(DataStore(db_session))


# Repository fixtures
@pytest.fixture
def user_repository(db_session: AsyncSession) -> UserRepository:
    """Create a user repository instance."""
    return UserRepository(db_session)


@pytest.fixture
def property_repository(db_session: AsyncSession, data_store: InstrumentedDataStore) -> PropertyRepository:
    """Create a property repository instance."""
    return PropertyRepository(db_session, data_store)


@pytest.fixture
def reservation_repository(db_session: AsyncSession) -> ReservationRepository:
    """Create a reservation repository instance."""
    return ReservationRepository(db_session)


# Service fixtures
@pytest.fixture
def auth_service(db_session: AsyncSession) -> AuthService:
    """Create an auth service instance."""
    return AuthService(db_session)


@pytest.fixture
def property_service(db_session: AsyncSession, data_store: InstrumentedDataStore) -> PropertyService:
    """Create a property service instance."""
    return PropertyService(db_session, data_store)


@pytest.fixture
def reservation_service(db_session: AsyncSession) -> ReservationService:
    """Create a reservation service instance."""
    return ReservationService(db_session)


# Test data factories
class UserFactory:
    """Factory for creating test users."""

    @staticmethod
    def create_user_data(
        email: Optional[str] = None,
        password: str = "testpassword123",
        name: str = "Test User"
    ) -> dict:
        """Create user data dictionary."""
        return {
            "email": email or f"user{uuid.uuid4().hex[:8]}@lightbnb.com",
            "password": password,
            "name": name
        }

    @staticmethod
    async def create_user(
        user_repo: UserRepository,
        email: Optional[str] = None,
        password: str = "testpassword123",
        name: str = "Test User"
    ) -> User:
        """Create a test user in the database."""
        user_data = UserFactory.create_user_data(email=email, password=password, name=name)
        return await user_repo.create_user(user_data)


class PropertyFactory:
    """Factory for creating test properties."""

    @staticmethod
    def create_property_data(
        owner_id: Optional[int] = None,
        title: str = "Test Property",
        cost_per_night: int = 100,
        city: str = "Vancouver",
        **overrides
    ) -> dict:
        """Create property data dictionary."""
        data = {
            "title": title,
            "description": "description",
            "thumbnail_photo_url": "https://images.example.org/thumb.jpg",
            "cover_photo_url": "https://images.example.org/cover.jpg",
            "cost_per_night": cost_per_night,
            "parking_spaces": 1,
            "number_of_bathrooms": 1,
            "number_of_bedrooms": 2,
            "country": "Canada",
            "street": "536 Namsub Highway",
            "city": city,
            "province": "British Columbia",
            "post_code": "28142"
        }
        if owner_id is not None:
            data["owner_id"] = owner_id
        data.update(overrides)
        return data

    @staticmethod
    async def create_property(
        property_repo: PropertyRepository,
        owner_id: int,
        title: str = "Test Property",
        cost_per_night: int = 100,
        city: str = "Vancouver",
        **overrides
    ) -> Property:
        """Create a test property in the database."""
        property_data = PropertyFactory.create_property_data(
            owner_id=owner_id,
            title=title,
            cost_per_night=cost_per_night,
            city=city,
            **overrides
        )
        return await property_repo.create_property(property_data)


class ReservationFactory:
    """Factory for creating test reservations."""

    @staticmethod
    async def create_reservation(
        reservation_repo: ReservationRepository,
        property_id: int,
        guest_id: int,
        start_date: date = date(2026, 9, 11),
        end_date: date = date(2026, 9, 26)
    ) -> Reservation:
        """Create a test reservation in the database."""
        return await reservation_repo.create_reservation({
            "property_id": property_id,
            "guest_id": guest_id,
            "start_date": start_date,
            "end_date": end_date
        })


class ReviewFactory:
    """Factory for creating test property reviews."""

    @staticmethod
    async def create_reviews(
        db: AsyncSession,
        property_id: int,
        guest_id: int,
        ratings: list
    ) -> list:
        """Add one review per rating for the property."""
        reviews = [
            PropertyReview(property_id=property_id, guest_id=guest_id, rating=rating, message="review")
            for rating in ratings
        ]
        db.add_all(reviews)
        await db.commit()
        return reviews


# Common test fixtures
@pytest.fixture
async def test_owner(user_repository: UserRepository) -> User:
    """Create a user who owns listings."""
    return await UserFactory.create_user(
        user_repository,
        email="owner@lightbnb.com",
        name="Test Owner"
    )


@pytest.fixture
async def test_guest(user_repository: UserRepository) -> User:
    """Create a user who books listings."""
    return await UserFactory.create_user(
        user_repository,
        email="guest@lightbnb.com",
        name="Test Guest"
    )


@pytest.fixture
async def listed_properties(
    db_session: AsyncSession,
    property_repository: PropertyRepository,
    test_owner: User,
    test_guest: User
) -> dict:
    """
    Four reviewed properties and one unreviewed one.

    | title      | city          | cost | owner | average rating |
    |------------|---------------|------|-------|----------------|
    | cabin      | Vancouver     | 80   | owner | 4.5            |
    | loft       | North Vancouver | 150 | guest | 3.0           |
    | condo      | Toronto       | 120  | owner | 4.0            |
    | villa      | Victoria      | 300  | owner | 5.0            |
    | unreviewed | Vancouver     | 50   | owner | -              |
    """
    specs = [
        ("cabin", "Vancouver", 80, test_owner.id, [4, 5]),
        ("loft", "North Vancouver", 150, test_guest.id, [3]),
        ("condo", "Toronto", 120, test_owner.id, [4, 4]),
        ("villa", "Victoria", 300, test_owner.id, [5]),
        ("unreviewed", "Vancouver", 50, test_owner.id, []),
    ]

    created = {}
    for title, city, cost, owner_id, ratings in specs:
        property_obj = await PropertyFactory.create_property(
            property_repository, owner_id, title=title, cost_per_night=cost, city=city
        )
        if ratings:
            await ReviewFactory.create_reviews(db_session, property_obj.id, test_guest.id, ratings)
        created[title] = property_obj

    return created


@pytest.fixture
def auth_headers(test_owner: User) -> dict:
    """Authorization headers for the test owner."""
    token = create_access_token(user_id=test_owner.id, email=test_owner.email)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def guest_headers(test_guest: User) -> dict:
    """Authorization headers for the test guest."""
    token = create_access_token(user_id=test_guest.id, email=test_guest.email)
    return {"Authorization": f"Bearer {token}"}
