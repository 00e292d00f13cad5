"""
Tests for repository classes.
Covers user accounts, property creation and search, and reservation listing.
"""

import pytest
from datetime import date

from lightbnb.models.user import User
from lightbnb.repositories.base import BaseRepository
from lightbnb.repositories.user import UserRepository
from lightbnb.repositories.property import PropertyRepository
from lightbnb.repositories.reservation import ReservationRepository
from lightbnb.utils.query_builder import FilterCriteria
from tests.conftest import UserFactory, PropertyFactory, ReservationFactory


class TestBaseRepository:
    """Test base repository functionality through UserRepository."""

    async def test_create(self, user_repository: UserRepository):
        user = await user_repository.create_user(UserFactory.create_user_data(email="test@lightbnb.com"))

        assert user.id is not None
        assert user.email == "test@lightbnb.com"
        assert user.created_at is not None

    async def test_get_by_id(self, user_repository: UserRepository):
        created_user = await UserFactory.create_user(user_repository)

        retrieved_user = await user_repository.get_by_id(created_user.id)

        assert retrieved_user is not None
        assert retrieved_user.email == created_user.email

    async def test_get_by_id_not_found(self, user_repository: UserRepository):
        assert await user_repository.get_by_id(999999) is None

    async def test_get_by_field(self, user_repository: UserRepository):
        created_user = await UserFactory.create_user(user_repository, name="Devin Sanders")

        found = await user_repository.get_by_field("name", "Devin Sanders")

        assert found.id == created_user.id

    async def test_get_by_unknown_field(self, user_repository: UserRepository):
        with pytest.raises(ValueError):
            await user_repository.get_by_field("no_such_column", "x")

    async def test_count(self, user_repository: UserRepository):
        await UserFactory.create_user(user_repository)
        await UserFactory.create_user(user_repository)

        assert await user_repository.count() == 2


class TestUserRepository:
    """Test UserRepository account operations."""

    async def test_password_is_hashed(self, user_repository: UserRepository):
        user = await UserFactory.create_user(user_repository, password="testpassword123")

        assert user.hashed_password != "testpassword123"
        assert user.verify_password("testpassword123")
        assert not user.verify_password("wrongpassword")

    async def test_email_is_normalized(self, user_repository: UserRepository):
        user = await UserFactory.create_user(user_repository, email="Mixed.Case@LightBnB.com")

        assert user.email == "mixed.case@lightbnb.com"
        assert await user_repository.get_by_email("MIXED.case@lightbnb.com") is not None

    async def test_duplicate_email(self, user_repository: UserRepository, test_owner: User):
        with pytest.raises(ValueError, match="already exists"):
            await UserFactory.create_user(user_repository, email=test_owner.email)

    async def test_invalid_email(self, user_repository: UserRepository):
        with pytest.raises(ValueError, match="Invalid email format"):
            await UserFactory.create_user(user_repository, email="not-an-email")

    async def test_authenticate_user(self, user_repository: UserRepository, test_owner: User):
        assert (await user_repository.authenticate_user(test_owner.email, "testpassword123")).id == test_owner.id
        assert await user_repository.authenticate_user(test_owner.email, "wrongpassword") is None
        assert await user_repository.authenticate_user("nobody@lightbnb.com", "testpassword123") is None

    async def test_check_email_availability(self, user_repository: UserRepository, test_owner: User):
        assert not await user_repository.check_email_availability(test_owner.email)
        assert await user_repository.check_email_availability("free@lightbnb.com")


class TestPropertyRepository:
    """Test property creation and search."""

    async def test_create_property(self, property_repository: PropertyRepository, test_owner: User):
        property_obj = await PropertyFactory.create_property(property_repository, test_owner.id, title="Speed lamp")

        assert property_obj.id is not None
        assert property_obj.owner_id == test_owner.id
        assert property_obj.title == "Speed lamp"
        assert property_obj.active is True

    async def test_search_excludes_unreviewed(self, property_repository: PropertyRepository, listed_properties):
        rows = await property_repository.search(FilterCriteria(), 20)

        titles = [row["title"] for row in rows]
        assert titles == ["cabin", "condo", "loft", "villa"]
        assert "unreviewed" not in titles

    async def test_search_average_rating(self, property_repository: PropertyRepository, listed_properties):
        rows = await property_repository.search(FilterCriteria(), 20)

        averages = {row["title"]: float(row["average_rating"]) for row in rows}
        assert averages == {"cabin": 4.5, "condo": 4.0, "loft": 3.0, "villa": 5.0}

    async def test_search_records_statement(self, property_repository: PropertyRepository, listed_properties):
        await property_repository.search(FilterCriteria(city="van"), 3)

        store = property_repository.data_store
        assert store.statement_count == 1
        assert store.last_statement.params == ("%van%", 3)

    async def test_search_without_data_store(self, db_session):
        with pytest.raises(RuntimeError):
            await PropertyRepository(db_session).search(FilterCriteria(), 5)


class TestReservationRepository:
    """Test reservation recording and listing."""

    async def test_reservations_for_guest(
        self,
        reservation_repository: ReservationRepository,
        listed_properties,
        test_guest: User,
        test_owner: User
    ):
        cabin = listed_properties["cabin"]
        villa = listed_properties["villa"]
        await ReservationFactory.create_reservation(
            reservation_repository, villa.id, test_guest.id, date(2026, 12, 1), date(2026, 12, 5)
        )
        await ReservationFactory.create_reservation(
            reservation_repository, cabin.id, test_guest.id, date(2026, 7, 1), date(2026, 7, 3)
        )
        await ReservationFactory.create_reservation(
            reservation_repository, cabin.id, test_owner.id, date(2026, 8, 1), date(2026, 8, 3)
        )

        rows = await reservation_repository.get_reservations_for_guest(test_guest.id)

        assert [row["title"] for row in rows] == ["cabin", "villa"]
        assert rows[0]["cost_per_night"] == 80
        assert rows[0]["start_date"] == date(2026, 7, 1)
        assert rows[0]["end_date"] == date(2026, 7, 3)

    async def test_reservation_limit(
        self,
        reservation_repository: ReservationRepository,
        listed_properties,
        test_guest: User
    ):
        cabin = listed_properties["cabin"]
        for day in range(1, 13):
            await ReservationFactory.create_reservation(
                reservation_repository, cabin.id, test_guest.id, date(2026, 1, day), date(2026, 1, day + 1)
            )

        rows = await reservation_repository.get_reservations_for_guest(test_guest.id, limit=10)

        assert len(rows) == 10
        assert rows[0]["start_date"] == date(2026, 1, 1)
