"""
Tests for service classes.
Covers authentication flows, property search and reservations.
"""

import logging
import pytest
from datetime import date, timedelta

from lightbnb.config import settings
from lightbnb.models.user import User
from lightbnb.services.auth import AuthService
from lightbnb.services.property import PropertyService
from lightbnb.services.reservation import ReservationService
from lightbnb.schemas.user import UserCreate
from lightbnb.schemas.property import PropertyCreate
from lightbnb.schemas.reservation import ReservationCreate
from lightbnb.utils.auth import create_access_token, create_refresh_token, verify_token
from lightbnb.utils.query_builder import FilterCriteria
from lightbnb.utils.exceptions import (
    InvalidCredentialsError,
    InvalidTokenError,
    TokenExpiredError,
    ValidationError,
    DuplicateResourceError,
    PropertyNotFoundError
)
from tests.conftest import PropertyFactory


class TestAuthService:
    """Test AuthService functionality."""

    async def test_authenticate_user_success(self, auth_service: AuthService, test_owner: User):
        user = await auth_service.authenticate_user(test_owner.email, "testpassword123")

        assert user.id == test_owner.id

    async def test_authenticate_user_wrong_password(self, auth_service: AuthService, test_owner: User):
        with pytest.raises(InvalidCredentialsError):
            await auth_service.authenticate_user(test_owner.email, "wrongpassword")

    async def test_authenticate_user_not_found(self, auth_service: AuthService):
        with pytest.raises(InvalidCredentialsError):
            await auth_service.authenticate_user("nobody@lightbnb.com", "testpassword123")

    async def test_authenticate_user_empty_email(self, auth_service: AuthService):
        with pytest.raises(ValidationError, match="Email is required"):
            await auth_service.authenticate_user("", "password")

    async def test_authenticate_user_empty_password(self, auth_service: AuthService):
        with pytest.raises(ValidationError, match="Password is required"):
            await auth_service.authenticate_user("owner@lightbnb.com", "")

    async def test_login_returns_tokens(self, auth_service: AuthService, test_owner: User):
        user, access_token, refresh_token = await auth_service.login(test_owner.email, "testpassword123")

        assert user.id == test_owner.id
        assert verify_token(access_token, "access").user_id == test_owner.id
        assert verify_token(refresh_token, "refresh").user_id == test_owner.id

    async def test_signup(self, auth_service: AuthService):
        user_data = UserCreate(name="Eva Stanley", email="eva@lightbnb.com", password="securepassword123")

        user, access_token, _ = await auth_service.signup(user_data)

        assert user.id is not None
        assert user.name == "Eva Stanley"
        assert verify_token(access_token).email == "eva@lightbnb.com"

    async def test_signup_duplicate_email(self, auth_service: AuthService, test_owner: User):
        user_data = UserCreate(name="Copy", email=test_owner.email, password="securepassword123")

        with pytest.raises(DuplicateResourceError):
            await auth_service.signup(user_data)

    async def test_refresh_access_token(self, auth_service: AuthService, test_owner: User):
        refresh_token = create_refresh_token(test_owner.id, test_owner.email)

        access_token = await auth_service.refresh_access_token(refresh_token)

        assert verify_token(access_token, "access").user_id == test_owner.id

    async def test_refresh_with_access_token_rejected(self, auth_service: AuthService, test_owner: User):
        access_token = create_access_token(test_owner.id, test_owner.email)

        with pytest.raises(InvalidTokenError):
            await auth_service.refresh_access_token(access_token)

    async def test_get_current_user(self, auth_service: AuthService, test_owner: User):
        token = create_access_token(test_owner.id, test_owner.email)

        user = await auth_service.get_current_user(token)

        assert user.id == test_owner.id

    async def test_get_current_user_expired(self, auth_service: AuthService, test_owner: User):
        token = create_access_token(test_owner.id, test_owner.email, expires_delta=timedelta(seconds=-10))

        with pytest.raises(TokenExpiredError):
            await auth_service.get_current_user(token)

    async def test_get_current_user_garbage_token(self, auth_service: AuthService):
        with pytest.raises(InvalidTokenError):
            await auth_service.get_current_user("not-a-jwt")

    async def test_get_current_user_deleted_user(self, auth_service: AuthService):
        token = create_access_token(424242, "ghost@lightbnb.com")

        with pytest.raises(InvalidTokenError):
            await auth_service.get_current_user(token)


class TestPropertyService:
    """Test property creation and search."""

    async def test_create_property_sets_owner(self, property_service: PropertyService, test_owner: User):
        property_data = PropertyCreate(**PropertyFactory.create_property_data(title="Habit mix"))

        property_obj = await property_service.create_property(property_data, test_owner.id)

        assert property_obj.owner_id == test_owner.id
        assert property_obj.title == "Habit mix"

    async def test_search_all(self, property_service: PropertyService, listed_properties):
        results = await property_service.search_properties(FilterCriteria(), 20)

        assert [r.title for r in results] == ["cabin", "condo", "loft", "villa"]
        assert all(isinstance(r.average_rating, float) for r in results)

    async def test_search_by_city(self, property_service: PropertyService, listed_properties):
        results = await property_service.search_properties(FilterCriteria(city="VAN"), 20)

        assert [r.title for r in results] == ["cabin", "loft"]

    async def test_search_by_owner(self, property_service: PropertyService, listed_properties, test_owner: User):
        results = await property_service.search_properties(FilterCriteria(owner_id=test_owner.id), 20)

        assert [r.title for r in results] == ["cabin", "condo", "villa"]

    async def test_search_by_price_range_is_exclusive(self, property_service: PropertyService, listed_properties):
        criteria = FilterCriteria(minimum_price_per_night=80, maximum_price_per_night=150)

        results = await property_service.search_properties(criteria, 20)

        assert [r.title for r in results] == ["condo"]

    async def test_search_by_minimum_rating_is_exclusive(self, property_service: PropertyService, listed_properties):
        results = await property_service.search_properties(FilterCriteria(minimum_rating=4), 20)

        assert [r.title for r in results] == ["cabin", "villa"]
        assert [r.average_rating for r in results] == [4.5, 5.0]

    async def test_search_city_and_rating(self, property_service: PropertyService, listed_properties):
        results = await property_service.search_properties(FilterCriteria(city="Van", minimum_rating=4), 5)

        assert [r.title for r in results] == ["cabin"]

    async def test_search_owner_and_price(
        self,
        property_service: PropertyService,
        listed_properties,
        test_owner: User
    ):
        criteria = FilterCriteria(owner_id=test_owner.id, minimum_price_per_night=50, maximum_price_per_night=150)

        results = await property_service.search_properties(criteria, 10)

        assert [r.title for r in results] == ["cabin", "condo"]

    async def test_search_limit(self, property_service: PropertyService, listed_properties):
        results = await property_service.search_properties(FilterCriteria(), 2)

        assert [r.title for r in results] == ["cabin", "condo"]

    async def test_partial_price_range_ignored_and_logged(
        self,
        property_service: PropertyService,
        listed_properties,
        caplog
    ):
        caplog.set_level(logging.INFO, logger="lightbnb.services.property")

        results = await property_service.search_properties(FilterCriteria(minimum_price_per_night=200), 20)

        assert len(results) == 4
        assert any("partial price range" in r.getMessage() for r in caplog.records)

    @pytest.mark.parametrize("limit", [0, -5, settings.max_search_limit + 1])
    async def test_search_limit_out_of_range(self, property_service: PropertyService, limit: int):
        with pytest.raises(ValidationError):
            await property_service.search_properties(FilterCriteria(), limit)


class TestReservationService:
    """Test reservation booking and listing."""

    async def test_create_and_list(
        self,
        reservation_service: ReservationService,
        listed_properties,
        test_guest: User
    ):
        villa = listed_properties["villa"]
        reservation_data = ReservationCreate(
            property_id=villa.id,
            start_date=date(2026, 9, 11),
            end_date=date(2026, 9, 26)
        )

        reservation = await reservation_service.create_reservation(reservation_data, test_guest.id)
        listed = await reservation_service.list_reservations(test_guest.id)

        assert reservation.guest_id == test_guest.id
        assert len(listed) == 1
        assert listed[0].id == reservation.id
        assert listed[0].title == "villa"
        assert listed[0].cost_per_night == 300

    async def test_create_for_missing_property(self, reservation_service: ReservationService, test_guest: User):
        reservation_data = ReservationCreate(
            property_id=999999,
            start_date=date(2026, 9, 11),
            end_date=date(2026, 9, 12)
        )

        with pytest.raises(PropertyNotFoundError):
            await reservation_service.create_reservation(reservation_data, test_guest.id)

    async def test_list_is_scoped_to_guest(self, reservation_service: ReservationService, test_owner: User):
        assert await reservation_service.list_reservations(test_owner.id) == []
