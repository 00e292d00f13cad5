"""
Property service for listing creation and filtered property search.
"""

from typing import Optional, List
from sqlalchemy.ext.asyncio import AsyncSession
from lightbnb.config import settings
from lightbnb.data_store import InstrumentedDataStore
from lightbnb.repositories.property import PropertyRepository
from lightbnb.models.property import Property
from lightbnb.schemas.property import PropertyCreate, PropertySearchResult
from lightbnb.utils.query_builder import FilterCriteria
from lightbnb.utils.exceptions import ValidationError
import logging

logger = logging.getLogger(__name__)


class PropertyService:
    """
    Property service for managing property listings.
    Searches go through the data store; writes go through the ORM session.
    """

    def __init__(self, db_session: AsyncSession, data_store: Optional[InstrumentedDataStore] = None):
        self.db = db_session
        self.property_repo = PropertyRepository(db_session, data_store)

    async def create_property(self, property_data: PropertyCreate, owner_id: int) -> Property:
        """
        Create a new property listing owned by the caller.

        Args:
            property_data: Property creation data
            owner_id: ID of the authenticated user

        Returns:
            Created property instance
        """
        create_data = property_data.model_dump()
        create_data["owner_id"] = owner_id

        property_obj = await self.property_repo.create_property(create_data)

        logger.info(f"Property created by user {owner_id}: {property_obj.title} (ID: {property_obj.id})")
        return property_obj

    async def search_properties(self, criteria: FilterCriteria, limit: int) -> List[PropertySearchResult]:
        """
        Search reviewed properties, cheapest first.

        Args:
            criteria: Optional filters; a price range applies only when both bounds are given
            limit: Maximum number of results

        Returns:
            Matching properties with their average rating

        Raises:
            ValidationError: If the limit is outside the allowed range
        """
        if isinstance(limit, bool) or not isinstance(limit, int) or not 1 <= limit <= settings.max_search_limit:
            raise ValidationError(
                f"limit must be between 1 and {settings.max_search_limit}",
                field_errors=[{"field": "limit", "message": "Out of range"}]
            )

        if criteria.has_partial_price_range:
            logger.info(
                "Ignoring partial price range",
                extra={
                    "minimum_price_per_night": criteria.minimum_price_per_night,
                    "maximum_price_per_night": criteria.maximum_price_per_night,
                }
            )

        rows = await self.property_repo.search(criteria, limit)
        results = [PropertySearchResult.model_validate(row) for row in rows]

        logger.info(f"Property search returned {len(results)} results")
        return results
