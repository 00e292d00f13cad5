"""
Property repository for listing creation and filtered search.
Search runs through the positional-parameter data store using the plan
produced by the property search query builder.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from lightbnb.repositories.base import BaseRepository
from lightbnb.models.property import Property
from lightbnb.utils.query_builder import FilterCriteria, build_property_search_query
from typing import Optional, List, Dict, Any
import logging

logger = logging.getLogger(__name__)


class PropertyRepository(BaseRepository[Property]):
    """
    Repository for property listings.
    """

    def __init__(self, db: AsyncSession, data_store: Optional[Any] = None):
        super().__init__(Property, db)
        self.data_store = data_store

    async def create_property(self, property_data: Dict[str, Any]) -> Property:
        """
        Create a new property listing.

        Args:
            property_data: Column values, including owner_id

        Returns:
            Created property instance
        """
        created_property = await self.create(property_data)
        logger.info(f"Created property: {created_property.title} (ID: {created_property.id})")
        return created_property

    async def search(self, criteria: FilterCriteria, limit: int) -> List[Dict[str, Any]]:
        """
        Search reviewed properties matching the criteria.

        Args:
            criteria: Optional search filters
            limit: Maximum number of rows

        Returns:
            Property rows with an ``average_rating`` column, cheapest first

        Raises:
            RuntimeError: If the repository was built without a data store
        """
        if self.data_store is None:
            raise RuntimeError("PropertyRepository.search requires a data store")

        plan = build_property_search_query(criteria, limit)
        logger.debug(f"Property search with {len(plan.clauses)} predicates: {plan.params}")

        rows = await self.data_store.execute(plan.template, plan.params)
        logger.debug(f"Property search returned {len(rows)} rows")
        return rows
