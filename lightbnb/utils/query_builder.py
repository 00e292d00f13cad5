"""
Property search query builder.

Turns an optional set of search filters and a row limit into a single
parameterized statement. Placeholders are 1-indexed and positional (``$1``,
``$2``, ...) and every value travels in the parameter list, never in the
statement text.
"""

from dataclasses import dataclass
from typing import Any, List, Optional, Tuple


AVERAGE_RATING = "avg(property_reviews.rating)"

SEARCH_PREFIX = (
    f"SELECT properties.*, {AVERAGE_RATING} AS average_rating "
    "FROM properties "
    "JOIN property_reviews ON properties.id = property_reviews.property_id"
)

SEARCH_SUFFIX = "GROUP BY properties.id ORDER BY properties.cost_per_night LIMIT {limit}"


@dataclass(frozen=True)
class FilterCriteria:
    """Optional property search filters. Every field is independent."""

    city: Optional[str] = None
    owner_id: Optional[Any] = None
    minimum_price_per_night: Optional[float] = None
    maximum_price_per_night: Optional[float] = None
    minimum_rating: Optional[float] = None

    @property
    def has_price_range(self) -> bool:
        """Both price bounds are required for the price filter to apply."""
        return _present(self.minimum_price_per_night) and _present(self.maximum_price_per_night)

    @property
    def has_partial_price_range(self) -> bool:
        return (
            _present(self.minimum_price_per_night) != _present(self.maximum_price_per_night)
        )


@dataclass(frozen=True)
class QueryPlan:
    """A statement template and the ordered values for its placeholders."""

    template: str
    params: Tuple[Any, ...]
    clauses: Tuple[str, ...] = ()


def _present(value: Any) -> bool:
    return value is not None and value != ""


class _PlanBuilder:
    """Accumulates parameters and predicate clauses in emission order."""

    def __init__(self):
        self.params: List[Any] = []
        self.clauses: List[str] = []

    def bind(self, value: Any) -> str:
        self.params.append(value)
        return f"${len(self.params)}"

    def where(self, predicate: str) -> None:
        keyword = "AND" if self.clauses else "WHERE"
        self.clauses.append(f"{keyword} {predicate}")


def build_property_search_query(criteria: FilterCriteria, limit: int) -> QueryPlan:
    """
    Build the property search statement for the given filters.

    Filters are applied in a fixed order: city, owner, price range, minimum
    rating. The first applied filter opens with WHERE and every later one
    with AND. The limit always occupies the last placeholder.

    Args:
        criteria: Search filters; absent fields are skipped
        limit: Maximum number of rows, a positive integer

    Returns:
        QueryPlan ready for execution

    Raises:
        ValueError: If limit is not a positive integer
    """
    if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
        raise ValueError(f"Search limit must be a positive integer, got {limit!r}")

    plan = _PlanBuilder()

    if _present(criteria.city):
        plan.where(f"lower(properties.city) LIKE lower({plan.bind(f'%{criteria.city}%')})")

    if _present(criteria.owner_id):
        plan.where(f"properties.owner_id = {plan.bind(criteria.owner_id)}")

    if criteria.has_price_range:
        low = plan.bind(criteria.minimum_price_per_night)
        high = plan.bind(criteria.maximum_price_per_night)
        plan.where(
            f"properties.cost_per_night > {low} AND properties.cost_per_night < {high}"
        )

    if _present(criteria.minimum_rating):
        plan.where(
            "properties.id IN ("
            "SELECT property_reviews.property_id FROM property_reviews "
            "GROUP BY property_reviews.property_id "
            f"HAVING {AVERAGE_RATING} > {plan.bind(criteria.minimum_rating)})"
        )

    suffix = SEARCH_SUFFIX.format(limit=plan.bind(limit))
    template = " ".join([SEARCH_PREFIX, *plan.clauses, suffix])

    return QueryPlan(template=template, params=tuple(plan.params), clauses=tuple(plan.clauses))
