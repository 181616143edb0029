"""
Property search engine: parse, compose, execute once, format.
"""

import logging
from typing import List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from student_housing.search.composer import compose_search_query
from student_housing.search.distance import EARTH_RADIUS_MILES
from student_housing.search.exceptions import StorageUnavailable
from student_housing.search.formatter import SearchResult, format_results
from student_housing.search.predicates import SearchFilter, build_predicates

logger = logging.getLogger(__name__)


class PropertySearchEngine:
    """
    Stateless, request-scoped property search over an async session.
    Every call recomputes against current storage; nothing is cached.
    """

    def __init__(self, db: AsyncSession, earth_radius: float = EARTH_RADIUS_MILES):
        self.db = db
        self.earth_radius = earth_radius

    async def search(self, search_filter: SearchFilter) -> List[SearchResult]:
        """
        Run a search for an already parsed filter.

        Raises:
            StorageUnavailable: If the query fails in the database
        """
        predicates = build_predicates(search_filter)
        query = compose_search_query(predicates, search_filter.origin, self.earth_radius)

        try:
            result = await self.db.execute(query)
            rows = result.mappings().all()
        except (SQLAlchemyError, OSError) as e:
            logger.error(f"Property search failed at the storage layer: {e}")
            raise StorageUnavailable(str(e)) from e

        results = format_results(rows)
        logger.debug(
            f"Property search with {len(predicates)} predicates returned {len(results)} properties"
        )
        return results

