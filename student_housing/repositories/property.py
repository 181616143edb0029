"""
Property repository for listing storage and search.
Wraps the search engine and provides the all-or-nothing create path.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.orm import selectinload
from student_housing.repositories.base import BaseRepository
from student_housing.models.property import Property
from student_housing.models.image import PropertyImage
from student_housing.search import PropertySearchEngine, SearchFilter, SearchResult
from student_housing.search.distance import EARTH_RADIUS_MILES
from typing import Optional, List, Dict, Any, Sequence
import logging

logger = logging.getLogger(__name__)


class PropertyRepository(BaseRepository[Property]):
    """
    Repository for property listings and their ordered images.
    """

    def __init__(self, db: AsyncSession, earth_radius: float = EARTH_RADIUS_MILES):
        super().__init__(Property, db)
        self.search_engine = PropertySearchEngine(db, earth_radius=earth_radius)

    async def search(self, search_filter: SearchFilter) -> List[SearchResult]:
        """
        Search properties with a parsed filter.

        Args:
            search_filter: Parsed search constraints

        Returns:
            Ordered list of search results

        Raises:
            StorageUnavailable: If the query fails at the storage layer
        """
        return await self.search_engine.search(search_filter)

    async def create_property_with_images(
        self,
        property_data: Dict[str, Any],
        image_urls: Sequence[str]
    ) -> Property:
        """
        Insert a property and its images in one transaction.

        Images get display_order equal to their position in image_urls. Either
        the property and every image are committed, or nothing is.

        Args:
            property_data: Property column values
            image_urls: Ordered image references

        Returns:
            Created property with images loaded

        Raises:
            ValueError: If model validation fails
            Exception: If database operation fails
        """
        property_obj = Property(**property_data)
        property_obj.validate_all()
        property_obj.images = [
            PropertyImage(image_url=url, display_order=position)
            for position, url in enumerate(image_urls)
        ]
        for image in property_obj.images:
            image.validate_display_order()
            image.validate_image_url()

        try:
            self.db.add(property_obj)
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to create property at {property_data.get('address')}: {e}")
            raise

        created = await self.get_property_with_images(property_obj.id)
        logger.info(f"Created property: {created.address} (ID: {created.id}, images: {len(image_urls)})")
        return created

    async def get_property_with_images(self, property_id: int) -> Optional[Property]:
        """
        Get property with its images in display order.

        Args:
            property_id: ID of the property

        Returns:
            Property with images loaded or None if not found
        """
        try:
            query = (
                select(Property)
                .options(selectinload(Property.images))
                .where(Property.id == property_id)
                .execution_options(populate_existing=True)
            )

            result = await self.db.execute(query)
            property_obj = result.scalar_one_or_none()

            if property_obj:
                logger.debug(f"Retrieved property with images: {property_id}")

            return property_obj
        except Exception as e:
            logger.error(f"Failed to get property with images {property_id}: {e}")
            raise

    async def delete_property(self, property_id: int) -> bool:
        """
        Delete a property together with its images.

        Returns:
            True if the property existed and was deleted
        """
        property_obj = await self.get_property_with_images(property_id)
        if property_obj is None:
            return False

        try:
            await self.db.delete(property_obj)
            await self.db.commit()
            logger.info(f"Deleted property {property_id}")
            return True
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to delete property {property_id}: {e}")
            raise

    async def get_universities(self) -> List[str]:
        """
        Get the distinct universities listings are advertised near.

        Returns:
            Non-null university names in ascending order
        """
        try:
            query = (
                select(Property.near_university)
                .where(Property.near_university.isnot(None))
                .distinct()
                .order_by(Property.near_university.asc())
            )
            result = await self.db.execute(query)
            universities = list(result.scalars().all())

            logger.debug(f"Retrieved {len(universities)} universities")
            return universities
        except Exception as e:
            logger.error(f"Failed to get universities: {e}")
            raise
