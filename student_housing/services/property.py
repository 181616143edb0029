"""
Property service for listing search, retrieval, creation and flyers.
Translates search core and storage errors into API exceptions.
"""

from typing import Any, List, Mapping
from reportlab.platypus.doctemplate import LayoutError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from student_housing.config import settings
from student_housing.repositories.property import PropertyRepository
from student_housing.schemas.property import PropertyCreate
from student_housing.search import (
    InvalidFilter,
    SearchFilter,
    SearchResult,
    StorageUnavailable,
    parse_filter,
    result_from_property,
)
from student_housing.services.flyer import FlyerService
from student_housing.utils.exceptions import (
    InternalServerError,
    InvalidFilterError,
    PropertyNotFoundError,
    StorageUnavailableError,
    ValidationError,
)
import logging

logger = logging.getLogger(__name__)

STORAGE_ERRORS = (SQLAlchemyError, OSError, StorageUnavailable)


class PropertyService:
    """
    Property service for listing search and management.
    Malformed filters are rejected before storage is touched; storage failures
    surface as StorageUnavailableError and never as a partial result.
    """

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.property_repo = PropertyRepository(db_session, earth_radius=settings.earth_radius_miles)

    def parse_search_filter(self, raw: Mapping[str, Any]) -> SearchFilter:
        """
        Parse raw search parameters.

        Raises:
            InvalidFilterError: If the filter is malformed or inconsistent
        """
        try:
            return parse_filter(raw)
        except InvalidFilter as e:
            logger.info(f"Rejected search filter: {e}")
            raise InvalidFilterError(e.field, e.message)

    async def search_properties(self, raw: Mapping[str, Any]) -> List[SearchResult]:
        """
        Search properties with caller-supplied filter parameters.

        Args:
            raw: Parameters keyed by public name (type, minPrice, maxPrice,
                bedrooms, university, latitude, longitude, maxDistance)

        Returns:
            Ordered search results

        Raises:
            InvalidFilterError: If the filter is malformed or inconsistent
            StorageUnavailableError: If the store cannot be queried
        """
        search_filter = self.parse_search_filter(raw)

        try:
            results = await self.property_repo.search(search_filter)
        except InvalidFilter as e:
            raise InvalidFilterError(e.field, e.message)
        except STORAGE_ERRORS as e:
            logger.error(f"Failed to search properties: {e}")
            raise StorageUnavailableError()

        logger.debug(f"Property search returned {len(results)} results")
        return results

    async def get_property(self, property_id: int) -> SearchResult:
        """
        Get one property by ID.

        Raises:
            PropertyNotFoundError: If no property has this ID
            StorageUnavailableError: If the store cannot be queried
        """
        try:
            property_obj = await self.property_repo.get_property_with_images(property_id)
        except STORAGE_ERRORS as e:
            logger.error(f"Failed to get property {property_id}: {e}")
            raise StorageUnavailableError()

        if property_obj is None:
            raise PropertyNotFoundError(property_id)

        return result_from_property(property_obj)

    async def create_property(self, property_data: PropertyCreate) -> SearchResult:
        """
        Create a property and its images atomically.

        Raises:
            ValidationError: If the property violates model rules
            StorageUnavailableError: If the store cannot be written
        """
        try:
            property_obj = await self.property_repo.create_property_with_images(
                property_data.property_fields(),
                property_data.images
            )
        except ValueError as e:
            raise ValidationError(str(e))
        except STORAGE_ERRORS as e:
            logger.error(f"Failed to create property: {e}")
            raise StorageUnavailableError()

        return result_from_property(property_obj)

    async def delete_property(self, property_id: int) -> None:
        """
        Delete a property and its images.

        Raises:
            PropertyNotFoundError: If no property has this ID
        """
        try:
            deleted = await self.property_repo.delete_property(property_id)
        except STORAGE_ERRORS as e:
            logger.error(f"Failed to delete property {property_id}: {e}")
            raise StorageUnavailableError()

        if not deleted:
            raise PropertyNotFoundError(property_id)

    async def list_universities(self) -> List[str]:
        """Distinct universities with listings, ascending."""
        try:
            return await self.property_repo.get_universities()
        except STORAGE_ERRORS as e:
            logger.error(f"Failed to list universities: {e}")
            raise StorageUnavailableError()

    async def build_flyer(self, property_id: int) -> bytes:
        """
        Render the PDF flyer for one property.

        Raises:
            PropertyNotFoundError: If no property has this ID
            InternalServerError: If the listing cannot be laid out on a page
        """
        result = await self.get_property(property_id)

        try:
            return FlyerService(page_size=settings.flyer_page_size).render(result)
        except LayoutError as e:
            logger.error(f"Failed to lay out flyer for property {property_id}: {e}")
            raise InternalServerError(f"Flyer for property {property_id} could not be rendered")
