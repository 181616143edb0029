"""
Property listing API endpoints for search, retrieval, creation, deletion and flyers.
Search parameters arrive as raw strings so malformed values surface as INVALID_FILTER.
"""

from fastapi import APIRouter, Depends, status, Query, Path, Response
from typing import Optional, List

from student_housing.services.property import PropertyService
from student_housing.schemas.property import (
    PropertyCreate,
    SearchResultResponse,
    UniversityListResponse
)
from student_housing.utils.dependencies import get_property_service
from student_housing.schemas.error import (
    get_crud_error_responses,
    get_error_responses,
    get_search_error_responses
)


router = APIRouter(prefix="/properties", tags=["Properties"])


@router.get(
    "",
    response_model=List[SearchResultResponse],
    status_code=status.HTTP_200_OK,
    summary="Search properties",
    description="Filter listings by type, price, bedrooms, university and distance from a point",
    responses=get_search_error_responses()
)
async def search_properties(
    type: Optional[str] = Query(None, description="Listing type: rent, sale or all"),
    min_price: Optional[str] = Query(None, alias="minPrice", description="Minimum price, inclusive"),
    max_price: Optional[str] = Query(None, alias="maxPrice", description="Maximum price, inclusive"),
    bedrooms: Optional[str] = Query(None, description="Minimum number of bedrooms, or 'any'"),
    university: Optional[str] = Query(None, description="Exact university name, or 'any'"),
    latitude: Optional[str] = Query(None, description="Reference point latitude"),
    longitude: Optional[str] = Query(None, description="Reference point longitude"),
    max_distance: Optional[str] = Query(
        None,
        alias="maxDistance",
        description="Maximum distance in miles from the reference point"
    ),
    property_service: PropertyService = Depends(get_property_service)
) -> List[SearchResultResponse]:
    """
    Search properties.

    With a reference point, results are ordered nearest first and carry a
    distance in miles; otherwise newest listings come first.
    """
    raw = {
        "type": type,
        "minPrice": min_price,
        "maxPrice": max_price,
        "bedrooms": bedrooms,
        "university": university,
        "latitude": latitude,
        "longitude": longitude,
        "maxDistance": max_distance,
    }

    results = await property_service.search_properties(raw)
    return [SearchResultResponse.model_validate(result) for result in results]


@router.get(
    "/universities",
    response_model=UniversityListResponse,
    status_code=status.HTTP_200_OK,
    summary="List universities",
    description="Distinct universities that have at least one listing, in ascending order",
    responses=get_error_responses(500, 503)
)
async def list_universities(
    property_service: PropertyService = Depends(get_property_service)
) -> UniversityListResponse:
    universities = await property_service.list_universities()
    return UniversityListResponse(universities=universities)


@router.get(
    "/{property_id}",
    response_model=SearchResultResponse,
    status_code=status.HTTP_200_OK,
    summary="Get property details",
    description="Get a single listing with its images in display order",
    responses=get_error_responses(404, 500, 503)
)
async def get_property(
    property_id: int = Path(..., ge=1, description="Property ID"),
    property_service: PropertyService = Depends(get_property_service)
) -> SearchResultResponse:
    """
    Get detailed information about a specific property.

    Raises:
        PropertyNotFoundError: If property doesn't exist
    """
    result = await property_service.get_property(property_id)
    return SearchResultResponse.model_validate(result)


@router.get(
    "/{property_id}/flyer",
    response_class=Response,
    status_code=status.HTTP_200_OK,
    summary="Download listing flyer",
    description="Render a printable PDF flyer for a listing",
    responses={
        200: {"content": {"application/pdf": {}}, "description": "PDF flyer"},
        **get_error_responses(404, 500, 503)
    }
)
async def download_flyer(
    property_id: int = Path(..., ge=1, description="Property ID"),
    property_service: PropertyService = Depends(get_property_service)
) -> Response:
    pdf = await property_service.build_flyer(property_id)
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="property-{property_id}-flyer.pdf"'}
    )


@router.post(
    "",
    response_model=SearchResultResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create new property",
    description="Create a listing together with its ordered images. Nothing is stored if any part fails.",
    responses=get_crud_error_responses()
)
async def create_property(
    property_data: PropertyCreate,
    property_service: PropertyService = Depends(get_property_service)
) -> SearchResultResponse:
    """
    Create a new property listing.

    Args:
        property_data: Property creation data with image references
        property_service: Property service instance

    Returns:
        Created property with its images

    Raises:
        ValidationError: If property data is invalid
        StorageUnavailableError: If the listing could not be stored
    """
    result = await property_service.create_property(property_data)
    return SearchResultResponse.model_validate(result)


@router.delete(
    "/{property_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete property",
    description="Delete a listing and its images",
    responses=get_error_responses(404, 500, 503)
)
async def delete_property(
    property_id: int = Path(..., ge=1, description="Property ID"),
    property_service: PropertyService = Depends(get_property_service)
) -> Response:
    await property_service.delete_property(property_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
