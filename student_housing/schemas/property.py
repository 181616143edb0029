"""
Pydantic schemas for property requests and responses.
Field names are exposed in camelCase to match the listing web client.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel
from typing import Optional, List
from datetime import datetime
from student_housing.models.image import IMAGE_SEPARATOR
from student_housing.models.property import PropertyType

MAX_IMAGES_PER_PROPERTY = 50


class CamelModel(BaseModel):
    """Base model accepting snake_case or camelCase and emitting camelCase."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class PropertyBase(CamelModel):
    """Base property schema with common fields."""

    price: int = Field(
        ...,
        gt=0,
        description="Monthly rent or sale price",
        examples=[2500]
    )

    bedrooms: int = Field(
        ...,
        ge=0,
        le=50,
        description="Number of bedrooms",
        examples=[2]
    )

    bathrooms: float = Field(
        ...,
        ge=0,
        le=50,
        description="Number of bathrooms, half baths allowed",
        examples=[1.5]
    )

    sqft: int = Field(
        ...,
        gt=0,
        le=1000000,
        description="Property area in square feet",
        examples=[900]
    )

    address: str = Field(
        ...,
        min_length=5,
        max_length=255,
        description="Street address",
        examples=["1100 12th Ave, Seattle, WA 98122"]
    )

    description: str = Field(
        ...,
        min_length=1,
        max_length=5000,
        description="Listing description",
        examples=["Modern apartment with city views and in-unit laundry."]
    )

    type: PropertyType = Field(
        ...,
        description="Listing type - rent or sale",
        examples=["rent"]
    )

    near_university: Optional[str] = Field(
        None,
        max_length=255,
        description="University the listing is near",
        examples=["Seattle University"]
    )

    latitude: Optional[float] = Field(
        None,
        ge=-90,
        le=90,
        description="Property latitude coordinate",
        examples=[47.6097]
    )

    longitude: Optional[float] = Field(
        None,
        ge=-180,
        le=180,
        description="Property longitude coordinate",
        examples=[-122.3172]
    )

    virtual_tour_url: Optional[str] = Field(
        None,
        max_length=500,
        description="Embeddable virtual tour link"
    )

    @field_validator('address', 'description')
    @classmethod
    def validate_text(cls, v):
        """Validate and clean free-text fields."""
        if not v or not v.strip():
            raise ValueError("Value cannot be empty")
        return v.strip()

    @field_validator('near_university')
    @classmethod
    def validate_near_university(cls, v):
        """Store a blank university as absent."""
        if v is None or not v.strip():
            return None
        return v.strip()

    @model_validator(mode='after')
    def validate_coordinates(self):
        """Validate that both coordinates are provided together or both are None."""
        if (self.latitude is None) != (self.longitude is None):
            raise ValueError("Both latitude and longitude must be provided together, or both must be None")
        return self


class PropertyCreate(PropertyBase):
    """Schema for creating a property with its ordered image references."""

    images: List[str] = Field(
        default_factory=list,
        max_length=MAX_IMAGES_PER_PROPERTY,
        description="Image URLs or paths in display order"
    )

    @field_validator('images')
    @classmethod
    def validate_images(cls, v):
        """Reject blank image references and references containing the aggregate separator."""
        cleaned = []
        for image in v:
            if not image or not image.strip():
                raise ValueError("Image references cannot be empty")
            if IMAGE_SEPARATOR in image:
                raise ValueError(f"Image references cannot contain '{IMAGE_SEPARATOR}'")
            cleaned.append(image.strip())
        return cleaned

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "price": 2500,
                "bedrooms": 2,
                "bathrooms": 1,
                "sqft": 900,
                "address": "1100 12th Ave, Seattle, WA 98122",
                "description": "Modern apartment with city views, in-unit laundry, and secure parking.",
                "type": "rent",
                "nearUniversity": "Seattle University",
                "latitude": 47.6097,
                "longitude": -122.3172,
                "images": [
                    "https://example.com/apt1a.jpg",
                    "https://example.com/apt1b.jpg"
                ]
            }
        }
    )

    def property_fields(self) -> dict:
        """Column values for the property row, without images."""
        return self.model_dump(exclude={"images"})


class SearchResultResponse(PropertyBase):
    """Schema for a property search result."""

    id: int = Field(
        ...,
        description="Property unique identifier",
        examples=[1]
    )

    created_at: datetime = Field(
        ...,
        description="Listing creation timestamp"
    )

    images: List[str] = Field(
        default_factory=list,
        description="Image references in display order"
    )

    distance: Optional[float] = Field(
        None,
        description="Distance in miles from the search reference point, one decimal place",
        examples=[1.4]
    )


class UniversityListResponse(CamelModel):
    """Schema for the distinct university list."""

    universities: List[str] = Field(
        ...,
        description="Universities with at least one listing, ascending"
    )
