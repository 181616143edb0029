"""
Property model for rental and sale listings.
Handles property data with location, pricing, university proximity and image relationships.
"""

from sqlalchemy import String, Text, Integer, Float, Enum as SQLEnum, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship
from student_housing.database import Base
import enum
from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from student_housing.models.image import PropertyImage


class PropertyType(str, enum.Enum):
    """Property type enumeration for rental or sale listings."""
    RENT = "rent"
    SALE = "sale"


class Property(Base):
    """
    Property model for managing rental and sale listings.
    Read-only to the search engine; written through the create-property path only.
    """

    __tablename__ = "properties"

    # Pricing information
    price: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        index=True,
        comment="Listing price (monthly rent or sale price)"
    )

    # Property specifications
    bedrooms: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        index=True,
        comment="Number of bedrooms"
    )

    bathrooms: Mapped[float] = mapped_column(
        Float,
        nullable=False,
        comment="Number of bathrooms, half baths allowed"
    )

    sqft: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="Property area in square feet"
    )

    address: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Street address"
    )

    description: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Free-text listing description"
    )

    type: Mapped[PropertyType] = mapped_column(
        SQLEnum(PropertyType, values_callable=lambda enum_cls: [member.value for member in enum_cls]),
        nullable=False,
        index=True,
        comment="Listing type - rent or sale"
    )

    near_university: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
        index=True,
        comment="University the listing is advertised near"
    )

    # Location information
    latitude: Mapped[Optional[float]] = mapped_column(
        Float,
        nullable=True,
        comment="Property latitude coordinate"
    )

    longitude: Mapped[Optional[float]] = mapped_column(
        Float,
        nullable=True,
        comment="Property longitude coordinate"
    )

    virtual_tour_url: Mapped[Optional[str]] = mapped_column(
        String(500),
        nullable=True,
        comment="Embeddable virtual tour link"
    )

    # Relationships
    images: Mapped[List["PropertyImage"]] = relationship(
        "PropertyImage",
        back_populates="property_rel",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
        order_by="PropertyImage.display_order.asc(), PropertyImage.id.asc()"
    )

    def __repr__(self) -> str:
        """String representation of the property."""
        return f"<Property(id={self.id}, address={self.address[:30]}..., price={self.price})>"

    @property
    def image_urls(self) -> List[str]:
        """Image references in display order."""
        return [image.image_url for image in self.images]

    def validate_price(self) -> None:
        """
        Validate property price.

        Raises:
            ValueError: If price is invalid
        """
        if self.price is None or self.price <= 0:
            raise ValueError("Property price must be greater than 0")

    def validate_rooms(self) -> None:
        """
        Validate bedroom and bathroom counts.

        Raises:
            ValueError: If a count is negative
        """
        if self.bedrooms < 0:
            raise ValueError("Number of bedrooms cannot be negative")

        if self.bathrooms < 0:
            raise ValueError("Number of bathrooms cannot be negative")

    def validate_area(self) -> None:
        """
        Validate property area.

        Raises:
            ValueError: If area is invalid
        """
        if self.sqft <= 0:
            raise ValueError("Property area must be greater than 0")

    def validate_coordinates(self) -> None:
        """
        Validate latitude and longitude coordinates.

        Raises:
            ValueError: If coordinates are invalid or only one is present
        """
        if (self.latitude is None) != (self.longitude is None):
            raise ValueError("Latitude and longitude must be provided together")

        if self.latitude is not None and not (-90 <= self.latitude <= 90):
            raise ValueError("Latitude must be between -90 and 90 degrees")

        if self.longitude is not None and not (-180 <= self.longitude <= 180):
            raise ValueError("Longitude must be between -180 and 180 degrees")

    def validate_all(self) -> None:
        """
        Run all validation checks on the property.

        Raises:
            ValueError: If any validation fails
        """
        self.validate_price()
        self.validate_rooms()
        self.validate_area()
        self.validate_coordinates()

    def to_dict(self, include_images: bool = True) -> dict:
        """
        Convert property to dictionary.

        Args:
            include_images: Whether to include the ordered image references

        Returns:
            Dictionary representation of property
        """
        result = {
            "id": self.id,
            "price": self.price,
            "bedrooms": self.bedrooms,
            "bathrooms": self.bathrooms,
            "sqft": self.sqft,
            "address": self.address,
            "description": self.description,
            "type": self.type.value,
            "near_university": self.near_university,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "virtual_tour_url": self.virtual_tour_url,
            "created_at": self.created_at,
        }

        if include_images:
            result["images"] = self.image_urls

        return result


# Composite index for the recency ordering used when no reference point is given
recency_index = Index(
    'idx_properties_recency',
    Property.created_at.desc(),
    Property.id.desc()
)

# Composite index for type and bedroom filtering with price
type_bedrooms_price_index = Index(
    'idx_properties_type_bedrooms_price',
    Property.type,
    Property.bedrooms,
    Property.price
)

coordinates_index = Index(
    'idx_properties_coordinates',
    Property.latitude,
    Property.longitude
)
