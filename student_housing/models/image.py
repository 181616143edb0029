"""
PropertyImage model for listing image references.
Stores an image URL or path and its position in the listing gallery.
"""

from sqlalchemy import String, Integer, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship
from student_housing.database import Base
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from student_housing.models.property import Property

# Image references are joined with this separator in aggregated search rows
IMAGE_SEPARATOR = ","


class PropertyImage(Base):
    """
    PropertyImage model owned by exactly one Property.
    Deleting the parent property deletes its images.
    """

    __tablename__ = "property_images"

    # Property relationship
    property_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("properties.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="ID of the property this image belongs to"
    )

    image_url: Mapped[str] = mapped_column(
        String(500),
        nullable=False,
        comment="Image URL or relative path"
    )

    display_order: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        comment="Display order for the gallery, not necessarily contiguous"
    )

    # Relationships
    property_rel: Mapped["Property"] = relationship(
        "Property",
        back_populates="images"
    )

    def __repr__(self) -> str:
        """String representation of the property image."""
        return f"<PropertyImage(id={self.id}, property_id={self.property_id}, order={self.display_order})>"

    def validate_display_order(self) -> None:
        """
        Validate display order.

        Raises:
            ValueError: If display order is negative
        """
        if self.display_order is not None and self.display_order < 0:
            raise ValueError("Display order cannot be negative")

    def validate_image_url(self) -> None:
        """
        Validate the image reference.

        Raises:
            ValueError: If the reference contains the aggregate separator
        """
        if self.image_url is not None and IMAGE_SEPARATOR in self.image_url:
            raise ValueError(f"Image references cannot contain '{IMAGE_SEPARATOR}'")


# Index for gallery lookups by property in display order
property_images_order_index = Index(
    'idx_property_images_property_order',
    PropertyImage.property_id,
    PropertyImage.display_order.asc()
)
