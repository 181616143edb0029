"""
Result formatter for property search.

Collects the flat joined rows produced by the composed query (one per image)
into one SearchResult per property, keeping the row order of properties and
the display order of images.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, Iterable, List, Mapping, Optional

from student_housing.models.image import IMAGE_SEPARATOR
from student_housing.models.property import Property, PropertyType

PROPERTY_FIELDS = (
    "id",
    "price",
    "bedrooms",
    "bathrooms",
    "sqft",
    "address",
    "description",
    "type",
    "near_university",
    "latitude",
    "longitude",
    "virtual_tour_url",
    "created_at",
)

DISTANCE_QUANTUM = Decimal("0.1")


@dataclass
class SearchResult:
    """One property with its ordered image references and optional distance in miles."""
    id: int
    price: int
    bedrooms: int
    bathrooms: float
    sqft: int
    address: str
    description: str
    type: PropertyType
    near_university: Optional[str]
    latitude: Optional[float]
    longitude: Optional[float]
    created_at: Optional[datetime]
    virtual_tour_url: Optional[str] = None
    images: List[str] = field(default_factory=list)
    distance: Optional[float] = None


@dataclass
class _PropertyGroup:
    values: Dict[str, Any]
    distance: Optional[float]
    images: List[tuple] = field(default_factory=list)


def round_distance(distance: Optional[float]) -> Optional[float]:
    """Round miles to one decimal place, halves away from zero as SQL ROUND does."""
    if distance is None:
        return None
    return float(Decimal(str(float(distance))).quantize(DISTANCE_QUANTUM, rounding=ROUND_HALF_UP))


def split_images(aggregate: Optional[str]) -> List[str]:
    """
    Split a comma-joined image aggregate into its ordered references.

    An empty or NULL aggregate yields an empty list, never [""]. Any other
    aggregate splits into exactly one entry per separator-delimited field.
    """
    if not aggregate:
        return []
    return aggregate.split(IMAGE_SEPARATOR)


def join_images(images: Iterable[str]) -> str:
    return IMAGE_SEPARATOR.join(images)


def group_rows(rows: Iterable[Mapping[str, Any]]) -> List[_PropertyGroup]:
    """
    Group joined rows by property id.

    Properties keep their first-seen order. A row whose image_url is NULL
    (the left join of a property without images) contributes no image.
    Rows that already carry an aggregated "images" string are split in place.
    """
    groups: Dict[Any, _PropertyGroup] = {}

    for row in rows:
        property_id = row["id"]
        group = groups.get(property_id)
        if group is None:
            group = _PropertyGroup(
                values={name: row[name] for name in PROPERTY_FIELDS if name in row},
                distance=row.get("distance"),
            )
            groups[property_id] = group

        if "images" in row:
            for image in split_images(row["images"]):
                group.images.append((len(group.images), len(group.images), image))
            continue

        image_url = row.get("image_url")
        if image_url is not None:
            group.images.append((row.get("image_order") or 0, len(group.images), image_url))

    return list(groups.values())


def format_group(group: _PropertyGroup) -> SearchResult:
    """Convert one property group into a SearchResult."""
    values = dict(group.values)
    property_type = values.get("type")
    if property_type is not None and not isinstance(property_type, PropertyType):
        values["type"] = PropertyType(property_type)

    # Stable on arrival order for equal display_order values
    images = [url for _, _, url in sorted(group.images, key=lambda item: (item[0], item[1]))]

    return SearchResult(
        **values,
        images=images,
        distance=round_distance(group.distance),
    )


def format_results(rows: Iterable[Mapping[str, Any]]) -> List[SearchResult]:
    """Format joined search rows into SearchResult records."""
    return [format_group(group) for group in group_rows(rows)]


def result_from_property(property_obj: Property, distance: Optional[float] = None) -> SearchResult:
    """Build a SearchResult from a loaded Property with its images."""
    values = property_obj.to_dict(include_images=False)
    values["type"] = property_obj.type
    return SearchResult(
        **values,
        images=property_obj.image_urls,
        distance=round_distance(distance),
    )
