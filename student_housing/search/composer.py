"""
Query composer for property search.

Builds one SELECT over properties LEFT OUTER JOIN property_images: one row per
(property, image) pair, or a single row with NULL image columns for a property
without images. Rows of one property are contiguous and images follow display
order; the formatter collects them back into one record per property.

Ordering:
    with a reference point    distance ASC (no coordinates last), id ASC
    without a reference point created_at DESC, id DESC (newest first)
"""

from typing import Dict, List, Optional, Sequence

from sqlalchemy import Float, and_, null, select, type_coerce
from sqlalchemy.sql import Select
from sqlalchemy.sql.elements import ColumnElement

from student_housing.models.image import PropertyImage
from student_housing.models.property import Property
from student_housing.search.distance import EARTH_RADIUS_MILES, distance_expression
from student_housing.search.exceptions import InvalidFilter
from student_housing.search.predicates import Coordinate, Operator, Predicate, PredicateField

PROPERTY_COLUMNS = (
    Property.id,
    Property.price,
    Property.bedrooms,
    Property.bathrooms,
    Property.sqft,
    Property.address,
    Property.description,
    Property.type,
    Property.near_university,
    Property.latitude,
    Property.longitude,
    Property.virtual_tour_url,
    Property.created_at,
)

FIELD_COLUMNS: Dict[PredicateField, ColumnElement] = {
    PredicateField.TYPE: Property.type,
    PredicateField.MIN_PRICE: Property.price,
    PredicateField.MAX_PRICE: Property.price,
    PredicateField.BEDROOMS: Property.bedrooms,
    PredicateField.UNIVERSITY: Property.near_university,
}


def _compare(column: ColumnElement, operator: Operator, value) -> ColumnElement:
    if operator is Operator.EQ:
        return column == value
    if operator is Operator.GE:
        return column >= value
    if operator is Operator.LE:
        return column <= value
    raise ValueError(f"Unsupported operator: {operator}")


def render_predicate(predicate: Predicate, distance: Optional[ColumnElement]) -> ColumnElement:
    """
    Render one predicate as a SQL condition.

    Raises:
        InvalidFilter: If a distance predicate is rendered without a reference point
    """
    if predicate.field is PredicateField.DISTANCE:
        if distance is None:
            raise InvalidFilter(
                predicate.field.value,
                "maxDistance requires latitude and longitude",
                predicate.value,
            )
        return _compare(distance, predicate.operator, predicate.value)

    return _compare(FIELD_COLUMNS[predicate.field], predicate.operator, predicate.value)


def compose_search_query(
    predicates: Sequence[Predicate],
    origin: Optional[Coordinate] = None,
    radius: float = EARTH_RADIUS_MILES,
) -> Select:
    """
    Compose the search query for a predicate list and optional reference point.

    Args:
        predicates: Ordered predicates from build_predicates
        origin: Reference point for distance computation and ordering
        radius: Earth radius in miles

    Returns:
        SQLAlchemy Select yielding flat joined rows with columns named after
        the property fields plus image_url, image_order and distance
    """
    distance = None
    if origin is not None:
        distance = distance_expression(origin.latitude, origin.longitude, radius)

    distance_column = (
        distance.label("distance")
        if distance is not None
        else type_coerce(null(), Float).label("distance")
    )

    query = (
        select(
            *PROPERTY_COLUMNS,
            PropertyImage.image_url.label("image_url"),
            PropertyImage.display_order.label("image_order"),
            distance_column,
        )
        .select_from(Property)
        .outerjoin(PropertyImage, PropertyImage.property_id == Property.id)
    )

    conditions: List[ColumnElement] = [render_predicate(p, distance) for p in predicates]
    if conditions:
        query = query.where(and_(*conditions))

    if distance is not None:
        query = query.order_by(distance.is_(None), distance.asc(), Property.id.asc())
    else:
        query = query.order_by(Property.created_at.desc(), Property.id.desc())

    return query.order_by(PropertyImage.display_order.asc(), PropertyImage.id.asc())
