"""
Great-circle distance between two coordinates, in miles.

The same haversine formula is available as a plain function and as a SQL
expression over the property coordinate columns, so it can be selected as a
per-row value and reused as a radius predicate inside one query.
"""

import math
from typing import Optional

from sqlalchemy import Float, and_, case, literal, func, null, type_coerce
from sqlalchemy.sql.elements import ColumnElement

from student_housing.models.property import Property

EARTH_RADIUS_MILES = 3959.0


def haversine_miles(
    lat1: Optional[float],
    lon1: Optional[float],
    lat2: Optional[float],
    lon2: Optional[float],
    radius: float = EARTH_RADIUS_MILES,
) -> Optional[float]:
    """
    Great-circle distance between (lat1, lon1) and (lat2, lon2) in degrees.

    Returns None when any coordinate is missing, never 0 or NaN.
    """
    if lat1 is None or lon1 is None or lat2 is None or lon2 is None:
        return None

    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    # Rounding can push a just past 1 for antipodal points
    return 2 * radius * math.asin(math.sqrt(min(1.0, a)))


def distance_expression(
    latitude: float,
    longitude: float,
    radius: float = EARTH_RADIUS_MILES,
) -> ColumnElement:
    """
    SQL expression for the distance from (latitude, longitude) to each property.

    Evaluates to NULL for properties without coordinates.
    """
    origin_lat = literal(float(latitude), Float)
    origin_lon = literal(float(longitude), Float)

    half_d_lat = func.sin(func.radians(Property.latitude - origin_lat) / 2)
    half_d_lon = func.sin(func.radians(Property.longitude - origin_lon) / 2)
    a = (
        half_d_lat * half_d_lat
        + func.cos(func.radians(origin_lat)) * func.cos(func.radians(Property.latitude))
        * half_d_lon * half_d_lon
    )
    great_circle = 2 * literal(float(radius), Float) * func.asin(func.sqrt(a))

    return type_coerce(
        case(
            (and_(Property.latitude.isnot(None), Property.longitude.isnot(None)), great_circle),
            else_=null(),
        ),
        Float,
    )
