"""
Predicate builder for property search.

Raw caller input (query-string values, all optional) is parsed into a typed
SearchFilter, then turned into an ordered list of Predicate objects. Each
predicate rule carries its own activation condition; the composer renders the
active ones into SQL. Parsing never touches storage, so a malformed filter is
rejected before any query runs.
"""

import enum
import math
from dataclasses import dataclass
from typing import Any, Callable, List, Mapping, Optional, Tuple

from student_housing.models.property import PropertyType
from student_housing.search.exceptions import InvalidFilter

ANY = "any"
ALL = "all"


class PredicateField(str, enum.Enum):
    """Fields a search predicate may constrain."""
    TYPE = "type"
    MIN_PRICE = "minPrice"
    MAX_PRICE = "maxPrice"
    BEDROOMS = "bedrooms"
    UNIVERSITY = "university"
    DISTANCE = "maxDistance"


class Operator(str, enum.Enum):
    EQ = "=="
    GE = ">="
    LE = "<="


@dataclass(frozen=True)
class Coordinate:
    """A point in decimal degrees."""
    latitude: float
    longitude: float


@dataclass(frozen=True)
class SearchFilter:
    """Parsed search constraints. None means the constraint is not applied."""
    type: Optional[PropertyType] = None
    min_price: Optional[int] = None
    max_price: Optional[int] = None
    bedrooms: Optional[int] = None
    university: Optional[str] = None
    origin: Optional[Coordinate] = None
    max_distance: Optional[float] = None

    def __post_init__(self):
        if self.max_distance is not None and self.origin is None:
            raise InvalidFilter(
                PredicateField.DISTANCE.value,
                "maxDistance requires latitude and longitude",
                self.max_distance,
            )
        if (
            self.min_price is not None
            and self.max_price is not None
            and self.min_price > self.max_price
        ):
            raise InvalidFilter(
                PredicateField.MIN_PRICE.value,
                "minPrice cannot be greater than maxPrice",
                self.min_price,
            )


@dataclass(frozen=True)
class Predicate:
    """One condition of the search conjunction and its bound value."""
    field: PredicateField
    operator: Operator
    value: Any


@dataclass(frozen=True)
class PredicateRule:
    """Maps a filter attribute to a predicate; active when the extracted value is not None."""
    field: PredicateField
    operator: Operator
    extract: Callable[[SearchFilter], Any]

    def build(self, search_filter: SearchFilter) -> Optional[Predicate]:
        value = self.extract(search_filter)
        if value is None:
            return None
        return Predicate(self.field, self.operator, value)


PREDICATE_RULES: Tuple[PredicateRule, ...] = (
    PredicateRule(PredicateField.TYPE, Operator.EQ, lambda f: f.type),
    PredicateRule(PredicateField.MIN_PRICE, Operator.GE, lambda f: f.min_price),
    PredicateRule(PredicateField.MAX_PRICE, Operator.LE, lambda f: f.max_price),
    PredicateRule(PredicateField.BEDROOMS, Operator.GE, lambda f: f.bedrooms),
    PredicateRule(PredicateField.UNIVERSITY, Operator.EQ, lambda f: f.university),
    PredicateRule(PredicateField.DISTANCE, Operator.LE, lambda f: f.max_distance),
)


def build_predicates(search_filter: SearchFilter) -> List[Predicate]:
    """
    Build the ordered predicate list for a filter.

    An empty list matches every property.
    """
    predicates = []
    for rule in PREDICATE_RULES:
        predicate = rule.build(search_filter)
        if predicate is not None:
            predicates.append(predicate)
    return predicates


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _parse_int(field: str, value: Any, minimum: int = 0) -> Optional[int]:
    if _is_blank(value):
        return None
    if isinstance(value, bool):
        raise InvalidFilter(field, "must be an integer", value)
    if isinstance(value, int):
        parsed = value
    else:
        try:
            parsed = int(str(value).strip())
        except ValueError:
            raise InvalidFilter(field, "must be an integer", value) from None
    if parsed < minimum:
        raise InvalidFilter(field, f"must be greater than or equal to {minimum}", value)
    return parsed


def _parse_float(field: str, value: Any) -> Optional[float]:
    if _is_blank(value):
        return None
    if isinstance(value, bool):
        raise InvalidFilter(field, "must be a number", value)
    try:
        parsed = float(str(value).strip()) if isinstance(value, str) else float(value)
    except (TypeError, ValueError):
        raise InvalidFilter(field, "must be a number", value) from None
    if not math.isfinite(parsed):
        raise InvalidFilter(field, "must be a finite number", value)
    return parsed


def _parse_type(value: Any) -> Optional[PropertyType]:
    if _is_blank(value):
        return None
    if isinstance(value, PropertyType):
        return value
    normalized = str(value).strip().lower()
    if normalized == ALL:
        return None
    try:
        return PropertyType(normalized)
    except ValueError:
        allowed = ", ".join([ALL] + [member.value for member in PropertyType])
        raise InvalidFilter(PredicateField.TYPE.value, f"must be one of: {allowed}", value) from None


def _parse_optional_any(value: Any) -> Optional[str]:
    if _is_blank(value):
        return None
    text = str(value).strip()
    if text.lower() == ANY:
        return None
    return text


def _parse_origin(latitude: Any, longitude: Any) -> Optional[Coordinate]:
    lat = _parse_float("latitude", latitude)
    lon = _parse_float("longitude", longitude)

    if lat is None and lon is None:
        return None
    if lat is None or lon is None:
        missing = "latitude" if lat is None else "longitude"
        raise InvalidFilter(missing, "latitude and longitude must be provided together")
    if not -90 <= lat <= 90:
        raise InvalidFilter("latitude", "must be between -90 and 90 degrees", latitude)
    if not -180 <= lon <= 180:
        raise InvalidFilter("longitude", "must be between -180 and 180 degrees", longitude)
    return Coordinate(lat, lon)


def parse_filter(raw: Mapping[str, Any]) -> SearchFilter:
    """
    Parse caller-supplied search parameters into a SearchFilter.

    Args:
        raw: Mapping keyed by the public parameter names (type, minPrice,
            maxPrice, bedrooms, university, latitude, longitude, maxDistance)
    Returns:
        Parsed SearchFilter

    Raises:
        InvalidFilter: If any value is unparseable or the combination is inconsistent
    """
    bedrooms = raw.get("bedrooms")
    if isinstance(bedrooms, str) and bedrooms.strip().lower() == ANY:
        bedrooms = None

    max_distance = _parse_float(PredicateField.DISTANCE.value, raw.get("maxDistance"))
    if max_distance is not None and max_distance <= 0:
        raise InvalidFilter(PredicateField.DISTANCE.value, "must be greater than 0", max_distance)

    return SearchFilter(
        type=_parse_type(raw.get("type")),
        min_price=_parse_int(PredicateField.MIN_PRICE.value, raw.get("minPrice")),
        max_price=_parse_int(PredicateField.MAX_PRICE.value, raw.get("maxPrice")),
        bedrooms=_parse_int(PredicateField.BEDROOMS.value, bedrooms),
        university=_parse_optional_any(raw.get("university")),
        origin=_parse_origin(raw.get("latitude"), raw.get("longitude")),
        max_distance=max_distance,
    )
