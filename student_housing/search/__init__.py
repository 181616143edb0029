"""
Dynamic property search: predicate building, query composition, distance
computation and result formatting.
"""

from student_housing.search.distance import EARTH_RADIUS_MILES, haversine_miles, distance_expression
from student_housing.search.exceptions import InvalidFilter, StorageUnavailable
from student_housing.search.predicates import (
    Coordinate,
    Operator,
    Predicate,
    PredicateField,
    SearchFilter,
    build_predicates,
    parse_filter,
)
from student_housing.search.composer import compose_search_query
from student_housing.search.formatter import (
    SearchResult,
    format_results,
    join_images,
    result_from_property,
    split_images,
)
from student_housing.search.engine import PropertySearchEngine

__all__ = [
    "EARTH_RADIUS_MILES",
    "haversine_miles",
    "distance_expression",
    "InvalidFilter",
    "StorageUnavailable",
    "Coordinate",
    "Operator",
    "Predicate",
    "PredicateField",
    "SearchFilter",
    "build_predicates",
    "parse_filter",
    "compose_search_query",
    "SearchResult",
    "format_results",
    "split_images",
    "join_images",
    "result_from_property",
    "PropertySearchEngine",
]
