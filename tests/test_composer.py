"""
Tests for search query composition.
Queries are compiled to SQL text; execution is covered by the repository tests.
"""

import pytest
from sqlalchemy.dialects import postgresql, sqlite

from student_housing.models.property import PropertyType
from student_housing.search import (
    Coordinate,
    InvalidFilter,
    Operator,
    Predicate,
    PredicateField,
    SearchFilter,
    build_predicates,
    compose_search_query,
)
from student_housing.search.composer import render_predicate


def compile_sql(query, dialect=None) -> str:
    return str(query.compile(dialect=dialect or sqlite.dialect()))


class TestComposeSearchQuery:
    """Test the shape of the composed query."""

    def test_left_join_keeps_properties_without_images(self):
        sql = compile_sql(compose_search_query([]))

        assert "FROM properties LEFT OUTER JOIN property_images" in sql
        assert "property_images.property_id = properties.id" in sql

    def test_no_predicates_has_no_where_clause(self):
        assert "WHERE" not in compile_sql(compose_search_query([]))

    def test_selected_columns(self):
        query = compose_search_query([])
        names = [column.name for column in query.selected_columns]

        for name in ("id", "price", "bedrooms", "bathrooms", "sqft", "address", "description",
                     "type", "near_university", "latitude", "longitude", "created_at"):
            assert name in names
        assert names[-3:] == ["image_url", "image_order", "distance"]

    def test_recency_ordering_without_origin(self):
        sql = compile_sql(compose_search_query([]))
        order_by = sql.split("ORDER BY", 1)[1]

        assert "properties.created_at DESC, properties.id DESC" in order_by
        assert "property_images.display_order ASC, property_images.id ASC" in order_by

    def test_distance_absent_without_origin(self):
        sql = compile_sql(compose_search_query([]))
        assert "NULL AS distance" in sql
        assert "asin" not in sql.lower()

    def test_distance_ordering_with_origin(self):
        query = compose_search_query([], origin=Coordinate(47.6555, -122.3032))
        sql = compile_sql(query)
        order_by = sql.split("ORDER BY", 1)[1]

        assert "AS distance" in sql
        assert "IS NULL" in order_by
        assert "ASC, properties.id ASC" in order_by
        assert "created_at" not in order_by
        assert order_by.rstrip().endswith("property_images.display_order ASC, property_images.id ASC")

    def test_origin_without_radius_filters_nothing(self):
        query = compose_search_query([], origin=Coordinate(47.6555, -122.3032))
        assert "WHERE" not in compile_sql(query)

    def test_predicates_are_combined_with_and(self):
        search_filter = SearchFilter(
            type=PropertyType.RENT,
            min_price=1000,
            max_price=3000,
            bedrooms=2,
            university="University of Washington",
        )
        sql = compile_sql(compose_search_query(build_predicates(search_filter)))
        where = sql.split("WHERE", 1)[1].split("ORDER BY", 1)[0]

        assert "properties.type = ?" in where
        assert "properties.price >= ?" in where
        assert "properties.price <= ?" in where
        assert "properties.bedrooms >= ?" in where
        assert "properties.near_university = ?" in where
        assert where.count(" AND ") == 4

    def test_values_are_bound_not_inlined(self):
        predicates = [Predicate(PredicateField.UNIVERSITY, Operator.EQ, "O'Brien College")]
        compiled = compose_search_query(predicates).compile(dialect=sqlite.dialect())

        assert "O'Brien" not in str(compiled)
        assert "O'Brien College" in compiled.params.values()

    def test_radius_predicate_uses_distance(self):
        search_filter = SearchFilter(origin=Coordinate(47.6555, -122.3032), max_distance=3.0)
        sql = compile_sql(compose_search_query(build_predicates(search_filter), search_filter.origin))
        where = sql.split("WHERE", 1)[1].split("ORDER BY", 1)[0]

        assert "asin" in where.lower()
        assert "<= ?" in where

    def test_compiles_for_postgresql(self):
        query = compose_search_query([], origin=Coordinate(47.6555, -122.3032))
        sql = compile_sql(query, postgresql.dialect())

        assert "LEFT OUTER JOIN property_images" in sql
        assert "radians" in sql


class TestRenderPredicate:
    """Test rendering of single predicates."""

    def test_distance_predicate_requires_reference_point(self):
        predicate = Predicate(PredicateField.DISTANCE, Operator.LE, 5.0)

        with pytest.raises(InvalidFilter) as exc_info:
            render_predicate(predicate, None)
        assert exc_info.value.field == "maxDistance"

    @pytest.mark.parametrize("operator, symbol", [
        (Operator.EQ, "="),
        (Operator.GE, ">="),
        (Operator.LE, "<="),
    ])
    def test_operators(self, operator, symbol):
        condition = render_predicate(Predicate(PredicateField.BEDROOMS, operator, 2), None)
        assert f"properties.bedrooms {symbol}" in str(condition.compile(dialect=sqlite.dialect()))
