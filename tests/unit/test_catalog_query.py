"""
Unit tests for catalog query parsing.
"""

import pytest

from pincast_expo.domain.services.catalog_query import (
    DEFAULT_RADIUS_METERS,
    MAX_RADIUS_METERS,
    CatalogQuery,
)
from pincast_expo.domain.value_objects.catalog_sort import CatalogSort
from pincast_expo.domain.value_objects.geo_point import GeoPoint


def first_error(raw):
    result = CatalogQuery.parse(raw)
    assert result.is_err()
    return result.error[0].message


@pytest.mark.unit
class TestCatalogQueryParse:
    def test_defaults_to_distance_sort(self):
        result = CatalogQuery.parse({"lat": "10", "lng": "20"})

        assert result.is_ok()
        query = result.value
        assert query.sort is CatalogSort.DISTANCE
        assert query.origin == GeoPoint(longitude=20.0, latitude=10.0)
        assert query.radius_meters == DEFAULT_RADIUS_METERS

    def test_distance_without_coordinates(self):
        assert (
            first_error({})
            == "Latitude and longitude are required when using distance sort"
        )
        assert (
            first_error({"sort": "distance", "lat": "10"})
            == "Latitude and longitude are required when using distance sort"
        )

    def test_blank_values_count_as_missing(self):
        assert (
            first_error({"lat": "  ", "lng": ""})
            == "Latitude and longitude are required when using distance sort"
        )

    def test_invalid_sort(self):
        assert (
            first_error({"sort": "rating"})
            == "Invalid sort option. Valid options are: distance, popularity, newest"
        )

    @pytest.mark.parametrize("lat,lng", [("abc", "0"), ("0", "east"), ("nan", "0"), ("inf", "0")])
    def test_non_numeric_coordinates(self, lat, lng):
        assert first_error({"lat": lat, "lng": lng}) == (
            "Latitude and longitude must be valid numbers"
        )

    def test_coordinate_ranges(self):
        assert first_error({"lat": "90.5", "lng": "0"}) == "Latitude must be between -90 and 90"
        assert (
            first_error({"lat": "0", "lng": "-181"})
            == "Longitude must be between -180 and 180"
        )

    def test_radius_must_be_number(self):
        assert first_error({"sort": "popularity", "radius": "far"}) == (
            "Radius must be a valid number"
        )

    @pytest.mark.parametrize("radius", ["0", "-5"])
    def test_radius_must_be_positive(self, radius):
        assert first_error({"sort": "popularity", "radius": radius}) == (
            "Radius must be greater than 0"
        )

    def test_radius_is_clamped(self):
        result = CatalogQuery.parse({"lat": "0", "lng": "0", "radius": "1000000"})
        assert result.value.radius_meters == MAX_RADIUS_METERS

    def test_custom_limits(self):
        result = CatalogQuery.parse(
            {"sort": "newest"}, default_radius=1_000, max_radius=5_000
        )
        assert result.value.radius_meters == 1_000

    @pytest.mark.parametrize("sort", ["popularity", "newest"])
    def test_other_sorts_ignore_origin(self, sort):
        result = CatalogQuery.parse({"sort": sort, "lat": "not-a-number"})

        assert result.is_ok()
        assert result.value.origin is None
