"""
Catalog query parsing.

Turns raw query-string values into a typed ``CatalogQuery`` or a list of
``FieldError`` values. The recognized fields are fixed: ``sort``, ``lat``,
``lng`` and ``radius``.
"""

import math
from dataclasses import dataclass
from typing import List, Mapping, Optional

from pincast_expo.domain.result import Err, Ok, Result
from pincast_expo.domain.value_objects.catalog_sort import CatalogSort
from pincast_expo.domain.value_objects.geo_point import GeoPoint

DEFAULT_RADIUS_METERS = 50_000.0
MAX_RADIUS_METERS = 200_000.0


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str


@dataclass(frozen=True)
class CatalogQuery:
    sort: CatalogSort = CatalogSort.DISTANCE
    origin: Optional[GeoPoint] = None
    radius_meters: float = DEFAULT_RADIUS_METERS

    @classmethod
    def parse(
        cls,
        raw: Mapping[str, Optional[str]],
        default_radius: float = DEFAULT_RADIUS_METERS,
        max_radius: float = MAX_RADIUS_METERS,
    ) -> Result["CatalogQuery", List[FieldError]]:
        errors: List[FieldError] = []

        sort_raw = _blank_to_none(raw.get("sort"))
        sort = CatalogSort.DISTANCE
        if sort_raw is not None:
            try:
                sort = CatalogSort(sort_raw)
            except ValueError:
                errors.append(
                    FieldError(
                        "sort",
                        "Invalid sort option. Valid options are: "
                        + ", ".join(CatalogSort.choices()),
                    )
                )

        radius = default_radius
        radius_raw = _blank_to_none(raw.get("radius"))
        if radius_raw is not None:
            parsed = _to_float(radius_raw)
            if parsed is None:
                errors.append(FieldError("radius", "Radius must be a valid number"))
            elif parsed <= 0:
                errors.append(FieldError("radius", "Radius must be greater than 0"))
            else:
                radius = parsed
        radius = min(radius, max_radius)

        origin = None
        if sort.requires_origin() and not errors:
            origin = _parse_origin(raw, errors)

        if errors:
            return Err(errors)
        return Ok(cls(sort=sort, origin=origin, radius_meters=radius))


def _parse_origin(
    raw: Mapping[str, Optional[str]], errors: List[FieldError]
) -> Optional[GeoPoint]:
    lat_raw = _blank_to_none(raw.get("lat"))
    lng_raw = _blank_to_none(raw.get("lng"))
    if lat_raw is None or lng_raw is None:
        errors.append(
            FieldError(
                "lat", "Latitude and longitude are required when using distance sort"
            )
        )
        return None

    lat = _to_float(lat_raw)
    lng = _to_float(lng_raw)
    if lat is None or lng is None:
        errors.append(
            FieldError("lat", "Latitude and longitude must be valid numbers")
        )
        return None

    point = GeoPoint(longitude=lng, latitude=lat)
    if not point.has_valid_latitude():
        errors.append(FieldError("lat", "Latitude must be between -90 and 90"))
        return None
    if not point.has_valid_longitude():
        errors.append(FieldError("lng", "Longitude must be between -180 and 180"))
        return None
    return point


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def _to_float(value: str) -> Optional[float]:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number
