"""
Great-circle distance engine.
"""

import math

from pincast_expo.domain.value_objects.geo_point import GeoPoint

EARTH_RADIUS_METERS = 6_371_000.0


def distance_meters(a: GeoPoint, b: GeoPoint) -> float:
    """Haversine distance between two WGS84 points, in meters.

    Pure; NaN coordinates yield NaN.
    """
    lat1 = math.radians(a.latitude)
    lat2 = math.radians(b.latitude)
    d_lat = lat2 - lat1
    d_lng = math.radians(b.longitude - a.longitude)

    h = (
        math.sin(d_lat / 2) ** 2
        + math.cos(lat1) * math.cos(lat2) * math.sin(d_lng / 2) ** 2
    )
    # Rounding can push h marginally above 1 for antipodal points.
    if h > 1.0:
        h = 1.0
    return 2 * EARTH_RADIUS_METERS * math.asin(math.sqrt(h))


def is_within_radius(a: GeoPoint, b: GeoPoint, radius_meters: float) -> bool:
    return distance_meters(a, b) <= radius_meters


def round_meters(value: float) -> int:
    """Round half up to whole meters."""
    return int(math.floor(value + 0.5))
