"""
Geographic point value object (WGS84).
"""

from dataclasses import dataclass


MIN_LATITUDE = -90.0
MAX_LATITUDE = 90.0
MIN_LONGITUDE = -180.0
MAX_LONGITUDE = 180.0


@dataclass(frozen=True)
class GeoPoint:
    """A (longitude, latitude) pair in decimal degrees."""

    longitude: float
    latitude: float

    def has_valid_latitude(self) -> bool:
        return MIN_LATITUDE <= self.latitude <= MAX_LATITUDE

    def has_valid_longitude(self) -> bool:
        return MIN_LONGITUDE <= self.longitude <= MAX_LONGITUDE

    def is_valid(self) -> bool:
        return self.has_valid_latitude() and self.has_valid_longitude()

    def as_tuple(self) -> tuple[float, float]:
        """Return the point as ``(longitude, latitude)``, GeoJSON order."""
        return (self.longitude, self.latitude)
