from __future__ import annotations

from math import atan2, cos, degrees, radians, sin, sqrt

EARTH_RADIUS_KM = 6371.0


def haversine_distance(
    latitude_1: float,
    longitude_1: float,
    latitude_2: float,
    longitude_2: float,
) -> float:
    """Return the haversine distance in kilometers between two coordinates."""
    lat1_rad = radians(latitude_1)
    lon1_rad = radians(longitude_1)
    lat2_rad = radians(latitude_2)
    lon2_rad = radians(longitude_2)

    diff_lat = lat2_rad - lat1_rad
    diff_lon = lon2_rad - lon1_rad

    a = sin(diff_lat / 2) ** 2 + cos(lat1_rad) * cos(lat2_rad) * sin(diff_lon / 2) ** 2
    c = 2 * atan2(sqrt(a), sqrt(1 - a))

    return EARTH_RADIUS_KM * c


def haversine_distance_meters(
    latitude_1: float,
    longitude_1: float,
    latitude_2: float,
    longitude_2: float,
) -> float:
    return haversine_distance(latitude_1, longitude_1, latitude_2, longitude_2) * 1000.0


def bounding_box(
    latitude: float, longitude: float, radius_meters: float, margin: float = 0.05
) -> tuple[float, float, float | None, float | None]:
    """Lat/lon bounds that contain every point within ``radius_meters``.

    The box is widened by ``margin`` so the exact haversine check, not the box,
    decides boundary cases. Longitude bounds are ``None`` when the box would
    wrap the antimeridian or reach a pole.
    """
    angular = degrees((radius_meters / 1000.0) / EARTH_RADIUS_KM) * (1 + margin)
    min_lat = max(latitude - angular, -90.0)
    max_lat = min(latitude + angular, 90.0)

    cos_lat = cos(radians(max(abs(min_lat), abs(max_lat))))
    if cos_lat < 1e-6:
        return min_lat, max_lat, None, None

    lon_delta = angular / cos_lat
    min_lon = longitude - lon_delta
    max_lon = longitude + lon_delta
    if min_lon < -180.0 or max_lon > 180.0:
        return min_lat, max_lat, None, None
    return min_lat, max_lat, min_lon, max_lon


def eta_minutes(distance_meters: float, speed_kmh: float) -> int:
    return round((distance_meters / 1000.0) / speed_kmh * 60)
