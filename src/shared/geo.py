"""Great-circle distance primitives shared by delivery and checkout code.

Points are any objects exposing ``latitude`` and ``longitude`` in degrees.
"""

import math

EARTH_RADIUS_KM = 6371.0


def haversine_km(a, b) -> float:
    """Return the haversine distance between two points, rounded to 2 decimals."""
    lat1 = math.radians(a.latitude)
    lat2 = math.radians(b.latitude)
    d_lat = lat2 - lat1
    d_lon = math.radians(b.longitude - a.longitude)

    h = math.sin(d_lat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(d_lon / 2) ** 2
    # Clamp for floating-point drift on antipodal points
    c = 2 * math.asin(math.sqrt(min(1.0, h)))

    return round(EARTH_RADIUS_KM * c, 2)


def within_radius(center, point, radius_km: float) -> bool:
    return haversine_km(center, point) <= radius_km
