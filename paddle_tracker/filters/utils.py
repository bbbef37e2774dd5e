"""
Shared geodesy helpers for the fix filters.

Both distance functions take (lat1, lon1, lat2, lon2) in degrees and return
meters, so either can be plugged into DistanceAccumulator.
"""

import math

EARTH_RADIUS_M = 6371000  # mean Earth radius


def haversine_distance(lat1, lon1, lat2, lon2):
    """
    Great-circle distance between two coordinates in meters.

    Args:
        lat1, lon1: First coordinate (latitude, longitude in degrees)
        lat2, lon2: Second coordinate (latitude, longitude in degrees)

    Returns:
        float: Distance in meters
    """
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    delta_phi = math.radians(lat2 - lat1)
    delta_lambda = math.radians(lon2 - lon1)

    a = (math.sin(delta_phi/2) ** 2 +
         math.cos(phi1) * math.cos(phi2) * math.sin(delta_lambda/2) ** 2)
    # Rounding can push `a` a hair past 1.0 for near-antipodal points
    a = min(1.0, a)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1-a))

    return EARTH_RADIUS_M * c


def latlon_to_meters(lat, lon, origin_lat, origin_lon):
    """
    Convert lat/lon to local x/y meters from origin using equirectangular projection.

    Args:
        lat, lon: Target coordinate (latitude, longitude in degrees)
        origin_lat, origin_lon: Origin coordinate (latitude, longitude in degrees)

    Returns:
        tuple: (x, y) in meters (local Cartesian coordinates)
    """
    origin_lat_rad = math.radians(origin_lat)

    x = EARTH_RADIUS_M * math.radians(lon - origin_lon) * math.cos(origin_lat_rad)
    y = EARTH_RADIUS_M * math.radians(lat - origin_lat)

    return x, y


def equirectangular_distance(lat1, lon1, lat2, lon2):
    """
    Flat-plane distance in meters, projected around the first coordinate.

    Cheaper than haversine and within centimeters of it for the few meters
    between consecutive fixes.
    """
    x, y = latlon_to_meters(lat2, lon2, lat1, lon1)
    return math.hypot(x, y)

