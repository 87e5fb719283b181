"""
Utility functions for the Walking Route Planner.

Common geometry and formatting helpers used across the project.
"""

import logging
from typing import List, Sequence, Tuple

import numpy as np

logger = logging.getLogger(__name__)

LatLon = Tuple[float, float]


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Calculate the great circle distance between two points on Earth.

    Args:
        lat1, lon1: Coordinates of first point (degrees)
        lat2, lon2: Coordinates of second point (degrees)

    Returns:
        Distance in meters
    """
    # Earth radius in meters
    R = 6371000

    lat1_rad = np.radians(lat1)
    lat2_rad = np.radians(lat2)
    delta_lat = np.radians(lat2 - lat1)
    delta_lon = np.radians(lon2 - lon1)

    a = np.sin(delta_lat / 2) ** 2 + \
        np.cos(lat1_rad) * np.cos(lat2_rad) * np.sin(delta_lon / 2) ** 2
    c = 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))

    return float(R * c)


def calculate_walking_time(distance_m: float, speed_mps: float = 1.4) -> float:
    """
    Calculate walking time for a given distance.

    Args:
        distance_m: Distance in meters
        speed_mps: Walking speed in meters per second (default: 1.4 m/s)

    Returns:
        Time in minutes
    """
    if distance_m <= 0:
        return 0.0

    return distance_m / speed_mps / 60


def validate_coordinates(lat: float, lon: float) -> bool:
    """
    Validate if coordinates are within valid ranges.

    Args:
        lat: Latitude
        lon: Longitude

    Returns:
        True if valid, False otherwise
    """
    if not (-90 <= lat <= 90):
        return False
    if not (-180 <= lon <= 180):
        return False
    return True


def format_distance(distance_m: float) -> str:
    """Format distance for display."""
    if distance_m < 1000:
        return f"{distance_m:.0f} m"
    else:
        return f"{distance_m / 1000:.2f} km"


def format_duration(duration_s: float) -> str:
    """Format a duration in seconds as minutes, or hours and minutes."""
    minutes = int(round(duration_s / 60))
    if minutes < 60:
        return f"{minutes} min"
    hours, minutes = divmod(minutes, 60)
    return f"{hours} h {minutes:02d} min"


def bounding_box(coords: Sequence[LatLon]) -> List[List[float]]:
    """
    Bounding box of a set of points in folium's fit_bounds format.

    Args:
        coords: Sequence of (lat, lon) points

    Returns:
        [[south, west], [north, east]]
    """
    if len(coords) == 0:
        raise ValueError("Cannot compute bounds of an empty coordinate list")

    points = np.asarray(coords, dtype=float)
    south, west = points.min(axis=0)
    north, east = points.max(axis=0)

    return [[float(south), float(west)], [float(north), float(east)]]
