"""Maidenhead grid square to latitude/longitude (center of subsquare)."""

import math

from .grid import normalize_grid, validate_grid


# Grid geometry in degrees
FIELD_WIDTH = 20.0
FIELD_HEIGHT = 10.0
SQUARE_WIDTH = 2.0
SQUARE_HEIGHT = 1.0
SUBSQUARE_WIDTH = 5.0 / 60.0
SUBSQUARE_HEIGHT = 2.5 / 60.0

COORD_PLACES = 5


def round_half_away(value: float, places: int) -> float:
    """Round to a number of decimal places, halves away from zero.

    Python's round() rounds halves to even, which would shift some
    cell centers and bearings by one unit in the last place.
    """
    scale = 10 ** places
    return math.copysign(math.floor(abs(value) * scale + 0.5), value) / scale


def _checked(grid: str) -> str:
    grid = normalize_grid(grid)
    validate_grid(grid)
    return grid


def latitude_of(grid: str) -> float:
    """Latitude of the center of a grid square.

    Field comes from the second character, square from the fourth and
    subsquare from the sixth.

    Args:
        grid: Maidenhead grid square (6 characters, any case)

    Returns:
        Latitude in degrees, rounded to 5 places

    Raises:
        ValidationError: If the grid square is malformed
    """
    grid = _checked(grid)

    lat = (ord(grid[1]) - ord('A')) * FIELD_HEIGHT
    lat += int(grid[3]) * SQUARE_HEIGHT
    lat += (ord(grid[5]) - ord('a')) * SUBSQUARE_HEIGHT
    lat += SUBSQUARE_HEIGHT / 2  # center of subsquare

    return round_half_away(lat - 90.0, COORD_PLACES)


def longitude_of(grid: str) -> float:
    """Longitude of the center of a grid square.

    Field comes from the first character, square from the third and
    subsquare from the fifth.

    Args:
        grid: Maidenhead grid square (6 characters, any case)

    Returns:
        Longitude in degrees, rounded to 5 places

    Raises:
        ValidationError: If the grid square is malformed
    """
    grid = _checked(grid)

    lon = (ord(grid[0]) - ord('A')) * FIELD_WIDTH
    lon += int(grid[2]) * SQUARE_WIDTH
    lon += (ord(grid[4]) - ord('a')) * SUBSQUARE_WIDTH
    lon += SUBSQUARE_WIDTH / 2

    return round_half_away(lon - 180.0, COORD_PLACES)


def grid_to_latlon(grid: str) -> tuple[float, float]:
    """Convert Maidenhead grid to (latitude, longitude) of its center."""
    return latitude_of(grid), longitude_of(grid)
