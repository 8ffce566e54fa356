"""Great-circle bearing and distance between Maidenhead grid squares."""

import math
from dataclasses import dataclass
from typing import Any

from .coords import grid_to_latlon, round_half_away
from .grid import Side, ValidationError


EARTH_RADIUS_KM = 6371.0
KM_TO_MILES = 0.621371
EARTH_CIRCUMFERENCE_KM = 2 * math.pi * EARTH_RADIUS_KM

BEARING_PLACES = 1


@dataclass(frozen=True)
class Location:
    """Bearings and distances between two grid squares.

    The grid squares are echoed exactly as given, not normalized.
    """

    local_grid_square: str
    remote_grid_square: str
    short_path_bearing: float
    long_path_bearing: float
    short_path_distance_km: int
    short_path_distance_miles: int
    long_path_distance_km: int
    long_path_distance_miles: int

    def to_dict(self) -> dict[str, Any]:
        """Serializable form using the established JSON field names."""
        return {
            'localGridSquare': self.local_grid_square,
            'remoteGridSquare': self.remote_grid_square,
            'short_path_bearing': self.short_path_bearing,
            'long_path_bearing': self.long_path_bearing,
            'short_path_distance_km': self.short_path_distance_km,
            'short_path_distance_miles': self.short_path_distance_miles,
            'long_path_distance_km': self.long_path_distance_km,
            'long_path_distance_miles': self.long_path_distance_miles,
        }


def calc_bearing(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Calculate initial bearing from point 1 to point 2 in degrees.

    Args:
        lat1, lon1: Starting point latitude and longitude
        lat2, lon2: Ending point latitude and longitude

    Returns:
        Bearing in degrees [0, 360), rounded to 0.1
    """
    lat1, lon1, lat2, lon2 = map(math.radians, [lat1, lon1, lat2, lon2])
    dlon = lon2 - lon1
    y = math.sin(dlon) * math.cos(lat2)
    x = math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(dlon)
    bearing = math.degrees(math.atan2(y, x))
    if bearing < 0:
        bearing += 360
    return _wrap_bearing(round_half_away(bearing, BEARING_PLACES))


def _wrap_bearing(bearing: float) -> float:
    # 359.96 rounds up to 360.0
    return 0.0 if bearing >= 360 else bearing


def calc_distance_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Calculate great-circle (Haversine) distance between two points in kilometers.

    Args:
        lat1, lon1: Starting point latitude and longitude
        lat2, lon2: Ending point latitude and longitude

    Returns:
        Distance in kilometers, unrounded
    """
    lat1, lon1, lat2, lon2 = map(math.radians, [lat1, lon1, lat2, lon2])
    dlat = lat2 - lat1
    dlon = lon2 - lon1
    a = math.sin(dlat/2)**2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon/2)**2
    a = min(a, 1.0)  # antipodal points can land a hair above 1
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1-a))
    return EARTH_RADIUS_KM * c


def _km_and_miles(km: float) -> tuple[float, float]:
    # Miles come from the already-rounded km, not the raw distance
    km = math.ceil(km)
    return float(km), float(math.ceil(km * KM_TO_MILES))


def _endpoints(local: str, remote: str) -> tuple[tuple[float, float], tuple[float, float]]:
    try:
        local_coords = grid_to_latlon(local)
    except ValidationError as e:
        raise e.with_side(Side.LOCAL) from e
    try:
        remote_coords = grid_to_latlon(remote)
    except ValidationError as e:
        raise e.with_side(Side.REMOTE) from e
    return local_coords, remote_coords


def short_path_bearing(local: str, remote: str) -> float:
    """Initial great-circle bearing from the local to the remote grid square.

    Args:
        local: Grid square of the local station (6 characters, any case)
        remote: Grid square of the remote station (6 characters, any case)

    Returns:
        Bearing in degrees [0, 360), rounded to 0.1

    Raises:
        ValidationError: Tagged with the side whose grid square is invalid
    """
    (lat1, lon1), (lat2, lon2) = _endpoints(local, remote)
    return calc_bearing(lat1, lon1, lat2, lon2)


def long_path_bearing(local: str, remote: str) -> float:
    """Bearing for the long way round: opposite the short path bearing."""
    try:
        bearing = (short_path_bearing(local, remote) + 180) % 360
    except ValidationError as e:
        raise e.with_context("short path bearing", verb="error calculating") from e
    return _wrap_bearing(round_half_away(bearing, BEARING_PLACES))


def short_path_distance(local: str, remote: str) -> tuple[float, float]:
    """Great-circle distance between two grid squares.

    Args:
        local: Grid square of the local station (6 characters, any case)
        remote: Grid square of the remote station (6 characters, any case)

    Returns:
        Tuple of (km, miles), each rounded up to a whole unit

    Raises:
        ValidationError: Tagged with the side whose grid square is invalid
    """
    (lat1, lon1), (lat2, lon2) = _endpoints(local, remote)
    return _km_and_miles(calc_distance_km(lat1, lon1, lat2, lon2))


def long_path_distance(local: str, remote: str) -> tuple[float, float]:
    """Distance the long way round: circumference minus the short path.

    Returns:
        Tuple of (km, miles), each rounded up to a whole unit
    """
    short_km, _ = short_path_distance(local, remote)
    return _km_and_miles(EARTH_CIRCUMFERENCE_KM - short_km)


def get_location(local: str, remote: str) -> Location:
    """Short and long path bearing and distance between two grid squares.

    Sub-computations run in a fixed order and the first failure is
    re-raised with the name of the step that failed.

    Args:
        local: Grid square of the local station (6 characters, any case)
        remote: Grid square of the remote station (6 characters, any case)

    Returns:
        Location with the input grid squares echoed verbatim

    Raises:
        ValidationError: Tagged with side and failing step
    """
    steps = (
        ("short path bearing", short_path_bearing),
        ("short path distance", short_path_distance),
        ("long path bearing", long_path_bearing),
        ("long path distance", long_path_distance),
    )
    results = []
    for name, step in steps:
        try:
            results.append(step(local, remote))
        except ValidationError as e:
            raise e.with_context(name) from e

    sp_bearing, (sp_km, sp_miles), lp_bearing, (lp_km, lp_miles) = results
    return Location(
        local_grid_square=local,
        remote_grid_square=remote,
        short_path_bearing=sp_bearing,
        long_path_bearing=lp_bearing,
        short_path_distance_km=int(sp_km),
        short_path_distance_miles=int(sp_miles),
        long_path_distance_km=int(lp_km),
        long_path_distance_miles=int(lp_miles),
    )
