"""Maidenhead grid square coordinates, bearings and distances."""

from .grid import ValidationError, ValidationKind, Side, normalize_grid, validate_grid, is_valid_grid
from .coords import latitude_of, longitude_of, grid_to_latlon
from .geo_utils import (
    Location,
    calc_bearing,
    calc_distance_km,
    short_path_bearing,
    long_path_bearing,
    short_path_distance,
    long_path_distance,
    get_location,
)
from .config import config_search_paths, load_config, save_config, home_grid, location_from_home

__all__ = [
    # Grid validation
    'ValidationError',
    'ValidationKind',
    'Side',
    'normalize_grid',
    'validate_grid',
    'is_valid_grid',
    # Coordinates
    'latitude_of',
    'longitude_of',
    'grid_to_latlon',
    # Bearing and distance
    'Location',
    'calc_bearing',
    'calc_distance_km',
    'short_path_bearing',
    'long_path_bearing',
    'short_path_distance',
    'long_path_distance',
    'get_location',
    # Config
    'config_search_paths',
    'load_config',
    'save_config',
    'home_grid',
    'location_from_home',
]
