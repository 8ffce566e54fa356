"""Station configuration loader for the Maidenhead tools."""

import sys
import yaml
from pathlib import Path
from typing import Any

from .geo_utils import Location, get_location
from .grid import Side, ValidationError, normalize_grid, validate_grid


DEFAULT_CONFIG = {
    "callsign": "N0CALL",
    "grid": "JN58td",  # Home station grid square (6 characters)
}

# Per-checkout config, gitignored
LOCAL_CONFIG_PATH = Path(__file__).parent.parent / "local" / "config" / "config.yaml"


def config_search_paths(config_path: Path | None = None) -> list[Path]:
    """Candidate config files, highest priority first.

    1. Provided path
    2. local/config/config.yaml
    3. ~/.config/maidenhead/config.yaml (XDG standard)
    """
    paths = [config_path] if config_path else []
    paths.append(LOCAL_CONFIG_PATH)
    paths.append(Path.home() / ".config" / "maidenhead" / "config.yaml")
    return paths


def _read_yaml(path: Path) -> dict[str, Any] | None:
    # None means unreadable; an empty file reads as {}
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        print(f"Warning: Could not load config from {path}: {e}", file=sys.stderr)
        return None
    return data if isinstance(data, dict) else {}


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load station configuration, layered over DEFAULT_CONFIG.

    The first existing, readable file from config_search_paths() wins.
    Unreadable files are reported and skipped.

    Args:
        config_path: Optional path to config file

    Returns:
        Dict with configuration values
    """
    for path in config_search_paths(config_path):
        if not path.exists():
            continue
        user_config = _read_yaml(path)
        if user_config is not None:
            return {**DEFAULT_CONFIG, **user_config}

    return DEFAULT_CONFIG.copy()


def save_config(config: dict[str, Any], config_path: Path | None = None) -> Path:
    """Write station configuration as YAML.

    The home grid is checked before anything touches the disk and is
    stored in canonical AA99aa form, so a saved config always loads
    into a usable home_grid().

    Args:
        config: Configuration dict to save
        config_path: Optional path to save to (defaults to local/config/config.yaml)

    Returns:
        Path the config was written to

    Raises:
        ValidationError: If config has an invalid "grid"
    """
    config = dict(config)
    if "grid" in config:
        config["grid"] = home_grid(config)

    if config_path is None:
        config_path = LOCAL_CONFIG_PATH
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, 'w') as f:
        yaml.dump(config, f, default_flow_style=False, sort_keys=False)
    return config_path


def home_grid(config: dict[str, Any] | None = None) -> str:
    """Configured home grid square, normalized and validated.

    Args:
        config: Config dict (loaded with load_config() if omitted)

    Returns:
        Grid square in canonical AA99aa form

    Raises:
        ValidationError: Tagged as local if the configured grid is invalid
    """
    if config is None:
        config = load_config()
    grid = normalize_grid(str(config.get("grid", "")))
    try:
        validate_grid(grid)
    except ValidationError as e:
        raise e.with_side(Side.LOCAL) from e
    return grid


def location_from_home(remote: str, config: dict[str, Any] | None = None) -> Location:
    """Bearing and distance from the configured home grid to a remote grid."""
    return get_location(home_grid(config), remote)
