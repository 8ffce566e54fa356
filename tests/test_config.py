#!/usr/bin/env -S uv run
# /// script
# requires-python = ">=3.10"
# dependencies = [
#   "pyyaml",
#   "pytest",
# ]
# ///
"""Test configuration loading and saving."""

import sys
import tempfile
from pathlib import Path

import pytest
import yaml

# Add repo root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from maidenhead.config import (
    DEFAULT_CONFIG, config_search_paths, load_config, save_config,
    home_grid, location_from_home,
)
from maidenhead.grid import ValidationError, ValidationKind, Side


@pytest.fixture
def fake_home(tmp_path, monkeypatch):
    """Point ~ at an empty directory so no user config is picked up"""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setattr(Path, "home", classmethod(lambda cls: home))
    return home


def test_default_config():
    """Test that default config has required fields."""
    print("Testing DEFAULT_CONFIG:\n")

    for field in ['callsign', 'grid']:
        assert field in DEFAULT_CONFIG, f"Missing required field: {field}"
        print(f"  ✓ {field}: {DEFAULT_CONFIG[field]}")

    assert home_grid(DEFAULT_CONFIG) == DEFAULT_CONFIG['grid']

    print("\n✅ Default config has all required fields!\n")


def test_load_nonexistent(fake_home):
    """Test loading config when file doesn't exist."""
    with tempfile.TemporaryDirectory() as tmpdir:
        config = load_config(Path(tmpdir) / "nonexistent.yaml")
        assert config == DEFAULT_CONFIG


def test_load_does_not_mutate_defaults(fake_home, tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text("grid: FN31pr\n")
    config = load_config(config_path)
    assert config['grid'] == "FN31pr"
    assert DEFAULT_CONFIG['grid'] == "JN58td"


def test_save_and_load(fake_home, tmp_path):
    """Test saving and loading config."""
    test_config = {
        'callsign': 'W1AW',
        'grid': 'FN31pr',
    }

    config_path = tmp_path / "nested" / "test_config.yaml"
    save_config(test_config, config_path)
    assert config_path.exists(), "Config file should exist"

    # Key order is preserved on disk
    assert list(yaml.safe_load(config_path.read_text())) == ['callsign', 'grid']

    loaded = load_config(config_path)
    for key, value in test_config.items():
        assert loaded[key] == value, f"Mismatch on {key}: {loaded[key]} != {value}"


def test_save_normalizes_grid(tmp_path):
    config_path = tmp_path / "config.yaml"
    written = save_config({'callsign': 'W1AW', 'grid': 'fn31PR'}, config_path)
    assert written == config_path
    assert yaml.safe_load(config_path.read_text())['grid'] == 'FN31pr'


def test_save_rejects_invalid_grid(tmp_path):
    """Nothing is written when the home grid is malformed"""
    config_path = tmp_path / "sub" / "config.yaml"
    with pytest.raises(ValidationError) as exc:
        save_config({'grid': 'FN31'}, config_path)
    assert exc.value.side is Side.LOCAL
    assert not config_path.exists()


def test_save_without_grid(tmp_path):
    config_path = tmp_path / "config.yaml"
    save_config({'callsign': 'W1AW'}, config_path)
    assert yaml.safe_load(config_path.read_text()) == {'callsign': 'W1AW'}


def test_search_paths(fake_home, tmp_path):
    explicit = tmp_path / "mine.yaml"
    paths = config_search_paths(explicit)
    assert paths[0] == explicit
    assert paths[-1] == fake_home / ".config" / "maidenhead" / "config.yaml"
    assert config_search_paths()[0] != explicit


def test_partial_config_keeps_defaults(fake_home, tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text("callsign: W1AW\n")
    config = load_config(config_path)
    assert config['callsign'] == 'W1AW'
    assert config['grid'] == DEFAULT_CONFIG['grid']


def test_empty_config_file(fake_home, tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text("")
    assert load_config(config_path) == DEFAULT_CONFIG


def test_malformed_config_warns(fake_home, tmp_path, capsys):
    """Unparseable files are skipped with a warning"""
    config_path = tmp_path / "config.yaml"
    config_path.write_text("grid: [unclosed\n")

    config = load_config(config_path)

    assert config == DEFAULT_CONFIG
    assert "Warning: Could not load config" in capsys.readouterr().err


def test_xdg_config(fake_home):
    """Falls back to ~/.config/maidenhead/config.yaml"""
    xdg = fake_home / ".config" / "maidenhead" / "config.yaml"
    save_config({'grid': 'CM98kq'}, xdg)
    assert load_config()['grid'] == 'CM98kq'


class TestHomeGrid:
    """Test the configured home station grid"""

    def test_normalized(self):
        assert home_grid({'grid': 'fn31PR'}) == 'FN31pr'

    def test_invalid(self):
        with pytest.raises(ValidationError) as exc:
            home_grid({'grid': 'FN31'})
        assert exc.value.kind is ValidationKind.LENGTH
        assert exc.value.side is Side.LOCAL

    def test_missing(self):
        with pytest.raises(ValidationError):
            home_grid({})

    def test_loads_config_when_omitted(self, fake_home):
        assert home_grid() == DEFAULT_CONFIG['grid']

    def test_location_from_home(self):
        loc = location_from_home("FN31pr", {'grid': 'jn58td'})
        assert loc.local_grid_square == "JN58td"
        assert loc.remote_grid_square == "FN31pr"
        assert loc.short_path_distance_km > 0

    def test_location_from_home_bad_remote(self):
        with pytest.raises(ValidationError) as exc:
            location_from_home("XX", {'grid': 'JN58td'})
        assert exc.value.side is Side.REMOTE


if __name__ == "__main__":
    sys.exit(pytest.main([__file__, "-v"]))
