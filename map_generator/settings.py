"""
Optional settings.json for the map generator.

Recognized keys:
    engine:  terrain engine import path, "module:attribute"
    catalog: path to a catalog JSON file, relative to the settings file

A missing settings file is not an error; command-line flags and built-in
defaults cover everything.
"""
import json
from pathlib import Path
from typing import Any, Dict, Optional

from .config import DEFAULT_SETTINGS_FILE
from .errors import SettingsError


def load_settings(settings_file: str = DEFAULT_SETTINGS_FILE) -> Dict[str, Any]:
    settings_path = Path(settings_file)

    if not settings_path.exists():
        return {}

    try:
        with open(settings_path, 'r', encoding='utf-8') as f:
            settings = json.load(f)
    except json.JSONDecodeError as e:
        raise SettingsError(f"Invalid JSON in {settings_file}: {e}") from e
    except OSError as e:
        raise SettingsError(f"Cannot read {settings_file}: {e}") from e

    if not isinstance(settings, dict):
        raise SettingsError(f"{settings_file} must contain a JSON object")
    return settings


def get_setting(settings: Dict[str, Any], key_path: str, default: Any = None) -> Any:
    """Look up a dotted key path, e.g. 'engine' or 'paths.catalog'."""
    value: Any = settings
    try:
        for key in key_path.split('.'):
            value = value[key]
        return value
    except (KeyError, TypeError):
        return default


def get_engine_spec(settings: Dict[str, Any]) -> Optional[str]:
    spec = get_setting(settings, 'engine')
    if spec is not None and not isinstance(spec, str):
        raise SettingsError("'engine' must be a string like 'module:attribute'")
    return spec


def get_catalog_path(settings: Dict[str, Any], settings_file: str = DEFAULT_SETTINGS_FILE) -> Optional[Path]:
    """Catalog path from settings, resolved against the settings file's directory."""
    catalog = get_setting(settings, 'catalog')
    if catalog is None:
        return None
    if not isinstance(catalog, str):
        raise SettingsError("'catalog' must be a path string")
    return Path(settings_file).parent / catalog
