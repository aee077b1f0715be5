"""
Map catalog definitions.

The catalog is the ordered list of maps to build; list order is processing
order. The runner never reaches for a global catalog: callers pass one in,
either DEFAULT_MAPS or one loaded from a JSON file with load_catalog().

Catalog file format (either form):
    [{"name": "annecy"}, {"name": "plains", "is_test": true}]
    {"maps": [{"name": "annecy"}, {"name": "plains", "isTest": true}]}
"""
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, List, Tuple

from .errors import CatalogError


@dataclass(frozen=True)
class MapDescriptor:
    """One catalog entry."""
    name: str  # Asset directory name and bundle directory name
    is_test: bool = False  # Test fixture: test roots, no small-island removal


# Production maps first, then test fixtures
DEFAULT_MAPS: Tuple[MapDescriptor, ...] = (
    MapDescriptor(name="annecy"),
    MapDescriptor(name="paris"),
    MapDescriptor(name="plains", is_test=True),
)


def validate_map_name(name: Any) -> str:
    """
    Check a map name is usable as a single directory name.

    Raises:
        CatalogError: Empty, not a string, contains a path separator or NUL, or is . / ..
    """
    if not isinstance(name, str) or not name.strip():
        raise CatalogError(f"Map name must be a non-empty string, got {name!r}")
    if '/' in name or '\\' in name or '\x00' in name or name in ('.', '..'):
        raise CatalogError(f"Map name must be a plain directory name, got {name!r}")
    return name


def build_catalog(entries: Iterable[MapDescriptor]) -> List[MapDescriptor]:
    """Validate names and reject duplicates, preserving order."""
    catalog: List[MapDescriptor] = []
    seen = set()
    for entry in entries:
        validate_map_name(entry.name)
        if entry.name in seen:
            raise CatalogError(f"Duplicate map in catalog: {entry.name}")
        seen.add(entry.name)
        catalog.append(entry)
    return catalog


def descriptor_from_dict(data: Any, index: int) -> MapDescriptor:
    if not isinstance(data, dict):
        raise CatalogError(f"Catalog entry {index} must be an object, got {type(data).__name__}")
    if 'name' not in data:
        raise CatalogError(f"Catalog entry {index} is missing 'name'")

    is_test = data.get('is_test', data.get('isTest', False))
    if not isinstance(is_test, bool):
        raise CatalogError(f"Catalog entry {index} ({data['name']}): is_test must be true/false")

    return MapDescriptor(name=validate_map_name(data['name']), is_test=is_test)


def load_catalog(catalog_file: Path) -> List[MapDescriptor]:
    """
    Load an ordered catalog from a JSON file.

    Raises:
        CatalogError: File missing/unreadable, invalid JSON, or invalid entries
    """
    catalog_path = Path(catalog_file)
    try:
        with open(catalog_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except OSError as e:
        raise CatalogError(f"Cannot read catalog {catalog_path}: {e}") from e
    except json.JSONDecodeError as e:
        raise CatalogError(f"Invalid JSON in catalog {catalog_path}: {e}") from e

    if isinstance(data, dict):
        data = data.get('maps')
    if not isinstance(data, list):
        raise CatalogError(f"Catalog {catalog_path} must be a list of maps or an object with a 'maps' list")

    return build_catalog(descriptor_from_dict(entry, i) for i, entry in enumerate(data))
