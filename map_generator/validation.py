"""
Validation of written output bundles.

Used by `generate_maps.py --check-only` to report which catalog entries
have a complete, well-formed bundle without running the terrain engine.
"""
import hashlib
import json
from pathlib import Path
from typing import Dict, Optional, Sequence

from .config import BUNDLE_FILENAMES, MANIFEST_FILENAME, MAP_KEY, MINI_MAP_KEY
from .map_catalog import MapDescriptor
from .paths import output_map_dir

GEOMETRY_KEYS = ("width", "height", "num_land_tiles")


def compute_file_hash(filepath: Path) -> str:
    """MD5 hex digest of a bundle file, as shown by --check-only."""
    digest = hashlib.md5()
    with open(filepath, 'rb') as f:
        for chunk in iter(lambda: f.read(8192), b''):
            digest.update(chunk)
    return digest.hexdigest()


def _valid_geometry(value) -> bool:
    if not isinstance(value, dict):
        return False
    for key in GEOMETRY_KEYS:
        v = value.get(key)
        if isinstance(v, bool) or not isinstance(v, int) or v < 0:
            return False
    return True


def validate_bundle(bundle_dir: Path, verbose: bool = True) -> bool:
    """
    Validate one output bundle.

    Checks that all four files exist and that manifest.json is a JSON object
    with "map" and "mini_map" geometry entries.

    Args:
        bundle_dir: output_root/<name>
        verbose: If True, print the reason for a failure

    Returns:
        True if the bundle is complete and well-formed
    """
    bundle_dir = Path(bundle_dir)
    if not bundle_dir.is_dir():
        if verbose:
            print(f"  Bundle directory not found: {bundle_dir}")
        return False

    missing = [f for f in BUNDLE_FILENAMES if not (bundle_dir / f).is_file()]
    if missing:
        if verbose:
            print(f"  Missing files in {bundle_dir.name}: {', '.join(missing)}")
        return False

    try:
        with open(bundle_dir / MANIFEST_FILENAME, 'r', encoding='utf-8') as f:
            manifest = json.load(f)
    except (OSError, ValueError) as e:
        if verbose:
            print(f"  Unreadable manifest in {bundle_dir.name}: {e}")
        return False

    if not isinstance(manifest, dict):
        if verbose:
            print(f"  Manifest in {bundle_dir.name} is not a JSON object")
        return False

    for key in (MAP_KEY, MINI_MAP_KEY):
        if not _valid_geometry(manifest.get(key)):
            if verbose:
                print(f"  Manifest in {bundle_dir.name} has missing or invalid '{key}' geometry")
            return False

    return True


def describe_bundle(bundle_dir: Path) -> Dict[str, Dict[str, object]]:
    """Size and md5 of every bundle file that exists."""
    info: Dict[str, Dict[str, object]] = {}
    for filename in BUNDLE_FILENAMES:
        path = Path(bundle_dir) / filename
        if path.is_file():
            info[filename] = {"size": path.stat().st_size, "md5": compute_file_hash(path)}
    return info


def check_catalog_outputs(
    catalog: Sequence[MapDescriptor],
    cwd: Optional[Path] = None,
    verbose: bool = True
) -> Dict[str, bool]:
    """Validate the bundle of every catalog entry, in catalog order."""
    return {
        descriptor.name: validate_bundle(output_map_dir(descriptor.is_test, cwd) / descriptor.name, verbose)
        for descriptor in catalog
    }
