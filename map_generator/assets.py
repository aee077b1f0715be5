"""
Loading of per-map source assets: the source image and its info.json sidecar.
"""
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

from tqdm import tqdm

from .config import IMAGE_FILENAME, INFO_FILENAME
from .errors import PipelineIOError, ManifestParseError
from .types import Stage


@dataclass
class MapAssets:
    """Raw inputs for one map. The image is never decoded here."""
    image_bytes: bytes
    manifest: Dict[str, Any]


def read_asset_file(path: Path, map_name: str) -> bytes:
    """Read a whole file, reporting the exact attempted path on failure."""
    try:
        return path.read_bytes()
    except OSError as e:
        raise PipelineIOError(
            f"failed to read {path}: {e.strerror or e}",
            path=path, map_name=map_name, stage=Stage.LOAD
        ) from e


def _reject_constant(token: str):
    # Python's json accepts NaN/Infinity; JSON itself does not
    raise ValueError(f"invalid JSON constant: {token}")


def parse_manifest(raw: bytes, map_name: str) -> Dict[str, Any]:
    """
    Decode info.json bytes into an ordered mapping.

    Key order and nested structure are preserved exactly as written.

    Raises:
        ManifestParseError: Invalid UTF-8, invalid JSON, or a top-level
            value that is not an object
    """
    try:
        manifest = json.loads(raw.decode('utf-8'), parse_constant=_reject_constant)
    except (UnicodeDecodeError, ValueError) as e:
        raise ManifestParseError(f"failed to parse {INFO_FILENAME}: {e}", map_name=map_name) from e

    if not isinstance(manifest, dict):
        raise ManifestParseError(
            f"failed to parse {INFO_FILENAME}: expected a JSON object, got {type(manifest).__name__}",
            map_name=map_name
        )
    return manifest


def load_map_assets(input_dir: Path, name: str) -> MapAssets:
    """
    Read image.png and info.json for one map.

    The image is read first, so a map missing both files reports the image.

    Args:
        input_dir: Resolved input root (see paths.resolve_map_dirs)
        name: Map name; also the asset subdirectory name

    Returns:
        MapAssets with raw image bytes and the decoded manifest

    Raises:
        PipelineIOError: Either file missing or unreadable
        ManifestParseError: info.json is malformed
    """
    map_dir = Path(input_dir) / name

    image_path = map_dir / IMAGE_FILENAME
    tqdm.write(f"  Reading image file from: {image_path}")
    image_bytes = read_asset_file(image_path, name)

    manifest_path = map_dir / INFO_FILENAME
    tqdm.write(f"  Reading {INFO_FILENAME} file from: {manifest_path}")
    manifest = parse_manifest(read_asset_file(manifest_path, name), name)

    return MapAssets(image_bytes=image_bytes, manifest=manifest)
