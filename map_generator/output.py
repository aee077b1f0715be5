"""
Writing of per-map output bundles.

Each bundle is output_dir/<name>/ with map.bin, mini_map.bin,
thumbnail.webp and manifest.json. Files are overwritten independently;
there is no multi-file commit, so a failure partway through leaves some
files from this run and some from the previous one (or none).
"""
from pathlib import Path
from typing import Any, Mapping

from .config import MAP_FILENAME, MINI_MAP_FILENAME, THUMBNAIL_FILENAME, MANIFEST_FILENAME
from .engine import GenerationResult
from .errors import PipelineIOError
from .manifest import serialize_manifest
from .types import Stage


def write_bundle_file(path: Path, data: bytes, map_name: str, label: str) -> None:
    try:
        path.write_bytes(data)
    except OSError as e:
        raise PipelineIOError(
            f"failed to write {label} {path}: {e.strerror or e}",
            path=path, map_name=map_name, stage=Stage.WRITE
        ) from e


def write_output_bundle(
    output_dir: Path,
    name: str,
    result: GenerationResult,
    manifest: Mapping[str, Any]
) -> Path:
    """
    Write the four bundle files for one map.

    Args:
        output_dir: Resolved output root (see paths.resolve_map_dirs)
        name: Map name; becomes the bundle directory name
        result: Terrain engine output
        manifest: Merged manifest (see manifest.merge_manifest)

    Returns:
        Path to the bundle directory

    Raises:
        PipelineIOError: Directory creation or a file write failed
        SerializationError: Manifest is not JSON-encodable (raised before
            any file is written)
    """
    map_dir = Path(output_dir) / name
    try:
        map_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise PipelineIOError(
            f"failed to create output directory {map_dir}: {e.strerror or e}",
            path=map_dir, map_name=name, stage=Stage.WRITE
        ) from e

    manifest_data = serialize_manifest(manifest, name)

    write_bundle_file(map_dir / MAP_FILENAME, bytes(result.map_bytes), name, "map binary")
    write_bundle_file(map_dir / MINI_MAP_FILENAME, bytes(result.mini_map_bytes), name, "minimap binary")
    write_bundle_file(map_dir / THUMBNAIL_FILENAME, bytes(result.thumbnail_bytes), name, "thumbnail")
    write_bundle_file(map_dir / MANIFEST_FILENAME, manifest_data, name, "manifest")

    return map_dir
