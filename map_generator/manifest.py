"""
Manifest augmentation and serialization.

The manifest is the map's info.json with no fixed schema. Only the "map"
and "mini_map" keys are owned by the pipeline; every other key passes
through untouched.
"""
import copy
import json
from typing import Any, Dict, List, Mapping, Union

from .config import MAP_KEY, MINI_MAP_KEY, MANIFEST_INDENT
from .engine import GenerationResult
from .errors import SerializationError

JSONValue = Union[None, bool, int, float, str, List['JSONValue'], Dict[str, 'JSONValue']]
Manifest = Dict[str, JSONValue]


def map_geometry(result: GenerationResult) -> Dict[str, int]:
    return {
        "width": result.map_width,
        "height": result.map_height,
        "num_land_tiles": result.map_num_land_tiles,
    }


def mini_map_geometry(result: GenerationResult) -> Dict[str, int]:
    return {
        "width": result.mini_map_width,
        "height": result.mini_map_height,
        "num_land_tiles": result.mini_map_num_land_tiles,
    }


def merge_manifest(manifest: Mapping[str, Any], result: GenerationResult) -> Manifest:
    """
    Inject computed geometry into a copy of the manifest.

    "map" and "mini_map" are always overwritten; a key already present
    keeps its position, a new one is appended. The input is not mutated.
    """
    merged: Manifest = copy.deepcopy(dict(manifest))
    merged[MAP_KEY] = map_geometry(result)
    merged[MINI_MAP_KEY] = mini_map_geometry(result)
    return merged


def serialize_manifest(manifest: Mapping[str, Any], map_name: str) -> bytes:
    """
    Encode a manifest as 2-space indented UTF-8 JSON.

    Raises:
        SerializationError: Value not representable in JSON (including NaN/Infinity)
            or text that is not encodable as UTF-8 (lone surrogates)
    """
    try:
        text = json.dumps(manifest, indent=MANIFEST_INDENT, ensure_ascii=False, allow_nan=False)
        return text.encode('utf-8')
    except (TypeError, ValueError) as e:
        raise SerializationError(f"failed to serialize manifest: {e}", map_name=map_name) from e
