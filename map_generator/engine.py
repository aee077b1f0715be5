"""
Terrain engine contract.

The terrain engine converts a source image into the packed map, packed
minimap and thumbnail, and reports their geometry. Its internals live
outside this package; this module defines what goes in, what must come
out, and how a concrete engine is located and invoked.

CONTRACT:
- Deterministic: same image bytes + same remove_small => byte-identical
  artifacts and identical geometry on every call
- Stateless: no state shared between calls for different maps

Reruns of the pipeline are idempotent only because of this contract; the
pipeline itself caches nothing.
"""
import importlib
import inspect
from dataclasses import dataclass, fields
from typing import Any, Callable, Mapping, Union

from .errors import GenerationError, EngineLoadError

BYTES_FIELDS = ('map_bytes', 'mini_map_bytes', 'thumbnail_bytes')
GEOMETRY_FIELDS = (
    'map_width', 'map_height', 'map_num_land_tiles',
    'mini_map_width', 'mini_map_height', 'mini_map_num_land_tiles',
)


@dataclass(frozen=True)
class GeneratorArgs:
    """Input to the terrain engine for one map."""
    image_bytes: bytes
    remove_small: bool  # Drop small islands; enabled for production maps only
    name: str


@dataclass(frozen=True)
class GenerationResult:
    """
    Artifacts and geometry produced by the terrain engine.

    VALIDATION:
    - Byte fields must be bytes-like
    - Geometry fields must be non-negative ints (bool is rejected)
    """
    map_bytes: bytes
    mini_map_bytes: bytes
    thumbnail_bytes: bytes
    map_width: int
    map_height: int
    map_num_land_tiles: int
    mini_map_width: int
    mini_map_height: int
    mini_map_num_land_tiles: int

    def __post_init__(self):
        for name in BYTES_FIELDS:
            value = getattr(self, name)
            if not isinstance(value, (bytes, bytearray, memoryview)):
                raise ValueError(f"{name} must be bytes, got {type(value).__name__}")
        for name in GEOMETRY_FIELDS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{name} must be an int, got {type(value).__name__}")
            if value < 0:
                raise ValueError(f"{name} must be non-negative, got {value}")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> 'GenerationResult':
        """Build from a plain mapping with the same field names."""
        missing = [f.name for f in fields(cls) if f.name not in data]
        if missing:
            raise ValueError(f"missing fields: {', '.join(missing)}")
        return cls(**{f.name: data[f.name] for f in fields(cls)})


EngineOutput = Union[GenerationResult, Mapping[str, Any]]
TerrainEngine = Callable[[GeneratorArgs], EngineOutput]


def generate_terrain(engine: TerrainEngine, args: GeneratorArgs) -> GenerationResult:
    """
    Invoke the engine once for one map.

    Raises:
        GenerationError: Engine raised, or returned something that is not a
            valid GenerationResult
    """
    try:
        output = engine(args)
    except GenerationError as e:
        if e.map_name is None:
            e.map_name = args.name
        raise
    except Exception as e:
        raise GenerationError(f"failed to generate map: {e}", map_name=args.name) from e

    if isinstance(output, GenerationResult):
        return output
    if isinstance(output, Mapping):
        try:
            return GenerationResult.from_mapping(output)
        except (TypeError, ValueError) as e:
            raise GenerationError(f"engine returned an invalid result: {e}", map_name=args.name) from e
    raise GenerationError(
        f"engine returned {type(output).__name__}, expected GenerationResult",
        map_name=args.name
    )


def load_engine(spec: str) -> TerrainEngine:
    """
    Resolve a terrain engine from an import path.

    Args:
        spec: "package.module:attribute". A class is instantiated with no
            arguments; anything else is used as-is and must be callable.

    Raises:
        EngineLoadError: Malformed spec, import failure, missing attribute,
            failed instantiation of a class target, or a non-callable target
    """
    module_name, sep, attr_path = spec.partition(':')
    if not sep or not module_name or not attr_path:
        raise EngineLoadError(f"Invalid engine '{spec}': expected 'module:attribute'")

    try:
        module = importlib.import_module(module_name)
    except Exception as e:
        # SyntaxError and import-time failures in the engine module included
        raise EngineLoadError(f"Cannot import engine module '{module_name}': {e}") from e

    target: Any = module
    for part in attr_path.split('.'):
        try:
            target = getattr(target, part)
        except AttributeError as e:
            raise EngineLoadError(f"Engine '{spec}' not found: {e}") from e

    if inspect.isclass(target):
        try:
            target = target()
        except Exception as e:
            raise EngineLoadError(f"Cannot instantiate engine '{spec}': {e}") from e
    if not callable(target):
        raise EngineLoadError(f"Engine '{spec}' is not callable")
    return target
