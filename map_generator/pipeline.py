"""
Map generation pipeline.

Runs every map in a catalog through five stages, in catalog order:
1. Resolve input/output roots from the map's is_test flag
2. Load image.png and info.json
3. Generate terrain artifacts with the terrain engine
4. Merge computed geometry into the manifest
5. Write the output bundle

Maps are processed one at a time. The first failure aborts the run:
no later catalog entry is attempted, nothing is retried.
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence

from tqdm import tqdm

from .assets import load_map_assets
from .engine import GeneratorArgs, TerrainEngine, generate_terrain
from .errors import PipelineError
from .manifest import merge_manifest
from .map_catalog import MapDescriptor
from .output import write_output_bundle
from .paths import resolve_map_dirs
from .types import RunState, Stage

STAGE_COUNT = 5


@dataclass
class RunResult:
    """Outcome of run_pipeline()."""
    state: RunState = RunState.IDLE
    completed: List[str] = field(default_factory=list)
    failed_map: Optional[str] = None
    error: Optional[PipelineError] = None

    @property
    def ok(self) -> bool:
        return self.state == RunState.DONE


def _stage(number: int, message: str) -> None:
    tqdm.write(f"[STAGE {number}/{STAGE_COUNT}] {message}")


def process_map(descriptor: MapDescriptor, engine: TerrainEngine, cwd: Optional[Path] = None) -> Path:
    """
    Run all stages for one catalog entry.

    Args:
        descriptor: Catalog entry
        engine: Terrain engine callable
        cwd: Base directory for path resolution; defaults to the working directory

    Returns:
        Path to the written bundle directory

    Raises:
        PipelineError: Any stage failure, tagged with the map name and stage
    """
    name = descriptor.name
    current = Stage.RESOLVE
    try:
        _stage(1, f"Resolving directories for {name}...")
        input_dir, output_dir = resolve_map_dirs(descriptor.is_test, cwd)
        tqdm.write(f"  Input: {input_dir}")
        tqdm.write(f"  Output: {output_dir}")

        current = Stage.LOAD
        _stage(2, f"Loading assets for {name}...")
        assets = load_map_assets(input_dir, name)
        tqdm.write(f"  Loaded image ({len(assets.image_bytes)} bytes) and manifest ({len(assets.manifest)} keys)")

        current = Stage.GENERATE
        _stage(3, f"Generating map for {name}...")
        result = generate_terrain(engine, GeneratorArgs(
            image_bytes=assets.image_bytes,
            remove_small=not descriptor.is_test,  # Keep test geometry minimal and exact
            name=name,
        ))
        tqdm.write(f"  Map: {result.map_width} x {result.map_height} ({result.map_num_land_tiles} land tiles)")
        tqdm.write(f"  Minimap: {result.mini_map_width} x {result.mini_map_height} "
                   f"({result.mini_map_num_land_tiles} land tiles)")

        current = Stage.MERGE
        _stage(4, f"Updating manifest for {name}...")
        manifest = merge_manifest(assets.manifest, result)
        tqdm.write(f"  Manifest: {len(manifest)} keys (map, mini_map updated)")

        current = Stage.WRITE
        _stage(5, f"Writing bundle for {name}...")
        bundle_dir = write_output_bundle(output_dir, name, result, manifest)
        tqdm.write(f"  Wrote: {bundle_dir}")
        return bundle_dir

    except PipelineError as e:
        if e.map_name is None:
            e.map_name = name
        if e.stage is None:
            e.stage = current
        raise


def run_pipeline(
    catalog: Sequence[MapDescriptor],
    engine: TerrainEngine,
    cwd: Optional[Path] = None,
    show_progress: bool = False
) -> RunResult:
    """
    Process every catalog entry in order, stopping at the first failure.

    Args:
        catalog: Ordered map descriptors
        engine: Terrain engine callable
        cwd: Base directory for path resolution; defaults to the working directory
        show_progress: Show a tqdm progress bar over the catalog

    Returns:
        RunResult in state DONE, or ABORTED with the failing map and its error
    """
    run = RunResult()
    run.state = RunState.RUNNING

    for index, descriptor in enumerate(tqdm(catalog, desc="Maps", unit="map", disable=not show_progress)):
        tqdm.write(f"\n{'='*70}")
        tqdm.write(f" [{index + 1}/{len(catalog)}] Processing map: {descriptor.name}"
                   f"{' (test)' if descriptor.is_test else ''}")
        tqdm.write(f"{'='*70}")
        try:
            process_map(descriptor, engine, cwd)
        except PipelineError as e:
            tqdm.write(f"\nError processing map {descriptor.name}: {e}")
            run.state = RunState.ABORTED
            run.failed_map = descriptor.name
            run.error = e
            return run
        run.completed.append(descriptor.name)

    run.state = RunState.DONE
    return run
