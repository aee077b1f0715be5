"""
Build the packaged map bundles consumed by the game client and server.

For every map in the catalog, reads assets/<maps|test_maps>/<name>/image.png
and info.json, runs the terrain engine, and writes map.bin, mini_map.bin,
thumbnail.webp and manifest.json to ../resources/maps/<name>/ (or
../tests/testdata/maps/<name>/ for test maps).

Run from the generator directory; paths are relative to the working directory.

Usage:
    python generate_maps.py --engine terrain_engine:generate_map
    python generate_maps.py --catalog maps.json
    python generate_maps.py --list-maps
    python generate_maps.py --check-only
"""
import sys
import argparse
from pathlib import Path
from typing import List, Optional

from map_generator.config import DEFAULT_SETTINGS_FILE
from map_generator.engine import load_engine
from map_generator.errors import CatalogError, EngineLoadError, PipelineError, SettingsError
from map_generator.map_catalog import DEFAULT_MAPS, MapDescriptor, load_catalog
from map_generator.pipeline import run_pipeline
from map_generator.settings import load_settings, get_engine_spec, get_catalog_path
from map_generator.paths import output_map_dir
from map_generator.validation import check_catalog_outputs, describe_bundle


def resolve_catalog(args: argparse.Namespace, settings: dict) -> List[MapDescriptor]:
    """--catalog, then settings 'catalog', then the built-in default."""
    if args.catalog:
        return load_catalog(Path(args.catalog))
    catalog_path = get_catalog_path(settings, args.settings)
    if catalog_path is not None:
        return load_catalog(catalog_path)
    return list(DEFAULT_MAPS)


def list_maps(catalog: List[MapDescriptor]) -> None:
    print(f"{len(catalog)} map(s) in catalog:")
    for descriptor in catalog:
        suffix = " (test)" if descriptor.is_test else ""
        print(f"  - {descriptor.name}{suffix}")


def check_only(catalog: List[MapDescriptor]) -> int:
    results = check_catalog_outputs(catalog)
    for descriptor in catalog:
        ok = results[descriptor.name]
        print(f"- {descriptor.name}: {'bundle_ok' if ok else 'bundle_missing_or_invalid'}")
        if ok:
            bundle_dir = output_map_dir(descriptor.is_test) / descriptor.name
            for filename, info in describe_bundle(bundle_dir).items():
                print(f"    {filename}: {info['size']} bytes, md5 {info['md5']}")
    return 0 if all(results.values()) else 1


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description='Generate packed terrain map bundles from source map assets',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python generate_maps.py --engine terrain_engine:generate_map
    python generate_maps.py --catalog maps.json --progress
    python generate_maps.py --check-only

Maps are processed sequentially in catalog order. The first failure stops
the run; later maps are not attempted.
        """
    )
    parser.add_argument('--engine', help='Terrain engine import path, module:attribute')
    parser.add_argument('--catalog', help='Catalog JSON file (default: built-in catalog)')
    parser.add_argument('--settings', default=DEFAULT_SETTINGS_FILE,
                        help=f'Settings file (default: {DEFAULT_SETTINGS_FILE}, optional)')
    parser.add_argument('--list-maps', action='store_true',
                        help='List maps in the catalog and exit')
    parser.add_argument('--check-only', action='store_true',
                        help='Validate existing bundles, do not generate')
    parser.add_argument('--progress', action='store_true',
                        help='Show a progress bar')

    args = parser.parse_args(argv)

    try:
        settings = load_settings(args.settings)
        catalog = resolve_catalog(args, settings)
    except (SettingsError, CatalogError) as e:
        print(f"Error: {e}", flush=True)
        return 1

    if args.list_maps:
        list_maps(catalog)
        return 0

    if args.check_only:
        try:
            return check_only(catalog)
        except PipelineError as e:
            print(f"Error: {e}", flush=True)
            return 1

    try:
        engine_spec = args.engine or get_engine_spec(settings)
    except SettingsError as e:
        print(f"Error: {e}", flush=True)
        return 1
    if not engine_spec:
        parser.error("no terrain engine configured (use --engine or 'engine' in settings)")

    try:
        engine = load_engine(engine_spec)
    except EngineLoadError as e:
        print(f"Error: {e}", flush=True)
        return 1

    result = run_pipeline(catalog, engine, show_progress=args.progress)
    if not result.ok:
        print(f"Error generating terrain maps: {result.error}", flush=True)
        return 1

    print("Terrain maps generated successfully", flush=True)
    return 0


if __name__ == "__main__":
    sys.exit(main())
