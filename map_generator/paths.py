"""
Input/output directory resolution.

Both roots hang off the current working directory at fixed offsets (see
config.py). The generator is expected to run from its own directory, with
the game's resources/ and tests/ trees as siblings one level up.
"""
import os
from pathlib import Path
from typing import Optional, Tuple

from .config import (
    INPUT_MAPS_DIR, INPUT_TEST_MAPS_DIR,
    OUTPUT_MAPS_DIR, OUTPUT_TEST_MAPS_DIR,
)
from .errors import ResolutionError


def get_working_dir() -> Path:
    """
    Return the current working directory.

    Raises:
        ResolutionError: If the working directory no longer exists or is unreadable
    """
    try:
        return Path(os.getcwd())
    except OSError as e:
        raise ResolutionError(f"failed to get working directory: {e}") from e


def input_map_dir(is_test: bool, cwd: Optional[Path] = None) -> Path:
    """Root holding <name>/image.png and <name>/info.json."""
    base = Path(cwd) if cwd is not None else get_working_dir()
    return base.joinpath(*(INPUT_TEST_MAPS_DIR if is_test else INPUT_MAPS_DIR))


def output_map_dir(is_test: bool, cwd: Optional[Path] = None) -> Path:
    """Root that receives one bundle directory per map."""
    base = Path(cwd) if cwd is not None else get_working_dir()
    return base.joinpath(*(OUTPUT_TEST_MAPS_DIR if is_test else OUTPUT_MAPS_DIR))


def resolve_map_dirs(is_test: bool, cwd: Optional[Path] = None) -> Tuple[Path, Path]:
    """
    Resolve (input_dir, output_dir) for a catalog entry.

    Args:
        is_test: Test fixtures read from assets/test_maps and write to
            ../tests/testdata/maps; everything else uses assets/maps and
            ../resources/maps
        cwd: Base directory; defaults to the process working directory

    Returns:
        Tuple of (input_dir, output_dir). Paths are joined, not normalized.
    """
    if cwd is None:
        cwd = get_working_dir()
    return input_map_dir(is_test, cwd), output_map_dir(is_test, cwd)
