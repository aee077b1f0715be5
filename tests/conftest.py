"""
Shared fixtures: a deterministic fake terrain engine and asset trees.
"""
import hashlib
import json
from pathlib import Path

import pytest

from map_generator.engine import GeneratorArgs, GenerationResult


class FakeEngine:
    """
    Deterministic stand-in for the terrain engine.

    Derives artifacts and geometry from the image bytes alone and records
    every call so tests can inspect what the pipeline asked for.
    """

    def __init__(self, fail_on=None):
        self.calls = []
        self.fail_on = set(fail_on or ())

    def __call__(self, args: GeneratorArgs) -> GenerationResult:
        self.calls.append(args)
        if args.name in self.fail_on:
            raise RuntimeError("degenerate image")
        digest = hashlib.sha256(args.image_bytes + bytes([args.remove_small])).digest()
        width = 8 + len(args.image_bytes) % 5
        height = 4 + len(args.image_bytes) % 3
        return GenerationResult(
            map_bytes=b"MAP" + digest,
            mini_map_bytes=b"MINI" + digest[:8],
            thumbnail_bytes=b"RIFF" + digest[:4] + b"WEBP",
            map_width=width,
            map_height=height,
            map_num_land_tiles=digest[0] % (width * height),
            mini_map_width=width // 2,
            mini_map_height=height // 2,
            mini_map_num_land_tiles=digest[1] % ((width // 2) * (height // 2) or 1),
        )


def write_map_assets(root: Path, name: str, manifest=None, image: bytes = b"\x89PNG fake image") -> Path:
    """Create root/<name>/image.png and info.json; manifest=None skips info.json."""
    map_dir = root / name
    map_dir.mkdir(parents=True, exist_ok=True)
    (map_dir / "image.png").write_bytes(image)
    if manifest is not None:
        text = manifest if isinstance(manifest, str) else json.dumps(manifest)
        (map_dir / "info.json").write_text(text, encoding="utf-8")
    return map_dir


@pytest.fixture
def engine():
    return FakeEngine()


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Generator working directory (tmp_path/generator) with siblings under tmp_path."""
    cwd = tmp_path / "generator"
    cwd.mkdir()
    monkeypatch.chdir(cwd)
    return cwd
