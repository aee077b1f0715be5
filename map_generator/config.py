"""
Central configuration for map generation.

This is the single source of truth for directory layout and file names.
"""

# Input roots, relative to the working directory
INPUT_MAPS_DIR = ("assets", "maps")
INPUT_TEST_MAPS_DIR = ("assets", "test_maps")

# Output roots, relative to the working directory (one level up: the
# generator lives next to the game's resources/ and tests/ trees)
OUTPUT_MAPS_DIR = ("..", "resources", "maps")
OUTPUT_TEST_MAPS_DIR = ("..", "tests", "testdata", "maps")

# Per-map input files
IMAGE_FILENAME = "image.png"
INFO_FILENAME = "info.json"

# Per-map output bundle files
MAP_FILENAME = "map.bin"
MINI_MAP_FILENAME = "mini_map.bin"
THUMBNAIL_FILENAME = "thumbnail.webp"
MANIFEST_FILENAME = "manifest.json"

BUNDLE_FILENAMES = (MAP_FILENAME, MINI_MAP_FILENAME, THUMBNAIL_FILENAME, MANIFEST_FILENAME)

# Manifest keys overwritten with computed geometry
MAP_KEY = "map"
MINI_MAP_KEY = "mini_map"

MANIFEST_INDENT = 2

DEFAULT_SETTINGS_FILE = "settings.json"
