"""
Map bundle generation for the game client/server.

Converts named map assets (source image + info.json sidecar) into packaged
bundles. Entry point is generate_maps.py at the repository root.
"""

from .pipeline import process_map, run_pipeline, RunResult
from .errors import PipelineError

__all__ = ['process_map', 'run_pipeline', 'RunResult', 'PipelineError']
