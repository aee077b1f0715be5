"""
Error taxonomy for the map generation pipeline.

Every stage raises a PipelineError subclass carrying the map name and the
stage that failed. The runner treats any PipelineError as fatal for the
whole run.
"""
from pathlib import Path
from typing import Optional, Union

from .types import Stage


class PipelineError(Exception):
    """Raised when a pipeline stage fails."""

    stage: Optional[Stage] = None

    def __init__(self, message: str, map_name: Optional[str] = None,
                 stage: Optional[Stage] = None):
        super().__init__(message)
        self.message = message
        self.map_name = map_name
        if stage is not None:
            self.stage = stage

    def __str__(self) -> str:
        prefix = f"[{self.stage}] " if self.stage else ""
        if self.map_name:
            return f"{prefix}{self.map_name}: {self.message}"
        return f"{prefix}{self.message}"


class ResolutionError(PipelineError):
    """Working directory could not be determined."""
    stage = Stage.RESOLVE


class PipelineIOError(PipelineError):
    """Input file missing/unreadable, or output directory/file could not be written."""

    def __init__(self, message: str, path: Union[str, Path], map_name: Optional[str] = None,
                 stage: Optional[Stage] = None):
        super().__init__(message, map_name=map_name, stage=stage)
        self.path = Path(path)


class ManifestParseError(PipelineError):
    """info.json is not a valid JSON object."""
    stage = Stage.LOAD


class GenerationError(PipelineError):
    """Terrain engine rejected the image or failed internally."""
    stage = Stage.GENERATE


class SerializationError(PipelineError):
    """Merged manifest could not be encoded back to JSON."""
    stage = Stage.WRITE


class EngineLoadError(ValueError):
    """Terrain engine import path could not be resolved to a callable."""
    pass


class CatalogError(ValueError):
    """Map catalog file is missing, malformed, or contains invalid entries."""
    pass


class SettingsError(ValueError):
    """settings.json exists but is not a valid JSON object."""
    pass
