"""
Enums shared across the map generation pipeline.
"""

from enum import Enum


class Stage(str, Enum):
    """
    Pipeline stage identity, attached to every error raised by a stage.

    Inherits from str so it prints and compares as its plain value.
    """
    RESOLVE = "resolve"
    LOAD = "load"
    GENERATE = "generate"
    MERGE = "merge"
    WRITE = "write"

    def __str__(self) -> str:
        return self.value


class RunState(str, Enum):
    """Lifecycle of a catalog run. DONE and ABORTED are terminal."""
    IDLE = "idle"
    RUNNING = "running"
    DONE = "done"
    ABORTED = "aborted"

    def __str__(self) -> str:
        return self.value
