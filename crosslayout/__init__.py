"""Crossword layout synthesis from an arbitrary word list.

This package exposes the public API surface via:

- ``crosslayout.engine.generator.LayoutGenerator``: runs many randomized
  beam searches and ranks the distinct layouts they produce.
- ``crosslayout.engine.search.BeamSearch``: one resumable search.
- ``crosslayout.engine.connectivity.connected_placements``: which placed
  words remain linked through shared cells.
"""

from .core.constants import EMPTY_CELL, Orientation
from .core.models import FinishedLayout, LayoutMetrics, Placement
from .engine.connectivity import connected_placements, split_connected
from .engine.generator import (AttemptEvent, GenerationResult, GenerationWorker,
                               GeneratorConfig, LayoutGenerator, generate_layouts)
from .engine.search import BeamSearch, SearchConfig, complete_layout

__all__ = [
    "AttemptEvent",
    "BeamSearch",
    "EMPTY_CELL",
    "FinishedLayout",
    "GenerationResult",
    "GenerationWorker",
    "GeneratorConfig",
    "LayoutGenerator",
    "LayoutMetrics",
    "Orientation",
    "Placement",
    "SearchConfig",
    "complete_layout",
    "connected_placements",
    "generate_layouts",
    "split_connected",
]

__version__ = "0.1.0"
