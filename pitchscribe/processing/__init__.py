"""Processing layer - Note-level post-processing.

This layer refines pitch samples into notation:
- Consolidation (merge adjacent identical notes)
- Quantization (durations to notation values)
"""

from .consolidate import NoteConsolidator
from .quantize import (
    SheetMusicQuantizer,
    SheetMusic,
    SheetMusicNote,
    NoteValue,
    TimeSignature,
)

__all__ = [
    "NoteConsolidator",
    "SheetMusicQuantizer",
    "SheetMusic",
    "SheetMusicNote",
    "NoteValue",
    "TimeSignature",
]
