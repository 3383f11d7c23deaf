"""Inference layer - Musical understanding built from notes.

- Chord identification (co-occurring notes against chord templates)
- Key detection (tonal center)

Pipeline: Notes -> [Chords, Key]
"""

from .chords import ChordIdentifier, Chord, ChordType
from .key import KeyDetector, KeyInfo, KeyCandidate

__all__ = [
    "ChordIdentifier",
    "Chord",
    "ChordType",
    "KeyDetector",
    "KeyInfo",
    "KeyCandidate",
]
