"""Transcription layer - Sample buffer to notation.

Runs the full pipeline and packages its findings:
- Simple notes (one per consolidated note)
- Chords (co-occurring notes)
- Sheet music (quantized durations, time signature, clef)
"""

from .base import Transcriber
from .notation import NotationTranscriber, analyze
from .result import TranscriptionResult, SimpleNote

__all__ = [
    "Transcriber",
    "NotationTranscriber",
    "analyze",
    "TranscriptionResult",
    "SimpleNote",
]
