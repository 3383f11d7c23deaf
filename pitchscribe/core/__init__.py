"""Core types and constants for pitchscribe."""

from .note import Note, PitchSample, ConsolidatedNote, frequency_to_note
from .buffer import SampleBuffer
from .config import AnalysisConfig
from .errors import PitchscribeError, InvalidAudioError
from .constants import (
    PITCH_NAMES,
    DEFAULT_SR,
    DEFAULT_SEGMENT_LENGTH,
    DEFAULT_TEMPO,
)

__all__ = [
    "Note",
    "PitchSample",
    "ConsolidatedNote",
    "frequency_to_note",
    "SampleBuffer",
    "AnalysisConfig",
    "PitchscribeError",
    "InvalidAudioError",
    "PITCH_NAMES",
    "DEFAULT_SR",
    "DEFAULT_SEGMENT_LENGTH",
    "DEFAULT_TEMPO",
]
