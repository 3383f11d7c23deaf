"""pitchscribe - Audio to notation transcription.

Architecture Layers:
    1. core/          - Types, constants, configuration, errors
    2. input/         - Audio decoding into sample buffers
    3. analysis/      - Downmix, segmentation, pitch and tempo estimation
    4. processing/    - Note consolidation and sheet music quantization
    5. inference/     - Chord and key identification
    6. transcription/ - The end-to-end analyze() pipeline
    7. output/        - Export (JSON, MIDI, MusicXML)
"""

__version__ = "0.1.0"

# Core types
from .core import (
    Note,
    PitchSample,
    SampleBuffer,
    AnalysisConfig,
    PitchscribeError,
    InvalidAudioError,
    frequency_to_note,
)

# Input layer
from .input import AudioLoader

# Analysis layer
from .analysis import PitchEstimator, TempoAnalyzer, to_mono, iter_segments

# Processing layer
from .processing import NoteConsolidator, SheetMusicQuantizer, SheetMusic, NoteValue

# Inference layer
from .inference import ChordIdentifier, Chord, ChordType, KeyDetector

# Transcription layer
from .transcription import NotationTranscriber, TranscriptionResult, analyze

# Output layer
from .output import JSONExporter, MIDIExporter, MusicXMLExporter

__all__ = [
    # Core
    "Note",
    "PitchSample",
    "SampleBuffer",
    "AnalysisConfig",
    "PitchscribeError",
    "InvalidAudioError",
    "frequency_to_note",
    # Input
    "AudioLoader",
    # Analysis
    "PitchEstimator",
    "TempoAnalyzer",
    "to_mono",
    "iter_segments",
    # Processing
    "NoteConsolidator",
    "SheetMusicQuantizer",
    "SheetMusic",
    "NoteValue",
    # Inference
    "ChordIdentifier",
    "Chord",
    "ChordType",
    "KeyDetector",
    # Transcription
    "NotationTranscriber",
    "TranscriptionResult",
    "analyze",
    # Output
    "JSONExporter",
    "MIDIExporter",
    "MusicXMLExporter",
]
