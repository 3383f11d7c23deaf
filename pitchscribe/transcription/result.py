"""Transcription result - the analyzer's sole output."""

from dataclasses import dataclass, field
from typing import Any, Dict, List

from ..core import ConsolidatedNote, PitchSample
from ..core.constants import DEFAULT_KEY, DEFAULT_TEMPO
from ..inference import Chord
from ..processing import SheetMusic


@dataclass(frozen=True)
class SimpleNote:
    """Display-oriented view of a consolidated note."""

    note: str  # Pitch-class name, e.g. "C#"
    octave: int
    duration: float  # Seconds
    start_time: float  # Seconds

    @classmethod
    def from_consolidated(cls, note: ConsolidatedNote) -> "SimpleNote":
        return cls(
            note=note.name,
            octave=note.octave,
            duration=note.duration,
            start_time=note.start_time,
        )

    @property
    def label(self) -> str:
        return f"{self.note}{self.octave}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "note": self.note.replace("#", "♯"),
            "octave": self.octave,
            "duration": self.duration,
            "startTime": self.start_time,
        }


def pitch_sample_to_dict(sample: PitchSample) -> Dict[str, Any]:
    return {
        "frequency": sample.frequency,
        "note": {
            "name": sample.note.name,
            "octave": sample.note.octave,
            "frequency": sample.note.frequency,
            "cents": sample.note.cents,
        },
        "startTime": sample.start_time,
        "endTime": sample.end_time,
    }


@dataclass
class TranscriptionResult:
    """Notes, chords and sheet music extracted from one buffer.

    Attributes:
        simple_notes: One entry per consolidated note
        complex_chords: Chords found in co-occurring notes
        sheet_music: Quantized notes with time signature and clef
        raw_pitch_data: The consolidated notes with frequency and timing
        detected_key: Key label (e.g., "C major")
        detected_tempo: Tempo in BPM
        metadata: Analysis parameters and buffer facts
    """

    simple_notes: List[SimpleNote] = field(default_factory=list)
    complex_chords: List[Chord] = field(default_factory=list)
    sheet_music: SheetMusic = field(default_factory=SheetMusic)
    raw_pitch_data: List[ConsolidatedNote] = field(default_factory=list)
    detected_key: str = f"{DEFAULT_KEY} major"
    detected_tempo: float = DEFAULT_TEMPO
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        """True when no pitched content was found."""
        return not self.raw_pitch_data

    def to_dict(self) -> Dict[str, Any]:
        """Interchange document with camelCase keys."""
        return {
            "simpleNotes": [n.to_dict() for n in self.simple_notes],
            "complexChords": [c.to_dict() for c in self.complex_chords],
            "sheetMusic": self.sheet_music.to_dict(),
            "rawPitchData": [pitch_sample_to_dict(s) for s in self.raw_pitch_data],
            "detectedKey": self.detected_key,
            "detectedTempo": self.detected_tempo,
            "metadata": dict(self.metadata),
        }
