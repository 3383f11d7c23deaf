"""Sheet music quantization - Map note durations to notation values."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Sequence, Tuple

from ..core import ConsolidatedNote
from ..core.constants import DEFAULT_CLEF, DEFAULT_TIME_SIGNATURE


class NoteValue(Enum):
    """Standard notation durations."""

    WHOLE = "whole"
    HALF = "half"
    QUARTER = "quarter"
    EIGHTH = "eighth"
    SIXTEENTH = "sixteenth"

    @property
    def quarter_length(self) -> float:
        """Length in quarter notes (whole = 4.0)."""
        return _QUARTER_LENGTHS[self]


_QUARTER_LENGTHS = {
    NoteValue.WHOLE: 4.0,
    NoteValue.HALF: 2.0,
    NoteValue.QUARTER: 1.0,
    NoteValue.EIGHTH: 0.5,
    NoteValue.SIXTEENTH: 0.25,
}

# Inclusive lower bounds in milliseconds, longest first
DURATION_THRESHOLDS_MS: Tuple[Tuple[float, NoteValue], ...] = (
    (1000.0, NoteValue.WHOLE),
    (500.0, NoteValue.HALF),
    (250.0, NoteValue.QUARTER),
    (125.0, NoteValue.EIGHTH),
)


@dataclass(frozen=True)
class TimeSignature:
    numerator: int = 4
    denominator: int = 4

    def __str__(self) -> str:
        return f"{self.numerator}/{self.denominator}"


@dataclass(frozen=True)
class SheetMusicNote:
    """A note ready for a notation renderer."""

    pitch: str  # Pitch-class name, e.g. "C#"
    octave: int
    duration: NoteValue
    start_time: float  # Seconds

    def to_dict(self) -> Dict[str, Any]:
        return {
            "pitch": self.pitch,
            "octave": self.octave,
            "duration": self.duration.value,
            "startTime": self.start_time,
        }


@dataclass
class SheetMusic:
    """Note sequence packaged with time signature and clef.

    Measure layout is left to the renderer.
    """

    notes: List[SheetMusicNote] = field(default_factory=list)
    time_signature: TimeSignature = field(default_factory=TimeSignature)
    clef: str = DEFAULT_CLEF

    def to_dict(self) -> Dict[str, Any]:
        return {
            "notes": [n.to_dict() for n in self.notes],
            "timeSignature": {
                "numerator": self.time_signature.numerator,
                "denominator": self.time_signature.denominator,
            },
            "clef": self.clef,
        }


class SheetMusicQuantizer:
    """Classify note durations into whole/half/quarter/eighth/sixteenth."""

    def __init__(
        self,
        time_signature: Tuple[int, int] = DEFAULT_TIME_SIGNATURE,
        clef: str = DEFAULT_CLEF,
    ):
        """
        Initialize SheetMusicQuantizer.

        Args:
            time_signature: Time signature as (numerator, denominator)
            clef: Clef name (e.g., "treble", "bass")
        """
        self.time_signature = TimeSignature(*time_signature)
        self.clef = clef

    @staticmethod
    def classify(duration: float) -> NoteValue:
        """
        Map a duration in seconds to a notation value.

        Boundaries are inclusive on the lower side: exactly 250ms is a
        quarter, 249ms an eighth.
        """
        # Absorb float error from end - start (0.35 - 0.1 -> 249.99999999999997ms)
        duration_ms = round(duration * 1000.0, 9)
        for threshold, value in DURATION_THRESHOLDS_MS:
            if duration_ms >= threshold:
                return value
        return NoteValue.SIXTEENTH

    def quantize(self, notes: Sequence[ConsolidatedNote]) -> SheetMusic:
        """
        Convert consolidated notes to sheet music.

        Args:
            notes: Consolidated notes in time order

        Returns:
            SheetMusic with one entry per note
        """
        sheet_notes = [
            SheetMusicNote(
                pitch=note.name,
                octave=note.octave,
                duration=self.classify(note.duration),
                start_time=note.start_time,
            )
            for note in notes
        ]
        return SheetMusic(
            notes=sheet_notes,
            time_signature=self.time_signature,
            clef=self.clef,
        )
