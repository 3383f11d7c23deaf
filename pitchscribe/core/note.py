"""Note data classes - the fundamental units of a transcription."""

import math
from dataclasses import dataclass

from .constants import (
    A4_FREQUENCY,
    CENTS_PER_OCTAVE,
    PITCH_NAMES,
    SEMITONES_PER_OCTAVE,
)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up (-2.5 -> -2, 2.5 -> 3)."""
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class Note:
    """A musical note resolved from a frequency.

    Attributes:
        name: Pitch-class name (e.g., "C", "F#")
        octave: Octave number in scientific pitch notation (C4 = middle C)
        frequency: Measured frequency in Hz
        cents: Deviation from the equal-tempered pitch, in [-50, 50]
    """

    name: str
    octave: int
    frequency: float
    cents: int = 0

    @classmethod
    def from_frequency(cls, frequency: float) -> "Note":
        """Resolve the nearest equal-tempered note (A4 = 440Hz)."""
        return frequency_to_note(frequency)

    @property
    def label(self) -> str:
        """Get note label (e.g., 'C4', 'A#3')."""
        return f"{self.name}{self.octave}"

    @property
    def display_name(self) -> str:
        """Name with a typographic sharp (e.g., 'C♯')."""
        return self.name.replace("#", "♯")

    @property
    def pitch_class(self) -> int:
        """Get pitch class (0-11, where 0=C)."""
        return PITCH_NAMES.index(self.name)

    @property
    def midi_pitch(self) -> int:
        """MIDI pitch of the nearest equal-tempered note."""
        return (self.octave + 1) * SEMITONES_PER_OCTAVE + self.pitch_class

    def same_pitch(self, other: "Note") -> bool:
        """True when both notes share name and octave."""
        return self.name == other.name and self.octave == other.octave


def frequency_to_note(frequency: float) -> Note:
    """
    Convert a frequency to the closest musical note.

    This is the only frequency-to-note conversion in the package; the
    simple-note, chord and sheet-music paths all go through it.

    Args:
        frequency: Frequency in Hz, must be positive and finite

    Returns:
        Note with name, octave, the measured frequency and cents deviation

    Raises:
        ValueError: If frequency is not a positive finite number
    """
    if not math.isfinite(frequency) or frequency <= 0:
        raise ValueError(f"Frequency must be positive and finite, got {frequency}")

    semitones = round_half_up(SEMITONES_PER_OCTAVE * math.log2(frequency / A4_FREQUENCY))
    nearest = A4_FREQUENCY * 2 ** (semitones / SEMITONES_PER_OCTAVE)
    cents = round_half_up(CENTS_PER_OCTAVE * math.log2(frequency / nearest))

    # Re-base from A to C: A4 is 9 semitones above C4
    from_c = semitones + 9
    name = PITCH_NAMES[from_c % SEMITONES_PER_OCTAVE]
    octave = 4 + from_c // SEMITONES_PER_OCTAVE

    return Note(name=name, octave=octave, frequency=float(frequency), cents=cents)


@dataclass(frozen=True)
class PitchSample:
    """A pitched stretch of audio.

    Produced once per analysis segment, then merged into consolidated notes
    whose end_time spans every merged segment.
    """

    frequency: float  # Estimated fundamental in Hz
    note: Note
    start_time: float  # Seconds
    end_time: float  # Seconds

    @property
    def duration(self) -> float:
        """Duration in seconds."""
        return self.end_time - self.start_time

    @property
    def name(self) -> str:
        return self.note.name

    @property
    def octave(self) -> int:
        return self.note.octave


# A consolidated note is a pitch sample with an extended end time
ConsolidatedNote = PitchSample
