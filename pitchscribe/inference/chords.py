"""Chord identification - Match co-occurring notes against chord templates.

Notes are grouped into fixed, non-overlapping time windows. The pitch
classes in a window are tested against each chord type's interval pattern,
trying each present note as the root.
"""

import math
from collections import OrderedDict
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..core import ConsolidatedNote, PITCH_NAMES
from ..core.constants import (
    DEFAULT_CHORD_WINDOW,
    DEFAULT_MIN_CHORD_NOTES,
    DEFAULT_MIN_MATCH_RATIO,
    DEFAULT_MIN_MATCHED_TONES,
)


class ChordType(Enum):
    """Chord qualities with their intervals from the root in semitones.

    Declaration order is the order templates are tried in.
    """

    MAJOR = ("Major", (0, 4, 7))
    MINOR = ("Minor", (0, 3, 7))
    DIMINISHED = ("Diminished", (0, 3, 6))
    AUGMENTED = ("Augmented", (0, 4, 8))
    MAJOR_7 = ("Major 7", (0, 4, 7, 11))
    DOMINANT_7 = ("Dominant 7", (0, 4, 7, 10))
    MINOR_7 = ("Minor 7", (0, 3, 7, 10))
    SUS4 = ("Sus4", (0, 5, 7))
    SUS2 = ("Sus2", (0, 2, 7))

    def __init__(self, label: str, intervals: Tuple[int, ...]):
        self.label = label
        self.intervals = intervals

    @property
    def suffix(self) -> str:
        """Chord symbol suffix (e.g., "m7" for MINOR_7)."""
        return _SYMBOL_SUFFIXES[self]


_SYMBOL_SUFFIXES = {
    ChordType.MAJOR: "",
    ChordType.MINOR: "m",
    ChordType.DIMINISHED: "dim",
    ChordType.AUGMENTED: "aug",
    ChordType.MAJOR_7: "maj7",
    ChordType.DOMINANT_7: "7",
    ChordType.MINOR_7: "m7",
    ChordType.SUS4: "sus4",
    ChordType.SUS2: "sus2",
}


@dataclass(frozen=True)
class Chord:
    """Represents a detected chord."""

    root: str  # Root note (e.g., "C", "F#")
    type: ChordType
    notes: Tuple[str, ...]  # Pitch classes present, in first-seen order
    start_time: float  # Seconds
    end_time: float  # Seconds

    @property
    def duration(self) -> float:
        return self.end_time - self.start_time

    @property
    def symbol(self) -> str:
        """Get chord symbol (e.g., 'C', 'Am', 'G7')."""
        return f"{self.root}{self.type.suffix}"

    @property
    def name(self) -> str:
        """Get long name (e.g., 'C Major')."""
        return f"{self.root} {self.type.label}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "root": self.root,
            "type": self.type.label,
            "notes": list(self.notes),
            "startTime": self.start_time,
            "endTime": self.end_time,
            "duration": self.duration,
        }


def interval(root: str, name: str) -> int:
    """Semitones from root up to name (0-11)."""
    return (PITCH_NAMES.index(name) - PITCH_NAMES.index(root)) % 12


class ChordIdentifier:
    """Identify chords from consolidated notes in fixed time windows."""

    def __init__(
        self,
        time_window: float = DEFAULT_CHORD_WINDOW,
        min_notes: int = DEFAULT_MIN_CHORD_NOTES,
        min_matched_tones: int = DEFAULT_MIN_MATCHED_TONES,
        min_match_ratio: float = DEFAULT_MIN_MATCH_RATIO,
    ):
        """
        Initialize ChordIdentifier.

        Args:
            time_window: Bucket width in seconds; notes starting in the same
                bucket count as simultaneous
            min_notes: Minimum notes in a bucket to attempt a chord
            min_matched_tones: Chord tones that must be present for a match
            min_match_ratio: Fraction of chord tones that must be present
        """
        self.time_window = time_window
        self.min_notes = min_notes
        self.min_matched_tones = min_matched_tones
        self.min_match_ratio = min_match_ratio

    def group_by_window(
        self, notes: Sequence[ConsolidatedNote]
    ) -> "OrderedDict[int, List[ConsolidatedNote]]":
        """
        Bucket notes by floor(start_time / time_window).

        Returns:
            Buckets in ascending window order, notes in input order
        """
        buckets: Dict[int, List[ConsolidatedNote]] = {}
        for note in notes:
            key = int(math.floor(note.start_time / self.time_window))
            buckets.setdefault(key, []).append(note)
        return OrderedDict(sorted(buckets.items()))

    def match_score(self, intervals: Sequence[int], chord_type: ChordType) -> Tuple[int, float]:
        """
        Count how many of the chord's tones are present.

        Returns:
            Tuple of (matched tone count, matched fraction of the chord)
        """
        present = set(intervals)
        matched = sum(1 for i in chord_type.intervals if i in present)
        return matched, matched / len(chord_type.intervals)

    def matches(self, intervals: Sequence[int], chord_type: ChordType) -> bool:
        """True if the interval set satisfies both match thresholds."""
        matched, ratio = self.match_score(intervals, chord_type)
        return matched >= self.min_matched_tones and ratio >= self.min_match_ratio

    def identify(self, names: Sequence[str]) -> Optional[Tuple[str, ChordType]]:
        """
        Identify a chord from a set of pitch-class names.

        Each name is tried as root in the order given and the first root
        with any matching chord type wins, so symmetric or ambiguous sets
        resolve to the earliest observed root. For that root, the type
        matching the most tones wins (C-E-G-A# is a dominant 7th, not the
        major triad inside it); remaining ties go to the higher match ratio,
        then declaration order.

        Args:
            names: De-duplicated pitch-class names, first-seen order

        Returns:
            Tuple of (root, chord type), or None if nothing matches
        """
        if len(names) < 2:
            return None

        for root in names:
            intervals = sorted({interval(root, name) for name in names})

            best = None
            best_score = None
            for chord_type in ChordType:
                if not self.matches(intervals, chord_type):
                    continue
                score = self.match_score(intervals, chord_type)
                if best_score is None or score > best_score:
                    best, best_score = chord_type, score

            if best is not None:
                return root, best

        return None

    def detect(self, notes: Sequence[ConsolidatedNote]) -> List[Chord]:
        """
        Detect chords from consolidated notes.

        Windows with fewer than min_notes notes, or whose notes match no
        chord, produce nothing.

        Args:
            notes: Consolidated notes in time order

        Returns:
            Chords in window order
        """
        chords = []

        for bucket in self.group_by_window(notes).values():
            if len(bucket) < self.min_notes:
                continue

            names = tuple(OrderedDict.fromkeys(n.name for n in bucket))
            found = self.identify(names)
            if found is None:
                continue

            root, chord_type = found
            chords.append(
                Chord(
                    root=root,
                    type=chord_type,
                    notes=names,
                    start_time=min(n.start_time for n in bucket),
                    end_time=max(n.end_time for n in bucket),
                )
            )

        return chords
