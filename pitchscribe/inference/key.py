"""Key detection - Identify the tonal center of a transcription.

Correlates the duration-weighted pitch-class histogram of the notes with
rotated Krumhansl-Schmuckler major and minor profiles.
"""

from dataclasses import dataclass, field
from typing import List, Sequence

import numpy as np

from ..core import ConsolidatedNote, PITCH_NAMES
from ..core.constants import DEFAULT_KEY


@dataclass
class KeyCandidate:
    """A candidate key with its score."""
    root: str
    mode: str
    correlation: float

    @property
    def name(self) -> str:
        return f"{self.root} {self.mode}"


@dataclass
class KeyInfo:
    """Container for key detection results."""

    root: str  # Key root note (e.g., "C", "F#")
    mode: str  # "major" or "minor"
    confidence: float  # 0.0 - 1.0
    pitch_class_distribution: np.ndarray = field(default_factory=lambda: np.zeros(12))
    alternatives: List[KeyCandidate] = field(default_factory=list)

    @property
    def label(self) -> str:
        """Human-readable key label, e.g. 'A minor'."""
        return f"{self.root} {self.mode}"


class KeyDetector:
    """Detect musical key from consolidated notes."""

    # Krumhansl-Schmuckler key profiles (cognitive-based)
    MAJOR_PROFILE = np.array(
        [6.35, 2.23, 3.48, 2.33, 4.38, 4.09, 2.52, 5.19, 2.39, 3.66, 2.29, 2.88]
    )
    MINOR_PROFILE = np.array(
        [6.33, 2.68, 3.52, 5.38, 2.60, 3.53, 2.54, 4.75, 3.98, 2.69, 3.34, 3.17]
    )

    def __init__(self, min_notes: int = 3):
        """
        Initialize KeyDetector.

        Args:
            min_notes: Minimum notes required for a detection; below this the
                default key is reported with zero confidence
        """
        self.min_notes = min_notes

    def analyze(self, notes: Sequence[ConsolidatedNote]) -> KeyInfo:
        """
        Detect the key of a note sequence.

        Args:
            notes: Consolidated notes

        Returns:
            KeyInfo with the best key and the next three alternatives
        """
        if len(notes) < self.min_notes:
            return KeyInfo(root=DEFAULT_KEY, mode="major", confidence=0.0)

        distribution = self.pitch_class_distribution(notes)
        candidates = self._get_all_candidates(distribution)

        # Stable sort keeps C major first among equal scores
        candidates.sort(key=lambda c: c.correlation, reverse=True)
        best = candidates[0]

        # Correlation is in [-1, 1]; map to [0, 1]
        confidence = max(0.0, min(1.0, (best.correlation + 1) / 2))

        return KeyInfo(
            root=best.root,
            mode=best.mode,
            confidence=confidence,
            pitch_class_distribution=distribution,
            alternatives=candidates[1:4],
        )

    def pitch_class_distribution(self, notes: Sequence[ConsolidatedNote]) -> np.ndarray:
        """
        Build a duration-weighted 12-bin pitch class histogram (C = 0).

        Returns:
            Array normalized to sum to 1 (all zeros for empty input)
        """
        pitch_classes = np.zeros(12)
        for note in notes:
            pitch_classes[note.note.pitch_class] += max(note.duration, 0.0)

        if pitch_classes.sum() > 0:
            pitch_classes /= pitch_classes.sum()

        return pitch_classes

    def _get_all_candidates(self, distribution: np.ndarray) -> List[KeyCandidate]:
        candidates = []

        for shift in range(12):
            root = PITCH_NAMES[shift]
            rotated = np.roll(distribution, -shift)
            candidates.append(
                KeyCandidate(root, "major", self._correlate(rotated, self.MAJOR_PROFILE))
            )
            candidates.append(
                KeyCandidate(root, "minor", self._correlate(rotated, self.MINOR_PROFILE))
            )

        return candidates

    def _correlate(self, distribution: np.ndarray, profile: np.ndarray) -> float:
        """Pearson correlation, 0.0 for degenerate input."""
        if distribution.std() == 0 or profile.std() == 0:
            return 0.0

        corr = np.corrcoef(distribution, profile)[0, 1]

        # Handle NaN (can occur with degenerate input)
        if np.isnan(corr):
            return 0.0

        return float(corr)
