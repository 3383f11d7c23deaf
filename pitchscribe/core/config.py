"""Analysis configuration."""

from dataclasses import dataclass, replace
from typing import Any, Dict, Tuple

from .constants import (
    DEFAULT_CHORD_WINDOW,
    DEFAULT_CLEF,
    DEFAULT_GAP_TOLERANCE,
    DEFAULT_MAX_FREQUENCY,
    DEFAULT_MIN_CHORD_NOTES,
    DEFAULT_MIN_FREQUENCY,
    DEFAULT_MIN_MATCH_RATIO,
    DEFAULT_MIN_MATCHED_TONES,
    DEFAULT_SEGMENT_LENGTH,
    DEFAULT_SR,
    DEFAULT_TEMPO,
    DEFAULT_TIME_SIGNATURE,
)


@dataclass(frozen=True)
class AnalysisConfig:
    """Configuration for the audio-to-notation pipeline.

    Attributes:
        sample_rate: Sample rate assumed when the buffer has none (default: 44100)
        segment_length: Analysis window size in samples (default: 4096)
        min_frequency: Lowest detectable pitch in Hz (default: 80)
        max_frequency: Highest detectable pitch in Hz (default: 1000)
        gap_tolerance: Max gap in seconds when merging same-pitch segments (default: 0.05)
        chord_time_window: Width of chord buckets in seconds (default: 0.2)
        min_chord_notes: Notes needed in a bucket to attempt a chord (default: 2)
        min_matched_tones: Chord tones that must be present (default: 3)
        min_match_ratio: Fraction of chord tones that must be present (default: 0.75)
        time_signature: Sheet music time signature (default: (4, 4))
        clef: Sheet music clef (default: "treble")
        n_workers: Threads used for per-segment pitch estimation (default: 1)
        detect_key: Estimate the key from the consolidated notes (default: True)
        estimate_tempo: Run beat tracking on the signal (default: False)
        default_tempo: Tempo reported when not estimated (default: 120)
    """

    sample_rate: int = DEFAULT_SR
    segment_length: int = DEFAULT_SEGMENT_LENGTH
    min_frequency: float = DEFAULT_MIN_FREQUENCY
    max_frequency: float = DEFAULT_MAX_FREQUENCY
    gap_tolerance: float = DEFAULT_GAP_TOLERANCE
    chord_time_window: float = DEFAULT_CHORD_WINDOW
    min_chord_notes: int = DEFAULT_MIN_CHORD_NOTES
    min_matched_tones: int = DEFAULT_MIN_MATCHED_TONES
    min_match_ratio: float = DEFAULT_MIN_MATCH_RATIO
    time_signature: Tuple[int, int] = DEFAULT_TIME_SIGNATURE
    clef: str = DEFAULT_CLEF
    n_workers: int = 1
    detect_key: bool = True
    estimate_tempo: bool = False
    default_tempo: float = DEFAULT_TEMPO

    # Detection ranges for common sources
    PRESETS = {
        "voice": {"min_frequency": 80.0, "max_frequency": 1000.0},
        "instrument": {"min_frequency": 60.0, "max_frequency": 2000.0},
        "bass": {"min_frequency": 40.0, "max_frequency": 400.0, "segment_length": 8192},
    }

    def __post_init__(self):
        if self.sample_rate <= 0:
            raise ValueError(f"sample_rate must be positive, got {self.sample_rate}")
        if self.segment_length < 2:
            raise ValueError(f"segment_length must be at least 2, got {self.segment_length}")
        if not 0 < self.min_frequency < self.max_frequency:
            raise ValueError(
                f"Need 0 < min_frequency < max_frequency, got "
                f"{self.min_frequency} and {self.max_frequency}"
            )
        if self.gap_tolerance < 0:
            raise ValueError(f"gap_tolerance must be >= 0, got {self.gap_tolerance}")
        if self.chord_time_window <= 0:
            raise ValueError(
                f"chord_time_window must be positive, got {self.chord_time_window}"
            )
        if not 0.0 <= self.min_match_ratio <= 1.0:
            raise ValueError(f"min_match_ratio must be in [0, 1], got {self.min_match_ratio}")
        if self.n_workers < 1:
            raise ValueError(f"n_workers must be >= 1, got {self.n_workers}")

    @classmethod
    def preset(cls, name: str, **overrides: Any) -> "AnalysisConfig":
        """
        Build a config from a named detection preset.

        Args:
            name: One of "voice", "instrument", "bass"
            **overrides: Any other field to set

        Raises:
            ValueError: If the preset is unknown
        """
        key = name.lower()
        if key not in cls.PRESETS:
            raise ValueError(
                f"Unknown preset: {name}. Available: {', '.join(sorted(cls.PRESETS))}"
            )
        return cls(**{**cls.PRESETS[key], **overrides})

    def with_overrides(self, **overrides: Any) -> "AnalysisConfig":
        """Copy with some fields changed (None values are ignored)."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sampleRate": self.sample_rate,
            "segmentLength": self.segment_length,
            "minFrequency": self.min_frequency,
            "maxFrequency": self.max_frequency,
            "gapTolerance": self.gap_tolerance,
            "chordTimeWindow": self.chord_time_window,
            "minMatchedTones": self.min_matched_tones,
            "minMatchRatio": self.min_match_ratio,
        }
