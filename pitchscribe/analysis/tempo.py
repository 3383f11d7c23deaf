"""Tempo estimation."""

import warnings
from dataclasses import dataclass

import numpy as np
import librosa

from ..core.constants import DEFAULT_TEMPO


@dataclass
class TempoInfo:
    """Container for tempo analysis results."""

    bpm: float
    beat_times: np.ndarray  # Beat positions in seconds
    estimated: bool = True  # False when the default tempo was used


class TempoAnalyzer:
    """Estimate tempo from a mono signal with librosa's beat tracker."""

    def __init__(self, hop_length: int = 512, default_tempo: float = DEFAULT_TEMPO):
        self.hop_length = hop_length
        self.default_tempo = default_tempo

    def analyze(self, audio: np.ndarray, sr: int) -> TempoInfo:
        """
        Detect tempo and beat positions.

        Signals without a usable pulse (e.g., a sustained tone) can make the
        beat tracker return 0 BPM; those fall back to default_tempo with a
        warning.

        Args:
            audio: Mono audio array
            sr: Sample rate

        Returns:
            TempoInfo
        """
        audio = np.asarray(audio, dtype=np.float32)
        if audio.size < self.hop_length * 2 or not np.any(audio):
            return TempoInfo(self.default_tempo, np.array([]), estimated=False)

        tempo, beats = librosa.beat.beat_track(
            y=audio,
            sr=sr,
            hop_length=self.hop_length,
        )

        # Newer librosa versions return tempo as a 1-element array
        if isinstance(tempo, np.ndarray):
            tempo = float(tempo[0]) if tempo.size > 0 else 0.0

        beat_times = librosa.frames_to_time(beats, sr=sr, hop_length=self.hop_length)

        if not tempo or tempo <= 0:
            warnings.warn(
                f"Tempo detection failed; using default {self.default_tempo:.1f} BPM"
            )
            return TempoInfo(self.default_tempo, beat_times, estimated=False)

        return TempoInfo(float(tempo), beat_times)
