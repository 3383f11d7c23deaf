"""Autocorrelation pitch estimation."""

import math
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List, Optional

import numpy as np
import librosa

from ..core import PitchSample, frequency_to_note
from ..core.constants import DEFAULT_MAX_FREQUENCY, DEFAULT_MIN_FREQUENCY


def hann_window(length: int) -> np.ndarray:
    """Symmetric Hann window: 0.5 * (1 - cos(2*pi*i / (L-1)))."""
    return np.hanning(length)


class PitchEstimator:
    """Estimate the fundamental frequency of short segments.

    Each segment is Hann-windowed, autocorrelated, and the lag with the
    strongest positive correlation inside the detection range gives the
    period. Worst-case cost per segment is bounded by the lag range.
    """

    def __init__(
        self,
        sample_rate: int,
        min_frequency: float = DEFAULT_MIN_FREQUENCY,
        max_frequency: float = DEFAULT_MAX_FREQUENCY,
        n_workers: int = 1,
    ):
        """
        Initialize PitchEstimator.

        Args:
            sample_rate: Sample rate of the segments in Hz
            min_frequency: Lowest detectable pitch in Hz
            max_frequency: Highest detectable pitch in Hz
            n_workers: Threads used by detect() (1 = run inline)
        """
        self.sample_rate = sample_rate
        self.min_frequency = min_frequency
        self.max_frequency = max_frequency
        self.n_workers = n_workers

    @property
    def min_lag(self) -> int:
        """Shortest period searched, in samples."""
        return int(math.floor(self.sample_rate / self.max_frequency))

    @property
    def max_lag(self) -> int:
        """Exclusive upper bound of the lag search, in samples."""
        return int(math.ceil(self.sample_rate / self.min_frequency))

    def autocorrelate(self, segment: np.ndarray) -> np.ndarray:
        """
        Raw autocorrelation of the windowed segment.

        Returns:
            R where R[lag] = sum_i x[i] * x[i + lag], for lags below
            min(max_lag, len(segment))
        """
        windowed = segment * hann_window(len(segment))
        max_size = min(self.max_lag, len(segment))
        return librosa.autocorrelate(windowed, max_size=max_size)

    def estimate(self, segment: np.ndarray) -> Optional[float]:
        """
        Estimate the fundamental frequency of one segment.

        Args:
            segment: Mono samples

        Returns:
            Frequency in Hz, or None if there is no periodicity in range
        """
        if len(segment) < 2:
            return None

        corr = self.autocorrelate(segment)
        lo = max(self.min_lag, 1)
        if lo >= len(corr):
            return None

        # argmax returns the first (lowest) lag on ties
        best = lo + int(np.argmax(corr[lo:]))
        if corr[best] <= 0:
            return None

        frequency = self.sample_rate / best
        if frequency < self.min_frequency or frequency > self.max_frequency:
            return None
        return frequency

    def detect(self, segments: Iterable[np.ndarray], segment_length: int) -> List[PitchSample]:
        """
        Estimate pitch for consecutive 50%-overlapping segments.

        Args:
            segments: Segments in signal order
            segment_length: Samples per segment, for timing

        Returns:
            One PitchSample per segment with a pitch in range, in segment order
        """
        if self.n_workers > 1:
            segments = list(segments)
            with ThreadPoolExecutor(max_workers=self.n_workers) as executor:
                # map keeps input order, so index i is segment i
                frequencies = list(executor.map(self.estimate, segments))
        else:
            frequencies = [self.estimate(segment) for segment in segments]

        segment_duration = segment_length / self.sample_rate
        samples = []

        for i, frequency in enumerate(frequencies):
            if frequency is None:
                continue

            start_time = i * segment_duration * 0.5
            samples.append(
                PitchSample(
                    frequency=frequency,
                    note=frequency_to_note(frequency),
                    start_time=start_time,
                    end_time=start_time + segment_duration,
                )
            )

        return samples
