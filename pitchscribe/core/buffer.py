"""Decoded PCM sample buffer - the analyzer's only input."""

from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from .errors import InvalidAudioError


def _as_samples(samples) -> np.ndarray:
    """Convert a sample sequence to a float array."""
    try:
        return np.asarray(samples, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise InvalidAudioError(f"Samples must be numeric: {e}") from e


@dataclass(frozen=True)
class SampleBuffer:
    """Multi-channel floating point audio, samples normalized to [-1, 1].

    The buffer belongs to the caller. The analyzer only reads it.

    Attributes:
        channels: Array of shape (n_channels, n_samples)
        sample_rate: Samples per second, or None if unknown
    """

    channels: np.ndarray
    sample_rate: Optional[int] = None

    @classmethod
    def from_mono(cls, samples, sample_rate: Optional[int] = None) -> "SampleBuffer":
        """Wrap a single channel."""
        samples = _as_samples(samples)
        if samples.ndim != 1:
            raise InvalidAudioError(f"Mono samples must be one-dimensional, got {samples.shape}")
        return cls(samples[np.newaxis, :], sample_rate)

    @classmethod
    def from_channels(
        cls,
        channels: Sequence,
        sample_rate: Optional[int] = None,
    ) -> "SampleBuffer":
        """
        Build a buffer from per-channel sample sequences.

        Channels of unequal length are rejected here rather than truncated.

        Raises:
            InvalidAudioError: If there are no channels or lengths differ
        """
        arrays = [_as_samples(c) for c in channels]
        if not arrays:
            raise InvalidAudioError("Audio buffer has no channels")

        lengths = {a.shape[0] if a.ndim == 1 else -1 for a in arrays}
        if -1 in lengths:
            raise InvalidAudioError("Each channel must be a one-dimensional sample array")
        if len(lengths) > 1:
            raise InvalidAudioError(
                f"Channel lengths differ: {[a.shape[0] for a in arrays]}"
            )

        return cls(np.stack(arrays), sample_rate)

    @property
    def n_channels(self) -> int:
        return int(self.channels.shape[0]) if self.channels.ndim == 2 else 0

    @property
    def n_samples(self) -> int:
        return int(self.channels.shape[1]) if self.channels.ndim == 2 else 0

    @property
    def duration(self) -> float:
        """Duration in seconds (0.0 when the sample rate is unknown)."""
        if not self.sample_rate:
            return 0.0
        return self.n_samples / self.sample_rate

    def validate(self) -> None:
        """
        Check the buffer is usable for analysis.

        Raises:
            InvalidAudioError: On wrong shape, no channels, non-numeric or
                non-finite samples, or a zero, negative or fractional sample rate
        """
        channels = self.channels
        if not isinstance(channels, np.ndarray):
            raise InvalidAudioError(
                f"Channels must be a numpy array, got {type(channels).__name__}"
            )
        if channels.ndim != 2:
            raise InvalidAudioError(
                f"Channels must have shape (n_channels, n_samples), got {channels.shape}"
            )
        if channels.shape[0] == 0:
            raise InvalidAudioError("Audio buffer has no channels")
        if not np.issubdtype(channels.dtype, np.number) or np.iscomplexobj(channels):
            raise InvalidAudioError(f"Samples must be real numbers, got {channels.dtype}")
        if channels.size and not np.all(np.isfinite(channels)):
            raise InvalidAudioError("Samples contain NaN or infinite values")

        if self.sample_rate is not None:
            if isinstance(self.sample_rate, bool) or not isinstance(
                self.sample_rate, (int, float, np.integer, np.floating)
            ):
                raise InvalidAudioError(f"Invalid sample rate: {self.sample_rate!r}")
            if not np.isfinite(self.sample_rate) or self.sample_rate <= 0:
                raise InvalidAudioError(
                    f"Sample rate must be positive, got {self.sample_rate}"
                )
            if self.sample_rate != int(self.sample_rate):
                raise InvalidAudioError(
                    f"Sample rate must be a whole number of Hz, got {self.sample_rate}"
                )
