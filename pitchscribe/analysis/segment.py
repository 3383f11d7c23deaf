"""Fixed-length, 50% overlapping analysis windows."""

from typing import Iterator

import numpy as np


def hop_size(segment_length: int) -> int:
    """Stride between consecutive segments (half a segment)."""
    return segment_length // 2


def count_segments(n_samples: int, segment_length: int) -> int:
    """Number of full segments that fit in n_samples."""
    if n_samples < segment_length:
        return 0
    return (n_samples - segment_length) // hop_size(segment_length) + 1


def iter_segments(signal: np.ndarray, segment_length: int) -> Iterator[np.ndarray]:
    """
    Slice a mono signal into overlapping windows.

    Windows start at 0, hop, 2*hop, ... and every one is exactly
    segment_length long; a shorter tail is dropped, not padded.

    Args:
        signal: Mono samples
        segment_length: Window size in samples

    Yields:
        Views into signal
    """
    hop = hop_size(segment_length)
    for i in range(count_segments(len(signal), segment_length)):
        offset = i * hop
        yield signal[offset:offset + segment_length]
