"""Analysis layer - Low-level signal analysis.

This layer turns a sample buffer into pitch samples:
- Downmixing to mono
- Overlapping segmentation
- Autocorrelation pitch estimation
- Tempo estimation
"""

from .downmix import to_mono
from .segment import iter_segments, count_segments, hop_size
from .pitch import PitchEstimator, hann_window
from .tempo import TempoAnalyzer, TempoInfo

__all__ = [
    "to_mono",
    "iter_segments",
    "count_segments",
    "hop_size",
    "PitchEstimator",
    "hann_window",
    "TempoAnalyzer",
    "TempoInfo",
]
