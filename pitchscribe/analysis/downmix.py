"""Channel downmixing."""

import numpy as np

from ..core import SampleBuffer


def to_mono(buffer: SampleBuffer) -> np.ndarray:
    """
    Reduce a multi-channel buffer to one channel by per-sample averaging.

    Args:
        buffer: Audio buffer with one or more channels

    Returns:
        Mono signal with as many samples as the buffer. A single-channel
        buffer comes back as a read-only view of its only channel.
    """
    if buffer.n_channels == 1:
        mono = buffer.channels[0].view()
        mono.flags.writeable = False
        return mono

    return buffer.channels.mean(axis=0)
