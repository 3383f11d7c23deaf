"""Audio loading - Decode files into sample buffers."""

from pathlib import Path
from typing import Optional, Union

import numpy as np
import librosa

from ..core import SampleBuffer


class AudioLoader:
    """Decodes audio files into SampleBuffers, keeping every channel."""

    SUPPORTED_FORMATS = {".wav", ".mp3", ".flac", ".ogg", ".m4a", ".mp4"}

    def __init__(
        self,
        target_sr: Optional[int] = None,
        normalize: bool = False,
    ):
        """
        Initialize AudioLoader.

        Args:
            target_sr: Resample to this rate (None keeps the file's rate)
            normalize: Peak-normalize to [-1, 1] if True
        """
        self.target_sr = target_sr
        self.normalize = normalize

    def load(self, path: Union[str, Path]) -> SampleBuffer:
        """
        Load an audio file.

        Args:
            path: Path to audio file

        Returns:
            SampleBuffer with shape (n_channels, n_samples)

        Raises:
            ValueError: If file format not supported
            FileNotFoundError: If file doesn't exist
        """
        path = Path(path)

        if not path.exists():
            raise FileNotFoundError(f"Audio file not found: {path}")

        if path.suffix.lower() not in self.SUPPORTED_FORMATS:
            raise ValueError(
                f"Unsupported format: {path.suffix}. "
                f"Supported: {self.SUPPORTED_FORMATS}"
            )

        audio, sr = librosa.load(str(path), sr=self.target_sr, mono=False)
        audio = np.atleast_2d(audio).astype(np.float64)

        if self.normalize:
            audio = self._normalize(audio)

        return SampleBuffer(channels=audio, sample_rate=int(sr))

    def _normalize(self, audio: np.ndarray) -> np.ndarray:
        """Normalize audio to [-1, 1] range using peak normalization."""
        peak = np.abs(audio).max() if audio.size else 0.0
        if peak > 0:
            audio = audio / peak
        return audio
