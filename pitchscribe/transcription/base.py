"""Base classes for transcription."""

from abc import ABC, abstractmethod

from ..core import SampleBuffer
from .result import TranscriptionResult


class Transcriber(ABC):
    """Abstract base class for audio-to-notation transcription."""

    @abstractmethod
    def analyze(self, buffer: SampleBuffer) -> TranscriptionResult:
        """
        Transcribe a sample buffer.

        Args:
            buffer: Decoded PCM audio

        Returns:
            Transcription result (possibly empty)

        Raises:
            InvalidAudioError: If the buffer is malformed
        """
        pass
