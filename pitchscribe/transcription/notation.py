"""Audio to notation transcription with autocorrelation pitch detection."""

import warnings
from typing import List, Optional

import numpy as np

from ..analysis import PitchEstimator, TempoAnalyzer, count_segments, iter_segments, to_mono
from ..core import AnalysisConfig, ConsolidatedNote, PitchSample, SampleBuffer
from ..inference import ChordIdentifier, KeyDetector
from ..processing import NoteConsolidator, SheetMusicQuantizer
from .base import Transcriber
from .result import SimpleNote, TranscriptionResult


class NotationTranscriber(Transcriber):
    """Transcribes a monophonic recording into notes, chords and sheet music.

    Pipeline (strictly forward, nothing kept between calls):
        buffer -> mono -> segments -> pitch samples -> consolidated notes
               -> {simple notes, chords, sheet music}
    """

    def __init__(self, config: Optional[AnalysisConfig] = None):
        """
        Initialize NotationTranscriber.

        Args:
            config: Analysis settings (defaults to AnalysisConfig())
        """
        self.config = config or AnalysisConfig()

        self.consolidator = NoteConsolidator(gap_tolerance=self.config.gap_tolerance)
        self.chord_identifier = ChordIdentifier(
            time_window=self.config.chord_time_window,
            min_notes=self.config.min_chord_notes,
            min_matched_tones=self.config.min_matched_tones,
            min_match_ratio=self.config.min_match_ratio,
        )
        self.quantizer = SheetMusicQuantizer(
            time_signature=self.config.time_signature,
            clef=self.config.clef,
        )
        self.key_detector = KeyDetector()

    def analyze(self, buffer: SampleBuffer) -> TranscriptionResult:
        """
        Transcribe a sample buffer.

        Silent or unpitched audio is not an error: it gives a result whose
        note, chord and sheet-music sequences are empty.

        Args:
            buffer: Decoded PCM audio

        Returns:
            TranscriptionResult

        Raises:
            InvalidAudioError: If the buffer is malformed
        """
        buffer.validate()
        sr = self._resolve_sample_rate(buffer)

        mono = to_mono(buffer)
        notes = self.detect_notes(mono, sr)

        key_info = None
        if self.config.detect_key:
            key_info = self.key_detector.analyze(notes)

        tempo = self.config.default_tempo
        if self.config.estimate_tempo:
            tempo = TempoAnalyzer(default_tempo=self.config.default_tempo).analyze(mono, sr).bpm

        metadata = {
            "sampleRate": sr,
            "channels": buffer.n_channels,
            "duration": buffer.n_samples / sr,
            "segments": count_segments(len(mono), self.config.segment_length),
            "config": self.config.to_dict(),
        }
        if key_info is not None:
            metadata["keyConfidence"] = key_info.confidence

        result = TranscriptionResult(
            simple_notes=[SimpleNote.from_consolidated(n) for n in notes],
            complex_chords=self.chord_identifier.detect(notes),
            sheet_music=self.quantizer.quantize(notes),
            raw_pitch_data=notes,
            detected_tempo=tempo,
            metadata=metadata,
        )
        if key_info is not None:
            result.detected_key = key_info.label

        return result

    def detect_pitches(self, mono: np.ndarray, sr: int) -> List[PitchSample]:
        """Pitch samples for every in-range segment of a mono signal."""
        estimator = PitchEstimator(
            sample_rate=sr,
            min_frequency=self.config.min_frequency,
            max_frequency=self.config.max_frequency,
            n_workers=self.config.n_workers,
        )
        segments = iter_segments(mono, self.config.segment_length)
        return estimator.detect(segments, self.config.segment_length)

    def detect_notes(self, mono: np.ndarray, sr: int) -> List[ConsolidatedNote]:
        """Consolidated notes of a mono signal."""
        return self.consolidator.consolidate(self.detect_pitches(mono, sr))

    def _resolve_sample_rate(self, buffer: SampleBuffer) -> int:
        if buffer.sample_rate is None:
            warnings.warn(
                f"Buffer has no sample rate; assuming {self.config.sample_rate} Hz"
            )
            return self.config.sample_rate
        return int(buffer.sample_rate)


def analyze(
    buffer: SampleBuffer,
    config: Optional[AnalysisConfig] = None,
) -> TranscriptionResult:
    """
    Transcribe a sample buffer into notes, chords and sheet music.

    Args:
        buffer: Decoded PCM audio
        config: Analysis settings (defaults to AnalysisConfig())

    Returns:
        TranscriptionResult

    Raises:
        InvalidAudioError: If the buffer is malformed
    """
    return NotationTranscriber(config).analyze(buffer)
