"""Tests for downmixing, segmentation and pitch estimation."""

import pytest
import numpy as np
from pathlib import Path
import sys

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from pitchscribe.core import SampleBuffer
from pitchscribe.analysis import (
    PitchEstimator,
    TempoAnalyzer,
    count_segments,
    hann_window,
    hop_size,
    iter_segments,
    to_mono,
)

SR = 44100


def generate_sine_wave(freq: float, duration: float, sr: int = SR, amplitude: float = 0.8) -> np.ndarray:
    """Generate a sine wave at given frequency."""
    t = np.arange(int(sr * duration)) / sr
    return amplitude * np.sin(2 * np.pi * freq * t)


class TestDownmix:
    """Tests for to_mono."""

    def test_stereo_average(self):
        buffer = SampleBuffer.from_channels([[1.0, 0.5, -1.0], [0.0, 0.5, 1.0]], SR)
        np.testing.assert_allclose(to_mono(buffer), [0.5, 0.5, 0.0])

    def test_three_channels(self):
        buffer = SampleBuffer.from_channels([[0.3], [0.6], [0.9]], SR)
        np.testing.assert_allclose(to_mono(buffer), [0.6])

    def test_mono_unchanged(self):
        samples = np.array([0.1, -0.2, 0.3])
        buffer = SampleBuffer.from_mono(samples, SR)
        mono = to_mono(buffer)
        np.testing.assert_array_equal(mono, samples)
        # Caller's data cannot be written through the returned view
        assert not mono.flags.writeable

    def test_zero_length(self):
        buffer = SampleBuffer.from_channels([[], []], SR)
        assert len(to_mono(buffer)) == 0

    def test_does_not_modify_input(self):
        channels = np.array([[1.0, 2.0], [3.0, 4.0]])
        buffer = SampleBuffer(channels.copy(), SR)
        to_mono(buffer)
        np.testing.assert_array_equal(buffer.channels, channels)


class TestSegmenter:
    """Tests for iter_segments."""

    def test_offsets_and_overlap(self):
        signal = np.arange(10, dtype=float)
        segments = list(iter_segments(signal, 4))

        assert [s[0] for s in segments] == [0, 2, 4, 6]
        assert all(len(s) == 4 for s in segments)

    def test_tail_dropped(self):
        signal = np.arange(11, dtype=float)
        segments = list(iter_segments(signal, 4))
        # Offset 8 would need samples 8..11
        assert segments[-1][0] == 6
        assert len(segments) == 4

    def test_exact_fit_included(self):
        signal = np.arange(8, dtype=float)
        segments = list(iter_segments(signal, 4))
        assert [s[0] for s in segments] == [0, 2, 4]

    def test_signal_shorter_than_segment(self):
        assert list(iter_segments(np.zeros(3), 4)) == []
        assert count_segments(3, 4) == 0

    def test_count_matches_iteration(self):
        for n in (0, 4095, 4096, 4097, 44100):
            assert count_segments(n, 4096) == len(list(iter_segments(np.zeros(n), 4096)))

    def test_hop_size(self):
        assert hop_size(4096) == 2048

    def test_single_consumption(self):
        segments = iter_segments(np.zeros(16), 4)
        assert len(list(segments)) == 7
        assert list(segments) == []


class TestHannWindow:
    def test_formula(self):
        n = 16
        i = np.arange(n)
        expected = 0.5 * (1 - np.cos(2 * np.pi * i / (n - 1)))
        np.testing.assert_allclose(hann_window(n), expected, atol=1e-12)

    def test_endpoints_zero(self):
        window = hann_window(4096)
        assert window[0] == pytest.approx(0.0)
        assert window[-1] == pytest.approx(0.0)


class TestPitchEstimator:
    """Tests for autocorrelation pitch estimation."""

    @pytest.fixture
    def estimator(self):
        return PitchEstimator(sample_rate=SR)

    def test_lag_bounds(self, estimator):
        assert estimator.min_lag == 44  # floor(44100 / 1000)
        assert estimator.max_lag == 552  # ceil(44100 / 80)

    def test_autocorrelation_matches_direct_sum(self, estimator):
        rng = np.random.default_rng(0)
        segment = rng.uniform(-1, 1, 1024)
        windowed = segment * hann_window(1024)

        corr = estimator.autocorrelate(segment)
        for lag in (0, 44, 100, 551):
            expected = np.dot(windowed[: 1024 - lag], windowed[lag:])
            assert corr[lag] == pytest.approx(expected, rel=1e-6, abs=1e-9)

    @pytest.mark.parametrize("freq", [110.0, 196.0, 261.63, 440.0, 659.25, 880.0])
    def test_sine_recovered_within_one_lag(self, estimator, freq):
        segment = generate_sine_wave(freq, 4096 / SR)[:4096]
        estimate = estimator.estimate(segment)

        assert estimate is not None
        assert abs(SR / estimate - SR / freq) <= 1.0

    def test_silence_has_no_pitch(self, estimator):
        assert estimator.estimate(np.zeros(4096)) is None

    def test_below_range_discarded(self, estimator):
        # 50Hz has a period longer than the lag search
        segment = generate_sine_wave(50.0, 4096 / SR)[:4096]
        assert estimator.estimate(segment) is None

    def test_segment_shorter_than_min_lag(self, estimator):
        assert estimator.estimate(np.ones(20)) is None

    def test_detect_timing(self, estimator):
        segments = [generate_sine_wave(440.0, 4096 / SR)[:4096]] * 3
        samples = estimator.detect(segments, 4096)

        duration = 4096 / SR
        assert len(samples) == 3
        for i, sample in enumerate(samples):
            assert sample.start_time == pytest.approx(i * duration * 0.5)
            assert sample.end_time == pytest.approx(sample.start_time + duration)
            assert sample.note.label == "A4"

    def test_detect_skips_unpitched_segments(self, estimator):
        tone = generate_sine_wave(440.0, 4096 / SR)[:4096]
        samples = estimator.detect([tone, np.zeros(4096), tone], 4096)

        # No placeholder for the silent segment; timing keeps its index
        assert len(samples) == 2
        assert samples[1].start_time == pytest.approx(2 * (4096 / SR) * 0.5)

    def test_parallel_matches_serial(self):
        signal = np.concatenate([
            generate_sine_wave(220.0, 0.5),
            np.zeros(SR // 4),
            generate_sine_wave(330.0, 0.5),
        ])
        serial = PitchEstimator(SR).detect(iter_segments(signal, 4096), 4096)
        parallel = PitchEstimator(SR, n_workers=4).detect(iter_segments(signal, 4096), 4096)

        assert serial == parallel


class TestTempoAnalyzer:
    """Tests for TempoAnalyzer."""

    def test_silence_uses_default(self):
        info = TempoAnalyzer().analyze(np.zeros(SR * 2), SR)
        assert info.bpm == 120.0
        assert not info.estimated
        assert len(info.beat_times) == 0

    def test_short_audio_uses_default(self):
        info = TempoAnalyzer(default_tempo=90.0).analyze(np.ones(100), SR)
        assert info.bpm == 90.0
        assert not info.estimated

    def test_click_track(self):
        # Clicks every 0.5s (120 BPM); sustained tones may not give a clear beat
        audio = np.zeros(SR * 8)
        click = generate_sine_wave(1000.0, 0.02)
        for start in range(0, len(audio) - len(click), SR // 2):
            audio[start:start + len(click)] = click

        info = TempoAnalyzer().analyze(audio, SR)
        assert info.bpm > 0
