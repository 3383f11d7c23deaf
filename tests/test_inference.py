"""Tests for chord identification and key detection.

Tests cover:
- Chord template matching and thresholds
- Time-window grouping
- Root tie-breaking
- Key detection from consolidated notes
"""

import pytest
from pathlib import Path
import sys

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from pitchscribe.core import PITCH_NAMES, PitchSample, frequency_to_note
from pitchscribe.inference import ChordIdentifier, ChordType, KeyDetector
from pitchscribe.inference.chords import interval


# ============================================================================
# Test Fixtures - Helper functions to create test data
# ============================================================================

def note_freq(label: str) -> float:
    """Frequency of a note label like 'C4' or 'A#3'."""
    name, octave = label[:-1], int(label[-1])
    midi = (octave + 1) * 12 + PITCH_NAMES.index(name)
    return 440.0 * (2 ** ((midi - 69) / 12.0))


def make_note(label: str, start: float = 0.0, duration: float = 0.1) -> PitchSample:
    freq = note_freq(label)
    return PitchSample(
        frequency=freq,
        note=frequency_to_note(freq),
        start_time=start,
        end_time=start + duration,
    )


def make_chord_notes(labels, start: float = 0.0, spacing: float = 0.02):
    """Notes starting close together so they share a chord window."""
    return [make_note(label, start + i * spacing) for i, label in enumerate(labels)]


class TestChordType:
    def test_vocabulary(self):
        assert len(ChordType) == 9
        assert ChordType.MAJOR.intervals == (0, 4, 7)
        assert ChordType.DOMINANT_7.intervals == (0, 4, 7, 10)
        assert ChordType.SUS2.label == "Sus2"

    def test_intervals_start_at_root(self):
        for chord_type in ChordType:
            assert chord_type.intervals[0] == 0
            assert list(chord_type.intervals) == sorted(chord_type.intervals)


class TestInterval:
    def test_interval_wraps(self):
        assert interval("C", "E") == 4
        assert interval("A", "C") == 3
        assert interval("G", "C") == 5
        assert interval("C", "C") == 0


class TestChordIdentifier:
    """Tests for ChordIdentifier."""

    @pytest.fixture
    def identifier(self):
        return ChordIdentifier()

    def test_c_major(self, identifier):
        chords = identifier.detect(make_chord_notes(["C4", "E4", "G4"]))

        assert len(chords) == 1
        assert chords[0].root == "C"
        assert chords[0].type == ChordType.MAJOR
        assert chords[0].symbol == "C"
        assert chords[0].name == "C Major"

    def test_dominant_seventh_preferred_over_triad(self, identifier):
        chords = identifier.detect(make_chord_notes(["C4", "E4", "G4", "A#4"]))

        assert len(chords) == 1
        assert chords[0].root == "C"
        assert chords[0].type == ChordType.DOMINANT_7
        assert chords[0].symbol == "C7"

    @pytest.mark.parametrize(
        "labels, root, chord_type",
        [
            (["A3", "C4", "E4"], "A", ChordType.MINOR),
            (["B3", "D4", "F4"], "B", ChordType.DIMINISHED),
            (["C4", "E4", "G#4"], "C", ChordType.AUGMENTED),
            (["C4", "E4", "G4", "B4"], "C", ChordType.MAJOR_7),
            (["D4", "F4", "A4", "C5"], "D", ChordType.MINOR_7),
            (["G3", "C4", "D4"], "G", ChordType.SUS4),
            (["D4", "E4", "A4"], "D", ChordType.SUS2),
        ],
    )
    def test_chord_types(self, identifier, labels, root, chord_type):
        chords = identifier.detect(make_chord_notes(labels))
        assert len(chords) == 1
        assert (chords[0].root, chords[0].type) == (root, chord_type)

    def test_octaves_ignored(self, identifier):
        chords = identifier.detect(make_chord_notes(["C3", "E5", "G4"]))
        assert chords[0].type == ChordType.MAJOR
        assert chords[0].notes == ("C", "E", "G")

    def test_duplicate_names_collapse(self, identifier):
        chords = identifier.detect(make_chord_notes(["C4", "C5", "E4", "G4"]))
        assert chords[0].notes == ("C", "E", "G")

    def test_first_seen_root_wins(self, identifier):
        # The augmented triad is symmetric: every member is a valid root
        chords = identifier.detect(make_chord_notes(["E4", "G#4", "C5"]))
        assert chords[0].root == "E"
        assert chords[0].type == ChordType.AUGMENTED

    def test_later_root_when_first_does_not_match(self, identifier):
        # E as root gives {0, 3, 8}: no template; C as root gives major
        chords = identifier.detect(make_chord_notes(["E4", "G4", "C5"]))
        assert chords[0].root == "C"
        assert chords[0].type == ChordType.MAJOR

    def test_two_notes_not_enough_tones(self, identifier):
        assert identifier.detect(make_chord_notes(["C4", "G4"])) == []

    def test_single_note_window_skipped(self, identifier):
        assert identifier.detect([make_note("C4")]) == []

    def test_unmatched_window_dropped(self, identifier):
        assert identifier.detect(make_chord_notes(["C4", "C#4", "D4"])) == []

    def test_notes_in_different_windows(self, identifier):
        notes = [make_note("C4", 0.0), make_note("E4", 0.25), make_note("G4", 0.45)]
        assert identifier.detect(notes) == []

    def test_chord_time_span(self, identifier):
        notes = [
            make_note("C4", 0.02, duration=0.5),
            make_note("E4", 0.05, duration=0.1),
            make_note("G4", 0.10, duration=0.3),
        ]
        chord = identifier.detect(notes)[0]

        assert chord.start_time == pytest.approx(0.02)
        assert chord.end_time == pytest.approx(0.52)
        assert chord.duration == pytest.approx(0.5)

    def test_windows_in_time_order(self, identifier):
        notes = (
            make_chord_notes(["C4", "E4", "G4"], start=0.0)
            + make_chord_notes(["A3", "C4", "E4"], start=0.4)
            + make_chord_notes(["G3", "B3", "D4"], start=0.8)
        )
        chords = identifier.detect(notes)
        assert [c.symbol for c in chords] == ["C", "Am", "G"]
        starts = [c.start_time for c in chords]
        assert starts == sorted(starts)

    def test_identify_directly(self, identifier):
        assert identifier.identify(["F", "A", "C"]) == ("F", ChordType.MAJOR)
        assert identifier.identify(["C"]) is None
        assert identifier.identify([]) is None

    def test_match_score(self, identifier):
        assert identifier.match_score([0, 4, 7], ChordType.MAJOR_7) == (3, 0.75)
        assert identifier.match_score([0, 4], ChordType.MAJOR) == (2, 2 / 3)

    def test_partial_seventh_matches_threshold(self, identifier):
        # Three of four tones (75%) is enough
        assert identifier.matches([0, 4, 11], ChordType.MAJOR_7)
        assert not identifier.matches([0, 4], ChordType.MAJOR_7)

    def test_custom_thresholds(self):
        strict = ChordIdentifier(min_match_ratio=1.0)
        assert strict.identify(["C", "E", "G"]) == ("C", ChordType.MAJOR)
        # No triad fully present and no seventh fully present
        assert strict.identify(["C", "E", "B"]) is None

    def test_to_dict(self, identifier):
        chord = identifier.detect(make_chord_notes(["C4", "E4", "G4"]))[0]
        data = chord.to_dict()
        assert data["root"] == "C"
        assert data["type"] == "Major"
        assert data["notes"] == ["C", "E", "G"]
        assert data["duration"] == pytest.approx(data["endTime"] - data["startTime"])


class TestKeyDetector:
    """Tests for KeyDetector."""

    def test_c_major_triad(self):
        notes = [make_note(label, i * 1.0, duration=1.0) for i, label in enumerate(["C4", "E4", "G4"])]
        info = KeyDetector().analyze(notes)

        assert info.label == "C major"
        assert 0.0 <= info.confidence <= 1.0
        assert len(info.alternatives) == 3

    def test_a_minor_triad(self):
        notes = [
            make_note("A3", 0.0, duration=2.0),
            make_note("C4", 2.0, duration=1.0),
            make_note("E4", 3.0, duration=1.0),
        ]
        assert KeyDetector().analyze(notes).label == "A minor"

    def test_too_few_notes(self):
        info = KeyDetector().analyze([make_note("F#4")])
        assert info.label == "C major"
        assert info.confidence == 0.0

    def test_distribution_weighted_by_duration(self):
        notes = [make_note("C4", 0.0, duration=3.0), make_note("G4", 3.0, duration=1.0)]
        distribution = KeyDetector().pitch_class_distribution(notes)

        assert distribution.sum() == pytest.approx(1.0)
        assert distribution[0] == pytest.approx(0.75)
        assert distribution[7] == pytest.approx(0.25)
