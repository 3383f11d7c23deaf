"""Global constants for pitchscribe."""

# Pitch names, chromatic order starting at C
PITCH_NAMES = ("C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B")

# Tuning reference
A4_FREQUENCY = 440.0
SEMITONES_PER_OCTAVE = 12
CENTS_PER_OCTAVE = 1200

# Audio processing defaults
DEFAULT_SR = 44100
DEFAULT_SEGMENT_LENGTH = 4096
DEFAULT_MIN_FREQUENCY = 80.0  # Around E2
DEFAULT_MAX_FREQUENCY = 1000.0  # Around B5

# Note/chord grouping defaults
DEFAULT_GAP_TOLERANCE = 0.05  # 50ms
DEFAULT_CHORD_WINDOW = 0.2  # 200ms
DEFAULT_MIN_CHORD_NOTES = 2
DEFAULT_MIN_MATCHED_TONES = 3
DEFAULT_MIN_MATCH_RATIO = 0.75

# Notation defaults
DEFAULT_TEMPO = 120.0
DEFAULT_TIME_SIGNATURE = (4, 4)
DEFAULT_CLEF = "treble"
DEFAULT_KEY = "C"

# MIDI ranges
MIDI_MIN = 0
MIDI_MAX = 127
