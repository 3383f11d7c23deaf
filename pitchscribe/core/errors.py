"""Exceptions raised by pitchscribe."""


class PitchscribeError(Exception):
    """Base class for pitchscribe errors."""


class InvalidAudioError(PitchscribeError, ValueError):
    """The sample buffer handed to the analyzer is malformed.

    Distinct from an empty transcription: silence or unpitched input is a
    successful analysis with no findings, not an error.
    """
