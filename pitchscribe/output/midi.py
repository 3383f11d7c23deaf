"""MIDI export functionality."""

import pretty_midi
from pathlib import Path
from typing import Sequence, Union

from ..core import ConsolidatedNote
from ..core.constants import MIDI_MAX, MIDI_MIN


class MIDIExporter:
    """Export consolidated notes to MIDI format."""

    def __init__(
        self,
        tempo: float = 120.0,
        instrument_name: str = "Acoustic Grand Piano",
        instrument_program: int = 0,
        velocity: int = 80,
    ):
        """
        Initialize MIDIExporter.

        Args:
            tempo: Tempo in BPM
            instrument_name: MIDI instrument name
            instrument_program: MIDI program number (0-127)
            velocity: Velocity given to every note (0-127)
        """
        self.tempo = tempo
        self.instrument_name = instrument_name
        self.instrument_program = instrument_program
        self.velocity = velocity

    def notes_to_pretty_midi(self, notes: Sequence[ConsolidatedNote]) -> pretty_midi.PrettyMIDI:
        """Convert notes to PrettyMIDI object without saving."""
        midi = pretty_midi.PrettyMIDI(initial_tempo=self.tempo)

        instrument = pretty_midi.Instrument(
            program=self.instrument_program,
            name=self.instrument_name,
        )

        for note in notes:
            pitch = note.note.midi_pitch
            if pitch < MIDI_MIN or pitch > MIDI_MAX:
                continue
            instrument.notes.append(
                pretty_midi.Note(
                    velocity=self.velocity,
                    pitch=pitch,
                    start=note.start_time,
                    end=note.end_time,
                )
            )

        midi.instruments.append(instrument)
        return midi

    def export(self, notes: Sequence[ConsolidatedNote], output_path: Union[str, Path]) -> None:
        """
        Export notes to MIDI file.

        Args:
            notes: Consolidated notes
            output_path: Path to output MIDI file
        """
        midi = self.notes_to_pretty_midi(notes)

        # Ensure output directory exists
        Path(output_path).parent.mkdir(parents=True, exist_ok=True)

        midi.write(str(output_path))
