"""MusicXML export functionality.

Writes the quantized note sequence only; beaming, measure layout and
engraving are left to whatever opens the file.
"""

from pathlib import Path
from typing import Union

from ..processing import SheetMusic


class MusicXMLExporter:
    """Export sheet music to MusicXML format via music21."""

    def __init__(self, tempo: float = 120.0, title: str = "Transcribed Music"):
        """
        Initialize MusicXMLExporter.

        Args:
            tempo: Tempo in BPM
            title: Score title
        """
        self.tempo = tempo
        self.title = title

    def to_score(self, sheet: SheetMusic):
        """Build a music21 Score from sheet music."""
        try:
            from music21 import stream, note as m21_note, tempo as m21_tempo
            from music21 import clef, meter, metadata
        except ImportError:
            raise ImportError("music21 is required for MusicXML export")

        clefs = {
            "treble": clef.TrebleClef,
            "bass": clef.BassClef,
            "alto": clef.AltoClef,
            "tenor": clef.TenorClef,
        }
        if sheet.clef not in clefs:
            raise ValueError(f"Unsupported clef: {sheet.clef}. Supported: {sorted(clefs)}")

        # Create score
        score = stream.Score()
        score.metadata = metadata.Metadata()
        score.metadata.title = self.title

        part = stream.Part()
        part.append(clefs[sheet.clef]())
        part.append(m21_tempo.MetronomeMark(number=self.tempo))
        part.append(meter.TimeSignature(str(sheet.time_signature)))

        for n in sheet.notes:
            m21_n = m21_note.Note(f"{n.pitch}{n.octave}")
            m21_n.duration.quarterLength = n.duration.quarter_length
            part.append(m21_n)

        score.append(part)
        return score

    def export(self, sheet: SheetMusic, output_path: Union[str, Path]) -> None:
        """
        Export sheet music to a MusicXML file.

        Args:
            sheet: Quantized sheet music
            output_path: Path to output MusicXML file
        """
        score = self.to_score(sheet)

        # Ensure output directory exists
        Path(output_path).parent.mkdir(parents=True, exist_ok=True)

        score.write("musicxml", fp=str(output_path))
