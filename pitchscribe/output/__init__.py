"""Output layer - Export to various formats.

This layer hands transcriptions to external collaborators:
- JSON interchange document (persistence)
- MIDI files
- MusicXML (for notation software)
"""

from .json_export import JSONExporter
from .midi import MIDIExporter
from .musicxml import MusicXMLExporter

__all__ = [
    "JSONExporter",
    "MIDIExporter",
    "MusicXMLExporter",
]
