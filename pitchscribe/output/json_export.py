"""JSON export of transcription results."""

import json
from pathlib import Path
from typing import Union

from ..transcription import TranscriptionResult


class JSONExporter:
    """Write the interchange document of a TranscriptionResult."""

    def __init__(self, indent: int = 2):
        self.indent = indent

    def dumps(self, result: TranscriptionResult) -> str:
        return json.dumps(result.to_dict(), indent=self.indent, ensure_ascii=False)

    def export(self, result: TranscriptionResult, output_path: Union[str, Path]) -> None:
        """
        Export a result to a JSON file.

        Args:
            result: Transcription result
            output_path: Path to output JSON file
        """
        output_path = Path(output_path)

        # Ensure output directory exists
        output_path.parent.mkdir(parents=True, exist_ok=True)

        output_path.write_text(self.dumps(result), encoding="utf-8")
