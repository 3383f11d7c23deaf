"""Command-line interface for pitchscribe.

Provides commands for:
- transcribe: Convert audio to notes, chords and sheet music
- info: Show audio file information
"""

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import typer
from rich.console import Console
from rich.table import Table

app = typer.Typer(
    name="pitchscribe",
    help="Audio to Notation Transcription",
    rich_markup_mode="markdown",
)
console = Console()


@dataclass
class StageTimings:
    """Track timing of processing stages."""

    stages: Dict[str, float] = field(default_factory=dict)
    _current_stage: Optional[str] = field(default=None, repr=False)
    _start_time: float = field(default=0.0, repr=False)

    def start(self, stage: str) -> None:
        """Start timing a stage."""
        self._current_stage = stage
        self._start_time = time.perf_counter()

    def stop(self) -> float:
        """Stop timing the current stage, return duration."""
        if self._current_stage is None:
            return 0.0
        duration = time.perf_counter() - self._start_time
        self.stages[self._current_stage] = duration
        self._current_stage = None
        return duration

    @property
    def total_time(self) -> float:
        """Get total time across all stages."""
        return sum(self.stages.values())

    def print_summary(self) -> None:
        """Print timing summary to console."""
        console.print("\n[bold]Timing Summary:[/bold]")
        for stage, duration in self.stages.items():
            console.print(f"  {stage}: {duration:.2f}s")
        console.print(f"  [bold]Total: {self.total_time:.2f}s[/bold]")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return {
            "stages": self.stages,
            "total_time": self.total_time,
        }


@app.command()
def transcribe(
    input_file: Path = typer.Argument(..., help="Input audio file (WAV, MP3, FLAC, ...)"),
    output: Optional[Path] = typer.Option(
        None, "-o", "--output", help="Write the transcription as JSON"
    ),
    midi: Optional[Path] = typer.Option(
        None, "--midi", help="Write the notes as a MIDI file"
    ),
    musicxml: Optional[Path] = typer.Option(
        None, "--musicxml", help="Write the sheet music as MusicXML"
    ),
    preset: Optional[str] = typer.Option(
        None, "--preset", "-p", help="Detection range preset: voice/instrument/bass"
    ),
    segment_length: Optional[int] = typer.Option(
        None, "--segment-length", help="Analysis window in samples (default 4096)"
    ),
    min_freq: Optional[float] = typer.Option(
        None, "--min-freq", help="Lowest detectable pitch in Hz"
    ),
    max_freq: Optional[float] = typer.Option(
        None, "--max-freq", help="Highest detectable pitch in Hz"
    ),
    workers: int = typer.Option(
        1, "--workers", "-w", help="Threads for per-segment pitch estimation"
    ),
    estimate_tempo: bool = typer.Option(
        False, "--tempo/--no-tempo", help="Estimate tempo with beat tracking"
    ),
    json_output: bool = typer.Option(
        False, "--json", help="Print the transcription as JSON (for scripting)"
    ),
    verbose: bool = typer.Option(
        False, "-v", "--verbose", help="Verbose output"
    ),
):
    """Transcribe an audio file to notes, chords and sheet music.

    **Examples:**

        pitchscribe transcribe hum.wav

        pitchscribe transcribe hum.wav -o hum.json --midi hum.mid

        pitchscribe transcribe bassline.wav --preset bass --musicxml bass.musicxml
    """
    from .core import AnalysisConfig, InvalidAudioError
    from .input import AudioLoader
    from .transcription import NotationTranscriber
    from .output import JSONExporter, MIDIExporter, MusicXMLExporter

    if not input_file.exists():
        console.print(f"[red]Error: File not found: {input_file}[/red]")
        raise typer.Exit(1)

    try:
        config = AnalysisConfig.preset(preset) if preset else AnalysisConfig()
        config = config.with_overrides(
            segment_length=segment_length,
            min_frequency=min_freq,
            max_frequency=max_freq,
            n_workers=workers,
            estimate_tempo=estimate_tempo,
        )
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    timings = StageTimings()

    if not json_output:
        console.print(f"[blue]Loading audio:[/blue] {input_file}")
    timings.start("load")
    try:
        buffer = AudioLoader().load(input_file)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)
    timings.stop()

    if verbose and not json_output:
        console.print(
            f"  Duration: {buffer.duration:.2f}s, Sample rate: {buffer.sample_rate}Hz, "
            f"Channels: {buffer.n_channels}"
        )

    if not json_output:
        console.print("[blue]Analyzing...[/blue]")
    timings.start("analyze")
    try:
        result = NotationTranscriber(config).analyze(buffer)
    except InvalidAudioError as e:
        console.print(f"[red]Invalid audio: {e}[/red]")
        raise typer.Exit(1)
    timings.stop()

    if output:
        JSONExporter().export(result, output)
    if midi:
        MIDIExporter(tempo=result.detected_tempo).export(result.raw_pitch_data, midi)
    if musicxml:
        MusicXMLExporter(tempo=result.detected_tempo).export(result.sheet_music, musicxml)

    if json_output:
        data = result.to_dict()
        data["timings"] = timings.to_dict()
        console.print_json(data=data)
        return

    if result.is_empty:
        console.print("[yellow]No notes detected![/yellow]")
        return

    console.print(f"  Detected {len(result.simple_notes)} notes, {len(result.complex_chords)} chords")
    console.print(f"  Key: {result.detected_key}  Tempo: {result.detected_tempo:.1f} BPM")

    _show_notes_table(result.sheet_music.notes, result.raw_pitch_data)
    if result.complex_chords:
        _show_chords_table(result.complex_chords)

    for path in (output, midi, musicxml):
        if path:
            console.print(f"[blue]Wrote:[/blue] {path}")

    console.print("[green]Transcription complete![/green]")

    if verbose:
        timings.print_summary()


@app.command()
def info(
    input_file: Path = typer.Argument(..., help="Input audio file"),
):
    """Show information about an audio file."""
    from .input import AudioLoader

    if not input_file.exists():
        console.print(f"[red]Error: File not found: {input_file}[/red]")
        raise typer.Exit(1)

    try:
        buffer = AudioLoader().load(input_file)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    console.print(f"\n[bold]Audio Info:[/bold] {input_file.name}")
    console.print(f"  Duration: {buffer.duration:.2f} seconds")
    console.print(f"  Sample rate: {buffer.sample_rate} Hz")
    console.print(f"  Channels: {buffer.n_channels}")
    console.print(f"  Samples: {buffer.n_samples:,}")


def _show_notes_table(sheet_notes, notes):
    """Display notes in a table."""
    table = Table(title="Detected Notes")
    table.add_column("Note", style="cyan")
    table.add_column("Start (s)", style="green")
    table.add_column("Duration (s)", style="yellow")
    table.add_column("Value", style="blue")
    table.add_column("Cents", style="magenta")

    for sheet_note, note in zip(sheet_notes, notes):
        table.add_row(
            note.note.label,
            f"{note.start_time:.3f}",
            f"{note.duration:.3f}",
            sheet_note.duration.value,
            f"{note.note.cents:+d}",
        )

    console.print(table)


def _show_chords_table(chords):
    """Display chords in a table."""
    table = Table(title="Detected Chords")
    table.add_column("Chord", style="cyan")
    table.add_column("Notes", style="green")
    table.add_column("Time", style="yellow")

    for chord in chords:
        table.add_row(
            chord.name,
            " ".join(chord.notes),
            f"{chord.start_time:.2f}-{chord.end_time:.2f}s",
        )

    console.print(table)


def main():
    """Entry point."""
    app()


if __name__ == "__main__":
    main()
