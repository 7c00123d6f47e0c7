"""Command-line interface for Note Tuner.

Provides commands for:
- note: Show the note, octave and cents deviation of a frequency
- listen: Run the tuner over an audio file and list stable notes
- tone: Write the reference tone of a note to a WAV file
"""

import json
import logging
import time
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

app = typer.Typer(
    name="note-tuner",
    help="Stable musical note detection from pitch estimates",
    rich_markup_mode="markdown",
)
console = Console()


def _setup_logging(verbose: bool) -> None:
    """Route library log records through rich when verbose."""
    if not verbose:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


@app.command()
def note(
    frequency: float = typer.Argument(..., help="Frequency in Hz"),
    reference_pitch: float = typer.Option(
        440.0, "--a4", help="Reference pitch of A4 in Hz"
    ),
    json_output: bool = typer.Option(
        False, "--json", help="Output result as JSON (for scripting)"
    ),
):
    """Show the nearest note to a frequency.

    **Examples:**

        note-tuner note 440

        note-tuner note 466.16 --a4 442
    """
    from .core import NoteMapper, TunerError

    try:
        event = NoteMapper(reference_pitch).describe(frequency)
    except TunerError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    if json_output:
        print(json.dumps(event.to_dict(), ensure_ascii=False))
        return

    console.print(f"[bold]{event.label}[/bold] (note {event.value})")
    console.print(f"  Frequency: {event.frequency:.2f} Hz")
    console.print(f"  Deviation: {event.cents:+d} cents")


@app.command()
def listen(
    input_file: Path = typer.Argument(..., help="Input audio file (WAV, FLAC, MP3...)"),
    reference_pitch: float = typer.Option(
        440.0, "--a4", help="Reference pitch of A4 in Hz"
    ),
    noise_gate: float = typer.Option(
        0.05, "--noise-gate", "-g", help="RMS below which frames are ignored (0-1)"
    ),
    cooldown: int = typer.Option(
        0, "--cooldown", "-c", help="Minimum ms between reported notes (0 = off)"
    ),
    hold: int = typer.Option(
        0, "--hold", "-H", help="Minimum ms a new note must persist (0 = off)"
    ),
    block_size: int = typer.Option(
        4096, "--block-size", "-b", help="Samples per analysis frame"
    ),
    method: str = typer.Option(
        "yin", "--method", "-m", help="Pitch estimator: yin/pyin"
    ),
    sample_rate: int = typer.Option(
        22050, "--sr", help="Resample audio to this rate"
    ),
    verbose: bool = typer.Option(
        False, "-v", "--verbose", help="Verbose output"
    ),
    json_output: bool = typer.Option(
        False, "--json", help="Output results as JSON (for scripting)"
    ),
):
    """Detect stable notes in an audio file, frame by frame.

    **Examples:**

        note-tuner listen guitar.wav

        note-tuner listen guitar.wav --hold 100 --cooldown 50 -m pyin
    """
    from .analysis import get_estimator
    from .core import TunerConfig, TunerError
    from .detection import Tuner
    from .input import AudioLoader

    _setup_logging(verbose)

    if not input_file.exists():
        console.print(f"[red]Error: File not found: {input_file}[/red]")
        raise typer.Exit(1)

    try:
        config = TunerConfig(
            reference_pitch=reference_pitch,
            noise_gate_threshold=noise_gate,
            detection_cooldown_ms=cooldown,
            note_switch_threshold_ms=hold,
            block_size=block_size,
        ).validate()
        estimator = get_estimator(method, sr=sample_rate, frame_length=block_size)
    except (TunerError, ValueError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    start = time.time()
    try:
        loader = AudioLoader(target_sr=sample_rate)
        audio, sr = loader.load(str(input_file))
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    if not json_output:
        console.print(f"[blue]Listening to:[/blue] {input_file}")
        if verbose:
            console.print(
                f"  Duration: {loader.get_duration(audio, sr):.2f}s, Sample rate: {sr}Hz"
            )

    tuner = Tuner(estimator=estimator, config=config)
    events = tuner.detect(loader.frames(audio, sr, block_size))
    elapsed = time.time() - start

    if json_output:
        result = {
            "file": str(input_file),
            "events": [e.to_dict() for e in events],
            "stats": {
                "frames": tuner.stats.processed,
                "gated": tuner.stats.gated,
                "cooldown": tuner.stats.cooldown,
                "no_pitch": tuner.stats.no_pitch,
                "held": tuner.stats.held,
                "emitted": tuner.stats.emitted,
            },
            "elapsed": elapsed,
        }
        print(json.dumps(result, indent=2, ensure_ascii=False))
        return

    if events:
        _show_events_table(events)
    else:
        console.print("[yellow]No stable notes detected[/yellow]")

    console.print(
        f"\n{tuner.stats.processed} frames, {len(events)} notes "
        f"({tuner.stats.gated} gated, {tuner.stats.held} held) in {elapsed:.2f}s"
    )


@app.command()
def tone(
    note_index: int = typer.Argument(..., help="Note index (69 = A4, 60 = middle C)"),
    output: Optional[Path] = typer.Option(
        None, "-o", "--output", help="Output WAV file path"
    ),
    duration: float = typer.Option(
        2.0, "-d", "--duration", help="Tone length in seconds"
    ),
    reference_pitch: float = typer.Option(
        440.0, "--a4", help="Reference pitch of A4 in Hz"
    ),
    sample_rate: int = typer.Option(
        22050, "--sr", help="Output sample rate"
    ),
):
    """Write the standard tone of a note to a WAV file."""
    from .core import NoteMapper, TunerError
    from .output import ToneGenerator

    try:
        mapper = NoteMapper(reference_pitch)
    except TunerError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    frequency = mapper.standard_frequency(note_index)
    label = f"{mapper.note_name(note_index)}{mapper.octave(note_index)}"

    if output is None:
        output = Path(f"tone_{note_index}.wav")

    if frequency >= sample_rate / 2:
        console.print(
            f"[red]Error: {label} ({frequency:.1f} Hz) is above the Nyquist "
            f"frequency for {sample_rate} Hz[/red]"
        )
        raise typer.Exit(1)

    try:
        generator = ToneGenerator(sr=sample_rate, mapper=mapper)
        generator.write(str(output), frequency, duration)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)
    console.print(f"[green]Wrote {label} ({frequency:.2f} Hz) to {output}[/green]")


def _show_events_table(events: List):
    """Display note events in a table."""
    table = Table(title="Detected Notes")
    table.add_column("Note", style="cyan")
    table.add_column("Index", style="green")
    table.add_column("Frequency (Hz)", style="yellow")
    table.add_column("Cents", style="magenta")

    for event in events:
        table.add_row(
            event.label,
            str(event.value),
            f"{event.frequency:.2f}",
            f"{event.cents:+d}",
        )

    console.print(table)


def main():
    """Entry point."""
    app()


if __name__ == "__main__":
    main()
