"""Main CLI entry point for Piano Memo Analyzer."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import click

from memo_analyzer import __version__
from memo_analyzer.config import AnalysisConfig, load_config


# ANSI color codes for terminal output
class Colors:
    """ANSI color codes for styled terminal output."""

    HEADER = "\033[95m"
    CYAN = "\033[96m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    RED = "\033[91m"
    BOLD = "\033[1m"
    DIM = "\033[2m"
    END = "\033[0m"


def color(text: str, *codes: str) -> str:
    """Apply color codes to text."""
    return "".join(codes) + str(text) + Colors.END


def _config(ctx: click.Context) -> AnalysisConfig:
    return ctx.obj.get("config") or AnalysisConfig()


@click.group()
@click.version_option(version=__version__, prog_name="memo-analyzer")
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output.")
@click.option(
    "-c",
    "--config",
    type=click.Path(exists=True, path_type=Path),
    help="Path to a JSON configuration file.",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config: Path | None) -> None:
    """Piano Memo Analyzer - Key, tempo, chords and insights from piano recordings."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose

    try:
        ctx.obj["config"] = load_config(config)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write the analysis document to this file.",
)
@click.option("-t", "--title", help="Recording title stored with the analysis.")
@click.option("-f", "--format", "output_format", type=click.Choice(["text", "json"]), default="text")
@click.pass_context
def analyze(
    ctx: click.Context,
    path: Path,
    output: Path | None,
    title: str | None,
    output_format: str,
) -> None:
    """Analyze a recording's notes.

    PATH is a JSON list of notes (midi, time, duration, velocity) or a MIDI file.

    Example:
        memo-analyzer analyze memo.notes.json
        memo-analyzer analyze memo.mid --format json -o memo.analysis.json
    """
    from memo_analyzer.analysis import Analyzer
    from memo_analyzer.ingest import load_notes
    from memo_analyzer.processing import recording_id_for
    from memo_analyzer.storage import build_document, save_analysis

    try:
        notes = load_notes(path)
    except ValueError as e:
        click.echo(f"Error reading {path}: {e}", err=True)
        raise SystemExit(1)

    result = Analyzer(_config(ctx)).analyze(notes)
    recording_id = recording_id_for(path)

    if output:
        save_analysis(result, output, recording_id=recording_id, title=title)

    if output_format == "json":
        document = build_document(result, recording_id=recording_id, title=title)
        click.echo(json.dumps(document, indent=2, ensure_ascii=False))
        return

    verbose = ctx.obj.get("verbose", False)

    click.echo(f"\n{color(title or path.name, Colors.BOLD, Colors.CYAN)}")
    click.echo(f"{'=' * 50}")
    if result.key_signature:
        click.echo(f"Key: {result.key_signature} ({result.key_confidence:.0%} confidence)")
    else:
        click.echo("Key: Unknown")
    click.echo(f"Tempo: {f'~{result.tempo} BPM' if result.tempo else 'Unknown'}")
    click.echo(f"Time Sig: {result.time_signature}")
    click.echo(f"Harmonic Rhythm: {result.harmonic_rhythm}")
    click.echo(f"Notes: {len(result.notes)}")

    if result.chords:
        chord_names = [c.chord for c in result.chords]
        shown = chord_names if verbose else chord_names[:16]
        progression = " → ".join(shown)
        if len(shown) < len(chord_names):
            progression += f" ... ({len(chord_names) - len(shown)} more)"
        click.echo(f"\n{color('Chords:', Colors.BOLD)} {progression}")

    if result.progressions:
        click.echo(f"\n{color('Recurring Progressions:', Colors.BOLD)}")
        for progression in result.progressions:
            click.echo(f"  {progression}")

    if output:
        click.echo(f"\nSaved analysis to {output}")


@cli.command()
@click.argument("directory", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option("-r", "--recursive", is_flag=True, help="Include subdirectories.")
@click.option("-f", "--format", "output_format", type=click.Choice(["text", "json"]), default="text")
@click.pass_context
def insights(ctx: click.Context, directory: Path, recursive: bool, output_format: str) -> None:
    """Summarize patterns across analyzed recordings.

    DIRECTORY holds *.analysis.json documents written by 'analyze' or 'batch'.
    """
    from memo_analyzer.insights import (
        find_common_progressions,
        find_similar_recordings,
        get_chord_frequency,
        get_harmonic_tendencies,
        get_key_distribution,
        summarize_library,
    )
    from memo_analyzer.storage import load_summaries

    config = _config(ctx)

    try:
        summaries = load_summaries(directory, recursive=recursive)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)

    if not summaries:
        click.echo(f"No analyses found in {directory}", err=True)
        raise SystemExit(1)

    library = summarize_library(summaries)
    keys = get_key_distribution(summaries)
    chords = get_chord_frequency(summaries, limit=config.max_chord_frequency)
    progressions = find_common_progressions(
        summaries,
        min_length=config.min_progression_length,
        limit=config.max_common_progressions,
    )
    similar = find_similar_recordings(summaries, limit=config.max_similar_pairs)
    tendencies = get_harmonic_tendencies(summaries)

    if output_format == "json":
        data = {
            "library": library.to_dict(),
            "key_distribution": [k.to_dict() for k in keys],
            "chord_frequency": [c.to_dict() for c in chords],
            "common_progressions": [p.to_dict() for p in progressions],
            "similar_recordings": [s.to_dict() for s in similar],
            "harmonic_tendencies": tendencies.to_dict(),
        }
        click.echo(json.dumps(data, indent=2, ensure_ascii=False))
        return

    click.echo(f"\n{color('Library Insights', Colors.BOLD, Colors.HEADER)}")
    click.echo(f"{'=' * 50}")
    click.echo(f"Analyzed: {library.analyzed}")
    click.echo(f"Most common key: {library.most_common_key or '--'}")
    if library.average_tempo is not None:
        click.echo(
            f"Tempo: avg {library.average_tempo} BPM "
            f"(range {library.min_tempo:g}-{library.max_tempo:g})"
        )
    click.echo(f"Unique chords: {library.unique_chords}")
    click.echo(f"Style: {tendencies.dominant_style}")
    for tendency in tendencies.tendencies:
        click.echo(f"  - {tendency}")

    if keys:
        click.echo(f"\n{color('Keys:', Colors.BOLD)}")
        for entry in keys:
            click.echo(f"  {entry.key:10} {entry.count}")

    if chords:
        top = ", ".join(f"{c.chord} (×{c.count})" for c in chords[:10])
        click.echo(f"\n{color('Top chords:', Colors.BOLD)} {top}")

    if progressions:
        click.echo(f"\n{color('Shared progressions:', Colors.BOLD)}")
        for p in progressions:
            click.echo(
                f"  {' → '.join(p.progression)}  "
                f"{color(f'{len(p.recordings)} recordings, {p.count}x', Colors.DIM)}"
            )

    if similar:
        click.echo(f"\n{color('Similar recordings:', Colors.BOLD)}")
        for s in similar:
            click.echo(f"  {s.pair[0]} ~ {s.pair[1]}: {color(f'{s.similarity}%', Colors.GREEN)}")
            for reason in s.reasons:
                click.echo(f"      {reason}")


@cli.command()
@click.argument("directory", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option(
    "-o",
    "--output-dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory for analysis documents (default: beside each notes file).",
)
@click.option("-w", "--workers", type=int, default=4, show_default=True, help="Parallel workers.")
@click.option("--no-resume", is_flag=True, help="Re-analyze files recorded in the checkpoint.")
@click.pass_context
def batch(
    ctx: click.Context,
    directory: Path,
    output_dir: Path | None,
    workers: int,
    no_resume: bool,
) -> None:
    """Analyze every notes file (*.notes.json, *.mid) in a directory."""
    from memo_analyzer.processing import analyze_directory

    verbose = ctx.obj.get("verbose", False)

    def on_progress(progress) -> None:
        if verbose and progress.processed:
            click.echo(
                f"  [{progress.processed}/{progress.total}] {Path(progress.current_file).name}"
            )

    results = analyze_directory(
        directory,
        output_dir=output_dir,
        analysis_config=_config(ctx),
        workers=workers,
        resume=not no_resume,
        on_progress=on_progress,
    )

    succeeded = [r for r in results if r.success]
    failed = [r for r in results if not r.success]

    click.echo(f"Analyzed {len(succeeded)}/{len(results)} file(s)")

    if failed:
        click.echo(f"\nFailed to analyze {len(failed)} file(s):")
        for r in failed:
            error = r.error or "unknown error"
            click.echo(f"  - {r.path.name}: {error[:60]}{'...' if len(error) > 60 else ''}")
        raise SystemExit(1)


@cli.command("export-midi")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("output", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--tempo", type=float, help="Tempo written to the file (default: detected or 120).")
@click.option("--name", default="Transcription", show_default=True, help="Track name.")
def export_midi(path: Path, output: Path, tempo: float | None, name: str) -> None:
    """Write notes from a notes file or analysis document to a MIDI file."""
    from memo_analyzer.export import export_notes
    from memo_analyzer.ingest import load_notes
    from memo_analyzer.storage import ANALYSIS_SUFFIX, load_analysis

    try:
        if path.name.endswith(ANALYSIS_SUFFIX):
            analysis = load_analysis(path)
            notes = list(analysis.notes)
            tempo = tempo or analysis.tempo
        else:
            notes = load_notes(path)
    except ValueError as e:
        click.echo(f"Error reading {path}: {e}", err=True)
        raise SystemExit(1)

    export_notes(notes, output, name=name, tempo_bpm=tempo or 120.0)
    click.echo(f"Wrote {len(notes)} notes to {output}")


if __name__ == "__main__":
    cli()
