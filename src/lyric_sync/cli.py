"""Command-line interface for lyric-sync.

Uses Typer for a modern, type-hinted CLI experience. The CLI is a thin
front-end for inspecting what the engine makes of lyric files.
"""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path
from typing import Annotated, Optional

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from lyric_sync import __version__
from lyric_sync.config import CONFIG_ENV_VAR, DEFAULT_SETTINGS, ParserSettings, load_settings
from lyric_sync.errors import LyricSyncError, ResourceError, format_error_for_display
from lyric_sync.export import format_timestamp, to_json, to_lrc
from lyric_sync.logging import LogContext, LogLevel, enable_file_logging, set_verbosity
from lyric_sync.lyrics.parser import parse_lyrics
from lyric_sync.models.lyrics import LyricsFormat, LyricsResult

load_dotenv()

app = typer.Typer(
    name="lyric-sync",
    help="Parse timed lyrics and align translation/romanization tracks.",
    add_completion=False,
    rich_markup_mode="rich",
)

console = Console()


class OutputFormat(str, Enum):
    """Rendering of the parse result."""

    LRC = "lrc"
    JSON = "json"
    TABLE = "table"


def _read_optional(path: Path | None) -> str | None:
    if path is None:
        return None
    if not path.exists():
        error = ResourceError("File not found", context={"path": str(path)})
        console.print(f"[red]Error:[/red] {escape(format_error_for_display(error))}")
        raise typer.Exit(1)
    return path.read_text(encoding="utf-8-sig")


def _resolve_settings(config_path: Path | None) -> ParserSettings:
    if config_path is None:
        env_value = os.environ.get(CONFIG_ENV_VAR)
        if not env_value:
            return DEFAULT_SETTINGS
        config_path = Path(env_value)

    try:
        return load_settings(config_path)
    except FileNotFoundError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    except LyricSyncError as e:
        console.print(f"[red]Error:[/red] {escape(format_error_for_display(e))}")
        raise typer.Exit(1)


def _render_table(result: LyricsResult) -> None:
    table = Table(title="Lyrics")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Start", style="cyan")
    table.add_column("End", style="cyan")
    table.add_column("Words", justify="right")
    table.add_column("Text")
    if result.has_translation:
        table.add_column("Translation", style="green")
    if result.has_romanization:
        table.add_column("Romanization", style="magenta")

    for i, line in enumerate(result.original):
        row = [
            str(i + 1),
            format_timestamp(line.start),
            format_timestamp(line.end),
            str(len(line.words)),
            escape(line.text),
        ]
        if result.translated is not None:
            row.append(escape(result.translated[i].text))
        if result.romanization is not None:
            row.append(escape(result.romanization[i].text))
        table.add_row(*row)

    console.print(table)

    if result.tags:
        console.print("\n[bold]Tags:[/bold]")
        for key, value in result.tags.items():
            # Long payload tags are not worth printing in full
            shown = value if len(value) <= 60 else value[:57] + "..."
            console.print(f"  {key}: {shown}", markup=False, highlight=False)


@app.command()
def parse(
    lyrics_file: Annotated[Path, typer.Argument(help="Path to the primary lyrics file")],
    fmt: Annotated[
        LyricsFormat,
        typer.Option("--format", "-f", help="Grammar of the primary file", case_sensitive=False),
    ] = LyricsFormat.LRC,
    translated: Annotated[
        Optional[Path],
        typer.Option("--translated", "-t", help="Translation file (LRC)"),
    ] = None,
    romanization: Annotated[
        Optional[Path],
        typer.Option("--romanization", "-r", help="Romanization file"),
    ] = None,
    legacy: Annotated[
        Optional[Path],
        typer.Option("--legacy", help="LRC fallback used when the YRC file is empty"),
    ] = None,
    output: Annotated[
        OutputFormat,
        typer.Option("--output", "-o", help="Output rendering", case_sensitive=False),
    ] = OutputFormat.LRC,
    romanization_lines: Annotated[
        bool,
        typer.Option("--romanization-lines", help="Include romanization rows in LRC output"),
    ] = False,
    config: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help=f"Settings JSON (default: ${CONFIG_ENV_VAR})"),
    ] = None,
    log_file: Annotated[
        Optional[Path],
        typer.Option("--log-file", help="Also write debug logs to this file"),
    ] = None,
    verbose: Annotated[
        int,
        typer.Option("--verbose", "-v", count=True, help="Increase log verbosity"),
    ] = 0,
):
    """Parse a lyrics file and print the synchronized result."""
    if verbose:
        set_verbosity(LogLevel(min(LogLevel.NORMAL + verbose, LogLevel.DEBUG)))
    if log_file is not None:
        enable_file_logging(log_file)

    settings = _resolve_settings(config)

    original_text = _read_optional(lyrics_file)
    with LogContext(lyrics_file=lyrics_file.name):
        result = parse_lyrics(
            fmt,
            original_text,
            translated=_read_optional(translated),
            romanization=_read_optional(romanization),
            legacy=_read_optional(legacy),
            settings=settings,
        )

    if result is None:
        console.print("[yellow]No lyrics found.[/yellow]")
        raise typer.Exit(1)

    if output is OutputFormat.JSON:
        typer.echo(to_json(result))
    elif output is OutputFormat.TABLE:
        _render_table(result)
    else:
        typer.echo(to_lrc(result, include_romanization=romanization_lines))


@app.command()
def version():
    """Print version and exit."""
    console.print(f"lyric-sync version {__version__}")


if __name__ == "__main__":
    app()
