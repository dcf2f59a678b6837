"""
Command line interface for dir2context.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, NoReturn, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn

from .chunking import TreeSitterChunker
from .ingestion import DirectoryIngestionManager, IngestionResult, ScanOptions
from .logger import configure_logging, get_logger, redirect_logging_to_file
from .packing import OutputChunk, pack_sections
from .settings import settings
from .version import get_version

app = typer.Typer(
    name="dir2context",
    help="Flatten a directory of source files into context files for LLMs and vector stores.",
    add_completion=False,
)
configure_logging(enable_console=False)
log = get_logger(__name__)
console = Console()
err_console = Console(stderr=True)


def _split_csv(value: Optional[str]) -> List[str]:
    return [item.strip() for item in (value or "").split(",") if item.strip()]


def default_output_name(prefix: str, now: Optional[datetime] = None) -> str:
    stamp = (now or datetime.now()).strftime("%Y%m%d_%H%M%S")
    return f"{prefix}_{stamp}.txt"


def companion_path(output: Path, suffix: str) -> Path:
    """``out.txt`` + ``.stats.json`` -> ``out.stats.json``."""
    return output.with_name(output.stem + suffix)


def build_summary(chunks: List[OutputChunk], result: IngestionResult) -> Dict[str, Any]:
    return {
        "outputFiles": [chunk.filename for chunk in chunks],
        "filesProcessed": result.stats.files_processed,
        "directoriesScanned": result.stats.directories_scanned,
        "chunks": len(chunks),
    }


def _write_text(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def _fail(message: str) -> NoReturn:
    err_console.print(f"[red]❌ {escape(message)}[/red]")
    raise typer.Exit(code=1)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"dir2context version {get_version()}")
        raise typer.Exit()


def _print_report(chunks: List[OutputChunk], result: IngestionResult) -> None:
    console.print()
    if len(chunks) == 1:
        console.print(
            f"[green]✅ [bold]Content saved to:[/bold][/green] [cyan]{escape(chunks[0].filename)}[/cyan]"
        )
    else:
        console.print("[green]✅ [bold]Content saved to:[/bold][/green]")
        for chunk in chunks:
            console.print(f"  - [cyan]{escape(chunk.filename)}[/cyan]")
    console.print()
    console.print(
        f"[green]  📝 Files processed:    [bold white]{result.stats.files_processed}[/bold white][/green]"
    )
    console.print(f"[green]  📦 Output chunks:      [bold magenta]{len(chunks)}[/bold magenta][/green]")
    console.print(
        f"[green]  📁 Directories scanned: [bold yellow]{result.stats.directories_scanned}[/bold yellow][/green]\n"
    )


@app.command()
def main(
    directory: Path = typer.Argument(
        Path("."), help="Root directory to scan.", show_default=True
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output file name (default: dir2context_<timestamp>.txt).",
    ),
    ext: Optional[str] = typer.Option(
        None, "--ext", help="Comma-separated list of file extensions to include (e.g. .js,.ts)."
    ),
    exclude_dirs: Optional[str] = typer.Option(
        None, "--exclude-dirs", help="Comma-separated directory names or patterns to exclude."
    ),
    exclude_files: Optional[str] = typer.Option(
        None, "--exclude-files", help="Comma-separated file names or patterns to exclude."
    ),
    ignore_hidden: bool = typer.Option(
        settings.ignore_hidden,
        "--ignore-hidden",
        help="Skip hidden files and directories (those starting with .).",
    ),
    chunk_size: Optional[int] = typer.Option(
        settings.chunk_size,
        "--chunk-size",
        min=0,
        help="Max number of characters per output file (keeps sections whole).",
    ),
    semantic_chunks: bool = typer.Option(
        settings.semantic_chunks,
        "--semantic-chunks",
        help="Split supported source files into functions and methods.",
    ),
    json_chunks: bool = typer.Option(
        False, "--json-chunks", help="Also write the chunk records as JSON for vector stores."
    ),
    json_summary: bool = typer.Option(
        False,
        "--json",
        help="Print a JSON summary and write <output>.stats.json next to the output.",
    ),
    quiet: bool = typer.Option(False, "--quiet", help="Suppress normal output."),
    log_to_file: bool = typer.Option(
        False, "--log", help="Write detailed logs next to the output file."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", help="Print debug logs to stderr."
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=_version_callback,
        is_eager=True,
        help="Show version number.",
    ),
) -> None:
    """Concatenate the source files under DIRECTORY into size-bounded text files."""
    if not directory.is_dir():
        _fail(f"Invalid directory: {directory}")
    root = directory.resolve()

    if output is None:
        output = settings.output_dir / default_output_name(settings.output_prefix)

    log_level = logging.DEBUG if verbose else logging.getLevelName(settings.log_level)
    if log_to_file:
        log_path = (output.parent / settings.log_filename).resolve()
        redirect_logging_to_file(log_path, log_level)
        if not quiet and not json_summary:
            typer.echo(f"Logging detailed output to {log_path}")
    else:
        # Warnings such as grammar fallbacks reach stderr unless output must stay clean.
        configure_logging(
            level=log_level,
            enable_console=verbose or not (quiet or json_summary),
            console_level=None if verbose else logging.WARNING,
        )

    options = ScanOptions(
        allowed_extensions=_split_csv(ext) or settings.allowed_extensions,
        exclude_dirs=_split_csv(exclude_dirs) or settings.exclude_dirs,
        exclude_files=_split_csv(exclude_files) or settings.exclude_files,
        ignore_hidden=ignore_hidden,
    )
    manager = DirectoryIngestionManager(options=options, chunker=TreeSitterChunker())
    log.info(
        "run_started",
        root=str(root),
        output=str(output),
        semantic=semantic_chunks,
        chunk_size=chunk_size,
    )

    with Progress(
        SpinnerColumn(),
        TextColumn("{task.description}"),
        TimeElapsedColumn(),
        console=console,
        transient=True,
        disable=quiet or json_summary,
    ) as progress:
        task = progress.add_task("Reading files", total=None)

        def on_file(path: Path) -> None:
            progress.update(task, advance=1, description=f"Reading {escape(path.name)}")

        result = manager.ingest(root, semantic=semantic_chunks, progress_callback=on_file)

    chunks = pack_sections(result.sections, str(output), chunk_size)
    rendered: Optional[str] = None
    try:
        for chunk in chunks:
            _write_text(Path(chunk.filename), chunk.content)
        if json_chunks:
            records = [unit.to_dict() for unit in result.units]
            _write_text(
                companion_path(output, ".chunks.json"),
                json.dumps(records, indent=2, ensure_ascii=False),
            )
        if json_summary:
            rendered = json.dumps(build_summary(chunks, result), indent=2)
            _write_text(companion_path(output, ".stats.json"), rendered)
    except OSError as exc:
        log.error("output_write_failed", output=str(output), error=str(exc))
        _fail(f"Could not write output: {exc}")

    log.info("run_completed", chunks=len(chunks), files=result.stats.files_processed)

    if rendered is not None:
        typer.echo(rendered)
        return

    if not quiet:
        _print_report(chunks, result)


if __name__ == "__main__":  # pragma: no cover
    app()
