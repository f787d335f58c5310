"""CLI command implementations"""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from noteblocks.config import Settings, load_config
from noteblocks.core.pipeline import run_normalize, run_tags, run_typography
from noteblocks.crud.database import init_db, make_engine, reset_db


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling and apply the log level."""
    try:
        settings = load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))
    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")
    return settings


def normalize_cmd(
    path: Annotated[str, typer.Argument(help="Note file or directory to normalize")],
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    fmt: Annotated[Optional[str], typer.Option("--format", help="json or md")] = None,
    engine: Annotated[Optional[str], typer.Option("--engine", help="lines or markdown-it")] = None,
    cache: Annotated[Optional[bool], typer.Option("--cache/--no-cache", help="Memoize results by content hash")] = None,
    ):
    """Normalize notes into block sequences and write JSON or Markdown output."""
    settings = _settings(overrides={"output_dir": out, "output_format": fmt, "engine": engine, "cache": cache})
    db_engine = None
    if settings.cache:
        db_engine = make_engine(settings.db_url)
        init_db(db_engine)

    output_dir = Path(settings.output_dir)
    try:
        results = run_normalize(
            path, output_dir, settings.output_format,
            settings.engine, settings.parser_config, db_engine,
        )
    except RuntimeError as e:
        _fail(str(e))
    except Exception as e:
        _fail("Normalize failed", e)
    for src, out_file in results:
        typer.echo(f"  {src} -> {out_file}")
    typer.echo(f"Normalized {len(results)} note(s) to {output_dir}/")


def typography_cmd(
    path: Annotated[str, typer.Argument(help="Note file or directory")],
    engine: Annotated[Optional[str], typer.Option("--engine", help="lines or markdown-it")] = None,
    ):
    """Print the density-driven typography scale and size tokens per note."""
    settings = _settings(overrides={"engine": engine})
    try:
        results = run_typography(path, settings.engine, settings.parser_config)
    except RuntimeError as e:
        _fail(str(e))
    if not results:
        typer.echo("No note files found.")
        raise typer.Exit(1)
    for src, typo in results:
        m = typo.metrics
        typer.echo(
            f"{src}: scale={typo.scale} line-height={typo.line_height.value} "
            f"(blocks={m.total_blocks} chars={m.total_chars} headings={m.heading_count})"
        )
        for category, token in typo.tokens.items():
            typer.echo(f"  {category:<10} {token.size}{token.unit} lh={token.line_height} gap={token.spacing}rem")


def tags_cmd(
    path: Annotated[str, typer.Argument(help="Note file or directory")],
    ):
    """List the hashtags found in each note."""
    _settings()
    try:
        results = run_tags(path)
    except RuntimeError as e:
        _fail(str(e))
    if not results:
        typer.echo("No note files found.")
        raise typer.Exit(1)
    for src, tags in results:
        typer.echo(f"{src}: {', '.join(tags) if tags else '(none)'}")


def init_cmd(
    reset: Annotated[bool, typer.Option("--reset", help="Drop and recreate the cache tables")] = False,
    ):
    """Initialize the normalization cache schema. Use --reset to clear cached notes."""
    settings = _settings()
    engine = make_engine(settings.db_url)
    if reset:
        reset_db(engine)
        typer.echo("Existing cache cleared.")
    else:
        init_db(engine)
    typer.echo(f"Database initialized at: {settings.db_url}")
