"""Command-line entry point: run the spelling checks as a TAP test script."""

from __future__ import annotations

import fnmatch
from pathlib import Path
from typing import List, Optional

import typer
from dotenv import find_dotenv, load_dotenv

from pod_spelling.checker import SpellingContext
from pod_spelling.config import Settings
from pod_spelling.logging_utils import configure_logging
from pod_spelling.reporting import TapReporter

app = typer.Typer(help="Check POD documentation for spelling mistakes", no_args_is_help=True)


@app.callback()
def main() -> None:
    """Check POD documentation for spelling mistakes."""
    # Load .env from the nearest parent directory of the working directory
    load_dotenv(find_dotenv(".env", usecwd=True))


def _build_context(
    reporter: TapReporter,
    spell_cmd: str | None,
    stopword_files: list[Path],
    excludes: list[str],
    log_level: str | None,
) -> SpellingContext:
    settings = Settings()
    configure_logging(log_level or settings.LOG_LEVEL, settings.LOG_FORMAT)

    context = SpellingContext(reporter=reporter, settings=settings)
    if spell_cmd:
        context.set_spell_cmd(spell_cmd)
    for stopword_file in stopword_files:
        context.add_stopwords(*stopword_file.read_text(encoding="utf-8").splitlines())
    if excludes:
        context.set_pod_file_filter(
            lambda path: not any(fnmatch.fnmatch(path, pattern) for pattern in excludes)
        )
    return context


@app.command()
def check(
    paths: Optional[List[str]] = typer.Argument(
        None, help="Files or directories to check (default: blib, else lib)"
    ),
    spell_cmd: Optional[str] = typer.Option(
        None, "--spell-cmd", help="Spellchecker command to use instead of the candidates"
    ),
    stopwords: List[Path] = typer.Option(
        [],
        "--stopwords",
        exists=True,
        dir_okay=False,
        readable=True,
        help="File of stopwords, one per line; may be given more than once",
    ),
    exclude: List[str] = typer.Option(
        [], "--exclude", help="Glob of file paths to leave out; may be given more than once"
    ),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Logging level"),
) -> None:
    """Spellcheck the POD in PATHS, one TAP test per file."""
    reporter = TapReporter()
    context = _build_context(reporter, spell_cmd, stopwords, exclude, log_level)

    ok = context.all_pod_files_spelling_ok(*(paths or []))
    reporter.finish()
    if not (ok and reporter.all_passed):
        raise typer.Exit(code=1)


@app.command()
def which(
    spell_cmd: Optional[str] = typer.Option(
        None, "--spell-cmd", help="Spellchecker command to test instead of the candidates"
    ),
) -> None:
    """Print the spellchecker command that would be used."""
    context = _build_context(TapReporter(), spell_cmd, [], [], None)
    command = context.has_working_spellchecker()
    if command is None:
        typer.secho("no working spellchecker found", err=True, fg=typer.colors.RED)
        raise typer.Exit(code=1)
    typer.echo(command)


if __name__ == "__main__":
    app()
