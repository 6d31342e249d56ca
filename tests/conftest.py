from __future__ import annotations

import os
import shlex
import stat
from pathlib import Path
from typing import Callable, Iterable

import pytest

from pod_spelling import api
from pod_spelling.checker import SpellingContext
from pod_spelling.config import Settings
from pod_spelling.reporting import RecordingReporter
from pod_spelling.spellchecker import SpellcheckerResolver
from pod_spelling.stopwords import StopwordSet

SpellcheckerFactory = Callable[..., str]


def write_spellchecker(
    directory: Path,
    flagged: Iterable[str] = ("Thiss",),
    name: str = "fake-spell",
    exit_code: int = 0,
    log_file: Path | None = None,
) -> str:
    """Write an executable stub that prints every input word listed in ``flagged``."""
    words = list(flagged)
    lines = ["#!/bin/sh"]
    if log_file is not None:
        lines.append(f"echo run >> {shlex.quote(str(log_file))}")
    if words:
        patterns = " ".join(f"-e {shlex.quote(word)}" for word in words)
        lines.append(f"tr -cs 'A-Za-z' '\\n' | grep -x -F {patterns}")
    else:
        lines.append("cat > /dev/null")
    lines.append(f"exit {exit_code}")

    script = directory / name
    script.write_text("\n".join(lines) + "\n", encoding="utf-8")
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return str(script)


@pytest.fixture
def make_spellchecker(tmp_path: Path) -> SpellcheckerFactory:
    """Factory for stub spellchecker commands living in a private directory."""
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()

    def factory(*flagged: str, **kwargs: object) -> str:
        return write_spellchecker(bin_dir, flagged or ("Thiss",), **kwargs)  # type: ignore[arg-type]

    return factory


@pytest.fixture
def missing_command(tmp_path: Path) -> str:
    """A command that can never be started."""
    return str(tmp_path / "no-such-spellchecker")


@pytest.fixture
def pod_file(tmp_path: Path) -> Callable[..., str]:
    """Factory writing a POD document with the given body paragraph."""

    def factory(body: str, name: str = "Doc.pod") -> str:
        path = tmp_path / name
        path.write_text(f"=head1 DESCRIPTION\n\n{body}\n\n=cut\n", encoding="utf-8")
        return str(path)

    return factory


@pytest.fixture
def recorder() -> RecordingReporter:
    return RecordingReporter()


@pytest.fixture
def context_for(recorder: RecordingReporter) -> Callable[..., SpellingContext]:
    """Build a SpellingContext around the given candidate commands."""

    def factory(*candidates: str) -> SpellingContext:
        return SpellingContext(
            reporter=recorder,
            resolver=SpellcheckerResolver(candidates),
            stopwords=StopwordSet(baseline=()),
            settings=Settings(),
        )

    return factory


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep settings and the default context from leaking between tests."""
    for key in list(os.environ):
        if key.startswith("POD_SPELLING_"):
            monkeypatch.delenv(key)
    monkeypatch.setattr(api, "_default", None)
