"""
Checking POD spelling file by file and reporting the outcome.

SpellingContext owns everything that must stay fixed for one run: the
spellchecker resolver, the stopword set and the file filter. Results go to a
test reporter, one ok/not ok per file.
"""

from __future__ import annotations

import os
from typing import cast

from pod_spelling.config import Settings
from pod_spelling.discovery import FileFilter, PodFileFinder, accept_all
from pod_spelling.errors import FileUnreadable, raise_configuration_error
from pod_spelling.logging_utils import create_logger, ensure_logging_configured
from pod_spelling.models import SpellingResult
from pod_spelling.pod_text import PodTextExtractor
from pod_spelling.protocols import TestReporterProtocol, TextExtractorProtocol
from pod_spelling.reporting import TapReporter
from pod_spelling.spellchecker import SpellcheckerResolver
from pod_spelling.stopwords import StopwordSet, filter_words

logger = create_logger("checker")

NO_SPELLCHECKER_REASON = "no working spellchecker found"


def is_readable_file(path: str) -> bool:
    return os.path.isfile(path) and os.access(path, os.R_OK)


class SpellingContext:
    """State and operations for spellchecking the POD of a distribution."""

    def __init__(
        self,
        reporter: TestReporterProtocol | None = None,
        extractor: TextExtractorProtocol | None = None,
        resolver: SpellcheckerResolver | None = None,
        stopwords: StopwordSet | None = None,
        finder: PodFileFinder | None = None,
        settings: Settings | None = None,
    ) -> None:
        settings = settings if settings is not None else Settings()
        ensure_logging_configured(settings.LOG_LEVEL, settings.LOG_FORMAT)

        self.reporter: TestReporterProtocol = reporter if reporter is not None else TapReporter()
        self.extractor: TextExtractorProtocol = (
            extractor if extractor is not None else PodTextExtractor()
        )
        self.resolver = (
            resolver
            if resolver is not None
            else SpellcheckerResolver(settings.CANDIDATE_COMMANDS, command=settings.SPELL_CMD)
        )
        self.stopwords = stopwords if stopwords is not None else StopwordSet()
        self.finder = (
            finder
            if finder is not None
            else PodFileFinder(
                vcs_dirs=settings.VCS_DIRS, starting_points=settings.STARTING_POINTS
            )
        )

        if settings.STOPWORDS_FILE:
            try:
                self.stopwords.add_from_file(settings.STOPWORDS_FILE)
            except OSError as exc:
                raise_configuration_error(
                    "STOPWORDS_FILE",
                    f"Cannot read stopwords file {settings.STOPWORDS_FILE}: {exc}",
                    path=settings.STOPWORDS_FILE,
                )

    # Configuration

    def add_stopwords(self, *lines: str) -> list[str]:
        """Never report these words. Lines may carry a leading "#" and surrounding space."""
        return self.stopwords.add(*lines)

    def set_spell_cmd(self, command: str) -> None:
        """Use ``command`` as the spellchecker instead of trying the candidates."""
        self.resolver.set_command(command)

    def set_pod_file_filter(self, file_filter: FileFilter | None) -> None:
        """Replace the predicate that decides which discovered files are checked."""
        self.finder.file_filter = file_filter if file_filter is not None else accept_all

    # Queries

    def has_working_spellchecker(self) -> str | None:
        """Return the spellchecker command that will be used, or None if none works."""
        command = self.resolver.resolve(dry_run=True)
        return command or None

    def all_pod_files(self, *paths: str) -> list[str]:
        return self.finder.find(*paths)

    def invalid_words_in(self, path: str) -> list[str]:
        """Raw words the spellchecker flags in the POD of ``path``, line endings removed.

        Raises:
            FileUnreadable: If ``path`` cannot be read
            NoSpellcheckerAvailable: If no spellchecker can be run
        """
        document = self.extractor.extract(path)
        # only dry runs return UNAVAILABLE
        words = cast("list[str]", self.resolver.spellcheck(document))
        return [word.rstrip("\r\n") for word in words]

    def check_file(self, path: str, name: str | None = None) -> SpellingResult:
        """Spellcheck one file without reporting the result."""
        name = name or f"POD spelling for {path}"

        if not is_readable_file(path):
            return SpellingResult(path=path, name=name, passed=False, unreadable=True)

        try:
            raw = self.invalid_words_in(path)
        except FileUnreadable:
            return SpellingResult(path=path, name=name, passed=False, unreadable=True)

        words = filter_words(raw, self.stopwords)
        return SpellingResult(path=path, name=name, passed=not words, words=words)

    # Checks that report

    def pod_file_spelling_ok(self, path: str, name: str | None = None) -> bool:
        """Report one test: passes if the POD in ``path`` has no spelling errors.

        Raises:
            NoSpellcheckerAvailable: If no spellchecker can be run
        """
        result = self.check_file(path, name)
        self.reporter.ok(result.passed, result.name)
        if result.diagnostic is not None:
            self.reporter.diag(result.diagnostic)

        logger.info(
            "Checked POD spelling",
            path=path,
            passed=result.passed,
            misspelled=len(result.words),
        )
        return result.passed

    def all_pod_files_spelling_ok(self, *paths: str) -> bool:
        """Plan and run one test per POD file found at or below ``paths``.

        If no spellchecker works at all the whole batch is reported as skipped
        and True is returned.
        """
        files = self.all_pod_files(*paths)

        if not self.has_working_spellchecker():
            self.reporter.plan_skip(NO_SPELLCHECKER_REASON)
            return True

        self.reporter.plan(len(files))

        ok = True
        for path in files:
            if not self.pod_file_spelling_ok(path):
                ok = False
        return ok
