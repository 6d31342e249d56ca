"""End-to-end tests for checking POD spelling per file and per batch."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Callable

import pytest

from pod_spelling import api
from pod_spelling.checker import NO_SPELLCHECKER_REASON, SpellingContext
from pod_spelling.errors import NoSpellcheckerAvailable
from pod_spelling.reporting import RecordingReporter

ContextFactory = Callable[..., SpellingContext]
SpellcheckerFactory = Callable[..., str]
PodFileFactory = Callable[..., str]


class TestPodFileSpellingOk:
    def test_misspelled_word_fails_with_diagnostic(
        self,
        context_for: ContextFactory,
        make_spellchecker: SpellcheckerFactory,
        pod_file: PodFileFactory,
        recorder: RecordingReporter,
    ) -> None:
        path = pod_file("Thiss is a typo.")
        context = context_for(make_spellchecker("Thiss"))

        assert context.pod_file_spelling_ok(path) is False

        [result] = recorder.results
        assert result.passed is False
        assert result.name == f"POD spelling for {path}"
        assert result.diagnostics == ["Errors:\n    Thiss\n"]

    def test_stopword_makes_file_pass(
        self,
        context_for: ContextFactory,
        make_spellchecker: SpellcheckerFactory,
        pod_file: PodFileFactory,
        recorder: RecordingReporter,
    ) -> None:
        path = pod_file("Thiss is a typo.")
        context = context_for(make_spellchecker("Thiss"))
        context.add_stopwords("Thiss")

        assert context.pod_file_spelling_ok(path) is True

        [result] = recorder.results
        assert result.passed is True
        assert result.diagnostics == []

    def test_custom_test_name(
        self,
        context_for: ContextFactory,
        make_spellchecker: SpellcheckerFactory,
        pod_file: PodFileFactory,
        recorder: RecordingReporter,
    ) -> None:
        path = pod_file("All good.")
        context = context_for(make_spellchecker("Thiss"))

        assert context.pod_file_spelling_ok(path, "docs are fine")
        assert recorder.results[0].name == "docs are fine"

    def test_errors_are_unique_and_sorted(
        self,
        context_for: ContextFactory,
        make_spellchecker: SpellcheckerFactory,
        pod_file: PodFileFactory,
        recorder: RecordingReporter,
    ) -> None:
        path = pod_file("Zeeta Thiss Alfa Thiss Zeeta.")
        context = context_for(make_spellchecker("Thiss", "Zeeta", "Alfa"))

        assert not context.pod_file_spelling_ok(path)
        assert recorder.results[0].diagnostics == ["Errors:\n    Alfa\n    Thiss\n    Zeeta\n"]

    def test_missing_file_fails_without_spellchecking(
        self,
        context_for: ContextFactory,
        make_spellchecker: SpellcheckerFactory,
        recorder: RecordingReporter,
        tmp_path: Path,
    ) -> None:
        log_file = tmp_path / "runs.log"
        context = context_for(make_spellchecker("Thiss", log_file=log_file))
        missing = str(tmp_path / "Missing.pm")

        assert context.pod_file_spelling_ok(missing) is False

        [result] = recorder.results
        assert result.passed is False
        assert result.diagnostics == [f"{missing} does not exist or is unreadable"]
        assert not log_file.exists()

    def test_directory_is_not_a_readable_file(
        self, context_for: ContextFactory, recorder: RecordingReporter, tmp_path: Path
    ) -> None:
        context = context_for("cat")

        assert context.pod_file_spelling_ok(str(tmp_path)) is False
        assert recorder.results[0].diagnostics == [f"{tmp_path} does not exist or is unreadable"]

    def test_no_spellchecker_raises(
        self,
        context_for: ContextFactory,
        missing_command: str,
        pod_file: PodFileFactory,
        recorder: RecordingReporter,
    ) -> None:
        path = pod_file("Thiss is a typo.")
        context = context_for(missing_command)

        with pytest.raises(NoSpellcheckerAvailable):
            context.pod_file_spelling_ok(path)

        assert recorder.results == []

    def test_check_file_returns_result_without_reporting(
        self,
        context_for: ContextFactory,
        make_spellchecker: SpellcheckerFactory,
        pod_file: PodFileFactory,
        recorder: RecordingReporter,
    ) -> None:
        path = pod_file("Thiss is a typo.")
        context = context_for(make_spellchecker("Thiss"))

        result = context.check_file(path)

        assert result.passed is False
        assert result.words == ["Thiss"]
        assert result.diagnostic == "Errors:\n    Thiss\n"
        assert recorder.results == []


class TestAllPodFilesSpellingOk:
    def test_mixed_batch_reports_each_file(
        self,
        context_for: ContextFactory,
        make_spellchecker: SpellcheckerFactory,
        recorder: RecordingReporter,
        tmp_path: Path,
    ) -> None:
        docs = tmp_path / "lib"
        docs.mkdir()
        (docs / "Bad.pod").write_text("=pod\n\nThiss is a typo.\n\n=cut\n", encoding="utf-8")
        (docs / "Good.pod").write_text("=pod\n\nThis is fine.\n\n=cut\n", encoding="utf-8")
        context = context_for(make_spellchecker("Thiss"))

        assert context.all_pod_files_spelling_ok(str(docs)) is False

        assert recorder.planned == 2
        assert recorder.skip_reason is None
        assert [(Path(r.name.split()[-1]).name, r.passed) for r in recorder.results] == [
            ("Bad.pod", False),
            ("Good.pod", True),
        ]

    def test_clean_batch_passes(
        self,
        context_for: ContextFactory,
        make_spellchecker: SpellcheckerFactory,
        pod_file: PodFileFactory,
        recorder: RecordingReporter,
    ) -> None:
        first = pod_file("Nothing wrong.", name="One.pod")
        second = pod_file("Still nothing.", name="Two.pod")
        context = context_for(make_spellchecker("Thiss"))

        assert context.all_pod_files_spelling_ok(first, second) is True
        assert recorder.planned == 2
        assert recorder.all_passed

    def test_no_spellchecker_skips_whole_batch(
        self,
        context_for: ContextFactory,
        missing_command: str,
        pod_file: PodFileFactory,
        recorder: RecordingReporter,
        tmp_path: Path,
    ) -> None:
        pod_file("Thiss is a typo.")
        context = context_for(missing_command, str(tmp_path / "also-missing"))

        result = context.all_pod_files_spelling_ok(str(tmp_path))

        assert result is True
        assert recorder.skip_reason == NO_SPELLCHECKER_REASON
        assert recorder.planned == 0
        assert recorder.results == []

    def test_resolves_once_for_whole_batch(
        self,
        context_for: ContextFactory,
        make_spellchecker: SpellcheckerFactory,
        pod_file: PodFileFactory,
        tmp_path: Path,
    ) -> None:
        first = make_spellchecker("Thiss", name="first")
        second = make_spellchecker("Thiss", name="second")
        files = [pod_file("Fine.", name=f"Doc{index}.pod") for index in range(3)]
        context = context_for(first, second)

        context.all_pod_files_spelling_ok(*files)
        context.resolver.candidates = [second]

        assert context.has_working_spellchecker() == first

    def test_file_filter_limits_batch(
        self,
        context_for: ContextFactory,
        make_spellchecker: SpellcheckerFactory,
        pod_file: PodFileFactory,
        recorder: RecordingReporter,
        tmp_path: Path,
    ) -> None:
        pod_file("Fine.", name="Guide.pod")
        pod_file("Thiss.", name="Guide_ja.pod")
        context = context_for(make_spellchecker("Thiss"))
        context.set_pod_file_filter(lambda path: not path.endswith("_ja.pod"))

        assert context.all_pod_files_spelling_ok(str(tmp_path)) is True
        assert recorder.planned == 1

    def test_resetting_file_filter_accepts_all(
        self, context_for: ContextFactory, pod_file: PodFileFactory, tmp_path: Path
    ) -> None:
        pod_file("Fine.", name="Guide.pod")
        context = context_for("cat")
        context.set_pod_file_filter(lambda path: False)
        assert context.all_pod_files(str(tmp_path)) == []

        context.set_pod_file_filter(None)

        assert context.all_pod_files(str(tmp_path)) == [os.path.join(str(tmp_path), "Guide.pod")]


class TestHasWorkingSpellchecker:
    def test_returns_command(
        self, context_for: ContextFactory, make_spellchecker: SpellcheckerFactory
    ) -> None:
        command = make_spellchecker("Thiss")

        assert context_for(command).has_working_spellchecker() == command

    def test_returns_none_when_nothing_works(
        self, context_for: ContextFactory, missing_command: str
    ) -> None:
        assert context_for(missing_command).has_working_spellchecker() is None

    def test_set_spell_cmd_overrides_candidates(
        self,
        context_for: ContextFactory,
        make_spellchecker: SpellcheckerFactory,
        missing_command: str,
    ) -> None:
        command = make_spellchecker("Thiss")
        context = context_for(missing_command)

        context.set_spell_cmd(command)

        assert context.has_working_spellchecker() == command


class TestSettingsIntegration:
    def test_spell_cmd_from_environment(
        self,
        monkeypatch: pytest.MonkeyPatch,
        make_spellchecker: SpellcheckerFactory,
        pod_file: PodFileFactory,
    ) -> None:
        command = make_spellchecker("Thiss")
        monkeypatch.setenv("POD_SPELLING_SPELL_CMD", command)
        reporter = RecordingReporter()

        context = SpellingContext(reporter=reporter)

        assert context.resolver.command == command
        assert not context.pod_file_spelling_ok(pod_file("Thiss is a typo."))

    def test_stopwords_file_from_environment(
        self,
        monkeypatch: pytest.MonkeyPatch,
        make_spellchecker: SpellcheckerFactory,
        pod_file: PodFileFactory,
        tmp_path: Path,
    ) -> None:
        stopwords = tmp_path / "stopwords.txt"
        stopwords.write_text("# Errors:\n#     Thiss\n", encoding="utf-8")
        monkeypatch.setenv("POD_SPELLING_STOPWORDS_FILE", str(stopwords))
        monkeypatch.setenv("POD_SPELLING_SPELL_CMD", make_spellchecker("Thiss"))

        context = SpellingContext(reporter=RecordingReporter())

        assert "Thiss" in context.stopwords
        assert context.pod_file_spelling_ok(pod_file("Thiss is a typo."))

    def test_candidate_commands_from_environment(
        self, monkeypatch: pytest.MonkeyPatch, missing_command: str
    ) -> None:
        monkeypatch.setenv("POD_SPELLING_CANDIDATE_COMMANDS", f'["{missing_command}"]')

        context = SpellingContext(reporter=RecordingReporter())

        assert context.resolver.candidates == [missing_command]
        assert context.has_working_spellchecker() is None


class TestModuleLevelApi:
    def test_functions_share_default_context(
        self, make_spellchecker: SpellcheckerFactory, pod_file: PodFileFactory
    ) -> None:
        reporter = RecordingReporter()
        api.default_context().reporter = reporter
        api.set_spell_cmd(make_spellchecker("Thiss"))
        path = pod_file("Thiss is a typo.")

        assert api.pod_file_spelling_ok(path) is False
        api.add_stopwords("Thiss")
        assert api.pod_file_spelling_ok(path) is True

        assert [result.passed for result in reporter.results] == [False, True]
        assert api.default_context() is api.default_context()

    def test_all_pod_files_uses_filter(self, pod_file: PodFileFactory, tmp_path: Path) -> None:
        pod_file("Fine.", name="Guide.pod")
        pod_file("Fine.", name="Guide_ja.pod")

        api.set_pod_file_filter(lambda path: "_ja" not in path)

        assert api.all_pod_files(str(tmp_path)) == [os.path.join(str(tmp_path), "Guide.pod")]

    def test_batch_skips_without_spellchecker(
        self, missing_command: str, pod_file: PodFileFactory, tmp_path: Path
    ) -> None:
        reporter = RecordingReporter()
        context = api.default_context()
        context.reporter = reporter
        context.resolver.candidates = [missing_command]
        pod_file("Thiss.")

        assert api.has_working_spellchecker() is None
        assert api.all_pod_files_spelling_ok(str(tmp_path)) is True
        assert reporter.skip_reason == NO_SPELLCHECKER_REASON
