"""
Test reporters.

TapReporter writes the Test Anything Protocol: results on stdout, diagnostics
as "# "-prefixed lines on stderr. RecordingReporter keeps everything in
memory for assertions inside pytest.
"""

from __future__ import annotations

import sys
from typing import TextIO

from pod_spelling.models import ReportedTest


class TapReporter:
    """Report results as TAP, in the manner of Perl's Test::Builder."""

    __test__ = False

    def __init__(self, stream: TextIO | None = None, diag_stream: TextIO | None = None) -> None:
        self._stream = stream
        self._diag_stream = diag_stream
        self.current_test = 0
        self.failed = 0
        self.planned: int | None = None
        self.skip_reason: str | None = None

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    @property
    def diag_stream(self) -> TextIO:
        return self._diag_stream if self._diag_stream is not None else sys.stderr

    def plan(self, count: int) -> None:
        self.planned = count
        self.stream.write(f"1..{count}\n")

    def plan_skip(self, reason: str) -> None:
        self.planned = 0
        self.skip_reason = reason
        self.stream.write(f"1..0 # SKIP {reason}\n")

    def ok(self, passed: bool, name: str) -> None:
        self.current_test += 1
        status = "ok" if passed else "not ok"
        self.stream.write(f"{status} {self.current_test} - {name}\n")
        if not passed:
            self.failed += 1
            self.diag(f"  Failed test '{name}'")

    def diag(self, message: str) -> None:
        for line in message.splitlines():
            self.diag_stream.write(f"# {line}\n" if line else "#\n")

    def finish(self) -> None:
        """Write the closing summary diagnostics, like Test::Builder does at exit."""
        if self.skip_reason is not None:
            return
        if self.planned is not None and self.planned != self.current_test:
            noun = "test" if self.planned == 1 else "tests"
            self.diag(f"Looks like you planned {self.planned} {noun} but ran {self.current_test}.")
        if self.failed:
            noun = "test" if self.failed == 1 else "tests"
            self.diag(f"Looks like you failed {self.failed} {noun} of {self.current_test}.")

    @property
    def all_passed(self) -> bool:
        if self.skip_reason is not None:
            return True
        if self.planned is not None and self.planned != self.current_test:
            return False
        return self.failed == 0


class RecordingReporter:
    """Collects results in memory."""

    __test__ = False

    def __init__(self) -> None:
        self.results: list[ReportedTest] = []
        self.loose_diagnostics: list[str] = []
        self.planned: int | None = None
        self.skip_reason: str | None = None

    def plan(self, count: int) -> None:
        self.planned = count

    def plan_skip(self, reason: str) -> None:
        self.planned = 0
        self.skip_reason = reason

    def ok(self, passed: bool, name: str) -> None:
        self.results.append(ReportedTest(number=len(self.results) + 1, name=name, passed=passed))

    def diag(self, message: str) -> None:
        if self.results:
            self.results[-1].diagnostics.append(message)
        else:
            self.loose_diagnostics.append(message)

    @property
    def failures(self) -> list[ReportedTest]:
        return [result for result in self.results if not result.passed]

    @property
    def all_passed(self) -> bool:
        return not self.failures
