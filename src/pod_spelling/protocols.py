from __future__ import annotations

from typing import Protocol


class TextExtractorProtocol(Protocol):
    def extract(self, path: str) -> str:
        """Return the natural-language text of the documentation in ``path``.

        Raises:
            FileUnreadable: If the file cannot be opened
        """
        ...


class TestReporterProtocol(Protocol):
    """Receives test outcomes in the order they happen."""

    __test__ = False

    def ok(self, passed: bool, name: str) -> None:
        """Record one test result."""
        ...

    def diag(self, message: str) -> None:
        """Emit a diagnostic message for the most recent result."""
        ...

    def plan(self, count: int) -> None:
        """Declare how many results will follow."""
        ...

    def plan_skip(self, reason: str) -> None:
        """Declare that the whole batch is skipped."""
        ...


class SpellcheckHandleProtocol(Protocol):
    """A started spellchecker process, usable as a context manager."""

    def __enter__(self) -> SpellcheckHandleProtocol: ...

    def __exit__(self, *exc_info: object) -> None: ...

    def feed(self, document: str) -> list[str]:
        """Send the whole document and return the raw output lines.

        Raises:
            SubprocessIOFailure: If the input stream cannot be written or closed
        """
        ...


class SpellcheckerStrategyProtocol(Protocol):
    """One candidate spellchecker the resolver knows how to try."""

    command: str

    def try_start(self) -> SpellcheckHandleProtocol | str:
        """Start the spellchecker, returning a handle or the reason it could not start."""
        ...
