"""
Spellchecker resolution and invocation.

A spellchecker is any command that reads text on stdin and, once stdin is
closed, prints one misspelled word per line on stdout. Several such commands
are tried in order; the first one that can be started is remembered and used
for every later document, so all files in one run are checked the same way.
The exit status of the spellchecker is never inspected.
"""

from __future__ import annotations

import contextlib
import shlex
import subprocess
import threading
from typing import Callable, Iterable

from pod_spelling.config import DEFAULT_CANDIDATE_COMMANDS
from pod_spelling.errors import (
    SubprocessIOFailure,
    raise_no_spellchecker_available,
    raise_subprocess_io_failure,
)
from pod_spelling.logging_utils import create_logger
from pod_spelling.protocols import SpellcheckerStrategyProtocol

logger = create_logger("spellchecker")

DRY_RUN_DOCUMENT = "dry run"


class _Unavailable:
    """Marker returned by dry runs when no spellchecker works. Always falsy."""

    _instance: _Unavailable | None = None

    def __new__(cls) -> _Unavailable:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNAVAILABLE"


UNAVAILABLE = _Unavailable()


class SpellcheckProcess:
    """Scoped handle around a running spellchecker child process.

    Leaving the ``with`` block always reaps the child; if it is left because
    of an error the child is killed first so it cannot linger.
    """

    def __init__(self, command: str, process: subprocess.Popen[bytes]) -> None:
        self.command = command
        self.process = process

    def __enter__(self) -> SpellcheckProcess:
        return self

    def __exit__(self, exc_type: object, exc: object, tb: object) -> None:
        if exc_type is not None and self.process.poll() is None:
            self.process.kill()
        for stream in (self.process.stdin, self.process.stdout, self.process.stderr):
            if stream is not None and not stream.closed:
                # pending input to a dead child is dropped
                with contextlib.suppress(BrokenPipeError):
                    stream.close()
        self.process.wait()

    def feed(self, document: str) -> list[str]:
        """Write ``document`` to the child, close its input and return its output lines."""
        stdin = self.process.stdin
        if stdin is None:
            raise_subprocess_io_failure(self.command, ValueError("input already sent"))
        try:
            stdin.write(document.encode("utf-8", errors="replace"))
            # end of input tells the spellchecker to report
            stdin.close()
        except OSError as exc:
            raise_subprocess_io_failure(self.command, exc)
        # communicate() would flush a closed stdin and fail
        self.process.stdin = None

        # drains stdout and stderr together and waits for exit
        stdout, _stderr = self.process.communicate()
        return stdout.decode("utf-8", errors="replace").splitlines(keepends=True)


class CommandSpellchecker:
    """Drives an external spellchecker given as a shell-style command line."""

    def __init__(self, command: str) -> None:
        self.command = command

    def __repr__(self) -> str:
        return f"CommandSpellchecker({self.command!r})"

    def try_start(self) -> SpellcheckProcess | str:
        try:
            argv = shlex.split(self.command)
        except ValueError as exc:
            return f"cannot parse command: {exc}"
        if not argv:
            return "empty command"

        try:
            process = subprocess.Popen(
                argv,
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
            )
        except OSError as exc:
            return str(exc)
        return SpellcheckProcess(self.command, process)


StrategyFactory = Callable[[str], SpellcheckerStrategyProtocol]


class SpellcheckerResolver:
    """Picks the spellchecker for a run and remembers it.

    The resolved command is set at most once automatically (by the first
    command that runs) and afterwards is the only command ever tried. An
    explicit override set through ``set_command`` takes the same place.
    """

    def __init__(
        self,
        candidates: Iterable[str] | None = None,
        command: str | None = None,
        strategy_factory: StrategyFactory = CommandSpellchecker,
    ) -> None:
        self.candidates: list[str] = list(
            candidates if candidates is not None else DEFAULT_CANDIDATE_COMMANDS
        )
        self._command = command
        self._strategy_factory = strategy_factory
        self._lock = threading.RLock()

    @property
    def command(self) -> str | None:
        """The resolved or overridden command, None while unresolved."""
        return self._command

    def set_command(self, command: str | None) -> None:
        """Use ``command`` and nothing else for all later spellchecks."""
        with self._lock:
            self._command = command
        logger.debug("Spellchecker command set", command=command)

    def strategies(self) -> list[SpellcheckerStrategyProtocol]:
        if self._command:
            return [self._strategy_factory(self._command)]
        return [self._strategy_factory(candidate) for candidate in self.candidates]

    def spellcheck(self, document: str, dry_run: bool = False) -> list[str] | _Unavailable:
        """Return the raw output lines of the spellchecker for ``document``.

        Args:
            document: Plain text to check
            dry_run: Return UNAVAILABLE instead of raising when nothing works

        Raises:
            NoSpellcheckerAvailable: If no candidate could be run (not in dry runs)
            SubprocessIOFailure: If an already resolved command fails mid-run
        """
        with self._lock:
            already_resolved = bool(self._command)
            attempts: list[tuple[str, str]] = []

            for strategy in self.strategies():
                started = strategy.try_start()
                if isinstance(started, str):
                    logger.debug(
                        "Spellchecker could not start", command=strategy.command, reason=started
                    )
                    attempts.append((strategy.command, started))
                    continue

                try:
                    with started as handle:
                        words = handle.feed(document)
                except SubprocessIOFailure as exc:
                    if already_resolved and not dry_run:
                        raise
                    logger.debug(
                        "Spellchecker input failed", command=strategy.command, reason=str(exc)
                    )
                    attempts.append((strategy.command, str(exc)))
                    continue

                if not self._command:
                    self._command = strategy.command
                    logger.info("Resolved spellchecker", command=strategy.command)
                return words

            if dry_run:
                logger.warning(
                    "No working spellchecker found",
                    tried=[command for command, _ in attempts],
                )
                return UNAVAILABLE

            raise_no_spellchecker_available(attempts)

    def resolve(self, dry_run: bool = False) -> str | _Unavailable:
        """Return the command in use, resolving it with a throwaway document if needed."""
        result = self.spellcheck(DRY_RUN_DOCUMENT, dry_run=dry_run)
        if result is UNAVAILABLE or not self._command:
            return UNAVAILABLE
        return self._command

