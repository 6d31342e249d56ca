"""
pod_spelling.errors - Error codes, exceptions and raise helpers.

Every exception raised by the library derives from PodSpellingError and
carries an ErrorDetail describing what failed and where.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, NoReturn, Sequence

from pod_spelling.models import ErrorDetail


class ErrorCode(str, Enum):
    NO_SPELLCHECKER_AVAILABLE = "NO_SPELLCHECKER_AVAILABLE"
    FILE_UNREADABLE = "FILE_UNREADABLE"
    SUBPROCESS_IO_FAILURE = "SUBPROCESS_IO_FAILURE"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"


class PodSpellingError(Exception):
    """Base exception wrapping a structured ErrorDetail."""

    def __init__(self, error_detail: ErrorDetail) -> None:
        super().__init__(error_detail.message)
        self.error_detail = error_detail

    @property
    def error_code(self) -> ErrorCode:
        return ErrorCode(self.error_detail.error_code)

    @property
    def details(self) -> dict[str, Any]:
        return self.error_detail.details

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.error_detail.error_code}: {self.error_detail.message!r})"


class NoSpellcheckerAvailable(PodSpellingError):
    """No candidate spellchecker command could be run."""

    @property
    def attempts(self) -> list[tuple[str, str]]:
        return [tuple(pair) for pair in self.details.get("attempts", [])]  # type: ignore[misc]


class FileUnreadable(PodSpellingError):
    """A documentation file is missing or cannot be read."""

    @property
    def path(self) -> str:
        return str(self.details.get("path", ""))


class SubprocessIOFailure(PodSpellingError):
    """Writing to or closing the spellchecker's input stream failed."""

    @property
    def command(self) -> str:
        return str(self.details.get("command", ""))


class ConfigurationError(PodSpellingError):
    """A setting points at something that cannot be used."""

    @property
    def setting(self) -> str:
        return str(self.details.get("setting", ""))


def raise_no_spellchecker_available(
    attempts: Sequence[tuple[str, str]],
    operation: str = "resolve_spellchecker",
) -> NoReturn:
    """Raise NoSpellcheckerAvailable listing every attempted command and its failure."""
    lines = "".join(f"    Unable to run '{command}': {reason}\n" for command, reason in attempts)
    raise NoSpellcheckerAvailable(
        ErrorDetail(
            error_code=ErrorCode.NO_SPELLCHECKER_AVAILABLE,
            message=f"Unable to find a working spellchecker:\n{lines}",
            operation=operation,
            details={"attempts": [list(pair) for pair in attempts]},
        )
    )


def raise_file_unreadable(
    path: str,
    reason: str,
    operation: str = "extract_text",
) -> NoReturn:
    raise FileUnreadable(
        ErrorDetail(
            error_code=ErrorCode.FILE_UNREADABLE,
            message=f"{path} does not exist or is unreadable",
            operation=operation,
            details={"path": path, "reason": reason},
        )
    )


def raise_subprocess_io_failure(
    command: str,
    exc: BaseException,
    operation: str = "invoke_spellchecker",
) -> NoReturn:
    raise SubprocessIOFailure(
        ErrorDetail(
            error_code=ErrorCode.SUBPROCESS_IO_FAILURE,
            message=f"Lost contact with spellchecker '{command}': {exc}",
            operation=operation,
            details={
                "command": command,
                "original_exception_type": type(exc).__name__,
                "original_message": str(exc),
            },
        )
    ) from exc


def raise_configuration_error(
    setting: str,
    message: str,
    operation: str = "load_settings",
    **details: Any,
) -> NoReturn:
    raise ConfigurationError(
        ErrorDetail(
            error_code=ErrorCode.CONFIGURATION_ERROR,
            message=message,
            operation=operation,
            details={"setting": setting, **details},
        )
    )
