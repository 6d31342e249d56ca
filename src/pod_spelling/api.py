"""
Module-level functions bound to a process-wide default SpellingContext.

These mirror the functions a test script calls directly:

    from pod_spelling import add_stopwords, all_pod_files_spelling_ok

    add_stopwords("Foo", "Bar")
    all_pod_files_spelling_ok()
"""

from __future__ import annotations

import threading

from pod_spelling.checker import SpellingContext
from pod_spelling.config import settings
from pod_spelling.discovery import FileFilter

_default: SpellingContext | None = None
_default_lock = threading.Lock()


def default_context() -> SpellingContext:
    """Return the process-wide context, creating it from the settings on first use."""
    global _default
    with _default_lock:
        if _default is None:
            _default = SpellingContext(settings=settings)
        return _default


def pod_file_spelling_ok(path: str, name: str | None = None) -> bool:
    return default_context().pod_file_spelling_ok(path, name)


def all_pod_files_spelling_ok(*paths: str) -> bool:
    return default_context().all_pod_files_spelling_ok(*paths)


def all_pod_files(*paths: str) -> list[str]:
    return default_context().all_pod_files(*paths)


def add_stopwords(*lines: str) -> list[str]:
    return default_context().add_stopwords(*lines)


def set_spell_cmd(command: str) -> None:
    default_context().set_spell_cmd(command)


def set_pod_file_filter(file_filter: FileFilter | None) -> None:
    default_context().set_pod_file_filter(file_filter)


def has_working_spellchecker() -> str | None:
    return default_context().has_working_spellchecker()
