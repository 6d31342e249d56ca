"""
pod_spelling - check POD documentation for spelling mistakes.

POD is extracted from Perl files, piped through an external spellchecker
(spell, aspell, ispell or hunspell, whichever can be run first) and every
file is reported as one TAP test.

Main Components:
    - api: module-level functions working on a process-wide default context
    - checker.SpellingContext: injectable state and operations for one run
    - spellchecker: candidate resolution and subprocess invocation
    - discovery: finding Perl files below a directory
    - pod_text: turning POD into plain prose
    - stopwords: words that are never reported
"""

__version__ = "0.12.0"

from .api import (
    add_stopwords,
    all_pod_files,
    all_pod_files_spelling_ok,
    default_context,
    has_working_spellchecker,
    pod_file_spelling_ok,
    set_pod_file_filter,
    set_spell_cmd,
)
from .checker import SpellingContext
from .errors import (
    ConfigurationError,
    ErrorCode,
    FileUnreadable,
    NoSpellcheckerAvailable,
    PodSpellingError,
    SubprocessIOFailure,
)
from .models import SpellingResult
from .reporting import RecordingReporter, TapReporter
from .spellchecker import UNAVAILABLE, SpellcheckerResolver

__all__ = [
    # Test functions
    "pod_file_spelling_ok",
    "all_pod_files_spelling_ok",
    "all_pod_files",
    "add_stopwords",
    "set_spell_cmd",
    "set_pod_file_filter",
    "has_working_spellchecker",
    "default_context",
    # Building blocks
    "SpellingContext",
    "SpellcheckerResolver",
    "SpellingResult",
    "TapReporter",
    "RecordingReporter",
    "UNAVAILABLE",
    # Errors
    "ErrorCode",
    "PodSpellingError",
    "NoSpellcheckerAvailable",
    "FileUnreadable",
    "SubprocessIOFailure",
    "ConfigurationError",
]
