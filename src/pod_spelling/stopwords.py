"""
Stopwords and filtering of spellchecker output.

A stopword is a word that is never reported, whether or not the spellchecker
knows it. The set starts from a baseline word list of common Perl and CPAN
vocabulary shipped with the package and only ever grows.
"""

from __future__ import annotations

import re
from importlib import resources
from typing import Iterable, Iterator

from pod_spelling.logging_utils import create_logger

logger = create_logger("stopwords")

_LEADING_COMMENT_RE = re.compile(r"^#?\s*")
_TRAILING_SPACE_RE = re.compile(r"\s+$")
_REJECT_RE = re.compile(r"[\s:]")


def load_baseline_wordlist() -> frozenset[str]:
    """Load the baseline word list shipped in pod_spelling/data/wordlist.txt."""
    text = resources.files("pod_spelling").joinpath("data/wordlist.txt").read_text("utf-8")
    return frozenset(
        line.strip() for line in text.splitlines() if line.strip() and not line.startswith("#")
    )


def clean_stopword_line(line: str) -> str | None:
    """Turn one raw line into a stopword, or None if the line must be ignored.

    A leading comment mark and whitespace are dropped, as is trailing
    whitespace. Lines that still contain whitespace or a colon are rejected,
    so diagnostic output such as "# Errors:" or "#   Failed test ..." can be
    appended to a stopword file without polluting it.
    """
    word = _LEADING_COMMENT_RE.sub("", line, count=1)
    word = _TRAILING_SPACE_RE.sub("", word)
    if not word or _REJECT_RE.search(word):
        return None
    return word


class StopwordSet:
    """Case-sensitive, grow-only set of words that are never reported."""

    def __init__(self, baseline: Iterable[str] | None = None) -> None:
        self._words: set[str] = set(
            baseline if baseline is not None else load_baseline_wordlist()
        )

    def __contains__(self, word: object) -> bool:
        return word in self._words

    def __iter__(self) -> Iterator[str]:
        return iter(self._words)

    def __len__(self) -> int:
        return len(self._words)

    def add(self, *lines: str) -> list[str]:
        """Add stopwords from raw lines and return the words that were accepted."""
        accepted = []
        for line in lines:
            word = clean_stopword_line(line)
            if word is None:
                continue
            self._words.add(word)
            accepted.append(word)
        if accepted:
            logger.debug("Added stopwords", count=len(accepted))
        return accepted

    def add_from_file(self, path: str) -> list[str]:
        """Add every acceptable line of ``path`` as a stopword."""
        with open(path, encoding="utf-8") as handle:
            return self.add(*handle.read().splitlines())


def filter_words(raw_words: Iterable[str], stopwords: StopwordSet | Iterable[str]) -> list[str]:
    """Reduce raw spellchecker output to the sorted, unique words worth reporting."""
    known = stopwords if isinstance(stopwords, StopwordSet) else set(stopwords)
    remaining = {word.rstrip("\r\n") for word in raw_words}
    return sorted(word for word in remaining if word and word not in known)
