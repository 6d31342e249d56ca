"""
Discovery of Perl files that may contain POD.

A Perl file is any file ending in .PL, .pl, .plx, .pm, .pod or .t, or any
other file whose first line is a shebang mentioning perl. Directories are
walked breadth first; version-control metadata directories are skipped.
"""

from __future__ import annotations

import os
import re
from collections import deque
from typing import Callable, Iterable, Sequence

from pod_spelling.config import DEFAULT_STARTING_POINTS, DEFAULT_VCS_DIRS
from pod_spelling.logging_utils import create_logger

logger = create_logger("discovery")

FileFilter = Callable[[str], bool]

PERL_FILE_RE = re.compile(r"(?:\.PL|\.p(?:l|lx|m|od)|\.t)$")
PERL_SHEBANG_RE = re.compile(r"^#!.*perl")


def accept_all(path: str) -> bool:
    return True


def is_perl_file(path: str) -> bool:
    """Return True if ``path`` looks like Perl source or POD.

    The file is only opened when its name alone does not decide the matter;
    files that cannot be opened are not Perl files.
    """
    if PERL_FILE_RE.search(path):
        return True

    try:
        with open(path, "rb") as handle:
            first = handle.readline()
    except OSError:
        return False

    return bool(PERL_SHEBANG_RE.match(first.decode("latin-1")))


def default_starting_points(candidates: Sequence[str] = DEFAULT_STARTING_POINTS) -> list[str]:
    """Return the first candidate that is an existing directory, else the last candidate."""
    for candidate in candidates[:-1]:
        if os.path.isdir(candidate):
            return [candidate]
    return list(candidates[-1:])


class PodFileFinder:
    """Finds Perl files below a set of starting points."""

    def __init__(
        self,
        file_filter: FileFilter = accept_all,
        vcs_dirs: Iterable[str] = DEFAULT_VCS_DIRS,
        starting_points: Sequence[str] = DEFAULT_STARTING_POINTS,
    ) -> None:
        self.file_filter = file_filter
        self.vcs_dirs = frozenset(vcs_dirs)
        self.starting_points = list(starting_points)

    def find(self, *paths: str) -> list[str]:
        """Return every Perl file at or below ``paths`` accepted by the file filter.

        Without paths the default starting point is searched. Files come back in
        discovery order; sort them if a stable order matters.
        """
        queue = deque(paths if paths else default_starting_points(self.starting_points))
        found: list[str] = []

        while queue:
            path = queue.popleft()

            if os.path.isdir(path):
                try:
                    children = sorted(os.listdir(path))
                except OSError as exc:
                    logger.debug("Skipping unreadable directory", path=path, reason=str(exc))
                    continue
                queue.extend(
                    os.path.join(path, child)
                    for child in children
                    if child not in self.vcs_dirs
                )

            if os.path.isfile(path):
                if not is_perl_file(path):
                    continue
                if not self.file_filter(path):
                    continue
                found.append(path)

        logger.debug("Discovered POD files", count=len(found), paths=list(paths))
        return found
