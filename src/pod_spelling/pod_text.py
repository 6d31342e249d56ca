"""
Extraction of spellcheckable prose from POD.

Only ordinary paragraphs and the text of heading and item commands are kept.
Verbatim paragraphs, regions for other formatters, code and file name
formatting codes and words that look like Perl code are dropped. Words
declared with ``=for stopwords`` or inside ``=begin stopwords`` regions are
removed from the extracted text of that file only.
"""

from __future__ import annotations

import html
import re
import string

from pod_spelling.errors import raise_file_unreadable
from pod_spelling.logging_utils import create_logger

logger = create_logger("pod_text")

_POD_START_RE = re.compile(r"^=[a-zA-Z]")
_BLANK_RE = re.compile(r"^\s*$")
_CODE_OPEN_RE = re.compile(r"([A-Z])(<+)")
_SINGLE_CLOSE_RE = re.compile(r">")
_ITEM_BULLET_RE = re.compile(r"^(?:\*|\d+\.?)\s*")
_SIGIL_RE = re.compile(r"^[$@%&][\w{:^]")
_CALL_RE = re.compile(r"\w\(\)")

TEXT_COMMANDS = frozenset({"head1", "head2", "head3", "head4", "head5", "head6", "item"})

# Formatting codes whose content is never prose
DROPPED_CODES = frozenset({"C", "F", "X", "Z"})

NAMED_ESCAPES = {
    "lt": "<",
    "gt": ">",
    "verbar": "|",
    "sol": "/",
}


def decode_escape(name: str) -> str:
    """Decode the content of an E<> formatting code."""
    name = name.strip()
    if name in NAMED_ESCAPES:
        return NAMED_ESCAPES[name]
    try:
        if name.lower().startswith("0x"):
            return chr(int(name, 16))
        if name.startswith("0") and len(name) > 1:
            return chr(int(name, 8))
        if name.isdigit():
            return chr(int(name))
    except (ValueError, OverflowError):
        return ""
    decoded = html.unescape(f"&{name};")
    return "" if decoded == f"&{name};" else decoded


def _render_code(code: str, content: str) -> str:
    if code in DROPPED_CODES:
        return ""
    if code == "E":
        return decode_escape(content)
    if code == "L":
        if "|" in content:
            return content.split("|", 1)[0]
        if "://" in content:
            return ""
        return content.replace('"', " ").replace("/", " ")
    return content


def _parse_codes(text: str, pos: int, closer: re.Pattern[str] | None) -> tuple[str, int]:
    parts: list[str] = []
    while pos < len(text):
        if closer is not None:
            end = closer.match(text, pos)
            if end:
                return "".join(parts), end.end()

        opener = _CODE_OPEN_RE.match(text, pos)
        if opener:
            code, brackets = opener.groups()
            after = opener.end()
            if len(brackets) > 1 and after < len(text) and text[after].isspace():
                inner_closer = re.compile(r"\s+" + ">" * len(brackets))
                start = after + 1
            else:
                inner_closer = _SINGLE_CLOSE_RE
                start = opener.start() + 2
            content, pos = _parse_codes(text, start, inner_closer)
            parts.append(_render_code(code, content))
            continue

        parts.append(text[pos])
        pos += 1
    return "".join(parts), pos


def strip_formatting_codes(text: str) -> str:
    """Replace POD formatting codes with the prose they stand for."""
    rendered, _ = _parse_codes(text, 0, None)
    return rendered


def looks_like_code(token: str) -> bool:
    """True for tokens such as Foo::Bar, some_function, $var, ->method or name()."""
    return (
        "::" in token
        or "_" in token
        or "->" in token
        or bool(_CALL_RE.search(token))
        or bool(_SIGIL_RE.match(token))
    )


class PodTextExtractor:
    """Default text extractor for files containing POD."""

    def extract(self, path: str) -> str:
        try:
            with open(path, encoding="utf-8", errors="replace") as handle:
                source = handle.read()
        except OSError as exc:
            raise_file_unreadable(path, str(exc))
        return self.extract_text(source)

    def extract_text(self, source: str) -> str:
        """Return the prose of every POD block in ``source``, one paragraph per line."""
        stopwords: set[str] = set()
        prose: list[str] = []
        regions: list[str] = []

        for paragraph in self._pod_paragraphs(source):
            if paragraph.startswith("="):
                command, _, argument = paragraph[1:].replace("\t", " ").partition(" ")
                argument = argument.strip()

                if command == "begin":
                    regions.append(argument.split()[0] if argument else "")
                elif command == "end":
                    if regions:
                        regions.pop()
                elif command == "for":
                    target, _, rest = argument.partition(" ")
                    if target.lstrip(":") == "stopwords":
                        stopwords.update(rest.split())
                elif command in TEXT_COMMANDS and not regions:
                    if command == "item":
                        argument = _ITEM_BULLET_RE.sub("", argument)
                    prose.append(argument)
                continue

            if regions:
                if regions[-1].lstrip(":") == "stopwords":
                    stopwords.update(paragraph.split())
                continue

            if paragraph[:1].isspace():
                continue

            prose.append(paragraph)

        lines = []
        for paragraph in prose:
            words = [
                token
                for token in strip_formatting_codes(paragraph).split()
                if not looks_like_code(token)
                and token.strip(string.punctuation) not in stopwords
            ]
            if words:
                lines.append(" ".join(words))

        if stopwords:
            logger.debug("Per-file stopwords", count=len(stopwords))
        return "\n".join(lines) + ("\n" if lines else "")

    @staticmethod
    def _pod_paragraphs(source: str) -> list[str]:
        """Split the POD blocks of ``source`` into paragraphs.

        Command paragraphs are joined into a single line; other paragraphs keep
        their line breaks so verbatim blocks can still be recognised.
        """
        paragraphs: list[str] = []
        current: list[str] = []
        in_pod = False

        def flush() -> None:
            if not current:
                return
            separator = " " if current[0].startswith("=") else "\n"
            paragraphs.append(separator.join(current))
            current.clear()

        for line in source.splitlines():
            if not in_pod:
                if not _POD_START_RE.match(line):
                    continue
                in_pod = True

            if _BLANK_RE.match(line):
                flush()
            elif not current and line.startswith("=cut"):
                in_pod = False
            else:
                current.append(line)

        flush()
        return paragraphs
