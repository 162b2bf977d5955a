from __future__ import annotations

from enum import Enum, auto
from typing import List, Optional


OLD_HEADER_PREFIX = "--- "
NEW_HEADER_PREFIX = "+++ "
HUNK_RANGE_PREFIX = "@@"
NO_NEWLINE_PREFIX = "\\"
NO_NEWLINE_MARKER = "\\ No newline at end of file"


class LineType(Enum):
    OLD_HEADER = auto()
    NEW_HEADER = auto()
    HUNK_RANGE = auto()
    ADDED = auto()
    REMOVED = auto()
    CONTEXT = auto()
    NO_NEWLINE_MARKER = auto()
    NOISE = auto()


def split_lines(text: str) -> List[str]:
    """
    Split input into lines without terminators.
    Accepts LF and CRLF; a single trailing CR is dropped from every line.
    """
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [ln[:-1] if ln.endswith("\r") else ln for ln in lines]


def classify(line: str, next_line: Optional[str] = None) -> LineType:
    """
    Syntactic role of a single line. ``next_line`` is only consulted to tell an
    old-file header from a removed line that happens to start with '--- '.
    """
    if line.startswith(OLD_HEADER_PREFIX):
        if next_line is not None and next_line.startswith(NEW_HEADER_PREFIX):
            return LineType.OLD_HEADER
        return LineType.REMOVED
    if line.startswith(NEW_HEADER_PREFIX):
        return LineType.NEW_HEADER
    if line.startswith(HUNK_RANGE_PREFIX):
        return LineType.HUNK_RANGE
    if line.startswith(NO_NEWLINE_PREFIX):
        # Localized diff tools translate the marker text
        return LineType.NO_NEWLINE_MARKER
    if not line:
        return LineType.NOISE
    first = line[0]
    if first == "+":
        return LineType.ADDED
    if first == "-":
        return LineType.REMOVED
    if first == " ":
        return LineType.CONTEXT
    return LineType.NOISE
