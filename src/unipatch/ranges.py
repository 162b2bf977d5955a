from __future__ import annotations

import re
from typing import Optional, Tuple

from .errors import MalformedRangeError
from .models import Range


HUNK_HEADER_RE = re.compile(
    r"^@@ -(\d+)(?:,(\d+))? \+(\d+)(?:,(\d+))? @@(.*)$", re.ASCII
)


def _make_range(start: str, count: Optional[str], side: str, lineno: int) -> Range:
    start_val = int(start)
    count_val = int(count) if count is not None else 1
    if start_val == 0 and count_val != 0:
        raise MalformedRangeError(
            f"{side} range starts at 0 but declares {count_val} lines",
            line=lineno,
            hint="Only an empty range (count 0) may start at line 0",
        )
    return Range(start=start_val, count=count_val)


def parse_range_line(line: str, lineno: int) -> Tuple[Range, Range, Optional[str]]:
    """
    Parse `@@ -l[,s] +l[,s] @@[hint]`.
    The hint keeps everything after the closing '@@', leading space included.
    """
    m = HUNK_HEADER_RE.match(line)
    if not m:
        raise MalformedRangeError(
            f"Malformed hunk range line: {line!r}",
            line=lineno,
            hint="Expected '@@ -<start>[,<count>] +<start>[,<count>] @@'",
        )
    old_range = _make_range(m.group(1), m.group(2), "Old", lineno)
    new_range = _make_range(m.group(3), m.group(4), "New", lineno)
    hint = m.group(5) or None
    return old_range, new_range, hint
