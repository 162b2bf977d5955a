from __future__ import annotations

import re
from datetime import datetime
from enum import Enum
from typing import Iterable, Iterator, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator


DEV_NULL = "/dev/null"

# GNU diff -u timestamps, e.g. "2002-02-21 23:30:39.942229878 -0800"
TIMESTAMP_RE = re.compile(
    r"^(\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2})(?:\.(\d+))? ([+-]\d{4})$"
)


class _Value(BaseModel):
    model_config = ConfigDict(frozen=True)


class File(_Value):
    """One side of a patch header.

    ``metadata`` is whatever followed the first tab on the header line
    (usually a timestamp or a revision id).
    """

    name: str
    metadata: Optional[str] = None

    @property
    def is_dev_null(self) -> bool:
        return self.name == DEV_NULL

    @property
    def timestamp(self) -> Optional[datetime]:
        if self.metadata is None:
            return None
        m = TIMESTAMP_RE.match(self.metadata.strip())
        if not m:
            return None
        base, fraction, tz = m.groups()
        # datetime only keeps microseconds
        micros = (fraction or "")[:6].ljust(6, "0")
        try:
            return datetime.strptime(f"{base}.{micros} {tz}", "%Y-%m-%d %H:%M:%S.%f %z")
        except ValueError:
            return None


class Range(_Value):
    start: int = Field(ge=0)
    count: int = Field(default=1, ge=0)

    @model_validator(mode="after")
    def _check_empty_start(self) -> "Range":
        if self.start == 0 and self.count != 0:
            raise ValueError("Range start may only be 0 when count is 0")
        return self


class LineKind(str, Enum):
    CONTEXT = " "
    ADD = "+"
    REMOVE = "-"

    @property
    def marker(self) -> str:
        return self.value


class Line(_Value):
    kind: LineKind
    text: str
    has_trailing_newline: bool = True

    @classmethod
    def context(cls, text: str, *, has_trailing_newline: bool = True) -> "Line":
        return cls(
            kind=LineKind.CONTEXT, text=text, has_trailing_newline=has_trailing_newline
        )

    @classmethod
    def add(cls, text: str, *, has_trailing_newline: bool = True) -> "Line":
        return cls(kind=LineKind.ADD, text=text, has_trailing_newline=has_trailing_newline)

    @classmethod
    def remove(cls, text: str, *, has_trailing_newline: bool = True) -> "Line":
        return cls(
            kind=LineKind.REMOVE, text=text, has_trailing_newline=has_trailing_newline
        )

    @property
    def in_old(self) -> bool:
        return self.kind != LineKind.ADD

    @property
    def in_new(self) -> bool:
        return self.kind != LineKind.REMOVE


class Hunk(_Value):
    """
    A contiguous block of changes.

    The parser guarantees that the Context/Remove lines add up to
    ``old_range.count`` and the Context/Add lines to ``new_range.count``.
    Directly constructed hunks are not re-validated; use ``from_lines`` to get
    ranges that agree with the lines.
    """

    old_range: Range
    new_range: Range
    hint: Optional[str] = None
    lines: Tuple[Line, ...] = ()

    @classmethod
    def from_lines(
        cls,
        lines: Iterable[Line],
        *,
        old_start: int,
        new_start: int,
        hint: Optional[str] = None,
    ) -> "Hunk":
        lines = tuple(lines)
        old_count = sum(1 for ln in lines if ln.in_old)
        new_count = sum(1 for ln in lines if ln.in_new)
        return cls(
            old_range=Range(start=old_start, count=old_count),
            new_range=Range(start=new_start, count=new_count),
            hint=hint,
            lines=lines,
        )

    def observed_counts(self) -> Tuple[int, int]:
        old = sum(1 for ln in self.lines if ln.in_old)
        new = sum(1 for ln in self.lines if ln.in_new)
        return old, new

    def numbered_lines(self) -> Iterator[Tuple[Optional[int], Optional[int], Line]]:
        """Yield (old line number, new line number, line); None for the side a line is absent from."""
        old_no = self.old_range.start
        new_no = self.new_range.start
        for ln in self.lines:
            old_val: Optional[int] = None
            new_val: Optional[int] = None
            if ln.in_old:
                old_val = old_no
                old_no += 1
            if ln.in_new:
                new_val = new_no
                new_no += 1
            yield old_val, new_val, ln


class Patch(_Value):
    old: File
    new: File
    hunks: Tuple[Hunk, ...] = ()

    @property
    def added(self) -> int:
        return sum(1 for h in self.hunks for ln in h.lines if ln.kind == LineKind.ADD)

    @property
    def removed(self) -> int:
        return sum(
            1 for h in self.hunks for ln in h.lines if ln.kind == LineKind.REMOVE
        )

    def __str__(self) -> str:
        from .render import render_patch

        return render_patch(self)


class PatchSet(_Value):
    patches: Tuple[Patch, ...] = ()

    def __iter__(self) -> Iterator[Patch]:  # type: ignore[override]
        return iter(self.patches)

    def __len__(self) -> int:
        return len(self.patches)

    def __getitem__(self, index: int) -> Patch:
        return self.patches[index]

    def __str__(self) -> str:
        from .render import render

        return render(self)
