from __future__ import annotations

from typing import List, Optional

from .errors import (
    DanglingNoNewlineMarkerError,
    ExpectedSinglePatchError,
    HunkCountMismatchError,
    MissingHeaderPairError,
    UnexpectedEndOfInputError,
)
from .headers import parse_header_pair
from .lexer import LineType, classify, split_lines
from .models import Hunk, Line, LineKind, Patch, PatchSet
from .ranges import parse_range_line
from .settings.models import ParseSettings


_CONTENT_KINDS = {
    LineType.ADDED: LineKind.ADD,
    LineType.REMOVED: LineKind.REMOVE,
    LineType.CONTEXT: LineKind.CONTEXT,
}


class _Parser:
    """Single-use cursor over the split input lines."""

    def __init__(self, text: str, settings: ParseSettings) -> None:
        self.lines = split_lines(text)
        self.settings = settings
        self.pos = 0

    def _peek(self, offset: int = 0) -> Optional[str]:
        idx = self.pos + offset
        if idx < len(self.lines):
            return self.lines[idx]
        return None

    def _classify_current(self) -> LineType:
        return classify(self.lines[self.pos], self._peek(1))

    # Patch Assembler

    def parse_all(self) -> PatchSet:
        patches: List[Patch] = []
        while self.pos < len(self.lines):
            line = self.lines[self.pos]
            kind = self._classify_current()
            if kind == LineType.OLD_HEADER:
                patches.append(self._parse_patch())
                continue
            if kind == LineType.NEW_HEADER:
                raise MissingHeaderPairError(
                    f"Header {line!r} is not preceded by a '---' header",
                    line=self.pos + 1,
                )
            if kind == LineType.REMOVED and line.startswith("--- "):
                if self.pos + 1 == len(self.lines):
                    raise UnexpectedEndOfInputError(
                        f"Input ends after header {line!r}",
                        line=self.pos + 1,
                        hint="A '+++ <new>' header line is missing",
                    )
                raise MissingHeaderPairError(
                    f"Header {line!r} is not followed by a '+++' header",
                    line=self.pos + 1,
                )
            if kind == LineType.HUNK_RANGE:
                raise MissingHeaderPairError(
                    f"Hunk {line!r} has no file header",
                    line=self.pos + 1,
                    hint="Hunks must follow a '---' / '+++' header pair",
                )
            if kind == LineType.NO_NEWLINE_MARKER:
                raise DanglingNoNewlineMarkerError(
                    "No-newline marker outside of a hunk", line=self.pos + 1
                )
            # Preamble and commentary lines (diff --git, index, ...) are dropped
            self.pos += 1
        return PatchSet(patches=tuple(patches))

    def _parse_patch(self) -> Patch:
        lineno = self.pos + 1
        old, new = parse_header_pair(self.lines[self.pos], self.lines[self.pos + 1], lineno)
        self.pos += 2
        hunks: List[Hunk] = []
        while self.pos < len(self.lines) and self._classify_current() == LineType.HUNK_RANGE:
            hunks.append(self._parse_hunk())
        return Patch(old=old, new=new, hunks=tuple(hunks))

    # Hunk Range + Hunk Body

    def _parse_hunk(self) -> Hunk:
        range_lineno = self.pos + 1
        old_range, new_range, hint = parse_range_line(self.lines[self.pos], range_lineno)
        self.pos += 1

        if self.pos == len(self.lines) and (old_range.count or new_range.count):
            raise UnexpectedEndOfInputError(
                "Input ends directly after a hunk range line",
                line=range_lineno,
            )

        body = self._parse_body(old_range.count, new_range.count)
        hunk = Hunk(
            old_range=old_range, new_range=new_range, hint=hint, lines=tuple(body)
        )
        old_seen, new_seen = hunk.observed_counts()
        if old_seen != old_range.count or new_seen != new_range.count:
            raise HunkCountMismatchError(
                line=range_lineno,
                declared_old=old_range.count,
                declared_new=new_range.count,
                observed_old=old_seen,
                observed_new=new_seen,
            )
        return hunk

    def _parse_body(self, old_left: int, new_left: int) -> List[Line]:
        body: List[Line] = []
        while self.pos < len(self.lines):
            line = self.lines[self.pos]
            kind = self._classify_current()

            if kind == LineType.NO_NEWLINE_MARKER:
                if not body:
                    raise DanglingNoNewlineMarkerError(
                        "No-newline marker is not preceded by a hunk line",
                        line=self.pos + 1,
                    )
                body[-1] = body[-1].model_copy(update={"has_trailing_newline": False})
                self.pos += 1
                continue

            if self.settings.stop_at_declared_counts and old_left <= 0 and new_left <= 0:
                break

            # Source lines such as '--- a;' stay content while the hunk still expects them.
            # A '+++ ' line never opens a patch here, so it is always an added line.
            if kind == LineType.OLD_HEADER and old_left > 0:
                kind = LineType.REMOVED
            elif kind == LineType.NEW_HEADER:
                kind = LineType.ADDED

            line_kind = _CONTENT_KINDS.get(kind)
            if line_kind is None:
                break
            body.append(Line(kind=line_kind, text=line[1:]))
            if line_kind != LineKind.ADD:
                old_left -= 1
            if line_kind != LineKind.REMOVE:
                new_left -= 1
            self.pos += 1
        return body


def parse(text: str, settings: Optional[ParseSettings] = None) -> PatchSet:
    """
    Parse unified diff text into a PatchSet.

    Lines outside of any patch are skipped. An input without any header pair
    yields an empty PatchSet. The first structural problem raises a
    ParseError subclass; no partial result is returned.
    """
    return _Parser(text, settings or ParseSettings()).parse_all()


def parse_single(text: str, settings: Optional[ParseSettings] = None) -> Patch:
    """Parse text that must contain exactly one file patch."""
    patches = parse(text, settings)
    if len(patches) != 1:
        raise ExpectedSinglePatchError(
            f"Expected exactly one patch, found {len(patches)}",
            line=1,
        )
    return patches[0]

