from __future__ import annotations

from enum import Enum
from typing import Optional


class ParseErrorKind(str, Enum):
    MissingHeaderPair = "MissingHeaderPair"
    MalformedRange = "MalformedRange"
    DanglingNoNewlineMarker = "DanglingNoNewlineMarker"
    HunkCountMismatch = "HunkCountMismatch"
    UnexpectedEndOfInput = "UnexpectedEndOfInput"
    ExpectedSinglePatch = "ExpectedSinglePatch"


class ParseError(ValueError):
    """Any structural problem detected while parsing a unified diff.

    ``line`` is 1-based and points into the original input.
    """

    kind: ParseErrorKind

    def __init__(self, msg: str, *, line: int, hint: Optional[str] = None) -> None:
        super().__init__(f"line {line}: {msg}")
        self.msg = msg
        self.line = line
        self.hint = hint


class MissingHeaderPairError(ParseError):
    kind = ParseErrorKind.MissingHeaderPair


class MalformedRangeError(ParseError):
    kind = ParseErrorKind.MalformedRange


class DanglingNoNewlineMarkerError(ParseError):
    kind = ParseErrorKind.DanglingNoNewlineMarker


class UnexpectedEndOfInputError(ParseError):
    kind = ParseErrorKind.UnexpectedEndOfInput


class ExpectedSinglePatchError(ParseError):
    kind = ParseErrorKind.ExpectedSinglePatch


class HunkCountMismatchError(ParseError):
    kind = ParseErrorKind.HunkCountMismatch

    def __init__(
        self,
        *,
        line: int,
        declared_old: int,
        declared_new: int,
        observed_old: int,
        observed_new: int,
    ) -> None:
        super().__init__(
            f"Hunk declares -{declared_old} +{declared_new} lines "
            f"but contains -{observed_old} +{observed_new}",
            line=line,
            hint="Context and removed lines must add up to the old count; "
            "context and added lines to the new count",
        )
        self.declared_old = declared_old
        self.declared_new = declared_new
        self.observed_old = observed_old
        self.observed_new = observed_new
