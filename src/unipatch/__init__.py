"""
Unified diff parsing and rendering.

parse() turns diff text into a PatchSet; render() turns it back. For input
in canonical form (LF terminators, tab before metadata, explicit counts)
render(parse(text)) == text.
"""

from .errors import (
    DanglingNoNewlineMarkerError,
    ExpectedSinglePatchError,
    HunkCountMismatchError,
    MalformedRangeError,
    MissingHeaderPairError,
    ParseError,
    ParseErrorKind,
    UnexpectedEndOfInputError,
)
from .models import File, Hunk, Line, LineKind, Patch, PatchSet, Range
from .parser import parse, parse_single
from .render import render, render_hunk, render_patch
from .settings import (
    DisplaySettings,
    ParseSettings,
    RenderSettings,
    Settings,
    load_settings,
)

__all__ = [
    "DanglingNoNewlineMarkerError",
    "DisplaySettings",
    "ExpectedSinglePatchError",
    "File",
    "Hunk",
    "HunkCountMismatchError",
    "Line",
    "LineKind",
    "MalformedRangeError",
    "MissingHeaderPairError",
    "ParseError",
    "ParseErrorKind",
    "ParseSettings",
    "Patch",
    "PatchSet",
    "Range",
    "RenderSettings",
    "Settings",
    "UnexpectedEndOfInputError",
    "load_settings",
    "parse",
    "parse_single",
    "render",
    "render_hunk",
    "render_patch",
]
