from __future__ import annotations

import typing

from rich import console as rich_console
from rich import text as rich_text

from unipatch.lexer import NEW_HEADER_PREFIX, NO_NEWLINE_MARKER, OLD_HEADER_PREFIX
from unipatch.logger import logger
from unipatch.models import Hunk, LineKind, Patch, PatchSet
from unipatch.render import render_file_header, render_range_line
from unipatch.settings.models import DisplaySettings


def _line_style(kind: LineKind, settings: DisplaySettings) -> str:
    if kind == LineKind.ADD:
        return settings.add_style
    if kind == LineKind.REMOVE:
        return settings.remove_style
    return settings.context_style


def _gutter_width(hunks: typing.Sequence[Hunk]) -> int:
    top = 0
    for h in hunks:
        top = max(
            top,
            h.old_range.start + h.old_range.count,
            h.new_range.start + h.new_range.count,
        )
    return len(str(top))


def _gutter(number: typing.Optional[int], width: int) -> str:
    if number is None:
        return " " * width
    return str(number).rjust(width)


def _hunk_texts(
    hunk: Hunk, settings: DisplaySettings, width: int
) -> list[rich_text.Text]:
    out = [
        rich_text.Text(
            render_range_line(hunk), style=settings.range_style, no_wrap=True
        )
    ]
    for old_no, new_no, ln in hunk.numbered_lines():
        row = rich_text.Text(no_wrap=True)
        if settings.show_line_numbers:
            row.append(f"{_gutter(old_no, width)} {_gutter(new_no, width)} ", style="dim")
        row.append(f"{ln.kind.marker}{ln.text}", style=_line_style(ln.kind, settings))
        out.append(row)
        if not ln.has_trailing_newline:
            marker = rich_text.Text(no_wrap=True)
            if settings.show_line_numbers:
                marker.append(" " * (2 * width + 2))
            marker.append(NO_NEWLINE_MARKER, style=settings.marker_style)
            out.append(marker)
    return out


def format_patch(
    patch: Patch, settings: typing.Optional[DisplaySettings] = None
) -> rich_console.Group:
    settings = settings or DisplaySettings()
    width = _gutter_width(patch.hunks)
    texts: list[rich_text.Text] = [
        rich_text.Text(
            render_file_header(patch.old, OLD_HEADER_PREFIX),
            style=settings.header_style,
            no_wrap=True,
        ),
        rich_text.Text(
            render_file_header(patch.new, NEW_HEADER_PREFIX),
            style=settings.header_style,
            no_wrap=True,
        ),
    ]
    for hunk in patch.hunks:
        texts.extend(_hunk_texts(hunk, settings, width))
    return rich_console.Group(*texts)


def format_patch_set(
    patches: PatchSet, settings: typing.Optional[DisplaySettings] = None
) -> rich_console.Group:
    return rich_console.Group(*(format_patch(p, settings) for p in patches.patches))


def print_patch_set(
    patches: PatchSet,
    console: typing.Optional[rich_console.Console] = None,
    settings: typing.Optional[DisplaySettings] = None,
) -> None:
    console = console or rich_console.Console()
    logger.debug(
        "Printing patch set",
        files=len(patches),
        added=sum(p.added for p in patches.patches),
        removed=sum(p.removed for p in patches.patches),
    )
    console.print(format_patch_set(patches, settings))
