from __future__ import annotations

from typing import List, Optional, Union

from .lexer import NEW_HEADER_PREFIX, NO_NEWLINE_MARKER, OLD_HEADER_PREFIX
from .models import File, Hunk, Patch, PatchSet, Range
from .settings.models import RenderSettings


_QUOTE_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\b": "\\b",
    "\a": "\\a",
    "\f": "\\f",
    "\v": "\\v",
}


def _is_raw_byte(ch: str) -> bool:
    # Undecodable bytes from quoted names come back as surrogateescape code points
    return "\udc80" <= ch <= "\udcff"


def _needs_quoting(name: str) -> bool:
    if name.startswith('"'):
        return True
    return any(
        ch in _QUOTE_ESCAPES or ord(ch) < 0x20 or ord(ch) == 0x7F or _is_raw_byte(ch)
        for ch in name
    )


def _quote(name: str) -> str:
    out: List[str] = ['"']
    for ch in name:
        esc = _QUOTE_ESCAPES.get(ch)
        if esc is not None:
            out.append(esc)
        elif ord(ch) < 0x20 or ord(ch) == 0x7F:
            out.append(f"\\{ord(ch):03o}")
        elif _is_raw_byte(ch):
            out.append(f"\\{ord(ch) - 0xDC00:03o}")
        else:
            out.append(ch)
    out.append('"')
    return "".join(out)


def render_file_header(file: File, prefix: str) -> str:
    name = _quote(file.name) if _needs_quoting(file.name) else file.name
    if file.metadata is not None:
        return f"{prefix}{name}\t{file.metadata}"
    return f"{prefix}{name}"


def _render_range(rng: Range, omit_unit_counts: bool) -> str:
    if omit_unit_counts and rng.count == 1:
        return str(rng.start)
    return f"{rng.start},{rng.count}"


def render_range_line(hunk: Hunk, settings: Optional[RenderSettings] = None) -> str:
    settings = settings or RenderSettings()
    old = _render_range(hunk.old_range, settings.omit_unit_counts)
    new = _render_range(hunk.new_range, settings.omit_unit_counts)
    return f"@@ -{old} +{new} @@{hunk.hint or ''}"


def _hunk_lines(hunk: Hunk, settings: RenderSettings) -> List[str]:
    out = [render_range_line(hunk, settings)]
    for ln in hunk.lines:
        out.append(f"{ln.kind.marker}{ln.text}")
        if not ln.has_trailing_newline:
            out.append(NO_NEWLINE_MARKER)
    return out


def _patch_lines(patch: Patch, settings: RenderSettings) -> List[str]:
    out = [
        render_file_header(patch.old, OLD_HEADER_PREFIX),
        render_file_header(patch.new, NEW_HEADER_PREFIX),
    ]
    for hunk in patch.hunks:
        out.extend(_hunk_lines(hunk, settings))
    return out


def _join(lines: List[str]) -> str:
    return "".join(f"{ln}\n" for ln in lines)


def render_hunk(hunk: Hunk, settings: Optional[RenderSettings] = None) -> str:
    return _join(_hunk_lines(hunk, settings or RenderSettings()))


def render_patch(patch: Patch, settings: Optional[RenderSettings] = None) -> str:
    return _join(_patch_lines(patch, settings or RenderSettings()))


def render(
    obj: Union[PatchSet, Patch, Hunk], settings: Optional[RenderSettings] = None
) -> str:
    """
    Serialize a PatchSet, Patch or Hunk back into unified diff text.
    Output always uses LF terminators and ends with one.
    """
    settings = settings or RenderSettings()
    if isinstance(obj, PatchSet):
        lines: List[str] = []
        for patch in obj.patches:
            lines.extend(_patch_lines(patch, settings))
        return _join(lines)
    if isinstance(obj, Patch):
        return render_patch(obj, settings)
    if isinstance(obj, Hunk):
        return render_hunk(obj, settings)
    raise TypeError(f"Cannot render object of type {type(obj).__name__}")
