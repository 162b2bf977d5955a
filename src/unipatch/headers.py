"""
File header parsing: the `--- old` / `+++ new` pair.

The filename is separated from its metadata by the first tab, so unquoted
names may contain spaces. Names starting with a double quote use C-style
escapes, the way git writes paths with unusual characters.
"""

from __future__ import annotations

from typing import Optional, Tuple

from .errors import MissingHeaderPairError
from .lexer import NEW_HEADER_PREFIX, OLD_HEADER_PREFIX
from .models import File


_SIMPLE_ESCAPES = {
    "\\": "\\",
    '"': '"',
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "b": "\b",
    "0": "\0",
    "a": "\a",
    "f": "\f",
    "v": "\v",
}
_OCTAL_DIGITS = "01234567"


def _unquote(s: str) -> Optional[Tuple[str, str]]:
    """
    Decode a quoted name at the start of ``s``.
    Returns (name, rest after the closing quote) or None if the quote is never closed.
    """
    out = bytearray()
    i = 1
    while i < len(s):
        ch = s[i]
        if ch == '"':
            return out.decode("utf-8", errors="surrogateescape"), s[i + 1 :]
        if ch != "\\" or i + 1 >= len(s):
            out += ch.encode("utf-8", errors="surrogateescape")
            i += 1
            continue
        nxt = s[i + 1]
        octal = s[i + 1 : i + 4]
        if len(octal) == 3 and all(c in _OCTAL_DIGITS for c in octal):
            out.append(int(octal, 8) & 0xFF)
            i += 4
        elif nxt in _SIMPLE_ESCAPES:
            out += _SIMPLE_ESCAPES[nxt].encode("utf-8")
            i += 2
        else:
            # Unknown escape, keep it literally
            out += ("\\" + nxt).encode("utf-8", errors="surrogateescape")
            i += 2
    return None


def _split_metadata(rest: str) -> Tuple[str, Optional[str]]:
    name, sep, meta = rest.partition("\t")
    if not sep or not meta:
        return name, None
    return name, meta


def parse_file_header(line: str, prefix: str) -> File:
    """Parse one header line (``prefix`` is '--- ' or '+++ ') into a File."""
    rest = line[len(prefix) :]
    if rest.startswith('"'):
        unquoted = _unquote(rest)
        if unquoted is not None:
            name, tail = unquoted
            if tail[:1] in ("\t", " ") and tail[1:]:
                return File(name=name, metadata=tail[1:])
            return File(name=name)
    name, meta = _split_metadata(rest)
    return File(name=name, metadata=meta)


def parse_header_pair(old_line: str, new_line: str, lineno: int) -> Tuple[File, File]:
    """``lineno`` is the 1-based line number of ``old_line``."""
    if not old_line.startswith(OLD_HEADER_PREFIX):
        raise MissingHeaderPairError(
            f"Expected '{OLD_HEADER_PREFIX.strip()}' header, got {old_line!r}",
            line=lineno,
        )
    if not new_line.startswith(NEW_HEADER_PREFIX):
        raise MissingHeaderPairError(
            f"Header {old_line!r} is not followed by a '+++' header",
            line=lineno,
            hint="Every '--- <old>' line must be directly followed by '+++ <new>'",
        )
    old = parse_file_header(old_line, OLD_HEADER_PREFIX)
    new = parse_file_header(new_line, NEW_HEADER_PREFIX)
    return old, new
