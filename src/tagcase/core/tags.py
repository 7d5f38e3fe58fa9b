"""Struct tag syntax.

A tag literal is a space separated list of ``key:"value"`` entries, the
convention followed by ``reflect.StructTag``. Parsing is permissive: it stops
at the first malformed entry and never raises.
"""

import string
from collections.abc import Iterator

from tagcase.models import TagLookup, TagValue

SERIALIZATION_TAG_KEY = "json"

ParsedTag = dict[str, TagValue]

_SIMPLE_ESCAPES = {
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
    "\\": "\\",
    '"': '"',
}
_HEX_ESCAPE_WIDTHS = {"x": 2, "u": 4, "U": 8}
_OCTAL_DIGITS = "01234567"


def unquote(quoted: str) -> str | None:
    """Decode a double-quoted Go string literal, or return None if it is invalid."""
    if len(quoted) < 2 or quoted[0] != '"' or quoted[-1] != '"':
        return None
    body = quoted[1:-1]
    out: list[str] = []
    i = 0
    while i < len(body):
        ch = body[i]
        if ch in ('"', "\n"):
            return None
        if ch != "\\":
            out.append(ch)
            i += 1
            continue
        if i + 1 >= len(body):
            return None
        esc = body[i + 1]
        if esc in _SIMPLE_ESCAPES:
            out.append(_SIMPLE_ESCAPES[esc])
            i += 2
        elif esc in _HEX_ESCAPE_WIDTHS:
            width = _HEX_ESCAPE_WIDTHS[esc]
            digits = body[i + 2 : i + 2 + width]
            if len(digits) != width or any(c not in string.hexdigits for c in digits):
                return None
            code = int(digits, 16)
            if esc != "x" and (code > 0x10FFFF or 0xD800 <= code <= 0xDFFF):
                return None
            out.append(chr(code))
            i += 2 + width
        elif esc in _OCTAL_DIGITS:
            digits = body[i + 1 : i + 4]
            if len(digits) != 3 or any(c not in _OCTAL_DIGITS for c in digits):
                return None
            code = int(digits, 8)
            if code > 0xFF:
                return None
            out.append(chr(code))
            i += 4
        else:
            return None
    return "".join(out)


def _iter_raw_entries(raw: str) -> Iterator[tuple[str, str]]:
    """Yield ``(key, quoted value)`` pairs until the literal ends or turns malformed."""
    tag = raw
    while tag:
        i = 0
        while i < len(tag) and tag[i] == " ":
            i += 1
        tag = tag[i:]
        if not tag:
            return

        i = 0
        while i < len(tag) and tag[i] > " " and tag[i] not in ':"\x7f':
            i += 1
        if i == 0 or i + 1 >= len(tag) or tag[i] != ":" or tag[i + 1] != '"':
            return
        name = tag[:i]
        tag = tag[i + 1 :]

        i = 1
        while i < len(tag) and tag[i] != '"':
            if tag[i] == "\\":
                i += 1
            i += 1
        if i >= len(tag):
            return
        yield name, tag[: i + 1]
        tag = tag[i + 1 :]


def split_value(value: str) -> TagValue:
    primary, *options = value.split(",")
    return TagValue(primary=primary, options=tuple(options))


def primary_value(value: str) -> str:
    return value.split(",", 1)[0]


def parse_tag(raw: str) -> ParsedTag:
    """Parse a tag literal into an ordered ``key -> TagValue`` mapping.

    The first occurrence of a key wins. An entry whose value is not a valid
    quoted string is left out, and later duplicates of that key stay hidden
    so that the mapping agrees with :func:`lookup_tag`.
    """
    parsed: ParsedTag = {}
    seen: set[str] = set()
    for name, quoted in _iter_raw_entries(raw):
        if name in seen:
            continue
        seen.add(name)
        value = unquote(quoted)
        if value is not None:
            parsed[name] = split_value(value)
    return parsed


def lookup_tag(raw: str, key: str) -> TagLookup:
    for name, quoted in _iter_raw_entries(raw):
        if name != key:
            continue
        value = unquote(quoted)
        if value is None:
            return TagLookup(found=False)
        return TagLookup(found=True, value=value)
    return TagLookup(found=False)


def serialization_key(raw: str, key: str = SERIALIZATION_TAG_KEY) -> TagLookup:
    """Return the primary value of the ``key`` entry, options such as ``omitempty`` dropped."""
    result = lookup_tag(raw, key)
    if not result.found:
        return result
    return TagLookup(found=True, value=primary_value(result.value))


def strip_tag_delimiters(literal: str) -> str:
    """Turn a tag literal as written in source into the tag text."""
    if len(literal) >= 2 and literal[0] == "`" and literal[-1] == "`":
        return literal[1:-1]
    if literal.startswith('"'):
        return unquote(literal) or ""
    return literal
