"""Scalar field extraction from one flat JSON line.

``yt-dlp --flat-playlist --dump-json`` prints exactly one flat object
per line.  Only a handful of scalar fields are needed per record, so
instead of decoding the whole (possibly huge) object this module scans
the raw line for the requested key and copies out its value.

Every function here is **pure** and **total**: malformed input yields
``None`` (absent) or a best-effort value, never an exception.

Limitations
-----------
* No nesting awareness.  The caller guarantees one flat object per line.
* Numbers are integer runs only (``212.0`` reads as ``"212"``).
* ``null``, ``false`` and ``true`` all read as absent.
"""

from __future__ import annotations

DEFAULT_MAX_LENGTH: int = 4096
"""Upper bound on the length of any extracted value."""

PLACEHOLDER: str = "?"
"""Substituted for escape sequences outside :data:`ESCAPES`."""

ESCAPES: dict[str, str] = {
    "n": "\n",
    "t": "\t",
    "\\": "\\",
    '"': '"',
    "/": "/",
}

_HEX_DIGITS: frozenset[str] = frozenset("0123456789abcdefABCDEF")
_INLINE_SPACE: str = " \t"


def extract_field(
    line: str,
    key: str,
    max_length: int = DEFAULT_MAX_LENGTH,
) -> str | None:
    """Return the value of *key* in the flat JSON object *line*.

    Parameters
    ----------
    line:
        One line of backend output holding a single flat object.
    key:
        Field name to look up (without quotes).
    max_length:
        Values longer than this are truncated, not rejected.

    Returns
    -------
    str | None
        The decoded string or the raw integer text, or ``None`` when the
        key is missing or holds ``null`` / ``false`` / ``true`` / a
        non-scalar value.
    """
    token = f'"{key}"'
    start = 0
    while True:
        pos = line.find(token, start)
        if pos < 0:
            return None
        start = pos + 1

        if not _is_key_position(line, pos):
            continue

        cursor = _skip_space(line, pos + len(token))
        if cursor >= len(line) or line[cursor] != ":":
            continue
        cursor = _skip_space(line, cursor + 1)

        # The first genuine key decides the outcome.
        return _read_value(line, cursor, max_length)


def _is_key_position(line: str, pos: int) -> bool:
    """A key token must follow ``{`` or ``,`` (spaces/tabs allowed)."""
    before = pos - 1
    while before >= 0 and line[before] in _INLINE_SPACE:
        before -= 1
    return before >= 0 and line[before] in "{,"


def _skip_space(line: str, pos: int) -> int:
    while pos < len(line) and line[pos] in _INLINE_SPACE:
        pos += 1
    return pos


def _read_value(line: str, pos: int, max_length: int) -> str | None:
    if pos >= len(line):
        return None
    head = line[pos]
    if head == '"':
        return _read_string(line, pos + 1, max_length)
    if head == "-" or "0" <= head <= "9":
        return _read_integer(line, pos, max_length)
    # null / false / true and any non-scalar shape are all "absent".
    return None


def _read_string(line: str, pos: int, max_length: int) -> str:
    chars: list[str] = []
    end = len(line)
    while pos < end and line[pos] != '"' and len(chars) < max_length:
        char = line[pos]
        if char == "\\" and pos + 1 < end:
            escaped = line[pos + 1]
            if escaped in ESCAPES:
                chars.append(ESCAPES[escaped])
                pos += 2
            elif escaped == "u" and _is_unicode_escape(line, pos + 2):
                chars.append(PLACEHOLDER)
                pos += 6
            else:
                chars.append(PLACEHOLDER)
                pos += 2
        else:
            chars.append(char)
            pos += 1
    return "".join(chars)


def _is_unicode_escape(line: str, pos: int) -> bool:
    digits = line[pos:pos + 4]
    return len(digits) == 4 and all(d in _HEX_DIGITS for d in digits)


def _read_integer(line: str, pos: int, max_length: int) -> str:
    end = pos + 1 if line[pos] == "-" else pos
    while end < len(line) and "0" <= line[end] <= "9":
        end += 1
    return line[pos:end][:max_length]
