"""A small INI parser with name/value lookup.

Sections are written ``[section]``; pairs are ``name=value`` or ``name: value``.
Lines starting with ``;`` or ``#`` are comments, and ``;`` after whitespace
starts an inline comment. An indented line continues the previous value.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

MAX_LINE = 200
MAX_SECTION = 50
MAX_NAME = 50

_WHITESPACE = " \t\n\v\f\r"
_WS = f"[{re.escape(_WHITESPACE)}]*"
_BOMS = ("\ufeff", "\xef\xbb\xbf")

_INT_RE = re.compile(_WS + r"([+-]?)(0[xX][0-9a-fA-F]+|0[0-7]*|[1-9][0-9]*)")
_HEX_FLOAT = r"0[xX](?:[0-9a-fA-F]+\.?[0-9a-fA-F]*|\.[0-9a-fA-F]+)(?:[pP][+-]?[0-9]+)?"
_SPECIAL_FLOAT = r"(?i:infinity|inf|nan)"
_DEC_FLOAT = r"(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?"
_REAL_RE = re.compile(
    _WS + rf"([+-]?)(?:(?P<hex>{_HEX_FLOAT})|(?P<special>{_SPECIAL_FLOAT})|(?P<dec>{_DEC_FLOAT}))"
)

_TRUE_WORDS = frozenset({"true", "yes", "on", "1"})
_FALSE_WORDS = frozenset({"false", "no", "off", "0"})
_ASCII_LOWER = str.maketrans("ABCDEFGHIJKLMNOPQRSTUVWXYZ", "abcdefghijklmnopqrstuvwxyz")


def _rstrip(text):
    return text.rstrip(_WHITESPACE)


def _lstrip(text):
    return text.lstrip(_WHITESPACE)


def _find_char_or_comment(text, char):
    """Index of ``char`` or of a ``;`` that follows whitespace, else len(text)."""
    was_whitespace = False
    for index, ch in enumerate(text):
        if ch == char or (was_whitespace and ch == ";"):
            return index
        was_whitespace = ch in _WHITESPACE
    return len(text)


def _split_text(text):
    parts = text.split("\n")
    lines = [part + "\n" for part in parts[:-1]]
    if parts[-1]:
        lines.append(parts[-1])
    return lines


def _physical_lines(lines):
    """Yield lines cut to the maximum line length, as a fixed buffer would."""
    if isinstance(lines, str):
        lines = _split_text(lines)
    limit = MAX_LINE - 1
    for line in lines:
        while True:
            yield line[:limit]
            line = line[limit:]
            if not line:
                break


@dataclass
class IniParseResult:
    """Parsed (section, name, value) entries and the first error line (0 if none)."""

    entries: list = field(default_factory=list)
    error: int = 0

    @property
    def ok(self):
        return self.error == 0


def parse_ini(lines):
    """Parse INI text given as a string or an iterable of lines."""
    result = IniParseResult()
    section = ""
    prev_name = ""
    for lineno, line in enumerate(_physical_lines(lines), start=1):
        had_bom = False
        if lineno == 1:
            for bom in _BOMS:
                if line.startswith(bom):
                    line = line[len(bom):]
                    had_bom = True
                    break
        rstripped = _rstrip(line)
        start = _lstrip(rstripped)
        indented = had_bom or len(start) < len(rstripped)
        failed = False

        if start[:1] in (";", "#") and start:
            pass
        elif prev_name and start and indented:
            result.entries.append((section, prev_name, start))
        elif start.startswith("["):
            body = start[1:]
            end = _find_char_or_comment(body, "]")
            if body[end:end + 1] == "]":
                section = body[:end][:MAX_SECTION - 1]
                prev_name = ""
            else:
                failed = True
        elif start:
            end = _find_char_or_comment(start, "=")
            if start[end:end + 1] != "=":
                end = _find_char_or_comment(start, ":")
            if start[end:end + 1] in ("=", ":"):
                name = _rstrip(start[:end])
                value = _lstrip(start[end + 1:])
                value = _rstrip(value[:_find_char_or_comment(value, "\0")])
                prev_name = name[:MAX_NAME - 1]
                result.entries.append((section, name, value))
            else:
                failed = True

        if failed and not result.error:
            result.error = lineno
    return result


def parse_ini_file(path):
    """Parse an INI file; raises OSError if it cannot be opened."""
    with open(path, encoding="utf-8", errors="surrogateescape") as handle:
        return parse_ini(handle)


def _make_key(section, name):
    return f"{section}={name}".translate(_ASCII_LOWER)


class IniReader:
    """Case-insensitive lookup of values parsed from an INI file."""

    def __init__(self, filename):
        try:
            result = parse_ini_file(filename)
        except OSError:
            result = IniParseResult(error=-1)
        self._apply(result)

    @classmethod
    def from_lines(cls, lines):
        """Build a reader from INI text or lines instead of a file."""
        reader = object.__new__(cls)
        reader._apply(parse_ini(lines))
        return reader

    def _apply(self, result):
        self._error = result.error
        self._values = {}
        for section, name, value in result.entries:
            key = _make_key(section, name)
            existing = self._values.get(key, "")
            self._values[key] = f"{existing}\n{value}" if existing else value

    def parse_error(self):
        """0 on success, the first error line, or -1 if the file could not be opened."""
        return self._error

    def get(self, section, name, default):
        """The value for ``name`` in ``section``, or ``default``."""
        return self._values.get(_make_key(section, name), default)

    def get_integer(self, section, name, default):
        """The value as a decimal, octal or hex integer, or ``default``."""
        match = _INT_RE.match(self.get(section, name, ""))
        if not match:
            return default
        sign, digits = match.groups()
        if digits[:2] in ("0x", "0X"):
            number = int(digits, 16)
        elif digits.startswith("0"):
            number = int(digits, 8)
        else:
            number = int(digits, 10)
        return -number if sign == "-" else number

    def get_real(self, section, name, default):
        """The value as a floating point number, or ``default``."""
        match = _REAL_RE.match(self.get(section, name, ""))
        if not match:
            return default
        sign = match.group(1)
        if match.group("hex"):
            return float.fromhex(sign + match.group("hex"))
        return float(sign + (match.group("special") or match.group("dec")))

    def get_boolean(self, section, name, default):
        """The value as a boolean (true/yes/on/1, false/no/off/0), or ``default``."""
        word = self.get(section, name, "").translate(_ASCII_LOWER)
        if word in _TRUE_WORDS:
            return True
        if word in _FALSE_WORDS:
            return False
        return default