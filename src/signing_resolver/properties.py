"""
Reader for the Java ``.properties`` format.

Gradle projects keep machine-local settings (``local.properties``) in this
format. The reader follows ``java.util.Properties.load``: ``#`` and ``!``
comments, ``=``/``:``/whitespace separators, backslash line continuations and
``\\uXXXX`` escapes, with files decoded as ISO-8859-1.

Two things are rejected that Java silently accepts, because neither can
appear in a hand-written signing file on purpose: a malformed ``\\u`` escape
and a line with an empty key.
"""

from __future__ import annotations

import logging
import os
import re
import string
from pathlib import Path
from typing import Iterator

from signing_resolver.exceptions import PropertiesSyntaxError

logger = logging.getLogger(__name__)

PROPERTIES_ENCODING = "iso-8859-1"

_WHITESPACE = " \t\f"
_SEPARATORS = "=:"
_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}
_NEWLINE = re.compile(r"\r\n|\r|\n")


def _continues(line: str) -> bool:
    """An odd number of trailing backslashes joins the next line."""
    count = len(line) - len(line.rstrip("\\"))
    return count % 2 == 1


def _logical_lines(text: str) -> Iterator[tuple[int, str]]:
    pending: str | None = None
    start = 0
    for lineno, raw in enumerate(_NEWLINE.split(text), start=1):
        stripped = raw.lstrip(_WHITESPACE)
        if pending is None:
            if not stripped or stripped[0] in "#!":
                continue
            start = lineno
            pending = ""
        if _continues(stripped):
            pending += stripped[:-1]
            continue
        yield start, pending + stripped
        pending = None
    if pending:
        yield start, pending


def _split_key_value(line: str) -> tuple[str, str]:
    i = 0
    while i < len(line):
        c = line[i]
        if c == "\\":
            i += 2
            continue
        if c in _SEPARATORS or c in _WHITESPACE:
            break
        i += 1
    key, rest = line[:i], line[i:].lstrip(_WHITESPACE)
    if rest and rest[0] in _SEPARATORS:
        rest = rest[1:].lstrip(_WHITESPACE)
    return key, rest


def _unescape(value: str, lineno: int) -> str:
    out = []
    i = 0
    while i < len(value):
        c = value[i]
        if c != "\\":
            out.append(c)
            i += 1
            continue
        i += 1
        if i >= len(value):
            break
        c = value[i]
        if c == "u":
            digits = value[i + 1:i + 5]
            if len(digits) != 4 or any(d not in string.hexdigits for d in digits):
                raise PropertiesSyntaxError("malformed \\uxxxx escape", lineno)
            out.append(chr(int(digits, 16)))
            i += 5
            continue
        out.append(_ESCAPES.get(c, c))
        i += 1
    return "".join(out)


def parse_properties(text: str) -> dict[str, str]:
    """
    Parse ``.properties`` text into a dict.

    Later duplicates of a key override earlier ones, as in Java.

    Raises:
        PropertiesSyntaxError: On a malformed escape or an empty key.
    """
    properties: dict[str, str] = {}
    for lineno, line in _logical_lines(text):
        raw_key, raw_value = _split_key_value(line)
        key = _unescape(raw_key, lineno)
        if not key:
            raise PropertiesSyntaxError("empty key", lineno)
        properties[key] = _unescape(raw_value, lineno)
    return properties


def load_properties(path: str | os.PathLike) -> dict[str, str]:
    """
    Read and parse a ``.properties`` file.

    Raises:
        FileNotFoundError: If the file does not exist.
        OSError: If the file cannot be read.
        PropertiesSyntaxError: If the content is malformed.
    """
    text = Path(path).read_text(encoding=PROPERTIES_ENCODING)
    properties = parse_properties(text)
    logger.debug("Loaded %d properties from %s", len(properties), path)
    return properties
