"""
gettext-codec, PO and MO catalog codecs
Copyright (C) 2018-2021 Diniboy and Gelbpunkt

This program is free software: you can redistribute it and/or modify
it under the terms of the GNU Affero General Public License as published by
the Free Software Foundation, either version 3 of the License, or
(at your option) any later version.

This program is distributed in the hope that it will be useful,
but WITHOUT ANY WARRANTY; without even the implied warranty of
MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
GNU Affero General Public License for more details.

You should have received a copy of the GNU Affero General Public License
along with this program.  If not, see <https://www.gnu.org/licenses/>.
"""
from __future__ import annotations

import gettext
import re

from dataclasses import dataclass, field
from typing import Callable, Optional

from .exceptions import MalformedPluralForms

DEFAULT_CHARSET = "utf-8"

# gettext spells these header names in a way title-casing can't restore
HEADER_NAMES = {
    "content-type": "Content-Type",
    "content-transfer-encoding": "Content-Transfer-Encoding",
    "language": "Language",
    "language-team": "Language-Team",
    "last-translator": "Last-Translator",
    "mime-version": "MIME-Version",
    "plural-forms": "Plural-Forms",
    "po-revision-date": "PO-Revision-Date",
    "pot-creation-date": "POT-Creation-Date",
    "project-id-version": "Project-Id-Version",
    "report-msgid-bugs-to": "Report-Msgid-Bugs-To",
    "x-generator": "X-Generator",
}

# ISO-8859 part of each Latin alphabet past latin4
LATIN_PARTS = {"5": "9", "6": "10", "7": "13", "8": "14", "9": "15", "10": "16"}

_CHARSET_ALIASES = (
    (re.compile(r"^utf[-_]?(\d+)$"), r"utf-\1"),
    (re.compile(r"^win(?:dows)?[-_]?(\d+)$"), r"windows-\1"),
    (
        re.compile(r"^latin[-_]?(\d+)$"),
        lambda match: "iso-8859-" + LATIN_PARTS.get(match.group(1), match.group(1)),
    ),
    (re.compile(r"^iso[-_]?8859[-_]?(\d+)$"), r"iso-8859-\1"),
    (re.compile(r"^(?:us[-_]?)?ascii$"), "ascii"),
)

_ESCAPES = str.maketrans(
    {"\\": "\\\\", '"': '\\"', "\t": "\\t", "\r": "\\r", "\n": "\\n"}
)
_UNESCAPES = {
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
}
_ESCAPE_SEQUENCE = re.compile(r"\\(.)", re.DOTALL)

# Folding works on escaped text, so every pattern walks whole escape sequences
_ATOMS = r"(?:[^\\]|\\.)"
_BREAK_AFTER_NEWLINE = re.compile(_ATOMS + r"*?\\n", re.DOTALL)
_BREAK_AFTER_SPACE = re.compile(_ATOMS + r"*\s+", re.DOTALL)
_PUNCTUATION = r"[\x21-\x2f0-9\x5b\x5d-\x60\x7b-\x7e]"
_BREAK_AFTER_PUNCTUATION = re.compile(
    _ATOMS + r"*(?:" + _PUNCTUATION + r"|\\.)+", re.DOTALL
)


def normalize_charset_name(name: Optional[str], default: str = DEFAULT_CHARSET) -> str:
    """Lower-cases a charset name and maps the common aliases to their canonical
    spelling. Unknown names are returned lower-cased.

    ``CHARSET`` is the placeholder xgettext writes into templates and resolves
    to ``default``.
    """
    name = (name or "").strip().lower()
    if name == "charset":
        return default
    for pattern, replacement in _CHARSET_ALIASES:
        if pattern.match(name):
            return pattern.sub(replacement, name)
    return name


def escape(text: str) -> str:
    return (text or "").translate(_ESCAPES)


def unescape(text: str) -> str:
    return _ESCAPE_SEQUENCE.sub(
        lambda m: _UNESCAPES.get(m.group(1), m.group(1)), text
    )


def _ends_inside_escape(text: str) -> bool:
    return (len(text) - len(text.rstrip("\\"))) % 2 == 1


def fold_line(text: str, max_width: int = 76) -> list[str]:
    """Splits an escaped PO string into pieces of at most ``max_width`` characters.

    A piece is cut after the first ``\\n`` escape if it has one, otherwise after
    its last whitespace, otherwise after its last punctuation. Escape sequences
    are never split, which may make a piece one character longer than
    ``max_width``. Joining the pieces gives back ``text``.
    """
    if max_width <= 0 or len(text) <= max_width:
        return [text]

    lines = []
    pos = 0
    length = len(text)
    while pos < length:
        line = text[pos : pos + max_width]
        while _ends_inside_escape(line) and pos + len(line) < length:
            line += text[pos + len(line)]

        if match := _BREAK_AFTER_NEWLINE.match(line):
            line = match.group(0)
        elif pos + len(line) < length:
            if (match := _BREAK_AFTER_SPACE.match(line)) and not match.group(
                0
            ).isspace():
                line = match.group(0)
            elif (match := _BREAK_AFTER_PUNCTUATION.match(line)) and re.search(
                r"[^\x21-\x2f0-9\x5b-\x60\x7b-\x7e]", match.group(0)
            ):
                line = match.group(0)

        lines.append(line)
        pos += len(line)
    return lines


def header_name(key: str) -> str:
    return HEADER_NAMES.get(
        key, "-".join(part.capitalize() for part in key.split("-"))
    )


def generate_header_block(headers: dict[str, str]) -> str:
    lines = [
        f"{header_name(key)}: {(value or '').strip()}"
        for key, value in headers.items()
        if key
    ]
    return "\n".join(lines) + ("\n" if lines else "")


def parse_header_block(text: str) -> dict[str, str]:
    headers = {}
    for line in (text or "").split("\n"):
        key, _, value = line.strip().partition(":")
        key = key.strip().lower()
        if not key:
            continue
        headers[key] = value.strip()
    return headers


def content_type_charset(content_type: Optional[str]) -> Optional[str]:
    """Returns the raw ``charset=`` parameter of a content type, if any."""
    for param in (content_type or "").split(";")[1:]:
        key, _, value = param.partition("=")
        if key.strip().lower() == "charset" and value.strip():
            return value.strip()
    return None


@dataclass
class PluralForms:
    count: int
    expression: str
    _selector: Optional[Callable[[int], int]] = field(
        default=None, init=False, repr=False, compare=False
    )

    def select(self, n: int) -> int:
        """Returns the plural form index the expression picks for ``n``."""
        if self._selector is None:
            self._selector = gettext.c2py(self.expression)
        return self._selector(n)


def parse_plural_forms(value: Optional[str]) -> PluralForms:
    params = {}
    for part in (value or "").split(";"):
        key, sep, param = part.partition("=")
        if sep:
            params[key.strip().lower()] = param.strip()

    count = params.get("nplurals", "")
    if not count.isdecimal() or int(count) < 1:
        raise MalformedPluralForms(value or "")
    count = int(count)
    # gettext falls back to the germanic rule when no expression is given
    default = "0" if count == 1 else "n != 1"
    return PluralForms(count, params.get("plural") or default)
