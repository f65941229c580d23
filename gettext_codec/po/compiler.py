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

import functools
import logging
import re

from ..compiler import Compiler
from ..shared import escape, fold_line, generate_header_block
from ..table import Entry

log = logging.getLogger(__name__)

COMMENT_PREFIXES = (
    ("translator", "# "),
    ("reference", "#: "),
    ("extracted", "#. "),
    ("flag", "#, "),
    ("previous", "#| "),
)
LINE_BREAK = re.compile(r"\r?\n|\r")


def compare(r1: Entry, r2: Entry) -> int:
    if r1.msgid > r2.msgid:
        return 1
    if r2.msgid > r1.msgid:
        return -1
    return 0


class PoCompiler(Compiler):
    def _draw_comments(self, comments: dict[str, str]) -> str:
        lines = []
        for key, prefix in COMMENT_PREFIXES:
            if not comments.get(key):
                continue
            lines.extend(
                f"{prefix}{line}" for line in LINE_BREAK.split(comments[key])
            )
        return "\n".join(lines)

    def _add_po_string(self, key: str, value: str) -> str:
        lines = fold_line(escape(value), self._options.fold_length)
        if len(lines) < 2:
            return f'{key} "{lines[0]}"'
        return f'{key} ""\n"' + '"\n"'.join(lines) + '"'

    def _draw_block(self, entry: Entry) -> str:
        response = []
        if comments := self._draw_comments(entry.comments):
            response.append(comments)
        if entry.msgctxt:
            response.append(self._add_po_string("msgctxt", entry.msgctxt))
        response.append(self._add_po_string("msgid", entry.msgid))

        if entry.is_plural:
            response.append(self._add_po_string("msgid_plural", entry.msgid_plural))
            for i, msgstr in enumerate(entry.msgstr):
                response.append(self._add_po_string(f"msgstr[{i}]", msgstr))
        else:
            response.append(self._add_po_string("msgstr", entry.msgstr[0]))
        return "\n".join(response)

    def _sorted(self, entries: list[Entry]) -> list[Entry]:
        sort = self._options.sort
        if not sort:
            return entries
        if callable(sort):
            return sorted(entries, key=functools.cmp_to_key(sort))
        return sorted(entries, key=functools.cmp_to_key(compare))

    def compile(self) -> bytes:
        entries = self._sorted(list(self._table.entries()))
        header = self._header_entry(generate_header_block(self._table.headers))

        blocks = [self._draw_block(header)]
        blocks.extend(self._draw_block(entry) for entry in entries)
        log.debug("Compiled %d PO entries (%s)", len(entries), self._charset)
        return self._encode("\n\n".join(blocks))
