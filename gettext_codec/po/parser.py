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

import codecs
import logging
import re

from enum import Enum
from typing import Optional, Union

from ..charset import decode_bytes
from ..config import ParseOptions
from ..exceptions import MalformedPluralForms, UnexpectedToken
from ..shared import (
    normalize_charset_name,
    parse_header_block,
    parse_plural_forms,
)
from ..table import Entry, Table
from .lexer import PoLexer

log = logging.getLogger(__name__)

CHARSET_PATTERN = re.compile(
    r"content-type:[^\"\\\n]*?charset=([^\"\\\s;]+)", re.IGNORECASE
)
PLURAL_INDEX = re.compile(r"msgstr\[(\d+)\]")


class State(Enum):
    Start = "start"
    InComment = "in_comment"
    InKeywordString = "in_keyword_string"
    InContinuationString = "in_continuation_string"


class Node:
    """An entry while it is being read."""

    __slots__ = {"comments", "fields", "lineno"}

    def __init__(self, lineno: int = 0) -> None:
        self.comments: dict[str, list[str]] = {}
        # msgctxt, msgid, msgid_plural and msgstr[n] by keyword
        self.fields: dict[str, str] = {}
        self.lineno = lineno

    def to_entry(self) -> Entry:
        msgstr = {
            int(match.group(1)): value
            for key, value in self.fields.items()
            if (match := PLURAL_INDEX.fullmatch(key))
        }
        msgid_plural = self.fields.get("msgid_plural")
        if msgid_plural is not None and msgstr:
            forms = [msgstr.get(i, "") for i in range(max(msgstr) + 1)]
        else:
            forms = [msgstr.get(0, "")]
        return Entry(
            msgid=self.fields["msgid"],
            msgstr=forms,
            msgctxt=self.fields.get("msgctxt"),
            msgid_plural=msgid_plural,
            comments={key: "\n".join(lines) for key, lines in self.comments.items()},
        )


class PoParser:
    """Reads PO source into a :class:`Table`.

    Malformed lines are logged and skipped, so a damaged file still yields
    every entry that could be recovered.
    """

    def __init__(self, options: ParseOptions) -> None:
        self.options = options
        self.lexer = PoLexer()
        self.state = State.Start
        self.entries: list[Entry] = []
        self._node = Node()
        self._field: Optional[str] = None
        self._line_breaks = 0
        self._skip_line = False

    def parse(self, buffer: Union[bytes, str]) -> Table:
        for token in self.lexer.tokenize(self._decode(buffer)):
            if self._skip_line and token.type != "NEWLINE":
                continue
            try:
                getattr(self, f"_handle_{token.type.lower()}")(token)
            except UnexpectedToken as e:
                log.warning("%s, skipping", e.text)
                self._skip_line = True
        self._finish_entry()
        return self._build_table()

    def _decode(self, buffer: Union[bytes, str]) -> str:
        if isinstance(buffer, str):
            return buffer
        if buffer.startswith(codecs.BOM_UTF8):
            return decode_bytes(buffer[len(codecs.BOM_UTF8) :], "utf-8")

        # the header is ASCII in every charset gettext supports
        match = CHARSET_PATTERN.search(buffer.decode("latin-1"))
        if match:
            charset = normalize_charset_name(
                match.group(1), self.options.default_charset
            )
        else:
            charset = self.options.default_charset
        return decode_bytes(buffer, charset)

    def _handle_comment(self, token) -> None:
        self._line_breaks = 0
        if self._node.fields:
            self._finish_entry()

        kind, text = token.value
        if kind is None:
            log.debug("Ignoring comment on line %d", token.lineno)
            return
        if not self._node.comments:
            self._node.lineno = token.lineno
        self._node.comments.setdefault(kind, []).append(text)
        self.state = State.InComment

    def _handle_keyword(self, token) -> None:
        self._line_breaks = 0
        if self.state is State.InKeywordString:
            raise UnexpectedToken(token.value, token.lineno)

        fields = self._node.fields
        if token.value in ("msgctxt", "msgid"):
            if "msgid" in fields or (token.value == "msgctxt" and "msgctxt" in fields):
                self._finish_entry()
        elif "msgid" not in fields:
            raise UnexpectedToken(token.value, token.lineno)

        if not self._node.fields and not self._node.comments:
            self._node.lineno = token.lineno
        self._field = "msgstr[0]" if token.value == "msgstr" else token.value
        self.state = State.InKeywordString

    def _handle_string(self, token) -> None:
        self._line_breaks = 0
        if self.state is State.InKeywordString:
            self._node.fields[self._field] = token.value
            self.state = State.InContinuationString
        elif self.state is State.InContinuationString:
            self._node.fields[self._field] += token.value
        else:
            raise UnexpectedToken(f'"{token.value}"', token.lineno)

    def _handle_newline(self, token) -> None:
        self._skip_line = False
        if self.state is State.InKeywordString:
            log.warning(
                "%s, skipping", UnexpectedToken(self._field, token.lineno).text
            )
            self._field = None
            self.state = State.Start

        self._line_breaks += len(token.value)
        if self._line_breaks >= 2 and "msgid" in self._node.fields:
            self._finish_entry()

    def _finish_entry(self) -> None:
        node = self._node
        self._node = Node()
        self._field = None
        self.state = State.Start

        if "msgid" in node.fields:
            self.entries.append(node.to_entry())
        elif node.fields:
            log.warning("Dropping entry without msgid on line %d", node.lineno)
        elif node.comments:
            log.debug("Dropping trailing comments from line %d", node.lineno)

    def _build_table(self) -> Table:
        header = next((entry for entry in self.entries if entry.is_header), None)
        headers = parse_header_block(header.msgstr[0]) if header else {}
        table = Table(headers=headers, default_charset=self.options.default_charset)
        for entry in self.entries:
            table.add(entry)

        if "plural-forms" in table.headers:
            try:
                parse_plural_forms(table.headers["plural-forms"])
            except MalformedPluralForms as e:
                log.warning("%s, ignoring it", e.text)
        log.debug("Parsed %d PO entries (%s)", len(table), table.charset)
        return table
