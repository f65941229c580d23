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

import logging

from .charset import encode_text
from .config import CompileOptions
from .table import Entry, Table

log = logging.getLogger(__name__)


class Compiler:
    """Base for the PO and MO compilers.

    Both resolve the table charset the same way and share the Plural-Forms
    checks. Instances compile a single table once.
    """

    def __init__(self, table: Table, options: CompileOptions) -> None:
        self._table = table
        self._options = options
        self._charset = self._handle_charset()
        self._check_plural_forms()

    def _handle_charset(self) -> str:
        return self._table.handle_charset(self._options.default_charset)

    def _check_plural_forms(self) -> None:
        # raises MalformedPluralForms for an unusable header
        plural_forms = self._table.plural_forms
        if plural_forms is None:
            return
        for entry in self._table.entries():
            if entry.is_plural and len(entry.msgstr) != plural_forms.count:
                log.warning(
                    "Entry %r has %d plural forms, Plural-Forms declares %d",
                    entry.msgid,
                    len(entry.msgstr),
                    plural_forms.count,
                )

    def _header_entry(self, msgstr: str) -> Entry:
        header = self._table.header_entry
        return Entry(
            msgid="",
            msgstr=[msgstr],
            comments=dict(header.comments) if header else {},
        )

    def _encode(self, text: str) -> bytes:
        return encode_text(text, self._charset, self._options.converter)

    def compile(self) -> bytes:
        raise NotImplementedError
