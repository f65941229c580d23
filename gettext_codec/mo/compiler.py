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
import struct

from ..compiler import Compiler
from ..shared import generate_header_block
from ..table import Entry
from .parser import CONTEXT_SEPARATOR, HEADER_SIZE, MAGIC, PLURAL_SEPARATOR

log = logging.getLogger(__name__)


class MoCompiler(Compiler):
    def _original(self, entry: Entry) -> str:
        key = entry.msgid
        if entry.is_plural:
            key = f"{key}{PLURAL_SEPARATOR}{entry.msgid_plural}"
        if entry.msgctxt:
            key = f"{entry.msgctxt}{CONTEXT_SEPARATOR}{key}"
        return key

    def compile(self) -> bytes:
        header = self._header_entry(generate_header_block(self._table.headers))
        entries = [header, *self._table.entries()]

        # gettext looks strings up with a binary search over the originals
        pairs = sorted(
            (
                (
                    self._encode(self._original(entry)),
                    self._encode(PLURAL_SEPARATOR.join(entry.msgstr)),
                )
                for entry in entries
            ),
            key=lambda pair: pair[0],
        )

        endian = "<" if self._options.byte_order == "little" else ">"
        count = len(pairs)
        orig_offset = HEADER_SIZE
        trans_offset = orig_offset + 8 * count
        # no hash table, it would start where the strings do
        hash_offset = trans_offset + 8 * count

        records = []
        pool = []
        offset = hash_offset
        for column in (0, 1):
            for pair in pairs:
                records.extend((len(pair[column]), offset))
                pool.append(pair[column] + b"\x00")
                offset += len(pair[column]) + 1

        log.debug("Compiled %d MO entries (%s)", count - 1, self._charset)
        return (
            struct.pack(
                f"{endian}7I",
                MAGIC,
                0,
                count,
                orig_offset,
                trans_offset,
                0,
                hash_offset,
            )
            + struct.pack(f"{endian}{len(records)}I", *records)
            + b"".join(pool)
        )
