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

from typing import Optional, Union

from ..charset import decode_bytes
from ..config import ParseOptions
from ..exceptions import CorruptStringTable, InvalidMagicNumber, TruncatedBuffer
from ..shared import content_type_charset, normalize_charset_name, parse_header_block
from ..table import Entry, Table

log = logging.getLogger(__name__)

MAGIC = 0x950412DE
MAGIC_SWAPPED = 0xDE120495
# magic, revision, nstrings, orig_offset, trans_offset, hash_size, hash_offset
HEADER_SIZE = 7 * 4
CONTEXT_SEPARATOR = "\x04"
PLURAL_SEPARATOR = "\x00"


class MoParser:
    """Reads a compiled MO catalog into a :class:`Table`.

    Unlike PO parsing nothing is recovered from a damaged file: any
    inconsistency in the layout raises before a table is built.
    """

    def __init__(self, options: ParseOptions) -> None:
        self.options = options
        self.charset = options.default_charset
        self._endian = "<"

    def parse(self, buffer: Union[bytes, bytearray, memoryview]) -> Table:
        buffer = bytes(buffer)
        if len(buffer) < 4:
            raise TruncatedBuffer(HEADER_SIZE, len(buffer))

        (magic,) = struct.unpack_from("<I", buffer)
        if magic == MAGIC:
            self._endian = "<"
        elif magic == MAGIC_SWAPPED:
            self._endian = ">"
        else:
            raise InvalidMagicNumber(magic)

        if len(buffer) < HEADER_SIZE:
            raise TruncatedBuffer(HEADER_SIZE, len(buffer))
        revision, nstrings, orig_offset, trans_offset, _, _ = struct.unpack_from(
            f"{self._endian}6I", buffer, 4
        )
        if revision >> 16 > 1:
            log.warning("Unknown MO major revision %d", revision >> 16)

        originals = self._read_strings(buffer, nstrings, orig_offset)
        translations = self._read_strings(buffer, nstrings, trans_offset)
        headers = self._read_headers(originals, translations)

        table = Table(headers=headers, default_charset=self.options.default_charset)
        self.charset = table.charset
        for original, translation in zip(originals, translations):
            table.add(self._make_entry(original, translation))
        log.debug("Parsed %d MO entries (%s)", len(table), table.charset)
        return table

    def _read_strings(self, buffer: bytes, count: int, offset: int) -> list[bytes]:
        end = offset + 8 * count
        if end > len(buffer):
            raise TruncatedBuffer(end, len(buffer))

        records = struct.unpack_from(f"{self._endian}{2 * count}I", buffer, offset)
        strings = []
        for index in range(count):
            length, start = records[2 * index], records[2 * index + 1]
            if start + length > len(buffer):
                raise CorruptStringTable(index, start, length, len(buffer))
            strings.append(buffer[start : start + length])
        return strings

    def _read_headers(
        self, originals: list[bytes], translations: list[bytes]
    ) -> dict[str, str]:
        raw: Optional[bytes] = next(
            (t for o, t in zip(originals, translations) if o == b""), None
        )
        if raw is None:
            return {}
        # the header is ASCII up to the values, enough to find the charset
        sniffed = parse_header_block(raw.decode("latin-1"))
        charset = content_type_charset(sniffed.get("content-type"))
        if charset:
            self.charset = normalize_charset_name(charset, self.options.default_charset)
        return parse_header_block(decode_bytes(raw, self.charset))

    def _make_entry(self, original: bytes, translation: bytes) -> Entry:
        msgctxt = None
        key = decode_bytes(original, self.charset)
        if CONTEXT_SEPARATOR in key:
            msgctxt, key = key.split(CONTEXT_SEPARATOR, 1)
        msgid, sep, msgid_plural = key.partition(PLURAL_SEPARATOR)
        return Entry(
            msgid=msgid,
            msgstr=decode_bytes(translation, self.charset).split(PLURAL_SEPARATOR),
            msgctxt=msgctxt,
            msgid_plural=msgid_plural if sep else None,
        )
