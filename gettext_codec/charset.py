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

from .exceptions import CharsetError

log = logging.getLogger(__name__)

PASSTHROUGH_CHARSETS = frozenset({"utf-8", "ascii"})


def convert_charset(data: bytes, charset: str) -> bytes:
    """Re-encodes UTF-8 ``data`` into ``charset`` using Python's codec registry."""
    try:
        codec = codecs.lookup(charset)
    except LookupError:
        raise CharsetError(charset, "unknown charset")
    try:
        return codec.encode(data.decode("utf-8"))[0]
    except UnicodeError as e:
        raise CharsetError(charset, str(e))


def encode_text(text: str, charset: str, converter=convert_charset) -> bytes:
    data = text.encode("utf-8")
    if charset in PASSTHROUGH_CHARSETS:
        return data
    return converter(data, charset)


def decode_bytes(data: bytes, charset: str) -> str:
    """Decodes catalog bytes, falling back to lossy decoding instead of failing."""
    try:
        return data.decode(charset)
    except LookupError:
        log.warning("Unknown charset %r, decoding as utf-8", charset)
        return data.decode("utf-8", errors="replace")
    except UnicodeDecodeError as e:
        log.warning("Invalid %s data (%s), replacing undecodable bytes", charset, e)
        return data.decode(charset, errors="replace")
