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


class CodecError(Exception):
    def __init__(self, text: str) -> None:
        super().__init__(text)
        self.text = text


class InvalidMagicNumber(CodecError):
    def __init__(self, magic: int) -> None:
        self.magic = magic
        super().__init__(f"Invalid MO magic number 0x{magic:08x}")


class TruncatedBuffer(CodecError):
    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"MO buffer is truncated: need {expected} bytes, got {actual}"
        )


class CorruptStringTable(CodecError):
    def __init__(self, index: int, offset: int, length: int, size: int) -> None:
        self.index = index
        self.offset = offset
        self.length = length
        self.size = size
        super().__init__(
            f"String {index} at offset {offset} with length {length} lies outside"
            f" the {size} byte buffer"
        )


class MalformedPluralForms(CodecError):
    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(f"Malformed Plural-Forms header {value!r}")


class UnexpectedToken(CodecError):
    def __init__(self, value: str, lineno: int) -> None:
        self.value = value
        self.lineno = lineno
        super().__init__(f"Unexpected {value!r} on line {lineno}")


class CharsetError(CodecError):
    def __init__(self, charset: str, reason: str) -> None:
        self.charset = charset
        self.reason = reason
        super().__init__(f"Cannot convert to charset {charset!r}: {reason}")
