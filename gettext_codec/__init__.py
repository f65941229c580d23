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
from . import mo, po
from .charset import convert_charset
from .config import CompileOptions, ConfigLoader, ParseOptions
from .exceptions import (
    CharsetError,
    CodecError,
    CorruptStringTable,
    InvalidMagicNumber,
    MalformedPluralForms,
    TruncatedBuffer,
    UnexpectedToken,
)
from .shared import (
    PluralForms,
    fold_line,
    generate_header_block,
    normalize_charset_name,
    parse_plural_forms,
)
from .table import Entry, Table

__version__ = "1.0.0"

parse_po = po.parse
compile_po = po.compile
parse_mo = mo.parse
compile_mo = mo.compile
