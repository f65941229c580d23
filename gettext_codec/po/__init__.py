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

from typing import Any, Union

from ..config import CompileOptions, ParseOptions, compile_options, parse_options
from ..table import Table
from .compiler import PoCompiler
from .lexer import PoLexer
from .parser import PoParser


def parse(
    buffer: Union[bytes, str],
    options: Union[ParseOptions, dict[str, Any], None] = None,
) -> Table:
    return PoParser(parse_options(options)).parse(buffer)


def compile(
    table: Table, options: Union[CompileOptions, dict[str, Any], None] = None
) -> bytes:
    return PoCompiler(table, compile_options(options)).compile()


__all__ = ("PoCompiler", "PoLexer", "PoParser", "compile", "parse")
