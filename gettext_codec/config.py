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

from typing import Any, Callable, Union

import tomli

from .charset import convert_charset
from .shared import DEFAULT_CHARSET

Comparator = Callable[[Any, Any], int]


class ParseOptions:
    __slots__ = {"default_charset"}

    def __init__(self, data: dict[str, Any]) -> None:
        # used when a catalog doesn't declare its charset
        self.default_charset = data.get("default_charset", DEFAULT_CHARSET)


class CompileOptions:
    __slots__ = {"fold_length", "sort", "byte_order", "default_charset", "converter"}

    def __init__(self, data: dict[str, Any]) -> None:
        # PO strings longer than this are folded, 0 disables folding
        self.fold_length: int = data.get("fold_length", 76)
        # False keeps insertion order, True sorts by msgid, a callable is a comparator
        self.sort: Union[bool, Comparator] = data.get("sort", False)
        # "little" or "big", only used for MO output
        self.byte_order: str = data.get("byte_order", "little")
        self.default_charset: str = data.get("default_charset", DEFAULT_CHARSET)
        self.converter: Callable[[bytes, str], bytes] = data.get(
            "converter", convert_charset
        )
        if self.byte_order not in ("little", "big"):
            raise ValueError(
                f"byte_order must be 'little' or 'big', not {self.byte_order!r}"
            )


def parse_options(options: Union[ParseOptions, dict[str, Any], None]) -> ParseOptions:
    if isinstance(options, ParseOptions):
        return options
    return ParseOptions(options or {})


def compile_options(
    options: Union[CompileOptions, dict[str, Any], None]
) -> CompileOptions:
    if isinstance(options, CompileOptions):
        return options
    return CompileOptions(options or {})


class ConfigLoader:
    """ConfigLoader provides methods for loading codec defaults from a .toml file."""

    __slots__ = {"config", "values", "parse", "compile"}

    def __init__(self, path: str) -> None:
        # the path to the config file of this loader
        self.config = path
        # values initialized as empty dict, in case loading fails
        self.values = {}
        self.reload()

    def reload(self) -> None:
        """Reads the TOML file again and rebuilds both option sections."""
        with open(self.config, "rb") as f:
            self.values = tomli.load(f)
        self.set_attributes()

    def set_attributes(self) -> None:
        """Sets all option sections on the loader."""
        self.parse = ParseOptions(self.values.get("parse", {}))
        self.compile = CompileOptions(self.values.get("compile", {}))
