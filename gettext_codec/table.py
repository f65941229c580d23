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

from dataclasses import asdict, dataclass, field
from typing import Any, Iterator, Optional, Union

import orjson

from .shared import (
    DEFAULT_CHARSET,
    PluralForms,
    normalize_charset_name,
    parse_plural_forms,
)

log = logging.getLogger(__name__)

COMMENT_KEYS = ("translator", "reference", "extracted", "flag", "previous")


@dataclass
class Entry:
    msgid: str = ""
    msgstr: list[str] = field(default_factory=list)
    msgctxt: Optional[str] = None
    msgid_plural: Optional[str] = None
    comments: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if isinstance(self.msgstr, str):
            self.msgstr = [self.msgstr]
        else:
            self.msgstr = list(self.msgstr or [])
        if self.msgid_plural is None:
            self.msgstr = self.msgstr[:1] or [""]
        elif not self.msgstr:
            self.msgstr = [""]
        # an empty context is no context
        self.msgctxt = self.msgctxt or None
        self.comments = {
            key: value
            for key, value in (self.comments or {}).items()
            if key in COMMENT_KEYS
        }

    @property
    def is_plural(self) -> bool:
        return self.msgid_plural is not None

    @property
    def is_header(self) -> bool:
        return not self.msgctxt and self.msgid == ""

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        for key in ("msgctxt", "msgid_plural"):
            if data[key] is None:
                del data[key]
        if not data["comments"]:
            del data["comments"]
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Entry:
        return cls(
            msgid=data.get("msgid", ""),
            msgstr=data.get("msgstr") or [],
            msgctxt=data.get("msgctxt"),
            msgid_plural=data.get("msgid_plural"),
            comments=data.get("comments") or {},
        )


class Table:
    """A translation catalog.

    ``translations`` maps a context (``""`` for none) to a dict of msgid to
    :class:`Entry`. The entry with empty context and empty msgid is the header
    pseudo-entry: it is kept for its comments but skipped by :meth:`entries`.
    """

    __slots__ = {"charset", "headers", "translations"}

    def __init__(
        self,
        charset: Optional[str] = None,
        headers: Optional[dict[str, str]] = None,
        translations: Optional[dict[str, dict[str, Entry]]] = None,
        default_charset: str = DEFAULT_CHARSET,
    ) -> None:
        self.charset = charset
        self.headers = {
            key.strip().lower(): (value or "").strip()
            for key, value in (headers or {}).items()
        }
        self.translations = translations if translations is not None else {}
        self.handle_charset(default_charset)

    def handle_charset(self, default: str = DEFAULT_CHARSET) -> str:
        """Resolves ``charset`` and writes it into the content-type header.

        An explicitly set charset wins over the header's ``charset=`` parameter,
        which in turn wins over ``default``.
        """
        parts = (self.headers.get("content-type") or "text/plain").split(";")
        content_type = parts.pop(0).strip() or "text/plain"
        charset = normalize_charset_name(self.charset, default) or None

        params = []
        has_charset = False
        for part in parts:
            key, _, value = part.partition("=")
            if key.strip().lower() == "charset":
                if not charset:
                    charset = normalize_charset_name(value.strip() or default, default)
                if not has_charset:
                    params.append(f"charset={charset}")
                    has_charset = True
            elif part.strip():
                params.append(part.strip())

        if not charset:
            charset = normalize_charset_name(default)
        if not has_charset:
            params.append(f"charset={charset}")

        self.charset = charset
        self.headers["content-type"] = "; ".join([content_type, *params])
        return charset

    @property
    def header_entry(self) -> Optional[Entry]:
        return self.translations.get("", {}).get("")

    @property
    def plural_forms(self) -> Optional[PluralForms]:
        value = self.headers.get("plural-forms")
        if value is None:
            return None
        return parse_plural_forms(value)

    def add(self, entry: Entry) -> None:
        context = self.translations.setdefault(entry.msgctxt or "", {})
        if entry.msgid in context and not entry.is_header:
            log.warning(
                "Duplicate entry %r (context %r), keeping the last one",
                entry.msgid,
                entry.msgctxt,
            )
        context[entry.msgid] = entry

    def get(self, msgid: str, msgctxt: Optional[str] = None) -> Optional[Entry]:
        return self.translations.get(msgctxt or "", {}).get(msgid)

    def entries(self) -> Iterator[Entry]:
        for msgctxt, messages in self.translations.items():
            for msgid, entry in messages.items():
                if msgctxt == "" and msgid == "":
                    continue
                yield entry

    def __len__(self) -> int:
        return sum(1 for _ in self.entries())

    def _keyed(self) -> dict[tuple[str, str], Entry]:
        return {(e.msgctxt or "", e.msgid): e for e in self.entries()}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Table):
            return NotImplemented
        return (
            self.charset == other.charset
            and self.headers == other.headers
            and self._keyed() == other._keyed()
        )

    def __repr__(self) -> str:
        return f"<Table charset={self.charset!r} entries={len(self)}>"

    def to_dict(self) -> dict[str, Any]:
        return {
            "charset": self.charset,
            "headers": dict(self.headers),
            "translations": {
                msgctxt: {msgid: entry.to_dict() for msgid, entry in messages.items()}
                for msgctxt, messages in self.translations.items()
            },
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Table:
        table = cls(charset=data.get("charset"), headers=data.get("headers"))
        for msgctxt, messages in data.get("translations", {}).items():
            for msgid, entry in messages.items():
                entry = Entry.from_dict({"msgid": msgid, **entry})
                # the context key is authoritative for entries missing msgctxt
                if msgctxt and not entry.msgctxt:
                    entry.msgctxt = msgctxt
                table.add(entry)
        return table

    def to_json(self, indent: bool = False) -> bytes:
        option = orjson.OPT_INDENT_2 if indent else 0
        return orjson.dumps(self.to_dict(), option=option)

    @classmethod
    def from_json(cls, data: Union[bytes, str]) -> Table:
        return cls.from_dict(orjson.loads(data))
