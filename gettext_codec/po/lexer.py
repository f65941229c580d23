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
import logging

from sly import Lexer

from ..exceptions import UnexpectedToken
from ..shared import unescape

log = logging.getLogger(__name__)

COMMENT_MARKERS = {
    " ": "translator",
    "": "translator",
    ":": "reference",
    ".": "extracted",
    ",": "flag",
    "|": "previous",
}


class PoLexer(Lexer):
    tokens = {
        COMMENT,
        KEYWORD,
        STRING,
        NEWLINE,
    }

    ignore = " \t\r\ufeff"

    # Tokens
    KEYWORD = r"msgctxt|msgid_plural|msgid|msgstr\[\d+\]|msgstr"

    @_(r"\#[^\n]*")
    def COMMENT(self, t):
        # (kind, text), kind is None for markers like the obsolete "#~"
        marker = t.value[1:2]
        t.value = (COMMENT_MARKERS.get(marker), t.value[2:].strip())
        return t

    @_(r'"(?:[^"\\\n]|\\.)*"')
    def STRING(self, t):
        t.value = unescape(t.value[1:-1])
        return t

    @_(r"\n+")
    def NEWLINE(self, t):
        self.lineno += len(t.value)
        return t

    def error(self, t):
        end = t.value.find("\n")
        skipped = t.value if end < 0 else t.value[:end]
        log.warning("%s, skipping", UnexpectedToken(skipped, self.lineno).text)
        self.index += len(skipped)
