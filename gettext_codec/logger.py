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

The colouring follows
https://stackoverflow.com/questions/384076/how-can-i-color-python-logging-output
"""
import logging

BLACK, RED, GREEN, YELLOW, BLUE, MAGENTA, CYAN, WHITE = range(8)

RESET_SEQ = "\033[0m"
COLOR_SEQ = "\033[1;%dm"
BOLD_SEQ = "\033[1m"

LEVEL_COLORS = {
    "DEBUG": BLUE,
    "INFO": WHITE,
    "WARNING": YELLOW,
    "ERROR": RED,
    "CRITICAL": MAGENTA,
}

FORMAT = (
    "[$BOLD%(name)-26s$RESET][%(levelname)-18s]  %(message)s"
    " ($BOLD%(filename)s$RESET:%(lineno)d)"
)


class ColoredFormatter(logging.Formatter):
    def __init__(self, fmt=FORMAT, use_color=True):
        bold, reset = (BOLD_SEQ, RESET_SEQ) if use_color else ("", "")
        super().__init__(fmt.replace("$BOLD", bold).replace("$RESET", reset))
        self.use_color = use_color

    def format(self, record):
        levelname = record.levelname
        if self.use_color and levelname in LEVEL_COLORS:
            record.levelname = (
                COLOR_SEQ % (30 + LEVEL_COLORS[levelname]) + levelname + RESET_SEQ
            )
        try:
            return super().format(record)
        finally:
            # other handlers get the record unchanged
            record.levelname = levelname


class SkippedLines(logging.Filter):
    """Drops the per-line warnings of the tolerant PO parser."""

    def __init__(self):
        super().__init__(name="gettext_codec.po")

    def filter(self, record):
        if (
            record.levelno == logging.WARNING
            and record.name.startswith(self.name)
            and record.getMessage().endswith("skipping")
        ):
            return False
        return True


def setup_logging(level=logging.INFO, use_color=True, quiet_parser=False):
    """Attaches a stream handler to the package logger and returns it.

    With ``quiet_parser`` the warnings about skipped PO lines are left out,
    which is handy for large hand-edited catalogs.
    """
    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(ColoredFormatter(use_color=use_color))
    if quiet_parser:
        handler.addFilter(SkippedLines())

    logger = logging.getLogger("gettext_codec")
    logger.setLevel(level)
    logger.addHandler(handler)
    return handler
