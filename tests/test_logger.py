import logging

import pytest

from gettext_codec import parse_po
from gettext_codec.logger import ColoredFormatter, SkippedLines, setup_logging


@pytest.fixture
def handler(capsys):
    handler = setup_logging(logging.WARNING, use_color=False, quiet_parser=True)
    yield handler
    logger = logging.getLogger("gettext_codec")
    logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


def test_colored_formatter():
    record = logging.LogRecord(
        "gettext_codec.mo.parser", logging.ERROR, "parser.py", 1, "broken", None, None
    )
    colored = ColoredFormatter().format(record)
    assert "\033[1;31mERROR\033[0m" in colored
    assert record.levelname == "ERROR"

    plain = ColoredFormatter(use_color=False).format(record)
    assert "\033" not in plain
    assert "broken" in plain


def test_skipped_lines_filter():
    log_filter = SkippedLines()
    skipped = logging.LogRecord(
        "gettext_codec.po.parser", logging.WARNING, "", 1, "%s, skipping", ("x",), None
    )
    other = logging.LogRecord(
        "gettext_codec.table", logging.WARNING, "", 1, "x, skipping", None, None
    )
    assert not log_filter.filter(skipped)
    assert log_filter.filter(other)


def test_setup_logging(handler, capsys):
    logger = logging.getLogger("gettext_codec")
    assert handler in logger.handlers
    assert logger.level == logging.WARNING

    parse_po(b'garbage\nmsgid "a"\nmsgstr "b"\n')
    logging.getLogger("gettext_codec.table").warning("kept")
    err = capsys.readouterr().err
    assert "skipping" not in err
    assert "kept" in err
