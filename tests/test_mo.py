import gettext
import io
import struct

import pytest

from gettext_codec import (
    CorruptStringTable,
    Entry,
    InvalidMagicNumber,
    MalformedPluralForms,
    Table,
    TruncatedBuffer,
    compile_mo,
    compile_po,
    parse_mo,
    parse_po,
)
from gettext_codec.mo import MAGIC


@pytest.fixture
def table():
    table = Table(
        headers={
            "project-id-version": "demo 1.0",
            "language": "de",
            "plural-forms": "nplurals=2; plural=(n != 1);",
        }
    )
    table.add(Entry("Hello", ["Hallo"]))
    table.add(Entry("Open", ["Öffnen"], msgctxt="menu"))
    table.add(Entry("Open", ["Offen"]))
    table.add(Entry("cat", ["Katze", "Katzen"], msgid_plural="cats"))
    table.add(Entry("untranslated"))
    return table


def test_round_trip(table):
    assert parse_mo(compile_mo(table)) == table


def test_round_trip_through_po(table):
    assert parse_mo(compile_mo(parse_po(compile_po(table)))) == table


def test_layout(table):
    data = compile_mo(table)
    magic, revision, nstrings, orig_offset, trans_offset, hash_size, hash_offset = (
        struct.unpack_from("<7I", data)
    )
    assert magic == MAGIC
    assert revision == 0
    assert nstrings == 6
    assert orig_offset == 28
    assert trans_offset == 28 + 8 * nstrings
    assert hash_size == 0
    assert hash_offset == 28 + 16 * nstrings

    originals = []
    for i in range(nstrings):
        length, offset = struct.unpack_from("<2I", data, orig_offset + 8 * i)
        assert data[offset + length] == 0
        originals.append(data[offset : offset + length])
    assert originals == sorted(originals)
    assert originals[0] == b""
    assert b"menu\x04Open" in originals
    assert b"cat\x00cats" in originals


def test_big_endian(table):
    little = compile_mo(table)
    big = compile_mo(table, {"byte_order": "big"})
    assert little[:4] == b"\xde\x12\x04\x95"
    assert big[:4] == b"\x95\x04\x12\xde"
    assert len(big) == len(little)
    assert parse_mo(big) == parse_mo(little)


def test_readable_by_gnu_translations(table):
    translations = gettext.GNUTranslations(io.BytesIO(compile_mo(table)))
    assert translations.gettext("Hello") == "Hallo"
    assert translations.gettext("Open") == "Offen"
    assert translations.pgettext("menu", "Open") == "Öffnen"
    assert translations.ngettext("cat", "cats", 1) == "Katze"
    assert translations.ngettext("cat", "cats", 5) == "Katzen"
    assert translations.info()["language"] == "de"


def test_header_entry(table):
    parsed = parse_mo(compile_mo(table))
    assert parsed.header_entry.msgstr == [
        "Project-Id-Version: demo 1.0\n"
        "Language: de\n"
        "Plural-Forms: nplurals=2; plural=(n != 1);\n"
        "Content-Type: text/plain; charset=utf-8\n"
    ]
    assert parsed.get("untranslated").msgstr == [""]
    assert parsed.get("cat").comments == {}


def test_other_charset():
    table = Table(charset="windows-1252")
    table.add(Entry("cafe", ["café"]))
    data = compile_mo(table)
    assert "café".encode("cp1252") in data

    parsed = parse_mo(data)
    assert parsed.charset == "windows-1252"
    assert parsed.get("cafe").msgstr == ["café"]


def test_empty_table():
    table = parse_mo(compile_mo(Table()))
    assert len(table) == 0
    assert table.headers == {"content-type": "text/plain; charset=utf-8"}


def test_no_header():
    data = struct.pack("<7I", MAGIC, 0, 1, 28, 36, 0, 44) + struct.pack(
        "<4I", 1, 44, 1, 46
    )
    table = parse_mo(data + b"a\x00b\x00")
    assert table.charset == "utf-8"
    assert table.get("a").msgstr == ["b"]


@pytest.mark.parametrize(
    "data",
    [b"\x00\x01\x02\x03" + b"\x00" * 24, b"abcd", b"\x95\x04\x12\xdf" + b"\x00" * 60],
)
def test_invalid_magic_number(data):
    with pytest.raises(InvalidMagicNumber):
        parse_mo(data)


def test_truncated_buffer(table):
    data = compile_mo(table)
    with pytest.raises(TruncatedBuffer):
        parse_mo(data[:20])
    with pytest.raises(TruncatedBuffer):
        parse_mo(b"")

    data = bytearray(data)
    struct.pack_into("<I", data, 8, 100_000)
    with pytest.raises(TruncatedBuffer):
        parse_mo(data)


def test_corrupt_string_table(table):
    data = bytearray(compile_mo(table))
    struct.pack_into("<I", data, 28 + 8 + 4, len(data) + 1)
    with pytest.raises(CorruptStringTable) as e:
        parse_mo(data)
    assert e.value.index == 1

    data = bytearray(compile_mo(table))
    struct.pack_into("<I", data, 28, len(data))
    with pytest.raises(CorruptStringTable):
        parse_mo(data)


def test_malformed_plural_forms(table):
    table.headers["plural-forms"] = "nplurals=; plural=n;"
    with pytest.raises(MalformedPluralForms):
        compile_mo(table)


def test_empty_context_round_trip():
    table = Table()
    table.add(Entry("a", ["b"], msgctxt=""))
    assert parse_mo(compile_mo(table)) == table
