import logging

import orjson
import pytest

from gettext_codec import Entry, Table


@pytest.mark.parametrize(
    "charset,headers,expected_charset,expected_content_type",
    [
        (None, None, "utf-8", "text/plain; charset=utf-8"),
        (None, {"content-type": "text/html"}, "utf-8", "text/html; charset=utf-8"),
        (
            None,
            {"Content-Type": "text/plain; charset=KOI8-R"},
            "koi8-r",
            "text/plain; charset=koi8-r",
        ),
        (
            "utf8",
            {"content-type": "text/plain; charset=koi8-r; format=flowed"},
            "utf-8",
            "text/plain; charset=utf-8; format=flowed",
        ),
        (
            None,
            {"content-type": "text/plain; charset=CHARSET"},
            "utf-8",
            "text/plain; charset=utf-8",
        ),
        ("Latin1", None, "iso-8859-1", "text/plain; charset=iso-8859-1"),
    ],
)
def test_charset_sync(charset, headers, expected_charset, expected_content_type):
    table = Table(charset=charset, headers=headers)
    assert table.charset == expected_charset
    assert table.headers["content-type"] == expected_content_type


def test_default_charset():
    assert Table(default_charset="latin1").charset == "iso-8859-1"
    assert Table(charset="utf-8", default_charset="latin1").charset == "utf-8"


def test_handle_charset_after_change():
    table = Table()
    table.charset = "windows-1251"
    assert table.handle_charset() == "windows-1251"
    assert table.headers["content-type"] == "text/plain; charset=windows-1251"


def test_entry_msgstr_padding():
    assert Entry("a").msgstr == [""]
    assert Entry("a", "b").msgstr == ["b"]
    assert Entry("a", ["b", "c"]).msgstr == ["b"]
    assert Entry("a", [], msgid_plural="as").msgstr == [""]
    assert Entry("a", ["b", "c"], msgid_plural="as").msgstr == ["b", "c"]


def test_entry_drops_unknown_comment_kinds():
    entry = Entry("a", comments={"flag": "fuzzy", "obsolete": "x"})
    assert entry.comments == {"flag": "fuzzy"}


def test_entries_skip_header():
    table = Table()
    table.add(Entry("", ["Content-Type: text/plain; charset=utf-8\n"]))
    table.add(Entry("a"))
    table.add(Entry("", ["leer"], msgctxt="ctx"))
    assert [(entry.msgctxt, entry.msgid) for entry in table.entries()] == [
        (None, "a"),
        ("ctx", ""),
    ]
    assert len(table) == 2
    assert table.header_entry.is_header
    assert table.get("", "ctx").msgstr == ["leer"]


def test_duplicate_entry_replaces(caplog):
    table = Table()
    table.add(Entry("a", ["first"]))
    with caplog.at_level(logging.WARNING):
        table.add(Entry("a", ["second"]))
    assert table.get("a").msgstr == ["second"]
    assert "Duplicate entry 'a'" in caplog.text


def test_equality_ignores_order():
    one = Table()
    one.add(Entry("a", ["1"]))
    one.add(Entry("b", ["2"], msgctxt="x"))
    two = Table()
    two.add(Entry("b", ["2"], msgctxt="x"))
    two.add(Entry("a", ["1"]))
    assert one == two

    two.add(Entry("c"))
    assert one != two
    assert one != Table(charset="latin1")


def test_json_round_trip():
    table = Table(headers={"language": "de"})
    table.add(Entry("a", ["b"], comments={"reference": "x.py:1"}))
    table.add(Entry("cat", ["Katze", "Katzen"], msgid_plural="cats", msgctxt="pet"))

    data = orjson.loads(table.to_json())
    assert data == {
        "charset": "utf-8",
        "headers": {"language": "de", "content-type": "text/plain; charset=utf-8"},
        "translations": {
            "": {
                "a": {
                    "msgid": "a",
                    "msgstr": ["b"],
                    "comments": {"reference": "x.py:1"},
                }
            },
            "pet": {
                "cat": {
                    "msgid": "cat",
                    "msgstr": ["Katze", "Katzen"],
                    "msgctxt": "pet",
                    "msgid_plural": "cats",
                }
            },
        },
    }
    assert Table.from_json(table.to_json(indent=True)) == table


def test_from_dict_uses_context_key():
    table = Table.from_dict({"translations": {"pet": {"cat": {"msgstr": ["Katze"]}}}})
    assert table.get("cat", "pet").msgctxt == "pet"


def test_from_dict_accepts_null_fields():
    table = Table.from_json(b'{"translations": {"": {"a": {"msgstr": null}}}}')
    assert table.get("a").msgstr == [""]
    assert Entry.from_dict({"msgid": "b", "comments": None}).comments == {}
