from __future__ import annotations

import pytest

from linegate.infra.sources.record_decoder import RecordDecoder


def test_scalar_record_strips_line_terminators():
    decoder = RecordDecoder()

    assert decoder.decode(b"hello\r\n") == "hello"
    assert decoder.decode(b"hello\n") == "hello"
    assert decoder.decode(b"hello") == "hello"


def test_scalar_record_keeps_inner_whitespace():
    assert RecordDecoder().decode(b"  a b \n") == "  a b "


def test_unnamed_fields_get_positional_keys():
    decoder = RecordDecoder(delimiter=",")

    assert decoder.decode(b"a,b,c\n") == {"_0": "a", "_1": "b", "_2": "c"}


def test_named_and_unnamed_fields_coexist():
    decoder = RecordDecoder(delimiter=",", field_names=["id", "name"])

    record = decoder.decode(b"1,bob,extra\n")

    assert record == {"id": "1", "name": "bob", "_2": "extra"}
    assert list(record) == ["id", "name", "_2"]


def test_short_line_yields_fewer_keys():
    decoder = RecordDecoder(delimiter=";", field_names=["id", "name", "email"])

    assert decoder.decode(b"7;ann\n") == {"id": "7", "name": "ann"}


def test_empty_fields_are_preserved():
    decoder = RecordDecoder(delimiter=",")

    assert decoder.decode(b",x,\n") == {"_0": "", "_1": "x", "_2": ""}


def test_multichar_delimiter_and_encoding():
    decoder = RecordDecoder(delimiter="::", field_names=["city"], encoding="cp1251")

    assert decoder.decode("Москва::RU\n".encode("cp1251")) == {"city": "Москва", "_1": "RU"}


def test_empty_delimiter_is_rejected():
    with pytest.raises(ValueError):
        RecordDecoder(delimiter="")
