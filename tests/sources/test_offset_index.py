from __future__ import annotations

import io

import pytest

from linegate.domain.exceptions import IndexDataError
from linegate.infra.sources.offset_index import ByteOffsetIndex, preserved_position


class CountingStream(io.BytesIO):
    def __init__(self, data: bytes):
        super().__init__(data)
        self.readline_calls = 0

    def readline(self, *args):
        self.readline_calls += 1
        return super().readline(*args)


class FailingStream(io.BytesIO):
    def __init__(self, data: bytes, fail_after: int):
        super().__init__(data)
        self.fail_after = fail_after

    def readline(self, *args):
        if self.fail_after == 0:
            raise OSError("disk read failed")
        self.fail_after -= 1
        return super().readline(*args)


def test_build_maps_ordinal_to_line_start():
    stream = io.BytesIO(b"a\nbb\r\nccc\n")
    index = ByteOffsetIndex(stream)

    assert index.get() == [0, 2, 6]
    assert index.count() == 3


def test_build_counts_last_line_without_terminator():
    index = ByteOffsetIndex(io.BytesIO(b"one\ntwo"))

    assert index.get() == [0, 4]


def test_empty_stream_has_no_records():
    index = ByteOffsetIndex(io.BytesIO(b""))

    assert index.get() == []
    assert index.count() == 0


def test_build_restores_stream_position():
    stream = io.BytesIO(b"1\n2\n3\n")
    stream.seek(2)

    ByteOffsetIndex(stream).build()

    assert stream.tell() == 2


def test_build_restores_position_on_read_failure():
    stream = FailingStream(b"1\n2\n3\n", fail_after=2)
    stream.seek(4)

    with pytest.raises(OSError, match="disk read failed"):
        ByteOffsetIndex(stream).build()

    assert stream.tell() == 4


def test_count_twice_scans_once():
    stream = CountingStream(b"x\ny\nz\n")
    index = ByteOffsetIndex(stream)

    assert index.count() == 3
    calls_after_first = stream.readline_calls
    assert index.count() == 3

    assert stream.readline_calls == calls_after_first == 4


def test_set_overrides_scan():
    stream = CountingStream(b"x\ny\nz\n")
    index = ByteOffsetIndex(stream)

    index.set([0, 10, 20, 30])

    assert index.get() == [0, 10, 20, 30]
    assert index.count() == 4
    assert stream.readline_calls == 0


def test_set_replaces_previous_scan_and_reset_rescans():
    index = ByteOffsetIndex(io.BytesIO(b"x\ny\n"))
    assert index.count() == 2

    index.set([0])
    assert index.get() == [0]

    index.reset()
    assert not index.is_built
    assert index.get() == [0, 2]


@pytest.mark.parametrize("table", [[0, 5, 3], [0, 5, 5], [-1, 2], [0, "4"]])
def test_set_rejects_invalid_tables(table):
    index = ByteOffsetIndex(io.BytesIO(b""))

    with pytest.raises(IndexDataError):
        index.set(table)


def test_preserved_position_yields_saved_offset():
    stream = io.BytesIO(b"abcdef")
    stream.seek(3)

    with preserved_position(stream) as saved:
        stream.seek(0)
        stream.read()
        assert saved == 3

    assert stream.tell() == 3
