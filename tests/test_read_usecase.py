from __future__ import annotations

import logging
from pathlib import Path

from linegate.infra.index.side_index import write_side_index
from linegate.usecases.index_usecase import IndexUseCase
from linegate.usecases.read_usecase import ReadUseCase

logger = logging.getLogger("linegate.tests")


def test_read_window_from_position(tmp_path: Path):
    data = tmp_path / "data.csv"
    data.write_bytes(b"1,a\n2,b\n3,c\n4,d\n")
    usecase = ReadUseCase(delimiter=",", field_names=["id", "val"], use_side_index=False)

    items = usecase.read(str(data), logger, "r1", start=1, limit=2)

    assert items == [(1, {"id": "2", "val": "b"}), (2, {"id": "3", "val": "c"})]
    assert usecase.count(str(data), logger, "r1") == 4


def test_read_from_start_without_limit(tmp_path: Path):
    data = tmp_path / "data.txt"
    data.write_bytes(b"x\ny\n")

    items = ReadUseCase(use_side_index=False).read(str(data), logger, "r1")

    assert items == [(0, "x"), (1, "y")]


def test_index_build_then_read_uses_side_index(tmp_path: Path):
    data = tmp_path / "data.txt"
    data.write_bytes(b"aa\nbb\ncc\n")

    summary = IndexUseCase(index_dir=str(tmp_path / "idx")).build(str(data), logger, "r1")

    assert summary["records"] == 3
    assert summary["index_path"] == str(tmp_path / "idx" / "data.txt.idx.json")

    usecase = ReadUseCase(index_dir=str(tmp_path / "idx"))
    source = usecase.open_source(str(data), logger, "r1")
    try:
        assert source.index_data == [0, 3, 6]
    finally:
        source.close()
    assert usecase.read(str(data), logger, "r1", start=2) == [(2, "cc")]


def test_stale_side_index_is_ignored(tmp_path: Path):
    data = tmp_path / "data.txt"
    data.write_bytes(b"aa\nbb\n")
    write_side_index(str(tmp_path / "data.txt.idx.json"), [0, 1, 2, 3], sourceSize=100)

    usecase = ReadUseCase()

    assert usecase.count(str(data), logger, "r1") == 2


def test_binary_garbage_side_index_is_ignored(tmp_path: Path):
    data = tmp_path / "data.txt"
    data.write_bytes(b"aa\nbb\n")
    (tmp_path / "data.txt.idx.json").write_bytes(b"\xff\xfe garbage")

    assert ReadUseCase().count(str(data), logger, "r1") == 2
