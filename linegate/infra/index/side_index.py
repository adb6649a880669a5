from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Sequence

from linegate.domain.exceptions import IndexDataError
from linegate.infra.sources.offset_index import validate_offsets

SIDE_INDEX_VERSION = 1
SIDE_INDEX_SUFFIX = ".idx.json"


def default_side_index_path(dataPath: str, indexDir: str | None = None) -> str:
    """
    Назначение:
        Путь side-индекса для файла данных: <name>.idx.json рядом с файлом
        или в indexDir, если он задан.
    """
    p = Path(dataPath)
    directory = Path(indexDir) if indexDir else p.parent
    return str(directory / f"{p.name}{SIDE_INDEX_SUFFIX}")


def write_side_index(indexPath: str, offsets: Sequence[int], sourceSize: int) -> str:
    """
    Назначение:
        Сохраняет таблицу смещений в JSON, чтобы следующие запуски не сканировали файл.

    Выходные данные:
        str
            Путь к записанному индексу.
    """
    Path(indexPath).parent.mkdir(parents=True, exist_ok=True)
    data: dict[str, Any] = {
        "version": SIDE_INDEX_VERSION,
        "source_size": sourceSize,
        "offsets": list(offsets),
    }
    with open(indexPath, "w", encoding="utf-8") as f:
        json.dump(data, f)
    return indexPath


def read_side_index(indexPath: str, expectedSize: int | None = None) -> list[int]:
    """
    Назначение:
        Загружает таблицу смещений из JSON side-индекса.

    Поведение:
        - повреждённый документ -> IndexDataError
        - expectedSize не совпадает с source_size (файл менялся) -> IndexDataError
    """
    try:
        data = json.loads(Path(indexPath).read_text(encoding="utf-8"))
    except ValueError as exc:
        # JSONDecodeError и UnicodeDecodeError (бинарный мусор вместо индекса)
        raise IndexDataError(f"Side index is not valid JSON: {exc}", index_path=indexPath) from exc

    if not isinstance(data, dict):
        raise IndexDataError("Invalid side index format: root must be object", index_path=indexPath)
    if data.get("version") != SIDE_INDEX_VERSION:
        raise IndexDataError(f"Unsupported side index version: {data.get('version')!r}", index_path=indexPath)
    offsets = data.get("offsets")
    if not isinstance(offsets, list):
        raise IndexDataError("Invalid side index format: offsets must be list", index_path=indexPath)
    if expectedSize is not None and data.get("source_size") != expectedSize:
        raise IndexDataError(
            f"Side index is stale: source_size={data.get('source_size')} actual={expectedSize}",
            index_path=indexPath,
        )

    try:
        return validate_offsets(offsets)
    except IndexDataError as exc:
        raise IndexDataError(exc.message, index_path=indexPath) from exc


__all__ = ["default_side_index_path", "write_side_index", "read_side_index"]
