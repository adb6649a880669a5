from __future__ import annotations

import logging

from linegate.infra.index.side_index import default_side_index_path, write_side_index
from linegate.infra.logging.setup import logEvent
from linegate.infra.sources.file_source import FileRecordSource


class IndexUseCase:
    """
    Назначение/ответственность:
        Построение side-индекса: один проход по файлу и сохранение таблицы
        смещений в JSON для последующих запусков.
    """

    def __init__(self, index_dir: str | None = None, base_dir: str | None = None):
        self.index_dir = index_dir
        self.base_dir = base_dir

    def build(self, path: str, logger: logging.Logger, run_id: str, index_path: str | None = None) -> dict:
        with FileRecordSource(path, base_dir=self.base_dir) as source:
            data_path = str(source.resolve_path())
            offsets = source.cursor().get_index_data()
            source_size = source.size()

        target = index_path or default_side_index_path(data_path, self.index_dir)
        write_side_index(target, offsets, source_size)
        logEvent(
            logger,
            logging.INFO,
            run_id,
            "index",
            f"Side index written: {target} records={len(offsets)} source_size={source_size}",
        )
        return {"records": len(offsets), "index_path": target, "source_size": source_size}


__all__ = ["IndexUseCase"]
