from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

from linegate.domain.exceptions import IndexDataError
from linegate.infra.index.side_index import default_side_index_path, read_side_index
from linegate.infra.logging.setup import logEvent
from linegate.infra.sources.file_source import FileRecordSource


class ReadUseCase:
    """
    Назначение/ответственность:
        Чтение записей файла: count и выборка окна [start, start+limit)
        через seek курсора. Если рядом лежит актуальный side-индекс,
        таблица берётся из него и сканирование файла не выполняется.
    """

    def __init__(
        self,
        delimiter: str | None = None,
        field_names: Sequence[str] | None = None,
        encoding: str = "utf-8",
        index_dir: str | None = None,
        use_side_index: bool = True,
        base_dir: str | None = None,
    ):
        self.delimiter = delimiter
        self.field_names = field_names
        self.encoding = encoding
        self.index_dir = index_dir
        self.use_side_index = use_side_index
        self.base_dir = base_dir

    def open_source(self, path: str, logger: logging.Logger, run_id: str) -> FileRecordSource:
        source = FileRecordSource(
            path,
            delimiter=self.delimiter,
            field_names=self.field_names,
            base_dir=self.base_dir,
            encoding=self.encoding,
        )
        if not self.use_side_index:
            return source

        data_path = str(source.resolve_path())
        index_path = default_side_index_path(data_path, self.index_dir)
        if not Path(index_path).is_file():
            return source
        try:
            source.index_data = read_side_index(index_path, expectedSize=source.size())
            logEvent(logger, logging.INFO, run_id, "index", f"Side index loaded: {index_path}")
        except IndexDataError as exc:
            # устаревший/битый индекс не фатален: курсор построит таблицу сам
            logEvent(logger, logging.WARNING, run_id, "index", f"Side index ignored: {exc}")
        return source

    def count(self, path: str, logger: logging.Logger, run_id: str) -> int:
        with self.open_source(path, logger, run_id) as source:
            total = source.cursor().count()
        logEvent(logger, logging.INFO, run_id, "read", f"count: records={total}")
        return total

    def read(
        self,
        path: str,
        logger: logging.Logger,
        run_id: str,
        start: int = 0,
        limit: int | None = None,
    ) -> list[tuple[int, str | dict[str, str]]]:
        items: list[tuple[int, str | dict[str, str]]] = []
        with self.open_source(path, logger, run_id) as source:
            cursor = source.cursor()
            if start > 0:
                cursor.seek(start)
            else:
                cursor.rewind()
            while cursor.valid():
                if limit is not None and len(items) >= limit:
                    break
                items.append((cursor.key(), cursor.current()))
                cursor.next()
        logEvent(
            logger,
            logging.INFO,
            run_id,
            "read",
            f"read: start={start} limit={limit} returned={len(items)}",
        )
        return items


__all__ = ["ReadUseCase"]
