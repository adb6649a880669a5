from __future__ import annotations

import logging
from pathlib import Path
from typing import BinaryIO, Sequence

from linegate.domain.exceptions import NoPathError
from linegate.infra.sources.record_cursor import RecordCursor
from linegate.infra.sources.record_decoder import RecordDecoder

logger = logging.getLogger(__name__)


class FileRecordSource:
    """
    Назначение/ответственность:
        Файловый источник записей: разрешает путь, открывает файл (один раз,
        в бинарном режиме) и выдаёт RecordCursor поверх открытого handle.
        В отличие от курсора, владеет файлом и закрывает его.

    Входные данные:
        path: str | None
            Абсолютный путь или путь относительно base_dir (по умолчанию cwd).
        delimiter/field_names/encoding:
            Передаются в RecordDecoder.
        index_data: Sequence[int] | None
            Готовая таблица смещений (например, из side-индекса).
    """

    def __init__(
        self,
        path: str | None,
        delimiter: str | None = None,
        field_names: Sequence[str] | None = None,
        base_dir: str | None = None,
        encoding: str = "utf-8",
        index_data: Sequence[int] | None = None,
    ):
        self.path = path
        self.delimiter = delimiter
        self.field_names = list(field_names) if field_names is not None else None
        self.base_dir = base_dir
        self.encoding = encoding
        self.index_data = index_data
        self._file: BinaryIO | None = None

    def resolve_path(self) -> Path:
        if not self.path:
            raise NoPathError("Path to a file was not specified")
        p = Path(self.path)
        if p.is_absolute():
            return p
        base = Path(self.base_dir) if self.base_dir else Path.cwd()
        return base / p

    def open(self) -> BinaryIO:
        if self._file is not None:
            return self._file

        p = self.resolve_path()
        if not p.is_file():
            raise NoPathError(f"Unable to locate the file: {p}", path=str(p))
        try:
            self._file = p.open("rb")
        except OSError as exc:
            raise NoPathError(f"Unable to open the file: {p} ({exc})", path=str(p)) from exc
        logger.debug("opened data file: %s", p)
        return self._file

    def size(self) -> int:
        return self.resolve_path().stat().st_size

    def cursor(self) -> RecordCursor:
        decoder = RecordDecoder(
            delimiter=self.delimiter,
            field_names=self.field_names,
            encoding=self.encoding,
        )
        cursor = RecordCursor(self.open(), decoder=decoder)
        if self.index_data is not None:
            cursor.set_index_data(self.index_data)
        return cursor

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None

    def __enter__(self) -> "FileRecordSource":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


__all__ = ["FileRecordSource"]
