from __future__ import annotations

from typing import Iterator, Sequence

from linegate.domain.ports.sources import LineSourceProtocol
from linegate.infra.sources.offset_index import ByteOffsetIndex
from linegate.infra.sources.record_decoder import RecordDecoder


class RecordCursor:
    """
    Назначение/ответственность:
        Курсор по записям строкового потока: последовательный обход
        (valid/current/key/next/rewind), count и seek по номеру записи.

    Взаимодействия:
        - ByteOffsetIndex: перевод ordinal -> смещение (строится лениво при seek/count)
        - RecordDecoder: значение записи из буферизованной строки
        - source: внешний поток, курсор его не закрывает

    Состояния:
        - не спозиционирован (буфер пуст)
        - спозиционирован (строка в буфере)
        - исчерпан (в буфере b"", конец потока)
    """

    def __init__(
        self,
        source: LineSourceProtocol,
        delimiter: str | None = None,
        field_names: Sequence[str] | None = None,
        decoder: RecordDecoder | None = None,
        index: ByteOffsetIndex | None = None,
    ):
        self.source = source
        self.decoder = decoder or RecordDecoder(delimiter=delimiter, field_names=field_names)
        self.index = index or ByteOffsetIndex(source)
        self._pointer = 0
        self._line: bytes | None = None

    def _fetch(self) -> bytes:
        if self._line is None:
            self._line = self.source.readline()
        return self._line

    def valid(self) -> bool:
        return bool(self._fetch())

    def current(self) -> str | dict[str, str]:
        return self.decoder.decode(self._fetch())

    def key(self) -> int:
        return self._pointer

    def next(self) -> None:
        # всегда ровно одно чтение, даже если прошлая строка не была прочитана
        self._line = self.source.readline()
        self._pointer += 1

    def rewind(self) -> None:
        if self._pointer == 0:
            return
        self.source.seek(0)
        self._pointer = 0
        self._line = None

    def seek(self, position: int) -> None:
        table = self.index.get()
        position = max(0, min(position, len(table) - 1))
        self.source.seek(table[position] if table else 0)
        self._pointer = position
        self._line = None

    def count(self) -> int:
        return self.index.count()

    def get_index_data(self) -> list[int]:
        return self.index.get()

    def set_index_data(self, table: Sequence[int]) -> None:
        self.index.set(table)

    def __len__(self) -> int:
        return self.count()

    def __iter__(self) -> Iterator[str | dict[str, str]]:
        self.rewind()
        while self.valid():
            yield self.current()
            self.next()


__all__ = ["RecordCursor"]
