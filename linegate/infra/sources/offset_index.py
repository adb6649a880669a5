from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, Sequence

from linegate.domain.exceptions import IndexDataError
from linegate.domain.ports.sources import LineSourceProtocol

logger = logging.getLogger(__name__)


@contextmanager
def preserved_position(source: LineSourceProtocol) -> Iterator[int]:
    """
    Назначение:
        Временное перепозиционирование потока с гарантированным возвратом
        на исходное смещение (и при успехе, и при исключении).

    Выходные данные:
        int — сохранённое смещение.
    """
    saved = source.tell()
    try:
        yield saved
    finally:
        source.seek(saved)


def scan_line_offsets(source: LineSourceProtocol) -> list[int]:
    """
    Назначение:
        Один проход по потоку: смещение начала каждой строки.

    Алгоритм:
        - seek(0), затем readline до первого пустого результата
        - для каждой прочитанной строки записывается смещение её начала;
          смещение следующей строки берётся tell() сразу после чтения
        - исходная позиция потока восстанавливается
    """
    offsets: list[int] = []
    with preserved_position(source):
        source.seek(0)
        start = 0
        while source.readline():
            offsets.append(start)
            start = source.tell()
    return offsets


def validate_offsets(offsets: Sequence[int]) -> list[int]:
    """
    Назначение:
        Проверяет внешнюю таблицу смещений: целые, неотрицательные, строго возрастающие.
    """
    table: list[int] = []
    previous = -1
    for ordinal, value in enumerate(offsets):
        if isinstance(value, bool) or not isinstance(value, int):
            raise IndexDataError(f"Offset at ordinal {ordinal} is not an integer: {value!r}")
        if value < 0:
            raise IndexDataError(f"Negative offset at ordinal {ordinal}: {value}")
        if value <= previous:
            raise IndexDataError(f"Offsets are not increasing at ordinal {ordinal}: {previous} >= {value}")
        previous = value
        table.append(value)
    return table


class ByteOffsetIndex:
    """
    Назначение/ответственность:
        Таблица ordinal -> смещение начала записи для одного потока.
        Строится лениво и не более одного раза; может быть подменена целиком.

    Инварианты/гарантии:
        - table[0] == 0 для непустого потока
        - смещения возрастают вместе с ordinal
        - len(table) == количество строк
    """

    def __init__(self, source: LineSourceProtocol):
        self.source = source
        self._table: list[int] | None = None

    @property
    def is_built(self) -> bool:
        return self._table is not None

    def build(self) -> list[int]:
        table = scan_line_offsets(self.source)
        logger.debug("offset index built: records=%s", len(table))
        self._table = table
        return table

    def get(self) -> list[int]:
        if self._table is None:
            return self.build()
        return self._table

    def set(self, table: Sequence[int]) -> None:
        self._table = validate_offsets(table)
        logger.debug("offset index injected: records=%s", len(self._table))

    def reset(self) -> None:
        self._table = None

    def count(self) -> int:
        return len(self.get())


__all__ = ["ByteOffsetIndex", "preserved_position", "scan_line_offsets", "validate_offsets"]
