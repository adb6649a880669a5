from __future__ import annotations

from typing import Sequence

# Префикс ключей для полей без имени: "_0", "_1", ...
UNNAMED_PREFIX = "_"

LINE_TERMINATORS = "\r\n"


class RecordDecoder:
    """
    Назначение/ответственность:
        Преобразует сырую строку потока в значение записи.

    Входные данные:
        delimiter: str | None
            Разделитель полей. None — запись возвращается строкой целиком.
        field_names: Sequence[str] | None
            Имена полей по позиции (0-based). Позиции без имени получают
            ключ UNNAMED_PREFIX + позиция.
        encoding/errors:
            Параметры декодирования bytes -> str.

    Выходные данные:
        str | dict[str, str]
    """

    def __init__(
        self,
        delimiter: str | None = None,
        field_names: Sequence[str] | None = None,
        encoding: str = "utf-8",
        errors: str = "strict",
    ):
        if delimiter == "":
            raise ValueError("Delimiter must be a non-empty string")
        self.delimiter = delimiter
        self.field_names = list(field_names) if field_names is not None else []
        self.encoding = encoding
        self.errors = errors

    def field_key(self, position: int) -> str:
        if position < len(self.field_names):
            return self.field_names[position]
        return f"{UNNAMED_PREFIX}{position}"

    def decode(self, raw: bytes | str) -> str | dict[str, str]:
        if isinstance(raw, bytes):
            raw = raw.decode(self.encoding, self.errors)
        line = raw.rstrip(LINE_TERMINATORS)

        if self.delimiter is None:
            return line

        # короткая строка даёт меньше ключей, лишние поля получают синтетические ключи
        return {self.field_key(pos): part for pos, part in enumerate(line.split(self.delimiter))}


__all__ = ["RecordDecoder", "UNNAMED_PREFIX"]
