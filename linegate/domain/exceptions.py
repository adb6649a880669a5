from __future__ import annotations

from dataclasses import dataclass

from linegate.domain.error_codes import ErrorCode


@dataclass
class NoPathError(Exception):
    """
    Назначение:
        Путь к файлу данных не задан, не найден или файл не открывается.
    Инварианты/гарантии:
        - code установлен в ErrorCode.NO_PATH.
    """

    message: str
    path: str | None = None

    @property
    def code(self) -> ErrorCode:
        return ErrorCode.NO_PATH

    def __str__(self) -> str:
        return self.message


@dataclass
class IndexDataError(Exception):
    """
    Назначение:
        Таблица смещений некорректна (не монотонна, повреждена или устарела).
    Инварианты/гарантии:
        - code установлен в ErrorCode.INDEX_DATA_INVALID.
    """

    message: str
    index_path: str | None = None

    @property
    def code(self) -> ErrorCode:
        return ErrorCode.INDEX_DATA_INVALID

    def __str__(self) -> str:
        if self.index_path:
            return f"{self.message} (index={self.index_path})"
        return self.message


__all__ = ["NoPathError", "IndexDataError"]
