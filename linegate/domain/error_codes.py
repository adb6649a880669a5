from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """
    Назначение:
        Единая таксономия кодов ошибок для CLI и отчётов.
    """

    NO_PATH = "NO_PATH"
    INDEX_DATA_INVALID = "INDEX_DATA_INVALID"
    IO_ERROR = "IO_ERROR"
