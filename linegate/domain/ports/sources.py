from __future__ import annotations

from typing import Protocol


class LineSourceProtocol(Protocol):
    """
    Назначение/ответственность:
        Читаемый и позиционируемый байтовый поток, из которого курсор берёт строки.
    Взаимодействия:
        Владелец потока внешний: курсор не открывает и не закрывает его.
    """

    def readline(self) -> bytes:
        """
        Контракт:
            Возвращает строку вместе с терминатором; b"" означает конец потока.
        """
        ...

    def tell(self) -> int:
        """
        Контракт:
            Текущее смещение в байтах.
        """
        ...

    def seek(self, offset: int) -> int:
        """
        Контракт:
            Абсолютное позиционирование на offset байт от начала.
        """
        ...
