from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict

from linegate.domain.error_codes import ErrorCode


@dataclass
class AppError(Exception):
    """
    Унифицированная ошибка приложения.
    """

    category: str
    code: str
    message: str
    details: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "category": self.category,
            "code": self.code,
            "message": self.message,
            "details": self.details or {},
        }

    @classmethod
    def from_exception(cls, category: str, exc: Exception) -> "AppError":
        code = getattr(exc, "code", None)
        if code is None:
            code = ErrorCode.IO_ERROR if isinstance(exc, OSError) else "UNEXPECTED"
        return cls(
            category=category,
            code=str(getattr(code, "value", code)),
            message=str(exc),
            details={"type": type(exc).__name__},
        )


__all__ = ["AppError"]
