from __future__ import annotations

import logging
from pathlib import Path

LOGGER_ROOT = "linegate"


class EnsureFieldsFilter(logging.Filter):
    """
    Назначение:
        Гарантирует наличие полей runId и component в LogRecord,
        в том числе для записей от модульных логгеров ядра (linegate.infra.*),
        которые пишут без extra.

    Входные данные:
        runId: str
        defaultComponent: str
            Компонент по умолчанию, если не задан.
    """

    def __init__(self, runId: str, defaultComponent: str = "core"):
        super().__init__()
        self.runId = runId
        self.defaultComponent = defaultComponent

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "runId"):
            record.runId = self.runId
        if not hasattr(record, "component"):
            record.component = self.defaultComponent
        return True


def mapLogLevel(levelName: str) -> int:
    """
    Назначение:
        Преобразует строковый уровень логирования в logging level.

    Входные данные:
        levelName: str
            ERROR|WARN|INFO|DEBUG
    """
    value = (levelName or "").strip().upper()
    if value == "ERROR":
        return logging.ERROR
    if value in ("WARN", "WARNING"):
        return logging.WARNING
    if value == "INFO":
        return logging.INFO
    if value == "DEBUG":
        return logging.DEBUG
    raise ValueError(f"Unsupported log level: {levelName}")


def createCommandLogger(commandName: str, logDir: str, runId: str, logLevel: str) -> tuple[logging.Logger, str]:
    """
    Назначение:
        Создаёт файловый логгер команды и возвращает путь к log-файлу.
        Обработчик вешается на корневой логгер пакета, поэтому DEBUG-сообщения
        ядра (построение индекса и т.п.) попадают в тот же файл.

    Выходные данные:
        (logger, logFilePath)
    """
    Path(logDir).mkdir(parents=True, exist_ok=True)
    logFilePath = str(Path(logDir) / f"{commandName}_{runId}.log")

    level = mapLogLevel(logLevel)
    formatter = logging.Formatter(
        fmt="%(asctime)s %(levelname)s runId=%(runId)s comp=%(component)s msg=%(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S%z",
    )

    fileHandler = logging.FileHandler(logFilePath, encoding="utf-8")
    fileHandler.setLevel(level)
    fileHandler.setFormatter(formatter)
    fileHandler.addFilter(EnsureFieldsFilter(runId=runId))

    packageLogger = logging.getLogger(LOGGER_ROOT)
    for handler in list(packageLogger.handlers):
        packageLogger.removeHandler(handler)
        handler.close()
    packageLogger.setLevel(level)
    packageLogger.propagate = False
    packageLogger.addHandler(fileHandler)

    return logging.getLogger(f"{LOGGER_ROOT}.cli.{commandName}"), logFilePath


def closeCommandLogger() -> None:
    """
    Назначение:
        Закрывает файловые обработчики пакета (после завершения команды).
    """
    packageLogger = logging.getLogger(LOGGER_ROOT)
    for handler in list(packageLogger.handlers):
        packageLogger.removeHandler(handler)
        handler.close()


def logEvent(logger: logging.Logger, level: int, runId: str, component: str, message: str) -> None:
    """
    Назначение:
        Унифицированная запись событий с runId/component.
    """
    logger.log(level, message, extra={"runId": runId, "component": component})
