from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Callable

import typer

from linegate.common.run_id import generate_run_id
from linegate.config.config import Settings, load_settings
from linegate.domain.exceptions import IndexDataError, NoPathError
from linegate.errors import AppError
from linegate.infra.logging.setup import closeCommandLogger, createCommandLogger, logEvent
from linegate.usecases.index_usecase import IndexUseCase
from linegate.usecases.read_usecase import ReadUseCase

app = typer.Typer(no_args_is_help=True, add_completion=False)
indexApp = typer.Typer(no_args_is_help=True)

def ensureDir(path: str) -> None:
    """
    Назначение:
        Создаёт каталог, если он отсутствует.
    """
    Path(path).mkdir(parents=True, exist_ok=True)

def requireFile(filePath: str | None) -> None:
    """
    Назначение:
        Базовая проверка наличия файла данных.

    Поведение:
        - Если путь не задан или файл не существует — завершает процесс с exit code 2.
    """
    if not filePath:
        typer.echo("ERROR: --file is required", err=True)
        raise typer.Exit(code=2)

    p = Path(filePath)
    if not p.exists() or not p.is_file():
        typer.echo(f"ERROR: data file not found: {filePath}", err=True)
        raise typer.Exit(code=2)

def buildReadUseCase(settings: Settings) -> ReadUseCase:
    return ReadUseCase(
        delimiter=settings.delimiter,
        field_names=settings.field_names,
        encoding=settings.encoding,
        index_dir=settings.index_dir,
        use_side_index=settings.use_side_index,
    )

def formatRecord(ordinal: int, record: str | dict[str, str], asJson: bool) -> str:
    if asJson:
        return json.dumps({"ordinal": ordinal, "record": record}, ensure_ascii=False)
    if isinstance(record, dict):
        parts = " ".join(f"{key}={value}" for key, value in record.items())
        return f"{ordinal}: {parts}"
    return f"{ordinal}: {record}"

def runCommand(
    ctx: typer.Context,
    commandName: str,
    filePath: str | None,
    runner: Callable[[logging.Logger, str, Settings], int],
) -> None:
    """
    Назначение:
        Унифицированная обвязка выполнения команд:
        - создаёт логгер + файл лога
        - проверяет входной файл
        - переводит доменные ошибки в exit code

    Выходные данные:
        None (завершает процесс через typer.Exit при ненулевом коде).

    Поведение:
        - NoPathError/IndexDataError -> exit code 2
        - OSError и прочие исключения -> exit code 1
    """
    runId = ctx.obj["runId"]
    settings: Settings = ctx.obj["settings"]

    logger, logFilePath = createCommandLogger(
        commandName=commandName,
        logDir=settings.log_dir,
        runId=runId,
        logLevel=settings.log_level,
    )

    exitCode = 0
    try:
        logEvent(logger, logging.INFO, runId, "core", f"Command started: sources={ctx.obj['sources']}")
        try:
            requireFile(filePath)
            exitCode = runner(logger, runId, settings)
        except typer.Exit:
            logEvent(logger, logging.ERROR, runId, "input", "Data file is missing or not accessible")
            exitCode = 2
        except (NoPathError, IndexDataError) as exc:
            error = AppError.from_exception("input", exc)
            logEvent(logger, logging.ERROR, runId, "input", f"{error.code}: {error.message}")
            typer.echo(f"ERROR: {error.message}", err=True)
            exitCode = 2
        except OSError as exc:
            error = AppError.from_exception("io", exc)
            logEvent(logger, logging.ERROR, runId, "io", f"{error.code}: {error.message}")
            typer.echo(f"ERROR: {error.message}", err=True)
            exitCode = 1
        except Exception as exc:
            error = AppError.from_exception("core", exc)
            logEvent(logger, logging.ERROR, runId, "core", f"Command failed: {error.details.get('type')}: {error.message}")
            typer.echo(f"ERROR: {error.message}", err=True)
            exitCode = 1
    finally:
        logEvent(logger, logging.INFO, runId, "core", f"Command finished: exit_code={exitCode} log={logFilePath}")
        closeCommandLogger()

    if exitCode:
        raise typer.Exit(code=exitCode)

@app.callback()
def main(
    ctx: typer.Context,
    config: str | None = typer.Option(None, "--config", help="Path to config.yml"),
    runId: str | None = typer.Option(None, "--run-id", help="Run identifier (UUID). If omitted, generated."),
    logLevel: str | None = typer.Option(None, "--log-level", help="Log level: ERROR|WARN|INFO|DEBUG"),
    logDir: str | None = typer.Option(None, "--log-dir", help="Directory for logs."),
    indexDir: str | None = typer.Option(None, "--index-dir", help="Directory for side index files."),
    delimiter: str | None = typer.Option(None, "--delimiter", help="Field delimiter (omit for whole-line records)"),
    fieldNames: str | None = typer.Option(None, "--field-names", help="Comma-separated field names by position"),
    encoding: str | None = typer.Option(None, "--encoding", help="Text encoding of the data file"),
    useSideIndex: bool | None = typer.Option(
        None,
        "--use-side-index/--no-use-side-index",
        help="Load offsets from a side index when present",
        show_default=True,
    ),
):
    """
    Назначение:
        Глобальная инициализация CLI:
        - генерирует/принимает run_id
        - загружает настройки (CLI > ENV > config > defaults)
        - сохраняет всё в ctx.obj для подкоманд
    """
    if not runId:
        runId = generate_run_id()

    cliOverrides = {
        "log_level": logLevel,
        "log_dir": logDir,
        "index_dir": indexDir,
        "delimiter": delimiter,
        "field_names": fieldNames,
        "encoding": encoding,
        "use_side_index": useSideIndex,
    }
    try:
        loaded = load_settings(config_path=config, cli_overrides=cliOverrides)
    except ValueError as exc:
        typer.echo(f"ERROR: invalid settings: {exc}", err=True)
        raise typer.Exit(code=2)

    ensureDir(loaded.settings.log_dir)

    ctx.obj = {
        "runId": runId,
        "settings": loaded.settings,
        "sources": loaded.sources_used,
    }

@app.command("count")
def count(
    ctx: typer.Context,
    file: str | None = typer.Option(None, "--file", help="Path to data file"),
):
    def runner(logger: logging.Logger, runId: str, settings: Settings) -> int:
        total = buildReadUseCase(settings).count(file, logger, runId)
        typer.echo(f"records={total}")
        return 0

    runCommand(ctx, "count", file, runner)

@app.command("show")
def show(
    ctx: typer.Context,
    file: str | None = typer.Option(None, "--file", help="Path to data file"),
    position: int = typer.Option(0, "--position", help="Ordinal of the first record (clamped to the last one)"),
    limit: int = typer.Option(10, "--limit", help="Maximum records to print"),
    asJson: bool = typer.Option(False, "--json", help="Print records as JSON lines"),
):
    def runner(logger: logging.Logger, runId: str, settings: Settings) -> int:
        items = buildReadUseCase(settings).read(file, logger, runId, start=position, limit=limit)
        for ordinal, record in items:
            typer.echo(formatRecord(ordinal, record, asJson))
        return 0

    runCommand(ctx, "show", file, runner)

@indexApp.command("build")
def indexBuild(
    ctx: typer.Context,
    file: str | None = typer.Option(None, "--file", help="Path to data file"),
    out: str | None = typer.Option(None, "--out", help="Side index path (default: <file>.idx.json)"),
):
    def runner(logger: logging.Logger, runId: str, settings: Settings) -> int:
        summary = IndexUseCase(index_dir=settings.index_dir).build(file, logger, runId, index_path=out)
        typer.echo(f"records={summary['records']} index={summary['index_path']}")
        return 0

    runCommand(ctx, "index-build", file, runner)

app.add_typer(indexApp, name="index")
