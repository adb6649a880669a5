from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import os
import yaml


@dataclass(frozen=True)
class Settings:
    # Logging
    log_dir: str = "./logs"
    log_level: str = "INFO"

    # Records
    delimiter: str | None = None
    field_names: tuple[str, ...] | None = None
    encoding: str = "utf-8"

    # Side index
    index_dir: str | None = None
    use_side_index: bool = True


@dataclass(frozen=True)
class LoadedSettings:
    settings: Settings
    sources_used: list[str]


def _read_yaml_config(path: Path) -> dict:
    if not path.exists():
        return {}
    if not path.is_file():
        return {}
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            return {}
        return data


def _env_get(name: str) -> str | None:
    v = os.getenv(name)
    if v is None or v.strip() == "":
        return None
    return v.strip()


def parse_bool(v: str | None) -> bool | None:
    if v is None:
        return None
    vv = v.lower()
    if vv in ("1", "true", "yes", "y"):
        return True
    if vv in ("0", "false", "no", "n"):
        return False
    raise ValueError(f"Invalid boolean env value: {v}")


def parse_field_names(value) -> tuple[str, ...] | None:
    """
    Назначение:
        Имена полей из YAML-списка или строки "id,name,..." (ENV/CLI).
    """
    if value is None:
        return None
    if isinstance(value, str):
        items = [part.strip() for part in value.split(",")]
    elif isinstance(value, (list, tuple)):
        items = [str(part).strip() for part in value]
    else:
        raise ValueError(f"Invalid field_names value: {value!r}")
    return tuple(items) or None


def _as_bool(value) -> bool:
    # YAML может дать строку "false"
    if isinstance(value, str):
        return bool(parse_bool(value))
    return bool(value)


def load_settings(
    config_path: str | None,
    cli_overrides: dict,
) -> LoadedSettings:
    """
    Priority: CLI > ENV > config > defaults
    """
    sources: list[str] = []
    defaults = Settings()

    # 1) config file
    cfg: dict = {}
    if config_path:
        cfg = _read_yaml_config(Path(config_path))
        if cfg:
            sources.append("config")

    # 2) env
    env = {
        "log_dir": _env_get("LINEGATE_LOG_DIR"),
        "log_level": _env_get("LINEGATE_LOG_LEVEL"),
        "delimiter": os.getenv("LINEGATE_DELIMITER") or None,
        "field_names": _env_get("LINEGATE_FIELD_NAMES"),
        "encoding": _env_get("LINEGATE_ENCODING"),
        "index_dir": _env_get("LINEGATE_INDEX_DIR"),
        "use_side_index": parse_bool(_env_get("LINEGATE_USE_SIDE_INDEX")),
    }
    if any(v is not None for v in env.values()):
        sources.append("env")

    merged = {key: cfg.get(key, getattr(defaults, key)) for key in env}
    for key, value in env.items():
        if value is not None:
            merged[key] = value

    # 3) apply CLI overrides (only those explicitly passed)
    if any(v is not None for v in cli_overrides.values()):
        sources.append("cli")

    for k, v in cli_overrides.items():
        if v is None:
            continue
        merged[k] = v

    # разделитель "\t" из YAML/ENV приходит как два символа
    delimiter = merged["delimiter"]
    if delimiter == "\\t":
        delimiter = "\t"

    settings = Settings(
        log_dir=str(merged["log_dir"]),
        log_level=str(merged["log_level"]),
        delimiter=delimiter,
        field_names=parse_field_names(merged["field_names"]),
        encoding=str(merged["encoding"]),
        index_dir=merged["index_dir"],
        use_side_index=_as_bool(merged["use_side_index"]),
    )

    return LoadedSettings(settings=settings, sources_used=sources)
