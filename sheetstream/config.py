from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
import os
from pathlib import Path
import tomllib
from typing import cast
import warnings

from .constants import Defaults


@dataclass(frozen=True, slots=True)
class SheetStreamConfig:
    encoding: str = Defaults.ENCODING
    max_buffer_size: int = Defaults.MAX_BUFFER_SIZE
    max_line_count: int | None = None
    flush_line_count: int | None = None
    chunk_size: int = Defaults.CHUNK_SIZE
    batch_size: int = Defaults.BATCH_SIZE
    date_formats: tuple[str, ...] = field(
        default_factory=lambda: Defaults.DATE_FORMATS
    )
    sheet_name: str | None = None

    def __post_init__(self) -> None:
        if self.max_buffer_size < 1:
            raise ValueError(
                f"max_buffer_size must be positive, got {self.max_buffer_size}"
            )
        if self.chunk_size < 1:
            raise ValueError(f"chunk_size must be positive, got {self.chunk_size}")
        if self.batch_size < 1:
            raise ValueError(f"batch_size must be positive, got {self.batch_size}")
        if self.max_line_count is not None and self.max_line_count < 1:
            raise ValueError(
                f"max_line_count must be positive, got {self.max_line_count}"
            )
        if self.flush_line_count is not None and self.flush_line_count < 1:
            raise ValueError(
                f"flush_line_count must be positive, got {self.flush_line_count}"
            )
        if not self.date_formats:
            raise ValueError("date_formats must contain at least one format")

    @classmethod
    def from_env(cls) -> SheetStreamConfig:
        raw_formats = os.getenv("SHEETSTREAM_DATE_FORMATS")
        date_formats = Defaults.DATE_FORMATS
        if raw_formats:
            date_formats = tuple(
                part.strip() for part in raw_formats.split(",") if part.strip()
            )
        raw_sheet_name = os.getenv("SHEETSTREAM_SHEET_NAME")
        sheet_name = raw_sheet_name.strip() if raw_sheet_name else None
        return cls(
            encoding=os.getenv("SHEETSTREAM_ENCODING", Defaults.ENCODING),
            max_buffer_size=int(
                os.getenv("SHEETSTREAM_MAX_BUFFER_SIZE", str(Defaults.MAX_BUFFER_SIZE))
            ),
            max_line_count=_optional_int(os.getenv("SHEETSTREAM_MAX_LINE_COUNT")),
            flush_line_count=_optional_int(os.getenv("SHEETSTREAM_FLUSH_LINE_COUNT")),
            chunk_size=int(
                os.getenv("SHEETSTREAM_CHUNK_SIZE", str(Defaults.CHUNK_SIZE))
            ),
            batch_size=int(
                os.getenv("SHEETSTREAM_BATCH_SIZE", str(Defaults.BATCH_SIZE))
            ),
            date_formats=date_formats,
            sheet_name=sheet_name or None,
        )


class ConfigLoader:
    pass

    @staticmethod
    def load(config_file: Path | None = None) -> SheetStreamConfig:
        config = SheetStreamConfig.from_env()
        if config_file is None:
            config_file = Path(Defaults.CONFIG_FILE)
        if config_file.exists():
            try:
                config = ConfigLoader._load_from_toml(config_file, config)
            except Exception as e:
                warnings.warn(
                    f"Failed to load config from {config_file}: {e}", stacklevel=2
                )
        return config

    @staticmethod
    def _load_from_toml(
        config_file: Path, base_config: SheetStreamConfig
    ) -> SheetStreamConfig:
        with config_file.open("rb") as handle:
            data = tomllib.load(handle)
        scanner = _get_table(data, "scanner")
        table = _get_table(data, "table")
        encoding = base_config.encoding
        if value := scanner.get("encoding"):
            encoding = str(value)
        max_buffer_size = base_config.max_buffer_size
        if (value := scanner.get("max_buffer_size")) is not None:
            max_buffer_size = _coerce_int(value, key="scanner.max_buffer_size")
        max_line_count = base_config.max_line_count
        if (value := scanner.get("max_line_count")) is not None:
            max_line_count = _coerce_int(value, key="scanner.max_line_count")
        flush_line_count = base_config.flush_line_count
        if (value := scanner.get("flush_line_count")) is not None:
            flush_line_count = _coerce_int(value, key="scanner.flush_line_count")
        chunk_size = base_config.chunk_size
        if (value := scanner.get("chunk_size")) is not None:
            chunk_size = _coerce_int(value, key="scanner.chunk_size")
        batch_size = base_config.batch_size
        if (value := table.get("batch_size")) is not None:
            batch_size = _coerce_int(value, key="table.batch_size")
        date_formats = base_config.date_formats
        if (value := table.get("date_formats")) is not None:
            date_formats = _coerce_str_tuple(value, key="table.date_formats")
        sheet_name = base_config.sheet_name
        if "sheet_name" in table:
            raw = table.get("sheet_name")
            cleaned = str(raw).strip() if raw is not None else ""
            sheet_name = cleaned or None
        return SheetStreamConfig(
            encoding=encoding,
            max_buffer_size=max_buffer_size,
            max_line_count=max_line_count,
            flush_line_count=flush_line_count,
            chunk_size=chunk_size,
            batch_size=batch_size,
            date_formats=date_formats,
            sheet_name=sheet_name,
        )


def _get_table(data: Mapping[str, object], key: str) -> Mapping[str, object]:
    value = data.get(key)
    if isinstance(value, Mapping):
        return cast("Mapping[str, object]", value)
    return {}


def _optional_int(raw: str | None) -> int | None:
    if raw is None or not raw.strip():
        return None
    return int(raw)


def _coerce_int(value: object, *, key: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{key} must be an int, got bool")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if isinstance(value, str):
        return int(value)
    raise ValueError(f"{key} must be int-like or string, got {type(value).__name__}")


def _coerce_str_tuple(value: object, *, key: str) -> tuple[str, ...]:
    if isinstance(value, str):
        return tuple(part.strip() for part in value.split(",") if part.strip())
    if isinstance(value, (list, tuple)):
        items = cast("list[object]", list(value))
        return tuple(str(item) for item in items)
    raise ValueError(
        f"{key} must be a list of strings or a string, got {type(value).__name__}"
    )
