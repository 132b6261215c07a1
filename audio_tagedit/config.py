from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, Field, field_validator


class IndexSettings(BaseModel):
    path: Path = Path("./cache/index.sqlite3")

    @field_validator("path", mode="before")
    @classmethod
    def _expand_path(cls, value: str | Path) -> Path:
        return Path(value).expanduser().resolve()


class CodecSettings(BaseModel):
    sniff_content: bool = True
    disabled: List[str] = Field(default_factory=list)
    atomic_writes: bool = True

    @field_validator("disabled", mode="before")
    @classmethod
    def _lower(cls, values: Optional[List[str]]) -> List[str]:
        return [str(v).lower().lstrip(".") for v in values or []]


class LoggingSettings(BaseModel):
    level: str = "INFO"
    warnings_log: Optional[Path] = None

    @field_validator("warnings_log", mode="before")
    @classmethod
    def _expand_log(cls, value: Optional[str | Path]) -> Optional[Path]:
        if value is None:
            return None
        return Path(value).expanduser().resolve()


class Settings(BaseModel):
    index: IndexSettings = IndexSettings()
    codecs: CodecSettings = CodecSettings()
    logging: LoggingSettings = LoggingSettings()

    @classmethod
    def load(cls, path: Path) -> "Settings":
        with path.open("r", encoding="utf-8") as fh:
            raw = yaml.safe_load(fh)
        return cls.model_validate(raw or {})


def find_config(explicit_path: Optional[Path]) -> Optional[Path]:
    if explicit_path:
        if not explicit_path.exists():
            raise FileNotFoundError(f"Config file not found: {explicit_path}")
        return explicit_path
    cwd = Path.cwd()
    for candidate in (cwd / "config.yaml", cwd / "config.yml"):
        if candidate.exists():
            return candidate
    return None


def load_settings(explicit_path: Optional[Path]) -> Settings:
    config_path = find_config(explicit_path)
    if config_path is None:
        return Settings()
    return Settings.load(config_path)
