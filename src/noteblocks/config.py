"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "config.yaml"


class Settings(BaseModel):
    app_name:      str = "noteblocks"
    db_url:        str = "sqlite:///noteblocks.db"
    engine:        str = Field(default="lines", pattern="^(lines|markdown-it)$", description="Plain-text engine: line scanner or markdown-it tree")
    parser_config: str = Field(default="gfm-like",  description="MarkdownIt preset name for the markdown-it engine")
    output_dir:    str = Field(default="dist",      description="Directory for normalized JSON/MD output")
    output_format: str = Field(default="json", pattern="^(json|md)$", description="json or md")
    log_level:     str = Field(default="WARNING", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    cache:         bool = Field(default=False,      description="Memoize normalized notes in the database by content hash")


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then NOTEBLOCKS_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping, got {type(data).__name__}")

    for name in Settings.model_fields:
        if val := os.getenv(f"NOTEBLOCKS_{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
