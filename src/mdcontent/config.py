"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "config.yaml"
ENV_PREFIX = "MDCONTENT_"


class Settings(BaseModel):
    app_name:      str = "mdcontent"
    db_url:        str = "sqlite:///mdcontent.db"
    parser_config: str = Field(default="gfm-like",  description="MarkdownIt parser preset name")
    output_dir:    str = Field(default="dist",      description="Directory for exported MD + JSON files")
    slug_source:   str = Field(default="file", pattern="^(file|folder)$", description="Derive slugs from file stem or parent folder")
    required_fields: list[str] = Field(default=["title"], description="Dotted metadata keys every document must define")
    taxonomy_types:  list[str] = Field(default=["category", "tag"], description="Known taxonomy types; others are warned about")
    check_links:   bool = Field(default=True, description="Warn about relative links to missing files")


def _env_value(name: str, raw: str) -> Any:
    """Split comma-separated env values for list fields; pydantic coerces the rest."""
    if Settings.model_fields[name].annotation == list[str]:
        return [v.strip() for v in raw.split(",") if v.strip()]
    return raw


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then MDCONTENT_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping, got {type(data).__name__}")

    for name in Settings.model_fields:
        if val := os.getenv(f"{ENV_PREFIX}{name.upper()}"):
            data[name] = _env_value(name, val)

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
