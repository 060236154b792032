"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "config.yaml"


class Settings(BaseModel):
    app_name:           str = "mdpreview"
    mount_target_id:    str = Field(default="markdown-preview", description="Default mount target id")
    parser_preset:      str = Field(default="gfm-like",  description="MarkdownIt parser preset name")
    diagram_language:   str = Field(default="mermaid",   description="Code fence tag rendered as a diagram")
    diagram_command:    str = Field(default="mmdc",      description="Mermaid CLI command line")
    diagram_timeout:  float = Field(default=30.0, gt=0,  description="Seconds allowed per diagram")
    highlight_fallback: str = Field(default="text",      description="Pygments lexer for unknown fence tags")
    base_url:           str = Field(default="http://localhost:8000", description="Document server root URL")
    fetch_timeout:    float = Field(default=10.0, gt=0,  description="Seconds allowed per document fetch")
    host:               str = Field(default="127.0.0.1", description="Dev server bind address")
    port:               int = Field(default=8000, ge=1, le=65535, description="Dev server port")
    docs_dir:           str = Field(default="test",      description="Directory served by /api/markdown and /test")
    static_dir:         str = Field(default="public",    description="Directory served at /")
    dist_dir:           str = Field(default="dist",      description="Directory served at /dist")
    sample_document:    str = Field(default="test-01.md", description="Document the local harness loads first")
    log_level:          str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR)$")


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then MDPREVIEW_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e

    for name in Settings.model_fields:
        if val := os.getenv(f"MDPREVIEW_{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
