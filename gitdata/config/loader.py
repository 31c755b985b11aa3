"""Locate, read and validate ``gitdata.yaml``.

An explicit ``--config`` path must exist. The first of that path,
``./gitdata.yaml`` and ``~/.gitdata/config.yaml`` holding a non-empty
document wins, and built-in defaults apply when none does. String
values may reference environment variables as ``${NAME}``; unset ones
expand to an empty string.
"""

import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .models import GitDataConfig

_ENV_REF = re.compile(r"\$\{(\w+)\}")


def _search_paths(cli_path: str | None) -> list[Path]:
    paths = [Path("gitdata.yaml"), Path.home() / ".gitdata" / "config.yaml"]
    if not cli_path:
        return paths
    explicit = Path(cli_path)
    if not explicit.exists():
        raise ValueError(f"Config file not found: {cli_path}")
    return [explicit, *paths]


def _read_document(path: Path) -> Any:
    try:
        return yaml.safe_load(path.read_text())
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e


def load_config(cli_path: str | None = None) -> GitDataConfig:
    """Return the active configuration; ValueError if a config file is unusable."""
    for path in _search_paths(cli_path):
        if not path.is_file():
            continue
        document = _read_document(path)
        if document is None:
            continue
        try:
            return GitDataConfig.model_validate(_expand_env_vars(document))
        except ValidationError as e:
            raise ValueError(f"Invalid config in {path}: {e}") from e
    return GitDataConfig()


def _expand_env_vars(value: Any) -> Any:
    if isinstance(value, str):
        return _ENV_REF.sub(lambda m: os.environ.get(m.group(1), ""), value)
    if isinstance(value, dict):
        return {key: _expand_env_vars(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_expand_env_vars(item) for item in value]
    return value

# Default YAML template for `gitdata config init`
DEFAULT_CONFIG_TEMPLATE = """\
# gitdata.yaml

# Git data API
api:
  base_url: "https://api.github.com"
  token_env: "GITHUB_TOKEN"      # env var holding the access token
  timeout: 30.0
  user_agent: "gitdata"
  blob_write_encoding: "utf-8"   # utf-8 | base64
  strict: false                  # raise on not-found/transport/decode errors

# Logging
log_level: "info"                # debug | info | warn | error
log_format: "text"               # text | json
"""
