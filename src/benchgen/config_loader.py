"""Locate and load the YAML build configuration."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .errors import ConfigurationError
from .models.config import BuildConfig

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_NAME = "benchgen.yaml"


def _read_yaml_mapping(path: Path) -> dict[str, Any]:
    try:
        with open(path, encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    except OSError as exc:
        raise ConfigurationError(f"Cannot read config file {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(raw, dict):
        raise ConfigurationError(f"Invalid config file: {path} (expected YAML mapping)")
    return raw


def load_config_file(path: Path) -> BuildConfig:
    """Validate *path* and anchor its relative paths at the file's directory."""
    raw = _read_yaml_mapping(path)
    try:
        config = BuildConfig.model_validate(raw)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid config file {path}:\n{exc}") from exc
    logger.info("Loaded build config from %s", path)
    return config.resolved(path.resolve().parent)


def load_config(explicit_path: str | Path | None = None, root: str | Path | None = None) -> BuildConfig:
    """Load the build configuration.

    Search order:
      1. *explicit_path* (must exist)
      2. ``<root>/benchgen.yaml`` (root defaults to the CWD)
      3. built-in defaults, anchored at *root*
    """
    base = Path(root) if root is not None else Path.cwd()
    if explicit_path is not None:
        path = Path(explicit_path)
        if not path.is_file():
            raise ConfigurationError(f"Config file not found: {path}")
        return load_config_file(path)

    candidate = base / DEFAULT_CONFIG_NAME
    if candidate.is_file():
        return load_config_file(candidate)

    logger.debug("No %s in %s; using built-in defaults", DEFAULT_CONFIG_NAME, base)
    return BuildConfig().resolved(base.resolve())


def dump_config(config: BuildConfig) -> str:
    """Render *config* as YAML (paths as strings)."""
    return yaml.safe_dump(config.model_dump(mode="json"), sort_keys=False, default_flow_style=False)
