"""
config.py

Responsibility: Resolve the settings for one run into a typed model.

Precedence (lowest to highest):
1) Built-in defaults
2) YAML config file (`--config PATH`, or `.zonver.yml` in the working directory)
3) Environment variables (`ZONVER_*`, `GITHUB_TOKEN`, `GITHUB_REPOSITORY`)
4) CLI flags (passed in as `overrides`)
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

import yaml

from zonver.tags import DEFAULT_TAG_TEMPLATE

DEFAULT_CONFIG_FILE = ".zonver.yml"
DEFAULT_MANIFEST = "build.zig.zon"
DEFAULT_API_BASE = "https://api.github.com"

_FILE_KEYS = ("manifest", "owner", "repo", "tag_template", "api_base")


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class Settings:
    """Resolved configuration for a single invocation."""

    manifest: str = DEFAULT_MANIFEST
    owner: str | None = None
    repo: str | None = None
    tag_template: str = DEFAULT_TAG_TEMPLATE
    api_base: str = DEFAULT_API_BASE
    github_token: str = ""
    sha: str | None = None
    log_level: str = "INFO"
    github_repository: str | None = None

    def require_repository(self) -> tuple[str, str]:
        """
        Return (owner, repo); GITHUB_REPOSITORY fills whichever of the two is unset.
        """
        owner, repo = self.owner, self.repo
        if (not owner or not repo) and self.github_repository:
            fallback_owner, fallback_repo = _split_repository(self.github_repository)
            owner = owner or fallback_owner
            repo = repo or fallback_repo
        if not owner or not repo:
            raise ConfigError(
                "GitHub owner and repo are required (use --owner/--repo, ZONVER_OWNER/ZONVER_REPO or GITHUB_REPOSITORY)"
            )
        return owner, repo


def _load_yaml_file(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in config file {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Config file must be a mapping/object at the top level: {path}")
    unknown = sorted(str(k) for k in data if k not in _FILE_KEYS)
    if unknown:
        raise ConfigError(f"Unknown key(s) in config file {path}: {', '.join(unknown)}")
    return {k: str(v).strip() for k, v in data.items() if v is not None}


def _split_repository(value: str) -> tuple[str, str]:
    owner, sep, repo = value.strip().partition("/")
    if not sep or not owner or not repo or "/" in repo:
        raise ConfigError(f"GITHUB_REPOSITORY must look like `owner/repo`, got {value!r}")
    return owner, repo


def load_settings(
    config_path: str | Path | None = None,
    *,
    environ: Mapping[str, str] | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> Settings:
    """
    Build `Settings` from defaults, an optional YAML file, the environment and overrides.

    `overrides` values that are None are ignored, so argparse defaults can be passed as-is.
    """
    env = os.environ if environ is None else environ
    values: dict[str, Any] = {}

    if config_path is not None:
        path = Path(config_path)
        if not path.is_file():
            raise ConfigError(f"Config file does not exist: {path}")
        values.update(_load_yaml_file(path))
    elif Path(DEFAULT_CONFIG_FILE).is_file():
        values.update(_load_yaml_file(Path(DEFAULT_CONFIG_FILE)))

    for key in (*_FILE_KEYS, "log_level"):
        raw = env.get(f"ZONVER_{key.upper()}")
        if raw:
            values[key] = raw.strip()

    values["github_token"] = env.get("GITHUB_TOKEN", "")
    values["sha"] = env.get("SHA") or None
    # Split lazily in `require_repository`; `extract` never needs it.
    values["github_repository"] = env.get("GITHUB_REPOSITORY") or None

    for key, value in (overrides or {}).items():
        if value is not None:
            values[key] = value

    settings = replace(Settings(), **values)
    if not isinstance(logging.getLevelName(settings.log_level.upper()), int):
        raise ConfigError(f"Unknown log level: {settings.log_level}")
    return settings


def configure_logging(level: str) -> None:
    """Log to stderr so stdout stays free for step results."""

    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
