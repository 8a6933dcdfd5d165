"""
cli.py

Responsibility: CLI entrypoint for zonver.

Commands:
- `extract`: read the manifest and export NAME / VERSION
- `check`:   extract, then print the version if no matching release tag exists (else "")

This module should orchestrate behavior but keep concerns isolated:
- Manifest parsing: `manifest.py`
- Job variables / outputs: `actions.py`
- Release lookup: `release.py` / `github_client.py`
"""

from __future__ import annotations

import argparse
import logging

from zonver import __version__
from zonver.actions import set_output
from zonver.config import ConfigError, Settings, configure_logging, load_settings
from zonver.github_client import GitHubError
from zonver.manifest import ManifestError, read_manifest
from zonver.release import export_fields, run_release_step
from zonver.tags import TagTemplateError

logger = logging.getLogger(__name__)


def _settings_from_args(args: argparse.Namespace) -> Settings:
    overrides = {
        "manifest": args.manifest,
        "log_level": args.log_level,
        "owner": getattr(args, "owner", None),
        "repo": getattr(args, "repo", None),
        "tag_template": getattr(args, "tag_template", None),
        "github_token": getattr(args, "github_token", None),
    }
    return load_settings(args.config, overrides=overrides)


def extract_cmd(args: argparse.Namespace, settings: Settings) -> int:
    fields = read_manifest(settings.manifest)
    export_fields(fields)
    for key, value in (("name", fields.name), ("version", fields.version)):
        if value is not None:
            set_output(key, value)
    return 0


def check_cmd(args: argparse.Namespace, settings: Settings) -> int:
    step = run_release_step(settings)
    print(step.result)
    return 0


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="zonver", description="Extract build.zig.zon name/version and check for release tags")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.add_argument("--config", default=None, help="YAML config file (default: .zonver.yml if present)")
    p.add_argument("--log-level", default=None, help="Logging level (default: INFO, or ZONVER_LOG_LEVEL)")
    sub = p.add_subparsers(dest="command", required=True)

    e = sub.add_parser("extract", help="Export NAME and VERSION from the manifest")
    e.add_argument("--manifest", default=None, help="Manifest path (default: build.zig.zon)")
    e.set_defaults(func=extract_cmd)

    c = sub.add_parser("check", help="Print the version if it has no release tag yet, else an empty line")
    c.add_argument("--manifest", default=None, help="Manifest path (default: build.zig.zon)")
    c.add_argument("--owner", default=None, help="GitHub owner (default: from GITHUB_REPOSITORY)")
    c.add_argument("--repo", default=None, help="GitHub repository name (default: from GITHUB_REPOSITORY)")
    c.add_argument("--tag-template", default=None, help="Jinja2 tag name template (default: '{{ version }}')")
    c.add_argument("--github-token", default=None, help="GitHub token (or set env GITHUB_TOKEN)")
    c.set_defaults(func=check_cmd)

    return p


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    try:
        settings = _settings_from_args(args)
        configure_logging(settings.log_level)
        return int(args.func(args, settings))
    except (ConfigError, ManifestError, TagTemplateError, GitHubError) as e:
        logger.error("%s", e)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
