"""
manifest.py

Responsibility: Extract the package name and version from a `build.zig.zon` manifest.

This implementation intentionally stays conservative:
- It does not parse Zig object notation; it scans trimmed lines for `.name` / `.version`.
- The value is everything after the first '=', with quotes and commas removed.
- A field that never appears is left as None; the last occurrence of a field wins.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


class ManifestError(ValueError):
    pass


NAME_PREFIX = ".name"
VERSION_PREFIX = ".version"


@dataclass(frozen=True)
class ManifestFields:
    """Fields extracted from a manifest; None when the manifest has no matching line."""

    name: str | None = None
    version: str | None = None


def _clean_value(raw: str) -> str:
    return raw.replace('"', "").replace(",", "").strip()


def parse_manifest_text(text: str) -> ManifestFields:
    """
    Scan manifest text line by line and return the extracted fields.

    Lines like `.version = "1.2.3",` become `1.2.3`. A prefixed line without
    an '=' has no value and is skipped.
    """
    name: str | None = None
    version: str | None = None
    for raw in text.split("\n"):
        line = raw.strip()
        if not line.startswith((NAME_PREFIX, VERSION_PREFIX)):
            continue
        _key, sep, value = line.partition("=")
        if not sep:
            continue
        if line.startswith(VERSION_PREFIX):
            version = _clean_value(value)
        else:
            name = _clean_value(value)
    return ManifestFields(name=name, version=version)


def read_manifest(path: str | Path) -> ManifestFields:
    """
    Read a manifest file from disk and parse it.
    """
    p = Path(path)
    if not p.is_file():
        raise ManifestError(f"Manifest file does not exist: {p}")
    return parse_manifest_text(p.read_text(encoding="utf-8"))


def require_version(fields: ManifestFields, path: str | Path) -> str:
    if not fields.version:
        raise ManifestError(f"Manifest does not declare `.version`: {path}")
    return fields.version
