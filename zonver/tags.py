"""
tags.py

Responsibility: Render the release tag name for a version.

Tag names come from a small Jinja2 template so that projects tagging as `v1.2.3`
can share the same lookup as projects tagging as plain `1.2.3`.

This module intentionally does NOT know about GitHub, manifests, or CLI parsing.
"""

from __future__ import annotations

from typing import Any

from jinja2 import Environment, StrictUndefined, TemplateError

DEFAULT_TAG_TEMPLATE = "{{ version }}"


class TagTemplateError(ValueError):
    pass


_env = Environment(
    autoescape=False,
    undefined=StrictUndefined,
    keep_trailing_newline=False,
)


def render_tag(template: str, context: dict[str, Any]) -> str:
    """
    Render a tag name, e.g. `v{{ version }}` with {"version": "1.2.3"} -> `v1.2.3`.
    """
    try:
        out = _env.from_string(template).render(**context)
    except TemplateError as e:
        raise TagTemplateError(f"Failed rendering tag template {template!r}: {e}") from e
    tag = out.strip()
    if not tag:
        raise TagTemplateError(f"Tag template {template!r} rendered an empty tag name")
    return tag


def tag_ref(tag: str) -> str:
    """Ref path (relative to `refs/`) used to look up a tag."""
    return f"tags/{tag}"
