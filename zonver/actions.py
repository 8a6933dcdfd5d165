"""
actions.py

Responsibility: Hand values to later steps of a GitHub Actions job.

- `export_variable` appends to the `$GITHUB_ENV` file (job-wide environment variables)
- `set_output` appends to the `$GITHUB_OUTPUT` file (step outputs)

Outside of Actions (no file configured) the assignment is printed to stderr instead,
so stdout stays free for step results.
"""

from __future__ import annotations

import os
import sys
import uuid
from collections.abc import MutableMapping
from pathlib import Path


def _format_assignment(name: str, value: str) -> str:
    if "\n" not in value and "\r" not in value:
        return f"{name}={value}\n"
    # Multiline values use the heredoc form with a delimiter that cannot collide.
    delimiter = f"ghadelimiter_{uuid.uuid4()}"
    return f"{name}<<{delimiter}\n{value}\n{delimiter}\n"


def _append(file_var: str, name: str, value: str, environ: MutableMapping[str, str]) -> None:
    target = environ.get(file_var)
    line = _format_assignment(name, value)
    if not target:
        print(line, end="", file=sys.stderr)
        return
    with Path(target).open("a", encoding="utf-8") as f:
        f.write(line)


def export_variable(name: str, value: str, *, environ: MutableMapping[str, str] | None = None) -> None:
    """
    Export `name=value` for the rest of the job and for this process.
    """
    env = os.environ if environ is None else environ
    _append("GITHUB_ENV", name, value, env)
    env[name] = value


def set_output(name: str, value: str, *, environ: MutableMapping[str, str] | None = None) -> None:
    env = os.environ if environ is None else environ
    _append("GITHUB_OUTPUT", name, value, env)
