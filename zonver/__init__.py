"""
zonver package

CI helper for Zig projects: read the package name / version from `build.zig.zon`
and check whether a matching release tag already exists on GitHub.

Key responsibilities are split across modules:
- `manifest.py`: extract `.name` / `.version` from the manifest text
- `tags.py`: render the release tag name for a version
- `github_client.py`: isolated GitHub REST API interactions (matching-refs lookup)
- `actions.py`: export variables / step outputs for later GitHub Actions steps
- `release.py`: the release existence check and the full workflow step
- `config.py`: settings from YAML file, environment and CLI flags
- `cli.py`: CLI entrypoint and orchestration
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.1.0"
