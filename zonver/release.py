"""
release.py

Responsibility: Decide whether the manifest version still needs a release.

High-level flow (`run_release_step`):
1) Read the manifest -> name / version
2) Export NAME / VERSION for later job steps
3) Look up `tags/<tag>` on GitHub
4) Write the `result` step output: the version when unreleased, "" when a tag exists
"""

from __future__ import annotations

import logging
from collections.abc import MutableMapping
from dataclasses import dataclass

from zonver.actions import export_variable, set_output
from zonver.config import Settings
from zonver.github_client import GitHubClient
from zonver.manifest import ManifestFields, read_manifest, require_version
from zonver.tags import DEFAULT_TAG_TEMPLATE, render_tag, tag_ref

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReleaseStepResult:
    name: str | None
    version: str
    result: str

    @property
    def released(self) -> bool:
        return self.result == ""


def check_release(
    version: str,
    *,
    client: GitHubClient,
    owner: str,
    repo: str,
    tag_template: str = DEFAULT_TAG_TEMPLATE,
    name: str | None = None,
) -> str:
    """
    Return "" if a tag for `version` already exists in owner/repo, else `version` unchanged.
    """
    tag = render_tag(tag_template, {"version": version, "name": name or ""})
    refs = client.list_matching_refs(owner, repo, tag_ref(tag))
    if refs:
        logger.info("Tag %s already exists in %s/%s (%d matching ref(s))", tag, owner, repo, len(refs))
        return ""
    logger.info("Tag %s not found in %s/%s; version %s can be released", tag, owner, repo, version)
    return version


def export_fields(fields: ManifestFields, *, environ: MutableMapping[str, str] | None = None) -> None:
    """
    Export NAME / VERSION for later steps. Absent fields are skipped.
    """
    for var, value in (("NAME", fields.name), ("VERSION", fields.version)):
        if value is None:
            logger.warning("Manifest has no value for %s; not exporting it", var)
            continue
        export_variable(var, value, environ=environ)


def run_release_step(
    settings: Settings,
    *,
    client: GitHubClient | None = None,
    environ: MutableMapping[str, str] | None = None,
) -> ReleaseStepResult:
    fields = read_manifest(settings.manifest)
    version = require_version(fields, settings.manifest)
    export_fields(fields, environ=environ)

    # The lookup is by tag name only; SHA is informational.
    logger.debug("Commit SHA from environment: %s", settings.sha or "<unset>")

    owner, repo = settings.require_repository()
    if client is None:
        client = GitHubClient(settings.github_token, api_base=settings.api_base)

    result = check_release(
        version,
        client=client,
        owner=owner,
        repo=repo,
        tag_template=settings.tag_template,
        name=fields.name,
    )
    set_output("result", result, environ=environ)
    return ReleaseStepResult(name=fields.name, version=version, result=result)
