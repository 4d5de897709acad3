"""Collaborator interfaces of the publish workflow.

``relpub.git.Repository`` implements VcsClient and
``relpub.gh.GhReleaseHost`` implements ReleaseHost. Tests substitute
in-memory fakes.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from relpub.core.result import Result
from relpub.git.repository import GitError
from relpub.publish.errors import PublishError


class VcsClient(Protocol):
    """Local repository plus the remote it pushes to."""

    def exists(self) -> bool: ...

    def is_clean(self) -> bool: ...

    def current_branch(self) -> str | None: ...

    def remote_url(self, name: str) -> str | None: ...

    def remove_remote(self, name: str) -> Result[None, GitError]: ...

    def add_remote(self, name: str, url: str) -> Result[None, GitError]: ...

    def fetch(self, remote: str, branch: str) -> Result[str, GitError]: ...

    def pull_rebase(self, remote: str, branch: str) -> Result[str, GitError]: ...

    def push_upstream(self, remote: str, branch: str) -> Result[str, GitError]: ...

    def force_tag(self, tag: str) -> Result[None, GitError]: ...

    def force_push_tag(self, remote: str, tag: str) -> Result[str, GitError]: ...

    def resolve_commit(self, ref: str) -> Result[str, GitError]: ...


class ReleaseHost(Protocol):
    """Hosted releases, keyed by tag name."""

    def is_available(self) -> bool: ...

    def is_authenticated(self) -> bool: ...

    def delete_release(self, tag: str) -> Result[None, PublishError]: ...

    def create_release(
        self,
        *,
        tag: str,
        asset: Path,
        title: str,
        notes: str,
        notes_file: Path | None = None,
    ) -> Result[str, PublishError]: ...
