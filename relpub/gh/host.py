from __future__ import annotations

import re
from pathlib import Path
from urllib.parse import urlsplit

from relpub.core.result import Err, Ok, Result
from relpub.platform.process import run as run_process
from relpub.platform.process import which
from relpub.publish.errors import PublishError
from relpub.publish.timeouts import GH_TIMEOUT_SECONDS

GH_INSTALL_URL = "https://cli.github.com/"

_SCP_URL = re.compile(r"^[\w.-]+@(?P<host>[^:/]+):(?P<path>.+)$")


def repo_slug(url: str) -> str | None:
    """Turn a clone URL into the ``[HOST/]OWNER/REPO`` form gh accepts.

    Returns None when the URL has no owner/repo path; gh then infers the
    repository from the git remotes of the working directory.
    """
    url = url.strip()
    scp = _SCP_URL.match(url)
    if scp is not None:
        host, path = scp.group("host"), scp.group("path")
    else:
        parts = urlsplit(url)
        if parts.scheme not in {"https", "http", "ssh", "git"} or not parts.hostname:
            return None
        host, path = parts.hostname, parts.path

    segments = [s for s in path.strip("/").removesuffix(".git").split("/") if s]
    if len(segments) != 2:
        return None
    slug = "/".join(segments)
    return slug if host == "github.com" else f"{host}/{slug}"


class GhReleaseHost:
    """GitHub releases through the ``gh`` CLI.

    Attributes:
        root: Repository root, used as working directory for gh
        repo: ``--repo`` value, None to let gh infer it from git remotes
    """

    def __init__(self, root: Path, repository_url: str | None = None) -> None:
        self.root = root
        self.repo = repo_slug(repository_url) if repository_url else None

    def is_available(self) -> bool:
        return which("gh") is not None

    def is_authenticated(self) -> bool:
        result = run_process(["gh", "auth", "status"], cwd=self.root, timeout=GH_TIMEOUT_SECONDS)
        return isinstance(result, Ok)

    def delete_release(self, tag: str) -> Result[None, PublishError]:
        """Delete the release for tag; the tag itself is left alone."""
        result = run_process(
            self._cmd(["release", "delete", tag, "-y"]),
            cwd=self.root,
        )
        if isinstance(result, Err):
            return Err(
                PublishError(
                    kind="release_failed",
                    message=f"gh release delete {tag} failed",
                    hint=result.error.detail,
                )
            )
        return Ok(None)

    def create_release(
        self,
        *,
        tag: str,
        asset: Path,
        title: str,
        notes: str,
        notes_file: Path | None = None,
    ) -> Result[str, PublishError]:
        """Create the release with one asset attached.

        Returns:
            Ok(url) of the new release, as printed by gh
        """
        notes_args = ["--notes-file", str(notes_file)] if notes_file else ["--notes", notes]
        result = run_process(
            self._cmd(["release", "create", tag, str(asset), "--title", title, *notes_args]),
            cwd=self.root,
        )
        if isinstance(result, Err):
            return Err(
                PublishError(
                    kind="release_failed",
                    message=f"gh release create {tag} failed",
                    hint=result.error.detail,
                )
            )

        lines = [ln.strip() for ln in result.value.splitlines() if ln.strip()]
        return Ok(lines[-1] if lines else "")

    def _cmd(self, args: list[str]) -> list[str]:
        if self.repo is None:
            return ["gh", *args]
        return ["gh", *args, "--repo", self.repo]
