"""Git repository abstraction.

This module provides the Repository class, the git side of a publish run:
binding the remote, synchronizing the primary branch and force-moving the
release tag. All operations return Result types; the stderr of a failing
git command is kept verbatim in ``GitError.message``.

Usage:
    repo = Repository(Path("/path/to/repo"))

    match repo.pull_rebase("origin", "main"):
        case Ok(_):
            print("rebased")
        case Err(e):
            print(f"{e.command} failed: {e.message}")
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from relpub.core.result import Err, Ok, Result
from relpub.platform.process import ProcessError
from relpub.platform.process import run as run_process

# Read-only queries only. Commands that change state run until git returns.
_QUERY_TIMEOUT_SECONDS = 30.0

__all__ = [
    "GitError",
    "Repository",
]


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git operation.

    Attributes:
        command: The git command that failed (e.g. "push -f origin v0.1")
        message: Output of git explaining the failure
        returncode: Process return code
    """

    command: str
    message: str
    returncode: int = 1


class Repository:
    """Git repository abstraction.

    Attributes:
        path: Path to the repository root
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def exists(self) -> bool:
        """Check if the path is inside a git work tree.

        Subdirectories of a repository count, as git itself accepts them.
        """
        match self._query(["rev-parse", "--is-inside-work-tree"]):
            case Ok(stdout):
                return stdout.strip() == "true"
            case Err(_):
                return False

    def is_clean(self) -> bool:
        """Check if working tree is clean.

        Returns False if status cannot be determined.
        """
        match self._query(["status", "--porcelain"]):
            case Ok(stdout):
                return stdout.strip() == ""
            case Err(_):
                return False

    def current_branch(self) -> str | None:
        """Get current branch name, None on detached HEAD or error."""
        match self._query(["rev-parse", "--abbrev-ref", "HEAD"]):
            case Ok(stdout):
                branch = stdout.strip()
                return None if branch == "HEAD" else branch
            case Err(_):
                return None

    def remote_url(self, name: str) -> str | None:
        """URL bound to a remote, None if the remote does not exist."""
        match self._query(["remote", "get-url", name]):
            case Ok(stdout):
                return stdout.strip() or None
            case Err(_):
                return None

    def remove_remote(self, name: str) -> Result[None, GitError]:
        return self._checked(["remote", "remove", name]).map(lambda _: None)

    def add_remote(self, name: str, url: str) -> Result[None, GitError]:
        return self._checked(["remote", "add", name, url]).map(lambda _: None)

    def fetch(self, remote: str, branch: str) -> Result[str, GitError]:
        return self._checked(["fetch", remote, branch])

    def pull_rebase(self, remote: str, branch: str) -> Result[str, GitError]:
        """Rebase local commits onto the remote branch.

        A conflicting rebase is left for the user to resolve; nothing is
        aborted or retried here.
        """
        return self._checked(["pull", "--rebase", remote, branch])

    def push_upstream(self, remote: str, branch: str) -> Result[str, GitError]:
        """Push the branch and set it as upstream (``push -u``)."""
        return self._checked(["push", "-u", remote, branch])

    def force_tag(self, tag: str) -> Result[None, GitError]:
        """Create or move a lightweight tag to HEAD."""
        return self._checked(["tag", "-f", tag]).map(lambda _: None)

    def force_push_tag(self, remote: str, tag: str) -> Result[str, GitError]:
        """Overwrite the remote tag ref with the local one."""
        return self._checked(["push", "-f", remote, f"refs/tags/{tag}"])

    def resolve_commit(self, ref: str) -> Result[str, GitError]:
        """Full commit sha a ref points at."""
        args = ["rev-parse", "--verify", f"{ref}^{{commit}}"]
        return self._checked(args, timeout=_QUERY_TIMEOUT_SECONDS).map(lambda out: out.strip())

    def _checked(
        self, args: list[str], *, timeout: float | None = None
    ) -> Result[str, GitError]:
        result = self._run(args, timeout=timeout)
        match result:
            case Err(e):
                return Err(
                    GitError(
                        command=" ".join(args),
                        message=e.detail or f"git {args[0]} failed",
                        returncode=e.returncode,
                    )
                )
            case Ok(stdout):
                return Ok(stdout)

    def _query(self, args: list[str]) -> Result[str, ProcessError]:
        return self._run(args, timeout=_QUERY_TIMEOUT_SECONDS)

    def _run(
        self, args: list[str], *, timeout: float | None = None
    ) -> Result[str, ProcessError]:
        """Run a git command in this repository."""
        return run_process(["git", "-C", str(self.path), *args], cwd=self.path, timeout=timeout)
