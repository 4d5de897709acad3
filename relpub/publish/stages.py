"""The publish stages.

Each stage prints the commands it runs, then runs them unless ``dry_run``
is set. Stages return ``Ok(StageOutcome)`` or the first ``PublishError``;
they never retry and never undo earlier stages.
"""

from __future__ import annotations

import shlex
from pathlib import Path

from relpub.core.config import PublishConfig
from relpub.core.result import Err, Ok, Result
from relpub.gh import GH_INSTALL_URL
from relpub.git.repository import GitError
from relpub.output.console import ConsoleProtocol, Style
from relpub.publish.errors import PublishError
from relpub.publish.model import StageOutcome
from relpub.publish.ports import ReleaseHost, VcsClient


def git_failure(error: GitError) -> PublishError:
    return PublishError(
        kind="git_failed",
        message=f"git {error.command} failed (exit {error.returncode})",
        hint=error.message,
    )


def _echo(console: ConsoleProtocol, *cmd: str) -> None:
    console.print(shlex.join(cmd), Style.DIM)


def bind_remote(
    *,
    vcs: VcsClient,
    remote: str,
    url: str,
    console: ConsoleProtocol,
    dry_run: bool,
) -> Result[StageOutcome, PublishError]:
    _echo(console, "git", "remote", "remove", remote)
    _echo(console, "git", "remote", "add", remote, url)
    if dry_run:
        return Ok(StageOutcome("bind_remote", f"{remote} -> {url} (dry-run)"))

    # Absent binding is the expected first-run state.
    previous = vcs.remote_url(remote)
    vcs.remove_remote(remote)

    added = vcs.add_remote(remote, url)
    if isinstance(added, Err):
        return Err(git_failure(added.error))

    if previous is None:
        detail = f"{remote} -> {url}"
    elif previous == url:
        detail = f"{remote} -> {url} (unchanged)"
    else:
        detail = f"{remote} -> {url} (was {previous})"
    return Ok(StageOutcome("bind_remote", detail))


def sync_branch(
    *,
    vcs: VcsClient,
    remote: str,
    branch: str,
    console: ConsoleProtocol,
    dry_run: bool,
) -> Result[StageOutcome, PublishError]:
    _echo(console, "git", "fetch", remote, branch)
    _echo(console, "git", "pull", "--rebase", remote, branch)
    _echo(console, "git", "push", "-u", remote, branch)
    if dry_run:
        return Ok(StageOutcome("sync_branch", f"{branch} (dry-run)"))

    fetched = vcs.fetch(remote, branch)
    if isinstance(fetched, Err):
        return Err(git_failure(fetched.error))

    rebased = vcs.pull_rebase(remote, branch)
    if isinstance(rebased, Err):
        return Err(git_failure(rebased.error))

    pushed = vcs.push_upstream(remote, branch)
    if isinstance(pushed, Err):
        return Err(git_failure(pushed.error))

    return Ok(StageOutcome("sync_branch", f"{branch} tracks {remote}/{branch}"))


def move_tag(
    *,
    vcs: VcsClient,
    remote: str,
    tag: str,
    console: ConsoleProtocol,
    dry_run: bool,
) -> Result[tuple[StageOutcome, str | None], PublishError]:
    """Force the tag onto HEAD locally and on the remote.

    Returns:
        Ok((outcome, commit sha the tag now points at)); the sha is None
        on dry runs.
    """
    _echo(console, "git", "tag", "-f", tag)
    _echo(console, "git", "push", "-f", remote, tag)
    if dry_run:
        return Ok((StageOutcome("move_tag", f"{tag} (dry-run)"), None))

    tagged = vcs.force_tag(tag)
    if isinstance(tagged, Err):
        return Err(git_failure(tagged.error))

    pushed = vcs.force_push_tag(remote, tag)
    if isinstance(pushed, Err):
        return Err(git_failure(pushed.error))

    commit = vcs.resolve_commit(tag)
    if isinstance(commit, Err):
        return Err(git_failure(commit.error))

    sha = commit.value
    return Ok((StageOutcome("move_tag", f"{tag} -> {sha[:12]}"), sha))


def require_release_tool(host: ReleaseHost) -> Result[None, PublishError]:
    if not host.is_available():
        return Err(
            PublishError(
                kind="gh_missing",
                message="gh CLI is required to publish the release",
                hint=f"Install: {GH_INSTALL_URL}",
            )
        )
    return Ok(None)


def locate_notes_file(*, config: PublishConfig, root: Path) -> Result[Path | None, PublishError]:
    """Resolve ``notes_file``; Ok(None) when notes are given inline."""
    if config.notes_file is None:
        return Ok(None)
    notes_file = config.resolve(root, config.notes_file)
    if not notes_file.is_file():
        return Err(
            PublishError(
                kind="invalid_config",
                message=f"notes file not found: {config.notes_file}",
            )
        )
    return Ok(notes_file)


def replace_release(
    *,
    host: ReleaseHost,
    config: PublishConfig,
    root: Path,
    asset: Path,
    console: ConsoleProtocol,
    dry_run: bool,
) -> Result[tuple[StageOutcome, str | None], PublishError]:
    """Delete any release for the tag, then create it with the asset.

    Returns:
        Ok((outcome, release url)); the url is None on dry runs.
    """
    tag = config.tag_name
    located = locate_notes_file(config=config, root=root)
    if isinstance(located, Err):
        return located
    notes_file = located.value

    if notes_file is not None:
        notes_args = ["--notes-file", str(notes_file)]
    else:
        notes_args = ["--notes", config.release_notes]
    _echo(console, "gh", "release", "delete", tag, "-y")
    _echo(
        console,
        "gh", "release", "create", tag, str(asset),
        "--title", config.release_title,
        *notes_args,
    )
    if dry_run:
        return Ok((StageOutcome("replace_release", f"{tag} (dry-run)"), None))

    # A missing release (first publish of this tag) is not an error.
    deleted = host.delete_release(tag)
    replaced = isinstance(deleted, Ok)

    created = host.create_release(
        tag=tag,
        asset=asset,
        title=config.release_title,
        notes=config.release_notes,
        notes_file=notes_file,
    )
    if isinstance(created, Err):
        return created

    url = created.value or None
    verb = "replaced" if replaced else "created"
    detail = f"{verb} {tag}" + (f" at {url}" if url else "")
    return Ok((StageOutcome("replace_release", detail), url))
