"""Sequential release publisher.

Default stage order:

    bind remote -> sync branch -> move tag -> gh present? -> asset present?
    -> delete release -> create release

With ``preflight_first`` the checks (gh, asset, notes file) run before the
remote is touched, so a failing check leaves the remote, branch and tag as
they were. The first failure ends the run; nothing is rolled back, and
re-running converges because every stage is idempotent or overwrites.
"""

from __future__ import annotations

from pathlib import Path

from relpub.core.config import PublishConfig
from relpub.core.result import Err, Ok, Result
from relpub.output.console import ConsoleProtocol
from relpub.publish.asset import locate_asset
from relpub.publish.errors import PublishError
from relpub.publish.model import STAGE_TITLES, PublishReport, StageName, StageOutcome
from relpub.publish.ports import ReleaseHost, VcsClient
from relpub.publish.stages import (
    bind_remote,
    locate_notes_file,
    move_tag,
    replace_release,
    require_release_tool,
    sync_branch,
)

_STAGE_COUNT = len(STAGE_TITLES)


class ReleasePublisher:
    """Runs one publish of ``config`` against a repository and release host."""

    def __init__(
        self,
        *,
        root: Path,
        config: PublishConfig,
        vcs: VcsClient,
        host: ReleaseHost,
        console: ConsoleProtocol,
        dry_run: bool = False,
    ) -> None:
        self.root = root
        self.config = config
        self.vcs = vcs
        self.host = host
        self.console = console
        self.dry_run = dry_run
        self._step = 0

    def run(self) -> Result[PublishReport, PublishError]:
        cfg = self.config
        outcomes: list[StageOutcome] = []

        if not self.vcs.exists():
            return Err(
                PublishError(
                    kind="not_a_repo",
                    message=f"not a git repository: {self.root}",
                    hint="Run from the repository root or pass --repo-root.",
                )
            )

        asset: Path | None = None
        if cfg.preflight_first:
            preflight = self._preflight()
            if isinstance(preflight, Err):
                return preflight
            asset = preflight.value

        self._begin("bind_remote")
        bound = bind_remote(
            vcs=self.vcs,
            remote=cfg.remote,
            url=cfg.repository_url,
            console=self.console,
            dry_run=self.dry_run,
        )
        if isinstance(bound, Err):
            return bound
        outcomes.append(bound.value)

        self._begin("sync_branch")
        synced = sync_branch(
            vcs=self.vcs,
            remote=cfg.remote,
            branch=cfg.branch,
            console=self.console,
            dry_run=self.dry_run,
        )
        if isinstance(synced, Err):
            return synced
        outcomes.append(synced.value)

        self._begin("move_tag")
        moved = move_tag(
            vcs=self.vcs,
            remote=cfg.remote,
            tag=cfg.tag_name,
            console=self.console,
            dry_run=self.dry_run,
        )
        if isinstance(moved, Err):
            return moved
        tag_outcome, tag_commit = moved.value
        outcomes.append(tag_outcome)

        if asset is None:
            preflight = self._preflight()
            if isinstance(preflight, Err):
                return preflight
            asset = preflight.value
        outcomes.append(StageOutcome("locate_asset", str(asset)))

        self._begin("replace_release")
        released = replace_release(
            host=self.host,
            config=cfg,
            root=self.root,
            asset=asset,
            console=self.console,
            dry_run=self.dry_run,
        )
        if isinstance(released, Err):
            return released
        release_outcome, release_url = released.value
        outcomes.append(release_outcome)

        return Ok(
            PublishReport(
                tag=cfg.tag_name,
                outcomes=tuple(outcomes),
                tag_commit=tag_commit,
                asset=asset,
                release_url=release_url,
                dry_run=self.dry_run,
            )
        )

    def _preflight(self) -> Result[Path, PublishError]:
        """gh availability, asset presence, then the notes file. Read-only."""
        self._begin("locate_asset")
        tool = require_release_tool(self.host)
        if isinstance(tool, Err):
            return tool
        asset = locate_asset(
            root=self.root,
            asset=self.config.asset_path,
            build_hints=self.config.build_hints,
        )
        if isinstance(asset, Err):
            return asset
        notes = locate_notes_file(config=self.config, root=self.root)
        if isinstance(notes, Err):
            return notes
        return asset

    def _begin(self, stage: StageName) -> None:
        self._step += 1
        self.console.header(f"[{self._step}/{_STAGE_COUNT}] {STAGE_TITLES[stage]}")
