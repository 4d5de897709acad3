from __future__ import annotations

from pathlib import Path

import typer

from relpub.cli.commands._helpers import (
    ASSET_OPTION,
    BRANCH_OPTION,
    CONFIG_OPTION,
    NOTES_FILE_OPTION,
    NOTES_OPTION,
    REMOTE_OPTION,
    REPO_ROOT_OPTION,
    TAG_OPTION,
    TITLE_OPTION,
    URL_OPTION,
    exit_on_publish_error,
    make_overrides,
)
from relpub.cli.context import CLIContext, build_context
from relpub.core.result import Err
from relpub.gh import GhReleaseHost
from relpub.git import Repository
from relpub.output.console import Style
from relpub.publish.model import PublishReport
from relpub.publish.workflow import ReleasePublisher


def publish(
    config: Path | None = CONFIG_OPTION,
    repo_root: Path | None = REPO_ROOT_OPTION,
    url: str | None = URL_OPTION,
    tag: str | None = TAG_OPTION,
    asset: Path | None = ASSET_OPTION,
    remote: str | None = REMOTE_OPTION,
    branch: str | None = BRANCH_OPTION,
    title: str | None = TITLE_OPTION,
    notes: str | None = NOTES_OPTION,
    notes_file: Path | None = NOTES_FILE_OPTION,
    preflight_first: bool = typer.Option(
        False,
        "--preflight-first",
        help="Check gh and the asset before touching the remote, branch or tag.",
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="Print commands without running them."),
) -> None:
    """Rebind the remote, sync the branch, move the tag and replace the release."""
    ctx = build_context(
        config_path=config,
        repo_root=repo_root,
        overrides=make_overrides(
            url=url,
            tag=tag,
            asset=asset,
            remote=remote,
            branch=branch,
            title=title,
            notes=notes,
            notes_file=notes_file,
            preflight_first=preflight_first,
        ),
    )
    run_publish(ctx, dry_run=dry_run)


def run_publish(ctx: CLIContext, *, dry_run: bool) -> PublishReport:
    console = ctx.console
    console.print(f"repository: {ctx.root}", Style.DIM)
    if dry_run:
        console.warning("dry-run: no command will be executed")

    publisher = ReleasePublisher(
        root=ctx.root,
        config=ctx.config,
        vcs=Repository(ctx.root),
        host=GhReleaseHost(ctx.root, ctx.config.repository_url),
        console=console,
        dry_run=dry_run,
    )
    result = publisher.run()
    if isinstance(result, Err):
        exit_on_publish_error(result.error, console)

    report = result.value
    _print_report(ctx, report)
    return report


def _print_report(ctx: CLIContext, report: PublishReport) -> None:
    console = ctx.console
    console.newline()
    for outcome in report.outcomes:
        console.print(f"{outcome.stage}: {outcome.detail}", Style.DIM)

    if report.dry_run:
        console.success(f"dry-run complete for {report.tag}")
        return
    console.success(f"published {report.tag}")
    if report.release_url:
        console.print(report.release_url, Style.INFO)
