from __future__ import annotations

from pathlib import Path

import typer

from relpub.cli.commands._helpers import (
    ASSET_OPTION,
    BRANCH_OPTION,
    CONFIG_OPTION,
    NOTES_FILE_OPTION,
    REMOTE_OPTION,
    REPO_ROOT_OPTION,
    TAG_OPTION,
    URL_OPTION,
    make_overrides,
)
from relpub.cli.context import CLIContext, build_context
from relpub.core.errors import ErrorCode
from relpub.gh import GhReleaseHost
from relpub.git import Repository
from relpub.output.console import Style
from relpub.publish.checks import CheckResult, CheckStatus, run_checks


def check(
    config: Path | None = CONFIG_OPTION,
    repo_root: Path | None = REPO_ROOT_OPTION,
    url: str | None = URL_OPTION,
    tag: str | None = TAG_OPTION,
    asset: Path | None = ASSET_OPTION,
    remote: str | None = REMOTE_OPTION,
    branch: str | None = BRANCH_OPTION,
    notes_file: Path | None = NOTES_FILE_OPTION,
) -> None:
    """Check that a publish can run, without changing anything."""
    ctx = build_context(
        config_path=config,
        repo_root=repo_root,
        overrides=make_overrides(
            url=url,
            tag=tag,
            asset=asset,
            remote=remote,
            branch=branch,
            title=None,
            notes=None,
            notes_file=notes_file,
            preflight_first=False,
        ),
    )
    results = run_checks(
        root=ctx.root,
        config=ctx.config,
        vcs=Repository(ctx.root),
        host=GhReleaseHost(ctx.root, ctx.config.repository_url),
    )
    _print_results(ctx, results)

    if any(r.is_error for r in results):
        raise typer.Exit(code=int(ErrorCode.ENV_ERROR))


def _print_results(ctx: CLIContext, results: list[CheckResult]) -> None:
    console = ctx.console
    cfg = ctx.config
    console.header(f"Publish {cfg.tag_name} to {cfg.repository_url}")
    for r in results:
        console.print(f"{r.name}: {r.message}", _style_for_status(r.status))
        if r.hint and r.status != CheckStatus.OK:
            console.print(f"hint: {r.hint}", Style.DIM)


def _style_for_status(status: CheckStatus) -> Style:
    if status == CheckStatus.OK:
        return Style.SUCCESS
    if status == CheckStatus.WARNING:
        return Style.WARNING
    return Style.ERROR
