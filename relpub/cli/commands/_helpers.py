"""Shared helpers for CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import NoReturn

import typer

from relpub.core.config import ConfigOverrides
from relpub.core.errors import ErrorCode
from relpub.output.console import ConsoleProtocol
from relpub.publish.errors import PublishError

CONFIG_OPTION = typer.Option(None, "--config", "-c", help="Config file (default: ./relpub.toml)")
REPO_ROOT_OPTION = typer.Option(None, "--repo-root", help="Repository root (default: config dir)")
URL_OPTION = typer.Option(None, "--url", help="Repository URL the remote is bound to")
TAG_OPTION = typer.Option(None, "--tag", help="Release tag (force-moved to HEAD)")
ASSET_OPTION = typer.Option(None, "--asset", help="Prebuilt archive to attach")
REMOTE_OPTION = typer.Option(None, "--remote", help="Remote name (default: origin)")
BRANCH_OPTION = typer.Option(None, "--branch", help="Primary branch (default: main)")
TITLE_OPTION = typer.Option(None, "--title", help="Release title (default: tag)")
NOTES_OPTION = typer.Option(None, "--notes", help="Release notes text")
NOTES_FILE_OPTION = typer.Option(None, "--notes-file", help="Release notes file")


def make_overrides(
    *,
    url: str | None,
    tag: str | None,
    asset: Path | None,
    remote: str | None,
    branch: str | None,
    title: str | None,
    notes: str | None,
    notes_file: Path | None,
    preflight_first: bool,
) -> ConfigOverrides:
    return ConfigOverrides(
        repository_url=url,
        tag_name=tag,
        asset_path=asset,
        title=title,
        notes=notes,
        notes_file=notes_file,
        remote=remote,
        branch=branch,
        # The flag only ever turns it on; the config file can too.
        preflight_first=True if preflight_first else None,
    )


def publish_error_code(error: PublishError) -> ErrorCode:
    match error.kind:
        case "gh_missing" | "not_a_repo":
            return ErrorCode.ENV_ERROR
        case "asset_missing":
            return ErrorCode.ASSET_MISSING
        case "git_failed":
            return ErrorCode.REMOTE_ERROR
        case "release_failed":
            return ErrorCode.RELEASE_ERROR
        case "invalid_config":
            return ErrorCode.USER_ERROR
    return ErrorCode.USER_ERROR


def exit_on_publish_error(error: PublishError, console: ConsoleProtocol) -> NoReturn:
    """Print the error and its hint to stderr, then exit with its code."""
    console.error(error.message)
    if error.hint:
        console.hint(error.hint)
    raise typer.Exit(code=int(publish_error_code(error)))
