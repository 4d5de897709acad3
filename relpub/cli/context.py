from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from relpub.core.config import ConfigOverrides, PublishConfig, find_config, load_config
from relpub.core.errors import ErrorCode
from relpub.core.result import Err
from relpub.output.console import ConsoleProtocol, RichConsole


@dataclass(frozen=True, slots=True)
class CLIContext:
    root: Path
    config: PublishConfig
    console: ConsoleProtocol


def resolve_root(*, config_path: Path | None, repo_root: Path | None) -> Path:
    """Repository root every relative path and git command is anchored to.

    --repo-root wins; otherwise the directory holding --config; otherwise
    the current directory.
    """
    if repo_root is not None:
        base = repo_root
    elif config_path is not None:
        base = config_path.expanduser().resolve().parent
    else:
        base = Path.cwd()

    try:
        root = base.expanduser().resolve()
    except OSError as e:
        typer.echo(f"error: invalid --repo-root: {e}", err=True)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    if not root.is_dir():
        typer.echo(f"error: repository root '{root}' is not a directory", err=True)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))
    return root


def build_context(
    *,
    config_path: Path | None,
    repo_root: Path | None,
    overrides: ConfigOverrides,
) -> CLIContext:
    root = resolve_root(config_path=config_path, repo_root=repo_root)

    path = config_path.expanduser() if config_path is not None else find_config(root)
    config_result = load_config(path, overrides)
    if isinstance(config_result, Err):
        error = config_result.error
        typer.echo(f"error: {error.message}", err=True)
        if error.hint:
            typer.echo(f"hint: {error.hint}", err=True)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    return CLIContext(root=root, config=config_result.value, console=RichConsole())
