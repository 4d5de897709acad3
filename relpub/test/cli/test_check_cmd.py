from __future__ import annotations

from pathlib import Path

import pytest
import typer

from relpub.cli.context import CLIContext
from relpub.core.config import PublishConfig
from relpub.core.errors import ErrorCode
from relpub.output.console import MockConsole
from relpub.publish.checks import CheckResult


def _ctx(tmp_path: Path) -> CLIContext:
    return CLIContext(
        root=tmp_path,
        config=PublishConfig(
            repository_url="https://example.com/r.git",
            tag_name="v0.1",
            asset_path=Path("dist/app.zip"),
        ),
        console=MockConsole(),
    )


def _run_check(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    results: list[CheckResult],
) -> CLIContext:
    import relpub.cli.commands.check as check_cmd

    ctx = _ctx(tmp_path)
    monkeypatch.setattr(check_cmd, "build_context", lambda **_: ctx)
    monkeypatch.setattr(check_cmd, "run_checks", lambda **_: results)

    check_cmd.check(
        config=None,
        repo_root=None,
        url=None,
        tag=None,
        asset=None,
        remote=None,
        branch=None,
        notes_file=None,
    )
    return ctx


def test_check_exits_on_errors(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    with pytest.raises(typer.Exit) as exc:
        _run_check(
            tmp_path,
            monkeypatch,
            [CheckResult.success("git", "found"), CheckResult.error("gh", "missing")],
        )

    assert exc.value.exit_code == int(ErrorCode.ENV_ERROR)


def test_check_warnings_pass(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    ctx = _run_check(
        tmp_path,
        monkeypatch,
        [CheckResult.warning("remote origin", "not bound yet", hint="will be set")],
    )

    console = ctx.console
    assert isinstance(console, MockConsole)
    assert console.find("remote origin: not bound yet")
    assert console.find("hint: will be set")


def test_check_header_names_target(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    ctx = _run_check(tmp_path, monkeypatch, [])

    console = ctx.console
    assert isinstance(console, MockConsole)
    assert console.messages[0] == "Publish v0.1 to https://example.com/r.git"
